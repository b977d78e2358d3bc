"""Entrypoints (inbound adapters) for neomig.

The command-line interface: parse options, assemble the configuration, and
hand it together with a verified connection to the selected subcommand.

Dependency rule: may import `neomig.bootstrap`, `neomig.config`,
`neomig.runtime` and `neomig.errors`; avoid importing `neomig.adapters`
directly.
"""
