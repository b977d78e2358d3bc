"""Adapters (infrastructure) for neomig.

Concrete implementations of the ports in `neomig.interfaces`: the Neo4j driver
connector, the regex redactor and migration engine discovery.

Dependency rule: may import `neomig.interfaces`, `neomig.config` and
`neomig.errors`; inner layers must not import this package.
"""
