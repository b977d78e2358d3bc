"""Service layer for neomig.

Implements the bootstrap use-cases: opening verified connections. Calls
outbound ports defined in `neomig.interfaces`.

Dependency rule: may import `neomig.interfaces`, `neomig.config` and
`neomig.errors`, but not `neomig.adapters` or `neomig.entrypoints`.
"""
