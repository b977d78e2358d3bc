"""Interfaces (application boundary) for neomig.

Framework-free contracts shared by the service layer and adapters: the
connection primitive, the migration engine and the redactor. No driver code
lives here.

Dependency rule: may import `neomig.config` and `neomig.errors` for types only;
must not import `neomig.adapters`, `neomig.service_layer` or
`neomig.entrypoints`.
"""
