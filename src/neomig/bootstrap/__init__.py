"""Bootstrap (composition root) for neomig.

Assembles the application at runtime: wires the Neo4j connector and the
redactor into the connection manager, detects the runtime mode and picks the
migration engine factory.

Import rules:
- Entry points import *this* package (not adapters directly).
- This package may import: `neomig.adapters`, `neomig.service_layer`,
  `neomig.interfaces`, `neomig.config` and `neomig.runtime`.
- Inner layers must not import `neomig.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap

__all__ = ["AppContainer", "bootstrap"]
