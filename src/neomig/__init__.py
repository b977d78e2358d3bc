"""neomig

Command-line bootstrap for Neo4j database migrations. Turns command-line options
into an immutable configuration, checks it against the runtime it is executed
in, and hands a verified driver connection to the selected subcommand.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
