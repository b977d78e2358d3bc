"""The ``neo4j-migrations`` command-line interface."""
