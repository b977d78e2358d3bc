"""Functional tests.

Purpose
- Drive the ``neo4j-migrations`` CLI the way a user does and assert on exit
  codes, output and the side effects observed by test doubles.

Guidelines
- Use ``click.testing.CliRunner`` and an injected ``AppContainer``; no real
  database is contacted.
"""
