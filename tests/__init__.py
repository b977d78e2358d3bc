"""neomig test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- functional/   : The CLI driven end-to-end through CliRunner with fakes at the
                  connection and engine boundaries.
- helpers/      : Shared fakes (no tests here).

General guidance
- No real database: the connector and the migration engine are always fakes.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, functional, property
"""
