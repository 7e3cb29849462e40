"""
Test Suite for cent

Test Structure:
- unit/test_core/: numeric kernel, currencies, errors, configuration
- unit/test_money/: Money, parsing, prices and exchange rates
- integration/: CLI commands through click's CliRunner
"""
