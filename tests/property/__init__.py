# tests/property/__init__.py
"""Property-based tests for txbench.

Properties that must hold for all configurations, not just the examples
in the unit tests:
- transaction lengths stay within [1, max_transaction_length]
- every executed transaction yields exactly one TRANSACTION sample
- measurement totals match the samples fed in
"""
