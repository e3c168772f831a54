# tests/property/__init__.py
"""Property-based tests for proptrial.

These use hypothesis to check invariants of the engine itself over many
seeds and shapes: seeded replay, combinator size laws, skip budgets and
the size schedule.
"""
