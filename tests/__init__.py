"""
Test suite for pure_decimal

Contains:
- tests/unit/          : Unit tests for the value type, guarded arithmetic,
                         serialization and the wire contract
"""
