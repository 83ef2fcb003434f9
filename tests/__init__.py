"""
Test suite for datetime-period

Contains:
- tests/unit/          : Unit tests for individual modules
"""
