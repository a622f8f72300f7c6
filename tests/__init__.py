"""
Test suite for xbdate

Contains:
- tests/unit/          : Unit tests for individual modules
"""
