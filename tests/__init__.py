"""
Test suite for Rustaceans

Contains:
- tests/unit/          : Unit tests for individual modules
"""
