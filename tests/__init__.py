"""
Test suite for vault-rewards-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
