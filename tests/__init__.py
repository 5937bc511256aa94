"""
Test suite for the binomial series evaluator

Contains:
- tests/unit/          : Unit tests for individual modules
"""
