"""
Core domain models, arithmetic primitives, and contracts.

This module contains the foundational building blocks that the series
evaluator is built on; nothing here depends on the evaluator itself.
"""
