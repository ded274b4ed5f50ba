"""Test suite for SmartValidator.

This package contains unit tests for:
- The recursive validation engine
- Schema definitions, options and core types
- The rule catalog
"""
