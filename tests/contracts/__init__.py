"""Tests for the contracts package.

Key contracts verified:
- PropertyContract: exact required/optional partition, required first
- Builder: marker stripping, duplicate collapsing, degraded malformed input
- MissingRequiredPropertyError: carries type and property names
"""
