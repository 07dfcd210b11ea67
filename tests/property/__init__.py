# tests/property/__init__.py
"""Property-based tests for protean.

Test categories:
- contracts/: Builder partition, ordering and merge invariants
- core/: Contract accretion across subclassing, configure() behavior
"""
