"""Infrastructure Layer — database pool and logging setup.

Invariants:
    - Infrastructure failures are mapped to core/errors.py types before leaving this layer
"""
