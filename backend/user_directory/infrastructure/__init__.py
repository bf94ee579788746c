"""Infrastructure Layer — storage engine access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Storage failures are mapped to core/errors.py types before leaving this layer
"""
