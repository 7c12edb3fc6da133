"""Infrastructure Layer — database access and cross-cutting concerns (logging).

Invariants:
    - Infrastructure never imports handlers or routes
    - SQLAlchemy errors are mapped to core/errors.py types at this boundary
"""
