"""Client Layer — data layer for the web frontend and its headless view models.

Invariants:
    - Never imports from services/, models/ or infrastructure/ (talks HTTP only)
    - Views reach shared state only through an injected use_store(selector) callable
"""
