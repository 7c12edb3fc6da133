"""Services Layer — request pipeline and per-resource handlers.

Invariants:
    - Handlers contain only parameter parsing, queries and mapping
    - The pipeline owns method checks, session scope, error conversion and response assembly
    - Endpoints registered explicitly in endpoints.py (no auto-discovery)
"""
