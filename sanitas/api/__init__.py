"""API Layer — FastAPI routes and error handlers for local development and tests.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Endpoint routes return exactly what the Lambda entry points would return
"""
