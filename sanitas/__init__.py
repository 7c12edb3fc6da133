"""Sanitas — patient record API, serverless handlers and client data layer.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
