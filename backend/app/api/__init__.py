"""API Layer - schema route materialization, operational routes, error handlers.

Invariants:
    - Schema routes are materialized from components, never hand-registered
    - All endpoints return structured JSON responses
"""
