"""Services Layer - component declarations, bound handlers, repositories.

Invariants:
    - Route -> handler binding uses explicit dict mapping (no auto-discovery)
    - Handlers receive raw request values and validate their own input
"""
