"""Operational Route Modules - health probes and the OpenAPI document.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain business logic
"""
