"""Core Layer - pure schema model, type table, enforcement rules, synthesis.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic; no IO (protocols only describe it)
"""
