"""LAMP API Package - schema-driven HTTP service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
