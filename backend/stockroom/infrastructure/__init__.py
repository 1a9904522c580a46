"""Infrastructure Layer — database access, command bridge, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All driver errors mapped to typed errors from core/errors.py

Design Decisions:
    - Bridge implementation lives here; core only sees the CommandBridge protocol
"""
