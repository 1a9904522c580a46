"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas shape data at the system boundary; item rules live in core/enforce_item.py
    - Domain enums from core/ used for sort fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
