"""Services Layer — CRUD orchestration and notification delivery.

Invariants:
    - The orchestrator is the only writer of the item mirror
    - Remote calls happen only here, through the CommandBridge protocol

Design Decisions:
    - Orchestrator awaits around pure core calls (ADR: ExMA impureim sandwich)
"""
