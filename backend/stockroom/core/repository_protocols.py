"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The remote store is reached only through CommandBridge
    - User feedback is emitted only through Notifier

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in CommandBridge: implementations do IO; the pure core never awaits,
      the orchestrator awaits around it
    - Raw records are plain mappings: the bridge never normalizes, ingestion does
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from stockroom.core.domain_types import NotificationKind, OperationKind


class CommandBridge(Protocol):
    """Opaque async CRUD command interface, addressed by collection name."""
    async def fetch_all(self, collection: str) -> Sequence[Mapping[str, Any]]: ...
    async def create(self, collection: str, item: Mapping[str, Any]) -> str: ...
    async def update(
        self, collection: str, item_id: str, item: Mapping[str, Any],
    ) -> bool: ...
    async def delete(self, collection: str, item_id: str) -> bool: ...


class Notifier(Protocol):
    """One-shot, stateless user notifications."""
    def notify(
        self, kind: NotificationKind, message: str, operation: OperationKind,
    ) -> None: ...
