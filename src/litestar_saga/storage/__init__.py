"""Storage strategy implementations for litestar-saga.

Durable adapters live outside this package; anything satisfying
:class:`~litestar_saga.core.protocols.StorageStrategy` can be used.
"""

from __future__ import annotations

from litestar_saga.storage.memory import InMemoryStorageStrategy, StepRecord, WorkflowRecord

__all__ = ["InMemoryStorageStrategy", "StepRecord", "WorkflowRecord"]
