"""In-memory workflow engine.

This module provides a workflow variant that records nothing outside the
process, suitable for development, testing, and sagas whose progress does not
need to be persisted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from litestar_saga.engine.base import BaseWorkflow

if TYPE_CHECKING:
    from litestar_saga.core.protocols import Step

__all__ = ["InMemoryWorkflow"]


class InMemoryWorkflow(BaseWorkflow[Any]):
    """Workflow that runs without a storage strategy.

    No persistence call is ever made. A successful run reports ``None`` as its
    workflow identifier.

    Example:
        >>> workflow = InMemoryWorkflow("checkout", steps=[reserve, charge])
        >>> result = await workflow.run()
        >>> result.is_ok
        True
    """

    async def _start_workflow(self) -> None:
        return None

    async def _start_step(self, workflow_id: Any, step: Step[Any, Any]) -> None:
        return None

    async def _complete_step(self, workflow_id: Any, step_id: Any, step: Step[Any, Any]) -> None:
        return None

    async def _record_failure(self, workflow_id: Any, step_id: Any, step: Step[Any, Any]) -> None:
        return None

    async def _complete_workflow(self, workflow_id: Any) -> None:
        return None
