"""Persistence-aware workflow engine.

This module provides a workflow variant that reports every workflow and step
transition to a :class:`~litestar_saga.core.protocols.StorageStrategy`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from litestar_saga.core.types import IDT, WorkflowStatus
from litestar_saga.engine.base import BaseWorkflow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from litestar_saga.core.protocols import Step, StorageStrategy
    from litestar_saga.engine.base import SetupContext

__all__ = ["PersistedWorkflow"]

logger = logging.getLogger(__name__)


class PersistedWorkflow(BaseWorkflow[IDT]):
    """Workflow that records its progress through a storage strategy.

    Call sequence for a run of N steps:

    1. ``store_workflow(name)`` once.
    2. For each step, ``store_step`` before it runs, then
       ``update_step_status(completed)`` when it succeeds.
    3. On the first failing step, ``update_step_status(failed)`` and
       ``update_workflow_status(failed)`` are issued concurrently and both
       awaited before any rollback runs.
    4. When every step succeeded, ``update_workflow_status(completed)``.

    Exceptions raised by the strategy are not handled and propagate out of
    :meth:`run`.

    Attributes:
        storage_strategy: The strategy receiving the persistence calls.
    """

    def __init__(
        self,
        name: str,
        steps: Sequence[Step[Any, Any]],
        storage_strategy: StorageStrategy[IDT],
        setup_context: SetupContext | None = None,
    ) -> None:
        """Initialize the persisted workflow.

        Args:
            name: Identifying label of the workflow.
            steps: Ordered steps to execute. May be empty.
            storage_strategy: The strategy receiving the persistence calls.
            setup_context: Optional callback invoked once with the new context.
        """
        super().__init__(name, steps, setup_context=setup_context)
        self.storage_strategy = storage_strategy

    async def _start_workflow(self) -> IDT:
        workflow_id = await self.storage_strategy.store_workflow(self.name)
        logger.debug("Stored workflow %r as %r", self.name, workflow_id)
        return workflow_id

    async def _start_step(self, workflow_id: IDT | None, step: Step[Any, Any]) -> IDT:
        step_id = await self.storage_strategy.store_step(workflow_id=workflow_id, step_name=step.name)  # type: ignore[arg-type]
        logger.debug("Stored step %r of workflow %r as %r", step.name, workflow_id, step_id)
        return step_id

    async def _complete_step(self, workflow_id: IDT | None, step_id: IDT | None, step: Step[Any, Any]) -> None:
        await self.storage_strategy.update_step_status(
            workflow_id=workflow_id,  # type: ignore[arg-type]
            step_id=step_id,  # type: ignore[arg-type]
            status=WorkflowStatus.COMPLETED,
        )

    async def _record_failure(self, workflow_id: IDT | None, step_id: IDT | None, step: Step[Any, Any]) -> None:
        results = await asyncio.gather(
            self.storage_strategy.update_step_status(
                workflow_id=workflow_id,  # type: ignore[arg-type]
                step_id=step_id,  # type: ignore[arg-type]
                status=WorkflowStatus.FAILED,
            ),
            self.storage_strategy.update_workflow_status(
                workflow_id=workflow_id,  # type: ignore[arg-type]
                status=WorkflowStatus.FAILED,
            ),
            return_exceptions=True,
        )
        # Both updates have settled here; surface the first fault.
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome

    async def _complete_workflow(self, workflow_id: IDT | None) -> None:
        await self.storage_strategy.update_workflow_status(
            workflow_id=workflow_id,  # type: ignore[arg-type]
            status=WorkflowStatus.COMPLETED,
        )
