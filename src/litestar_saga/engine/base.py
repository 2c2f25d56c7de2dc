"""Base workflow engine.

This module provides :class:`BaseWorkflow`, which drives the sequential run
loop and the compensation pass. Concrete variants only decide what happens at
each persistence point of the loop.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Generic

from litestar_saga.core.context import WorkflowContext
from litestar_saga.core.models import WorkflowFailure, WorkflowOutcome
from litestar_saga.core.result import error_result, is_result, success_result
from litestar_saga.core.types import IDT, WorkflowStatus
from litestar_saga.exceptions import (
    CompensationError,
    StepContractError,
    WorkflowAlreadyRunError,
    WorkflowValidationError,
)

if TYPE_CHECKING:
    from litestar_saga.core.protocols import Step
    from litestar_saga.core.result import Result

__all__ = ["BaseWorkflow", "SetupContext"]

logger = logging.getLogger(__name__)

SetupContext = Callable[[WorkflowContext], Any]
"""Callback that pre-populates a fresh context before the first step runs."""


class BaseWorkflow(ABC, Generic[IDT]):
    """Sequential saga engine for a single run.

    A workflow owns an immutable ordered tuple of steps, one
    :class:`~litestar_saga.core.context.WorkflowContext`, and a cursor counting
    the steps that have succeeded so far. :meth:`run` executes the steps in
    order. When a step returns an error result, every step before it is
    compensated in reverse order and an error result naming the failed step is
    returned.

    Instances are single-use: the context and cursor belong to one run, and a
    second call to :meth:`run` raises
    :class:`~litestar_saga.exceptions.WorkflowAlreadyRunError`.

    Subclasses implement the persistence hooks. The hooks are awaited at the
    only points where the run loop yields, besides the steps themselves.

    Attributes:
        name: Identifying label of the workflow.
    """

    def __init__(
        self,
        name: str,
        steps: Sequence[Step[Any, Any]],
        setup_context: SetupContext | None = None,
    ) -> None:
        """Initialize the workflow.

        Args:
            name: Identifying label of the workflow.
            steps: Ordered steps to execute. May be empty.
            setup_context: Optional callback invoked once with the new context.

        Raises:
            WorkflowValidationError: If the name or any step name is empty.
        """
        errors = []
        if not isinstance(name, str) or not name.strip():
            errors.append("Workflow name must be a non-empty string")
        errors.extend(
            f"Step at position {index} has no name"
            for index, step in enumerate(steps)
            if not getattr(step, "name", None)
        )
        if errors:
            raise WorkflowValidationError(errors)

        self.name = name
        self._steps: tuple[Step[Any, Any], ...] = tuple(steps)
        self._context = WorkflowContext()
        self._current_step_index = 0
        self._status = WorkflowStatus.PENDING
        self._consumed = False

        if setup_context is not None:
            setup_context(self._context)

    @property
    def steps(self) -> tuple[Step[Any, Any], ...]:
        """The ordered steps of this workflow."""
        return self._steps

    @property
    def context(self) -> WorkflowContext:
        """The context shared by every step of this run."""
        return self._context

    @property
    def current_step_index(self) -> int:
        """Number of steps that have succeeded so far."""
        return self._current_step_index

    @property
    def status(self) -> WorkflowStatus:
        """Current status of the run."""
        return self._status

    async def run(self) -> Result[WorkflowOutcome[IDT], WorkflowFailure[IDT]]:
        """Execute every step in order, compensating on the first failure.

        Returns:
            A success result carrying the workflow identifier when every step
            succeeds, otherwise an error result carrying a
            :class:`~litestar_saga.core.models.WorkflowFailure`.

        Raises:
            WorkflowAlreadyRunError: If this instance has already been run.
            CompensationError: If a rollback raises during compensation.
        """
        if self._consumed:
            raise WorkflowAlreadyRunError(self.name)
        self._consumed = True

        workflow_id = await self._start_workflow()
        self._status = WorkflowStatus.RUNNING
        logger.debug("Running workflow %r with %d step(s)", self.name, len(self._steps))

        for step in self._steps:
            step_id = await self._start_step(workflow_id, step)
            logger.debug("Running step %r of workflow %r", step.name, self.name)

            try:
                result = await step.run(self._context)
            except Exception as exc:
                result = error_result(exc)
            if not is_result(result):
                result = error_result(StepContractError(step.name, result))

            if result.is_err:
                return await self._fail(workflow_id, step_id, step, result.error)

            await self._complete_step(workflow_id, step_id, step)
            self._current_step_index += 1

        await self._complete_workflow(workflow_id)
        self._status = WorkflowStatus.COMPLETED
        logger.info("Workflow %r completed %d step(s)", self.name, self._current_step_index)
        return success_result(WorkflowOutcome(workflow_id))

    async def _fail(
        self,
        workflow_id: IDT | None,
        step_id: IDT | None,
        step: Step[Any, Any],
        error: Any,
    ) -> Result[WorkflowOutcome[IDT], WorkflowFailure[IDT]]:
        self._status = WorkflowStatus.FAILED
        logger.warning("Step %r of workflow %r failed: %r", step.name, self.name, error)

        await self._record_failure(workflow_id, step_id, step)
        await self._compensate(step.name)
        return error_result(WorkflowFailure(step_name=step.name, error=error, workflow_id=workflow_id))

    async def _compensate(self, failed_step: str) -> None:
        succeeded = self._steps[: self._current_step_index]
        if not succeeded:
            return

        logger.info("Compensating %d step(s) of workflow %r", len(succeeded), self.name)
        for step in reversed(succeeded):
            if step.rollback is None:
                continue
            try:
                await step.rollback(self._context)
            except Exception as exc:
                logger.exception("Rollback of step %r in workflow %r failed", step.name, self.name)
                raise CompensationError(step.name, failed_step, exc) from exc

    @abstractmethod
    async def _start_workflow(self) -> IDT | None:
        """Hook called once before the first step. Returns the workflow id."""

    @abstractmethod
    async def _start_step(self, workflow_id: IDT | None, step: Step[Any, Any]) -> IDT | None:
        """Hook called before each step runs. Returns the step id."""

    @abstractmethod
    async def _complete_step(self, workflow_id: IDT | None, step_id: IDT | None, step: Step[Any, Any]) -> None:
        """Hook called after a step succeeds."""

    @abstractmethod
    async def _record_failure(self, workflow_id: IDT | None, step_id: IDT | None, step: Step[Any, Any]) -> None:
        """Hook called when a step fails, before compensation starts."""

    @abstractmethod
    async def _complete_workflow(self, workflow_id: IDT | None) -> None:
        """Hook called after every step succeeded."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, steps={len(self._steps)}, status={self._status.value!r})"
