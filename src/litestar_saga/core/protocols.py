"""Core protocols for litestar-saga.

This module defines the Protocol-based interfaces the engine consumes: the
step contract and the storage strategy contract. Using Protocol allows duck
typing while maintaining type safety.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Optional, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from litestar_saga.core.context import WorkflowContext
    from litestar_saga.core.result import Result
    from litestar_saga.core.types import WorkflowStatus

__all__ = ["RollbackFunc", "Step", "StorageStrategy"]

T_co = TypeVar("T_co", covariant=True)
E_co = TypeVar("E_co", covariant=True)
IDT = TypeVar("IDT")

RollbackFunc = Callable[["WorkflowContext"], Awaitable[None]]
"""Compensating action invoked with the shared context."""


@runtime_checkable
class Step(Protocol[T_co, E_co]):
    """Protocol defining the interface for workflow steps.

    Steps are the units of work of a saga. ``run`` must always return a
    result and never raise. ``rollback`` is either ``None`` or a compensating
    action that the engine invokes only if this step previously succeeded and
    a later step failed.

    Attributes:
        name: Non-empty name used for logging, persistence and failure reports.
        rollback: Optional compensating action.

    Example:
        >>> class ReserveSeat:
        ...     name = "reserve_seat"
        ...     rollback = None
        ...
        ...     async def run(self, context: WorkflowContext) -> Result[str, Exception]:
        ...         return success_result("seat-12A")
    """

    name: str
    rollback: Optional[RollbackFunc]

    async def run(self, context: WorkflowContext) -> Result[T_co, E_co]:
        """Execute the step's unit of work.

        Args:
            context: The shared context of the current run.

        Returns:
            A success or error result. Implementations must not raise.
        """
        ...


@runtime_checkable
class StorageStrategy(Protocol[IDT]):
    """Protocol for persistence adapters recording workflow and step progress.

    The engine treats identifiers as opaque handles: it only passes them back
    to the same strategy. Exceptions raised by a strategy are not handled by
    the engine and propagate out of ``Workflow.run()``.

    Example:
        >>> class PrintStrategy:
        ...     async def store_workflow(self, name: str) -> str:
        ...         return name
        ...
        ...     async def update_workflow_status(self, *, workflow_id: str, status: WorkflowStatus) -> None:
        ...         print(workflow_id, status)
        ...
        ...     async def store_step(self, *, workflow_id: str, step_name: str) -> str:
        ...         return f"{workflow_id}:{step_name}"
        ...
        ...     async def update_step_status(
        ...         self, *, workflow_id: str, step_id: str, status: WorkflowStatus
        ...     ) -> None:
        ...         print(step_id, status)
    """

    async def store_workflow(self, name: str) -> IDT:
        """Create a workflow record for a new run.

        Called exactly once per run, before any step executes.

        Args:
            name: The workflow name.

        Returns:
            The identifier of the new record.
        """
        ...

    async def update_workflow_status(self, *, workflow_id: IDT, status: WorkflowStatus) -> None:
        """Record a workflow status transition.

        Args:
            workflow_id: Identifier returned by :meth:`store_workflow`.
            status: The new status.
        """
        ...

    async def store_step(self, *, workflow_id: IDT, step_name: str) -> IDT:
        """Create a step record scoped to a workflow, just before the step runs.

        Args:
            workflow_id: Identifier returned by :meth:`store_workflow`.
            step_name: Name of the step about to run.

        Returns:
            The identifier of the new record.
        """
        ...

    async def update_step_status(self, *, workflow_id: IDT, step_id: IDT, status: WorkflowStatus) -> None:
        """Record a step status transition.

        Args:
            workflow_id: Identifier returned by :meth:`store_workflow`.
            step_id: Identifier returned by :meth:`store_step`.
            status: The new status.
        """
        ...
