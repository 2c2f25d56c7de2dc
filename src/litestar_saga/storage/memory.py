"""In-process storage strategy.

This module provides a storage strategy that keeps workflow and step records
in memory. It is meant for development, testing, and inspecting the calls the
engine makes; nothing survives the process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from litestar_saga.core.types import WorkflowStatus

__all__ = ["InMemoryStorageStrategy", "StepRecord", "WorkflowRecord"]

logger = logging.getLogger(__name__)


@dataclass
class StepRecord:
    """Stored state of one step of a workflow run.

    Attributes:
        id: Identifier returned by ``store_step``.
        workflow_id: Identifier of the owning workflow record.
        step_name: Name of the step.
        status: Last recorded status.
        created_at: When the record was stored.
        updated_at: When the status last changed.
    """

    id: UUID
    workflow_id: UUID
    step_name: str
    status: WorkflowStatus = WorkflowStatus.RUNNING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None


@dataclass
class WorkflowRecord:
    """Stored state of one workflow run.

    Attributes:
        id: Identifier returned by ``store_workflow``.
        name: Name of the workflow.
        status: Last recorded status.
        steps: Step records in the order they were stored.
        created_at: When the record was stored.
        updated_at: When the status last changed.
    """

    id: UUID
    name: str
    status: WorkflowStatus = WorkflowStatus.RUNNING
    steps: list[StepRecord] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None


class InMemoryStorageStrategy:
    """Storage strategy keeping records in process memory.

    Identifiers are random UUIDs. Besides the records, every call is appended
    to :attr:`calls` as ``(method_name, kwargs)`` so the exact call sequence of
    a run can be inspected.

    Attributes:
        workflows: Workflow records by identifier.
        calls: Chronological log of every strategy call.

    Example:
        >>> storage = InMemoryStorageStrategy()
        >>> result = await define_workflow("checkout", steps, storage_strategy=storage).run()
        >>> storage.get_workflow(result.data.workflow_id).status
        <WorkflowStatus.COMPLETED: 'completed'>
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self.workflows: dict[UUID, WorkflowRecord] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def store_workflow(self, name: str) -> UUID:
        """Create a workflow record."""
        self.calls.append(("store_workflow", {"name": name}))
        record = WorkflowRecord(id=uuid4(), name=name)
        self.workflows[record.id] = record
        logger.debug("Created workflow record %s for %r", record.id, name)
        return record.id

    async def update_workflow_status(self, *, workflow_id: UUID, status: WorkflowStatus) -> None:
        """Set the status of a workflow record.

        Raises:
            KeyError: If the workflow record does not exist.
        """
        self.calls.append(("update_workflow_status", {"workflow_id": workflow_id, "status": status}))
        record = self.get_workflow(workflow_id)
        record.status = WorkflowStatus(status)
        record.updated_at = datetime.now(timezone.utc)

    async def store_step(self, *, workflow_id: UUID, step_name: str) -> UUID:
        """Create a step record under a workflow record.

        Raises:
            KeyError: If the workflow record does not exist.
        """
        self.calls.append(("store_step", {"workflow_id": workflow_id, "step_name": step_name}))
        workflow = self.get_workflow(workflow_id)
        record = StepRecord(id=uuid4(), workflow_id=workflow_id, step_name=step_name)
        workflow.steps.append(record)
        return record.id

    async def update_step_status(self, *, workflow_id: UUID, step_id: UUID, status: WorkflowStatus) -> None:
        """Set the status of a step record.

        Raises:
            KeyError: If the workflow or step record does not exist.
        """
        self.calls.append(
            ("update_step_status", {"workflow_id": workflow_id, "step_id": step_id, "status": status})
        )
        record = self.get_step(workflow_id, step_id)
        record.status = WorkflowStatus(status)
        record.updated_at = datetime.now(timezone.utc)

    def get_workflow(self, workflow_id: UUID) -> WorkflowRecord:
        """Retrieve a workflow record.

        Args:
            workflow_id: Identifier returned by ``store_workflow``.

        Returns:
            The workflow record.

        Raises:
            KeyError: If the record does not exist.
        """
        if workflow_id not in self.workflows:
            msg = f"Workflow record {workflow_id} not found"
            raise KeyError(msg)
        return self.workflows[workflow_id]

    def get_step(self, workflow_id: UUID, step_id: UUID) -> StepRecord:
        """Retrieve a step record.

        Args:
            workflow_id: Identifier returned by ``store_workflow``.
            step_id: Identifier returned by ``store_step``.

        Returns:
            The step record.

        Raises:
            KeyError: If either record does not exist.
        """
        for record in self.get_workflow(workflow_id).steps:
            if record.id == step_id:
                return record
        msg = f"Step record {step_id} not found in workflow {workflow_id}"
        raise KeyError(msg)

    def call_names(self) -> list[str]:
        """Names of the strategy methods called so far, in order."""
        return [name for name, _ in self.calls]
