"""Concrete data models for litestar-saga.

This module provides the payloads carried by the result of a workflow run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

__all__ = ["WorkflowFailure", "WorkflowOutcome"]

IDT = TypeVar("IDT")


@dataclass(frozen=True)
class WorkflowOutcome(Generic[IDT]):
    """Payload of a successful workflow run.

    Attributes:
        workflow_id: Identifier returned by the storage strategy, or ``None``
            when the workflow runs without persistence.
    """

    workflow_id: IDT | None = None


@dataclass(frozen=True)
class WorkflowFailure(Generic[IDT]):
    """Payload of a failed workflow run.

    Attributes:
        step_name: Name of the step whose run returned an error.
        error: The error value exactly as the step reported it. For steps that
            raised, this is the raised exception.
        workflow_id: Identifier returned by the storage strategy, or ``None``
            when the workflow runs without persistence.
    """

    step_name: str
    error: Any
    workflow_id: IDT | None = None
