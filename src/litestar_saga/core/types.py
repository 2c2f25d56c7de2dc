"""Core type definitions for litestar-saga.

This module defines the status enum and the generic type variables used
throughout the engine.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TypeVar

# StrEnum backport for Python < 3.11
if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """String enumeration compatibility for Python < 3.11."""

        def __str__(self) -> str:
            return str(self.value)


__all__ = [
    "E",
    "IDT",
    "T",
    "WorkflowStatus",
]


class WorkflowStatus(StrEnum):
    """Status of a workflow run, and of each step when persistence is enabled.

    Attributes:
        PENDING: The run has been created but no step has executed yet.
        RUNNING: Steps are executing and every step so far has succeeded.
        COMPLETED: Every step succeeded. Terminal.
        FAILED: A step returned an error result. Terminal.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible from this status."""
        return self in (WorkflowStatus.COMPLETED, WorkflowStatus.FAILED)


T = TypeVar("T")
"""Type of the data carried by a success result."""

E = TypeVar("E")
"""Type of the error carried by an error result."""

IDT = TypeVar("IDT")
"""Identifier type chosen by a storage strategy."""
