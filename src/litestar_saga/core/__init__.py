"""Core domain module for litestar-saga.

This module exports the fundamental building blocks of a saga: the result
protocol, the shared context, the step and storage protocols, and the run
payload models.
"""

from __future__ import annotations

from litestar_saga.core.context import ContextToken, WorkflowContext, create_token
from litestar_saga.core.models import WorkflowFailure, WorkflowOutcome
from litestar_saga.core.protocols import RollbackFunc, Step, StorageStrategy
from litestar_saga.core.result import Error, Result, Success, error_result, is_result, success_result
from litestar_saga.core.types import E, IDT, T, WorkflowStatus

__all__ = [
    "IDT",
    "ContextToken",
    "E",
    "Error",
    "Result",
    "RollbackFunc",
    "Step",
    "StorageStrategy",
    "Success",
    "T",
    "WorkflowContext",
    "WorkflowFailure",
    "WorkflowOutcome",
    "WorkflowStatus",
    "create_token",
    "error_result",
    "is_result",
    "success_result",
]
