"""Litestar Saga - Sequential saga workflows for Litestar.

This package runs an ordered list of named steps one at a time. When a step
fails, the steps that already succeeded are compensated in reverse order.
Progress can optionally be recorded through a pluggable storage strategy.

Key Features:
    - Typed, token-keyed context shared by every step of a run
    - Result values instead of exceptions at every step boundary
    - Reverse-order compensation of succeeded steps
    - Pluggable persistence through the StorageStrategy protocol
    - Litestar plugin providing the registry through dependency injection

Example:
    >>> from litestar_saga import create_token, define_step, define_workflow, success_result
    >>>
    >>> SEAT: ContextToken[str] = create_token("seat")
    >>>
    >>> async def reserve(context):
    ...     context.set(SEAT, await reserve_seat())
    ...     return success_result(context.get(SEAT))
    >>>
    >>> async def release(context):
    ...     await release_seat(context.get_or_raise(SEAT))
    >>>
    >>> workflow = define_workflow(
    ...     "book_trip",
    ...     steps=[define_step("reserve_seat", reserve, rollback=release)],
    ... )
    >>> result = await workflow.run()
"""

from __future__ import annotations

from litestar_saga.__metadata__ import __project__, __version__
from litestar_saga.core import (
    ContextToken,
    Error,
    Result,
    Step,
    StorageStrategy,
    Success,
    WorkflowContext,
    WorkflowFailure,
    WorkflowOutcome,
    WorkflowStatus,
    create_token,
    error_result,
    is_result,
    success_result,
)
from litestar_saga.engine import (
    BaseWorkflow,
    InMemoryWorkflow,
    PersistedWorkflow,
    WorkflowDefinition,
    WorkflowRegistry,
    define_workflow,
)
from litestar_saga.exceptions import (
    CompensationError,
    ContextTypeNotDefinedError,
    ResultUnwrapError,
    SagaError,
    StepContractError,
    WorkflowAlreadyRunError,
    WorkflowNotFoundError,
    WorkflowValidationError,
)
from litestar_saga.plugin import SagaPlugin, SagaPluginConfig
from litestar_saga.steps import BaseStep, FunctionStep, define_step
from litestar_saga.storage import InMemoryStorageStrategy

__all__ = (
    "BaseStep",
    "BaseWorkflow",
    "CompensationError",
    "ContextToken",
    "ContextTypeNotDefinedError",
    "Error",
    "FunctionStep",
    "InMemoryStorageStrategy",
    "InMemoryWorkflow",
    "PersistedWorkflow",
    "Result",
    "ResultUnwrapError",
    "SagaError",
    "SagaPlugin",
    "SagaPluginConfig",
    "Step",
    "StepContractError",
    "StorageStrategy",
    "Success",
    "WorkflowAlreadyRunError",
    "WorkflowContext",
    "WorkflowDefinition",
    "WorkflowFailure",
    "WorkflowNotFoundError",
    "WorkflowOutcome",
    "WorkflowRegistry",
    "WorkflowStatus",
    "WorkflowValidationError",
    "__project__",
    "__version__",
    "create_token",
    "define_step",
    "define_workflow",
    "error_result",
    "is_result",
    "success_result",
)
