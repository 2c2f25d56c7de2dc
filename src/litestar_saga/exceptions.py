"""Exception hierarchy for litestar-saga."""

from __future__ import annotations

from typing import Any

__all__ = (
    "CompensationError",
    "ContextTypeNotDefinedError",
    "ResultUnwrapError",
    "SagaError",
    "StepContractError",
    "WorkflowAlreadyRunError",
    "WorkflowNotFoundError",
    "WorkflowValidationError",
)


class SagaError(Exception):
    """Base exception for all litestar-saga errors.

    All exceptions raised by litestar-saga inherit from this class, so callers
    can catch every library error with a single except clause.
    """


class ContextTypeNotDefinedError(SagaError):
    """Raised when a context token is read before any value was stored for it.

    This is a programmer error. When raised inside a step it is captured at the
    step boundary like any other fault and fails the workflow.

    Attributes:
        token: The token that has no value in the context.
    """

    def __init__(self, token: Any) -> None:
        """Initialize the exception with the missing token.

        Args:
            token: The token that has no value in the context.
        """
        self.token = token
        super().__init__(f"{token!r} is not defined in this context")


class StepContractError(SagaError, TypeError):
    """Returned (never raised) when a step's work function does not produce a Result.

    Attributes:
        step_name: The name of the offending step.
        value: The value the work function returned instead of a Result.
    """

    def __init__(self, step_name: str, value: Any) -> None:
        """Initialize the exception with the offending return value.

        Args:
            step_name: The name of the offending step.
            value: The value the work function returned instead of a Result.
        """
        self.step_name = step_name
        self.value = value
        super().__init__(
            f"Step '{step_name}' must return a Success or Error result, got {type(value).__name__}"
        )


class WorkflowAlreadyRunError(SagaError):
    """Raised when ``run()`` is called twice on the same workflow instance.

    Workflow instances own a single-use context and cursor. Use a
    :class:`~litestar_saga.engine.WorkflowDefinition` to create a fresh
    instance per run.

    Attributes:
        name: The name of the workflow.
    """

    def __init__(self, name: str) -> None:
        """Initialize the exception with the workflow name.

        Args:
            name: The name of the workflow.
        """
        self.name = name
        super().__init__(f"Workflow '{name}' has already been run")


class WorkflowValidationError(SagaError):
    """Raised when a workflow is constructed from invalid arguments.

    Attributes:
        errors: List of validation error messages.
    """

    def __init__(self, errors: list[str]) -> None:
        """Initialize the exception with validation errors.

        Args:
            errors: List of validation error messages.
        """
        self.errors = errors
        super().__init__(f"Workflow validation failed: {'; '.join(errors)}")


class CompensationError(SagaError):
    """Raised when a rollback fails while compensating a failed workflow.

    Compensation stops at the first rollback that raises. The original rollback
    exception is available as ``cause`` and as ``__cause__``.

    Attributes:
        step_name: The name of the step whose rollback raised.
        failed_step: The name of the step whose failure triggered compensation.
        cause: The exception raised by the rollback.
    """

    def __init__(self, step_name: str, failed_step: str, cause: BaseException) -> None:
        """Initialize the exception with compensation details.

        Args:
            step_name: The name of the step whose rollback raised.
            failed_step: The name of the step whose failure triggered compensation.
            cause: The exception raised by the rollback.
        """
        self.step_name = step_name
        self.failed_step = failed_step
        self.cause = cause
        super().__init__(
            f"Rollback of step '{step_name}' failed while compensating '{failed_step}': {cause}"
        )


class WorkflowNotFoundError(SagaError):
    """Raised when a workflow definition is not found in the registry.

    Attributes:
        name: The name of the workflow that was not found.
    """

    def __init__(self, name: str) -> None:
        """Initialize the exception with the workflow name.

        Args:
            name: The name of the workflow that was not found.
        """
        self.name = name
        super().__init__(f"Workflow '{name}' not found")


class ResultUnwrapError(SagaError):
    """Raised when unwrapping the data of an error result.

    Attributes:
        error: The error value carried by the result.
    """

    def __init__(self, error: Any) -> None:
        """Initialize the exception with the carried error value.

        Args:
            error: The error value carried by the result.
        """
        self.error = error
        super().__init__(f"Called unwrap() on an error result: {error!r}")
