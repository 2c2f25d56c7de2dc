"""Base step implementations for litestar-saga."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Generic, Union

from litestar_saga.core.result import error_result, is_result
from litestar_saga.core.types import E, T
from litestar_saga.exceptions import StepContractError, WorkflowValidationError

if TYPE_CHECKING:
    from litestar_saga.core.context import WorkflowContext
    from litestar_saga.core.protocols import RollbackFunc
    from litestar_saga.core.result import Result

__all__ = ["BaseStep", "FunctionStep", "RunFunc", "define_step"]

logger = logging.getLogger(__name__)

RunFunc = Callable[["WorkflowContext"], Union["Result[Any, Any]", Awaitable["Result[Any, Any]"]]]
"""Work function of a step. May be sync or async and must return a result."""

CompensateFunc = Callable[["WorkflowContext"], Union[None, Awaitable[None]]]
"""Compensating function of a step. May be sync or async."""


async def _call(func: Callable[[WorkflowContext], Any], context: WorkflowContext) -> Any:
    value = func(context)
    if inspect.isawaitable(value):
        value = await value
    return value


class BaseStep(Generic[T, E]):
    """Base implementation of the :class:`~litestar_saga.core.protocols.Step` protocol.

    Subclass this and override :meth:`execute` to implement the step, and
    optionally :meth:`compensate` to give it a rollback. :meth:`run` wraps
    ``execute`` so that any exception becomes an error result carrying it.

    ``rollback`` is bound to :meth:`compensate` only when a subclass overrides
    it, otherwise it is ``None`` and the engine skips the step while
    compensating.

    Example:
        >>> class ChargeCard(BaseStep[str, Exception]):
        ...     async def execute(self, context: WorkflowContext) -> Result[str, Exception]:
        ...         charge_id = await gateway.charge(context.get_or_raise(AMOUNT))
        ...         context.set(CHARGE_ID, charge_id)
        ...         return success_result(charge_id)
        ...
        ...     async def compensate(self, context: WorkflowContext) -> None:
        ...         await gateway.refund(context.get_or_raise(CHARGE_ID))
        >>> step = ChargeCard(name="charge_card")
    """

    name: str
    """Unique, non-empty identifier for the step."""

    description: str = ""
    """Human-readable description of what the step does."""

    rollback: RollbackFunc | None
    """Compensating action, or ``None`` when the step has none."""

    def __init__(self, name: str, description: str = "") -> None:
        """Initialize the base step.

        Args:
            name: Unique, non-empty identifier for the step.
            description: Human-readable description.

        Raises:
            WorkflowValidationError: If ``name`` is empty.
        """
        if not isinstance(name, str) or not name.strip():
            raise WorkflowValidationError(["Step name must be a non-empty string"])
        self.name = name
        self.description = description
        self.rollback = self.compensate if self.has_compensation else None

    @property
    def has_compensation(self) -> bool:
        """Whether this step defines a compensating action."""
        return type(self).compensate is not BaseStep.compensate

    async def run(self, context: WorkflowContext) -> Result[T, E]:
        """Run the step, converting any exception into an error result.

        This method never raises for exceptions derived from :class:`Exception`.
        A return value that is not a result becomes an error result carrying a
        :class:`~litestar_saga.exceptions.StepContractError`.

        Args:
            context: The shared workflow context.

        Returns:
            The result produced by :meth:`execute`, or an error result.
        """
        try:
            result = await _call(self.execute, context)
        except Exception as exc:
            logger.debug("Step %r raised %s", self.name, type(exc).__name__, exc_info=exc)
            return error_result(exc)  # type: ignore[arg-type]

        if not is_result(result):
            return error_result(StepContractError(self.name, result))  # type: ignore[arg-type]
        return result

    async def execute(self, context: WorkflowContext) -> Result[T, E]:
        """Execute the step with the given context.

        Override this method to implement step logic.

        Args:
            context: The shared workflow context.

        Returns:
            A success or error result.

        Raises:
            NotImplementedError: Must be implemented by subclasses.
        """
        msg = f"Step {self.name} must implement execute()"
        raise NotImplementedError(msg)

    async def compensate(self, context: WorkflowContext) -> None:
        """Undo the effects of a successful :meth:`execute`.

        Override this method to give the step a rollback.

        Args:
            context: The shared workflow context.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class FunctionStep(BaseStep[T, E]):
    """Step backed by plain callables.

    Both the work function and the optional rollback may be regular functions
    or coroutine functions. Use :func:`define_step` to create one.
    """

    def __init__(
        self,
        name: str,
        run: RunFunc,
        rollback: CompensateFunc | None = None,
        description: str = "",
    ) -> None:
        """Initialize the function step.

        Args:
            name: Unique, non-empty identifier for the step.
            run: Work function receiving the context and returning a result.
            rollback: Optional compensating function receiving the context.
            description: Human-readable description.
        """
        self._run_func = run
        self._rollback_func = rollback
        super().__init__(name, description)

    @property
    def has_compensation(self) -> bool:
        """Whether a rollback function was supplied."""
        return self._rollback_func is not None

    async def execute(self, context: WorkflowContext) -> Result[T, E]:
        """Call the work function with the context."""
        return await _call(self._run_func, context)

    async def compensate(self, context: WorkflowContext) -> None:
        """Call the rollback function with the context, if any."""
        if self._rollback_func is not None:
            await _call(self._rollback_func, context)


def define_step(
    name: str,
    run: RunFunc,
    rollback: CompensateFunc | None = None,
    description: str = "",
) -> FunctionStep[Any, Any]:
    """Define a step from a work function and an optional rollback.

    Args:
        name: Unique, non-empty identifier for the step.
        run: Work function receiving the context and returning a result.
        rollback: Optional compensating function receiving the context.
        description: Human-readable description.

    Returns:
        A new :class:`FunctionStep`.

    Example:
        >>> async def reserve(context: WorkflowContext) -> Result[str, str]:
        ...     return success_result("reservation-1")
        >>> step = define_step("reserve", reserve, rollback=release)
    """
    return FunctionStep(name, run, rollback=rollback, description=description)
