"""Shared test fixtures for litestar-saga test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest

from litestar_saga.core.context import ContextToken, WorkflowContext, create_token
from litestar_saga.core.result import error_result, success_result

if TYPE_CHECKING:
    from litestar_saga.core.types import WorkflowStatus
    from litestar_saga.steps.base import FunctionStep
    from litestar_saga.storage.memory import InMemoryStorageStrategy


class MockStorageStrategy:
    """Storage strategy double writing every call into a shared event log."""

    def __init__(self, events: list[tuple[Any, ...]] | None = None) -> None:
        """Initialize the mock strategy.

        Args:
            events: Shared log to append calls to. A new list is used if omitted.
        """
        self.events: list[tuple[Any, ...]] = events if events is not None else []
        self._step_counter = 0

    async def store_workflow(self, name: str) -> str:
        """Store a workflow."""
        self.events.append(("store_workflow", name))
        return "workflow-1"

    async def update_workflow_status(self, *, workflow_id: str, status: WorkflowStatus) -> None:
        """Record a workflow status."""
        self.events.append(("update_workflow_status", workflow_id, status))

    async def store_step(self, *, workflow_id: str, step_name: str) -> str:
        """Store a step."""
        self._step_counter += 1
        self.events.append(("store_step", workflow_id, step_name))
        return f"step-{self._step_counter}"

    async def update_step_status(self, *, workflow_id: str, step_id: str, status: WorkflowStatus) -> None:
        """Record a step status."""
        self.events.append(("update_step_status", workflow_id, step_id, status))

    def calls(self, name: str) -> list[tuple[Any, ...]]:
        """Return the logged calls of one method."""
        return [event for event in self.events if event[0] == name]


@pytest.fixture
def events() -> list[tuple[Any, ...]]:
    """Shared chronological log of storage calls and rollbacks."""
    return []


@pytest.fixture
def mock_storage(events: list[tuple[Any, ...]]) -> MockStorageStrategy:
    """Create a mock storage strategy logging into ``events``.

    Returns:
        MockStorageStrategy instance
    """
    return MockStorageStrategy(events)


@pytest.fixture
def memory_storage() -> InMemoryStorageStrategy:
    """Create an in-memory storage strategy.

    Returns:
        InMemoryStorageStrategy instance
    """
    from litestar_saga.storage.memory import InMemoryStorageStrategy

    return InMemoryStorageStrategy()


@pytest.fixture
def context() -> WorkflowContext:
    """Create an empty workflow context."""
    return WorkflowContext()


@pytest.fixture
def counter_token() -> ContextToken[int]:
    """Token for an integer slot."""
    return create_token("counter")


@pytest.fixture
def make_step(events: list[tuple[Any, ...]]) -> Callable[..., FunctionStep[Any, Any]]:
    """Factory for steps that log their rollbacks into ``events``.

    The returned callable accepts ``name``, ``fails`` (an error value to return,
    or ``None`` to succeed), ``raises`` (an exception to raise) and ``rollback``
    (whether the step has a rollback).
    """
    from litestar_saga.steps.base import define_step

    def factory(
        name: str,
        *,
        fails: Any = None,
        raises: BaseException | None = None,
        rollback: bool = True,
    ) -> FunctionStep[Any, Any]:
        async def run(context: WorkflowContext) -> Any:
            events.append(("run", name))
            if raises is not None:
                raise raises
            if fails is not None:
                return error_result(fails)
            return success_result(f"{name} done")

        async def undo(context: WorkflowContext) -> None:
            events.append(("rollback", name))

        return define_step(name, run, rollback=undo if rollback else None)

    return factory
