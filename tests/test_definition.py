"""Tests for WorkflowDefinition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from litestar_saga.core.context import create_token
from litestar_saga.core.result import success_result
from litestar_saga.core.types import WorkflowStatus
from litestar_saga.engine import InMemoryWorkflow, PersistedWorkflow, WorkflowDefinition
from litestar_saga.steps.base import define_step

if TYPE_CHECKING:
    from litestar_saga.core.context import WorkflowContext

RUN_NUMBER = create_token("run_number")


def count_step(name: str, runs: list[str]) -> Any:
    def run(context: WorkflowContext) -> Any:
        runs.append(name)
        return success_result(None)

    return define_step(name, run)


@pytest.mark.unit
class TestWorkflowDefinition:
    """Tests for WorkflowDefinition creation."""

    def test_steps_stored_as_tuple(self) -> None:
        """Test steps are frozen into a tuple."""
        definition = WorkflowDefinition(name="wf", steps=[count_step("a", []), count_step("b", [])])

        assert isinstance(definition.steps, tuple)
        assert definition.step_names == ["a", "b"]

    def test_create_selects_variant(self, mock_storage: Any) -> None:
        """Test create picks the variant from the storage strategy."""
        in_memory = WorkflowDefinition(name="wf").create()
        persisted = WorkflowDefinition(name="wf", storage_strategy=mock_storage).create()

        assert isinstance(in_memory, InMemoryWorkflow)
        assert isinstance(persisted, PersistedWorkflow)

    def test_create_overrides_storage(self, mock_storage: Any) -> None:
        """Test a storage strategy passed to create overrides the definition's."""
        workflow = WorkflowDefinition(name="wf").create(storage_strategy=mock_storage)

        assert isinstance(workflow, PersistedWorkflow)
        assert workflow.storage_strategy is mock_storage

    def test_create_without_override_keeps_storage(self, mock_storage: Any) -> None:
        """Test passing no storage strategy keeps the definition's own."""
        workflow = WorkflowDefinition(name="wf", storage_strategy=mock_storage).create(storage_strategy=None)

        assert isinstance(workflow, PersistedWorkflow)
        assert workflow.storage_strategy is mock_storage


@pytest.mark.unit
@pytest.mark.asyncio
class TestWorkflowDefinitionRuns:
    """Tests for running several workflows from one definition."""

    async def test_each_create_is_a_fresh_run(self) -> None:
        """Test each created workflow has its own context and cursor."""
        runs: list[str] = []
        counter = iter(range(1, 10))
        definition = WorkflowDefinition(
            name="wf",
            steps=[count_step("a", runs)],
            setup_context=lambda ctx: ctx.set(RUN_NUMBER, next(counter)),
        )

        first = definition.create()
        second = definition.create()
        await first.run()
        await second.run()

        assert runs == ["a", "a"]
        assert first.context is not second.context
        assert first.context.get(RUN_NUMBER) == 1
        assert second.context.get(RUN_NUMBER) == 2
        assert first.status == second.status == WorkflowStatus.COMPLETED

    async def test_setup_context_override(self) -> None:
        """Test create can replace the context setup for one run."""
        definition = WorkflowDefinition(name="wf", setup_context=lambda ctx: ctx.set(RUN_NUMBER, 1))

        workflow = definition.create(setup_context=lambda ctx: ctx.set(RUN_NUMBER, 99))

        assert workflow.context.get(RUN_NUMBER) == 99
