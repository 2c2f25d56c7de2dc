"""Workflow factory and reusable workflow definitions.

:func:`define_workflow` builds a single-use workflow, choosing the in-memory
or persisted variant once, from whether a storage strategy is given.
:class:`WorkflowDefinition` keeps the same arguments around so a fresh
workflow can be created for every run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, overload

from litestar_saga.engine.local import InMemoryWorkflow
from litestar_saga.engine.persistent import PersistedWorkflow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from litestar_saga.core.protocols import Step, StorageStrategy
    from litestar_saga.core.types import IDT
    from litestar_saga.engine.base import BaseWorkflow, SetupContext

__all__ = ["WorkflowDefinition", "define_workflow"]


@overload
def define_workflow(
    name: str,
    steps: Sequence[Step[Any, Any]],
    storage_strategy: None = None,
    setup_context: SetupContext | None = None,
) -> InMemoryWorkflow: ...


@overload
def define_workflow(
    name: str,
    steps: Sequence[Step[Any, Any]],
    storage_strategy: StorageStrategy[IDT],
    setup_context: SetupContext | None = None,
) -> PersistedWorkflow[IDT]: ...


def define_workflow(
    name: str,
    steps: Sequence[Step[Any, Any]],
    storage_strategy: StorageStrategy[Any] | None = None,
    setup_context: SetupContext | None = None,
) -> BaseWorkflow[Any]:
    """Create a single-use workflow.

    Args:
        name: Identifying label of the workflow.
        steps: Ordered steps to execute. May be empty.
        storage_strategy: Optional persistence adapter. When given, a
            :class:`~litestar_saga.engine.persistent.PersistedWorkflow` is
            returned, otherwise an
            :class:`~litestar_saga.engine.local.InMemoryWorkflow`.
        setup_context: Optional callback invoked once with the new context.

    Returns:
        A workflow ready to :meth:`~litestar_saga.engine.base.BaseWorkflow.run`.

    Example:
        >>> workflow = define_workflow(
        ...     "book_trip",
        ...     steps=[book_flight, book_hotel, charge_card],
        ...     storage_strategy=InMemoryStorageStrategy(),
        ... )
        >>> result = await workflow.run()
    """
    if storage_strategy is None:
        return InMemoryWorkflow(name, steps, setup_context=setup_context)
    return PersistedWorkflow(name, steps, storage_strategy, setup_context=setup_context)


@dataclass
class WorkflowDefinition:
    """Reusable blueprint for creating workflows.

    Workflows are single-use, a definition is not: call :meth:`create` once per
    run to get a fresh context and cursor.

    Attributes:
        name: Identifying label of the workflow.
        steps: Ordered steps to execute.
        storage_strategy: Optional persistence adapter shared by every run.
        setup_context: Optional callback invoked with each new context.
        description: Human-readable description of the workflow.

    Example:
        >>> definition = WorkflowDefinition(name="book_trip", steps=[book_flight, book_hotel])
        >>> first = await definition.create().run()
        >>> second = await definition.create().run()
    """

    name: str
    steps: Sequence[Step[Any, Any]] = field(default_factory=tuple)
    storage_strategy: StorageStrategy[Any] | None = None
    setup_context: SetupContext | None = None
    description: str = ""

    def __post_init__(self) -> None:
        self.steps = tuple(self.steps)

    @property
    def step_names(self) -> list[str]:
        """Names of the steps, in execution order."""
        return [step.name for step in self.steps]

    def create(
        self,
        storage_strategy: StorageStrategy[Any] | None = None,
        setup_context: SetupContext | None = None,
    ) -> BaseWorkflow[Any]:
        """Create a fresh workflow from this definition.

        Args:
            storage_strategy: Overrides the definition's storage strategy.
                ``None`` keeps the definition's own strategy, so a definition
                with persistence always creates persisted workflows. Call
                :func:`define_workflow` with :attr:`steps` for an unrecorded run.
            setup_context: Overrides the definition's context setup callback.

        Returns:
            A new single-use workflow.
        """
        return define_workflow(
            self.name,
            self.steps,
            storage_strategy=self.storage_strategy if storage_strategy is None else storage_strategy,
            setup_context=self.setup_context if setup_context is None else setup_context,
        )
