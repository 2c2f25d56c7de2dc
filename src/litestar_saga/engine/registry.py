"""Workflow registry for managing workflow definitions.

This module provides a registry for storing workflow definitions by name and
creating fresh workflows from them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from litestar_saga.exceptions import WorkflowNotFoundError

if TYPE_CHECKING:
    from litestar_saga.core.protocols import StorageStrategy
    from litestar_saga.engine.base import BaseWorkflow, SetupContext
    from litestar_saga.engine.definition import WorkflowDefinition

__all__ = ["WorkflowRegistry"]


class WorkflowRegistry:
    """Registry for storing and retrieving workflow definitions.

    Attributes:
        _definitions: Map of workflow names to their definitions.
    """

    def __init__(self) -> None:
        """Initialize an empty workflow registry."""
        self._definitions: dict[str, WorkflowDefinition] = {}

    def register(self, definition: WorkflowDefinition) -> None:
        """Register a workflow definition, replacing any with the same name.

        Args:
            definition: The workflow definition to register.

        Example:
            >>> registry = WorkflowRegistry()
            >>> registry.register(WorkflowDefinition(name="book_trip", steps=[book_flight]))
        """
        self._definitions[definition.name] = definition

    def get_definition(self, name: str) -> WorkflowDefinition:
        """Retrieve a workflow definition by name.

        Args:
            name: The workflow name.

        Returns:
            The registered definition.

        Raises:
            WorkflowNotFoundError: If no workflow is registered under ``name``.
        """
        try:
            return self._definitions[name]
        except KeyError:
            raise WorkflowNotFoundError(name) from None

    def create_workflow(
        self,
        name: str,
        storage_strategy: StorageStrategy[Any] | None = None,
        setup_context: SetupContext | None = None,
    ) -> BaseWorkflow[Any]:
        """Create a fresh workflow from a registered definition.

        Args:
            name: The workflow name.
            storage_strategy: Overrides the definition's storage strategy.
            setup_context: Overrides the definition's context setup callback.

        Returns:
            A new single-use workflow.

        Raises:
            WorkflowNotFoundError: If no workflow is registered under ``name``.

        Example:
            >>> workflow = registry.create_workflow("book_trip")
            >>> result = await workflow.run()
        """
        return self.get_definition(name).create(storage_strategy=storage_strategy, setup_context=setup_context)

    def list_definitions(self) -> list[WorkflowDefinition]:
        """List all registered workflow definitions, in registration order."""
        return list(self._definitions.values())

    def unregister(self, name: str) -> None:
        """Remove a workflow from the registry. Unknown names are ignored.

        Args:
            name: The workflow name.
        """
        self._definitions.pop(name, None)

    def has_workflow(self, name: str) -> bool:
        """Check if a workflow exists in the registry.

        Args:
            name: The workflow name.

        Returns:
            True if the workflow exists, False otherwise.
        """
        return name in self._definitions
