"""Litestar plugin for saga integration.

This module provides the SagaPlugin, which makes a workflow registry and an
optional storage strategy available to route handlers through Litestar's
dependency injection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from litestar_saga.engine.registry import WorkflowRegistry

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from litestar_saga.core.protocols import StorageStrategy
    from litestar_saga.engine.definition import WorkflowDefinition

__all__ = ["SagaPlugin", "SagaPluginConfig"]

logger = logging.getLogger(__name__)


@dataclass
class SagaPluginConfig:
    """Configuration for the SagaPlugin.

    Attributes:
        registry: Optional pre-configured WorkflowRegistry. If not provided,
            a new one will be created.
        storage_strategy: Optional storage strategy. When set, it is injected
            under ``dependency_key_storage`` and given to every auto-registered
            definition that does not carry its own.
        auto_register_workflows: Workflow definitions to register on app startup.
        dependency_key_registry: The key used for dependency injection of
            the WorkflowRegistry. Defaults to "workflow_registry".
        dependency_key_storage: The key used for dependency injection of
            the storage strategy. Defaults to "storage_strategy".
    """

    registry: WorkflowRegistry | None = None
    storage_strategy: StorageStrategy[Any] | None = None
    auto_register_workflows: list[WorkflowDefinition] = field(default_factory=list)
    dependency_key_registry: str = "workflow_registry"
    dependency_key_storage: str = "storage_strategy"


class SagaPlugin(InitPluginProtocol):
    """Litestar plugin for saga workflows.

    Example:
        Registering a workflow and running it from a route handler::

            from litestar import Litestar, post
            from litestar_saga import SagaPlugin, SagaPluginConfig, WorkflowDefinition, WorkflowRegistry

            checkout = WorkflowDefinition(name="checkout", steps=[reserve, charge, ship])


            @post("/checkout")
            async def run_checkout(workflow_registry: WorkflowRegistry) -> dict:
                result = await workflow_registry.create_workflow("checkout").run()
                return {"ok": result.is_ok}


            app = Litestar(
                route_handlers=[run_checkout],
                plugins=[SagaPlugin(config=SagaPluginConfig(auto_register_workflows=[checkout]))],
            )
    """

    __slots__ = ("_config", "_registry")

    def __init__(self, config: SagaPluginConfig | None = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration for the plugin.
        """
        self._config = config or SagaPluginConfig()
        self._registry: WorkflowRegistry | None = None

    @property
    def registry(self) -> WorkflowRegistry:
        """Get the workflow registry.

        Returns:
            The WorkflowRegistry instance.

        Raises:
            RuntimeError: If accessed before plugin initialization.
        """
        if self._registry is None:
            msg = "SagaPlugin has not been initialized. Access registry after app startup."
            raise RuntimeError(msg)
        return self._registry

    @property
    def storage_strategy(self) -> StorageStrategy[Any] | None:
        """The configured storage strategy, if any."""
        return self._config.storage_strategy

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Register the dependency providers when the Litestar app starts.

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        self._registry = self._config.registry or WorkflowRegistry()
        storage_strategy = self._config.storage_strategy

        for definition in self._config.auto_register_workflows:
            if definition.storage_strategy is None and storage_strategy is not None:
                definition = replace(definition, storage_strategy=storage_strategy)
            self._registry.register(definition)
        logger.debug("Registered %d workflow definition(s)", len(self._config.auto_register_workflows))

        registry = self._registry

        def provide_registry() -> WorkflowRegistry:
            return registry

        app_config.dependencies[self._config.dependency_key_registry] = Provide(
            provide_registry,
            sync_to_thread=False,
        )

        if storage_strategy is not None:

            def provide_storage_strategy() -> Any:
                return storage_strategy

            app_config.dependencies[self._config.dependency_key_storage] = Provide(
                provide_storage_strategy,
                sync_to_thread=False,
            )

        return app_config
