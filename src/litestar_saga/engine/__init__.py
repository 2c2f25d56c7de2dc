"""Workflow execution engine implementations.

This module provides the saga engine, its in-memory and persisted variants,
the workflow factory, and the definition registry.
"""

from __future__ import annotations

from litestar_saga.engine.base import BaseWorkflow, SetupContext
from litestar_saga.engine.definition import WorkflowDefinition, define_workflow
from litestar_saga.engine.local import InMemoryWorkflow
from litestar_saga.engine.persistent import PersistedWorkflow
from litestar_saga.engine.registry import WorkflowRegistry

__all__ = [
    "BaseWorkflow",
    "InMemoryWorkflow",
    "PersistedWorkflow",
    "SetupContext",
    "WorkflowDefinition",
    "WorkflowRegistry",
    "define_workflow",
]
