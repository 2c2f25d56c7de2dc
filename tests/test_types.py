"""Tests for core type definitions."""

from __future__ import annotations

import pytest


@pytest.mark.unit
class TestWorkflowStatus:
    """Tests for WorkflowStatus enum."""

    def test_status_values(self) -> None:
        """Test statuses use their lowercase wire values."""
        from litestar_saga.core.types import WorkflowStatus

        assert [status.value for status in WorkflowStatus] == ["pending", "running", "completed", "failed"]

    def test_status_is_string(self) -> None:
        """Test statuses compare equal to and format as plain strings."""
        from litestar_saga.core.types import WorkflowStatus

        assert WorkflowStatus.COMPLETED == "completed"
        assert str(WorkflowStatus.FAILED) == "failed"
        assert WorkflowStatus("running") is WorkflowStatus.RUNNING

    def test_terminal_statuses(self) -> None:
        """Test only completed and failed are terminal."""
        from litestar_saga.core.types import WorkflowStatus

        assert WorkflowStatus.COMPLETED.is_terminal
        assert WorkflowStatus.FAILED.is_terminal
        assert not WorkflowStatus.PENDING.is_terminal
        assert not WorkflowStatus.RUNNING.is_terminal
