"""Integration tests for example applications.

Tests the minimal example app using Litestar's test client to verify
end-to-end functionality.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from litestar.testing import AsyncTestClient

if TYPE_CHECKING:
    from litestar import Litestar


@pytest.mark.integration
@pytest.mark.asyncio
class TestMinimalApp:
    """Integration tests for the minimal example app."""

    @pytest.fixture
    def minimal_app(self) -> Litestar:
        """Import and return the minimal example app."""
        from examples.minimal.app import app

        return app

    async def test_health_check(self, minimal_app: Litestar) -> None:
        """Test health check endpoint."""
        async with AsyncTestClient(app=minimal_app) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_list_workflows(self, minimal_app: Litestar) -> None:
        """Test listing registered workflows."""
        async with AsyncTestClient(app=minimal_app) as client:
            response = await client.get("/workflows")

        assert response.status_code == 200
        order = next(w for w in response.json() if w["name"] == "order_processing")
        assert order["steps"] == ["reserve_inventory", "process_payment", "schedule_shipment"]

    async def test_completed_order(self, minimal_app: Litestar) -> None:
        """Test a valid order completes and every step is recorded as completed."""
        from examples.minimal.app import inventory_holds, payments

        async with AsyncTestClient(app=minimal_app) as client:
            response = await client.post(
                "/workflows/order_processing/run",
                json={"order_id": "A1", "items": ["book"], "amount": 12.5, "address": "1 Main St"},
            )
            body = response.json()
            run = (await client.get(f"/workflows/runs/{body['workflow_id']}")).json()

        assert body["status"] == "completed"
        assert run["status"] == "completed"
        assert [step["status"] for step in run["steps"]] == ["completed", "completed", "completed"]
        assert inventory_holds["A1"] == ["book"]
        assert payments["PAY-A1"] == 12.5

    async def test_failed_order_is_compensated(self, minimal_app: Litestar) -> None:
        """Test a missing address fails shipment and undoes payment and reservation."""
        from examples.minimal.app import inventory_holds, payments

        async with AsyncTestClient(app=minimal_app) as client:
            response = await client.post(
                "/workflows/order_processing/run",
                json={"order_id": "B2", "items": ["lamp"], "amount": 30},
            )
            body = response.json()
            run = (await client.get(f"/workflows/runs/{body['workflow_id']}")).json()

        assert body["status"] == "failed"
        assert body["failed_step"] == "schedule_shipment"
        assert body["error"] == "no shipping address"
        assert run["status"] == "failed"
        assert [step["status"] for step in run["steps"]] == ["completed", "completed", "failed"]
        assert "B2" not in inventory_holds
        assert "PAY-B2" not in payments

    async def test_unknown_run_returns_404(self, minimal_app: Litestar) -> None:
        """Test requesting an unrecorded run id returns not found."""
        async with AsyncTestClient(app=minimal_app) as client:
            response = await client.get("/workflows/runs/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404

    async def test_first_step_failure_needs_no_compensation(self, minimal_app: Litestar) -> None:
        """Test an order without items fails at the first step."""
        async with AsyncTestClient(app=minimal_app) as client:
            response = await client.post(
                "/workflows/order_processing/run",
                json={"order_id": "C3", "items": [], "amount": 5},
            )

        assert response.json()["failed_step"] == "reserve_inventory"
