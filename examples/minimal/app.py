"""Minimal example of litestar-saga integration.

This example demonstrates the basic usage of the SagaPlugin with an order
processing saga. Payment is refunded and stock released when a later step
fails.

Run with:
    cd examples/minimal
    litestar run

Or:
    uvicorn app:app --reload
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from litestar import Controller, Litestar, get, post
from litestar.exceptions import NotFoundException

from litestar_saga import (
    BaseStep,
    ContextToken,
    InMemoryStorageStrategy,
    Result,
    SagaPlugin,
    SagaPluginConfig,
    WorkflowContext,
    WorkflowDefinition,
    WorkflowRegistry,
    create_token,
    error_result,
    success_result,
)

# =============================================================================
# Context Tokens
# =============================================================================

ORDER_ID: ContextToken[str] = create_token("order_id")
ITEMS: ContextToken[list[str]] = create_token("items")
AMOUNT: ContextToken[float] = create_token("amount")
ADDRESS: ContextToken[str] = create_token("address")
PAYMENT_ID: ContextToken[str] = create_token("payment_id")

# Simulated side effects, inspected by the compensation endpoints
inventory_holds: dict[str, list[str]] = {}
payments: dict[str, float] = {}

# =============================================================================
# Step Definitions
# =============================================================================


class ReserveInventory(BaseStep[list[str], str]):
    """Hold stock for every item of the order."""

    async def execute(self, context: WorkflowContext) -> Result[list[str], str]:
        """Reserve the items."""
        items = context.get(ITEMS, [])
        if not items:
            return error_result("order has no items")
        inventory_holds[context.get_or_raise(ORDER_ID)] = list(items)
        return success_result(items)

    async def compensate(self, context: WorkflowContext) -> None:
        """Release the held stock."""
        inventory_holds.pop(context.get_or_raise(ORDER_ID), None)


class ProcessPayment(BaseStep[str, str]):
    """Charge the order amount."""

    async def execute(self, context: WorkflowContext) -> Result[str, str]:
        """Process the payment."""
        order_id = context.get_or_raise(ORDER_ID)
        amount = context.get(AMOUNT, 0.0)
        if amount <= 0:
            return error_result("amount must be positive")

        payment_id = f"PAY-{order_id}"
        payments[payment_id] = amount
        context.set(PAYMENT_ID, payment_id)
        return success_result(payment_id)

    async def compensate(self, context: WorkflowContext) -> None:
        """Refund the payment."""
        payments.pop(context.get_or_raise(PAYMENT_ID), None)


class ScheduleShipment(BaseStep[str, str]):
    """Book a carrier for the order."""

    async def execute(self, context: WorkflowContext) -> Result[str, str]:
        """Schedule the shipment."""
        address = context.get(ADDRESS)
        if not address:
            return error_result("no shipping address")
        return success_result(f"TRACK-{context.get_or_raise(ORDER_ID)}")


# =============================================================================
# Workflow Definition
# =============================================================================

order_saga = WorkflowDefinition(
    name="order_processing",
    description="Reserve stock, take payment, and ship, undoing on failure",
    steps=[
        ReserveInventory(name="reserve_inventory", description="Hold stock for the order"),
        ProcessPayment(name="process_payment", description="Charge the customer"),
        ScheduleShipment(name="schedule_shipment", description="Book a carrier"),
    ],
)

storage = InMemoryStorageStrategy()


# =============================================================================
# API Controller
# =============================================================================


class OrderController(Controller):
    """REST API for running the order saga."""

    path = "/workflows"
    tags = ["Workflows"]

    @get("/")
    async def list_workflows(self, workflow_registry: WorkflowRegistry) -> list[dict[str, Any]]:
        """List all registered workflows."""
        return [
            {"name": d.name, "description": d.description, "steps": d.step_names}
            for d in workflow_registry.list_definitions()
        ]

    @post("/{name:str}/run")
    async def run_workflow(
        self,
        name: str,
        data: dict[str, Any],
        workflow_registry: WorkflowRegistry,
    ) -> dict[str, Any]:
        """Run a workflow with the posted order data."""

        def setup(context: WorkflowContext) -> None:
            context.set(ORDER_ID, str(data["order_id"]))
            context.set(ITEMS, list(data.get("items", [])))
            context.set(AMOUNT, float(data.get("amount", 0)))
            if data.get("address"):
                context.set(ADDRESS, str(data["address"]))

        result = await workflow_registry.create_workflow(name, setup_context=setup).run()
        if result.is_err:
            return {
                "status": "failed",
                "workflow_id": str(result.error.workflow_id),
                "failed_step": result.error.step_name,
                "error": str(result.error.error),
            }
        return {"status": "completed", "workflow_id": str(result.data.workflow_id)}

    @get("/runs/{workflow_id:uuid}")
    async def get_run(self, workflow_id: UUID, storage_strategy: InMemoryStorageStrategy) -> dict[str, Any]:
        """Get the recorded status of a run and its steps."""
        try:
            record = storage_strategy.get_workflow(workflow_id)
        except KeyError as e:
            raise NotFoundException(detail=f"Workflow run {workflow_id} not found") from e
        return {
            "workflow_id": str(record.id),
            "name": record.name,
            "status": record.status.value,
            "steps": [{"name": step.step_name, "status": step.status.value} for step in record.steps],
        }


# =============================================================================
# Application
# =============================================================================

plugin_config = SagaPluginConfig(
    storage_strategy=storage,
    auto_register_workflows=[order_saga],
)

app = Litestar(
    route_handlers=[OrderController],
    plugins=[SagaPlugin(config=plugin_config)],
    debug=True,
)


# =============================================================================
# Health Check (for testing)
# =============================================================================


@get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


app.register(health_check)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
