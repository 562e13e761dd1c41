"""Application service: Create Order use case.

Validates the warehouse and every product, reserves stock for each line
and stores the order as PENDING.  If any line cannot be reserved, the
reservations already taken are released before the error is raised.
"""

from __future__ import annotations

from stockledger.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.service.order_workflow import OrderWorkflow


class CreateOrderHandler:

    def __init__(self, workflow: OrderWorkflow) -> None:
        self._workflow = workflow

    def handle(
        self,
        customer_email: str,
        warehouse_id: str,
        item_specs: list[OrderItemSpec],
    ) -> OrderDTO:
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        order = self._workflow.create_order(
            customer_email=customer_email,
            warehouse_id=warehouse_id,
            lines=[(spec.product_id, spec.quantity) for spec in item_specs],
        )
        return order_to_dto(order)
