"""Application services: move a confirmed order through fulfillment.

CONFIRMED -> PROCESSING -> SHIPPED.  Neither step touches stock; the
deduction already happened at confirmation.
"""

from __future__ import annotations

from stockledger.application.dto import OrderDTO, order_to_dto
from stockledger.domain.service.order_workflow import OrderWorkflow


class ProcessOrderHandler:

    def __init__(self, workflow: OrderWorkflow) -> None:
        self._workflow = workflow

    def handle(self, order_id: int) -> OrderDTO:
        return order_to_dto(self._workflow.process_order(order_id))


class ShipOrderHandler:

    def __init__(self, workflow: OrderWorkflow) -> None:
        self._workflow = workflow

    def handle(self, order_id: int) -> OrderDTO:
        return order_to_dto(self._workflow.ship_order(order_id))
