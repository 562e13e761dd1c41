"""Application service: Cancel Order use case.

PENDING orders give their reservations back.  CONFIRMED and PROCESSING
orders had their stock deducted at confirmation, so the quantity is put
back instead.  SHIPPED orders cannot be cancelled.
"""

from __future__ import annotations

from stockledger.application.dto import OrderDTO, order_to_dto
from stockledger.domain.service.order_workflow import OrderWorkflow


class CancelOrderHandler:

    def __init__(self, workflow: OrderWorkflow) -> None:
        self._workflow = workflow

    def handle(self, order_id: int) -> OrderDTO:
        return order_to_dto(self._workflow.cancel_order(order_id))
