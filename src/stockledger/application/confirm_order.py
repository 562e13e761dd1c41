"""Application service: Confirm Order use case.

Commits every reservation of a PENDING order: physical quantity and
reserved quantity both drop by the line amount, so available stock is
unchanged by this step.
"""

from __future__ import annotations

from stockledger.application.dto import OrderDTO, order_to_dto
from stockledger.domain.service.order_workflow import OrderWorkflow


class ConfirmOrderHandler:

    def __init__(self, workflow: OrderWorkflow) -> None:
        self._workflow = workflow

    def handle(self, order_id: int) -> OrderDTO:
        return order_to_dto(self._workflow.confirm_order(order_id))
