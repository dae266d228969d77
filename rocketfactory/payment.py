"""The payment service: paying orders and its RPC handler."""

from __future__ import annotations

import logging
import uuid

from rocketfactory.inventory_api import RpcError, StatusCode, log_call

logger = logging.getLogger(__name__)

_PAY_ORDER_METHOD = "/payment.v1.PaymentService/PayOrder"


class PaymentError(Exception):
    """Base class of payment service errors."""

    default_message = "payment error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class PaymentProcessingError(PaymentError):
    """The payment could not be processed."""

    default_message = "internal error while processing payment"


class PaymentService:
    """Accepts payments and issues transaction UUIDs."""

    def pay_order(self, order_uuid: str, user_uuid: str, payment_method: str) -> str:
        """Pay an order and return a new transaction UUID."""
        logger.info(
            "Order paid: order_uuid=%s user_uuid=%s payment_method=%s",
            order_uuid,
            user_uuid,
            payment_method,
        )
        transaction_uuid = str(uuid.uuid4())
        logger.info("Payment succeeded, transaction_uuid: %s", transaction_uuid)
        return transaction_uuid


class PaymentApi:
    """Payment RPC handler mapping processing failures to status codes."""

    def __init__(self, service: PaymentService) -> None:
        self._service = service

    def pay_order(self, order_uuid: str, user_uuid: str, payment_method: str) -> str:
        """Pay an order and return the transaction UUID."""
        return log_call(
            _PAY_ORDER_METHOD,
            lambda _: self._pay(order_uuid, user_uuid, payment_method),
            None,
        )

    def _pay(self, order_uuid: str, user_uuid: str, payment_method: str) -> str:
        try:
            return self._service.pay_order(order_uuid, user_uuid, payment_method)
        except PaymentProcessingError as exc:
            raise RpcError(StatusCode.INTERNAL, f"Payment service error: {exc}") from exc