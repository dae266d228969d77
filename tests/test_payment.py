import uuid

import pytest

from rocketfactory.inventory_api import RpcError, StatusCode
from rocketfactory.payment import PaymentApi, PaymentProcessingError, PaymentService


@pytest.mark.parametrize("payment_method", ["CARD", "SBP", "CREDIT_CARD"])
def test_pay_order_returns_parsable_uuid(payment_method):
    transaction_uuid = PaymentService().pay_order(
        str(uuid.uuid4()), str(uuid.uuid4()), payment_method
    )
    assert transaction_uuid
    parsed = uuid.UUID(transaction_uuid)
    assert str(parsed) == transaction_uuid


def test_pay_order_returns_distinct_transactions():
    service = PaymentService()
    first = service.pay_order("a", "b", "CARD")
    second = service.pay_order("a", "b", "CARD")
    assert first != second
    assert uuid.UUID(first).version == 4


def test_processing_error_message():
    assert str(PaymentProcessingError()) == "internal error while processing payment"


class _FailingService:
    def __init__(self, error):
        self.error = error

    def pay_order(self, order_uuid, user_uuid, payment_method):
        raise self.error


class _RecordingService:
    def __init__(self):
        self.calls = []

    def pay_order(self, order_uuid, user_uuid, payment_method):
        self.calls.append((order_uuid, user_uuid, payment_method))
        return "tx-1"


def test_api_returns_transaction_uuid():
    service = _RecordingService()
    assert PaymentApi(service).pay_order("order", "user", "SBP") == "tx-1"
    assert service.calls == [("order", "user", "SBP")]


def test_api_with_real_service_returns_uuid():
    result = PaymentApi(PaymentService()).pay_order(str(uuid.uuid4()), str(uuid.uuid4()), "CARD")
    assert uuid.UUID(result).version == 4


def test_api_maps_processing_error_to_internal():
    api = PaymentApi(_FailingService(PaymentProcessingError()))
    with pytest.raises(RpcError) as info:
        api.pay_order("order", "user", "CARD")
    assert info.value.code == StatusCode.INTERNAL
    assert info.value.message == "Payment service error: internal error while processing payment"


def test_api_passes_other_errors_through():
    api = PaymentApi(_FailingService(ValueError("nope")))
    with pytest.raises(ValueError, match="nope"):
        api.pay_order("order", "user", "CARD")