from datetime import datetime, timezone

import pytest

from rocketfactory.order_model import (
    OrderCreationInfo,
    OrderData,
    OrderInternalError,
    OrderNotFoundError,
    OrderPart,
    OrderStatus,
    OrderUpdateInfo,
    PaymentMethod,
)
from rocketfactory.order_repository import (
    PostgresOrderRepository,
    build_insert_query,
    build_select_query,
    build_update_query,
)

NOW = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)


class FakeDb:
    def __init__(self, row=None):
        self.row = row
        self.calls = []

    def fetch_one(self, query, args):
        self.calls.append(("fetch_one", query, list(args)))
        return self.row

    def execute(self, query, args):
        self.calls.append(("execute", query, list(args)))


def test_select_query():
    query, args = build_select_query("order-1")
    assert query == (
        "SELECT uuid, user_uuid, part_uuids, total_price, transaction_uuid, payment_method, "
        "status, created_at, updated_at FROM orders WHERE uuid = $1"
    )
    assert args == ["order-1"]


def test_insert_query():
    query, args = build_insert_query("user-1", ["p1", "p2"], 30.0, NOW)
    assert query == (
        "INSERT INTO orders (user_uuid,part_uuids,total_price,status,created_at) "
        "VALUES ($1,$2,$3,$4,$5) RETURNING uuid, total_price"
    )
    assert args == ["user-1", ["p1", "p2"], 30.0, "PENDING_PAYMENT", NOW]


def test_update_query_status_only():
    query, args = build_update_query("order-1", OrderUpdateInfo(status=OrderStatus.CANCELED), NOW)
    assert query == "UPDATE orders SET updated_at = $1, status = $2 WHERE uuid = $3"
    assert args == [NOW, "CANCELED", "order-1"]


def test_update_query_all_fields():
    update = OrderUpdateInfo(
        total_price=12.5,
        transaction_uuid="tx-1",
        payment_method=PaymentMethod.CARD,
        status=OrderStatus.PAID,
    )
    query, args = build_update_query("order-1", update, NOW)
    assert args == [NOW, "PAID", "CARD", 12.5, "tx-1", "order-1"]
    assert query.count("$") == len(args)
    positions = [query.index(column + " =") for column in (
        "updated_at", "status", "payment_method", "total_price", "transaction_uuid"
    )]
    assert positions == sorted(positions)
    assert query.endswith(f"WHERE uuid = ${len(args)}")


def test_create_order_sums_prices():
    db = FakeDb(row=("order-1", 30.0))
    repository = PostgresOrderRepository(db)
    parts = [OrderPart(uuid="p1", price=10.0), OrderPart(uuid="p2", price=20.0)]
    info = repository.create_order("user-1", parts)
    assert info == OrderCreationInfo(order_uuid="order-1", total_price=30.0)
    kind, _, args = db.calls[0]
    assert kind == "fetch_one"
    assert args[:4] == ["user-1", ["p1", "p2"], 30.0, "PENDING_PAYMENT"]


def test_create_order_without_row_fails():
    repository = PostgresOrderRepository(FakeDb(row=None))
    with pytest.raises(OrderInternalError):
        repository.create_order("user-1", [OrderPart(uuid="p1", price=1.0)])


def test_get_order_builds_order():
    row = ("order-1", "user-1", ["p1"], 10.0, "tx-1", "CARD", "PAID", NOW, None)
    db = FakeDb(row=row)
    order = PostgresOrderRepository(db).get_order("order-1")
    assert order == OrderData(
        uuid="order-1",
        user_uuid="user-1",
        part_uuids=["p1"],
        total_price=10.0,
        transaction_uuid="tx-1",
        payment_method=PaymentMethod.CARD,
        status=OrderStatus.PAID,
        created_at=NOW,
        updated_at=None,
    )
    assert db.calls[0][2] == ["order-1"]


def test_get_order_missing():
    with pytest.raises(OrderNotFoundError):
        PostgresOrderRepository(FakeDb(row=None)).get_order("order-1")


def test_update_order_executes():
    db = FakeDb()
    PostgresOrderRepository(db).update_order("order-1", OrderUpdateInfo(status=OrderStatus.PAID))
    kind, query, args = db.calls[0]
    assert kind == "execute"
    assert query.startswith("UPDATE orders SET updated_at = $1, status = $2")
    assert args[1:] == ["PAID", "order-1"]