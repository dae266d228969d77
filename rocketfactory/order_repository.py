"""PostgreSQL storage of orders."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any, Protocol

from rocketfactory.order_convert import order_data_from_record
from rocketfactory.order_model import (
    OrderCreationInfo,
    OrderData,
    OrderInternalError,
    OrderNotFoundError,
    OrderPart,
    OrderStatus,
    OrderUpdateInfo,
)

logger = logging.getLogger(__name__)

_TABLE = "orders"
_INSERT_COLUMNS = ("user_uuid", "part_uuids", "total_price", "status", "created_at")
_SELECT_COLUMNS = (
    "uuid",
    "user_uuid",
    "part_uuids",
    "total_price",
    "transaction_uuid",
    "payment_method",
    "status",
    "created_at",
    "updated_at",
)

Query = tuple[str, list[Any]]


class _Database(Protocol):
    def fetch_one(self, query: str, args: Sequence[Any]) -> Sequence[Any] | None: ...

    def execute(self, query: str, args: Sequence[Any]) -> Any: ...


def _placeholders(start: int, count: int) -> list[str]:
    return [f"${index}" for index in range(start, start + count)]


def build_insert_query(
    user_uuid: str, part_uuids: Sequence[str], total_price: float, created_at: datetime
) -> Query:
    """Query inserting a new pending order and returning its uuid and total price."""
    args = [user_uuid, list(part_uuids), total_price, str(OrderStatus.PENDING_PAYMENT), created_at]
    query = (
        f"INSERT INTO {_TABLE} ({','.join(_INSERT_COLUMNS)}) "
        f"VALUES ({','.join(_placeholders(1, len(args)))}) "
        "RETURNING uuid, total_price"
    )
    return query, args


def build_select_query(order_uuid: str) -> Query:
    """Query reading one order by uuid."""
    return f"SELECT {', '.join(_SELECT_COLUMNS)} FROM {_TABLE} WHERE uuid = $1", [order_uuid]


def build_update_query(order_uuid: str, update: OrderUpdateInfo, now: datetime) -> Query:
    """Query setting ``updated_at`` and every field of ``update`` that is not ``None``."""
    assignments: list[tuple[str, Any]] = [("updated_at", now)]
    if update.status is not None:
        assignments.append(("status", str(update.status)))
    if update.payment_method is not None:
        assignments.append(("payment_method", str(update.payment_method)))
    if update.total_price is not None:
        assignments.append(("total_price", update.total_price))
    if update.transaction_uuid is not None:
        assignments.append(("transaction_uuid", update.transaction_uuid))
    sets = ", ".join(f"{column} = ${index}" for index, (column, _) in enumerate(assignments, 1))
    args = [value for _, value in assignments]
    args.append(order_uuid)
    return f"UPDATE {_TABLE} SET {sets} WHERE uuid = ${len(args)}", args


class PostgresOrderRepository:
    """Orders stored in the ``orders`` table."""

    def __init__(self, db: _Database) -> None:
        self._db = db

    def create_order(self, user_uuid: str, parts: Iterable[OrderPart]) -> OrderCreationInfo:
        parts = list(parts)
        part_uuids = [part.uuid for part in parts]
        total_price = sum(part.price for part in parts)
        created_at = datetime.now(timezone.utc)
        query, args = build_insert_query(user_uuid, part_uuids, total_price, created_at)
        row = self._db.fetch_one(query, args)
        if row is None:
            raise OrderInternalError("order insert returned no row")
        order_uuid, stored_price = row[0], row[1]
        logger.info(
            "Order created: uuid=%s user_uuid=%s part_uuids=%s total_price=%f status=%s created_at=%s",
            order_uuid,
            user_uuid,
            part_uuids,
            total_price,
            OrderStatus.PENDING_PAYMENT,
            created_at,
        )
        return OrderCreationInfo(order_uuid=str(order_uuid), total_price=stored_price)

    def get_order(self, order_uuid: str) -> OrderData:
        query, args = build_select_query(order_uuid)
        row = self._db.fetch_one(query, args)
        if row is None:
            raise OrderNotFoundError()
        return order_data_from_record(dict(zip(_SELECT_COLUMNS, row)))

    def update_order(self, order_uuid: str, update: OrderUpdateInfo) -> None:
        query, args = build_update_query(order_uuid, update, datetime.now(timezone.utc))
        self._db.execute(query, args)