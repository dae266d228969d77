"""Conversions for the order service: stored records, API objects and inventory messages."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from rocketfactory.inventory_convert import (
    ProtoCategory,
    ProtoPart,
    ProtoPartsFilter,
    ProtoValue,
    category_to_proto,
)
from rocketfactory.inventory_model import Category, Dimensions, Manufacturer, Metadata, PartsFilter
from rocketfactory.order_model import OrderData, OrderPart, OrderStatus, PaymentMethod

logger = logging.getLogger(__name__)

_NIL_UUID = uuid.UUID(int=0)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_PROTO_TO_CATEGORY = {
    ProtoCategory.CATEGORY_ENGINE: Category.ENGINE,
    ProtoCategory.CATEGORY_FUEL: Category.FUEL,
    ProtoCategory.CATEGORY_PORTHOLE: Category.PORTHOLE,
    ProtoCategory.CATEGORY_WING: Category.WING,
}


@dataclass
class OrderDto:
    """An order as returned by the HTTP API."""

    order_uuid: uuid.UUID = _NIL_UUID
    user_uuid: uuid.UUID = _NIL_UUID
    part_uuids: list[uuid.UUID] = field(default_factory=list)
    total_price: float = 0.0
    transaction_uuid: uuid.UUID | None = None
    payment_method: PaymentMethod | str | None = None
    status: OrderStatus | str = OrderStatus.PENDING_PAYMENT
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _as_payment_method(value: Any) -> PaymentMethod | str:
    try:
        return PaymentMethod(value)
    except ValueError:
        return value


def _as_status(value: Any) -> OrderStatus | str:
    try:
        return OrderStatus(value)
    except ValueError:
        return value


def order_data_to_record(order: OrderData) -> dict[str, Any]:
    """Build the stored record of an order; a missing payment method is stored as ''."""
    payment_method = "" if order.payment_method is None else str(order.payment_method)
    return {
        "uuid": order.uuid,
        "user_uuid": order.user_uuid,
        "part_uuids": list(order.part_uuids),
        "total_price": order.total_price,
        "transaction_uuid": order.transaction_uuid,
        "payment_method": payment_method,
        "status": str(order.status),
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def order_data_from_record(record: Mapping[str, Any]) -> OrderData:
    """Build an order from a stored record; a missing payment method becomes ''."""
    payment_method = record.get("payment_method")
    order = OrderData(
        uuid=record.get("uuid", ""),
        user_uuid=record.get("user_uuid", ""),
        part_uuids=list(record.get("part_uuids") or []),
        total_price=record.get("total_price", 0.0),
        transaction_uuid=record.get("transaction_uuid"),
        payment_method=_as_payment_method("" if payment_method is None else payment_method),
        status=_as_status(record.get("status", "")),
        updated_at=record.get("updated_at"),
    )
    if record.get("created_at") is not None:
        order.created_at = record["created_at"]
    return order


def string_to_uuid(value: str) -> uuid.UUID:
    """Parse a UUID, logging and returning the nil UUID when it is malformed."""
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        logger.warning("Failed to parse UUID: %s", exc)
        return _NIL_UUID


def uuids_to_strings(values: Iterable[uuid.UUID]) -> list[str]:
    return [str(value) for value in values]


def order_data_to_dto(order: OrderData) -> OrderDto:
    """Convert an order to its API form."""
    return OrderDto(
        order_uuid=string_to_uuid(order.uuid),
        user_uuid=string_to_uuid(order.user_uuid),
        part_uuids=[string_to_uuid(value) for value in order.part_uuids],
        total_price=order.total_price,
        transaction_uuid=(
            None if order.transaction_uuid is None else string_to_uuid(order.transaction_uuid)
        ),
        payment_method=order.payment_method,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def metadata_from_proto(metadata: Mapping[str, ProtoValue | None]) -> Metadata:
    """Fold all wire metadata values into one; later values of a kind win."""
    result = Metadata()
    for value in metadata.values():
        if value is None:
            continue
        kind = value.kind
        if kind is None:
            logger.warning("unknown metadata type: %r", value)
            continue
        result = replace(result, **{kind: getattr(value, kind)})
    return result


def part_from_proto(proto_part: ProtoPart) -> OrderPart:
    """Convert a part received from the inventory service."""
    dimensions = proto_part.dimensions
    manufacturer = proto_part.manufacturer
    return OrderPart(
        uuid=proto_part.uuid,
        name=proto_part.name,
        description=proto_part.description,
        price=proto_part.price,
        stock_quantity=proto_part.stock_quantity,
        category=_PROTO_TO_CATEGORY.get(proto_part.category, Category.UNSPECIFIED),
        dimensions=(
            Dimensions()
            if dimensions is None
            else Dimensions(
                length=dimensions.length,
                width=dimensions.width,
                height=dimensions.height,
                weight=dimensions.weight,
            )
        ),
        manufacturer=(
            Manufacturer()
            if manufacturer is None
            else Manufacturer(
                name=manufacturer.name, country=manufacturer.country, website=manufacturer.website
            )
        ),
        tags=list(proto_part.tags),
        metadata=metadata_from_proto(proto_part.metadata),
        created_at=_EPOCH if proto_part.created_at is None else proto_part.created_at,
        updated_at=proto_part.updated_at,
    )


def parts_from_proto(proto_parts: Iterable[ProtoPart]) -> list[OrderPart]:
    return [part_from_proto(part) for part in proto_parts]


def parts_filter_to_proto(parts_filter: PartsFilter) -> ProtoPartsFilter:
    """Convert a parts filter to its wire form.

    The category list starts with one unspecified entry per requested
    category, followed by the mapped categories.
    """
    categories = [ProtoCategory.CATEGORY_UNSPECIFIED] * len(parts_filter.categories)
    categories.extend(category_to_proto(category) for category in parts_filter.categories)
    return ProtoPartsFilter(
        uuids=list(parts_filter.uuids),
        names=list(parts_filter.names),
        categories=categories,
        manufacturer_countries=list(parts_filter.manufacturer_countries),
        tags=list(parts_filter.tags),
    )