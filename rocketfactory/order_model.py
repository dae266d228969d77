"""Domain model of the order service: orders, updates and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from rocketfactory.inventory_model import Category, Dimensions, Manufacturer, Metadata


class OrderStatus(str, Enum):
    """Lifecycle state of an order."""

    PENDING_PAYMENT = "PENDING_PAYMENT"
    PAID = "PAID"
    CANCELED = "CANCELED"

    def __str__(self) -> str:
        return self.value


class PaymentMethod(str, Enum):
    """How an order was paid."""

    UNKNOWN = "UNKNOWN"
    CARD = "CARD"
    SBP = "SBP"
    CREDIT_CARD = "CREDIT_CARD"
    INVESTOR_MONEY = "INVESTOR_MONEY"

    def __str__(self) -> str:
        return self.value


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderData:
    """A stored order.

    ``status`` and ``payment_method`` may hold raw strings when the store
    contains values outside the known enumerations.
    """

    uuid: str = ""
    user_uuid: str = ""
    part_uuids: list[str] = field(default_factory=list)
    total_price: float = 0.0
    transaction_uuid: str | None = None
    payment_method: PaymentMethod | str | None = None
    status: OrderStatus | str = OrderStatus.PENDING_PAYMENT
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime | None = None


@dataclass(frozen=True)
class OrderCreationInfo:
    """What is returned once an order has been created."""

    order_uuid: str = ""
    total_price: float = 0.0


@dataclass(frozen=True)
class OrderUpdateInfo:
    """Fields to change on an order; ``None`` leaves a field untouched."""

    total_price: float | None = None
    transaction_uuid: str | None = None
    payment_method: PaymentMethod | str | None = None
    status: OrderStatus | str | None = None


@dataclass
class OrderPart:
    """A part as seen by the order service, with a single metadata value."""

    uuid: str = ""
    name: str = ""
    description: str = ""
    price: float = 0.0
    stock_quantity: int = 0
    category: Category = Category.UNSPECIFIED
    dimensions: Dimensions = field(default_factory=Dimensions)
    manufacturer: Manufacturer = field(default_factory=Manufacturer)
    tags: list[str] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime | None = None


class OrderError(Exception):
    """Base class of order service errors."""

    default_message = "order error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class OrderNotFoundError(OrderError):
    default_message = "order not found"


class OrderInternalError(OrderError):
    default_message = "internal error while get order"


class OrderConflictError(OrderError):
    default_message = "order conflict"


class OrderAlreadyPaidError(OrderError):
    default_message = "order already paid, cannot be cancelled"


class OrderAlreadyCancelledError(OrderError):
    default_message = "order already cancelled, cannot be cancelled again"


class OrderPartsNotFoundError(OrderError):
    default_message = "parts not found"


class PaymentInternalError(OrderError):
    default_message = "internal error while processing payment"


class PaymentConflictError(OrderError):
    default_message = "payment conflict"


class PaymentNotFoundError(OrderError):
    default_message = "payment not found"