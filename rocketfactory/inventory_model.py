"""Domain model of the inventory service: parts, filters and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Category(str, Enum):
    """Category of a rocket part."""

    UNSPECIFIED = "UNKNOWN"
    ENGINE = "ENGINE"
    FUEL = "FUEL"
    PORTHOLE = "PORTHOLE"
    WING = "WING"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Dimensions:
    """Part size in centimetres and weight in kilograms."""

    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0


@dataclass(frozen=True)
class Manufacturer:
    """Who made a part, and where."""

    name: str = ""
    country: str = ""
    website: str = ""


@dataclass(frozen=True)
class Metadata:
    """A single metadata value; normally exactly one field is set."""

    string_value: str | None = None
    int64_value: int | None = None
    double_value: float | None = None
    bool_value: bool | None = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Part:
    """A part held in the inventory."""

    uuid: str = ""
    name: str = ""
    description: str = ""
    price: float = 0.0
    stock_quantity: int = 0
    category: Category = Category.UNSPECIFIED
    dimensions: Dimensions = field(default_factory=Dimensions)
    manufacturer: Manufacturer = field(default_factory=Manufacturer)
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, Metadata] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime | None = None


@dataclass
class PartsFilter:
    """Criteria for listing parts; empty lists impose no restriction."""

    uuids: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    manufacturer_countries: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


class InventoryError(Exception):
    """Base class of inventory errors."""

    default_message = "inventory error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class PartNotFoundError(InventoryError):
    """No part has the requested UUID."""

    default_message = "part not found"


class PartsNotFoundError(InventoryError):
    """No parts match the requested filter."""

    default_message = "parts not found"