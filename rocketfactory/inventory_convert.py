"""Conversions between inventory parts, wire messages and stored documents."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any

from rocketfactory.inventory_model import (
    Category,
    Dimensions,
    Manufacturer,
    Metadata,
    Part,
    PartsFilter,
)

# (model attribute, stored document key) for each metadata kind, in priority order.
_METADATA_FIELDS = (
    ("string_value", "stringvalue"),
    ("int64_value", "int64value"),
    ("double_value", "doublevalue"),
    ("bool_value", "boolvalue"),
)


class ProtoCategory(IntEnum):
    """Part category as carried on the wire."""

    CATEGORY_UNSPECIFIED = 0
    CATEGORY_ENGINE = 1
    CATEGORY_FUEL = 2
    CATEGORY_PORTHOLE = 3
    CATEGORY_WING = 4


@dataclass(frozen=True)
class ProtoValue:
    """A metadata value on the wire; at most one kind is set."""

    string_value: str | None = None
    int64_value: int | None = None
    double_value: float | None = None
    bool_value: bool | None = None

    def __post_init__(self) -> None:
        values = (self.string_value, self.int64_value, self.double_value, self.bool_value)
        if sum(value is not None for value in values) > 1:
            raise ValueError("a value holds at most one kind")

    @property
    def kind(self) -> str | None:
        """Name of the field that is set, or ``None`` for an empty value."""
        return next(
            (name for name, _ in _METADATA_FIELDS if getattr(self, name) is not None), None
        )


@dataclass(frozen=True)
class ProtoManufacturer:
    name: str = ""
    country: str = ""
    website: str = ""


@dataclass(frozen=True)
class ProtoDimensions:
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0


@dataclass
class ProtoPart:
    """A part as sent to clients."""

    uuid: str = ""
    name: str = ""
    description: str = ""
    price: float = 0.0
    stock_quantity: int = 0
    category: ProtoCategory = ProtoCategory.CATEGORY_UNSPECIFIED
    dimensions: ProtoDimensions | None = None
    manufacturer: ProtoManufacturer | None = None
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, ProtoValue] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ProtoPartsFilter:
    """A parts filter as received from clients."""

    uuids: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    categories: list[ProtoCategory] = field(default_factory=list)
    manufacturer_countries: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


_CATEGORY_TO_PROTO = {
    Category.ENGINE: ProtoCategory.CATEGORY_ENGINE,
    Category.FUEL: ProtoCategory.CATEGORY_FUEL,
    Category.PORTHOLE: ProtoCategory.CATEGORY_PORTHOLE,
    Category.WING: ProtoCategory.CATEGORY_WING,
}


def category_to_proto(category: Category | str) -> ProtoCategory:
    """Map a category to its wire value; anything unknown is unspecified."""
    try:
        return _CATEGORY_TO_PROTO.get(Category(category), ProtoCategory.CATEGORY_UNSPECIFIED)
    except ValueError:
        return ProtoCategory.CATEGORY_UNSPECIFIED


def metadata_to_proto(metadata: Mapping[str, Metadata]) -> dict[str, ProtoValue]:
    """Convert metadata; the first set field wins, none set gives an empty value."""
    result: dict[str, ProtoValue] = {}
    for key, value in metadata.items():
        kind = next(
            (name for name, _ in _METADATA_FIELDS if getattr(value, name) is not None), None
        )
        result[key] = ProtoValue() if kind is None else ProtoValue(**{kind: getattr(value, kind)})
    return result


def part_to_proto(part: Part) -> ProtoPart:
    """Convert a part to its wire form; dimensions and tags are not sent."""
    return ProtoPart(
        uuid=part.uuid,
        name=part.name,
        description=part.description,
        price=part.price,
        stock_quantity=part.stock_quantity,
        category=category_to_proto(part.category),
        manufacturer=ProtoManufacturer(
            name=part.manufacturer.name,
            country=part.manufacturer.country,
            website=part.manufacturer.website,
        ),
        metadata=metadata_to_proto(part.metadata),
        created_at=part.created_at,
        updated_at=part.updated_at,
    )


def parts_to_proto(parts: Iterable[Part]) -> list[ProtoPart]:
    return [part_to_proto(part) for part in parts]


def parts_filter_to_model(proto_filter: ProtoPartsFilter | None) -> PartsFilter:
    """Convert a wire filter to the model filter.

    Only the UUID list and the categories are carried over: a non-empty names,
    tags or manufacturer-countries list (checked in that order) replaces the
    UUID list, and categories keep their wire names.
    """
    if proto_filter is None:
        proto_filter = ProtoPartsFilter()
    uuids = list(proto_filter.uuids)
    for replacement in (proto_filter.names, proto_filter.tags, proto_filter.manufacturer_countries):
        if replacement:
            uuids = list(replacement)
    categories: list[Any] = [ProtoCategory(c).name for c in proto_filter.categories]
    return PartsFilter(uuids=uuids, categories=categories)


def _category_from_document(value: Any) -> Category | str:
    try:
        return Category(value)
    except ValueError:
        return value


def part_from_document(document: Mapping[str, Any]) -> Part:
    """Build a part from a stored document."""
    dimensions = document.get("dimensions") or {}
    manufacturer = document.get("manufacturer") or {}
    metadata = document.get("metadata") or {}
    part = Part(
        uuid=document.get("uuid", ""),
        name=document.get("name", ""),
        description=document.get("description", ""),
        price=document.get("price", 0.0),
        stock_quantity=document.get("stock_quantity", 0),
        category=_category_from_document(document.get("category", Category.UNSPECIFIED.value)),
        dimensions=Dimensions(
            length=dimensions.get("length", 0.0),
            width=dimensions.get("width", 0.0),
            height=dimensions.get("height", 0.0),
            weight=dimensions.get("weight", 0.0),
        ),
        manufacturer=Manufacturer(
            name=manufacturer.get("name", ""),
            country=manufacturer.get("country", ""),
            website=manufacturer.get("website", ""),
        ),
        tags=list(document.get("tags") or []),
        metadata={
            key: Metadata(**{attr: value.get(stored) for attr, stored in _METADATA_FIELDS})
            for key, value in metadata.items()
        },
        updated_at=document.get("updated_at"),
    )
    if document.get("created_at") is not None:
        part.created_at = document["created_at"]
    return part


def part_to_document(part: Part) -> dict[str, Any]:
    """Build the stored document for a part."""
    document: dict[str, Any] = {
        "uuid": part.uuid,
        "name": part.name,
        "description": part.description,
        "price": part.price,
        "stock_quantity": part.stock_quantity,
        "category": str(part.category),
        "dimensions": {
            "length": part.dimensions.length,
            "width": part.dimensions.width,
            "height": part.dimensions.height,
            "weight": part.dimensions.weight,
        },
        "manufacturer": {
            "name": part.manufacturer.name,
            "country": part.manufacturer.country,
            "website": part.manufacturer.website,
        },
        "tags": list(part.tags),
        "metadata": {
            key: {stored: getattr(value, attr) for attr, stored in _METADATA_FIELDS}
            for key, value in part.metadata.items()
        },
        "created_at": part.created_at,
    }
    if part.updated_at is not None:
        document["updated_at"] = part.updated_at
    return document


def parts_from_documents(documents: Iterable[Mapping[str, Any]]) -> list[Part]:
    return [part_from_document(document) for document in documents]