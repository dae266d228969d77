"""MongoDB storage of inventory parts."""

from __future__ import annotations

import logging
import math
import random
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Protocol

from rocketfactory.inventory_convert import part_to_document, parts_from_documents, part_from_document
from rocketfactory.inventory_model import (
    Category,
    Dimensions,
    Manufacturer,
    Metadata,
    Part,
    PartNotFoundError,
    PartsFilter,
)

logger = logging.getLogger(__name__)

_COLLECTION_NAME = "parts"

_PART_NAMES = (
    ("Main Engine", "Primary propulsion unit"),
    ("Reserve Engine", "Backup propulsion unit"),
    ("Thruster", "Thruster for fine adjustments"),
    ("Fuel Tank", "Main fuel tank"),
    ("Left Wing", "Left aerodynamic wing"),
    ("Right Wing", "Right aerodynamic wing"),
    ("Window A", "Front viewing window"),
    ("Window B", "Side viewing window"),
    ("Control Module", "Flight control module"),
    ("Stabilizer", "Stabilization fin"),
)
_MAKER_NAMES = ("Orbital Works", "Nova Forge", "Comet Yards", "Starline Labs", "Zenith Foundry")
_COUNTRIES = ("Norway", "Japan", "Brazil", "Canada", "Kenya", "Germany", "India", "Chile")
_EMOJI_TAGS = ("smile", "rocket", "fire", "star", "moon", "sun", "sparkle", "wave", "heart", "party")
_WORDS = ("alpha", "bravo", "comet", "delta", "nova", "orbit", "pulsar", "quasar")


class InventoryRepository(Protocol):
    """Storage of inventory parts."""

    def get_part(self, part_uuid: str) -> Part: ...

    def list_parts(self, parts_filter: PartsFilter) -> list[Part]: ...

    def init_parts(self) -> None: ...


def round_cents(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    return math.copysign(math.floor(abs(value * 100) + 0.5), value) / 100


def build_mongo_filter(parts_filter: PartsFilter) -> dict[str, Any]:
    """Translate a parts filter into a MongoDB query."""
    query: dict[str, Any] = {}
    if parts_filter.uuids:
        query["uuid"] = {"$in": list(parts_filter.uuids)}
    if parts_filter.names:
        query["name"] = {"$in": list(parts_filter.names)}
    if parts_filter.categories:
        query["category"] = {"$in": [str(c) for c in parts_filter.categories]}
    if parts_filter.manufacturer_countries:
        query["manufacturer.country"] = {"$in": list(parts_filter.manufacturer_countries)}
    if parts_filter.tags:
        query["tags"] = {"$all": list(parts_filter.tags)}
    return query


def matches_filter(documents: Sequence[Any], parts_filter: PartsFilter) -> bool:
    """Whether the result has one entry per requested uuid, name, country and category."""
    count = len(documents)
    return all(
        not wanted or len(wanted) == count
        for wanted in (
            parts_filter.uuids,
            parts_filter.names,
            parts_filter.manufacturer_countries,
            parts_filter.categories,
        )
    )


def _random_uuid(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_parts(rng: random.Random | None = None) -> list[Part]:
    """Generate between 1 and 50 random parts for seeding the store."""
    rng = rng or random.Random()
    parts = []
    for _ in range(rng.randint(1, 50)):
        name, description = rng.choice(_PART_NAMES)
        maker = rng.choice(_MAKER_NAMES)
        parts.append(
            Part(
                uuid=_random_uuid(rng),
                name=name,
                description=description,
                price=round_cents(rng.uniform(100, 10_000)),
                stock_quantity=rng.randint(1, 100),
                category=rng.choice(list(Category)),
                dimensions=Dimensions(
                    length=round_cents(rng.uniform(1, 1000)),
                    width=round_cents(rng.uniform(1, 1000)),
                    height=round_cents(rng.uniform(1, 1000)),
                    weight=round_cents(rng.uniform(1, 1000)),
                ),
                manufacturer=Manufacturer(
                    name=maker,
                    country=rng.choice(_COUNTRIES),
                    website=f"https://{maker.lower().replace(' ', '-')}.example.com",
                ),
                tags=[rng.choice(_EMOJI_TAGS) for _ in range(rng.randint(1, 10))],
                metadata={
                    "string": Metadata(string_value=rng.choice(_WORDS)),
                    "int": Metadata(int64_value=rng.randint(0, 2**63 - 1)),
                    "double": Metadata(double_value=rng.random()),
                    "bool": Metadata(bool_value=rng.random() < 0.5),
                },
                created_at=datetime.now(timezone.utc),
            )
        )
    return parts


class MongoPartRepository:
    """Parts stored in the ``parts`` collection of a MongoDB database."""

    def __init__(self, database: Mapping[str, Any], init_mock_parts: bool = True) -> None:
        self._collection = database[_COLLECTION_NAME]
        self._rng = random.Random()
        self._collection.create_index([("uuid", 1)], unique=True)
        if init_mock_parts:
            self.init_parts()

    def get_part(self, part_uuid: str) -> Part:
        try:
            document = self._collection.find_one({"uuid": part_uuid})
        except Exception:
            logger.exception("Error finding part in MongoDB, uuid=%s", part_uuid)
            raise
        if document is None:
            logger.error("Part not found in MongoDB, uuid=%s", part_uuid)
            raise PartNotFoundError()
        logger.info("Part found in MongoDB, uuid=%s", part_uuid)
        return part_from_document(document)

    def list_parts(self, parts_filter: PartsFilter) -> list[Part]:
        cursor = self._collection.find(build_mongo_filter(parts_filter))
        try:
            documents = list(cursor)
        finally:
            close = getattr(cursor, "close", None)
            if close is not None:
                try:
                    close()
                except Exception as exc:
                    logger.warning("failed to close cursor: %s", exc)
        if not matches_filter(documents, parts_filter):
            return []
        return parts_from_documents(documents)

    def init_parts(self) -> None:
        """Insert a batch of generated parts."""
        documents = [part_to_document(part) for part in generate_parts(self._rng)]
        self._collection.insert_many(documents)
        logger.info("Inventory parts collection initialized")