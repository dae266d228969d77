"""Business operations of the inventory service."""

from __future__ import annotations

import logging

from rocketfactory.inventory_model import Part, PartsFilter
from rocketfactory.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class InventoryService:
    """Reads parts from a repository, logging failures."""

    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def get_part(self, part_uuid: str) -> Part:
        try:
            return self._repository.get_part(part_uuid)
        except Exception as exc:
            logger.error("failed to get part, order_uuid=%s: %s", part_uuid, exc)
            raise

    def list_parts(self, parts_filter: PartsFilter) -> list[Part]:
        try:
            return self._repository.list_parts(parts_filter)
        except Exception as exc:
            logger.error("failed to get parts, filter=%r: %s", parts_filter, exc)
            raise