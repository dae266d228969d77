"""Request handlers of the inventory service and their call wrappers."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import IntEnum
from typing import Any, TypeVar

from rocketfactory.inventory_convert import (
    ProtoPart,
    ProtoPartsFilter,
    part_to_proto,
    parts_filter_to_model,
    parts_to_proto,
)
from rocketfactory.inventory_model import PartNotFoundError, PartsNotFoundError
from rocketfactory.inventory_service import InventoryService

logger = logging.getLogger(__name__)

R = TypeVar("R")


class StatusCode(IntEnum):
    """RPC status codes."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    @property
    def display_name(self) -> str:
        """Name in the customary CamelCase form, e.g. ``NotFound``."""
        if self is StatusCode.OK:
            return "OK"
        return "".join(word.capitalize() for word in self.name.split("_"))


class RpcError(Exception):
    """An error carrying an RPC status code."""

    def __init__(self, code: StatusCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"rpc error: code = {self.code.display_name} desc = {self.message}"


def log_call(full_method: str, handler: Callable[[Any], R], request: Any) -> R:
    """Run ``handler`` on ``request``, logging start, outcome and duration."""
    method = full_method.rstrip("/").rsplit("/", 1)[-1] or "/"
    logger.info("Started gRPC method %s", method)
    started = time.perf_counter()
    try:
        response = handler(request)
    except Exception as exc:
        elapsed_ms = (time.perf_counter() - started) * 1000
        code = exc.code if isinstance(exc, RpcError) else StatusCode.UNKNOWN
        logger.error(
            "Finished gRPC method %s with code %s: %s (took: %.3fms)",
            method,
            code.display_name,
            exc,
            elapsed_ms,
        )
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("Finished gRPC method %s successfully (took: %.3fms)", method, elapsed_ms)
    return response


def validate_request(request: Any, handler: Callable[[Any], R]) -> R:
    """Call the request's ``validate`` if it has one, then the handler."""
    validate = getattr(request, "validate", None)
    if callable(validate):
        try:
            validate()
        except Exception as exc:
            raise RpcError(StatusCode.INVALID_ARGUMENT, f"validation error: {exc}") from exc
    return handler(request)


class InventoryApi:
    """Inventory RPC handlers mapping service errors to status codes."""

    def __init__(self, service: InventoryService) -> None:
        self._service = service

    def get_part(self, part_uuid: str) -> ProtoPart:
        try:
            part = self._service.get_part(part_uuid)
        except PartNotFoundError as exc:
            raise RpcError(StatusCode.NOT_FOUND, f"part with UUID {part_uuid} not found") from exc
        except Exception as exc:
            logger.error("error while getting part, uuid=%s: %s", part_uuid, exc)
            raise RpcError(
                StatusCode.INTERNAL, f"internal error while getting part with UUID {part_uuid}"
            ) from exc
        return part_to_proto(part)

    def list_parts(self, proto_filter: ProtoPartsFilter | None) -> list[ProtoPart]:
        parts_filter = parts_filter_to_model(proto_filter)
        try:
            parts = self._service.list_parts(parts_filter)
        except PartsNotFoundError as exc:
            raise RpcError(StatusCode.NOT_FOUND, f"inventory service error: {exc}") from exc
        except Exception as exc:
            raise RpcError(StatusCode.INTERNAL, f"inventory service error: {exc}") from exc
        return parts_to_proto(parts)