"""Service configuration read from environment variables and .env files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

_DEFAULT_ENV_FILE = ".env"
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ConfigError(Exception):
    """The configuration is missing or malformed."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


def _join_host_port(host: str, port: str) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


@dataclass(frozen=True)
class LoggerConfig:
    level: str
    as_json: bool


@dataclass(frozen=True)
class GrpcConfig:
    host: str
    port: str

    def address(self) -> str:
        """Return ``host:port``, bracketing IPv6 hosts."""
        return _join_host_port(self.host, self.port)


@dataclass(frozen=True)
class MongoConfig:
    host: str
    port: str
    database: str
    user: str
    password: str
    auth_db: str
    disabled_init_mock_parts: bool

    def uri(self) -> str:
        """Return the MongoDB connection URI."""
        return (
            f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}"
            f"/{self.database}?authSource={self.auth_db}"
        )


@dataclass(frozen=True)
class OrderHttpConfig:
    host: str
    port: str
    migrations_dir: str

    def address(self) -> str:
        """Return ``host:port``, bracketing IPv6 hosts."""
        return _join_host_port(self.host, self.port)


@dataclass(frozen=True)
class PostgresConfig:
    host: str
    port: str
    database: str
    user: str
    password: str

    def uri(self) -> str:
        """Return the PostgreSQL connection URI."""
        return f"postgres://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass(frozen=True)
class InventoryAppConfig:
    logger: LoggerConfig
    inventory_grpc: GrpcConfig
    mongo: MongoConfig


@dataclass(frozen=True)
class OrderAppConfig:
    logger: LoggerConfig
    order_http: OrderHttpConfig
    inventory: GrpcConfig
    payment: GrpcConfig
    postgres: PostgresConfig


@dataclass(frozen=True)
class PaymentAppConfig:
    logger: LoggerConfig
    payment_grpc: GrpcConfig


def _require(environ: Mapping[str, str] | None, *keys: str) -> dict[str, str]:
    source = os.environ if environ is None else environ
    missing = tuple(key for key in keys if key not in source)
    if missing:
        names = ", ".join(f'"{key}"' for key in missing)
        raise ConfigError(f"required environment variables are not set: {names}", missing)
    return {key: source[key] for key in keys}


def _parse_bool(key: str, raw: str) -> bool:
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f'invalid boolean value {raw!r} for "{key}"')


def load_env_file(path: str | os.PathLike[str] | None = None) -> bool:
    """Load variables from a .env file into the process environment.

    Variables already set are kept. A missing file is not an error;
    returns whether a file was read.
    """
    env_path = Path(_DEFAULT_ENV_FILE if path is None else path)
    if not env_path.exists():
        return False
    try:
        load_dotenv(env_path, override=False)
    except OSError as exc:
        raise ConfigError(f"cannot read env file {env_path}: {exc}") from exc
    return True


def _environment(
    path: str | os.PathLike[str] | None, environ: Mapping[str, str] | None
) -> Mapping[str, str]:
    if environ is None:
        load_env_file(path)
        return os.environ
    env_path = Path(_DEFAULT_ENV_FILE if path is None else path)
    merged: dict[str, str] = {}
    if env_path.exists():
        try:
            values = dotenv_values(env_path)
        except OSError as exc:
            raise ConfigError(f"cannot read env file {env_path}: {exc}") from exc
        merged.update({key: value for key, value in values.items() if value is not None})
    merged.update(environ)
    return merged


def logger_config_from_env(environ: Mapping[str, str] | None = None) -> LoggerConfig:
    values = _require(environ, "LOGGER_LEVEL", "LOGGER_AS_JSON")
    return LoggerConfig(
        level=values["LOGGER_LEVEL"],
        as_json=_parse_bool("LOGGER_AS_JSON", values["LOGGER_AS_JSON"]),
    )


def grpc_config_from_env(environ: Mapping[str, str] | None = None, prefix: str = "") -> GrpcConfig:
    host_key, port_key = f"{prefix}GRPC_HOST", f"{prefix}GRPC_PORT"
    values = _require(environ, host_key, port_key)
    return GrpcConfig(host=values[host_key], port=values[port_key])


def mongo_config_from_env(environ: Mapping[str, str] | None = None) -> MongoConfig:
    values = _require(
        environ,
        "MONGO_HOST",
        "MONGO_PORT",
        "MONGO_DATABASE",
        "MONGO_INITDB_ROOT_USERNAME",
        "MONGO_INITDB_ROOT_PASSWORD",
        "MONGO_AUTH_DB",
        "MONGO_DISABLED_INIT_MOCK_PARTS",
    )
    return MongoConfig(
        host=values["MONGO_HOST"],
        port=values["MONGO_PORT"],
        database=values["MONGO_DATABASE"],
        user=values["MONGO_INITDB_ROOT_USERNAME"],
        password=values["MONGO_INITDB_ROOT_PASSWORD"],
        auth_db=values["MONGO_AUTH_DB"],
        disabled_init_mock_parts=_parse_bool(
            "MONGO_DISABLED_INIT_MOCK_PARTS", values["MONGO_DISABLED_INIT_MOCK_PARTS"]
        ),
    )


def order_http_config_from_env(environ: Mapping[str, str] | None = None) -> OrderHttpConfig:
    values = _require(environ, "HTTP_HOST", "HTTP_PORT", "MIGRATION_DIRECTORY")
    return OrderHttpConfig(
        host=values["HTTP_HOST"],
        port=values["HTTP_PORT"],
        migrations_dir=values["MIGRATION_DIRECTORY"],
    )


def postgres_config_from_env(environ: Mapping[str, str] | None = None) -> PostgresConfig:
    values = _require(
        environ, "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB", "POSTGRES_USER", "POSTGRES_PASSWORD"
    )
    return PostgresConfig(
        host=values["POSTGRES_HOST"],
        port=values["POSTGRES_PORT"],
        database=values["POSTGRES_DB"],
        user=values["POSTGRES_USER"],
        password=values["POSTGRES_PASSWORD"],
    )


def load_inventory_config(
    path: str | os.PathLike[str] | None = None, environ: Mapping[str, str] | None = None
) -> InventoryAppConfig:
    """Build the inventory service configuration.

    With ``environ`` omitted the .env file is loaded into the process
    environment; otherwise its values only fill keys missing from ``environ``.
    """
    env = _environment(path, environ)
    return InventoryAppConfig(
        logger=logger_config_from_env(env),
        inventory_grpc=grpc_config_from_env(env),
        mongo=mongo_config_from_env(env),
    )


def load_order_config(
    path: str | os.PathLike[str] | None = None, environ: Mapping[str, str] | None = None
) -> OrderAppConfig:
    """Build the order service configuration."""
    env = _environment(path, environ)
    return OrderAppConfig(
        logger=logger_config_from_env(env),
        order_http=order_http_config_from_env(env),
        inventory=grpc_config_from_env(env, "INVENTORY_"),
        payment=grpc_config_from_env(env, "PAYMENT_"),
        postgres=postgres_config_from_env(env),
    )


def load_payment_config(
    path: str | os.PathLike[str] | None = None, environ: Mapping[str, str] | None = None
) -> PaymentAppConfig:
    """Build the payment service configuration."""
    env = _environment(path, environ)
    return PaymentAppConfig(
        logger=logger_config_from_env(env),
        payment_grpc=grpc_config_from_env(env),
    )