# rocketfactory

Building blocks for three cooperating services of a rocket parts factory:

- **Inventory** keeps the catalogue of parts (engines, fuel, portholes,
  wings) in a MongoDB collection and answers lookups by UUID or by filter.
- **Order** describes orders and their status (`PENDING_PAYMENT`, `PAID`,
  `CANCELED`), converts them between stored records and API objects, and
  stores them in a PostgreSQL `orders` table.
- **Payment** accepts a payment for an order and returns a transaction UUID.

## Modules

| Module | Contents |
| --- | --- |
| `rocketfactory.inventory_model` | `Part`, `Category`, `Dimensions`, `Manufacturer`, `Metadata`, `PartsFilter`, `InventoryError`, `PartNotFoundError`, `PartsNotFoundError` |
| `rocketfactory.order_model` | `OrderData`, `OrderStatus`, `PaymentMethod`, `OrderCreationInfo`, `OrderUpdateInfo`, `OrderPart` and the order and payment errors (`OrderNotFoundError`, `OrderConflictError`, `PaymentConflictError`, ...) |
| `rocketfactory.config` | Environment-driven settings: `load_inventory_config`, `load_order_config`, `load_payment_config`, `load_env_file`, `ConfigError` and the config classes |
| `rocketfactory.inventory_convert` | Wire types (`ProtoPart`, `ProtoValue`, `ProtoCategory`, `ProtoPartsFilter`, ...) and conversions between parts, wire messages and stored documents |
| `rocketfactory.inventory_repository` | `MongoPartRepository`, the `InventoryRepository` protocol, `build_mongo_filter`, `matches_filter`, `generate_parts`, `round_cents` |
| `rocketfactory.inventory_service` | `InventoryService` |
| `rocketfactory.inventory_api` | `InventoryApi`, `RpcError`, `StatusCode`, and the call wrappers `log_call` and `validate_request` |
| `rocketfactory.order_convert` | `OrderDto`, `order_data_to_record`, `order_data_from_record`, `order_data_to_dto`, `string_to_uuid`, `uuids_to_strings`, `part_from_proto`, `parts_from_proto`, `metadata_from_proto`, `parts_filter_to_proto` |
| `rocketfactory.order_repository` | `PostgresOrderRepository` and the SQL builders `build_insert_query`, `build_select_query`, `build_update_query` |
| `rocketfactory.payment` | `PaymentService`, `PaymentApi`, `PaymentError`, `PaymentProcessingError` |

## Configuration

Every service reads its settings from the environment, after loading a
`.env` file (by default `.env` in the working directory). A missing file is
not an error; a missing required variable or a malformed boolean raises
`ConfigError`. When a mapping is passed as `environ`, the file only fills in
keys that the mapping lacks and the process environment is left alone.

```python
from rocketfactory.config import load_payment_config

cfg = load_payment_config(None, {
    "LOGGER_LEVEL": "info",
    "LOGGER_AS_JSON": "false",
    "GRPC_HOST": "localhost",
    "GRPC_PORT": "50052",
})
print(cfg.payment_grpc.address())  # localhost:50052
```

The inventory service additionally needs `GRPC_HOST`, `GRPC_PORT` and the
`MONGO_*` variables (`MongoConfig.uri()` builds the connection string). The
order service needs `HTTP_HOST`, `HTTP_PORT`, `MIGRATION_DIRECTORY`, the
`INVENTORY_GRPC_*`, `PAYMENT_GRPC_*` and `POSTGRES_*` variables.

## Inventory

`MongoPartRepository` takes a database object whose `["parts"]` item is a
collection offering `create_index`, `find_one`, `find` and `insert_many`
(a pymongo database fits). It creates a unique index on `uuid` and, unless
`init_mock_parts=False`, seeds the collection with 1 to 50 generated parts.
`get_part` raises `PartNotFoundError` for an unknown UUID; `list_parts`
returns an empty list when the result does not hold one part per requested
UUID, name, country and category.

`InventoryService` passes calls through to the repository and logs failures.
`InventoryApi` wraps the service, returns `ProtoPart` objects and turns
errors into `RpcError` with `StatusCode.NOT_FOUND` or `StatusCode.INTERNAL`.

## Orders

`PostgresOrderRepository` takes a database object with
`fetch_one(query, args)` and `execute(query, args)` and issues queries with
`$1`-style placeholders:

- `create_order(user_uuid, parts)` inserts a pending order priced at the sum
  of the parts and returns an `OrderCreationInfo`;
- `get_order(order_uuid)` returns an `OrderData` or raises
  `OrderNotFoundError`;
- `update_order(order_uuid, update)` sets `updated_at` and every field of the
  `OrderUpdateInfo` that is not `None`.

## Paying for an order

```python
from rocketfactory.payment import PaymentApi, PaymentService

api = PaymentApi(PaymentService())
transaction_uuid = api.pay_order(
    "0b6c7a52-1f0e-4b7a-9f3e-2d1c5e8a9b10",
    "5f2e1d0c-3b4a-4c5d-8e9f-0a1b2c3d4e5f",
    "CARD",
)
```

`PaymentApi` logs each call and turns a `PaymentProcessingError` into an
`RpcError` with `StatusCode.INTERNAL`.

## What is not included

- There is no order business layer: nothing here creates an order from
  inventory parts, checks an order's status before cancelling or paying it,
  or calls the payment service on an order's behalf. The order modules stop
  at models, conversions and storage.
- There is no HTTP API for orders and no request-logging middleware.
- No servers and no commands: nothing listens on the configured addresses;
  the API classes are plain Python objects to be wired into a transport.
- No database drivers or migrations: the repositories work with whatever
  database objects the caller supplies.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.