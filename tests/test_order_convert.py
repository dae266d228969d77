import uuid
from datetime import datetime, timezone

from rocketfactory.inventory_convert import (
    ProtoCategory,
    ProtoDimensions,
    ProtoManufacturer,
    ProtoPart,
    ProtoValue,
)
from rocketfactory.inventory_model import Category, Dimensions, Manufacturer, Metadata, PartsFilter
from rocketfactory.order_convert import (
    metadata_from_proto,
    order_data_from_record,
    order_data_to_dto,
    order_data_to_record,
    part_from_proto,
    parts_filter_to_proto,
    parts_from_proto,
    string_to_uuid,
    uuids_to_strings,
)
from rocketfactory.order_model import OrderData, OrderStatus, PaymentMethod


def _order(**overrides):
    values = dict(
        uuid=str(uuid.uuid4()),
        user_uuid=str(uuid.uuid4()),
        part_uuids=[str(uuid.uuid4()), str(uuid.uuid4())],
        total_price=512.5,
        transaction_uuid=str(uuid.uuid4()),
        payment_method=PaymentMethod.CREDIT_CARD,
        status=OrderStatus.PAID,
        created_at=datetime(2024, 6, 1, 12, tzinfo=timezone.utc),
        updated_at=datetime(2024, 6, 2, 12, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return OrderData(**values)


def test_record_round_trip():
    order = _order()
    assert order_data_from_record(order_data_to_record(order)) == order


def test_record_stores_enum_values_as_strings():
    order = _order()
    record = order_data_to_record(order)
    assert record["status"] == "PAID"
    assert record["payment_method"] == "CREDIT_CARD"
    assert record["part_uuids"] == order.part_uuids


def test_missing_payment_method_becomes_empty():
    order = _order(payment_method=None)
    assert order_data_to_record(order)["payment_method"] == ""
    assert order_data_from_record({"uuid": order.uuid, "status": "PAID"}).payment_method == ""


def test_unknown_status_is_kept_raw():
    order = order_data_from_record({"uuid": "x", "status": "UNKNOWN_STATUS"})
    assert order.status == "UNKNOWN_STATUS"


def test_order_to_dto():
    order = _order()
    dto = order_data_to_dto(order)
    assert dto.order_uuid == uuid.UUID(order.uuid)
    assert dto.user_uuid == uuid.UUID(order.user_uuid)
    assert dto.part_uuids == [uuid.UUID(value) for value in order.part_uuids]
    assert dto.transaction_uuid == uuid.UUID(order.transaction_uuid)
    assert dto.payment_method == PaymentMethod.CREDIT_CARD
    assert dto.status == OrderStatus.PAID
    assert dto.created_at == order.created_at
    assert dto.updated_at == order.updated_at


def test_order_to_dto_optional_fields_absent():
    dto = order_data_to_dto(_order(transaction_uuid=None, payment_method=None, updated_at=None))
    assert dto.transaction_uuid is None
    assert dto.payment_method is None
    assert dto.updated_at is None


def test_string_to_uuid_invalid_gives_nil():
    assert string_to_uuid("not-a-uuid") == uuid.UUID(int=0)


def test_uuid_strings_round_trip():
    values = [uuid.uuid4() for _ in range(3)]
    strings = uuids_to_strings(values)
    assert [string_to_uuid(value) for value in strings] == values


def test_metadata_from_proto_merges_kinds():
    result = metadata_from_proto(
        {
            "a": ProtoValue(string_value="serial"),
            "b": ProtoValue(int64_value=42),
            "c": None,
            "d": ProtoValue(),
            "e": ProtoValue(bool_value=True),
        }
    )
    assert result == Metadata(string_value="serial", int64_value=42, bool_value=True)


def test_metadata_from_proto_later_value_wins():
    result = metadata_from_proto({"a": ProtoValue(double_value=1.5), "b": ProtoValue(double_value=2.5)})
    assert result.double_value == 2.5


def test_part_from_proto():
    created = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)
    proto = ProtoPart(
        uuid="p1",
        name="Falcon Engine",
        description="Primary propulsion unit",
        price=5000.0,
        stock_quantity=10,
        category=ProtoCategory.CATEGORY_ENGINE,
        dimensions=ProtoDimensions(length=3.0, width=2.5, height=1.2, weight=150.0),
        manufacturer=ProtoManufacturer(name="Maker", country="USA", website="https://maker.example.com"),
        tags=["rocket", "engine"],
        metadata={"v": ProtoValue(string_value="s")},
        created_at=created,
    )
    part = part_from_proto(proto)
    assert part.uuid == "p1"
    assert part.price == 5000.0
    assert part.category == Category.ENGINE
    assert part.dimensions == Dimensions(length=3.0, width=2.5, height=1.2, weight=150.0)
    assert part.manufacturer == Manufacturer(
        name="Maker", country="USA", website="https://maker.example.com"
    )
    assert part.tags == ["rocket", "engine"]
    assert part.metadata == Metadata(string_value="s")
    assert part.created_at == created
    assert part.updated_at is None


def test_part_from_proto_defaults():
    part = part_from_proto(ProtoPart(uuid="p2"))
    assert part.dimensions == Dimensions()
    assert part.category == Category.UNSPECIFIED
    assert part.created_at == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_parts_from_proto_keeps_order():
    parts = parts_from_proto([ProtoPart(uuid="a"), ProtoPart(uuid="b")])
    assert [part.uuid for part in parts] == ["a", "b"]


def test_parts_filter_to_proto():
    parts_filter = PartsFilter(
        uuids=["u1", "u2"],
        names=["n"],
        categories=[Category.ENGINE, Category.WING],
        manufacturer_countries=["c"],
        tags=["t"],
    )
    proto = parts_filter_to_proto(parts_filter)
    assert proto.uuids == ["u1", "u2"]
    assert proto.names == ["n"]
    assert proto.manufacturer_countries == ["c"]
    assert proto.tags == ["t"]
    assert proto.categories == [
        ProtoCategory.CATEGORY_UNSPECIFIED,
        ProtoCategory.CATEGORY_UNSPECIFIED,
        ProtoCategory.CATEGORY_ENGINE,
        ProtoCategory.CATEGORY_WING,
    ]