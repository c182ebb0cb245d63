import uuid
from decimal import Decimal

import pytest

from vendorconnect.common.enums import ResourceCategory, ResourceUnit
from vendorconnect.common.exceptions import DivisionHazardError, SpecificationError
from vendorconnect.core.catalog.aggregation import (
    SPECIFICATION_CATEGORY_TABLE,
    aggregate,
    classify_item,
    split_cost,
)
from vendorconnect.core.catalog.schemas import ResourceRecord, coerce_specification


def _resource(price="150.00", unit=ResourceUnit.EACH, specifications=None, **kwargs):
    return ResourceRecord(
        id=uuid.uuid4(),
        vendor_id=uuid.uuid4(),
        title=kwargs.pop("title", "Masonry Bundle"),
        category=kwargs.pop("category", ResourceCategory.MATERIAL),
        price=Decimal(price),
        unit=unit,
        specifications=specifications,
        **kwargs,
    )


def test_specification_split_evenly():
    lines = aggregate(_resource(specifications={"Brick": 10, "Cement": 5}))

    assert [line.name for line in lines] == ["Brick", "Cement"]
    assert [line.quantity for line in lines] == [10, 5]
    assert [line.category_guess for line in lines] == [
        ResourceCategory.MATERIAL,
        ResourceCategory.MATERIAL,
    ]
    assert all(line.cost_share == Decimal("75") for line in lines)
    assert all(line.unit == ResourceUnit.EACH for line in lines)


def test_no_specification_is_single_unit():
    resource = _resource(
        price="300", unit=ResourceUnit.DAY, title="Excavator", category=ResourceCategory.EQUIPMENT
    )
    [line] = aggregate(resource)

    assert line.name == "Excavator"
    assert line.category_guess == ResourceCategory.EQUIPMENT
    assert line.quantity == 1
    assert line.unit == ResourceUnit.DAY
    assert line.cost_share == Decimal("300")


def test_empty_specification_is_single_unit():
    [line] = aggregate(_resource(price="80", specifications={}))
    assert line.quantity == 1
    assert line.cost_share == Decimal("80")


def test_zero_quantity_rejected():
    with pytest.raises(ValueError):
        aggregate(_resource(specifications={"Drill": 0}))


def test_unvalidated_record_is_still_checked():
    resource = ResourceRecord.model_construct(
        title="Tool Kit",
        category=ResourceCategory.EQUIPMENT,
        price=Decimal("90"),
        unit=ResourceUnit.EACH,
        specifications={"Drill": 0},
    )
    with pytest.raises(SpecificationError):
        aggregate(resource)


@pytest.mark.parametrize(
    "quantity", [Decimal("sNaN"), Decimal("NaN"), Decimal("-Infinity"), float("inf")]
)
def test_non_finite_quantity_rejected(quantity):
    resource = ResourceRecord.model_construct(
        title="Tool Kit",
        category=ResourceCategory.EQUIPMENT,
        price=Decimal("90"),
        unit=ResourceUnit.EACH,
        specifications={"Drill": quantity},
    )
    with pytest.raises(SpecificationError):
        aggregate(resource)


def test_line_order_follows_specification_order():
    spec = {"Gravel": 3, "Drill": 1, "Widget": 2, "Sand": 4}
    lines = aggregate(_resource(price="100", specifications=spec))

    assert [line.name for line in lines] == list(spec)
    assert [line.category_guess for line in lines] == [
        ResourceCategory.MATERIAL,
        ResourceCategory.EQUIPMENT,
        ResourceCategory.OTHER,
        ResourceCategory.MATERIAL,
    ]
    assert all(line.cost_share == Decimal("25") for line in lines)


def test_cost_share_is_not_rounded():
    lines = aggregate(_resource(price="100", specifications={"Sand": 1, "Gravel": 1, "Cement": 1}))
    assert lines[0].cost_share == Decimal("100") / 3
    assert lines[0].cost_share != Decimal("33.33")


def test_aggregate_is_deterministic():
    resource = _resource(specifications={"Brick": 10, "Cement": 5})
    assert aggregate(resource) == aggregate(resource)
    assert resource.specifications == {"Brick": 10, "Cement": 5}


def test_classify_item_normalizes_names():
    assert classify_item("  Concrete   MIXER ") == ResourceCategory.EQUIPMENT
    assert classify_item("brick") == ResourceCategory.MATERIAL
    assert classify_item("Douglas Fir") == ResourceCategory.OTHER


def test_category_table_keys_are_normalized():
    for key in SPECIFICATION_CATEGORY_TABLE:
        assert key == " ".join(key.split()).casefold()


def test_split_cost_guards_zero_parts():
    assert split_cost(Decimal("10"), 4) == Decimal("2.5")
    with pytest.raises(DivisionHazardError):
        split_cost(Decimal("10"), 0)


@pytest.mark.parametrize(
    "raw",
    [
        {"Drill": 0},
        {"Drill": -1},
        {"Drill": 1.5},
        {"Drill": "3"},
        {"Drill": True},
        {"  ": 2},
        [("Brick", 1), ("Brick ", 2)],
        [{"name": "Brick"}],
        "Brick: 10",
    ],
)
def test_coerce_specification_rejects(raw):
    with pytest.raises(SpecificationError):
        coerce_specification(raw)


def test_coerce_specification_accepts_shapes():
    assert coerce_specification(None) is None
    assert coerce_specification({}) == {}
    assert coerce_specification({" Brick ": 10.0}) == {"Brick": 10}
    assert coerce_specification([{"name": "Sand", "quantity": 2}, ("Gravel", 3)]) == {
        "Sand": 2,
        "Gravel": 3,
    }
