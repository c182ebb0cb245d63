"""Specification aggregator.

Turns a resource into the request lines a buyer's request creates:

* a resource without a specification map is requested as a single unit at
  its full price;
* a resource with a specification map yields one line per item, in the
  map's order, each inheriting the resource's unit.

Pricing policy: listings carry a single total price and no per-item
prices, so every line receives an equal share of the total
(``price / number_of_items``). The split is a policy choice, not derived
from the data. Shares are exact ``Decimal`` quotients; rounding to currency
precision happens where requests are persisted, not here.

Item categories come from ``SPECIFICATION_CATEGORY_TABLE``, a closed lookup
table keyed by normalized item name. Names not in the table are ``Other``.
"""

from __future__ import annotations

from decimal import Decimal

from vendorconnect.common.enums import ResourceCategory
from vendorconnect.common.exceptions import DivisionHazardError
from vendorconnect.core.catalog.schemas import RequestLine, ResourceRecord, coerce_quantity

_MATERIAL = ResourceCategory.MATERIAL
_EQUIPMENT = ResourceCategory.EQUIPMENT


# ---------------------------------------------------------------------------
# Item -> category table
# ---------------------------------------------------------------------------

SPECIFICATION_CATEGORY_TABLE: dict[str, ResourceCategory] = {
    # Raw construction materials
    "aggregate": _MATERIAL,
    "asphalt": _MATERIAL,
    "block": _MATERIAL,
    "blocks": _MATERIAL,
    "board": _MATERIAL,
    "boards": _MATERIAL,
    "brick": _MATERIAL,
    "bricks": _MATERIAL,
    "cement": _MATERIAL,
    "concrete": _MATERIAL,
    "drywall": _MATERIAL,
    "glass": _MATERIAL,
    "gravel": _MATERIAL,
    "insulation": _MATERIAL,
    "lumber": _MATERIAL,
    "mortar": _MATERIAL,
    "nails": _MATERIAL,
    "paint": _MATERIAL,
    "pipe": _MATERIAL,
    "pipes": _MATERIAL,
    "plywood": _MATERIAL,
    "rebar": _MATERIAL,
    "sand": _MATERIAL,
    "screws": _MATERIAL,
    "shingles": _MATERIAL,
    "steel": _MATERIAL,
    "steel beam": _MATERIAL,
    "stone": _MATERIAL,
    "tile": _MATERIAL,
    "tiles": _MATERIAL,
    "timber": _MATERIAL,
    "wire": _MATERIAL,
    # Tools and machinery
    "backhoe": _EQUIPMENT,
    "boom lift": _EQUIPMENT,
    "bulldozer": _EQUIPMENT,
    "compactor": _EQUIPMENT,
    "compressor": _EQUIPMENT,
    "concrete mixer": _EQUIPMENT,
    "crane": _EQUIPMENT,
    "drill": _EQUIPMENT,
    "dump truck": _EQUIPMENT,
    "excavator": _EQUIPMENT,
    "forklift": _EQUIPMENT,
    "generator": _EQUIPMENT,
    "jackhammer": _EQUIPMENT,
    "ladder": _EQUIPMENT,
    "loader": _EQUIPMENT,
    "mixer": _EQUIPMENT,
    "nail gun": _EQUIPMENT,
    "saw": _EQUIPMENT,
    "scaffolding": _EQUIPMENT,
    "scissor lift": _EQUIPMENT,
    "skid steer": _EQUIPMENT,
    "welder": _EQUIPMENT,
}


def normalize_item_name(name: str) -> str:
    return " ".join(name.split()).casefold()


def classify_item(name: str) -> ResourceCategory:
    return SPECIFICATION_CATEGORY_TABLE.get(normalize_item_name(name), ResourceCategory.OTHER)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def split_cost(total: Decimal, parts: int) -> Decimal:
    """Split ``total`` into ``parts`` equal, unrounded shares."""
    if parts <= 0:
        raise DivisionHazardError(f"Cannot split a cost across {parts} line items")
    return total / parts


def aggregate(resource: ResourceRecord) -> list[RequestLine]:
    """Build the request lines for ``resource``.

    Raises ``SpecificationError`` if a specification quantity is not a
    positive whole number.
    """
    specifications = resource.specifications
    if not specifications:
        return [
            RequestLine(
                name=resource.title,
                category_guess=resource.category,
                quantity=1,
                unit=resource.unit,
                cost_share=resource.price,
            )
        ]

    share = split_cost(resource.price, len(specifications))
    return [
        RequestLine(
            name=item_name,
            category_guess=classify_item(item_name),
            quantity=coerce_quantity(item_name, quantity),
            unit=resource.unit,
            cost_share=share,
        )
        for item_name, quantity in specifications.items()
    ]
