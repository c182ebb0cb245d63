"""Pydantic models for the resource catalog.

These schemas define the records flowing through the catalog core: the
resource snapshot the filter engine and the specification aggregator read,
the transient filter criteria a buyer edits, and the request lines the
aggregator produces.

A resource's specification map is validated once, when the record is
built (``ResourceRecord.model_validate(row)`` or a request body), so the
algorithms downstream can rely on it.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from vendorconnect.common.enums import ResourceCategory, ResourceUnit
from vendorconnect.common.exceptions import SpecificationError

ALL_CATEGORIES = "All"


# ---------------------------------------------------------------------------
# Specification map
# ---------------------------------------------------------------------------


def coerce_quantity(name: str, value: Any) -> int:
    """Return ``value`` as a positive ``int`` or raise ``SpecificationError``.

    Whole-valued floats and decimals (``5.0``) are accepted; booleans,
    strings and fractional numbers are not.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise SpecificationError(
            f"Quantity for '{name}' must be a whole number, got {value!r}"
        )
    if not isinstance(value, int):
        # math.isfinite raises on a signaling NaN Decimal
        finite = value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)
        if not finite or value != int(value):
            raise SpecificationError(
                f"Quantity for '{name}' must be a whole number, got {value!r}"
            )
        value = int(value)
    if value <= 0:
        raise SpecificationError(f"Quantity for '{name}' must be positive, got {value}")
    return value


def _entries(raw: Any) -> list[tuple[Any, Any]]:
    if isinstance(raw, Mapping):
        return list(raw.items())
    if isinstance(raw, (list, tuple)):
        entries = []
        for entry in raw:
            if isinstance(entry, Mapping):
                if "name" not in entry or "quantity" not in entry:
                    raise SpecificationError(
                        "Specification entries need both 'name' and 'quantity'"
                    )
                entries.append((entry["name"], entry["quantity"]))
            elif isinstance(entry, (list, tuple)) and len(entry) == 2:
                entries.append((entry[0], entry[1]))
            else:
                raise SpecificationError(f"Malformed specification entry: {entry!r}")
        return entries
    raise SpecificationError(
        f"Specification must be a mapping of item name to quantity, got {type(raw).__name__}"
    )


def coerce_specification(raw: Any) -> dict[str, int] | None:
    """Validate a raw specification into an ordered ``{item: quantity}`` dict.

    Accepts a mapping, or a sequence of ``(name, quantity)`` pairs or
    ``{"name": ..., "quantity": ...}`` objects. Insertion order is kept.
    ``None`` passes through unchanged; an empty input yields ``{}``.
    """
    if raw is None:
        return None

    spec: dict[str, int] = {}
    for name, quantity in _entries(raw):
        if not isinstance(name, str) or not name.strip():
            raise SpecificationError("Specification item names must be non-empty strings")
        key = name.strip()
        if key in spec:
            raise SpecificationError(f"Duplicate specification item '{key}'")
        spec[key] = coerce_quantity(key, quantity)
    return spec


SpecificationMap = Annotated[dict[str, int] | None, BeforeValidator(coerce_specification)]


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------


class ResourceRecord(BaseModel):
    """Read-only snapshot of a listed resource."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: uuid.UUID | None = None
    vendor_id: uuid.UUID | None = None
    title: str
    description: str = ""
    category: ResourceCategory
    price: Decimal = Field(..., ge=0)
    unit: ResourceUnit
    availability: str = ""
    image_url: str | None = None
    featured: bool = False
    specifications: SpecificationMap = None
    created_at: datetime | None = None

    @property
    def has_breakdown(self) -> bool:
        return bool(self.specifications)


class FilterCriteria(BaseModel):
    """Buyer-chosen constraints narrowing the visible catalog.

    Every field is optional; a neutral criteria object (see ``neutral``)
    lets the whole catalog through.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    category: ResourceCategory | Literal["All"] = ALL_CATEGORIES
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    vendor_id: uuid.UUID | None = None

    @classmethod
    def neutral(cls) -> FilterCriteria:
        return cls()

    @property
    def is_active(self) -> bool:
        return bool(
            self.search
            or self.category != ALL_CATEGORIES
            or self.min_price is not None
            or self.max_price is not None
            or self.vendor_id is not None
        )


class RequestLine(BaseModel):
    """One line of a buyer's request, ready to be stored as a ResourceRequest."""

    name: str
    category_guess: ResourceCategory
    quantity: int = Field(..., gt=0)
    unit: ResourceUnit
    cost_share: Decimal
