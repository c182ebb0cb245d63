"""Resource filter engine.

Narrows a resource catalog to the entries matching a ``FilterCriteria``.
Each criterion is an independent predicate and a resource is kept only when
every active predicate passes:

* ``search``     – case-insensitive substring of the title or description
* ``category``   – exact match, unless the criteria says ``"All"``
* ``min_price``  – inclusive lower bound
* ``max_price``  – inclusive upper bound
* ``vendor_id``  – exact match

The engine is pure: it never mutates the catalog or the criteria, and the
result keeps the catalog's order. It accepts anything exposing ``title``,
``description``, ``category``, ``price`` and ``vendor_id``, so stored rows
and ``ResourceRecord`` snapshots can be filtered alike.

Filtering is display logic, so a record that an active predicate cannot
evaluate (missing field, unknown category, non-numeric price) is left out
of the result instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from decimal import InvalidOperation
from typing import Any, TypeVar

from vendorconnect.common.enums import ResourceCategory
from vendorconnect.common.logging import get_logger
from vendorconnect.core.catalog.schemas import ALL_CATEGORIES, FilterCriteria

logger = get_logger("catalog.filtering")

R = TypeVar("R")
Predicate = Callable[[Any], bool]

_EVALUATION_ERRORS = (AttributeError, TypeError, ValueError, InvalidOperation)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def _search_predicate(search: str) -> Predicate:
    needle = search.casefold()

    def predicate(resource: Any) -> bool:
        title = resource.title or ""
        description = resource.description or ""
        return needle in title.casefold() or needle in description.casefold()

    return predicate


def _category_predicate(category: ResourceCategory) -> Predicate:
    def predicate(resource: Any) -> bool:
        # Unknown category values raise ValueError and are excluded.
        return ResourceCategory(resource.category) == category

    return predicate


def _min_price_predicate(min_price: Any) -> Predicate:
    return lambda resource: resource.price >= min_price


def _max_price_predicate(max_price: Any) -> Predicate:
    return lambda resource: resource.price <= max_price


def _vendor_predicate(vendor_id: Any) -> Predicate:
    return lambda resource: resource.vendor_id == vendor_id


def build_predicates(criteria: FilterCriteria) -> list[Predicate]:
    """Return the predicates that are active for ``criteria``."""
    predicates: list[Predicate] = []
    if criteria.search:
        predicates.append(_search_predicate(criteria.search))
    if criteria.category != ALL_CATEGORIES:
        predicates.append(_category_predicate(ResourceCategory(criteria.category)))
    if criteria.min_price is not None:
        predicates.append(_min_price_predicate(criteria.min_price))
    if criteria.max_price is not None:
        predicates.append(_max_price_predicate(criteria.max_price))
    if criteria.vendor_id is not None:
        predicates.append(_vendor_predicate(criteria.vendor_id))
    return predicates


def _passes(resource: Any, predicates: Sequence[Predicate]) -> bool:
    try:
        return all(predicate(resource) for predicate in predicates)
    except _EVALUATION_ERRORS as e:
        logger.debug(
            "Excluding resource %s from results: %s",
            getattr(resource, "id", "<unknown>"),
            e,
        )
        return False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def matches(resource: Any, criteria: FilterCriteria) -> bool:
    return _passes(resource, build_predicates(criteria))


def filter_resources(catalog: Iterable[R], criteria: FilterCriteria) -> list[R]:
    """Return the resources of ``catalog`` matching every active criterion.

    Order is preserved. Neutral criteria return a copy of the full catalog,
    and ``min_price > max_price`` simply yields an empty list.
    """
    predicates = build_predicates(criteria)
    if not predicates:
        return list(catalog)
    return [resource for resource in catalog if _passes(resource, predicates)]


def summarize_by_category(resources: Iterable[Any]) -> dict[ResourceCategory, int]:
    """Count resources per category, in ``ResourceCategory`` declaration order.

    Every category is present (zero when unused); entries with an unknown
    category are not counted.
    """
    counts = {category: 0 for category in ResourceCategory}
    for resource in resources:
        try:
            counts[ResourceCategory(resource.category)] += 1
        except (AttributeError, ValueError):
            continue
    return counts


def category_facets(
    catalog: Iterable[Any], criteria: FilterCriteria
) -> dict[ResourceCategory, int]:
    """Per-category counts under every criterion except the category itself.

    Each count is the number of results the buyer would get by switching
    to that category with the other filters unchanged.
    """
    others = criteria.model_copy(update={"category": ALL_CATEGORIES})
    return summarize_by_category(filter_resources(catalog, others))
