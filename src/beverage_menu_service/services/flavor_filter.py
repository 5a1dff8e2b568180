"""Flavor profile range filtering for wines.

Range selections are edited through two handles per dimension. Every edit
returns a new FlavorRangeFilters; the ordering lower <= upper holds after any
single edit.
"""

import logging
from collections.abc import Iterable
from enum import Enum

from beverage_menu_service.models.beverage_models import (
    PROFILE_SCALE_MAX,
    PROFILE_SCALE_MIN,
    FlavorProfile,
    Wine,
)
from beverage_menu_service.models.filter_models import (
    DEFAULT_FLAVOR_FILTERS,
    FlavorDimension,
    FlavorRangeFilters,
)

logger = logging.getLogger(__name__)


class RangeHandle(str, Enum):
    """Which bound of a range a gesture moves."""

    LOWER = "lower"
    UPPER = "upper"


def matches_flavor_profile(profile: FlavorProfile | None, filters: FlavorRangeFilters) -> bool:
    """Check whether a flavor profile falls inside every selected range.

    Under default filters every wine matches, including wines without a
    profile or with out-of-scale values. Once any dimension is narrowed, a
    wine without a profile no longer matches.

    Args:
        profile: The wine's flavor profile, if it has one
        filters: Current range selection

    Returns:
        bool: True if all four dimensions satisfy min <= value <= max
    """
    if filters.is_default:
        return True

    if profile is None:
        return False

    for dimension in FlavorDimension:
        low, high = filters.range_for(dimension)
        value = getattr(profile, dimension.value)
        if not low <= value <= high:
            return False

    return True


def filter_wines(wines: Iterable[Wine], filters: FlavorRangeFilters) -> list[Wine]:
    """Return the wines matching the selection, preserving order."""
    return [wine for wine in wines if matches_flavor_profile(wine.flavor_profile, filters)]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def move_handle(
    filters: FlavorRangeFilters,
    dimension: FlavorDimension,
    handle: RangeHandle,
    value: int,
) -> FlavorRangeFilters:
    """Drag one handle of a range to a new position.

    The moved bound is clamped so it never crosses the other bound and never
    leaves the 1-5 scale.

    Args:
        filters: Current range selection
        dimension: Dimension being edited
        handle: Lower or upper handle
        value: Requested position

    Returns:
        FlavorRangeFilters: Updated selection
    """
    low, high = filters.range_for(dimension)

    if handle is RangeHandle.LOWER:
        updated = (_clamp(value, PROFILE_SCALE_MIN, high), high)
    else:
        updated = (low, _clamp(value, low, PROFILE_SCALE_MAX))

    return filters.with_range(dimension, updated)


def tap_point(filters: FlavorRangeFilters, dimension: FlavorDimension, point: int) -> FlavorRangeFilters:
    """Assign a tapped scale point to the nearer handle.

    Ties go to the lower handle. A point that cannot be taken by either handle
    without collapsing or inverting the range leaves the selection unchanged.

    Args:
        filters: Current range selection
        dimension: Dimension being edited
        point: Tapped point on the 1-5 scale

    Returns:
        FlavorRangeFilters: Updated selection, or the same selection on a no-op

    Raises:
        ValueError: If the point is not on the scale
    """
    if not PROFILE_SCALE_MIN <= point <= PROFILE_SCALE_MAX:
        raise ValueError(f"Tapped point must be between {PROFILE_SCALE_MIN} and {PROFILE_SCALE_MAX}")

    low, high = filters.range_for(dimension)

    if abs(point - low) <= abs(point - high) and point < high:
        return filters.with_range(dimension, (point, high))
    if point > low:
        return filters.with_range(dimension, (low, point))

    logger.debug(f"Ignoring tap on {point} for {dimension.value} range ({low}, {high})")
    return filters


def reset_filters() -> FlavorRangeFilters:
    """Return the identity selection (full range on every dimension)."""
    return DEFAULT_FLAVOR_FILTERS
