"""Unit tests for filter selection models."""

import pytest
from pydantic import ValidationError

from beverage_menu_service.models.filter_models import (
    ALL,
    CUISINE_CATEGORIES,
    DEFAULT_FLAVOR_FILTERS,
    FULL_RANGE,
    CatalogQuery,
    FlavorDimension,
    FlavorRangeFilters,
    PriceRange,
)


@pytest.mark.unit
class TestFlavorRangeFilters:
    """Test suite for FlavorRangeFilters model."""

    def test_defaults_are_full_range(self) -> None:
        """Test that every dimension defaults to (1, 5)."""
        for dimension in FlavorDimension:
            assert DEFAULT_FLAVOR_FILTERS.range_for(dimension) == FULL_RANGE
        assert DEFAULT_FLAVOR_FILTERS.is_default is True
        assert DEFAULT_FLAVOR_FILTERS.has_active_filters is False

    def test_narrowed_dimension_is_active(self) -> None:
        """Test that narrowing one dimension activates the filters."""
        filters = FlavorRangeFilters(body=(2, 4))

        assert filters.is_default is False
        assert filters.has_active_filters is True

    @pytest.mark.parametrize("value", [(4, 2), (0, 3), (1, 6)])
    def test_invalid_ranges_rejected(self, value: tuple[int, int]) -> None:
        """Test that inverted or off-scale ranges are rejected."""
        with pytest.raises(ValidationError):
            FlavorRangeFilters(sweetness=value)

    def test_collapsed_range_allowed(self) -> None:
        """Test that min == max is a valid selection."""
        assert FlavorRangeFilters(acidity=(3, 3)).acidity == (3, 3)

    def test_with_range_returns_new_selection(self) -> None:
        """Test that with_range leaves the original untouched."""
        updated = DEFAULT_FLAVOR_FILTERS.with_range(FlavorDimension.TANNINS, (1, 2))

        assert updated.tannins == (1, 2)
        assert DEFAULT_FLAVOR_FILTERS.tannins == FULL_RANGE

    def test_filters_are_immutable(self) -> None:
        """Test that a selection cannot be edited in place."""
        with pytest.raises(ValidationError):
            DEFAULT_FLAVOR_FILTERS.body = (2, 3)  # type: ignore[misc]


@pytest.mark.unit
class TestCuisineCategories:
    """Test suite for the static cuisine taxonomy."""

    def test_all_is_first_and_has_no_keywords(self) -> None:
        """Test that the catch-all category leads the list."""
        assert CUISINE_CATEGORIES[0].id == ALL
        assert CUISINE_CATEGORIES[0].keywords == ()

    def test_ids_are_unique(self) -> None:
        """Test that category ids do not repeat."""
        ids = [category.id for category in CUISINE_CATEGORIES]
        assert len(ids) == len(set(ids)) == 11

    def test_every_category_has_keywords(self) -> None:
        """Test that every real category carries keywords."""
        assert all(category.keywords for category in CUISINE_CATEGORIES[1:])


@pytest.mark.unit
class TestCatalogQuery:
    """Test suite for catalog query model."""

    def test_defaults_match_everything(self) -> None:
        """Test default catalog query values."""
        query = CatalogQuery()

        assert query.search == ""
        assert query.category == ALL
        assert query.beverage_type == ALL
        assert query.price_range is PriceRange.ALL
        assert query.dietary_tags == []

    def test_price_bounds(self) -> None:
        """Test price bucket boundaries."""
        assert PriceRange.BUDGET.bounds == (0, 10)
        assert PriceRange.MODERATE.bounds == (10, 20)
        assert PriceRange.PREMIUM.bounds == (20, None)
