"""Cuisine matching over free-text food pairings."""

import logging
from collections.abc import Iterable, Sequence
from typing import TypeVar

from beverage_menu_service.models.beverage_models import BeverageBase
from beverage_menu_service.models.filter_models import ALL, CUISINE_CATEGORIES, CuisineCategory

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=BeverageBase)


class CuisineMatcher:
    """Matches food pairing text against a cuisine's keyword list.

    Pairing text is entered by staff or generated, so matching is a permissive
    case-insensitive substring search: "fish" also matches "swordfish".

    An unknown cuisine id matches everything unless ``strict_unknown_cuisine``
    is set, in which case it matches nothing.
    """

    def __init__(
        self,
        categories: Sequence[CuisineCategory] = CUISINE_CATEGORIES,
        strict_unknown_cuisine: bool = False,
    ) -> None:
        """Initialize the matcher.

        Args:
            categories: Cuisine taxonomy to match against
            strict_unknown_cuisine: Treat unknown cuisine ids as matching nothing
        """
        self.categories = tuple(categories)
        self.strict_unknown_cuisine = strict_unknown_cuisine
        self._by_id = {category.id: category for category in self.categories}

    def get_category(self, cuisine_id: str) -> CuisineCategory | None:
        return self._by_id.get(cuisine_id)

    def list_categories(self) -> list[CuisineCategory]:
        return list(self.categories)

    def matches(self, food_pairings: Sequence[str], cuisine_id: str) -> bool:
        """Check whether any cuisine keyword appears in the food pairings.

        Args:
            food_pairings: Free-text pairing entries of an item
            cuisine_id: Selected cuisine category id

        Returns:
            bool: True on a keyword hit, for "all", or for unknown ids in
            permissive mode
        """
        if cuisine_id == ALL:
            return True

        cuisine = self._by_id.get(cuisine_id)
        if cuisine is None:
            logger.debug(f"Unknown cuisine id '{cuisine_id}', strict={self.strict_unknown_cuisine}")
            return not self.strict_unknown_cuisine

        text = " ".join(pairing.lower() for pairing in food_pairings)
        return any(keyword.lower() in text for keyword in cuisine.keywords)

    def filter_items(self, items: Iterable[B], cuisine_id: str) -> list[B]:
        """Return the items whose pairings match the cuisine, preserving order."""
        return [item for item in items if self.matches(item.pairing_terms, cuisine_id)]
