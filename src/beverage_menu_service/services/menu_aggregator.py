"""Menu aggregation across the five beverage collections."""

from dataclasses import dataclass, field
from typing import Literal

from beverage_menu_service.models.beverage_models import (
    CATEGORY_TITLES,
    BeverageBase,
    BeverageCategory,
    BeverageCollections,
)
from beverage_menu_service.models.filter_models import ALL

FEATURED_PER_SOURCE = 2
FEATURED_LIMIT = 4

CategorySelection = BeverageCategory | Literal["all"]


@dataclass
class MenuSection:
    """Available items of one category.

    Attributes:
        category: The beverage category
        title: Display title of the section
        items: Items available for sale, in source order
    """

    category: BeverageCategory
    title: str
    items: list[BeverageBase]

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass
class MenuView:
    """Customer-facing projection of a restaurant's beverages.

    Attributes:
        category: Selected category toggle
        sections: One section per category, in display order
        featured: Highlights carousel items
    """

    category: CategorySelection
    sections: list[MenuSection]
    featured: list[BeverageBase] = field(default_factory=list)

    @property
    def visible_sections(self) -> list[MenuSection]:
        """Non-empty sections allowed by the category toggle."""
        return [
            section
            for section in self.sections
            if section.items and (self.category == ALL or section.category == self.category)
        ]

    @property
    def show_featured(self) -> bool:
        return self.category == ALL and bool(self.featured)

    @property
    def counts(self) -> dict[BeverageCategory, int]:
        return {section.category: section.count for section in self.sections}

    @property
    def total_count(self) -> int:
        return sum(section.count for section in self.sections)

    @property
    def is_empty(self) -> bool:
        """True only when no category has any available item."""
        return self.total_count == 0


@dataclass
class CategoryStats:
    """Inventory counts for one category."""

    total: int
    available: int
    featured: int


@dataclass
class MenuStats:
    """Inventory counts across categories plus the wine stock value."""

    categories: dict[BeverageCategory, CategoryStats]
    wine_inventory_value: float

    @property
    def total_available(self) -> int:
        return sum(stats.available for stats in self.categories.values())


def parse_category(value: str) -> CategorySelection:
    """Parse a category toggle value.

    Raises:
        ValueError: If the value is neither "all" nor a known category
    """
    if value == ALL:
        return ALL
    return BeverageCategory(value)


class MenuAggregator:
    """Builds customer menu views from raw beverage collections.

    Aggregation is a pure projection: inputs are never mutated and the same
    inputs always give the same view.
    """

    def aggregate(
        self,
        collections: BeverageCollections,
        category: CategorySelection | str = ALL,
    ) -> MenuView:
        """Build the menu view for a category toggle.

        Args:
            collections: Raw beverage collections
            category: "all" or a single category

        Returns:
            MenuView: Available-only sections, featured items and counts

        Raises:
            ValueError: If the category is unknown
        """
        selection = parse_category(category)

        sections = [
            MenuSection(
                category=beverage_category,
                title=CATEGORY_TITLES[beverage_category],
                items=[item for item in items if item.is_available_for_sale],
            )
            for beverage_category, items in collections.by_category().items()
        ]

        return MenuView(
            category=selection,
            sections=sections,
            featured=self.featured_items(collections),
        )

    def featured_items(self, collections: BeverageCollections) -> list[BeverageBase]:
        """Pick the highlights: first featured wines, then first featured cocktails."""
        wines = [w for w in collections.wines if w.is_available_for_sale and w.featured]
        cocktails = [c for c in collections.cocktails if c.is_available_for_sale and c.featured]

        featured: list[BeverageBase] = [
            *wines[:FEATURED_PER_SOURCE],
            *cocktails[:FEATURED_PER_SOURCE],
        ]
        return featured[:FEATURED_LIMIT]

    def stats(self, collections: BeverageCollections) -> MenuStats:
        """Compute inventory statistics over the raw collections.

        Args:
            collections: Raw beverage collections

        Returns:
            MenuStats: Totals, available and featured counts per category
        """
        categories: dict[BeverageCategory, CategoryStats] = {}
        for beverage_category, items in collections.by_category().items():
            available = [item for item in items if item.is_available_for_sale]
            categories[beverage_category] = CategoryStats(
                total=len(items),
                available=len(available),
                featured=sum(1 for item in available if item.featured),
            )

        wine_value = sum(wine.price * wine.quantity for wine in collections.wines)

        return MenuStats(categories=categories, wine_inventory_value=wine_value)
