"""Owner catalog search across every beverage, in stock or not."""

from dataclasses import dataclass

from beverage_menu_service.models.beverage_models import (
    Beer,
    BeverageBase,
    BeverageCategory,
    BeverageCollections,
    Cocktail,
    NonAlcoholicBeverage,
    Spirit,
    Wine,
)
from beverage_menu_service.models.filter_models import ALL, CatalogQuery, PriceRange


@dataclass
class CatalogEntry:
    """One searchable catalog row.

    Attributes:
        id: Beverage identifier
        category: Beverage category
        name: Display name
        item: The beverage itself
        search_text: Lowercased text the search box matches against
    """

    id: str
    category: BeverageCategory
    name: str
    item: BeverageBase
    search_text: str


def _search_text(item: BeverageBase) -> str:
    if isinstance(item, Wine):
        parts = [item.name, item.producer, item.region, item.grape, item.type]
    elif isinstance(item, Beer):
        parts = [item.name, item.brewery, item.style, item.type]
    elif isinstance(item, Spirit):
        parts = [item.name, item.brand, item.origin, item.type]
    elif isinstance(item, Cocktail):
        parts = [item.name, item.base_spirit, item.type, " ".join(item.ingredients)]
    elif isinstance(item, NonAlcoholicBeverage):
        parts = [item.name, item.brand or "", item.type]
    else:
        parts = [item.name]
    return " ".join(parts).lower()


def build_catalog(collections: BeverageCollections) -> list[CatalogEntry]:
    """Flatten the collections into catalog entries, in display order."""
    entries = []
    for category, items in collections.by_category().items():
        for item in items:
            entries.append(
                CatalogEntry(
                    id=item.id,
                    category=category,
                    name=item.name,
                    item=item,
                    search_text=_search_text(item),
                )
            )
    return entries


def _in_price_range(price: float, price_range: PriceRange) -> bool:
    low, high = price_range.bounds
    return price >= low and (high is None or price < high)


def _matches(entry: CatalogEntry, query: CatalogQuery) -> bool:
    if query.search and query.search.lower() not in entry.search_text:
        return False

    if query.category != ALL and entry.category != query.category:
        return False

    # Type only narrows within a selected category
    if query.category != ALL and query.beverage_type != ALL:
        if getattr(entry.item, "type", None) != query.beverage_type:
            return False

    if not _in_price_range(entry.item.price, query.price_range):
        return False

    return all(tag in entry.item.dietary_tags for tag in query.dietary_tags)


def search_catalog(collections: BeverageCollections, query: CatalogQuery) -> list[CatalogEntry]:
    """Search the full catalog.

    Args:
        collections: Raw beverage collections
        query: Search text and filter selection

    Returns:
        list: Matching entries (empty list if none match)
    """
    return [entry for entry in build_catalog(collections) if _matches(entry, query)]
