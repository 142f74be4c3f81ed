"""Read-only views over the price table for category pickers."""
from __future__ import annotations

from dataclasses import dataclass

from .domain_models import Category, PricingTables
from .state import get_pricing_tables


@dataclass(frozen=True)
class SubcategoryOption:
    key: str
    label: str
    price: int


def _category_key(category: Category | str) -> str:
    return getattr(category, "value", category)


def subcategory_options(
    category: Category | str, tables: PricingTables | None = None
) -> list[SubcategoryOption]:
    """List the services of a category in table order."""
    if tables is None:
        tables = get_pricing_tables()

    key = _category_key(category)
    names = tables.subcategory_names.get(key, {})
    return [
        SubcategoryOption(key=subcategory, label=names.get(subcategory, subcategory), price=price)
        for subcategory, price in tables.base_prices.get(key, {}).items()
    ]


def default_subcategory(
    category: Category | str, tables: PricingTables | None = None
) -> str | None:
    """Return the first service of a category, preselected when a category is picked."""
    options = subcategory_options(category, tables)
    return options[0].key if options else None


def category_summaries(tables: PricingTables | None = None) -> list[dict[str, str]]:
    if tables is None:
        tables = get_pricing_tables()

    return [
        {
            "key": category.value,
            "name": tables.category_names.get(category.value, category.value),
            "icon": tables.category_icons.get(category.value, ""),
        }
        for category in Category
    ]


__all__ = [
    "SubcategoryOption",
    "category_summaries",
    "default_subcategory",
    "subcategory_options",
]
