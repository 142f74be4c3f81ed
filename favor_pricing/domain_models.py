"""Domain models for favor quotes."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class Category(str, Enum):
    CHILDCARE = "childcare"
    HOUSEWORK = "housework"
    ERRAND = "errand"
    DIGITAL_HELP = "digital_help"
    MOBILITY = "mobility"
    PHYSICAL_HELP = "physical_help"
    HEALTH = "health"
    MEMORY = "memory"
    CONSULTATION = "consultation"


class Urgency(str, Enum):
    IMMEDIATE = "immediate"  # within 30 minutes
    SOON = "soon"  # within an hour
    NORMAL = "normal"


@dataclass
class PriceCalculationInput:
    category: Category | str
    subcategory: str
    distance_meters: float = 0
    scheduled_at: dt.datetime | None = None
    urgency: Urgency | str = Urgency.NORMAL
    is_regular: bool = False
    regular_count: int = 0


@dataclass(frozen=True)
class SpecialAdjustment:
    name: str
    value: float
    label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "label": self.label or self.name}


@dataclass
class PriceBreakdown:
    base_price: int
    difficulty: float
    demand: float
    distance_fee: int
    special_adjustments: list[SpecialAdjustment] = field(default_factory=list)

    @property
    def total_multiplier(self) -> float:
        total = 1.0
        for adjustment in self.special_adjustments:
            total *= adjustment.value
        return total

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_price": self.base_price,
            "difficulty": self.difficulty,
            "demand": self.demand,
            "distance_fee": self.distance_fee,
            "special_adjustments": [adj.to_dict() for adj in self.special_adjustments],
        }


@dataclass
class PriceResult:
    price: int
    breakdown: PriceBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {"price": self.price, "breakdown": self.breakdown.to_dict()}


@dataclass(frozen=True)
class ClassificationResult:
    category: Category | None = None
    subcategory: str | None = None
    estimated_duration: int | None = None  # minutes

    @property
    def is_empty(self) -> bool:
        return self.category is None and self.subcategory is None

    def to_dict(self) -> dict[str, Any]:
        if self.is_empty:
            return {}
        return {
            "category": self.category.value if self.category else None,
            "subcategory": self.subcategory,
            "estimated_duration": self.estimated_duration,
        }


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(
        {key: _freeze(value) if isinstance(value, Mapping) else value for key, value in mapping.items()}
    )


@dataclass(frozen=True)
class PricingTables:
    """Price table plus the adjustment tables the quote engine reads.

    Instances are read-only: nested mappings are wrapped in
    ``MappingProxyType`` on construction.
    """

    version: str
    base_prices: Mapping[str, Mapping[str, int]]
    category_names: Mapping[str, str]
    category_icons: Mapping[str, str]
    subcategory_names: Mapping[str, Mapping[str, str]]
    difficulty_multipliers: Mapping[str, float]
    duration_multipliers: Mapping[int, float]
    demand_multipliers: Mapping[str, float]
    special_adjustments: Mapping[str, float]
    special_adjustment_labels: Mapping[str, str]
    distance_fee_per_500m: int
    fallback_base_price: int

    def __post_init__(self) -> None:
        for name in (
            "base_prices",
            "category_names",
            "category_icons",
            "subcategory_names",
            "difficulty_multipliers",
            "duration_multipliers",
            "demand_multipliers",
            "special_adjustments",
            "special_adjustment_labels",
        ):
            object.__setattr__(self, name, _freeze(getattr(self, name)))

    def base_price(self, category: str, subcategory: str) -> int | None:
        """Return the base price for a pair, or None if the table has no entry."""
        return self.base_prices.get(category, {}).get(subcategory)

    def categories_for_subcategory(self, subcategory: str) -> tuple[str, ...]:
        return tuple(
            category for category, prices in self.base_prices.items() if subcategory in prices
        )

    def adjustment(self, name: str) -> SpecialAdjustment:
        return SpecialAdjustment(
            name=name,
            value=self.special_adjustments[name],
            label=self.special_adjustment_labels.get(name, name),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable document these tables were built from."""
        categories: dict[str, Any] = {}
        for category, prices in self.base_prices.items():
            names = self.subcategory_names.get(category, {})
            categories[category] = {
                "name": self.category_names.get(category, category),
                "icon": self.category_icons.get(category, ""),
                "subcategories": {
                    key: {"price": price, "name": names.get(key, key)}
                    for key, price in prices.items()
                },
            }

        return {
            "version": self.version,
            "fallback_base_price": self.fallback_base_price,
            "distance_fee_per_500m": self.distance_fee_per_500m,
            "categories": categories,
            "difficulty_multipliers": dict(self.difficulty_multipliers),
            "duration_multipliers": {
                str(minutes): factor for minutes, factor in self.duration_multipliers.items()
            },
            "demand_multipliers": dict(self.demand_multipliers),
            "special_adjustments": {
                name: {"value": value, "label": self.special_adjustment_labels.get(name, name)}
                for name, value in self.special_adjustments.items()
            },
        }
