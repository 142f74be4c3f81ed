"""Utilities for loading pricing tables from JSON documents."""
from __future__ import annotations

import json
import math
from functools import lru_cache
from pathlib import Path
from typing import IO, Any, Mapping

from .domain_models import Category, PricingTables


class PricingTableError(Exception):
    """Raised when a pricing table document cannot be parsed or is incomplete."""


DEFAULT_TABLES_PATH = Path(__file__).resolve().parent / "data" / "default_pricing_tables.json"

REQUIRED_DIFFICULTY_LEVELS = {"normal"}
REQUIRED_DEMAND_LEVELS = {"low", "normal", "high"}
REQUIRED_ADJUSTMENTS = {
    "urgent_30min",
    "urgent_1hr",
    "night",
    "saturday",
    "sunday_holiday",
    "regular_discount",
    "regular_5plus",
}


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise PricingTableError(f"Duplicate key in pricing tables: {key!r}")
        result[key] = value
    return result


def _reject_constant(name: str) -> float:
    raise PricingTableError(f"Pricing tables must not contain {name}")


def _read_document(file_obj: IO) -> str:
    """Return the JSON text of a file opened in text or binary mode."""
    content = file_obj.read()
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PricingTableError("Pricing tables must be UTF-8 encoded") from exc


def _require_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise PricingTableError(f"'{key}' must be an object")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise PricingTableError(f"{field_name} must be an integer")
    if value < 0:
        raise PricingTableError(f"{field_name} must not be negative")
    return value


def _require_factor(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PricingTableError(f"{field_name} must be a number")
    if not math.isfinite(value) or value <= 0:
        raise PricingTableError(f"{field_name} must be a positive finite number")
    return float(value)


def _factor_table(data: Mapping[str, Any], key: str, required: set[str]) -> dict[str, float]:
    table = _require_mapping(data, key)
    missing = required - set(table)
    if missing:
        raise PricingTableError(f"'{key}' is missing: {', '.join(sorted(missing))}")
    return {name: _require_factor(value, f"{key}.{name}") for name, value in table.items()}


def validate_pricing_tables(data: Mapping[str, Any]) -> None:
    """Validate a pricing table document, raising ``PricingTableError``.

    Every category must be present with at least one subcategory, base prices
    must be non-negative integers and the multiplier tables must contain
    every key the quote engine reads.
    """

    if not isinstance(data, Mapping):
        raise PricingTableError("Pricing tables must be a JSON object")

    categories = _require_mapping(data, "categories")
    missing_categories = {category.value for category in Category} - set(categories)
    if missing_categories:
        raise PricingTableError(
            f"Pricing tables are missing categories: {', '.join(sorted(missing_categories))}"
        )
    unknown_categories = set(categories) - {category.value for category in Category}
    if unknown_categories:
        raise PricingTableError(
            f"Pricing tables contain unknown categories: {', '.join(sorted(unknown_categories))}"
        )

    for category, entry in categories.items():
        if not isinstance(entry, Mapping):
            raise PricingTableError(f"Category {category!r} must be an object")
        subcategories = entry.get("subcategories")
        if not isinstance(subcategories, Mapping) or not subcategories:
            raise PricingTableError(f"Category {category!r} needs at least one subcategory")
        for key, sub_entry in subcategories.items():
            if not isinstance(sub_entry, Mapping):
                raise PricingTableError(f"Subcategory {category}.{key} must be an object")
            _require_non_negative_int(sub_entry.get("price"), f"{category}.{key}.price")

    _factor_table(data, "difficulty_multipliers", REQUIRED_DIFFICULTY_LEVELS)
    _factor_table(data, "demand_multipliers", REQUIRED_DEMAND_LEVELS)

    adjustments = _require_mapping(data, "special_adjustments")
    missing_adjustments = REQUIRED_ADJUSTMENTS - set(adjustments)
    if missing_adjustments:
        raise PricingTableError(
            f"'special_adjustments' is missing: {', '.join(sorted(missing_adjustments))}"
        )
    for name, entry in adjustments.items():
        value = entry.get("value") if isinstance(entry, Mapping) else entry
        _require_factor(value, f"special_adjustments.{name}")

    durations = data.get("duration_multipliers", {})
    if not isinstance(durations, Mapping):
        raise PricingTableError("'duration_multipliers' must be an object")
    for minutes, factor in durations.items():
        try:
            int(minutes)
        except ValueError as exc:
            raise PricingTableError(
                f"duration_multipliers key {minutes!r} must be a number of minutes"
            ) from exc
        _require_factor(factor, f"duration_multipliers.{minutes}")

    _require_non_negative_int(data.get("distance_fee_per_500m"), "distance_fee_per_500m")
    _require_non_negative_int(data.get("fallback_base_price"), "fallback_base_price")


def pricing_tables_from_dict(data: Mapping[str, Any]) -> PricingTables:
    """Build ``PricingTables`` from a validated JSON-style document."""

    validate_pricing_tables(data)

    base_prices: dict[str, dict[str, int]] = {}
    subcategory_names: dict[str, dict[str, str]] = {}
    category_names: dict[str, str] = {}
    category_icons: dict[str, str] = {}
    for category, entry in data["categories"].items():
        category_names[category] = entry.get("name") or category
        category_icons[category] = entry.get("icon") or ""
        base_prices[category] = {}
        subcategory_names[category] = {}
        for key, sub_entry in entry["subcategories"].items():
            base_prices[category][key] = sub_entry["price"]
            subcategory_names[category][key] = sub_entry.get("name") or key

    special_adjustments: dict[str, float] = {}
    special_adjustment_labels: dict[str, str] = {}
    for name, entry in data["special_adjustments"].items():
        if isinstance(entry, Mapping):
            special_adjustments[name] = float(entry["value"])
            special_adjustment_labels[name] = entry.get("label") or name
        else:
            special_adjustments[name] = float(entry)
            special_adjustment_labels[name] = name

    return PricingTables(
        version=str(data.get("version", "")),
        base_prices=base_prices,
        category_names=category_names,
        category_icons=category_icons,
        subcategory_names=subcategory_names,
        difficulty_multipliers={
            name: float(value) for name, value in data["difficulty_multipliers"].items()
        },
        duration_multipliers={
            int(minutes): float(factor)
            for minutes, factor in data.get("duration_multipliers", {}).items()
        },
        demand_multipliers={
            name: float(value) for name, value in data["demand_multipliers"].items()
        },
        special_adjustments=special_adjustments,
        special_adjustment_labels=special_adjustment_labels,
        distance_fee_per_500m=data["distance_fee_per_500m"],
        fallback_base_price=data["fallback_base_price"],
    )


def load_pricing_tables_from_json(file_obj: IO) -> PricingTables:
    """Parse and validate a pricing table JSON document.

    ``NaN``/``Infinity`` literals and non-UTF-8 bytes are rejected.
    """

    document = _read_document(file_obj)
    try:
        data = json.loads(
            document,
            object_pairs_hook=_reject_duplicate_keys,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as exc:
        raise PricingTableError(f"Invalid pricing table JSON: {exc}") from exc

    return pricing_tables_from_dict(data)


def load_pricing_tables_from_path(path: str | Path) -> PricingTables:
    try:
        with open(path, "rb") as handle:
            return load_pricing_tables_from_json(handle)
    except OSError as exc:
        raise PricingTableError(f"Cannot read pricing tables from {path}: {exc}") from exc


@lru_cache(maxsize=1)
def load_default_pricing_tables() -> PricingTables:
    """Return the pricing tables shipped with the package (read once)."""
    return load_pricing_tables_from_path(DEFAULT_TABLES_PATH)


__all__ = [
    "DEFAULT_TABLES_PATH",
    "PricingTableError",
    "load_default_pricing_tables",
    "load_pricing_tables_from_json",
    "load_pricing_tables_from_path",
    "pricing_tables_from_dict",
    "validate_pricing_tables",
]
