"""Core quote calculations."""
from __future__ import annotations

import datetime as dt
import logging
import math

from django.utils import timezone

from .domain_models import (
    PriceBreakdown,
    PriceCalculationInput,
    PriceResult,
    PricingTables,
    SpecialAdjustment,
    Urgency,
)
from .state import get_pricing_tables

logger = logging.getLogger(__name__)

DISTANCE_UNIT_METERS = 500
PRICE_ROUNDING_UNIT = 100

RUSH_HOURS = ((7, 9), (17, 19))  # inclusive ranges
QUIET_HOURS_START = 22
NIGHT_HOURS_START = 21
EARLY_MORNING_END = 6

REGULAR_COUNT_THRESHOLD = 5

SATURDAY = 5
SUNDAY = 6

URGENCY_ADJUSTMENTS = {
    Urgency.IMMEDIATE: "urgent_30min",
    Urgency.SOON: "urgent_1hr",
}


def _local_time(scheduled_at: dt.datetime) -> dt.datetime:
    """Read aware datetimes in the active time zone; naive ones as given."""
    if timezone.is_aware(scheduled_at):
        return timezone.localtime(scheduled_at)
    return scheduled_at


def _coerce_urgency(urgency: Urgency | str | None) -> Urgency:
    if isinstance(urgency, Urgency):
        return urgency
    if urgency is None:
        return Urgency.NORMAL
    try:
        return Urgency(urgency)
    except ValueError:
        logger.warning("Unknown urgency %r, quoting as normal", urgency)
        return Urgency.NORMAL


def lookup_base_price(tables: PricingTables, category: str, subcategory: str) -> int:
    """Return the table base price, or the fallback price for unknown pairs."""

    base_price = tables.base_price(category, subcategory)
    if base_price is None:
        logger.warning(
            "No base price for %s/%s, using fallback %s",
            category,
            subcategory,
            tables.fallback_base_price,
        )
        return tables.fallback_base_price
    return base_price


def compute_distance_fee(tables: PricingTables, distance_meters: float) -> int:
    """Charge one fee unit per full 500 m of travel.

    Missing, negative and non-finite distances are free.
    """
    if distance_meters is None or not math.isfinite(distance_meters) or distance_meters < 0:
        return 0
    increments = math.floor(distance_meters / DISTANCE_UNIT_METERS)
    return increments * tables.distance_fee_per_500m


def compute_demand_multiplier(tables: PricingTables, scheduled_at: dt.datetime | None) -> float:
    """Pick the demand factor for the hour a request is scheduled at."""

    demand = tables.demand_multipliers
    if scheduled_at is None:
        return demand["normal"]

    hour = _local_time(scheduled_at).hour
    if any(start <= hour <= end for start, end in RUSH_HOURS):
        return demand["high"]
    if hour >= QUIET_HOURS_START or hour < EARLY_MORNING_END:
        return demand["low"]
    return demand["normal"]


def collect_special_adjustments(
    tables: PricingTables,
    *,
    urgency: Urgency,
    scheduled_at: dt.datetime | None,
    is_regular: bool,
    regular_count: int,
) -> list[SpecialAdjustment]:
    """Return the triggered adjustments in their fixed evaluation order.

    Order: urgency, night, weekend, regular request, regular count.
    """

    names: list[str] = []

    if urgency in URGENCY_ADJUSTMENTS:
        names.append(URGENCY_ADJUSTMENTS[urgency])

    if scheduled_at is not None:
        local = _local_time(scheduled_at)
        if local.hour >= NIGHT_HOURS_START or local.hour < EARLY_MORNING_END:
            names.append("night")

        # public holidays are not looked up; only Sunday counts
        weekday = local.weekday()
        if weekday == SATURDAY:
            names.append("saturday")
        elif weekday == SUNDAY:
            names.append("sunday_holiday")

    if is_regular:
        names.append("regular_discount")

    if regular_count >= REGULAR_COUNT_THRESHOLD:
        names.append("regular_5plus")

    return [tables.adjustment(name) for name in names]


def round_price(raw_price: float) -> int:
    """Round half up to the nearest 100."""
    return int(math.floor(raw_price / PRICE_ROUNDING_UNIT + 0.5)) * PRICE_ROUNDING_UNIT


def calculate_price(
    calculation: PriceCalculationInput, tables: PricingTables | None = None
) -> PriceResult:
    """Compute a quote and its itemized breakdown.

    Never raises for bad input values: unknown services fall back to the
    fallback base price, and out-of-range numbers are clamped.
    """

    if tables is None:
        tables = get_pricing_tables()

    category = getattr(calculation.category, "value", calculation.category)
    urgency = _coerce_urgency(calculation.urgency)
    regular_count = max(calculation.regular_count or 0, 0)

    base_price = lookup_base_price(tables, category, calculation.subcategory)
    # no difficulty signal is collected yet, every quote uses the normal tier
    difficulty = tables.difficulty_multipliers["normal"]
    distance_fee = compute_distance_fee(tables, calculation.distance_meters)
    demand = compute_demand_multiplier(tables, calculation.scheduled_at)

    special_adjustments = collect_special_adjustments(
        tables,
        urgency=urgency,
        scheduled_at=calculation.scheduled_at,
        is_regular=bool(calculation.is_regular),
        regular_count=regular_count,
    )
    breakdown = PriceBreakdown(
        base_price=base_price,
        difficulty=difficulty,
        demand=demand,
        distance_fee=distance_fee,
        special_adjustments=special_adjustments,
    )

    raw_price = base_price * difficulty * demand * breakdown.total_multiplier
    raw_price += distance_fee
    price = round_price(raw_price)

    logger.debug(
        "Quoted %s/%s at %s (raw %.2f, %d adjustments)",
        category,
        calculation.subcategory,
        price,
        raw_price,
        len(special_adjustments),
    )

    return PriceResult(price=price, breakdown=breakdown)


__all__ = [
    "calculate_price",
    "collect_special_adjustments",
    "compute_demand_multiplier",
    "compute_distance_fee",
    "lookup_base_price",
    "round_price",
]
