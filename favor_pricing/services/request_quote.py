"""Classify a request description and price the detected service."""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any

from ..domain_models import (
    ClassificationResult,
    PriceCalculationInput,
    PriceResult,
    PricingTables,
    Urgency,
)
from ..pricing_engine import calculate_price
from ..request_classifier import analyze_request_text

logger = logging.getLogger(__name__)

# descriptions this short are not worth analyzing yet
MIN_DESCRIPTION_LENGTH = 5


@dataclass
class RequestQuote:
    classification: ClassificationResult
    quote: PriceResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "classification": self.classification.to_dict(),
            "quote": self.quote.to_dict() if self.quote else None,
        }


def quote_request_text(
    text: str,
    *,
    distance_meters: float = 0,
    scheduled_at: dt.datetime | None = None,
    urgency: Urgency | str = Urgency.NORMAL,
    is_regular: bool = False,
    regular_count: int = 0,
    tables: PricingTables | None = None,
) -> RequestQuote:
    """
    Classify a request description and, when a service was detected,
    price it with the given scheduling context.

    Returns a ``RequestQuote`` whose ``quote`` is None when the text is too
    short or no service could be detected.
    """
    if len((text or "").strip()) <= MIN_DESCRIPTION_LENGTH:
        return RequestQuote(classification=ClassificationResult())

    classification = analyze_request_text(text, tables)
    if classification.category is None or classification.subcategory is None:
        logger.debug("No service detected in request text")
        return RequestQuote(classification=classification)

    quote = calculate_price(
        PriceCalculationInput(
            category=classification.category,
            subcategory=classification.subcategory,
            distance_meters=distance_meters,
            scheduled_at=scheduled_at,
            urgency=urgency,
            is_regular=is_regular,
            regular_count=regular_count,
        ),
        tables,
    )
    return RequestQuote(classification=classification, quote=quote)


__all__ = ["MIN_DESCRIPTION_LENGTH", "RequestQuote", "quote_request_text"]
