import json
import logging
import math
from typing import Any, Mapping

from django.http import JsonResponse
from django.utils.dateparse import parse_datetime
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .catalog import category_summaries, subcategory_options
from .domain_models import PriceCalculationInput
from .pricing_engine import calculate_price
from .request_classifier import analyze_request_text
from .services.request_quote import quote_request_text
from .state import get_pricing_tables

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"", "0", "false", "no", "off"}


def _request_data(request) -> Mapping[str, Any]:
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError as exc:
            raise ValueError("Request body must be valid JSON.") from exc
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object.")
        return data
    if request.method == "POST":
        return request.POST
    return request.GET


def _require_str(value: Any, field_name: str) -> str:
    if value is None or str(value).strip() == "":
        raise ValueError(f"{field_name} is required.")
    return str(value).strip()


def _optional_int(value: Any, field_name: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a whole number.") from exc


def _optional_float(value: Any, field_name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a number.") from exc
    if not math.isfinite(number):
        raise ValueError(f"{field_name} must be a finite number.")
    return number


def _optional_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = "" if value is None else str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{field_name} must be true or false.")


def _optional_datetime(value: Any, field_name: str):
    if value is None or value == "":
        return None
    try:
        parsed = parse_datetime(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO 8601 datetime.") from exc
    if parsed is None:
        raise ValueError(f"{field_name} must be an ISO 8601 datetime.")
    return parsed


def _quote_context(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "distance_meters": _optional_float(data.get("distance_meters"), "Distance"),
        "scheduled_at": _optional_datetime(data.get("scheduled_at"), "Scheduled time"),
        "urgency": data.get("urgency") or "normal",
        "is_regular": _optional_bool(data.get("is_regular"), "Regular request"),
        "regular_count": _optional_int(data.get("regular_count"), "Regular count"),
    }


def _bad_request(exc: ValueError) -> JsonResponse:
    logger.info("Rejected quote request: %s", exc)
    return JsonResponse({"errors": [str(exc)]}, status=400)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def quote_view(request):
    try:
        data = _request_data(request)
        calculation = PriceCalculationInput(
            category=_require_str(data.get("category"), "Category"),
            subcategory=_require_str(data.get("subcategory"), "Subcategory"),
            **_quote_context(data),
        )
    except ValueError as exc:
        return _bad_request(exc)

    result = calculate_price(calculation)
    return JsonResponse(result.to_dict())


@csrf_exempt
@require_http_methods(["GET", "POST"])
def classify_view(request):
    try:
        data = _request_data(request)
    except ValueError as exc:
        return _bad_request(exc)

    classification = analyze_request_text(str(data.get("text") or ""))
    return JsonResponse(classification.to_dict())


@csrf_exempt
@require_http_methods(["GET", "POST"])
def request_quote_view(request):
    try:
        data = _request_data(request)
        context = _quote_context(data)
    except ValueError as exc:
        return _bad_request(exc)

    request_quote = quote_request_text(str(data.get("text") or ""), **context)
    return JsonResponse(request_quote.to_dict())


@require_http_methods(["GET"])
def catalog_view(request):
    tables = get_pricing_tables()
    categories = []
    for summary in category_summaries(tables):
        categories.append(
            {
                **summary,
                "subcategories": [
                    {"key": option.key, "label": option.label, "price": option.price}
                    for option in subcategory_options(summary["key"], tables)
                ],
            }
        )

    return JsonResponse(
        {
            "version": tables.version,
            "categories": categories,
            "special_adjustments": tables.to_dict()["special_adjustments"],
            "distance_fee_per_500m": tables.distance_fee_per_500m,
        },
        json_dumps_params={"ensure_ascii": False},
    )
