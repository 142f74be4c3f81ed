"""Keyword classifier mapping free-form request text to a service."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .domain_models import Category, ClassificationResult, PricingTables
from .state import get_pricing_tables

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]


def contains_any(*keywords: str) -> Predicate:
    return lambda text: any(keyword in text for keyword in keywords)


def contains_all(*keywords: str) -> Predicate:
    return lambda text: all(keyword in text for keyword in keywords)


def both(*predicates: Predicate) -> Predicate:
    return lambda text: all(predicate(text) for predicate in predicates)


@dataclass(frozen=True)
class KeywordRule:
    matches: Predicate
    subcategory: str
    estimated_duration: int  # minutes
    # only for subcategories listed under more than one category
    category: Category | None = None


_DAYCARE = contains_any("어린이집", "등원", "하원")
_WATCHING = contains_any("놀이터", "봐주", "돌봄")
_SIDE_DISH = contains_any("반찬")
_ADVICE = contains_any("상담", "조언")

# First match wins. Refinements of one keyword group are listed as
# consecutive rules sharing the group predicate, so a group whose
# refinements all miss falls through to the groups after it.
REQUEST_RULES: tuple[KeywordRule, ...] = (
    # childcare
    KeywordRule(both(_DAYCARE, contains_any("대기")), "pickup_wait", 5),
    KeywordRule(both(_DAYCARE, contains_any("데려다", "등원")), "dropoff", 15),
    KeywordRule(both(_DAYCARE, contains_any("데려오", "하원")), "pickup", 15),
    KeywordRule(both(_WATCHING, contains_any("30분")), "playground_watch", 30),
    KeywordRule(both(_WATCHING, contains_any("1시간", "한시간")), "home_care_1hr", 60),
    KeywordRule(_WATCHING, "home_care_30min", 30),
    KeywordRule(contains_any("숙제"), "homework_help", 30),
    # housework
    KeywordRule(both(_SIDE_DISH, contains_any("3", "세트")), "side_dish_3", 60),
    KeywordRule(_SIDE_DISH, "side_dish_1", 30),
    KeywordRule(contains_any("청소"), "cleaning_30min", 30),
    KeywordRule(contains_any("빨래", "개키"), "laundry_fold", 15),
    # errands
    KeywordRule(contains_any("택배"), "package_receive", 5),
    KeywordRule(contains_any("분리수거"), "recycling", 10),
    KeywordRule(contains_any("편의점", "사오"), "convenience_store", 15),
    KeywordRule(contains_any("장보기", "마트"), "grocery_shopping", 60),
    # digital help
    KeywordRule(both(contains_any("앱"), contains_any("설치", "설명")), "app_install", 10),
    KeywordRule(contains_any("카카오", "카톡"), "kakaotalk", 15),
    KeywordRule(contains_any("키오스크", "무인"), "kiosk_help", 10),
    KeywordRule(contains_any("스마트폰", "핸드폰"), "phone_setup", 30),
    # mobility
    KeywordRule(
        contains_all("병원", "동행"), "hospital_accompany", 120, category=Category.MOBILITY
    ),
    KeywordRule(contains_all("은행", "동행"), "bank_accompany", 60),
    # physical help
    KeywordRule(contains_any("짐", "옮기"), "heavy_item_1", 10),
    KeywordRule(contains_any("가구"), "furniture_move", 30),
    # consultation
    KeywordRule(both(_ADVICE, contains_any("진로", "커리어")), "career_15min", 15),
    KeywordRule(_ADVICE, "quick_advice", 5),
    KeywordRule(contains_any("이력서", "자소서"), "resume_review", 30),
)


def resolve_category(rule: KeywordRule, tables: PricingTables) -> Category | None:
    """Derive a rule's category from the price table, or None if it is ambiguous."""

    categories = tables.categories_for_subcategory(rule.subcategory)
    if rule.category is not None:
        return rule.category if rule.category.value in categories else None
    if len(categories) != 1:
        return None
    return Category(categories[0])


def analyze_request_text(
    text: str, tables: PricingTables | None = None
) -> ClassificationResult:
    """Guess the requested service from free-form text.

    Returns an empty result when no rule matches.
    """

    if tables is None:
        tables = get_pricing_tables()

    lowered = (text or "").lower()
    for rule in REQUEST_RULES:
        if not rule.matches(lowered):
            continue

        category = resolve_category(rule, tables)
        if category is None:
            logger.warning(
                "Skipping rule for %r: subcategory does not map to one category",
                rule.subcategory,
            )
            continue

        logger.debug("Classified request text as %s/%s", category.value, rule.subcategory)
        return ClassificationResult(
            category=category,
            subcategory=rule.subcategory,
            estimated_duration=rule.estimated_duration,
        )

    return ClassificationResult()


__all__ = [
    "KeywordRule",
    "REQUEST_RULES",
    "analyze_request_text",
    "contains_all",
    "contains_any",
    "resolve_category",
]
