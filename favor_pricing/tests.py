import datetime as dt
import io
import json
import math

from django.test import TestCase
from django.urls import reverse

from .catalog import category_summaries, default_subcategory, subcategory_options
from .domain_models import Category, ClassificationResult, PriceCalculationInput, Urgency
from .pricing_engine import calculate_price, round_price
from .request_classifier import analyze_request_text
from .services.request_quote import quote_request_text
from .state import get_pricing_tables, install_pricing_tables, reset_pricing_tables
from .table_loader import (
    PricingTableError,
    load_default_pricing_tables,
    load_pricing_tables_from_json,
    pricing_tables_from_dict,
)

# 2026-10-17 is a Saturday
SATURDAY_NIGHT = dt.datetime(2026, 10, 17, 23, 0)
SUNDAY_MORNING = dt.datetime(2026, 10, 18, 10, 0)
MONDAY_RUSH_HOUR = dt.datetime(2026, 10, 19, 8, 0)
MONDAY_NOON = dt.datetime(2026, 10, 19, 12, 0)


def _adjustment_names(result):
    return [adjustment.name for adjustment in result.breakdown.special_adjustments]


class PricingTableLoaderTests(TestCase):
    def test_default_tables_cover_every_category(self):
        tables = load_default_pricing_tables()

        self.assertEqual(set(tables.base_prices), {category.value for category in Category})
        for category, prices in tables.base_prices.items():
            self.assertTrue(prices, f"{category} has no subcategories")
        self.assertEqual(tables.base_price("childcare", "dropoff"), 1000)
        self.assertEqual(tables.fallback_base_price, 1000)
        self.assertEqual(tables.distance_fee_per_500m, 100)
        self.assertEqual(tables.special_adjustments["urgent_30min"], 1.3)
        self.assertEqual(tables.special_adjustment_labels["night"], "야간 할증")

    def test_tables_are_read_only(self):
        tables = load_default_pricing_tables()

        with self.assertRaises(TypeError):
            tables.base_prices["childcare"]["dropoff"] = 0  # type: ignore[index]

    def test_document_survives_serialization(self):
        tables = load_default_pricing_tables()

        rebuilt = pricing_tables_from_dict(json.loads(json.dumps(tables.to_dict())))

        self.assertEqual(rebuilt, tables)

    def test_load_from_bytes_stream(self):
        document = json.dumps(load_default_pricing_tables().to_dict()).encode("utf-8")

        tables = load_pricing_tables_from_json(io.BytesIO(document))

        self.assertEqual(tables.base_price("errand", "recycling"), 400)

    def test_duplicate_subcategory_is_rejected(self):
        document = json.dumps(load_default_pricing_tables().to_dict())
        duplicated = document.replace(
            '"pickup": {"price": 1000',
            '"dropoff": {"price": 1, "name": "x"}, "pickup": {"price": 1000',
        )

        with self.assertRaises(PricingTableError):
            load_pricing_tables_from_json(io.StringIO(duplicated))

    def test_missing_category_is_rejected(self):
        data = load_default_pricing_tables().to_dict()
        del data["categories"]["memory"]

        with self.assertRaisesMessage(PricingTableError, "memory"):
            pricing_tables_from_dict(data)

    def test_empty_category_is_rejected(self):
        data = load_default_pricing_tables().to_dict()
        data["categories"]["health"]["subcategories"] = {}

        with self.assertRaises(PricingTableError):
            pricing_tables_from_dict(data)

    def test_negative_price_is_rejected(self):
        data = load_default_pricing_tables().to_dict()
        data["categories"]["errand"]["subcategories"]["recycling"]["price"] = -400

        with self.assertRaises(PricingTableError):
            pricing_tables_from_dict(data)

    def test_missing_adjustment_is_rejected(self):
        data = load_default_pricing_tables().to_dict()
        del data["special_adjustments"]["night"]

        with self.assertRaisesMessage(PricingTableError, "night"):
            pricing_tables_from_dict(data)

    def test_invalid_json_is_rejected(self):
        with self.assertRaises(PricingTableError):
            load_pricing_tables_from_json(io.StringIO("{not json"))

    def test_non_finite_factor_is_rejected(self):
        data = load_default_pricing_tables().to_dict()
        data["special_adjustments"]["night"]["value"] = float("nan")
        document = json.dumps(data)
        self.assertIn("NaN", document)

        with self.assertRaises(PricingTableError):
            load_pricing_tables_from_json(io.StringIO(document))

    def test_infinite_factor_is_rejected(self):
        data = load_default_pricing_tables().to_dict()
        data["demand_multipliers"]["high"] = float("inf")

        with self.assertRaises(PricingTableError):
            pricing_tables_from_dict(data)

    def test_non_utf8_document_is_rejected(self):
        with self.assertRaises(PricingTableError):
            load_pricing_tables_from_json(io.BytesIO(b'{"version": "\xff"}'))


class PricingEngineTests(TestCase):
    def setUp(self):
        self.tables = load_default_pricing_tables()

    def test_plain_quote_for_every_service(self):
        for category, prices in self.tables.base_prices.items():
            for subcategory, base_price in prices.items():
                result = calculate_price(
                    PriceCalculationInput(category=category, subcategory=subcategory),
                    self.tables,
                )

                expected = math.floor(base_price * 1.5 / 100 + 0.5) * 100
                self.assertEqual(result.price, expected, f"{category}/{subcategory}")
                self.assertEqual(result.breakdown.base_price, base_price)
                self.assertEqual(result.breakdown.difficulty, 1.5)
                self.assertEqual(result.breakdown.demand, 1.0)
                self.assertEqual(result.breakdown.distance_fee, 0)
                self.assertEqual(result.breakdown.special_adjustments, [])

    def test_identical_inputs_give_identical_quotes(self):
        calculation = PriceCalculationInput(
            category=Category.HOUSEWORK,
            subcategory="side_dish_3",
            distance_meters=1700,
            scheduled_at=SUNDAY_MORNING,
            urgency=Urgency.SOON,
        )

        self.assertEqual(
            calculate_price(calculation, self.tables), calculate_price(calculation, self.tables)
        )

    def test_each_full_500m_adds_one_fee(self):
        prices = [
            calculate_price(
                PriceCalculationInput(
                    category=Category.CHILDCARE, subcategory="dropoff", distance_meters=meters
                ),
                self.tables,
            ).price
            for meters in (0, 499, 500, 999, 1000, 1500)
        ]

        self.assertEqual(prices, [1500, 1500, 1600, 1600, 1700, 1800])

    def test_negative_distance_is_free(self):
        result = calculate_price(
            PriceCalculationInput(
                category=Category.CHILDCARE, subcategory="dropoff", distance_meters=-800
            ),
            self.tables,
        )

        self.assertEqual(result.breakdown.distance_fee, 0)

    def test_adjustments_stack_in_order(self):
        result = calculate_price(
            PriceCalculationInput(
                category=Category.CHILDCARE,
                subcategory="dropoff",
                scheduled_at=SATURDAY_NIGHT,
                urgency=Urgency.IMMEDIATE,
                is_regular=True,
            ),
            self.tables,
        )

        self.assertEqual(
            _adjustment_names(result),
            ["urgent_30min", "night", "saturday", "regular_discount"],
        )
        self.assertEqual(result.breakdown.demand, 0.9)
        expected = round_price(1000 * 1.5 * 0.9 * 1.3 * 1.2 * 1.1 * 0.85)
        self.assertEqual(result.price, expected)

    def test_sunday_and_loyalty_discounts(self):
        result = calculate_price(
            PriceCalculationInput(
                category="mobility",
                subcategory="bank_accompany",
                scheduled_at=SUNDAY_MORNING,
                regular_count=5,
            ),
            self.tables,
        )

        self.assertEqual(_adjustment_names(result), ["sunday_holiday", "regular_5plus"])
        self.assertEqual(result.breakdown.demand, 1.0)

    def test_regular_count_below_threshold_gives_no_discount(self):
        result = calculate_price(
            PriceCalculationInput(category="errand", subcategory="recycling", regular_count=4),
            self.tables,
        )

        self.assertEqual(result.breakdown.special_adjustments, [])

    def test_soon_urgency(self):
        result = calculate_price(
            PriceCalculationInput(category="errand", subcategory="recycling", urgency="soon"),
            self.tables,
        )

        self.assertEqual(_adjustment_names(result), ["urgent_1hr"])
        self.assertEqual(result.breakdown.special_adjustments[0].label, "긴급 (1시간 내)")

    def test_non_finite_distance_is_free(self):
        for distance in (float("nan"), float("inf"), float("-inf")):
            result = calculate_price(
                PriceCalculationInput(
                    category=Category.CHILDCARE, subcategory="dropoff", distance_meters=distance
                ),
                self.tables,
            )

            self.assertEqual(result.breakdown.distance_fee, 0, distance)
            self.assertEqual(result.price, 1500, distance)

    def test_missing_urgency_is_normal_without_warning(self):
        with self.assertNoLogs("favor_pricing.pricing_engine", level="WARNING"):
            result = calculate_price(
                PriceCalculationInput(category="errand", subcategory="recycling", urgency=None),
                self.tables,
            )

        self.assertEqual(result.breakdown.special_adjustments, [])

    def test_unknown_urgency_is_normal(self):
        with self.assertLogs("favor_pricing.pricing_engine", level="WARNING"):
            result = calculate_price(
                PriceCalculationInput(
                    category="errand", subcategory="recycling", urgency="whenever"
                ),
                self.tables,
            )

        self.assertEqual(result.breakdown.special_adjustments, [])

    def test_demand_follows_the_hour(self):
        cases = {
            MONDAY_RUSH_HOUR: 1.2,
            MONDAY_NOON: 1.0,
            MONDAY_NOON.replace(hour=17): 1.2,
            MONDAY_NOON.replace(hour=19): 1.2,
            MONDAY_NOON.replace(hour=20): 1.0,
            MONDAY_NOON.replace(hour=21): 1.0,
            MONDAY_NOON.replace(hour=22): 0.9,
            MONDAY_NOON.replace(hour=5): 0.9,
            MONDAY_NOON.replace(hour=6): 1.0,
        }
        for scheduled_at, expected in cases.items():
            result = calculate_price(
                PriceCalculationInput(
                    category="errand", subcategory="recycling", scheduled_at=scheduled_at
                ),
                self.tables,
            )
            self.assertEqual(result.breakdown.demand, expected, scheduled_at)

    def test_night_starts_at_nine(self):
        at_nine = calculate_price(
            PriceCalculationInput(
                category="errand",
                subcategory="recycling",
                scheduled_at=MONDAY_NOON.replace(hour=21),
            ),
            self.tables,
        )
        before_six = calculate_price(
            PriceCalculationInput(
                category="errand",
                subcategory="recycling",
                scheduled_at=MONDAY_NOON.replace(hour=5),
            ),
            self.tables,
        )

        self.assertEqual(_adjustment_names(at_nine), ["night"])
        self.assertEqual(_adjustment_names(before_six), ["night"])

    def test_aware_datetimes_use_local_time(self):
        # 23:00 UTC on Monday is 08:00 on Tuesday in Seoul
        scheduled_at = dt.datetime(2026, 10, 19, 23, 0, tzinfo=dt.timezone.utc)

        result = calculate_price(
            PriceCalculationInput(
                category="childcare", subcategory="dropoff", scheduled_at=scheduled_at
            ),
            self.tables,
        )

        self.assertEqual(result.breakdown.demand, 1.2)
        self.assertEqual(result.breakdown.special_adjustments, [])

    def test_unknown_service_uses_fallback_price(self):
        with self.assertLogs("favor_pricing.pricing_engine", level="WARNING"):
            unknown_subcategory = calculate_price(
                PriceCalculationInput(category="childcare", subcategory="nonexistent_xyz"),
                self.tables,
            )
        with self.assertLogs("favor_pricing.pricing_engine", level="WARNING"):
            unknown_category = calculate_price(
                PriceCalculationInput(category="gardening", subcategory="dropoff"),
                self.tables,
            )

        self.assertEqual(unknown_subcategory.breakdown.base_price, 1000)
        self.assertEqual(unknown_category.breakdown.base_price, 1000)
        self.assertEqual(unknown_subcategory.price, 1500)

    def test_rounds_half_up(self):
        result = calculate_price(
            PriceCalculationInput(category="childcare", subcategory="pickup_wait"), self.tables
        )

        # 500 * 1.5 = 750
        self.assertEqual(result.price, 800)
        self.assertEqual(round_price(649.99), 600)
        self.assertEqual(round_price(650), 700)

    def test_result_serializes_to_plain_data(self):
        result = calculate_price(
            PriceCalculationInput(
                category="childcare",
                subcategory="dropoff",
                urgency="immediate",
                distance_meters=500,
            ),
            self.tables,
        )

        self.assertEqual(
            result.to_dict(),
            {
                "price": 2100,
                "breakdown": {
                    "base_price": 1000,
                    "difficulty": 1.5,
                    "demand": 1.0,
                    "distance_fee": 100,
                    "special_adjustments": [
                        {"name": "urgent_30min", "value": 1.3, "label": "긴급 (30분 내)"}
                    ],
                },
            },
        )


class RequestClassifierTests(TestCase):
    def test_daycare_dropoff(self):
        result = analyze_request_text("어린이집 등원 데려다줄 분 찾아요")

        self.assertEqual(
            result,
            ClassificationResult(
                category=Category.CHILDCARE, subcategory="dropoff", estimated_duration=15
            ),
        )

    def test_daycare_waiting_wins_over_dropoff(self):
        result = analyze_request_text("하원 시간에 어린이집 앞에서 대기해주세요")

        self.assertEqual(result.subcategory, "pickup_wait")
        self.assertEqual(result.estimated_duration, 5)

    def test_daycare_pickup(self):
        result = analyze_request_text("어린이집에서 아이 데려오기")

        self.assertEqual(result.subcategory, "pickup")

    def test_daycare_without_refinement_falls_through(self):
        result = analyze_request_text("어린이집 끝나고 놀이터에서 30분만")

        self.assertEqual(result.subcategory, "playground_watch")
        self.assertEqual(result.estimated_duration, 30)

    def test_watching_variants(self):
        self.assertEqual(analyze_request_text("아이 한시간 봐주세요").subcategory, "home_care_1hr")
        self.assertEqual(analyze_request_text("저녁에 돌봄 부탁해요").subcategory, "home_care_30min")

    def test_side_dish_set(self):
        result = analyze_request_text("반찬 3가지 부탁드려요")

        self.assertEqual(result.to_dict(), {
            "category": "housework",
            "subcategory": "side_dish_3",
            "estimated_duration": 60,
        })

    def test_single_side_dish(self):
        self.assertEqual(analyze_request_text("반찬 하나만 해주세요").subcategory, "side_dish_1")

    def test_unmatched_text_gives_empty_result(self):
        result = analyze_request_text("그냥 아무 말")

        self.assertTrue(result.is_empty)
        self.assertIsNone(result.estimated_duration)
        self.assertEqual(result.to_dict(), {})

    def test_empty_text(self):
        self.assertTrue(analyze_request_text("").is_empty)

    def test_first_rule_wins(self):
        self.assertEqual(analyze_request_text("택배 받고 분리수거도").subcategory, "package_receive")

    def test_app_needs_install_or_explanation(self):
        self.assertEqual(analyze_request_text("앱 설치 도와주세요").subcategory, "app_install")
        self.assertTrue(analyze_request_text("앱이 안 열려요").is_empty)

    def test_hospital_accompany_is_mobility(self):
        result = analyze_request_text("병원 동행 해주실 분")

        self.assertEqual(result.category, Category.MOBILITY)
        self.assertEqual(result.subcategory, "hospital_accompany")
        self.assertEqual(result.estimated_duration, 120)

    def test_hospital_without_accompany_is_unmatched(self):
        self.assertTrue(analyze_request_text("병원 예약 대신").is_empty)

    def test_advice_variants(self):
        self.assertEqual(analyze_request_text("커리어 상담 받고 싶어요").subcategory, "career_15min")
        self.assertEqual(analyze_request_text("짧게 조언 부탁").subcategory, "quick_advice")
        self.assertEqual(analyze_request_text("자소서 첨삭 부탁").subcategory, "resume_review")
        self.assertEqual(analyze_request_text("이력서 피드백").subcategory, "resume_review")

    def test_one_text_per_rule(self):
        cases = [
            ("어린이집 하원 대기", Category.CHILDCARE, "pickup_wait", 5),
            ("등원 데려다주세요", Category.CHILDCARE, "dropoff", 15),
            ("하원 데려오기", Category.CHILDCARE, "pickup", 15),
            ("놀이터에서 30분 봐주세요", Category.CHILDCARE, "playground_watch", 30),
            ("아이 1시간 돌봄", Category.CHILDCARE, "home_care_1hr", 60),
            ("아이 돌봄 부탁", Category.CHILDCARE, "home_care_30min", 30),
            ("아이 숙제 도와주세요", Category.CHILDCARE, "homework_help", 30),
            ("반찬 세트 주문", Category.HOUSEWORK, "side_dish_3", 60),
            ("반찬 하나", Category.HOUSEWORK, "side_dish_1", 30),
            ("거실 청소 부탁드려요", Category.HOUSEWORK, "cleaning_30min", 30),
            ("빨래 개켜주실 분", Category.HOUSEWORK, "laundry_fold", 15),
            ("택배 대신 받아주세요", Category.ERRAND, "package_receive", 5),
            ("분리수거 해주세요", Category.ERRAND, "recycling", 10),
            ("편의점에서 우유 사오기", Category.ERRAND, "convenience_store", 15),
            ("마트 장보기 대신", Category.ERRAND, "grocery_shopping", 60),
            ("앱 설명 부탁", Category.DIGITAL_HELP, "app_install", 10),
            ("카톡 사진 보내는 법", Category.DIGITAL_HELP, "kakaotalk", 15),
            ("무인 키오스크 주문이 어려워요", Category.DIGITAL_HELP, "kiosk_help", 10),
            ("새 핸드폰 세팅", Category.DIGITAL_HELP, "phone_setup", 30),
            ("병원 동행", Category.MOBILITY, "hospital_accompany", 120),
            ("은행 업무 동행해주세요", Category.MOBILITY, "bank_accompany", 60),
            ("무거운 짐 옮기기", Category.PHYSICAL_HELP, "heavy_item_1", 10),
            ("가구 조립 부탁", Category.PHYSICAL_HELP, "furniture_move", 30),
            ("진로 상담", Category.CONSULTATION, "career_15min", 15),
            ("간단한 조언", Category.CONSULTATION, "quick_advice", 5),
            ("이력서 첨삭", Category.CONSULTATION, "resume_review", 30),
            # earlier rules win
            ("짐 옮기고 가구도", Category.PHYSICAL_HELP, "heavy_item_1", 10),
            ("청소하고 빨래도", Category.HOUSEWORK, "cleaning_30min", 30),
        ]
        for text, category, subcategory, duration in cases:
            with self.subTest(text=text):
                self.assertEqual(
                    analyze_request_text(text),
                    ClassificationResult(
                        category=category, subcategory=subcategory, estimated_duration=duration
                    ),
                )

    def test_rule_missing_from_tables_is_skipped(self):
        data = load_default_pricing_tables().to_dict()
        del data["categories"]["mobility"]["subcategories"]["bank_accompany"]
        tables = pricing_tables_from_dict(data)

        with self.assertLogs("favor_pricing.request_classifier", level="WARNING"):
            result = analyze_request_text("은행 동행 부탁드립니다", tables)

        self.assertTrue(result.is_empty)


class CatalogTests(TestCase):
    def test_subcategory_options_keep_table_order(self):
        options = subcategory_options(Category.CHILDCARE)

        self.assertEqual(options[0].key, "pickup_wait")
        self.assertEqual(options[0].label, "픽업 대기 (5분)")
        self.assertEqual(options[0].price, 500)
        self.assertEqual(len(options), 9)

    def test_unknown_category_has_no_options(self):
        self.assertEqual(subcategory_options("gardening"), [])
        self.assertIsNone(default_subcategory("gardening"))

    def test_default_subcategory_is_first_option(self):
        self.assertEqual(default_subcategory("errand"), "package_receive")

    def test_category_summaries(self):
        summaries = category_summaries()

        self.assertEqual(len(summaries), 9)
        self.assertEqual(summaries[0], {"key": "childcare", "name": "육아/돌봄", "icon": "👶"})


class ActiveTablesTests(TestCase):
    def tearDown(self):
        reset_pricing_tables()

    def test_installed_tables_drive_quotes(self):
        data = load_default_pricing_tables().to_dict()
        data["version"] = "test"
        data["categories"]["childcare"]["subcategories"]["dropoff"]["price"] = 2000
        install_pricing_tables(pricing_tables_from_dict(data))

        result = calculate_price(PriceCalculationInput(category="childcare", subcategory="dropoff"))

        self.assertEqual(get_pricing_tables().version, "test")
        self.assertEqual(result.price, 3000)

    def test_reset_restores_defaults(self):
        reset_pricing_tables()

        self.assertEqual(get_pricing_tables(), load_default_pricing_tables())


class RequestQuoteTests(TestCase):
    def test_text_is_classified_then_priced(self):
        scheduled_at = MONDAY_RUSH_HOUR

        request_quote = quote_request_text(
            "내일 아침 8시에 아이 어린이집 데려다줄 분 찾아요",
            scheduled_at=scheduled_at,
            urgency="normal",
            distance_meters=1200,
        )

        self.assertEqual(request_quote.classification.category, Category.CHILDCARE)
        self.assertEqual(request_quote.classification.subcategory, "dropoff")
        breakdown = request_quote.quote.breakdown
        self.assertEqual(breakdown.demand, 1.2)
        self.assertEqual(breakdown.distance_fee, 200)
        self.assertEqual(breakdown.special_adjustments, [])
        self.assertEqual(request_quote.quote.price, 2000)

    def test_short_text_is_not_analyzed(self):
        request_quote = quote_request_text("택배")

        self.assertTrue(request_quote.classification.is_empty)
        self.assertIsNone(request_quote.quote)

    def test_unmatched_text_has_no_quote(self):
        request_quote = quote_request_text("오늘 날씨가 좋네요 그렇죠")

        self.assertEqual(request_quote.to_dict(), {"classification": {}, "quote": None})


class PricingViewTests(TestCase):
    def test_quote_from_query_string(self):
        response = self.client.get(
            reverse("quote"),
            {"category": "childcare", "subcategory": "dropoff", "distance_meters": "1200"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["price"], 1700)
        self.assertEqual(response.json()["breakdown"]["distance_fee"], 200)

    def test_quote_from_json_body(self):
        response = self.client.post(
            reverse("quote"),
            data=json.dumps(
                {
                    "category": "childcare",
                    "subcategory": "dropoff",
                    "scheduled_at": "2026-10-17T23:00:00",
                    "urgency": "immediate",
                    "is_regular": True,
                }
            ),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        names = [adj["name"] for adj in response.json()["breakdown"]["special_adjustments"]]
        self.assertEqual(names, ["urgent_30min", "night", "saturday", "regular_discount"])

    def test_quote_requires_category(self):
        response = self.client.get(reverse("quote"), {"subcategory": "dropoff"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": ["Category is required."]})

    def test_quote_rejects_malformed_numbers(self):
        response = self.client.post(
            reverse("quote"),
            {"category": "childcare", "subcategory": "dropoff", "distance_meters": "far"},
        )

        self.assertEqual(response.status_code, 400)

    def test_quote_rejects_non_finite_distance(self):
        for distance in ("nan", "inf", "-Infinity"):
            response = self.client.get(
                reverse("quote"),
                {"category": "childcare", "subcategory": "dropoff", "distance_meters": distance},
            )

            self.assertEqual(response.status_code, 400, distance)
            self.assertEqual(response.json(), {"errors": ["Distance must be a finite number."]})

    def test_quote_rejects_malformed_datetime(self):
        response = self.client.get(
            reverse("quote"),
            {"category": "childcare", "subcategory": "dropoff", "scheduled_at": "tomorrow"},
        )

        self.assertEqual(response.status_code, 400)

    def test_classify(self):
        response = self.client.get(reverse("classify"), {"text": "택배 좀 받아주세요"})

        self.assertEqual(
            response.json(),
            {"category": "errand", "subcategory": "package_receive", "estimated_duration": 5},
        )

    def test_request_quote(self):
        response = self.client.post(
            reverse("request_quote"),
            {"text": "분리수거 대신 해주실 분", "distance_meters": "600"},
        )

        body = response.json()
        self.assertEqual(body["classification"]["subcategory"], "recycling")
        # 400 * 1.5 + 100 = 700
        self.assertEqual(body["quote"]["price"], 700)

    def test_catalog(self):
        response = self.client.get(reverse("catalog"))

        body = response.json()
        self.assertEqual(len(body["categories"]), 9)
        self.assertEqual(body["categories"][0]["subcategories"][1]["key"], "dropoff")
        self.assertEqual(body["special_adjustments"]["saturday"]["value"], 1.1)

    def test_catalog_is_read_only(self):
        response = self.client.post(reverse("catalog"))

        self.assertEqual(response.status_code, 405)
