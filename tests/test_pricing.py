import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

from storefront.core.pricing import (
    BasePrice,
    Fixed,
    Percentage,
    SalePrice,
    WeeklyPrice,
    discount_from_fields,
    format_price,
    is_promotion_active,
    resolve_price,
    select_price_source,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _promotion(**overrides):
    values = dict(
        is_active=True,
        start_date=NOW - timedelta(days=1),
        end_date=NOW + timedelta(days=1),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class PriceResolutionTest(unittest.TestCase):
    def test_no_promotion_keeps_base_price(self):
        for sell_price in ("0", "19.99", "100", "12500"):
            with self.subTest(sell_price=sell_price):
                info = resolve_price(Decimal(sell_price))
                self.assertEqual(info.final_price, info.original_price)
                self.assertIsNone(info.discount_type)
                self.assertIsNone(info.discount_value)
                self.assertIsNone(info.offer_description)

    def test_percentage_solde(self):
        info = resolve_price(Decimal("100"), solde={"discount_percent": 20, "discount_fixed": None})
        self.assertEqual(info.original_price, Decimal("100"))
        self.assertEqual(info.final_price, Decimal("80"))
        self.assertEqual(info.discount_type, "percentage")
        self.assertEqual(info.discount_value, Decimal("20"))

    def test_percentage_rounds_half_up_to_cents(self):
        info = resolve_price(Decimal("19.99"), solde={"discount_percent": "15"})
        # 19.99 * 0.85 = 16.9915
        self.assertEqual(info.final_price, Decimal("16.99"))
        info = resolve_price(Decimal("0.50"), solde={"discount_percent": "25"})
        # 0.375 -> 0.38
        self.assertEqual(info.final_price, Decimal("0.38"))

    def test_fixed_solde(self):
        info = resolve_price(Decimal("100"), solde={"discount_percent": None, "discount_fixed": "30"})
        self.assertEqual(info.final_price, Decimal("70"))
        self.assertEqual(info.discount_type, "fixed")
        self.assertEqual(info.discount_value, Decimal("30"))

    def test_weekly_offer_beats_solde(self):
        offer = {"offer_price": "65", "offer_description": "Prix choc"}
        solde = {"discount_percent": 20}
        info = resolve_price(Decimal("100"), offer, solde)
        self.assertEqual(info.final_price, Decimal("65"))
        self.assertEqual(info.discount_type, "weekly")
        self.assertEqual(info.offer_description, "Prix choc")
        self.assertIsNone(info.discount_value)

    def test_weekly_offer_is_absolute_override(self):
        offer = {"offer_price": "120", "offer_description": "Edition limitee"}
        info = resolve_price(Decimal("100"), offer)
        self.assertEqual(info.final_price, Decimal("120"))
        self.assertEqual(info.original_price, Decimal("100"))

    def test_percentage_wins_when_both_discount_fields_are_set(self):
        info = resolve_price(Decimal("100"), solde={"discount_percent": 10, "discount_fixed": 50})
        self.assertEqual(info.discount_type, "percentage")
        self.assertEqual(info.final_price, Decimal("90"))

    def test_solde_without_discount_falls_back_to_base(self):
        info = resolve_price(Decimal("100"), solde={"discount_percent": None, "discount_fixed": None})
        self.assertEqual(info.final_price, Decimal("100"))
        self.assertIsNone(info.discount_type)

    def test_fixed_discount_above_price_is_clamped(self):
        with self.assertLogs("storefront.core.pricing", level="WARNING"):
            info = resolve_price(Decimal("50"), solde={"discount_fixed": 60})
        self.assertEqual(info.final_price, Decimal("0"))
        self.assertTrue(info.price_clamped)
        self.assertEqual(info.original_price, Decimal("50"))
        self.assertEqual(info.discount_type, "fixed")

    def test_exact_fixed_discount_is_not_flagged(self):
        info = resolve_price(Decimal("50"), solde={"discount_fixed": 50})
        self.assertEqual(info.final_price, Decimal("0"))
        self.assertFalse(info.price_clamped)

    def test_accepts_orm_like_objects(self):
        offer = SimpleNamespace(offer_price=Decimal("65.00"), offer_description="Semaine")
        info = resolve_price(Decimal("100.00"), offer, None)
        self.assertEqual(info.final_price, Decimal("65.00"))

    def test_now_filters_out_inactive_promotions(self):
        expired_offer = _promotion(
            offer_price=Decimal("65"),
            offer_description="Expiree",
            end_date=NOW - timedelta(seconds=1),
        )
        solde = _promotion(discount_percent=Decimal("20"), discount_fixed=None)
        info = resolve_price(Decimal("100"), expired_offer, solde, now=NOW)
        self.assertEqual(info.discount_type, "percentage")
        self.assertEqual(info.final_price, Decimal("80"))


class PriceSourceTest(unittest.TestCase):
    def test_source_priority(self):
        offer = {"offer_price": 65, "offer_description": "x"}
        solde = {"discount_percent": 20}
        self.assertIsInstance(select_price_source(offer, solde), WeeklyPrice)
        self.assertIsInstance(select_price_source(None, solde), SalePrice)
        self.assertIsInstance(select_price_source(None, None), BasePrice)

    def test_discount_from_fields(self):
        self.assertEqual(discount_from_fields(20, None), Percentage(Decimal("20")))
        self.assertEqual(discount_from_fields(None, "5.5"), Fixed(Decimal("5.5")))
        self.assertEqual(discount_from_fields(10, 5), Percentage(Decimal("10")))
        self.assertIsNone(discount_from_fields(0, None))
        self.assertIsNone(discount_from_fields(None, None))


class PromotionWindowTest(unittest.TestCase):
    def test_closed_interval_boundaries(self):
        cases = [
            (dict(start_date=NOW), True),
            (dict(end_date=NOW), True),
            (dict(start_date=NOW, end_date=NOW), True),
            (dict(end_date=NOW - timedelta(microseconds=1)), False),
            (dict(start_date=NOW + timedelta(microseconds=1)), False),
        ]
        for overrides, expected in cases:
            with self.subTest(overrides=overrides):
                self.assertEqual(is_promotion_active(_promotion(**overrides), NOW), expected)

    def test_inactive_flag_disables_promotion(self):
        self.assertFalse(is_promotion_active(_promotion(is_active=False), NOW))

    def test_naive_datetimes_are_treated_as_utc(self):
        promotion = _promotion(
            start_date=datetime(2026, 10, 19, 12, 0),
            end_date=datetime(2026, 10, 19, 13, 0),
        )
        self.assertTrue(is_promotion_active(promotion, NOW))
        later = datetime(2026, 10, 19, 14, 30, tzinfo=timezone(timedelta(hours=2)))
        self.assertTrue(is_promotion_active(promotion, later))

    def test_missing_promotion_is_inactive(self):
        self.assertFalse(is_promotion_active(None, NOW))


class FormatPriceTest(unittest.TestCase):
    def test_groups_thousands_without_decimals(self):
        self.assertEqual(format_price(Decimal("12500"), "XOF"), "12 500 XOF")
        self.assertEqual(format_price(Decimal("999.5"), "XOF"), "1 000 XOF")
        self.assertEqual(format_price(0), "0 XOF")


if __name__ == "__main__":
    unittest.main()
