from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from app.validators.price_row_validator import PRICE_COLUMNS, PriceRowValidator


class TestPriceRowValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PriceRowValidator()

    def test_accepts_and_coerces_valid_row(self) -> None:
        record, diagnostic = self.validator.validate_row(
            row=["+42", "Widget", "Tools", "1e1", "2024-02-29"],
            row_number=2,
        )

        self.assertIsNone(diagnostic)
        self.assertEqual(record.id, 42)
        self.assertEqual(record.price, Decimal("10"))
        self.assertEqual(record.create_date, date(2024, 2, 29))
        self.assertEqual(record.key, (42, date(2024, 2, 29)))

    def test_short_row_has_no_column(self) -> None:
        record, diagnostic = self.validator.validate_row(row=["1", "Widget"], row_number=7)

        self.assertIsNone(record)
        self.assertIsNone(diagnostic.column)
        self.assertEqual(diagnostic.row_number, 7)
        self.assertEqual(diagnostic.value, "1,Widget")

    def test_rejects_non_ascii_and_underscored_ids(self) -> None:
        for raw_id in ("1_000", "١٢", "", "0x1F"):
            with self.subTest(raw_id=raw_id):
                record, diagnostic = self.validator.validate_row(
                    row=[raw_id, "Widget", "Tools", "9.99", "2024-03-01"],
                    row_number=2,
                )
                self.assertIsNone(record)
                self.assertEqual(diagnostic.column, "id")

    def test_rejects_infinite_price(self) -> None:
        for raw_price in ("Infinity", "-inf", "sNaN"):
            with self.subTest(raw_price=raw_price):
                _, diagnostic = self.validator.validate_row(
                    row=["1", "Widget", "Tools", raw_price, "2024-03-01"],
                    row_number=2,
                )
                self.assertEqual(diagnostic.column, "price")
                self.assertEqual(diagnostic.value, raw_price)

    def test_id_must_fit_signed_64_bits(self) -> None:
        for raw_id, accepted in (
            ("9223372036854775807", True),
            ("-9223372036854775808", True),
            ("9223372036854775808", False),
            ("-9223372036854775809", False),
            ("99999999999999999999", False),
        ):
            with self.subTest(raw_id=raw_id):
                record, diagnostic = self.validator.validate_row(
                    row=[raw_id, "Widget", "Tools", "9.99", "2024-03-01"],
                    row_number=2,
                )
                if accepted:
                    self.assertIsNone(diagnostic)
                    self.assertEqual(record.id, int(raw_id))
                else:
                    self.assertIsNone(record)
                    self.assertEqual(diagnostic.column, "id")

    def test_price_must_fit_two_decimal_column(self) -> None:
        for raw_price, accepted in (
            ("99999999.99", True),
            ("99999999.994", True),
            ("99999999.995", False),
            ("100000000", False),
            ("1e30", False),
            ("1e-50", True),
        ):
            with self.subTest(raw_price=raw_price):
                record, diagnostic = self.validator.validate_row(
                    row=["1", "Widget", "Tools", raw_price, "2024-03-01"],
                    row_number=2,
                )
                if accepted:
                    self.assertIsNone(diagnostic)
                    self.assertEqual(record.price, Decimal(raw_price))
                else:
                    self.assertIsNone(record)
                    self.assertEqual(diagnostic.column, "price")

    def test_diagnostic_message_names_expected_format(self) -> None:
        _, diagnostic = self.validator.validate_row(
            row=["1", "Widget", "Tools", "9.99", "2024/03/01"],
            row_number=4,
        )

        self.assertEqual(diagnostic.column, "create_date")
        self.assertIn("YYYY-MM-DD", diagnostic.message)

    def test_column_order(self) -> None:
        self.assertEqual(PRICE_COLUMNS, ("id", "name", "category", "price", "create_date"))


if __name__ == "__main__":
    unittest.main()
