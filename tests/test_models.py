import unittest
from datetime import date

from gst_invoice.formatting import fmt_money
from gst_invoice.models import (
    CompanyProfile,
    InvoiceRecord,
    InvoiceValidationError,
    LineItem,
    compute_totals,
    validate_record,
)


def make_record(**overrides) -> InvoiceRecord:
    values = {
        "bill_no": "001",
        "client_name": "Acme Corp",
        "invoice_date": date(2026, 1, 15),
        "tax_rate_percent": 9,
        "items": (LineItem(description="Bolt", quantity=10, rate=100.0),),
    }
    values.update(overrides)
    return InvoiceRecord(**values)


class LineItemTests(unittest.TestCase):
    def test_amount_subtracts_flat_discount(self) -> None:
        item = LineItem(description="Gear", quantity=2, rate=50.0, discount=10.0)
        self.assertAlmostEqual(item.amount, 90.0)

    def test_amount_is_not_clamped_when_discount_is_larger(self) -> None:
        item = LineItem(description="Gear", quantity=1, rate=10.0, discount=25.0)
        self.assertAlmostEqual(item.amount, -15.0)

    def test_blank_description_detection(self) -> None:
        self.assertTrue(LineItem(description="  \n").is_blank)
        self.assertFalse(LineItem(description="Shaft").is_blank)


class TotalsTests(unittest.TestCase):
    def test_split_tax_at_nine_percent(self) -> None:
        totals = compute_totals([LineItem(description="Lathe work", quantity=1, rate=1000.0)], 9)

        self.assertEqual(fmt_money(totals.sgst), "Rs. 90.00")
        self.assertEqual(fmt_money(totals.cgst), "Rs. 90.00")
        self.assertEqual(fmt_money(totals.total), "Rs. 1180.00")
        self.assertAlmostEqual(totals.tax_amount, 90.0)

    def test_total_uses_unrounded_subtotal(self) -> None:
        totals = compute_totals([LineItem(description="Casting", quantity=1, rate=500.555)], 14)

        self.assertAlmostEqual(totals.sgst, 70.0777)
        self.assertAlmostEqual(totals.total, 640.7104)
        self.assertEqual(fmt_money(totals.subtotal), "Rs. 500.55")
        self.assertEqual(fmt_money(totals.sgst), "Rs. 70.07")
        self.assertEqual(fmt_money(totals.total), "Rs. 640.71")

    def test_subtotal_ignores_item_order(self) -> None:
        items = [
            LineItem(description="A", quantity=3, rate=12.5),
            LineItem(description="B", quantity=1, rate=99.0, discount=9.0),
            LineItem(description="C", quantity=2, rate=1.0, discount=5.0),
        ]

        forward = compute_totals(items, 9)
        backward = compute_totals(list(reversed(items)), 9)

        self.assertAlmostEqual(forward.subtotal, 37.5 + 90.0 - 3.0)
        self.assertAlmostEqual(forward.subtotal, backward.subtotal)

    def test_record_totals_use_its_tax_rate(self) -> None:
        totals = make_record(tax_rate_percent=14).totals()

        self.assertAlmostEqual(totals.sgst, 140.0)
        self.assertAlmostEqual(totals.total, 1280.0)


class ValidationTests(unittest.TestCase):
    def test_accepts_complete_record(self) -> None:
        validate_record(make_record())

    def test_rejects_missing_bill_no_and_client_name(self) -> None:
        with self.assertRaises(InvoiceValidationError) as ctx:
            validate_record(make_record(bill_no="", client_name="   "))

        self.assertEqual(ctx.exception.fields, ("bill_no", "client_name"))
        self.assertEqual(str(ctx.exception), "Please fill in Bill No and Client Name")

    def test_rejects_unsupported_tax_rate(self) -> None:
        with self.assertRaises(InvoiceValidationError) as ctx:
            validate_record(make_record(tax_rate_percent=12))

        self.assertEqual(ctx.exception.fields, ("tax_rate_percent",))


class CompanyProfileTests(unittest.TestCase):
    def test_phone_numbers_split_on_commas(self) -> None:
        company = CompanyProfile(
            name="Works",
            address="Somewhere",
            phone="+91 11111, +91 22222,",
            gstin="24ABCDE1234F1Z5",
        )

        self.assertEqual(company.phone_numbers, ["+91 11111", "+91 22222"])


if __name__ == "__main__":
    unittest.main()
