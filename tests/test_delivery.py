import os
import stat
import sys
import tempfile
import unittest
from datetime import date
from unittest.mock import Mock, patch

from gst_invoice.delivery import (
    GENERIC_FAILURE_MESSAGE,
    DependencyError,
    InvoiceGenerationError,
    generate_invoice,
    load_render_invoice,
    save_invoice,
)
from gst_invoice.form import InvoiceForm
from gst_invoice.models import InvoiceRecord, InvoiceValidationError, LineItem, RenderedInvoice


def make_record(**overrides) -> InvoiceRecord:
    values = {
        "bill_no": "001",
        "client_name": "Acme   Corp",
        "invoice_date": date(2026, 1, 15),
        "items": (LineItem(description="Bolt", quantity=10, rate=100.0),),
    }
    values.update(overrides)
    return InvoiceRecord(**values)


class SaveInvoiceTests(unittest.TestCase):
    def test_writes_document_under_its_filename(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            path = save_invoice(RenderedInvoice(b"%PDF-1.4 test", "Invoice_1_A.pdf"), directory)

            self.assertEqual(path, os.path.join(directory, "Invoice_1_A.pdf"))
            with open(path, "rb") as handle:
                self.assertEqual(handle.read(), b"%PDF-1.4 test")
            self.assertEqual(os.listdir(directory), ["Invoice_1_A.pdf"])

    @unittest.skipIf(os.name == "nt", "POSIX permission bits")
    def test_saved_file_mode_follows_umask(self) -> None:
        previous = os.umask(0o022)
        try:
            with tempfile.TemporaryDirectory() as directory:
                path = save_invoice(RenderedInvoice(b"%PDF", "a.pdf"), directory)
                self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o644)

            os.umask(0o077)
            with tempfile.TemporaryDirectory() as directory:
                path = save_invoice(RenderedInvoice(b"%PDF", "b.pdf"), directory)
                self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o600)
        finally:
            os.umask(previous)


class GenerateInvoiceTests(unittest.TestCase):
    def test_missing_required_fields_block_rendering(self) -> None:
        renderer = Mock()
        with tempfile.TemporaryDirectory() as directory, patch(
            "gst_invoice.delivery.load_render_invoice", return_value=renderer
        ):
            with self.assertRaises(InvoiceValidationError) as ctx:
                generate_invoice(InvoiceForm(), output_dir=directory)

            self.assertEqual(os.listdir(directory), [])
        self.assertEqual(str(ctx.exception), "Please fill in Bill No and Client Name")
        renderer.assert_not_called()

    def test_unexpected_failure_is_reported_generically(self) -> None:
        def broken_render(record, company):
            raise RuntimeError("boom")

        with tempfile.TemporaryDirectory() as directory, patch(
            "gst_invoice.delivery.load_render_invoice", return_value=broken_render
        ):
            with self.assertLogs("gst_invoice.delivery", level="ERROR"):
                with self.assertRaises(InvoiceGenerationError) as ctx:
                    generate_invoice(make_record(), output_dir=directory)

            self.assertEqual(os.listdir(directory), [])
        self.assertEqual(str(ctx.exception), GENERIC_FAILURE_MESSAGE)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_successful_render_is_saved(self) -> None:
        def fake_render(record, company):
            return RenderedInvoice(b"%PDF-fake", "Invoice_001_Acme_Corp.pdf")

        with tempfile.TemporaryDirectory() as directory, patch(
            "gst_invoice.delivery.load_render_invoice", return_value=fake_render
        ):
            path = generate_invoice(make_record(), output_dir=directory)

            self.assertTrue(os.path.exists(path))
            self.assertEqual(os.path.basename(path), "Invoice_001_Acme_Corp.pdf")

    def test_missing_pdf_library_raises_dependency_error(self) -> None:
        with patch.dict(sys.modules, {"fpdf": None}):
            sys.modules.pop("gst_invoice.rendering", None)
            with self.assertRaises(DependencyError):
                load_render_invoice()


if __name__ == "__main__":
    unittest.main()
