import os
import tempfile
import unittest
from importlib import util as importlib_util
from unittest.mock import patch

FPDF_AVAILABLE = importlib_util.find_spec("fpdf") is not None
if FPDF_AVAILABLE:
    from fpdf import FPDF

    from gst_invoice.fonts import FontManager, find_font_path


def without_dejavu():
    """Hide every DejaVu location FontManager knows about."""
    return (
        patch.object(FontManager, "BUNDLED_REGULAR", "/nonexistent/DejaVuSans.ttf"),
        patch.object(FontManager, "SYSTEM_REGULAR_CANDIDATES", []),
    )


@unittest.skipUnless(FPDF_AVAILABLE, "fpdf is not installed")
class FindFontPathTests(unittest.TestCase):
    def test_existing_override_wins(self) -> None:
        with tempfile.NamedTemporaryFile(suffix=".ttf") as handle:
            with patch.dict(os.environ, {"INVOICE_FONT_PATH": handle.name}):
                path = find_font_path("INVOICE_FONT_PATH", ["/nonexistent/a.ttf"])

        self.assertEqual(path, handle.name)

    def test_missing_override_falls_through_to_candidates(self) -> None:
        with tempfile.NamedTemporaryFile(suffix=".ttf") as handle:
            with patch.dict(os.environ, {"INVOICE_FONT_PATH": "/nonexistent/override.ttf"}):
                path = find_font_path("INVOICE_FONT_PATH", ["/nonexistent/a.ttf", handle.name])

        self.assertEqual(path, handle.name)

    def test_nothing_found(self) -> None:
        with patch.dict(os.environ):
            os.environ.pop("INVOICE_FONT_PATH", None)
            self.assertIsNone(find_font_path("INVOICE_FONT_PATH", ["/nonexistent/a.ttf"]))


@unittest.skipUnless(FPDF_AVAILABLE, "fpdf is not installed")
class FontManagerTests(unittest.TestCase):
    def make_fallback_fonts(self):
        bundled, system = without_dejavu()
        with patch.dict(os.environ), bundled, system:
            os.environ.pop("INVOICE_FONT_PATH", None)
            with self.assertLogs("gst_invoice.fonts", level="WARNING") as logs:
                fonts = FontManager(FPDF(unit="pt", format="A4"))
        return fonts, logs

    def test_falls_back_to_helvetica_with_warning(self) -> None:
        fonts, logs = self.make_fallback_fonts()

        self.assertEqual(fonts.family, "helvetica")
        self.assertFalse(fonts.use_unicode)
        self.assertTrue(fonts.has_bold)
        self.assertEqual(len(logs.records), 1)
        self.assertIn("Helvetica", logs.output[0])
        self.assertIn("Latin-1", logs.output[0])

    def test_fallback_font_measures_and_draws(self) -> None:
        fonts, _ = self.make_fallback_fonts()
        fonts.pdf.add_page()

        regular = fonts.text_width("Subtotal:", 10)
        bold = fonts.text_width("Subtotal:", 10, bold=True)
        fonts.draw_right(555, 100, "Rs. 10.00", 10, (0, 0, 0), bold=True)

        self.assertGreater(regular, 0)
        self.assertGreater(bold, regular)
        self.assertTrue(bytes(fonts.pdf.output()).startswith(b"%PDF"))

    def test_reset_forgets_active_font(self) -> None:
        fonts, _ = self.make_fallback_fonts()
        fonts.pdf.add_page()
        fonts.text_width("x", 10)

        fonts.reset()

        self.assertEqual(fonts.pdf.font_family, "")

    def test_unicode_font_registered_when_available(self) -> None:
        regular = find_font_path(
            "INVOICE_FONT_PATH",
            [FontManager.BUNDLED_REGULAR, *FontManager.SYSTEM_REGULAR_CANDIDATES],
        )
        if regular is None:
            self.skipTest("no DejaVu font on this system")

        fonts = FontManager(FPDF(unit="pt", format="A4"))

        self.assertEqual(fonts.family, FontManager.FAMILY)
        self.assertTrue(fonts.use_unicode)


if __name__ == "__main__":
    unittest.main()
