import os
import tempfile
import unittest
from unittest.mock import patch

from gst_invoice.assets import InvoiceAssets, find_asset_path, load_assets


class AssetDiscoveryTests(unittest.TestCase):
    def test_missing_assets_are_omitted_with_a_warning(self) -> None:
        env = {
            "INVOICE_LOGO_PATH": "/nonexistent/logo.png",
            "INVOICE_SIGNATURE_PATH": "/nonexistent/signature.png",
        }
        with patch.dict(os.environ, env):
            with self.assertLogs("gst_invoice.assets", level="WARNING") as logs:
                assets = load_assets()

        self.assertEqual(assets, InvoiceAssets())
        self.assertEqual(len(logs.records), 2)

    def test_environment_override_is_used_when_file_exists(self) -> None:
        with tempfile.NamedTemporaryFile(suffix=".png") as handle:
            with patch.dict(os.environ, {"INVOICE_LOGO_PATH": handle.name}):
                path = find_asset_path("INVOICE_LOGO_PATH", "/nonexistent/default.png", "Logo")

        self.assertEqual(path, handle.name)


if __name__ == "__main__":
    unittest.main()
