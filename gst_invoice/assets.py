"""Discovery of the optional logo and signature images."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_LOGO_PATH, DEFAULT_SIGNATURE_PATH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceAssets:
    logo: Optional[str] = None
    signature: Optional[str] = None


def find_asset_path(env_var: str, default: str, label: str) -> Optional[str]:
    path = os.getenv(env_var) or default
    if os.path.isfile(path) and os.access(path, os.R_OK):
        return path
    logger.warning("%s not found at %s, continuing without it", label, path)
    return None


def load_assets() -> InvoiceAssets:
    return InvoiceAssets(
        logo=find_asset_path("INVOICE_LOGO_PATH", DEFAULT_LOGO_PATH, "Logo"),
        signature=find_asset_path(
            "INVOICE_SIGNATURE_PATH", DEFAULT_SIGNATURE_PATH, "Signature"
        ),
    )
