"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os

from .models import DEFAULT_TAX_RATE as FALLBACK_TAX_RATE, TAX_RATES, CompanyProfile

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def default_tax_rate() -> int:
    rate = env_int("INVOICE_DEFAULT_TAX_RATE", FALLBACK_TAX_RATE)
    return rate if rate in TAX_RATES else FALLBACK_TAX_RATE


ASSETS_DIR = os.getenv("INVOICE_ASSETS_DIR", os.path.join(PROJECT_ROOT, "assets"))
DEFAULT_LOGO_PATH = os.path.join(ASSETS_DIR, "logo.png")
DEFAULT_SIGNATURE_PATH = os.path.join(ASSETS_DIR, "signature.png")

OUTPUT_DIR = os.getenv("INVOICE_OUTPUT_DIR", ".")

DEFAULT_COMPANY = CompanyProfile(
    name="Shakti Mechanical Works",
    address="Near Panchratna Bldg. Kosamba (R.S.)",
    phone="+91 98765XXXXX, +91 87654XXXXX",
    gstin="24ABCDE1234F1Z5",
    email="info@shaktimechanical.com",
    terms="Subject to Surat Jurisdiction | Payment due within 30 days",
)
