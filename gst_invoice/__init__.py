"""Public package API for GST tax invoice generation."""

from __future__ import annotations

from .config import DEFAULT_COMPANY
from .delivery import (
    DependencyError,
    InvoiceGenerationError,
    generate_invoice,
    load_render_invoice,
    save_invoice,
)
from .form import InvoiceForm
from .formatting import invoice_filename, parse_number
from .models import (
    TAX_RATES,
    CompanyProfile,
    InvoiceRecord,
    InvoiceTotals,
    InvoiceValidationError,
    LineItem,
    RenderedInvoice,
    compute_totals,
    validate_record,
)


def render_invoice(
    record: InvoiceRecord,
    company: CompanyProfile = DEFAULT_COMPANY,
) -> RenderedInvoice:
    return load_render_invoice()(record, company)


__all__ = [
    "DEFAULT_COMPANY",
    "TAX_RATES",
    "CompanyProfile",
    "DependencyError",
    "InvoiceForm",
    "InvoiceGenerationError",
    "InvoiceRecord",
    "InvoiceTotals",
    "InvoiceValidationError",
    "LineItem",
    "RenderedInvoice",
    "compute_totals",
    "generate_invoice",
    "invoice_filename",
    "parse_number",
    "render_invoice",
    "save_invoice",
    "validate_record",
]
