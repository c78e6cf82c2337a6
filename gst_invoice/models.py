"""Invoice data model and tax arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

TAX_RATES: Tuple[int, ...] = (9, 14)
DEFAULT_TAX_RATE = 9

REQUIRED_FIELDS_MESSAGE = "Please fill in Bill No and Client Name"


class InvoiceValidationError(ValueError):
    """Raised when an invoice record cannot be rendered.

    ``fields`` names the offending attributes; ``str(exc)`` is safe to show
    to the person filling in the form.
    """

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


@dataclass(frozen=True)
class LineItem:
    description: str = ""
    item_code: str = ""
    hsn: str = ""
    quantity: float = 1.0
    rate: float = 0.0
    discount: float = 0.0

    @property
    def amount(self) -> float:
        # Discount is a flat amount; a negative result is kept as is.
        return self.quantity * self.rate - self.discount

    @property
    def is_blank(self) -> bool:
        return not self.description.strip()


@dataclass(frozen=True)
class CompanyProfile:
    name: str
    address: str
    phone: str
    gstin: str
    email: Optional[str] = None
    terms: str = ""
    invocation: str = "Shree"
    thank_you: str = "Thank you for your business!"

    @property
    def phone_numbers(self) -> List[str]:
        return [number.strip() for number in self.phone.split(",") if number.strip()]


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: float
    tax_rate_percent: int
    sgst: float
    cgst: float
    total: float

    @property
    def tax_amount(self) -> float:
        return self.sgst


def compute_totals(items: Iterable[LineItem], tax_rate_percent: int) -> InvoiceTotals:
    """Sum item amounts and apply the split SGST/CGST tax.

    The tax is computed once on the unrounded subtotal and charged twice,
    once under each label.
    """
    subtotal = 0.0
    for item in items:
        subtotal += item.amount

    tax_amount = subtotal * (tax_rate_percent / 100.0)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_rate_percent=tax_rate_percent,
        sgst=tax_amount,
        cgst=tax_amount,
        total=subtotal + 2 * tax_amount,
    )


@dataclass(frozen=True)
class InvoiceRecord:
    bill_no: str
    client_name: str
    invoice_date: date
    tax_rate_percent: int = DEFAULT_TAX_RATE
    order_no: str = ""
    challan_no: str = ""
    gst_no: str = ""
    items: Tuple[LineItem, ...] = ()

    def totals(self) -> InvoiceTotals:
        return compute_totals(self.items, self.tax_rate_percent)


@dataclass(frozen=True)
class RenderedInvoice:
    content: bytes
    filename: str


def validate_record(record: InvoiceRecord) -> None:
    missing = [
        name
        for name in ("bill_no", "client_name")
        if not str(getattr(record, name) or "").strip()
    ]
    if missing:
        raise InvoiceValidationError(REQUIRED_FIELDS_MESSAGE, missing)

    if record.tax_rate_percent not in TAX_RATES:
        allowed = ", ".join(f"{rate}%" for rate in TAX_RATES)
        raise InvoiceValidationError(
            f"GST rate must be one of {allowed}.",
            ["tax_rate_percent"],
        )
