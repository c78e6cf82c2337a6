"""In-memory invoice form that collects line items and metadata."""

from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any, Dict, List, Mapping, Tuple

from .config import default_tax_rate
from .formatting import parse_date, parse_number
from .models import TAX_RATES, InvoiceRecord, InvoiceValidationError, LineItem

TEXT_FIELDS = ("description", "item_code", "hsn")
NUMERIC_FIELDS = ("quantity", "rate", "discount")
METADATA_FIELDS = (
    "bill_no",
    "client_name",
    "order_no",
    "challan_no",
    "gst_no",
    "invoice_date",
    "tax_rate_percent",
)

# Keys used by the browser form's JSON export.
FIELD_ALIASES = {
    "billNo": "bill_no",
    "clientName": "client_name",
    "orderNo": "order_no",
    "challanNo": "challan_no",
    "gstNo": "gst_no",
    "invoiceDate": "invoice_date",
    "gstRate": "tax_rate_percent",
    "taxRatePercent": "tax_rate_percent",
    "itemCode": "item_code",
}


def _canonical(key: str) -> str:
    return FIELD_ALIASES.get(key, key)


class InvoiceForm:
    """Mutable form state; ``to_record`` freezes it into an ``InvoiceRecord``."""

    def __init__(self) -> None:
        self.bill_no = ""
        self.client_name = ""
        self.order_no = ""
        self.challan_no = ""
        self.gst_no = ""
        self.invoice_date: date = date.today()
        self.tax_rate_percent = default_tax_rate()
        self.items: List[LineItem] = [LineItem()]

    def add_item(self) -> int:
        self.items.append(LineItem())
        return len(self.items) - 1

    def remove_item(self, index: int) -> bool:
        """Remove one row; the form always keeps at least one."""
        if len(self.items) <= 1:
            return False
        del self.items[index]
        return True

    def update_item(self, index: int, field: str, value: Any) -> LineItem:
        field = _canonical(field)
        if field in TEXT_FIELDS:
            coerced: Any = "" if value is None else str(value)
        elif field in NUMERIC_FIELDS:
            coerced = max(0.0, parse_number(value))
        else:
            raise KeyError(f"Unknown item field: {field}")

        item = dataclasses.replace(self.items[index], **{field: coerced})
        self.items[index] = item
        return item

    def set_field(self, name: str, value: Any) -> None:
        name = _canonical(name)
        if name == "invoice_date":
            parsed = parse_date(value)
            if parsed is None:
                raise ValueError(f"Invalid invoice date: {value!r}")
            self.invoice_date = parsed
        elif name == "tax_rate_percent":
            number = parse_number(value, default=-1.0)
            rate = int(number)
            if rate != number or rate not in TAX_RATES:
                raise ValueError(f"Unsupported GST rate: {value!r}")
            self.tax_rate_percent = rate
        elif name in METADATA_FIELDS:
            setattr(self, name, "" if value is None else str(value))
        else:
            raise KeyError(f"Unknown invoice field: {name}")

    def line_items(self, skip_blank: bool = True) -> Tuple[LineItem, ...]:
        return tuple(item for item in self.items if not (skip_blank and item.is_blank))

    def to_record(self, skip_blank: bool = True) -> InvoiceRecord:
        return InvoiceRecord(
            bill_no=self.bill_no,
            client_name=self.client_name,
            order_no=self.order_no,
            challan_no=self.challan_no,
            gst_no=self.gst_no,
            invoice_date=self.invoice_date,
            tax_rate_percent=self.tax_rate_percent,
            items=self.line_items(skip_blank),
        )

    @classmethod
    def from_payload(cls, payload: Any) -> "InvoiceForm":
        """Build a form from a decoded JSON object.

        Both snake_case keys and the browser form's camelCase keys are
        accepted. Unknown keys are ignored.
        """
        if not isinstance(payload, Mapping):
            raise InvoiceValidationError("JSON root must be an object.")

        items = payload.get("items", [])
        if items is None:
            items = []
        if not isinstance(items, list):
            raise InvoiceValidationError("'items' must be an array.", ["items"])

        form = cls()
        for key, value in payload.items():
            name = _canonical(key)
            if name not in METADATA_FIELDS or value is None:
                continue
            try:
                form.set_field(name, value)
            except ValueError as exc:
                raise InvoiceValidationError(str(exc), [name]) from exc

        if items:
            form.items = []
        for raw_item in items:
            if not isinstance(raw_item, Mapping):
                raise InvoiceValidationError("Each item must be an object.", ["items"])
            index = form.add_item()
            for key, value in raw_item.items():
                if _canonical(key) in TEXT_FIELDS + NUMERIC_FIELDS:
                    form.update_item(index, key, value)
        return form

    def summary(self) -> Dict[str, float]:
        """Live totals as shown beside the form, blank rows included."""
        totals = self.to_record(skip_blank=False).totals()
        return {
            "subtotal": totals.subtotal,
            "sgst": totals.sgst,
            "cgst": totals.cgst,
            "total": totals.total,
        }
