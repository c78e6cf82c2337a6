"""Validate, render and hand a finished invoice to the caller's filesystem."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Optional, Union

from .config import DEFAULT_COMPANY, OUTPUT_DIR
from .form import InvoiceForm
from .models import CompanyProfile, InvoiceRecord, RenderedInvoice, validate_record

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Error generating PDF. Please try again."

__all__ = [
    "DependencyError",
    "InvoiceGenerationError",
    "generate_invoice",
    "load_render_invoice",
    "save_invoice",
]


class DependencyError(RuntimeError):
    """Raised when a required runtime dependency is missing."""


class InvoiceGenerationError(RuntimeError):
    """Raised when drawing, serializing or writing an invoice fails.

    The message is generic and meant for the person who asked for the
    invoice; the cause is chained and logged.
    """


def load_render_invoice():
    try:
        from .rendering import render_invoice
    except ModuleNotFoundError as exc:
        if exc.name == "fpdf":
            raise DependencyError(
                "Missing dependency 'fpdf2'. Install project dependencies with "
                "'pip install -e .'."
            ) from exc
        raise
    return render_invoice


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def save_invoice(rendered: RenderedInvoice, directory: Optional[str] = None) -> str:
    """Write the document under ``directory`` and return its path.

    The bytes go to a temporary file that is renamed into place, so a failed
    write never leaves a partial invoice behind.
    """
    directory = directory or OUTPUT_DIR
    os.makedirs(directory, exist_ok=True)
    target = os.path.join(directory, rendered.filename)

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".invoice-", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(rendered.content)
        # mkstemp creates 0600; saved invoices get the usual umask-derived mode.
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, target)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return target


def generate_invoice(
    source: Union[InvoiceForm, InvoiceRecord],
    company: CompanyProfile = DEFAULT_COMPANY,
    output_dir: Optional[str] = None,
) -> str:
    """Render ``source`` and save it, returning the written path.

    ``InvoiceValidationError`` is raised before anything is drawn when
    required fields are missing. Any later failure surfaces as
    ``InvoiceGenerationError`` and no file is written.
    """
    record = source.to_record() if isinstance(source, InvoiceForm) else source
    validate_record(record)
    render_invoice = load_render_invoice()

    try:
        rendered = render_invoice(record, company)
        path = save_invoice(rendered, output_dir)
    except Exception as exc:
        logger.exception("Error generating PDF for bill %s", record.bill_no)
        raise InvoiceGenerationError(GENERIC_FAILURE_MESSAGE) from exc

    logger.info("Wrote invoice %s (%d bytes)", path, len(rendered.content))
    return path
