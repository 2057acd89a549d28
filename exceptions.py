# exceptions.py
"""
Errors raised by the invoice PDF engine.

Rendering itself never raises for bad assets or odd values (logos that fail
to decode are skipped, amounts that cannot be formatted are printed as-is).
What remains is the wizard gate before an invoice exists and the final
serialization/storage step.
"""
from __future__ import annotations

__all__ = [
    "InvoicerError",
    "IncompleteInvoiceError",
    "PaymentMethodError",
    "PdfGenerationError",
]


class InvoicerError(Exception):
    """Base class. `detail` is the human readable message, `error_code` a stable id."""

    error_code: str = "INVOICER_ERROR"

    def __init__(self, detail: str, error_code: str | None = None) -> None:
        self.detail = detail
        self.error_code = error_code if error_code is not None else self.error_code
        super().__init__(detail)


class IncompleteInvoiceError(InvoicerError, ValueError):
    """
    The wizard was asked to produce an invoice without a company, a customer
    or at least one line item.
    """

    error_code = "INVOICE_INCOMPLETE"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__("Invoice is missing: " + ", ".join(self.missing))


class PaymentMethodError(InvoicerError, ValueError):
    error_code = "PAYMENT_METHOD_INVALID"


class PdfGenerationError(InvoicerError, RuntimeError):
    """Building or storing the PDF byte stream failed. Nothing was written."""

    error_code = "PDF_GENERATION_FAILED"

    def __init__(self, detail: str, invoice_number: str | None = None) -> None:
        self.invoice_number = invoice_number
        super().__init__(detail)
