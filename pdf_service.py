# pdf_service.py
import io
import logging
import os
import re
import tempfile
from pathlib import Path

from reportlab.pdfgen import canvas

from config import Config
from exceptions import PdfGenerationError
from models import Company, Customer, Invoice
from pdf_layout import PAGE_HEIGHT, PAGE_WIDTH
from pdf_templates import create_renderer
from template_catalog import TemplateDescriptor, get_template

logger = logging.getLogger(__name__)

PAGE_SIZE = (PAGE_WIDTH, PAGE_HEIGHT)
PRODUCER = "Invoicer PDF"


def _safe_filename(name: str) -> str:
    # strip characters not allowed on Windows/mac paths
    return re.sub(r'[\\/*?:"<>|]', "", (name or "")).strip() or "Invoice"


def invoice_filename(invoice: Invoice, ext: str = "pdf") -> str:
    return _safe_filename(f"Invoice-{invoice.number}") + f".{ext}"


def _resolve_template(template) -> TemplateDescriptor:
    if isinstance(template, TemplateDescriptor):
        return template
    return get_template(template, Config.DEFAULT_TEMPLATE_ID)


def render_invoice_pdf(
    invoice: Invoice,
    template=None,
    *,
    company: Company | None = None,
    customer: Customer | None = None,
    currency: str | None = None,
    logo=None,
    compress: bool | None = None,
) -> bytes:
    """
    Render one invoice to a single A4 page and return the PDF bytes.

    `template` is a TemplateDescriptor or a catalog id. Company, customer and
    currency default to the snapshots stored on the invoice. Output is
    byte-for-byte repeatable for the same inputs.
    """
    descriptor = _resolve_template(template)
    company = company if company is not None else invoice.company
    customer = customer if customer is not None else invoice.customer
    currency = (currency or invoice.currency or Config.DEFAULT_CURRENCY).upper()
    if compress is None:
        compress = Config.PDF_PAGE_COMPRESSION

    try:
        buf = io.BytesIO()
        pdf = canvas.Canvas(
            buf,
            pagesize=PAGE_SIZE,
            invariant=1,
            pageCompression=1 if compress else 0,
        )
        pdf.setTitle(f"Invoice {invoice.number}")
        pdf.setAuthor(company.name)
        pdf.setSubject(customer.name)
        pdf.setCreator(PRODUCER)

        renderer = create_renderer(descriptor.style, descriptor.theme)
        renderer.draw(pdf, PAGE_SIZE, invoice, company, customer, currency, logo)

        pdf.showPage()
        pdf.save()
        return buf.getvalue()
    except Exception as exc:
        logger.exception("PDF generation failed for invoice %s", invoice.number)
        raise PdfGenerationError(f"Could not render invoice {invoice.number}: {exc}", invoice.number) from exc


def write_pdf_atomic(data: bytes, path: str) -> str:
    """
    Write to a temp file in the target folder, then rename over `path`.
    Readers never see a half-written PDF and a failed write leaves nothing behind.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".pdf", dir=str(target.parent))
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise
    return str(target.resolve())


def generate_and_store_pdf(
    invoice: Invoice,
    template=None,
    *,
    exports_dir: str | None = None,
    company: Company | None = None,
    customer: Customer | None = None,
    currency: str | None = None,
    logo=None,
) -> str:
    """
    Render the invoice and save it as Invoice-{number}.pdf under exports_dir.

    Returns: absolute pdf path on disk.
    """
    data = render_invoice_pdf(
        invoice,
        template,
        company=company,
        customer=customer,
        currency=currency,
        logo=logo,
    )

    out_dir = exports_dir or Config.EXPORTS_DIR
    pdf_path = os.path.join(out_dir, invoice_filename(invoice))
    try:
        saved = write_pdf_atomic(data, pdf_path)
    except OSError as exc:
        logger.exception("Could not store PDF for invoice %s at %s", invoice.number, pdf_path)
        raise PdfGenerationError(f"Could not save {pdf_path}: {exc}", invoice.number) from exc

    logger.info("Stored invoice %s at %s (%d bytes)", invoice.number, saved, len(data))
    return saved
