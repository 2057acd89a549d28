# pdf_layout.py
"""
Building blocks shared by every invoice template: text helpers, the logo,
the line-items table, the totals rows and the "Payment Details" block.

All positions are reportlab points with the origin at the bottom-left of the
page, so a layout cursor moves DOWN the page as y gets smaller. Components
take the y where they may start and return the y where the next one may start.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth

from models import Address, Company, Customer, Invoice, LineItem
from money import format_money, format_quantity
from payment_formatter import PaymentLine, payment_lines
from template_catalog import Theme, tint

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = 595, 842
INSET = 36
ELLIPSIS = "…"
FOOTER_TEXT = "Thanks for your business!"


# -----------------------------
# Text helpers
# -----------------------------
def wrap_text(text, font, size, max_width):
    words = str(text or "").split()
    lines = []
    current = ""

    def split_long_token(token: str):
        """Break a single long token (like an email or IBAN) into width-safe chunks."""
        if stringWidth(token, font, size) <= max_width:
            return [token]
        chunks = []
        remaining = token
        while remaining:
            lo, hi = 1, len(remaining)
            fit = 1
            while lo <= hi:
                mid = (lo + hi) // 2
                if stringWidth(remaining[:mid], font, size) <= max_width:
                    fit = mid
                    lo = mid + 1
                else:
                    hi = mid - 1
            chunks.append(remaining[:fit])
            remaining = remaining[fit:]
        return chunks

    expanded_words = []
    for w in words:
        expanded_words.extend(split_long_token(w))

    for w in expanded_words:
        test = current + (" " if current else "") + w
        if stringWidth(test, font, size) <= max_width:
            current = test
        else:
            if current:
                lines.append(current)
            current = w
    if current:
        lines.append(current)
    return lines or [""]


def fit_text(text, font, size, max_width) -> str:
    """Clip to one line, ending in an ellipsis when something was cut."""
    text = str(text or "")
    if stringWidth(text, font, size) <= max_width:
        return text
    lo, hi, fit = 0, len(text), 0
    while lo <= hi:
        mid = (lo + hi) // 2
        if stringWidth(text[:mid].rstrip() + ELLIPSIS, font, size) <= max_width:
            fit = mid
            lo = mid + 1
        else:
            hi = mid - 1
    return text[:fit].rstrip() + ELLIPSIS


def draw_text(pdf, x, y, text, font="Helvetica", size=10, color=colors.black):
    pdf.setFont(font, size)
    pdf.setFillColor(color)
    pdf.drawString(x, y, str(text))


def right_text(pdf, x, y, text, font="Helvetica", size=10, color=colors.black):
    pdf.setFont(font, size)
    pdf.setFillColor(color)
    w = pdf.stringWidth(str(text), font, size)
    pdf.drawString(x - w, y, str(text))


def center_text(pdf, x, y, text, font="Helvetica", size=10, color=colors.black):
    pdf.setFont(font, size)
    pdf.setFillColor(color)
    pdf.drawCentredString(x, y, str(text))


def notes_lines(notes: str | None, max_width, font="Helvetica", size=10) -> list[str]:
    raw = (notes or "").strip()
    if not raw:
        return []
    out = []
    for ln in raw.splitlines():
        ln = ln.strip()
        if ln:
            out.extend(wrap_text(ln, font, size, max_width))
    return out


# -----------------------------
# Parties
# -----------------------------
def address_lines(address: Address) -> list[str]:
    street = ", ".join(p for p in [address.line1.strip(), address.line2.strip()] if p)
    city_state = ", ".join(p for p in [address.city.strip(), address.state.strip()] if p)
    if city_state and address.zip.strip():
        city_state = f"{city_state} {address.zip.strip()}"
    else:
        city_state = city_state or address.zip.strip()
    return [p for p in [street, city_state, address.country.strip()] if p]


def company_lines(company: Company) -> list[str]:
    """Contact lines under the company name (the name itself is drawn separately)."""
    return [p for p in [
        company.address.one_line,
        company.email.strip(),
        company.phone.strip(),
        (company.website or "").strip(),
    ] if p]


def customer_lines(customer: Customer) -> list[str]:
    return [p for p in [
        (customer.organization or "").strip(),
        *address_lines(customer.address),
        customer.email.strip(),
        customer.phone.strip(),
    ] if p]


# -----------------------------
# Logo
# -----------------------------
def load_logo(logo) -> Optional[ImageReader]:
    """Accepts encoded bytes, a PIL image, a path or an ImageReader."""
    if logo is None:
        return None
    if isinstance(logo, ImageReader):
        return logo
    if isinstance(logo, (bytes, bytearray)):
        return ImageReader(io.BytesIO(bytes(logo)))
    return ImageReader(logo)


def draw_logo(pdf, logo, x, y_top, max_w, max_h, align="left") -> tuple[float, float]:
    """
    Draw the logo scaled to fit max_w x max_h with its top edge at y_top.
    Returns the drawn (width, height), or (0, 0) when there is no usable logo.
    """
    if logo is None:
        return 0.0, 0.0
    try:
        img = load_logo(logo)
        iw, ih = img.getSize()
        scale = min(max_w / float(iw), max_h / float(ih))
        w = float(iw) * scale
        h = float(ih) * scale
        logo_x = x - w if align == "right" else x
        pdf.drawImage(img, logo_x, y_top - h, width=w, height=h, mask="auto")
        return w, h
    except Exception:
        logger.warning("Logo could not be drawn, rendering without it", exc_info=True)
        return 0.0, 0.0


# -----------------------------
# Items table
# -----------------------------
COLUMN_TITLES = ("DESCRIPTION", "QTY", "RATE", "AMOUNT")


@dataclass(frozen=True)
class TableGeometry:
    # share of the table width per column; description takes what is left
    qty_share: float = 0.11
    rate_share: float = 0.18
    amount_share: float = 0.19
    header_height: float = 28
    row_height: float = 24
    min_row_height: float = 16
    trailing_margin: float = 10
    header_fill: str = "tint"  # "tint" or "solid"
    zebra: bool = True


DEFAULT_TABLE = TableGeometry()


@dataclass(frozen=True)
class TableRow:
    index: int
    description: str
    quantity: str
    rate: str
    amount: str
    top: float
    bottom: float
    tinted: bool
    summary: bool = False


@dataclass(frozen=True)
class TableLayout:
    x: float
    width: float
    columns: tuple[tuple[float, float], ...]
    header_top: float
    header_bottom: float
    row_height: float
    rows: tuple[TableRow, ...]
    collapsed: int
    next_y: float


def table_columns(x, width, geometry: TableGeometry = DEFAULT_TABLE):
    qty_w = width * geometry.qty_share
    rate_w = width * geometry.rate_share
    amount_w = width * geometry.amount_share
    desc_w = width - qty_w - rate_w - amount_w
    cols = []
    cx = x
    for w in (desc_w, qty_w, rate_w, amount_w):
        cols.append((cx, w))
        cx += w
    return tuple(cols)


def layout_items_table(
    top_y: float,
    items: Sequence[LineItem],
    currency: str,
    *,
    page_width: float = PAGE_WIDTH,
    left_inset: float = INSET,
    right_inset: float = INSET,
    geometry: TableGeometry = DEFAULT_TABLE,
    min_y: Optional[float] = None,
) -> TableLayout:
    """
    Work out where the header and each row go, without drawing anything.

    When `min_y` is given the table must end above it: rows first shrink
    toward `min_row_height`, and if that is not enough the tail of the list is
    folded into a single "+ N more items" row carrying their combined amount.
    """
    items = list(items)
    x = left_inset
    width = page_width - left_inset - right_inset
    header_bottom = top_y - geometry.header_height
    rows_top = header_bottom - 2

    row_h = geometry.row_height
    shown = items
    hidden: list[LineItem] = []
    if min_y is not None and items:
        available = max(0.0, rows_top - geometry.trailing_margin - min_y)
        if len(items) * row_h > available:
            if available / len(items) >= geometry.min_row_height:
                row_h = available / len(items)
                logger.info("Compressing %d line items to %.1fpt rows", len(items), row_h)
            else:
                row_h = geometry.min_row_height
                max_rows = max(1, int(available // row_h))
                shown, hidden = items[:max_rows - 1], items[max_rows - 1:]
                logger.info("Folding %d of %d line items into a summary row", len(hidden), len(items))

    rows = []
    for i, it in enumerate(shown):
        top = rows_top - i * row_h
        rows.append(TableRow(
            index=i,
            description=it.description,
            quantity=format_quantity(it.quantity),
            rate=format_money(it.rate, currency),
            amount=format_money(it.total, currency),
            top=top,
            bottom=top - row_h,
            tinted=geometry.zebra and i % 2 == 0,
        ))
    if hidden:
        i = len(rows)
        top = rows_top - i * row_h
        rest = sum((it.total for it in hidden), Decimal("0"))
        rows.append(TableRow(
            index=i,
            description=f"+ {len(hidden)} more items",
            quantity="",
            rate="",
            amount=format_money(rest, currency),
            top=top,
            bottom=top - row_h,
            tinted=geometry.zebra and i % 2 == 0,
            summary=True,
        ))

    last_bottom = rows[-1].bottom if rows else rows_top
    return TableLayout(
        x=x,
        width=width,
        columns=table_columns(x, width, geometry),
        header_top=top_y,
        header_bottom=header_bottom,
        row_height=row_h,
        rows=tuple(rows),
        collapsed=len(hidden),
        next_y=last_bottom - geometry.trailing_margin,
    )


def draw_items_table(
    pdf,
    top_y: float,
    items: Sequence[LineItem],
    currency: str,
    theme: Theme,
    *,
    page_width: float = PAGE_WIDTH,
    left_inset: float = INSET,
    right_inset: float = INSET,
    geometry: TableGeometry = DEFAULT_TABLE,
    min_y: Optional[float] = None,
) -> float:
    """Draw header + rows and return the y just below the table."""
    layout = layout_items_table(
        top_y, items, currency,
        page_width=page_width, left_inset=left_inset, right_inset=right_inset,
        geometry=geometry, min_y=min_y,
    )
    x, width = layout.x, layout.width

    # Header band
    if geometry.header_fill == "solid":
        band, label_color = theme.primary, colors.white
    else:
        band, label_color = tint(theme.primary, 0.08), theme.primary
    pdf.setFillColor(band)
    pdf.rect(x, layout.header_bottom, width, geometry.header_height, stroke=0, fill=1)

    header_y = layout.header_bottom + geometry.header_height / 2 - 3
    for i, ((cx, cw), title) in enumerate(zip(layout.columns, COLUMN_TITLES)):
        if i == 0:
            draw_text(pdf, cx + 8, header_y, title, "Helvetica-Bold", 9, label_color)
        else:
            right_text(pdf, cx + cw - 8, header_y, title, "Helvetica-Bold", 9, label_color)

    # Rows
    size = 10 if layout.row_height >= 20 else 8
    zebra_fill = tint(theme.primary, 0.04)
    desc_x, desc_w = layout.columns[0]
    for row in layout.rows:
        if row.tinted:
            pdf.setFillColor(zebra_fill)
            pdf.rect(x, row.bottom, width, row.top - row.bottom, stroke=0, fill=1)

        text_y = row.bottom + (row.top - row.bottom) / 2 - size * 0.35
        font = "Helvetica-Oblique" if row.summary else "Helvetica"
        draw_text(pdf, desc_x + 8, text_y, fit_text(row.description, font, size, desc_w - 16), font, size, theme.text)
        for (cx, cw), value in zip(layout.columns[1:], (row.quantity, row.rate, row.amount)):
            if value:
                right_text(pdf, cx + cw - 8, text_y, fit_text(value, "Helvetica", size, cw - 10), "Helvetica", size, theme.text)

        pdf.setStrokeColor(theme.line)
        pdf.setLineWidth(0.75)
        pdf.line(x, row.bottom, x + width, row.bottom)

    pdf.setStrokeColor(colors.black)
    return layout.next_y


# -----------------------------
# Totals
# -----------------------------
@dataclass(frozen=True)
class TotalsRow:
    label: str
    value: str
    bold: bool = False


TAX_PLACEHOLDER = "-"


def totals_rows(invoice: Invoice, currency: str) -> list[TotalsRow]:
    """
    Subtotal, Tax, Total, then Paid / Balance Due once something was paid.
    Tax is not modelled, so it is a placeholder and Total equals Subtotal.
    """
    rows = [
        TotalsRow("Subtotal", format_money(invoice.subtotal, currency)),
        TotalsRow("Tax", TAX_PLACEHOLDER),
        TotalsRow("Total", format_money(invoice.total, currency), bold=True),
    ]
    if invoice.total_paid > 0:
        rows.append(TotalsRow("Paid", format_money(invoice.total_paid, currency)))
        rows.append(TotalsRow("Balance Due", format_money(invoice.total_due, currency), bold=True))
    return rows


# -----------------------------
# Payment details
# -----------------------------
@dataclass(frozen=True)
class PaymentBlockGeometry:
    section_gap: float = 14
    title_height: float = 20
    row_height: float = 18
    row_gap: float = 6
    box_padding: float = 16
    box_gap: float = 6
    key_width: float = 140
    # extra lines of a wrapped value
    value_leading: float = 12
    max_value_lines: int = 4
    notes_height: float = 40
    notes_gap: float = 4
    notes_leading: float = 12


DEFAULT_PAYMENT_BLOCK = PaymentBlockGeometry()


@dataclass(frozen=True)
class PaymentRow:
    title: str
    values: tuple[str, ...]
    height: float
    summary: bool = False


def _has_notes(notes) -> bool:
    return bool((notes or "").strip())


def payment_value_width(width: float, geometry: PaymentBlockGeometry = DEFAULT_PAYMENT_BLOCK) -> float:
    return width - geometry.key_width - 12


def _row_height(n_lines: int, geometry: PaymentBlockGeometry) -> float:
    return geometry.row_height + max(0, n_lines - 1) * geometry.value_leading


def layout_payment_rows(
    lines: Sequence[PaymentLine],
    value_width: float,
    geometry: PaymentBlockGeometry = DEFAULT_PAYMENT_BLOCK,
) -> list[PaymentRow]:
    """Wrap each value over the value column; a row is as tall as its wrapped value."""
    rows = []
    for ln in lines:
        values = wrap_text(ln.value, "Helvetica", 10, value_width)
        if len(values) > geometry.max_value_lines:
            values = values[:geometry.max_value_lines]
            values[-1] = fit_text(values[-1] + ELLIPSIS, "Helvetica", 10, value_width)
        rows.append(PaymentRow(ln.title, tuple(values), _row_height(len(values), geometry)))
    return rows


def _block_height(rows: Sequence[PaymentRow], notes, geometry: PaymentBlockGeometry) -> float:
    if not rows and not _has_notes(notes):
        return 0.0
    h = geometry.section_gap + geometry.title_height
    if rows:
        h += sum(r.height + geometry.row_gap for r in rows) + geometry.box_padding
        h += geometry.box_gap
    if _has_notes(notes):
        h += geometry.notes_height + geometry.notes_gap
    return h


def _more_methods_row(count: int, geometry: PaymentBlockGeometry) -> PaymentRow:
    noun = "method" if count == 1 else "methods"
    return PaymentRow("More", (f"+ {count} more payment {noun}",), geometry.row_height, summary=True)


def plan_payment_block(
    lines: Sequence[PaymentLine],
    notes: str | None,
    width: float,
    geometry: PaymentBlockGeometry = DEFAULT_PAYMENT_BLOCK,
    max_height: Optional[float] = None,
) -> tuple[list[PaymentRow], float]:
    """
    Rows to draw and the height they take. When `max_height` is given and the
    block would be taller, trailing methods fold into one "+ N more payment
    methods" row. The summary row and the notes are always kept.
    """
    rows = layout_payment_rows(lines, payment_value_width(width, geometry), geometry)
    height = _block_height(rows, notes, geometry)
    if max_height is None or height <= max_height or not rows:
        return rows, height

    for keep in range(len(rows) - 1, -1, -1):
        folded = rows[:keep] + [_more_methods_row(len(rows) - keep, geometry)]
        height = _block_height(folded, notes, geometry)
        if height <= max_height:
            break
    logger.info("Folding %d of %d payment methods into a summary row", len(rows) - keep, len(rows))
    return folded, height


def payment_block_height(
    lines: Sequence[PaymentLine],
    notes: str | None,
    geometry: PaymentBlockGeometry = DEFAULT_PAYMENT_BLOCK,
    *,
    page_width: float = PAGE_WIDTH,
    left_inset: float = INSET,
    right_inset: float = INSET,
    max_height: Optional[float] = None,
) -> float:
    """Vertical space `draw_payment_block` will use; 0 when it draws nothing."""
    width = page_width - left_inset - right_inset
    return plan_payment_block(lines, notes, width, geometry, max_height)[1]


def draw_payment_block(
    pdf,
    top_y: float,
    theme: Theme,
    methods: Iterable,
    notes: str | None,
    *,
    page_width: float = PAGE_WIDTH,
    left_inset: float = INSET,
    right_inset: float = INSET,
    geometry: PaymentBlockGeometry = DEFAULT_PAYMENT_BLOCK,
    max_height: Optional[float] = None,
) -> float:
    """
    "Payment Details" section for the invoice's own methods and notes.
    Draws nothing and returns `top_y` unchanged when there is nothing to show.
    """
    lines = payment_lines(methods)
    if not lines and not _has_notes(notes):
        return top_y

    x = left_inset
    width = page_width - left_inset - right_inset
    rows, height = plan_payment_block(lines, notes, width, geometry, max_height)
    y = top_y - geometry.section_gap

    draw_text(pdf, x, y - 12, "Payment Details", "Helvetica-Bold", 12, theme.primary)
    y -= geometry.title_height

    if rows:
        box_h = sum(r.height + geometry.row_gap for r in rows) + geometry.box_padding
        pdf.setFillColor(theme.background)
        pdf.setStrokeColor(theme.line)
        pdf.setLineWidth(1)
        pdf.rect(x, y - box_h, width, box_h, stroke=1, fill=1)

        key_w = geometry.key_width
        row_top = y - geometry.box_padding / 2
        for row in rows:
            base = row_top - geometry.row_height / 2 - 3
            draw_text(pdf, x + 10, base, fit_text(row.title, "Helvetica-Bold", 10, key_w - 16), "Helvetica-Bold", 10, theme.subtle_text)
            font = "Helvetica-Oblique" if row.summary else "Helvetica"
            for text in row.values:
                draw_text(pdf, x + key_w, base, text, font, 10, theme.text)
                base -= geometry.value_leading
            row_top -= row.height + geometry.row_gap
        y -= box_h + geometry.box_gap

    if _has_notes(notes):
        body = notes_lines(notes, width, "Helvetica", 10)
        max_lines = max(1, int(geometry.notes_height // geometry.notes_leading))
        if len(body) > max_lines:
            body = body[:max_lines]
            body[-1] = fit_text(body[-1] + ELLIPSIS, "Helvetica", 10, width)
        ny = y - 10
        for ln in body:
            draw_text(pdf, x, ny, ln, "Helvetica", 10, theme.subtle_text)
            ny -= geometry.notes_leading
        y -= geometry.notes_height + geometry.notes_gap

    return top_y - height
