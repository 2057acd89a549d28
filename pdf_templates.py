# pdf_templates.py
"""
Invoice page designs.

`TemplateRenderer.draw` fixes the order every design follows: background,
header, bill-to, line items, totals, payment details, footer. Subclasses only
decide what each step looks like and where it sits; the items table and the
payment block come from pdf_layout and are shared by all of them. Payment
details are always taken from the invoice being drawn.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from reportlab.lib import colors

from models import Company, Customer, Invoice
from money import format_date, format_money
from payment_formatter import payment_lines
from pdf_layout import (
    DEFAULT_PAYMENT_BLOCK,
    DEFAULT_TABLE,
    FOOTER_TEXT,
    INSET,
    TAX_PLACEHOLDER,
    PaymentBlockGeometry,
    TableGeometry,
    center_text,
    company_lines,
    customer_lines,
    draw_items_table,
    draw_logo,
    draw_payment_block,
    draw_text,
    fit_text,
    payment_block_height,
    right_text,
    totals_rows,
    wrap_text,
)
from template_catalog import Style, Theme, tint


def shade(color: colors.Color, amount: float) -> colors.Color:
    """Darken towards black; amount 0.2 keeps 80% of each channel."""
    k = 1 - amount
    return colors.Color(color.red * k, color.green * k, color.blue * k)


@dataclass(frozen=True)
class RenderContext:
    pdf: Any
    page_width: float
    page_height: float
    invoice: Invoice
    company: Company
    customer: Customer
    currency: str
    logo: Any = None

    @property
    def issue_date(self) -> str:
        return format_date(self.invoice.issue_date)

    @property
    def due_date(self) -> str:
        return format_date(self.invoice.due_date or self.invoice.issue_date)


class TemplateRenderer:
    """
    Base contract for an invoice design. Subclasses override the `draw_*`
    steps; `draw` itself is not meant to be overridden.
    """

    style: Style = Style.MODERN
    left_inset: float = INSET
    right_inset: float = INSET
    table_geometry: TableGeometry = DEFAULT_TABLE
    payment_geometry: PaymentBlockGeometry = DEFAULT_PAYMENT_BLOCK
    totals_row_height: float = 20
    totals_padding: float = 16
    # kept free at the bottom of the page for the footer
    footer_reserve: float = 56

    def __init__(self, theme: Theme):
        self.theme = theme

    def draw(self, pdf, page, invoice: Invoice, company: Company, customer: Customer, currency: str, logo=None):
        page_w, page_h = page
        ctx = RenderContext(pdf, page_w, page_h, invoice, company, customer, currency, logo)

        self.draw_background(ctx)
        y = self.draw_header(ctx)
        y = self.draw_bill_to(ctx, y)
        budget = self.payment_budget(ctx, y)
        y = draw_items_table(
            pdf, y, invoice.items, currency, self.theme,
            page_width=page_w,
            left_inset=self.left_inset,
            right_inset=self.right_inset,
            geometry=self.table_geometry,
            min_y=self.table_floor(ctx, budget),
        )
        y = self.draw_totals(ctx, y)
        y = draw_payment_block(
            pdf, y, self.theme, invoice.payment_methods, invoice.payment_notes,
            page_width=page_w,
            left_inset=self.left_inset,
            right_inset=self.right_inset,
            geometry=self.payment_geometry,
            max_height=budget,
        )
        self.draw_footer(ctx, y)

    # -----------------------------
    # Space planning
    # -----------------------------
    def totals_height(self, ctx: RenderContext) -> float:
        return len(totals_rows(ctx.invoice, ctx.currency)) * self.totals_row_height + self.totals_padding

    def payment_budget(self, ctx: RenderContext, table_top: float) -> float:
        """
        Height the payment block may take: whatever is left once a table with
        a single row, the totals and the footer are placed.
        """
        g = self.table_geometry
        smallest_table = g.header_height + 2 + g.min_row_height + g.trailing_margin
        return table_top - smallest_table - self.totals_height(ctx) - self.footer_reserve

    def table_floor(self, ctx: RenderContext, payment_budget: Optional[float] = None) -> float:
        """Lowest y the items table may reach and still leave room for what follows it."""
        lines = payment_lines(ctx.invoice.payment_methods)
        block = payment_block_height(
            lines, ctx.invoice.payment_notes, self.payment_geometry,
            page_width=ctx.page_width,
            left_inset=self.left_inset,
            right_inset=self.right_inset,
            max_height=payment_budget,
        )
        return self.footer_reserve + block + self.totals_height(ctx)

    def footer_y(self, y: float) -> float:
        return max(min(y - 10, 80), 36)

    # -----------------------------
    # Steps
    # -----------------------------
    def draw_background(self, ctx: RenderContext):
        ctx.pdf.setFillColor(self.theme.background)
        ctx.pdf.rect(0, 0, ctx.page_width, ctx.page_height, stroke=0, fill=1)

    def draw_header(self, ctx: RenderContext) -> float:
        raise NotImplementedError

    def draw_bill_to(self, ctx: RenderContext, y: float) -> float:
        raise NotImplementedError

    def draw_totals(self, ctx: RenderContext, y: float) -> float:
        raise NotImplementedError

    def draw_footer(self, ctx: RenderContext, y: float):
        raise NotImplementedError


# -----------------------------
# Modern: colour bar, big title, boxed totals
# -----------------------------
class ModernTemplate(TemplateRenderer):
    style = Style.MODERN

    def draw_background(self, ctx):
        super().draw_background(ctx)
        ctx.pdf.setFillColor(self.theme.primary)
        ctx.pdf.rect(0, ctx.page_height - 8, ctx.page_width, 8, stroke=0, fill=1)

    def draw_header(self, ctx):
        pdf, W, H, t = ctx.pdf, ctx.page_width, ctx.page_height, self.theme
        left_w = W * 0.5 - 42

        draw_logo(pdf, ctx.logo, INSET, H - 24, 140, 60)
        right_text(pdf, W - INSET, H - 50, "INVOICE", "Helvetica-Bold", 28, t.primary)

        y = H - 105
        draw_text(pdf, INSET, y, fit_text(ctx.company.name, "Helvetica-Bold", 11, left_w), "Helvetica-Bold", 11, t.text)
        for ln in company_lines(ctx.company)[:3]:
            y -= 14
            draw_text(pdf, INSET, y, fit_text(ln, "Helvetica", 10, left_w), "Helvetica", 10, t.subtle_text)

        meta = [
            ("Number:", ctx.invoice.number),
            ("Issue Date:", ctx.issue_date),
            ("Due Date:", ctx.due_date),
            ("Status:", ctx.invoice.status.label),
        ]
        my = H - 77
        for label, value in meta:
            right_text(pdf, W - INSET - 140, my, label, "Helvetica", 10, t.subtle_text)
            right_text(pdf, W - INSET, my, value, "Helvetica", 10, t.text)
            my -= 16

        return min(H - 160, y - 24)

    def draw_bill_to(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        col_w = W / 2 - 72
        draw_text(pdf, INSET, y - 12, "Bill To", "Helvetica-Bold", 12, t.primary)
        y -= 30
        draw_text(pdf, INSET, y, fit_text(ctx.customer.name, "Helvetica", 12, col_w), "Helvetica", 12, t.text)
        for ln in customer_lines(ctx.customer)[:3]:
            y -= 15
            draw_text(pdf, INSET, y, fit_text(ln, "Helvetica", 10, col_w), "Helvetica", 10, t.subtle_text)
        return y - 22

    def draw_totals(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        rows = totals_rows(ctx.invoice, ctx.currency)
        box_x = W - INSET - 240
        box_h = len(rows) * self.totals_row_height + 8
        top = y - 4

        pdf.setFillColor(tint(t.primary, 0.05))
        pdf.setStrokeColor(t.line)
        pdf.setLineWidth(1)
        pdf.roundRect(box_x, top - box_h, 240, box_h, 6, stroke=1, fill=1)

        ty = top - 18
        for row in rows:
            font = "Helvetica-Bold" if row.bold else "Helvetica"
            draw_text(pdf, box_x + 10, ty, row.label, font, 12, t.subtle_text)
            right_text(pdf, W - INSET - 10, ty, row.value, font, 12, t.text)
            ty -= self.totals_row_height
        return top - box_h - 4

    def draw_footer(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        foot_y = self.footer_y(y)
        pdf.setStrokeColor(t.line)
        pdf.setLineWidth(1)
        pdf.line(INSET, foot_y, W - INSET, foot_y)
        center_text(pdf, W / 2, foot_y - 16, FOOTER_TEXT, "Helvetica", 11, t.subtle_text)


# -----------------------------
# Minimal: light band, From / Bill To columns, no zebra
# -----------------------------
class MinimalTemplate(TemplateRenderer):
    style = Style.MINIMAL
    table_geometry = TableGeometry(zebra=False)

    def draw_background(self, ctx):
        super().draw_background(ctx)
        ctx.pdf.setFillColor(tint(self.theme.primary, 0.06))
        ctx.pdf.rect(0, ctx.page_height - 40, ctx.page_width, 40, stroke=0, fill=1)

    def draw_header(self, ctx):
        pdf, W, H, t = ctx.pdf, ctx.page_width, ctx.page_height, self.theme
        draw_logo(pdf, ctx.logo, INSET, H - 6, 140, 28)
        draw_text(pdf, INSET, H - 72, f"Invoice {ctx.invoice.number}", "Helvetica-Bold", 22, t.text)
        right_text(pdf, W - INSET, H - 67, f"Issue: {ctx.issue_date}", "Helvetica", 10, t.subtle_text)
        right_text(pdf, W - INSET, H - 83, f"Due: {ctx.due_date}", "Helvetica", 10, t.subtle_text)

        # From column; Bill To sits beside it at the same height
        top = H - 96
        col_w = 260
        draw_text(pdf, INSET, top - 12, "From", "Helvetica-Bold", 12, t.primary)
        draw_text(pdf, INSET, top - 28, fit_text(ctx.company.name, "Helvetica", 12, col_w), "Helvetica", 12, t.text)
        ly = top - 28
        for ln in company_lines(ctx.company)[:3]:
            ly -= 14
            draw_text(pdf, INSET, ly, fit_text(ln, "Helvetica", 10, col_w), "Helvetica", 10, t.subtle_text)
        return top

    def draw_bill_to(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        x = 320
        col_w = W - x - INSET
        draw_text(pdf, x, y - 12, "Bill To", "Helvetica-Bold", 12, t.primary)
        draw_text(pdf, x, y - 28, fit_text(ctx.customer.name, "Helvetica", 12, col_w), "Helvetica", 12, t.text)
        ly = y - 28
        for ln in customer_lines(ctx.customer)[:3]:
            ly -= 14
            draw_text(pdf, x, ly, fit_text(ln, "Helvetica", 10, col_w), "Helvetica", 10, t.subtle_text)

        rows_used = max(len(company_lines(ctx.company)[:3]), len(customer_lines(ctx.customer)[:3]))
        return y - 48 - rows_used * 14

    def draw_totals(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        label_x = W - INSET - 240
        ty = y - 14
        for row in totals_rows(ctx.invoice, ctx.currency):
            if row.bold:
                pdf.setStrokeColor(t.line)
                pdf.setLineWidth(0.75)
                pdf.line(label_x, ty + 14, W - INSET, ty + 14)
                draw_text(pdf, label_x, ty, row.label.upper(), "Helvetica-Bold", 12, t.subtle_text)
                right_text(pdf, W - INSET, ty, row.value, "Helvetica-Bold", 12, t.text)
            else:
                draw_text(pdf, label_x, ty, row.label, "Helvetica", 12, t.subtle_text)
                right_text(pdf, W - INSET, ty, row.value, "Helvetica", 12, t.text)
            ty -= self.totals_row_height
        return ty + self.totals_row_height - 10

    def draw_footer(self, ctx, y):
        center_text(ctx.pdf, ctx.page_width / 2, self.footer_y(y) - 16, FOOTER_TEXT, "Helvetica", 9, self.theme.subtle_text)


# -----------------------------
# Classic: framed page, letterhead
# -----------------------------
class ClassicTemplate(TemplateRenderer):
    style = Style.CLASSIC
    totals_row_height = 18

    def draw_background(self, ctx):
        super().draw_background(ctx)
        pdf = ctx.pdf
        pdf.setStrokeColor(self.theme.line)
        pdf.setLineWidth(1)
        pdf.rect(18, 18, ctx.page_width - 36, ctx.page_height - 36, stroke=1, fill=0)

    def draw_header(self, ctx):
        pdf, W, H, t = ctx.pdf, ctx.page_width, ctx.page_height, self.theme

        _, logo_h = draw_logo(pdf, ctx.logo, INSET, H - 30, 160, 60)
        if logo_h:
            y = H - 30 - logo_h - 14
        else:
            draw_text(pdf, INSET, H - 64, fit_text(ctx.company.name, "Helvetica-Bold", 24, 260), "Helvetica-Bold", 24, t.primary)
            y = H - 84
        for ln in company_lines(ctx.company)[:3]:
            draw_text(pdf, INSET, y, fit_text(ln, "Helvetica", 10, 280), "Helvetica", 10, t.subtle_text)
            y -= 13

        right_text(pdf, W - INSET, H - 64, "INVOICE", "Helvetica-Bold", 24, t.primary)
        right_text(pdf, W - INSET, H - 84, f"No. {ctx.invoice.number}", "Helvetica", 12, t.subtle_text)
        right_text(pdf, W - INSET, H - 100, f"Date: {ctx.issue_date}", "Helvetica", 10, t.subtle_text)
        right_text(pdf, W - INSET, H - 114, f"Due: {ctx.due_date}", "Helvetica", 10, t.subtle_text)

        return min(H - 120, y - 8)

    def draw_bill_to(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        col_w = W / 2 - 72
        draw_text(pdf, INSET, y - 12, "Bill To:", "Helvetica-Bold", 12, t.text)
        y -= 30
        draw_text(pdf, INSET, y, fit_text(ctx.customer.name, "Helvetica", 12, col_w), "Helvetica", 12, t.text)
        for ln in customer_lines(ctx.customer)[:3]:
            y -= 14
            draw_text(pdf, INSET, y, fit_text(ln, "Helvetica", 10, col_w), "Helvetica", 10, t.subtle_text)
        return y - 18

    def draw_totals(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        label_x = W - INSET - 200
        ty = y - 12
        for row in totals_rows(ctx.invoice, ctx.currency):
            font = "Helvetica-Bold" if row.bold else "Helvetica"
            color = t.text if row.bold else t.subtle_text
            draw_text(pdf, label_x, ty, f"{row.label}:", font, 12, color)
            right_text(pdf, W - INSET, ty, row.value, font, 12, t.text)
            ty -= self.totals_row_height
        return ty + self.totals_row_height - 8

    def draw_footer(self, ctx, y):
        center_text(ctx.pdf, ctx.page_width / 2, self.footer_y(y) - 12, FOOTER_TEXT, "Helvetica-Oblique", 9, self.theme.subtle_text)


# -----------------------------
# Split panel: coloured rail on the left
# -----------------------------
RAIL_WIDTH = 150
RAIL_TEXT = colors.HexColor("#e2e8f0")


class SplitPanelTemplate(TemplateRenderer):
    style = Style.SPLIT_PANEL
    left_inset = RAIL_WIDTH + 24
    table_geometry = TableGeometry(qty_share=0.12, rate_share=0.2, amount_share=0.21)
    payment_geometry = PaymentBlockGeometry(key_width=110)

    def draw_background(self, ctx):
        super().draw_background(ctx)
        ctx.pdf.setFillColor(self.theme.primary)
        ctx.pdf.rect(0, 0, RAIL_WIDTH, ctx.page_height, stroke=0, fill=1)

    def _draw_rail(self, ctx):
        pdf, H = ctx.pdf, ctx.page_height
        inner_w = RAIL_WIDTH - 24

        logo_top = H - 36
        _, logo_h = draw_logo(pdf, ctx.logo, 12, logo_top, inner_w, 60)
        # text starts below the logo so the two never overlap
        y = logo_top - logo_h - 14 if logo_h else logo_top - 8
        for ln in wrap_text(ctx.company.name, "Helvetica-Bold", 11, inner_w)[:2]:
            draw_text(pdf, 12, y, ln, "Helvetica-Bold", 11, colors.white)
            y -= 13
        y -= 4
        for info in company_lines(ctx.company):
            for ln in wrap_text(info, "Helvetica", 8, inner_w)[:2]:
                draw_text(pdf, 12, y, ln, "Helvetica", 8, RAIL_TEXT)
                y -= 11

        # Amount summary at the foot of the rail
        sy = 160
        draw_text(pdf, 12, sy, "SUMMARY", "Helvetica-Bold", 10, colors.white)
        sy -= 20
        for row in totals_rows(ctx.invoice, ctx.currency):
            if row.value == TAX_PLACEHOLDER:
                continue
            font = "Helvetica-Bold" if row.bold else "Helvetica"
            draw_text(pdf, 12, sy, row.label, font, 9, RAIL_TEXT)
            sy -= 12
            draw_text(pdf, 12, sy, fit_text(row.value, font, 10, inner_w), font, 10, colors.white)
            sy -= 16

    def draw_header(self, ctx):
        pdf, W, H, t = ctx.pdf, ctx.page_width, ctx.page_height, self.theme
        self._draw_rail(ctx)

        cx = self.left_inset
        cw = W - cx - self.right_inset
        card_h = 72
        card_y = H - 36 - card_h
        pdf.setFillColor(tint(t.primary, 0.04))
        pdf.setStrokeColor(t.line)
        pdf.setLineWidth(1)
        pdf.roundRect(cx, card_y, cw, card_h, 10, stroke=1, fill=1)

        draw_text(pdf, cx + 14, card_y + card_h - 40, "INVOICE", "Helvetica-Bold", 18, t.primary)
        right_text(pdf, cx + cw - 14, card_y + card_h - 20, f"No. {ctx.invoice.number}", "Helvetica-Bold", 10, t.text)
        right_text(pdf, cx + cw - 14, card_y + card_h - 36, f"Issue date: {ctx.issue_date}", "Helvetica", 9, t.subtle_text)
        right_text(pdf, cx + cw - 14, card_y + card_h - 50, f"Due date: {ctx.due_date}", "Helvetica", 9, t.subtle_text)
        right_text(pdf, cx + cw - 14, card_y + card_h - 64, ctx.invoice.status.label, "Helvetica", 9, t.subtle_text)
        return card_y - 16

    def draw_bill_to(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        cx = self.left_inset
        cw = W - cx - self.right_inset
        lines = customer_lines(ctx.customer)[:3]
        card_h = 44 + len(lines) * 13

        pdf.setFillColor(colors.white)
        pdf.setStrokeColor(t.line)
        pdf.setLineWidth(1)
        pdf.roundRect(cx, y - card_h, cw, card_h, 10, stroke=1, fill=1)

        draw_text(pdf, cx + 12, y - 16, "BILL TO", "Helvetica-Bold", 10, t.subtle_text)
        draw_text(pdf, cx + 12, y - 32, fit_text(ctx.customer.name, "Helvetica-Bold", 11, cw - 24), "Helvetica-Bold", 11, t.text)
        ly = y - 32
        for ln in lines:
            ly -= 13
            draw_text(pdf, cx + 12, ly, fit_text(ln, "Helvetica", 9, cw - 24), "Helvetica", 9, t.text)
        return y - card_h - 18

    def draw_totals(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        right_x = W - self.right_inset
        label_x = right_x - 220
        ty = y - 14
        for row in totals_rows(ctx.invoice, ctx.currency):
            font = "Helvetica-Bold" if row.bold else "Helvetica"
            draw_text(pdf, label_x, ty, row.label, font, 10, t.text)
            right_text(pdf, right_x, ty, row.value, font, 10, t.text)
            ty -= self.totals_row_height
        return ty + self.totals_row_height - 8

    def draw_footer(self, ctx, y):
        cx = self.left_inset
        mid = cx + (ctx.page_width - cx - self.right_inset) / 2
        center_text(ctx.pdf, mid, self.footer_y(y) - 12, FOOTER_TEXT, "Helvetica-Oblique", 9, self.theme.subtle_text)


# -----------------------------
# Strip: summary strip under the header
# -----------------------------
class StripTemplate(TemplateRenderer):
    style = Style.STRIP
    table_geometry = TableGeometry(header_fill="solid")
    totals_row_height = 18

    def draw_header(self, ctx):
        pdf, W, H, t = ctx.pdf, ctx.page_width, ctx.page_height, self.theme

        logo_w, _ = draw_logo(pdf, ctx.logo, INSET, H - 30, 80, 32)
        name_x = INSET + (logo_w + 10 if logo_w else 0)
        draw_text(pdf, name_x, H - 44, fit_text(ctx.company.name, "Helvetica-Bold", 12, 260), "Helvetica-Bold", 12, t.text)
        iy = H - 58
        for ln in company_lines(ctx.company)[:2]:
            draw_text(pdf, name_x, iy, fit_text(ln, "Helvetica", 9, 260), "Helvetica", 9, t.subtle_text)
            iy -= 12

        right_text(pdf, W - INSET, H - 44, f"Invoice {ctx.invoice.number}", "Helvetica-Bold", 12, t.text)
        right_text(pdf, W - INSET, H - 58, ctx.invoice.status.label, "Helvetica", 9, t.subtle_text)

        rule_y = min(H - 90, iy - 4)
        pdf.setStrokeColor(t.line)
        pdf.setLineWidth(1)
        pdf.line(INSET, rule_y, W - INSET, rule_y)
        return rule_y - 18

    def draw_bill_to(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        draw_text(pdf, INSET, y, "BILL TO", "Helvetica-Bold", 9, t.text)
        by = y - 14
        draw_text(pdf, INSET, by, fit_text(ctx.customer.name, "Helvetica", 9, 230), "Helvetica", 9, t.text)
        for ln in customer_lines(ctx.customer)[:3]:
            by -= 12
            draw_text(pdf, INSET, by, fit_text(ln, "Helvetica", 9, 230), "Helvetica", 9, t.text)

        # Meta block on right
        meta_x = W - INSET - 180
        for i, (label, value) in enumerate((("Issue date:", ctx.issue_date), ("Due date:", ctx.due_date))):
            my = y - 4 - i * 14
            draw_text(pdf, meta_x, my, label, "Helvetica-Bold", 9, t.text)
            right_text(pdf, W - INSET, my, value, "Helvetica", 10, t.text)

        # Summary strip
        strip_top = by - 20
        strip_h = 40
        strip_w = W - 2 * INSET
        box_w = strip_w / 4
        pdf.setFillColor(t.primary)
        pdf.rect(INSET, strip_top - strip_h, strip_w, strip_h, stroke=0, fill=1)
        pdf.setFillColor(shade(t.primary, 0.25))
        pdf.rect(INSET + 3 * box_w, strip_top - strip_h, box_w, strip_h, stroke=0, fill=1)

        cells = (
            ("Invoice No.", ctx.invoice.number),
            ("Issue date", ctx.issue_date),
            ("Due date", ctx.due_date),
            ("Amount due", format_money(ctx.invoice.total_due, ctx.currency)),
        )
        for i, (label, value) in enumerate(cells):
            bx = INSET + i * box_w + 10
            draw_text(pdf, bx, strip_top - 14, label, "Helvetica-Bold", 8, colors.white)
            draw_text(pdf, bx, strip_top - 30, fit_text(value, "Helvetica-Bold", 11, box_w - 16), "Helvetica-Bold", 11, colors.white)
        return strip_top - strip_h - 18

    def draw_totals(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        label_x = W - INSET - 200
        ty = y - 12
        for row in totals_rows(ctx.invoice, ctx.currency):
            label_font = ("Helvetica-Bold", 10) if row.bold else ("Helvetica-Bold", 9)
            value_font = ("Helvetica-Bold", 11) if row.bold else ("Helvetica", 10)
            draw_text(pdf, label_x, ty, row.label, *label_font, t.text)
            right_text(pdf, W - INSET, ty, row.value, *value_font, t.text)
            ty -= self.totals_row_height
        return ty + self.totals_row_height - 8

    def draw_footer(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        foot_y = self.footer_y(y)
        pdf.setStrokeColor(t.line)
        pdf.setLineWidth(1)
        pdf.line(INSET, foot_y, W - INSET, foot_y)
        draw_text(pdf, INSET, foot_y - 14, FOOTER_TEXT, "Helvetica-Oblique", 9, t.subtle_text)


# -----------------------------
# Corporate: bordered letterhead and framed boxes
# -----------------------------
class CorporateTemplate(TemplateRenderer):
    style = Style.CORPORATE
    left_inset = 50
    right_inset = 50

    def draw_header(self, ctx):
        pdf, W, H, t = ctx.pdf, ctx.page_width, ctx.page_height, self.theme

        pdf.setStrokeColor(t.primary)
        pdf.setLineWidth(3)
        pdf.rect(40, H - 140, W - 80, 100, stroke=1, fill=0)

        logo_w, _ = draw_logo(pdf, ctx.logo, 60, H - 60, 60, 60)
        name_x = 140 if logo_w else 60
        name_w = W - 210 - name_x
        draw_text(pdf, name_x, H - 88, fit_text(ctx.company.name, "Helvetica-Bold", 22, name_w), "Helvetica-Bold", 22, t.primary)
        dy = H - 106
        for ln in company_lines(ctx.company)[:2]:
            draw_text(pdf, name_x, dy, fit_text(ln, "Helvetica", 10, name_w), "Helvetica", 10, t.text)
            dy -= 14

        # Invoice details box
        bx = W - 200
        pdf.setStrokeColor(tint(t.primary, 0.5))
        pdf.setLineWidth(1)
        pdf.rect(bx, H - 120, 150, 60, stroke=1, fill=0)
        draw_text(pdf, bx + 10, H - 80, "INVOICE", "Helvetica-Bold", 16, t.primary)
        draw_text(pdf, bx + 10, H - 98, fit_text(f"Number: {ctx.invoice.number}", "Helvetica", 10, 130), "Helvetica", 10, t.text)
        draw_text(pdf, bx + 10, H - 112, f"Date: {ctx.issue_date}", "Helvetica", 10, t.text)
        return H - 180

    def draw_bill_to(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        x = self.left_inset
        pdf.setStrokeColor(tint(t.primary, 0.3))
        pdf.setLineWidth(1)
        pdf.rect(x, y - 80, 250, 80, stroke=1, fill=0)

        draw_text(pdf, x + 10, y - 18, "BILL TO", "Helvetica-Bold", 10, t.primary)
        draw_text(pdf, x + 10, y - 36, fit_text(ctx.customer.name, "Helvetica-Bold", 12, 230), "Helvetica-Bold", 12, t.text)
        ly = y - 36
        for ln in customer_lines(ctx.customer)[:2]:
            ly -= 15
            draw_text(pdf, x + 10, ly, fit_text(ln, "Helvetica", 10, 230), "Helvetica", 10, t.subtle_text)

        right_x = W - self.right_inset
        right_text(pdf, right_x, y - 18, f"Due: {ctx.due_date}", "Helvetica-Bold", 10, t.text)
        right_text(pdf, right_x, y - 34, f"Status: {ctx.invoice.status.label}", "Helvetica", 10, t.subtle_text)
        return y - 80 - 18

    def draw_totals(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        rows = totals_rows(ctx.invoice, ctx.currency)
        right_x = W - self.right_inset
        box_x = right_x - 220
        box_h = len(rows) * self.totals_row_height + 8
        top = y - 4

        pdf.setStrokeColor(t.primary)
        pdf.setLineWidth(1.5)
        pdf.rect(box_x, top - box_h, 220, box_h, stroke=1, fill=0)

        ty = top - 18
        for row in rows:
            font = "Helvetica-Bold" if row.bold else "Helvetica"
            color = t.primary if row.bold else t.text
            draw_text(pdf, box_x + 10, ty, row.label, font, 11, color)
            right_text(pdf, right_x - 10, ty, row.value, font, 11, color)
            ty -= self.totals_row_height
        return top - box_h - 4

    def draw_footer(self, ctx, y):
        pdf, W, t = ctx.pdf, ctx.page_width, self.theme
        foot_y = self.footer_y(y)
        pdf.setStrokeColor(t.primary)
        pdf.setLineWidth(2)
        pdf.line(self.left_inset, foot_y, W - self.right_inset, foot_y)
        center_text(pdf, W / 2, foot_y - 14, FOOTER_TEXT, "Helvetica", 9, t.subtle_text)


RENDERERS: dict[Style, type[TemplateRenderer]] = {
    Style.MODERN: ModernTemplate,
    Style.MINIMAL: MinimalTemplate,
    Style.CLASSIC: ClassicTemplate,
    Style.SPLIT_PANEL: SplitPanelTemplate,
    Style.STRIP: StripTemplate,
    Style.CORPORATE: CorporateTemplate,
}


def create_renderer(style: Optional[Style | str], theme: Theme) -> TemplateRenderer:
    """Renderer for a style; unknown styles get the modern layout."""
    try:
        key = Style(style)
    except ValueError:
        key = Style.MODERN
    return RENDERERS.get(key, ModernTemplate)(theme)
