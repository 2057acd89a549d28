# template_catalog.py
"""
Colour themes, layout styles and the template list users pick from.

A template is just a (style, theme) pair. The catalog is the cross product of
every style with every theme; ids look like "modern-ocean-blue".
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from reportlab.lib import colors


def tint(color: colors.Color, amount: float) -> colors.Color:
    """`color` laid over white at `amount` opacity, as an opaque colour."""
    r, g, b = color.red, color.green, color.blue
    return colors.Color(
        1 - (1 - r) * amount,
        1 - (1 - g) * amount,
        1 - (1 - b) * amount,
    )


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")


@dataclass(frozen=True)
class Theme:
    name: str
    primary: colors.Color
    secondary: colors.Color
    accent: colors.Color
    background: colors.Color
    line: colors.Color
    subtle_text: colors.Color
    text: colors.Color = field(default_factory=lambda: colors.HexColor("#0f172a"))

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @classmethod
    def palette(cls, name, primary, secondary=None, accent=None) -> "Theme":
        """Fill in the derived colours the way every catalog theme does."""
        primary = colors.Color(*primary) if isinstance(primary, tuple) else primary
        if isinstance(secondary, tuple):
            secondary = colors.Color(*secondary)
        if isinstance(accent, tuple):
            accent = colors.Color(*accent)
        return cls(
            name=name,
            primary=primary,
            secondary=secondary or tint(primary, 0.7),
            accent=accent or tint(primary, 0.3),
            background=colors.white,
            line=colors.Color(0.85, 0.85, 0.85),
            subtle_text=colors.HexColor("#64748b"),
        )


class Style(str, Enum):
    MODERN = "modern"
    MINIMAL = "minimal"
    CLASSIC = "classic"
    SPLIT_PANEL = "split-panel"
    STRIP = "strip"
    CORPORATE = "corporate"

    @property
    def display_name(self) -> str:
        return self.value.replace("-", " ").title()


STYLE_DESCRIPTIONS = {
    Style.MODERN: "Colour bar, large title and a boxed totals summary",
    Style.MINIMAL: "Tinted band, two-column parties, no ornaments",
    Style.CLASSIC: "Framed page with a traditional letterhead",
    Style.SPLIT_PANEL: "Coloured side rail carrying your details and the amount due",
    Style.STRIP: "Summary strip with number, dates and the total up top",
    Style.CORPORATE: "Bordered letterhead, boxed invoice details and a framed bill-to",
}

FREE_STYLES = {Style.MODERN, Style.MINIMAL, Style.CLASSIC}


# -----------------------------
# Themes
# -----------------------------
THEMES: tuple[Theme, ...] = (
    Theme.palette("Ocean Blue", (0.0, 0.48, 0.65), (0.0, 0.65, 0.85)),
    Theme.palette("Forest Green", (0.0, 0.5, 0.0), (0.2, 0.7, 0.2)),
    Theme.palette("Royal Purple", (0.4, 0.0, 0.6), (0.6, 0.2, 0.8)),
    Theme.palette("Crimson Red", (0.8, 0.0, 0.0), (0.9, 0.2, 0.2)),
    Theme.palette("Midnight Blue", (0.1, 0.1, 0.3), (0.2, 0.2, 0.5)),
    Theme.palette("Sunset Orange", (1.0, 0.4, 0.0), (1.0, 0.6, 0.2)),
    Theme.palette("Emerald Green", (0.0, 0.7, 0.4), (0.2, 0.8, 0.5)),
    Theme.palette("Violet Dream", (0.6, 0.0, 0.8), (0.8, 0.2, 0.9)),
    Theme.palette("Golden Yellow", (1.0, 0.8, 0.0), (1.0, 0.9, 0.3)),
    Theme.palette("Coral Pink", (1.0, 0.4, 0.4), (1.0, 0.6, 0.6)),
    Theme.palette("Charcoal Gray", (0.2, 0.2, 0.2), (0.4, 0.4, 0.4)),
    Theme.palette("Navy Blue", (0.0, 0.0, 0.5), (0.2, 0.2, 0.7)),
    Theme.palette("Steel Blue", (0.3, 0.4, 0.6), (0.5, 0.6, 0.8)),
    Theme.palette("Slate Gray", (0.3, 0.3, 0.4), (0.5, 0.5, 0.6)),
    Theme.palette("Deep Teal", (0.0, 0.4, 0.4), (0.2, 0.6, 0.6)),
    Theme.palette("Electric Blue", (0.0, 0.5, 1.0), (0.3, 0.7, 1.0)),
    Theme.palette("Lime Green", (0.5, 1.0, 0.0), (0.7, 1.0, 0.3)),
    Theme.palette("Hot Pink", (1.0, 0.0, 0.5), (1.0, 0.3, 0.7)),
    Theme.palette("Turquoise", (0.0, 0.8, 0.8), (0.3, 0.9, 0.9)),
    Theme.palette("Amber", (1.0, 0.6, 0.0), (1.0, 0.8, 0.3)),
    Theme.palette("Magenta", (1.0, 0.0, 1.0), (1.0, 0.3, 1.0)),
    Theme.palette("Cyan", (0.0, 1.0, 1.0), (0.3, 1.0, 1.0)),
    Theme.palette("Indigo", (0.3, 0.0, 0.7), (0.5, 0.2, 0.9)),
    Theme.palette("Maroon", (0.5, 0.0, 0.0), (0.7, 0.2, 0.2)),
    Theme.palette("Olive", (0.5, 0.5, 0.0), (0.7, 0.7, 0.3)),
)

DEFAULT_TEMPLATE_ID = "modern-ocean-blue"


@dataclass(frozen=True)
class TemplateDescriptor:
    id: str
    name: str
    style: Style
    theme: Theme
    description: str = ""
    is_premium: bool = False


def build_catalog(styles=tuple(Style), themes=THEMES) -> list[TemplateDescriptor]:
    out = []
    for style in styles:
        for theme in themes:
            out.append(TemplateDescriptor(
                id=f"{style.value}-{theme.slug}",
                name=f"{style.display_name} · {theme.name}",
                style=style,
                theme=theme,
                description=STYLE_DESCRIPTIONS.get(style, ""),
                is_premium=style not in FREE_STYLES,
            ))
    return out


CATALOG: tuple[TemplateDescriptor, ...] = tuple(build_catalog())
_BY_ID = {t.id: t for t in CATALOG}


def get_template(template_id: str | None, default_id: str = DEFAULT_TEMPLATE_ID) -> TemplateDescriptor:
    """Look up a catalog entry; unknown or empty ids fall back to the default."""
    key = (template_id or "").strip().lower()
    if key in _BY_ID:
        return _BY_ID[key]
    return _BY_ID.get(default_id, CATALOG[0])


def templates_for_style(style: Style) -> list[TemplateDescriptor]:
    return [t for t in CATALOG if t.style == style]
