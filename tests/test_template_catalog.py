from reportlab.lib import colors

from pdf_templates import RENDERERS, ClassicTemplate, CorporateTemplate, ModernTemplate, create_renderer
from template_catalog import (
    CATALOG,
    DEFAULT_TEMPLATE_ID,
    THEMES,
    Style,
    Theme,
    get_template,
    templates_for_style,
    tint,
)


def test_catalog_is_style_by_theme_cross_product():
    assert len(CATALOG) == len(Style) * len(THEMES)
    assert len({t.id for t in CATALOG}) == len(CATALOG)
    assert len(templates_for_style(Style.MINIMAL)) == len(THEMES)


def test_ids_and_lookup():
    t = get_template("Classic-Forest-Green")
    assert t.id == "classic-forest-green"
    assert t.style == Style.CLASSIC
    assert t.theme.name == "Forest Green"


def test_unknown_id_falls_back_to_default():
    assert get_template("nope").id == DEFAULT_TEMPLATE_ID
    assert get_template(None).id == DEFAULT_TEMPLATE_ID


def test_core_styles_are_free():
    assert not get_template("modern-amber").is_premium
    assert get_template("strip-amber").is_premium


def test_palette_derives_missing_colours():
    theme = Theme.palette("Test", (0.0, 0.0, 1.0))
    assert theme.secondary.rgb() == tint(colors.Color(0, 0, 1), 0.7).rgb()
    assert theme.accent.rgb() == tint(colors.Color(0, 0, 1), 0.3).rgb()
    assert theme.background.rgb() == (1, 1, 1)


def test_tint_blends_towards_white():
    c = tint(colors.Color(0, 0, 0), 0.25)
    assert (c.red, c.green, c.blue) == (0.75, 0.75, 0.75)


def test_every_style_has_a_renderer():
    assert set(RENDERERS) == set(Style)
    theme = THEMES[0]
    assert isinstance(create_renderer(Style.CLASSIC, theme), ClassicTemplate)
    assert isinstance(create_renderer("classic", theme), ClassicTemplate)
    assert isinstance(create_renderer("fancy", theme), ModernTemplate)
    assert isinstance(create_renderer("corporate", theme), CorporateTemplate)


def test_corporate_templates_are_listed():
    t = get_template("corporate-navy-blue")
    assert t.style == Style.CORPORATE
    assert t.is_premium
    assert t.name.startswith("Corporate")
