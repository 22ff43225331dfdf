"""Fonts, themes, styles, and page settings for PDF rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont


@dataclass(slots=True)
class PageSettings:
    """Geometry and type sizes used while rendering a chapter.

    Example:
        >>> settings = PageSettings()
        >>> settings.body_width > 0
        True
    """

    page_width: float = letter[0]
    page_height: float = letter[1]
    margin_left: float = 0.75 * inch
    margin_right: float = 0.75 * inch
    margin_top: float = 0.75 * inch
    margin_bottom: float = 0.75 * inch
    font_name: str = "Times-Roman"
    font_size: float = 12.0
    leading_ratio: float = 1.35
    label_scale: float = 0.6
    book_title_scale: float = 1.2
    chapter_number_scale: float = 6.0
    justify: bool = True
    hyphenate: bool = True

    @property
    def body_width(self) -> float:
        """Return the width available for content inside margins."""

        return self.page_width - self.margin_left - self.margin_right

    @property
    def page_size(self) -> Tuple[float, float]:
        return (self.page_width, self.page_height)

    @property
    def label_font_size(self) -> float:
        """Return the size of superscript verse numbers in paragraph mode."""

        return round(self.font_size * self.label_scale, 1)


@dataclass(slots=True)
class Theme:
    """Reading colours: page background, body text, and red letters."""

    name: str
    background: colors.Color
    text_color: colors.Color
    red_letter_color: colors.Color

    @property
    def red_letter_hex(self) -> str:
        """Return the red-letter colour as ``#rrggbb`` for inline markup.

        Example:
            >>> LIGHT.red_letter_hex
            '#ff0000'
        """

        return "#" + self.red_letter_color.hexval()[2:].lower()


LIGHT = Theme(
    name="Light",
    background=colors.HexColor("#FFFFFF"),
    text_color=colors.HexColor("#000000"),
    red_letter_color=colors.HexColor("#FF0000"),
)
DARK = Theme(
    name="Dark",
    background=colors.HexColor("#000000"),
    text_color=colors.HexColor("#FFFFFF"),
    red_letter_color=colors.HexColor("#FF5555"),
)
PREBUILT_THEMES: Tuple[Theme, ...] = (LIGHT, DARK)


def theme_by_name(name: str | None) -> Theme:
    """Return the prebuilt theme called ``name``, falling back to Light.

    Example:
        >>> theme_by_name("dark").name
        'Dark'
        >>> theme_by_name("Sepia").name
        'Light'
    """

    if name:
        for theme in PREBUILT_THEMES:
            if theme.name.lower() == name.lower():
                return theme
    return LIGHT


def register_font_family(font_path: Path, name: str) -> str:
    """Register a TrueType family for the body text and return its name.

    Bold and italic faces are looked up next to ``font_path`` as
    ``<stem>-Bold``/``<stem>-Italic``/``<stem>-BoldItalic``; a missing face
    falls back to the regular one.
    """

    faces = {
        "normal": name,
        "bold": f"{name}-Bold",
        "italic": f"{name}-Italic",
        "boldItalic": f"{name}-BoldItalic",
    }
    suffixes = {"bold": "-Bold", "italic": "-Italic", "boldItalic": "-BoldItalic"}
    registered = pdfmetrics.getRegisteredFontNames()
    if name not in registered:
        pdfmetrics.registerFont(TTFont(name, str(font_path)))
    for face, suffix in suffixes.items():
        face_path = font_path.with_name(f"{font_path.stem}{suffix}{font_path.suffix}")
        if not face_path.exists():
            faces[face] = name
            continue
        if faces[face] not in registered:
            pdfmetrics.registerFont(TTFont(faces[face], str(face_path)))
    pdfmetrics.registerFontFamily(name, **faces)
    return name


def _bold_font(font_name: str) -> str:
    """Return the bold face for a built-in or registered family."""

    builtin = {
        "Times-Roman": "Times-Bold",
        "Helvetica": "Helvetica-Bold",
        "Courier": "Courier-Bold",
    }
    if font_name in builtin:
        return builtin[font_name]
    bold = f"{font_name}-Bold"
    return bold if bold in pdfmetrics.getRegisteredFontNames() else font_name


def build_styles(settings: PageSettings, theme: Theme) -> Dict[str, ParagraphStyle]:
    """Create the paragraph styles used for a chapter.

    Args:
        settings: Page settings with font fields populated.
        theme: Colour theme for body and header text.
    Returns:
        Mapping with ``book_title``, ``chapter_number`` and ``body`` styles.

    Example:
        >>> styles = build_styles(PageSettings(), LIGHT)
        >>> sorted(styles)
        ['body', 'book_title', 'chapter_number']
    """

    base = getSampleStyleSheet()
    size = settings.font_size
    body = ParagraphStyle(
        "body",
        parent=base["Normal"],
        fontName=settings.font_name,
        fontSize=size,
        leading=size * settings.leading_ratio,
        alignment=TA_JUSTIFY if settings.justify else TA_LEFT,
        textColor=theme.text_color,
        spaceAfter=size * 0.6,
    )
    title_size = size * settings.book_title_scale
    book_title = ParagraphStyle(
        "book_title",
        parent=body,
        fontSize=title_size,
        leading=title_size * settings.leading_ratio,
        alignment=TA_CENTER,
        spaceAfter=0,
    )
    number_size = size * settings.chapter_number_scale
    chapter_number = ParagraphStyle(
        "chapter_number",
        parent=body,
        fontName=_bold_font(settings.font_name),
        fontSize=number_size,
        leading=number_size * 1.1,
        alignment=TA_CENTER,
        spaceAfter=size,
    )
    return {
        "body": body,
        "book_title": book_title,
        "chapter_number": chapter_number,
    }
