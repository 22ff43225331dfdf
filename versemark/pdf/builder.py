"""PDF generation for composed chapters."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from pyphen import Pyphen
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, PageBreak, Paragraph, SimpleDocTemplate
from tqdm import tqdm

from ..models import ComposedChapter
from .constants import _debug
from .markup import block_markup, chapter_blocks, header_markup
from .settings import LIGHT, PageSettings, Theme, build_styles

__all__ = ["build_pdf", "chapter_flowables"]


def chapter_flowables(
    chapter: ComposedChapter,
    styles: Dict[str, ParagraphStyle],
    theme: Theme,
    settings: PageSettings,
    hyphenator: Pyphen | None = None,
) -> List[Flowable]:
    """Return the title block and verse paragraphs for one chapter.

    An empty chapter yields no flowables.
    """

    if not chapter.segments:
        return []
    header = header_markup(chapter)
    flowables: List[Flowable] = [
        Paragraph(header["book_title"], styles["book_title"]),
        Paragraph(header["chapter_number"], styles["chapter_number"]),
    ]
    for block in chapter_blocks(chapter):
        markup = block_markup(chapter, block, theme, settings, hyphenator=hyphenator)
        flowables.append(Paragraph(markup, styles["body"]))
    return flowables


def _paint_background(theme: Theme, settings: PageSettings):
    """Return an onPage callback that fills the page with the theme background."""

    def paint(canvas, doc) -> None:
        canvas.saveState()
        canvas.setFillColor(theme.background)
        canvas.rect(0, 0, settings.page_width, settings.page_height, stroke=0, fill=1)
        canvas.restoreState()

    return paint


def build_pdf(
    chapters: Sequence[ComposedChapter],
    output_path: Path,
    settings: PageSettings | None = None,
    theme: Theme = LIGHT,
    title: str = "",
) -> Path:
    """Render ``chapters`` into a PDF, each chapter starting a new page.

    Args:
        chapters: Composed chapters in reading order.
        output_path: Destination file.
        settings: Page settings; defaults when omitted.
        theme: Colour theme.
        title: Document title metadata.
    Returns:
        The written path.
    """

    settings = settings or PageSettings()
    styles = build_styles(settings, theme)
    hyphenator = Pyphen(lang="en_US") if settings.hyphenate else None

    story: List[Flowable] = []
    for chapter in tqdm(chapters, desc="Chapters", unit="ch", disable=len(chapters) < 2):
        flowables = chapter_flowables(chapter, styles, theme, settings, hyphenator)
        if not flowables:
            _debug(f"skipping empty chapter {chapter.book_name} {chapter.chapter}")
            continue
        if story:
            story.append(PageBreak())
        story.extend(flowables)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=settings.page_size,
        leftMargin=settings.margin_left,
        rightMargin=settings.margin_right,
        topMargin=settings.margin_top,
        bottomMargin=settings.margin_bottom,
        title=title,
    )
    paint = _paint_background(theme, settings)
    doc.build(story or [Paragraph("", styles["body"])], onFirstPage=paint, onLaterPages=paint)
    return output_path
