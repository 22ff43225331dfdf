"""Turn a composed chapter into ReportLab inline markup."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple
from xml.sax.saxutils import escape

from pyphen import Pyphen

from ..models import ComposedChapter, RenderMode, Span, VerseSegment
from ..text import hyphenate_markup
from .constants import (
    STYLE_EMPHASIS,
    STYLE_LABEL,
    STYLE_SPEECH,
    STYLE_UNDERLINE,
    _debug,
)
from .settings import PageSettings, Theme


StyledRun = Tuple[str, FrozenSet[str]]


def _segment_ranges(segment: VerseSegment) -> List[Tuple[Span, str]]:
    """Return every styled range of a segment tagged with its style name."""

    ranges: List[Tuple[Span, str]] = [(segment.label_range, STYLE_LABEL)]
    ranges.extend((span, STYLE_SPEECH) for span in segment.speech_ranges)
    ranges.extend((span, STYLE_EMPHASIS) for span in segment.emphasis_ranges)
    if segment.highlight.underlined:
        ranges.append((segment.underline_range, STYLE_UNDERLINE))
    return ranges


def styled_runs(
    chapter: ComposedChapter,
    span: Span,
    segments: Iterable[VerseSegment] | None = None,
) -> List[StyledRun]:
    """Split ``chapter.full_text[span]`` into runs of uniform style.

    Args:
        chapter: Composed chapter supplying the text.
        span: Window of ``full_text`` to split.
        segments: Segments whose ranges apply; all segments when omitted.
    Returns:
        ``(text, styles)`` pairs in text order. Empty ranges add no style.
    """

    ranges = [
        (rng, style)
        for segment in (chapter.segments if segments is None else segments)
        for rng, style in _segment_ranges(segment)
        if len(rng) > 0
    ]
    cuts = {span.start, span.end}
    for rng, _ in ranges:
        cuts.update(
            point for point in (rng.start, rng.end) if span.start < point < span.end
        )
    bounds = sorted(cuts)

    runs: List[StyledRun] = []
    for start, end in zip(bounds, bounds[1:]):
        piece = Span(start, end)
        styles = frozenset(style for rng, style in ranges if rng.contains(piece))
        runs.append((piece.slice(chapter.full_text), styles))
    return runs


def runs_to_markup(
    runs: Sequence[StyledRun],
    theme: Theme,
    label_font_size: float,
    mode: RenderMode,
) -> str:
    """Render styled runs as ReportLab paragraph markup.

    Speech takes the theme's red-letter colour, emphasis is italic,
    highlights are underlined, and paragraph-mode labels are superscript.

    Example:
        >>> from .settings import LIGHT
        >>> runs_to_markup([("Jesus", frozenset({"speech"}))], LIGHT, 7.0, RenderMode.PARAGRAPH)
        '<font color="#ff0000">Jesus</font>'
    """

    pieces: List[str] = []
    for text, styles in runs:
        html = escape(text)
        if STYLE_LABEL in styles and mode is RenderMode.PARAGRAPH:
            html = f'<sup><font size="{label_font_size:g}">{html}</font></sup>'
        if STYLE_EMPHASIS in styles:
            html = f"<i>{html}</i>"
        if STYLE_UNDERLINE in styles:
            html = f"<u>{html}</u>"
        if STYLE_SPEECH in styles:
            html = f'<font color="{theme.red_letter_hex}">{html}</font>'
        pieces.append(html)
    return "".join(pieces)


def chapter_blocks(chapter: ComposedChapter) -> List[List[VerseSegment]]:
    """Group segments into display blocks separated by blank lines.

    Example:
        >>> from ..compose import compose_chapter
        >>> from ..models import VerseRecord
        >>> verses = [VerseRecord("Ruth", 8, 1, n, "Text") for n in (1, 2)]
        >>> len(chapter_blocks(compose_chapter(verses, mode=RenderMode.VERSE_NUMBERED)))
        2
    """

    blocks: List[List[VerseSegment]] = []
    current: List[VerseSegment] = []
    for segment in chapter.segments:
        current.append(segment)
        if segment.ends_block:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def block_span(block: Sequence[VerseSegment]) -> Span:
    """Return the span from the first label to the last verse's text end."""

    return Span(block[0].label_range.start, block[-1].text_range.end)


def block_markup(
    chapter: ComposedChapter,
    block: Sequence[VerseSegment],
    theme: Theme,
    settings: PageSettings,
    hyphenator: Pyphen | None = None,
) -> str:
    """Return markup for one block of verses.

    Args:
        chapter: Composed chapter the block belongs to.
        block: Consecutive segments from ``chapter_blocks``.
        theme: Colour theme.
        settings: Page settings for the label size.
        hyphenator: Optional Pyphen dictionary for soft hyphens.
    Returns:
        ReportLab paragraph markup.
    """

    runs = styled_runs(chapter, block_span(block), segments=block)
    markup = runs_to_markup(runs, theme, settings.label_font_size, chapter.mode)
    if hyphenator is not None:
        markup = hyphenate_markup(markup, hyphenator)
    _debug(f"block {block[0].verse}-{block[-1].verse}: {len(runs)} runs")
    return markup


def header_markup(chapter: ComposedChapter) -> Dict[str, str]:
    """Return escaped book-title and chapter-number text without newlines."""

    return {
        "book_title": escape(chapter.header.book_name.slice(chapter.full_text).strip()),
        "chapter_number": escape(
            chapter.header.chapter_number.slice(chapter.full_text).strip()
        ),
    }
