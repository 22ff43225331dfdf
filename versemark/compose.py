"""
Assemble a chapter of verses into one styled document model.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Sequence, Tuple

from .markup import MarkupScanner
from .models import (
    ComposedChapter,
    HeaderRanges,
    HighlightState,
    ParsedVerseText,
    RenderMode,
    Span,
    VerseRecord,
    VerseSegment,
)


HighlightKey = Tuple[str, int, int]

BLOCK_BREAK = "\n\n"
FLOW_BREAK = " "


class _ChapterBuffer:
    """Accumulating text buffer that reports the span of each append."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self.offset = 0

    def append(self, text: str) -> Span:
        start = self.offset
        self._parts.append(text)
        self.offset += len(text)
        return Span(start, self.offset)

    def text(self) -> str:
        return "".join(self._parts)


def _shifted(ranges: Iterable[Span], offset: int) -> Tuple[Span, ...]:
    return tuple(span.shift(offset) for span in ranges)


def verse_label(verse: int, mode: RenderMode) -> str:
    """Return the verse-number label for ``mode``.

    Example:
        >>> verse_label(3, RenderMode.VERSE_NUMBERED)
        '[3]'
        >>> verse_label(3, RenderMode.PARAGRAPH)
        '3'
    """

    if mode is RenderMode.VERSE_NUMBERED:
        return f"[{verse}]"
    return str(verse)


def segment_terminator(parsed: ParsedVerseText, mode: RenderMode) -> str:
    """Return the separator written after a verse."""

    if parsed.ends_paragraph or mode is RenderMode.VERSE_NUMBERED:
        return BLOCK_BREAK
    return FLOW_BREAK


class ChapterComposer:
    """Build ``ComposedChapter`` values from verse records.

    All verses passed to ``compose`` are expected to share one book and
    chapter; the first verse supplies the header and the highlight keys.
    """

    def __init__(self, scanner: MarkupScanner | None = None) -> None:
        self.scanner = scanner or MarkupScanner()

    def compose(
        self,
        verses: Sequence[VerseRecord],
        mode: RenderMode = RenderMode.PARAGRAPH,
        highlighted: AbstractSet[HighlightKey] = frozenset(),
        temp_highlight_verse: int | None = None,
    ) -> ComposedChapter:
        """Compose ``verses`` into a single chapter document.

        Args:
            verses: Verses of one chapter, in reading order.
            mode: Paragraph flow or one block per numbered verse.
            highlighted: ``(book_name, chapter, verse)`` keys with a
                permanent highlight. Only read.
            temp_highlight_verse: Verse the reader navigated to, if any.
        Returns:
            The composed chapter; empty when ``verses`` is empty.
        """

        if not verses:
            empty = Span(0, 0)
            return ComposedChapter(
                full_text="",
                header=HeaderRanges(book_name=empty, chapter_number=empty),
                mode=mode,
            )

        first = verses[0]
        buffer = _ChapterBuffer()
        header = HeaderRanges(
            book_name=buffer.append(f"{first.book_name}\n"),
            chapter_number=buffer.append(f"{first.chapter}\n"),
        )

        segments: List[VerseSegment] = []
        selected = -1
        for record in verses:
            parsed = self.scanner.scan(record.text)
            label_range = buffer.append(verse_label(record.verse, mode))
            buffer.append(" ")
            text_range = buffer.append(parsed.plain_text)

            is_temporary = (
                temp_highlight_verse is not None
                and record.verse == temp_highlight_verse
            )
            if is_temporary:
                selected = text_range.start
            is_permanent = (first.book_name, first.chapter, record.verse) in highlighted

            terminator = segment_terminator(parsed, mode)
            segments.append(
                VerseSegment(
                    verse=record.verse,
                    label_range=label_range,
                    text_range=text_range,
                    speech_ranges=_shifted(parsed.speech_ranges, text_range.start),
                    emphasis_ranges=_shifted(parsed.emphasis_ranges, text_range.start),
                    highlight=HighlightState.from_flags(is_permanent, is_temporary),
                    ends_block=terminator == BLOCK_BREAK,
                )
            )
            buffer.append(terminator)

        return ComposedChapter(
            full_text=buffer.text(),
            header=header,
            segments=tuple(segments),
            selected_verse_offset=selected,
            mode=mode,
            book_name=first.book_name,
            chapter=first.chapter,
        )


def compose_chapter(
    verses: Sequence[VerseRecord],
    mode: RenderMode = RenderMode.PARAGRAPH,
    highlighted: AbstractSet[HighlightKey] = frozenset(),
    temp_highlight_verse: int | None = None,
) -> ComposedChapter:
    """Compose ``verses`` with a default ``ChapterComposer``."""

    return ChapterComposer().compose(
        verses,
        mode=mode,
        highlighted=highlighted,
        temp_highlight_verse=temp_highlight_verse,
    )
