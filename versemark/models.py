"""
Typed containers for verse records and composed chapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Tuple


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)``.

    Example:
        >>> Span(2, 5).shift(10)
        Span(start=12, end=15)
        >>> Span(0, 5).slice("Jesus wept")
        'Jesus'
    """

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def shift(self, offset: int) -> "Span":
        """Return the same range moved by ``offset`` characters."""

        return Span(self.start + offset, self.end + offset)

    def slice(self, text: str) -> str:
        return text[self.start : self.end]

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True, slots=True)
class VerseRecord:
    """One verse as supplied by the verse database.

    Attributes:
        book_name: Full book name such as ``"Genesis"``.
        book: Book number (1 = Genesis).
        chapter: Chapter number.
        verse: Verse number.
        text: Raw verse text, still carrying inline markup.
    """

    book_name: str
    book: int
    chapter: int
    verse: int
    text: str

    @classmethod
    def from_json(cls, record: Mapping[str, object]) -> "VerseRecord":
        """Build a record from a JSON verse object.

        Example:
            >>> VerseRecord.from_json({"book_name": "John", "book": 43, "chapter": 11, "verse": 35, "text": "Jesus wept."}).verse
            35
        """

        return cls(
            book_name=str(record["book_name"]),
            book=int(record["book"]),
            chapter=int(record["chapter"]),
            verse=int(record["verse"]),
            text=str(record["text"]),
        )

    @property
    def key(self) -> Tuple[str, int, int]:
        """Return the ``(book_name, chapter, verse)`` highlight key."""

        return (self.book_name, self.chapter, self.verse)


@dataclass(frozen=True, slots=True)
class ParsedVerseText:
    """Plain text of one verse plus the ranges its markup described.

    Ranges are local to ``plain_text`` and listed in the order the scanner
    found them.
    """

    plain_text: str
    emphasis_ranges: Tuple[Span, ...] = ()
    speech_ranges: Tuple[Span, ...] = ()
    ends_paragraph: bool = False


class RenderMode(Enum):
    """How verse numbers are laid out in a composed chapter."""

    PARAGRAPH = "paragraph"
    VERSE_NUMBERED = "verse-numbered"


class HighlightState(Enum):
    """Permanent and temporary highlight flags of a verse, as one value."""

    NONE = "none"
    PERMANENT = "permanent"
    TEMPORARY = "temporary"
    BOTH = "both"

    @classmethod
    def from_flags(cls, permanent: bool, temporary: bool) -> "HighlightState":
        """Return the state for the given flag pair.

        Example:
            >>> HighlightState.from_flags(True, False)
            <HighlightState.PERMANENT: 'permanent'>
        """

        if permanent and temporary:
            return cls.BOTH
        if permanent:
            return cls.PERMANENT
        if temporary:
            return cls.TEMPORARY
        return cls.NONE

    @property
    def is_permanent(self) -> bool:
        return self in (HighlightState.PERMANENT, HighlightState.BOTH)

    @property
    def is_temporary(self) -> bool:
        return self in (HighlightState.TEMPORARY, HighlightState.BOTH)

    @property
    def underlined(self) -> bool:
        return self is not HighlightState.NONE


@dataclass(frozen=True, slots=True)
class HeaderRanges:
    """Offsets of the title block; each span includes its trailing newline."""

    book_name: Span
    chapter_number: Span


@dataclass(frozen=True, slots=True)
class VerseSegment:
    """A single verse inside a composed chapter, in chapter-global offsets.

    Attributes:
        verse: Verse number.
        label_range: Verse-number label, without the space that follows it.
        text_range: The verse's plain text.
        speech_ranges: Red-letter ranges.
        emphasis_ranges: Translator-supplied (italic) ranges.
        highlight: Permanent/temporary highlight state.
        ends_block: True when a blank-line break follows the segment.
    """

    verse: int
    label_range: Span
    text_range: Span
    speech_ranges: Tuple[Span, ...] = ()
    emphasis_ranges: Tuple[Span, ...] = ()
    highlight: HighlightState = HighlightState.NONE
    ends_block: bool = False

    @property
    def is_highlighted(self) -> bool:
        return self.highlight.is_permanent

    @property
    def is_temporarily_highlighted(self) -> bool:
        return self.highlight.is_temporary

    @property
    def click_target(self) -> int:
        return self.verse

    @property
    def underline_range(self) -> Span:
        """Return the range an underline covers, label included."""

        return Span(self.label_range.start, self.text_range.end)


@dataclass(frozen=True, slots=True)
class ComposedChapter:
    """A chapter assembled into one string plus styled ranges."""

    full_text: str
    header: HeaderRanges
    segments: Tuple[VerseSegment, ...] = ()
    selected_verse_offset: int = -1
    mode: RenderMode = RenderMode.PARAGRAPH
    book_name: str = ""
    chapter: int | None = None

    @property
    def has_selection(self) -> bool:
        return self.selected_verse_offset >= 0

    def segment_for(self, verse: int) -> VerseSegment | None:
        """Return the segment of ``verse`` or None when the chapter lacks it."""

        for segment in self.segments:
            if segment.verse == verse:
                return segment
        return None

    def text_of(self, segment: VerseSegment) -> str:
        return segment.text_range.slice(self.full_text)


@dataclass(slots=True)
class BibleMetadata:
    """Translation name and abbreviation from the verse file."""

    name: str
    shortname: str


@dataclass(slots=True)
class Bible:
    """A whole translation as loaded from the verse JSON file."""

    metadata: BibleMetadata
    verses: List[VerseRecord] = field(default_factory=list)
