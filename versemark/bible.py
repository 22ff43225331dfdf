"""
Load the verse JSON file and navigate its books and chapters.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Mapping, Tuple

from .models import Bible, BibleMetadata, VerseRecord


def bible_from_json(data: Mapping) -> Bible:
    """Convert a decoded verse file into a Bible.

    Raises:
        ValueError: When a verse record lacks a field or has a bad number.

    Example:
        >>> bible = bible_from_json({"metadata": {"name": "King James Version", "shortname": "KJV"}, "verses": []})
        >>> bible.metadata.shortname
        'KJV'
    """

    meta = data.get("metadata") or {}
    metadata = BibleMetadata(
        name=str(meta.get("name", "")),
        shortname=str(meta.get("shortname", "")),
    )
    verses: List[VerseRecord] = []
    for idx, record in enumerate(data.get("verses", [])):
        try:
            verses.append(VerseRecord.from_json(record))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed verse record #{idx}: {record!r}") from exc
    return Bible(metadata=metadata, verses=verses)


def load_bible(path: Path) -> Bible:
    """Read a verse JSON file such as ``kjv.json``.

    Example:
        >>> _ = load_bible(Path('data/kjv.json'))  # doctest: +SKIP
    """

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return bible_from_json(data)


def book_names(bible: Bible) -> List[str]:
    """Return distinct book names in the order they first appear."""

    seen: set[str] = set()
    names: List[str] = []
    for verse in bible.verses:
        if verse.book_name in seen:
            continue
        seen.add(verse.book_name)
        names.append(verse.book_name)
    return names


def chapters_in(bible: Bible, book_name: str) -> List[int]:
    """Return the sorted chapter numbers of ``book_name``."""

    return sorted({v.chapter for v in bible.verses if v.book_name == book_name})


def chapter_verses(bible: Bible, book_name: str, chapter: int) -> List[VerseRecord]:
    """Return the verses of one chapter in file order."""

    return [
        v for v in bible.verses if v.book_name == book_name and v.chapter == chapter
    ]


def previous_chapter(
    bible: Bible, book_name: str, chapter: int
) -> Tuple[str, int] | None:
    """Return the chapter before ``book_name chapter``.

    The first chapter of a book steps back to the last chapter of the
    previous book. Returns None at Genesis 1 or for an unknown book.
    """

    chapters = chapters_in(bible, book_name)
    if chapter in chapters:
        index = chapters.index(chapter)
        if index > 0:
            return book_name, chapters[index - 1]
    books = book_names(bible)
    if book_name not in books:
        return None
    book_index = books.index(book_name)
    if book_index == 0:
        return None
    prev_book = books[book_index - 1]
    return prev_book, chapters_in(bible, prev_book)[-1]


def next_chapter(bible: Bible, book_name: str, chapter: int) -> Tuple[str, int] | None:
    """Return the chapter after ``book_name chapter``.

    The last chapter of a book steps into the first chapter of the next
    book. Returns None at the end of the Bible or for an unknown book.
    """

    chapters = chapters_in(bible, book_name)
    if chapter in chapters:
        index = chapters.index(chapter)
        if index < len(chapters) - 1:
            return book_name, chapters[index + 1]
    books = book_names(bible)
    if book_name not in books:
        return None
    book_index = books.index(book_name)
    if book_index == len(books) - 1:
        return None
    next_book = books[book_index + 1]
    return next_book, chapters_in(bible, next_book)[0]
