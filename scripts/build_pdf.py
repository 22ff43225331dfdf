"""
Compose chapters from a verse JSON file and render them to PDF.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from versemark.bible import book_names, chapter_verses, chapters_in, load_bible
from versemark.compose import ChapterComposer
from versemark.models import Bible, ComposedChapter, RenderMode
from versemark.pdf.builder import build_pdf
from versemark.pdf.settings import PageSettings, register_font_family, theme_by_name


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the build script."""

    parser = argparse.ArgumentParser(
        description="Render chapters of a verse JSON file (e.g. kjv.json) to PDF."
    )
    parser.add_argument(
        "--bible",
        type=Path,
        default=Path("data/kjv.json"),
        help="Verse file with 'metadata' and 'verses' keys.",
    )
    parser.add_argument("--book", required=True, help="Book name, e.g. 'John'.")
    parser.add_argument(
        "--chapters",
        nargs="+",
        type=int,
        metavar="N",
        help="Chapters to render; all chapters of the book when omitted.",
    )
    parser.add_argument(
        "--verse-numbered",
        action="store_true",
        help="Put every verse in its own block with a bracketed number.",
    )
    parser.add_argument(
        "--select",
        type=int,
        default=None,
        metavar="VERSE",
        help="Verse to mark with the temporary highlight in the first requested chapter.",
    )
    parser.add_argument(
        "--highlight",
        nargs="+",
        type=int,
        default=[],
        metavar="VERSE",
        help="Verses to highlight permanently in every rendered chapter.",
    )
    parser.add_argument("--theme", default="Light", help="Light or Dark.")
    parser.add_argument(
        "--font",
        type=Path,
        default=None,
        help="Optional TrueType font file for the body text.",
    )
    parser.add_argument("--font-size", type=float, default=12.0)
    parser.add_argument(
        "--no-hyphenate",
        action="store_true",
        help="Skip soft-hyphen insertion.",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        type=Path,
        default=Path("output/chapter.pdf"),
        help="File path into which the resulting pdf will be saved.",
    )
    return parser.parse_args(argv)


def _resolve_book(*, bible: Bible, token: str) -> str:
    """Return the book name matching ``token`` case-insensitively.

    Raises:
        SystemExit: When no book matches.
    """

    lookup = {name.lower(): name for name in book_names(bible)}
    name = lookup.get(token.strip().lower())
    if name is None:
        raise SystemExit(f"Unknown book: {token}")
    return name


def _compose_all(
    *,
    bible: Bible,
    book: str,
    chapters: Sequence[int],
    mode: RenderMode,
    highlight: Sequence[int],
    select: int | None,
) -> List[ComposedChapter]:
    """Compose the requested chapters of ``book`` in order.

    ``select`` marks a verse of the first chapter only.
    """

    composer = ChapterComposer()
    composed: List[ComposedChapter] = []
    for idx, chapter in enumerate(chapters):
        highlighted = frozenset((book, chapter, verse) for verse in highlight)
        composed.append(
            composer.compose(
                chapter_verses(bible, book, chapter),
                mode=mode,
                highlighted=highlighted,
                temp_highlight_verse=select if idx == 0 else None,
            )
        )
    return composed


def main(argv: Sequence[str] | None = None) -> None:
    """Render the requested chapters.

    Example:
        >>> main(["--book", "John", "--chapters", "11"])  # doctest: +SKIP
    """

    args = _parse_args(argv)
    bible = load_bible(args.bible)
    book = _resolve_book(bible=bible, token=args.book)
    available = chapters_in(bible, book)
    chapters = args.chapters or available
    missing = sorted(set(chapters) - set(available))
    if missing:
        raise SystemExit(
            f"{book} has no chapter(s) {', '.join(str(n) for n in missing)}"
        )

    settings = PageSettings(font_size=args.font_size, hyphenate=not args.no_hyphenate)
    if args.font is not None:
        settings.font_name = register_font_family(args.font, args.font.stem)

    composed = _compose_all(
        bible=bible,
        book=book,
        chapters=chapters,
        mode=RenderMode.VERSE_NUMBERED if args.verse_numbered else RenderMode.PARAGRAPH,
        highlight=args.highlight,
        select=args.select,
    )
    output = build_pdf(
        composed,
        args.output_file,
        settings=settings,
        theme=theme_by_name(args.theme),
        title=f"{bible.metadata.name} - {book}".strip(" -"),
    )
    print(f"Wrote PDF to {output}")


if __name__ == "__main__":
    main()
