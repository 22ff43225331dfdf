"""
Single-pass scanner for the inline verse markup.

Raw verse strings mark direct speech with ``\u2039 \u203a``, translator-supplied words
with ``[ ]`` and paragraph ends with ``\u00b6``. The scanner strips those marks and
reports where the speech and supplied-word ranges fall in the plain text.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from .models import ParsedVerseText, Span


SPEECH_OPEN = "\u2039"
SPEECH_CLOSE = "\u203a"
EMPHASIS_OPEN = "["
EMPHASIS_CLOSE = "]"
PILCROW = "\u00b6"

MARKUP_CHARS = frozenset(
    {SPEECH_OPEN, SPEECH_CLOSE, EMPHASIS_OPEN, EMPHASIS_CLOSE, PILCROW}
)


class ScanState(Enum):
    """Whether the cursor sits inside an open speech span."""

    NORMAL = "normal"
    IN_SPEECH = "in-speech"


class _ScanRun:
    """Cursor and output buffers for scanning one raw string."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.pos = 0
        self.parts: List[str] = []
        self.length = 0
        self.state = ScanState.NORMAL
        self.speech_start = 0
        self.speech: List[Span] = []
        self.emphasis: List[Span] = []

    def at_end(self) -> bool:
        return self.pos >= len(self.raw)

    def peek(self, pos: int | None = None) -> str:
        idx = self.pos if pos is None else pos
        return self.raw[idx] if idx < len(self.raw) else ""

    def emit(self, text: str) -> None:
        self.parts.append(text)
        self.length += len(text)

    def absorb_whitespace(self) -> None:
        """Skip a whitespace run, writing back a single space if there was one."""

        skipped = False
        while not self.at_end() and self.raw[self.pos].isspace():
            skipped = True
            self.pos += 1
        if skipped:
            self.emit(" ")

    def next_visible(self) -> str:
        """Return the first non-whitespace character ahead without consuming."""

        idx = self.pos
        while idx < len(self.raw) and self.raw[idx].isspace():
            idx += 1
        return self.peek(idx)

    def read_bracket(self) -> Span:
        """Copy ``[...]`` content and return its span; the cursor sits on ``[``.

        An unterminated bracket runs to the end of the string. Pilcrows
        inside the bracket are dropped like everywhere else.
        """

        self.pos += 1
        start = self.length
        close = self.raw.find(EMPHASIS_CLOSE, self.pos)
        stop = len(self.raw) if close == -1 else close
        self.emit(self.raw[self.pos : stop].replace(PILCROW, ""))
        span = Span(start, self.length)
        self.pos = stop if close == -1 else stop + 1
        return span


class MarkupScanner:
    """Convert raw verse text into ``ParsedVerseText``.

    The scanner never raises: unbalanced marks only change scan state and a
    speech span still open at the end of the string is dropped.
    """

    def scan(self, raw: str) -> ParsedVerseText:
        """Parse ``raw`` in one left-to-right pass.

        Example:
            >>> MarkupScanner().scan("[And] God said").plain_text
            'And God said'
        """

        run = _ScanRun(raw)
        while not run.at_end():
            char = run.raw[run.pos]
            if char == SPEECH_OPEN:
                self._open_speech(run)
            elif char == SPEECH_CLOSE:
                self._close_speech(run)
            elif char == EMPHASIS_OPEN:
                self._emphasis(run)
            elif char == PILCROW:
                run.pos += 1
            else:
                run.emit(char)
                run.pos += 1

        return ParsedVerseText(
            plain_text="".join(run.parts),
            emphasis_ranges=tuple(run.emphasis),
            speech_ranges=tuple(run.speech),
            # Any pilcrow marks the whole verse as paragraph-ending.
            ends_paragraph=PILCROW in raw,
        )

    def _open_speech(self, run: _ScanRun) -> None:
        # A second opener restarts the pending span; speech does not nest.
        run.state = ScanState.IN_SPEECH
        run.speech_start = run.length
        run.pos += 1

    def _close_speech(self, run: _ScanRun) -> None:
        run.pos += 1
        if run.state is ScanState.IN_SPEECH:
            run.speech.append(Span(run.speech_start, run.length))
            run.state = ScanState.NORMAL

        run.absorb_whitespace()
        if run.peek() == EMPHASIS_OPEN:
            span = run.read_bracket()
            run.emphasis.append(span)
            run.speech.append(span)

    def _emphasis(self, run: _ScanRun) -> None:
        span = run.read_bracket()
        run.emphasis.append(span)
        # Supplied words right before an opener belong to the speech.
        if run.next_visible() == SPEECH_OPEN:
            run.absorb_whitespace()
            run.speech.append(span)


_DEFAULT_SCANNER = MarkupScanner()


def scan_verse(raw: str) -> ParsedVerseText:
    """Scan ``raw`` with a shared scanner instance.

    Example:
        >>> scan_verse("plain text only").speech_ranges
        ()
    """

    return _DEFAULT_SCANNER.scan(raw)


def has_markup(raw: str) -> bool:
    """Return True when ``raw`` contains any markup character.

    Example:
        >>> has_markup("In the beginning")
        False
    """

    return any(char in MARKUP_CHARS for char in raw)
