"""Tests for the verse markup scanner."""

import pytest

from versemark.markup import (
    PILCROW,
    SPEECH_CLOSE,
    SPEECH_OPEN,
    MarkupScanner,
    has_markup,
    scan_verse,
)
from versemark.models import Span


def _texts(parsed, ranges):
    return [span.slice(parsed.plain_text) for span in ranges]


def test_plain_text_passes_through():
    parsed = scan_verse("plain text only")
    assert parsed.plain_text == "plain text only"
    assert parsed.emphasis_ranges == ()
    assert parsed.speech_ranges == ()
    assert parsed.ends_paragraph is False


@pytest.mark.parametrize(
    "raw, plain, supplied",
    [
        ("[And] God said", "And God said", ["And"]),
        ("and the earth [was] without form", "and the earth was without form", ["was"]),
        ("[that] which [is] good", "that which is good", ["that", "is"]),
        ("he [is]  risen", "he is  risen", ["is"]),
        ("end [of it]", "end of it", ["of it"]),
    ],
)
def test_brackets_become_emphasis(raw, plain, supplied):
    parsed = scan_verse(raw)
    assert parsed.plain_text == plain
    assert _texts(parsed, parsed.emphasis_ranges) == supplied
    assert parsed.speech_ranges == ()


def test_speech_then_bracket_is_both_speech_and_emphasis():
    parsed = scan_verse(f"{SPEECH_OPEN}Jesus said{SPEECH_CLOSE} [unto them]")
    assert parsed.plain_text == "Jesus said unto them"
    assert parsed.speech_ranges == (Span(0, 10), Span(11, 20))
    assert parsed.emphasis_ranges == (Span(11, 20),)
    assert _texts(parsed, parsed.speech_ranges) == ["Jesus said", "unto them"]


def test_bracket_before_speech_opener_is_retroactively_speech():
    parsed = scan_verse(f"[Verily] {SPEECH_OPEN}I say unto you{SPEECH_CLOSE}")
    assert parsed.plain_text == "Verily I say unto you"
    assert parsed.emphasis_ranges == (Span(0, 6),)
    assert _texts(parsed, parsed.speech_ranges) == ["Verily", "I say unto you"]


def test_bracket_directly_before_opener_without_space():
    parsed = scan_verse(f"[Lo,]{SPEECH_OPEN}here{SPEECH_CLOSE}")
    assert parsed.plain_text == "Lo,here"
    assert _texts(parsed, parsed.speech_ranges) == ["Lo,", "here"]


def test_speech_without_bracket():
    parsed = scan_verse(f"And he said, {SPEECH_OPEN}Follow me.{SPEECH_CLOSE}")
    assert parsed.plain_text == "And he said, Follow me."
    assert _texts(parsed, parsed.speech_ranges) == ["Follow me."]
    assert parsed.emphasis_ranges == ()


def test_whitespace_after_speech_close_collapses_to_one_space():
    parsed = scan_verse(f"{SPEECH_OPEN}Peace{SPEECH_CLOSE}  \t and he rose")
    assert parsed.plain_text == "Peace and he rose"


def test_no_space_added_after_speech_close_without_whitespace():
    parsed = scan_verse(f"{SPEECH_OPEN}Peace{SPEECH_CLOSE}, he said")
    assert parsed.plain_text == "Peace, he said"


def test_pilcrow_anywhere_marks_paragraph_end():
    parsed = scan_verse(f"In the beginning{PILCROW} God created")
    assert parsed.ends_paragraph is True
    assert parsed.plain_text == "In the beginning God created"


def test_leading_pilcrow():
    parsed = scan_verse(f"{PILCROW} And God said")
    assert parsed.ends_paragraph is True
    assert parsed.plain_text == " And God said"


def test_empty_bracket_records_zero_length_range():
    parsed = scan_verse("a [] b")
    assert parsed.plain_text == "a  b"
    assert parsed.emphasis_ranges == (Span(2, 2),)


def test_unterminated_bracket_runs_to_end():
    parsed = scan_verse("and [the rest")
    assert parsed.plain_text == "and the rest"
    assert parsed.emphasis_ranges == (Span(4, 12),)


def test_unterminated_speech_emits_nothing():
    parsed = scan_verse(f"He said, {SPEECH_OPEN}Come")
    assert parsed.plain_text == "He said, Come"
    assert parsed.speech_ranges == ()


def test_second_opener_overwrites_pending_start():
    parsed = scan_verse(f"{SPEECH_OPEN}one {SPEECH_OPEN}two{SPEECH_CLOSE}")
    assert parsed.plain_text == "one two"
    assert _texts(parsed, parsed.speech_ranges) == ["two"]


def test_stray_closer_records_no_speech():
    parsed = scan_verse(f"amen{SPEECH_CLOSE} amen")
    assert parsed.plain_text == "amen amen"
    assert parsed.speech_ranges == ()


def test_stray_close_bracket_is_copied():
    assert scan_verse("a] b").plain_text == "a] b"


def test_scanning_plain_text_is_idempotent():
    first = scan_verse(
        f"{SPEECH_OPEN}Jesus said{SPEECH_CLOSE} [unto them]{PILCROW} Follow me"
    )
    again = MarkupScanner().scan(first.plain_text)
    assert again.plain_text == first.plain_text
    assert again.speech_ranges == ()
    assert again.emphasis_ranges == ()
    assert not has_markup(first.plain_text)


@pytest.mark.parametrize(
    "raw",
    ["", "[", "]", SPEECH_OPEN, SPEECH_CLOSE, f"{SPEECH_CLOSE}[", f"[{SPEECH_OPEN}]", "[[]]"],
)
def test_ranges_stay_within_text(raw):
    parsed = scan_verse(raw)
    for span in parsed.speech_ranges + parsed.emphasis_ranges:
        assert 0 <= span.start <= span.end <= len(parsed.plain_text)


def test_pilcrow_inside_bracket_is_dropped():
    parsed = scan_verse(f"[word{PILCROW}] more")
    assert parsed.plain_text == "word more"
    assert parsed.emphasis_ranges == (Span(0, 4),)
    assert parsed.ends_paragraph is True
    assert not has_markup(parsed.plain_text)


def test_whitespace_between_bracket_and_opener_collapses():
    parsed = scan_verse(f"[Verily]   {SPEECH_OPEN}I say{SPEECH_CLOSE}")
    assert parsed.plain_text == "Verily I say"
    assert parsed.emphasis_ranges == (Span(0, 6),)
    assert parsed.speech_ranges == (Span(0, 6), Span(7, 12))
