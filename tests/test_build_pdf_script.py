"""Tests for the build_pdf command-line script."""

import importlib.util
import json
from pathlib import Path

import pytest

from versemark.bible import bible_from_json
from versemark.models import RenderMode

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "build_pdf.py"


@pytest.fixture(scope="module")
def build_script():
    spec = importlib.util.spec_from_file_location("build_pdf_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def verse_data():
    def record(chapter, verse, text):
        return {
            "book_name": "John",
            "book": 43,
            "chapter": chapter,
            "verse": verse,
            "text": text,
        }

    return {
        "metadata": {"name": "King James Version", "shortname": "KJV"},
        "verses": [
            record(11, 1, "Now a certain [man] was sick, named Lazarus"),
            record(11, 35, "Jesus wept."),
            record(12, 1, "Then Jesus six days before the passover came to Bethany"),
        ],
    }


@pytest.fixture
def verse_file(tmp_path, verse_data):
    path = tmp_path / "kjv.json"
    path.write_text(json.dumps(verse_data), encoding="utf-8")
    return path


def test_main_writes_pdf(build_script, verse_file, tmp_path, capsys):
    output = tmp_path / "out" / "john.pdf"
    build_script.main(
        [
            "--bible",
            str(verse_file),
            "--book",
            "john",
            "--chapters",
            "11",
            "--select",
            "35",
            "--no-hyphenate",
            "-o",
            str(output),
        ]
    )
    assert output.read_bytes().startswith(b"%PDF")
    assert "Wrote PDF to" in capsys.readouterr().out


def test_unknown_book_exits(build_script, verse_file, tmp_path):
    with pytest.raises(SystemExit, match="Unknown book"):
        build_script.main(
            ["--bible", str(verse_file), "--book", "Judith", "-o", str(tmp_path / "x.pdf")]
        )


def test_missing_chapter_exits(build_script, verse_file, tmp_path):
    with pytest.raises(SystemExit, match="no chapter"):
        build_script.main(
            [
                "--bible",
                str(verse_file),
                "--book",
                "John",
                "--chapters",
                "11",
                "99",
                "-o",
                str(tmp_path / "x.pdf"),
            ]
        )
    assert not (tmp_path / "x.pdf").exists()


def test_select_applies_to_first_chapter_only(build_script, verse_data):
    composed = build_script._compose_all(
        bible=bible_from_json(verse_data),
        book="John",
        chapters=[11, 12],
        mode=RenderMode.PARAGRAPH,
        highlight=[],
        select=1,
    )
    first, second = composed
    assert first.segment_for(1).is_temporarily_highlighted
    assert first.has_selection
    assert not second.has_selection
    assert not second.segment_for(1).is_temporarily_highlighted
