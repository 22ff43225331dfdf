"""
Hyphenation for ReportLab inline markup.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from pyphen import Pyphen


SOFT_HYPHEN = "\u00ad"
LONG_WORD_RE = re.compile(r"[A-Za-z]{7,}")


def hyphenate_word(word: str, dic: Pyphen) -> str:
    """Return ``word`` with soft hyphens at its break points.

    Example:
        >>> hyphenate_word('everlasting', Pyphen(lang='en_US')) == 'ev\u00ader\u00adlast\u00ading'
        True
    """

    return dic.inserted(word, hyphen=SOFT_HYPHEN)


def hyphenate_markup(markup: str, dic: Pyphen) -> str:
    """Insert soft hyphens into long words of a markup fragment.

    Only text nodes change; tag names and attributes such as colours are
    left alone.
    """

    soup = BeautifulSoup(markup, "html.parser")
    for text_node in list(soup.strings):
        source = str(text_node)
        hyphenated = LONG_WORD_RE.sub(
            lambda match: hyphenate_word(match.group(0), dic), source
        )
        if hyphenated != source:
            text_node.replace_with(hyphenated)
    return soup.decode_contents()
