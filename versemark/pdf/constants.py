"""Shared constants for PDF rendering."""

from __future__ import annotations

import os

STYLE_SPEECH = "speech"
STYLE_EMPHASIS = "emphasis"
STYLE_LABEL = "label"
STYLE_UNDERLINE = "underline"

DEBUG_RENDER = os.getenv("VERSEMARK_DEBUG", "0") not in {
    "",
    "0",
    "false",
    "False",
}


def _debug(msg: str) -> None:
    if DEBUG_RENDER:
        print(msg)
