"""JSON extraction from provider responses that may wrap it in another envelope."""

from __future__ import annotations

import html
import json
import re
from typing import Any


_TAG = re.compile(r"<[^>]*>")


def _slice_between(text: str, open_char: str, close_char: str) -> str | None:
    start = text.find(open_char)
    end = text.rfind(close_char)
    if start >= 0 and end > start:
        return text[start:end + 1]
    return None


def extract_json(raw_text: str | bytes | None) -> Any | None:
    """Parse JSON, or JSON embedded in an XML / text envelope. None if nothing parses.

    Tries the whole body first, then strips tags and XML entities and tries
    the outermost ``{...}`` and finally the outermost ``[...]``.
    """
    if raw_text is None:
        return None
    if isinstance(raw_text, bytes):
        raw_text = raw_text.decode("utf-8", errors="replace")
    text = raw_text.lstrip("\ufeff").strip()
    if not text:
        return None

    try:
        return json.loads(text)
    except ValueError:
        pass

    # ASMX services wrap JSON inside XML: <string>...json...</string>
    without_tags = html.unescape(_TAG.sub("", text).strip())
    if not without_tags:
        return None

    for open_char, close_char in (("{", "}"), ("[", "]")):
        candidate = _slice_between(without_tags, open_char, close_char)
        if candidate is None:
            continue
        try:
            return json.loads(candidate)
        except ValueError:
            pass
    return None
