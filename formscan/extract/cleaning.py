from __future__ import annotations

import re

_WS = re.compile(r"\s+")
_ESCAPED = re.compile(r"\\([*_#\[\]().!`>-])")
_BOLD = re.compile(r"(\*\*|__)(.+?)\1")
_HEADING = re.compile(r"^#{1,6}\s*")
_TRAIL_MARK = re.compile(r"\s*\*+\s*$")
_LEAD_MARK = re.compile(r"^\*+\s*")
_ORDINAL = re.compile(r"^\d+\.\s+")
_POINTS = re.compile(r"\s+\d+\s*(?:poin|points?)\s*$", re.IGNORECASE)
_BULLET = re.compile(r"^[-•○●◯▢☐◦]\s*")
_LETTER = re.compile(r"^[a-e][.)](?![a-z]\.)\s*", re.IGNORECASE)


def normalize_ws(text: str) -> str:
    return _WS.sub(" ", text or "").strip()


def unescape_markdown(line: str) -> str:
    """Undo markdown backslash escapes (``\\*`` -> ``*``)."""
    return _ESCAPED.sub(r"\1", line or "")


def has_ordinal(line: str) -> bool:
    return bool(_ORDINAL.match((line or "").strip()))


def has_required_marker(raw: str) -> bool:
    return "*" in unescape_markdown(raw)


def clean_question_line(raw: str) -> tuple[str, bool]:
    """Strip markup from a prompt line.

    Returns the cleaned text and whether a required marker (a leading or
    trailing ``*``, escaped or not) was attached to it.
    """
    s = unescape_markdown((raw or "").strip())
    s = _BOLD.sub(r"\2", s)
    s = _HEADING.sub("", s)
    s = _POINTS.sub("", s)
    required = bool(_TRAIL_MARK.search(s) or _LEAD_MARK.match(s))
    s = _TRAIL_MARK.sub("", s)
    s = _LEAD_MARK.sub("", s)
    s = normalize_ws(s)
    s = _ORDINAL.sub("", s)
    s = _POINTS.sub("", s)
    return normalize_ws(s), required


def clean_option_candidate(raw: str) -> str:
    s = unescape_markdown((raw or "").strip())
    s = _ORDINAL.sub("", s)
    s = _POINTS.sub("", s)
    return normalize_ws(s)


def strip_option_prefix(text: str) -> str:
    """Drop a leading bullet glyph or an ``a.`` / ``b)`` letter prefix."""
    s = _BULLET.sub("", (text or "").strip())
    s = _LETTER.sub("", s)
    return s.strip()
