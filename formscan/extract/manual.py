"""Parser for questions typed or pasted by hand.

Expected shape::

    1. Siapa presiden pertama Indonesia?
    a. Soekarno
    b. Soeharto
    2) Jelaskan arti proklamasi
       (jawab singkat)

A numbered line opens a question, ``a.``-``e)`` lines are its options and any
other line continues the current question's text.
"""

from __future__ import annotations

import re
from typing import Optional

from ..data.schemas import Question
from .cleaning import normalize_ws
from .dedupe import dedupe

_NUMBERED = re.compile(r"^(\d+)[.)]\s*(.+)")
_LETTERED = re.compile(r"^[a-e][.)]\s*", re.IGNORECASE)


def parse_numbered_text(text: str) -> list[Question]:
    if not isinstance(text, str) or not text.strip():
        return []

    drafts: list[tuple[str, list[str]]] = []
    current: Optional[tuple[list[str], list[str]]] = None

    for line in text.strip().splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        numbered = _NUMBERED.match(trimmed)
        if numbered:
            if current is not None:
                drafts.append((" ".join(current[0]), current[1]))
            current = ([numbered.group(2)], [])
        elif _LETTERED.match(trimmed):
            if current is not None:
                option = _LETTERED.sub("", trimmed).strip()
                if option and option not in current[1]:
                    current[1].append(option)
        elif current is not None:
            current[0].append(trimmed)

    if current is not None:
        drafts.append((" ".join(current[0]), current[1]))

    questions = [
        Question.build(id=f"q{n}", text=normalize_ws(body), options=options, required=True)
        for n, (body, options) in enumerate(drafts, start=1)
        if normalize_ws(body)
    ]
    return dedupe(questions)
