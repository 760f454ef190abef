from __future__ import annotations

import logging
from collections.abc import Iterable

from ..data.schemas import Question, normalize_key

logger = logging.getLogger(__name__)


def dedupe(questions: Iterable[Question]) -> list[Question]:
    """Drop repeated questions, keeping the first occurrence in order.

    Two questions are the same when their text matches after lower-casing
    and whitespace collapsing. Later copies are dropped, not merged.
    """
    seen: set[str] = set()
    kept: list[Question] = []
    dropped = 0
    for q in questions:
        key = normalize_key(q.text)
        if key in seen:
            dropped += 1
            continue
        seen.add(key)
        kept.append(q)
    if dropped:
        logger.debug("Dropped %d duplicate questions", dropped)
    return kept
