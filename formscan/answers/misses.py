"""Deliberate-miss selection.

A caller may ask for ``k`` multiple-choice questions to be answered wrongly
so the result set does not look suspiciously perfect. The sample is drawn
from an explicit NumPy generator; with the same seed and the same question
IDs the same questions are picked.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

import numpy as np

from ..data.schemas import Question, normalize_key
from ..utils.determinism import make_rng


def select_deliberate_misses(
    questions: Iterable[Question],
    k: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> frozenset[str]:
    """Pick up to ``k`` multiple-choice question IDs without replacement.

    ``k`` is clamped to ``[0, number of multiple-choice questions]``.
    """
    pool = sorted({q.id for q in questions if q.is_multiple_choice})
    size = min(max(int(k or 0), 0), len(pool))
    if size == 0:
        return frozenset()
    gen = rng if rng is not None else make_rng(seed)
    picked = gen.choice(len(pool), size=size, replace=False)
    return frozenset(pool[int(i)] for i in picked)


def choose_wrong_option(
    question: Question,
    correct: str,
    rng: Optional[np.random.Generator] = None,
) -> Optional[str]:
    """Return a canonical option different from ``correct``, or None."""
    target = normalize_key(correct)
    candidates = [o for o in question.options if normalize_key(o) != target]
    if not candidates:
        return None
    gen = rng if rng is not None else make_rng()
    return candidates[int(gen.integers(len(candidates)))]
