"""Mapping generated answers back onto canonical option text.

Generated answers for multiple-choice questions come back in many shapes:
``"a. Soekarno"``, ``"B"``, ``"soekarno"``, ``"Jawabannya Soekarno"``. The
reconciler resolves them to the exact option string stored on the question
so downstream consumers can select it verbatim. Nothing is coerced when no
option matches; the raw text is kept and reported as unmatched.

Resolution order:

1. a letter prefix (``a.``, ``b)``) selects the option at that index;
2. an option equal to the answer after normalization;
3. a lone letter ``a``-``e`` selects the option at that index, so an option
   literally named ``"A"`` is matched by step 2 first;
4. the first option that contains the answer or is contained in it.

Exact matches are tried for every option before any containment test, so
``"1945"`` resolves to a ``"1945"`` option even when a shorter ``"19"``
option comes first.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

import numpy as np

from ..data.schemas import Answer, Question, normalize_key
from ..utils.determinism import make_rng
from .misses import choose_wrong_option, select_deliberate_misses

logger = logging.getLogger(__name__)

_LETTER_PREFIX = re.compile(r"^([a-e])[.)]\s*")
_LONE_LETTER = re.compile(r"^([a-e])$")


class Resolution(NamedTuple):
    text: str
    matched: bool


@dataclass
class ReconciliationResult:
    answers: list[Answer] = field(default_factory=list)
    deliberate_misses: frozenset[str] = frozenset()
    unmatched: frozenset[str] = frozenset()

    def to_dict(self) -> dict[str, Any]:
        return {
            "answers": [a.to_record() for a in self.answers],
            "deliberateMisses": sorted(self.deliberate_misses),
            "unmatched": sorted(self.unmatched),
        }


def _letter_index(pattern: re.Pattern[str], normalized: str) -> Optional[int]:
    m = pattern.match(normalized)
    if not m:
        return None
    return ord(m.group(1)) - ord("a")


def _option_at(question: Question, idx: Optional[int]) -> Optional[str]:
    if idx is not None and idx < len(question.options):
        return question.options[idx]
    return None


def resolve_answer(question: Question, raw_answer: str) -> Resolution:
    """Resolve ``raw_answer`` against the question's options."""
    raw = (raw_answer or "").strip()
    if not question.is_multiple_choice:
        return Resolution(raw, True)

    normalized = normalize_key(raw)
    if not normalized:
        return Resolution(raw, False)

    option = _option_at(question, _letter_index(_LETTER_PREFIX, normalized))
    if option is not None:
        return Resolution(option, True)

    keys = [normalize_key(o) for o in question.options]
    forms = [normalized]
    stripped = _LETTER_PREFIX.sub("", normalized)
    if stripped and stripped != normalized:
        forms.append(stripped)

    for form in forms:
        for option, key in zip(question.options, keys):
            if key == form:
                return Resolution(option, True)

    option = _option_at(question, _letter_index(_LONE_LETTER, normalized))
    if option is not None:
        return Resolution(option, True)

    for form in forms:
        for option, key in zip(question.options, keys):
            if key and (key in form or form in key):
                return Resolution(option, True)

    return Resolution(raw, False)


def reconcile(question: Question, raw_answer: str) -> str:
    return resolve_answer(question, raw_answer).text


def _candidate_pairs(candidates: Iterable[Any]) -> Iterable[tuple[str, str]]:
    for item in candidates:
        if isinstance(item, Mapping):
            qid, answer = item.get("questionId"), item.get("answer")
        elif isinstance(item, Answer):
            qid, answer = item.question_id, item.text
        elif isinstance(item, tuple) and len(item) == 2:
            qid, answer = item
        else:
            logger.warning("Skipping malformed answer candidate: %r", item)
            continue
        if qid is None or answer is None:
            logger.warning("Skipping answer candidate without questionId/answer: %r", item)
            continue
        yield str(qid), str(answer)


def reconcile_answers(
    questions: Iterable[Question],
    candidates: Iterable[Any],
    wrong_answer_count: int = 0,
    rng: Optional[np.random.Generator] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ReconciliationResult:
    """Reconcile a batch of candidate answers against their questions.

    Args:
        questions: Questions of one parse result
        candidates: ``{"questionId", "answer"}`` pairs from the generator
        wrong_answer_count: Number of multiple-choice questions to answer wrongly
        rng: Random source for the deliberate-miss draw
        overrides: Human-supplied answers by question ID; these win over
            generated ones and are never deliberately missed. Answers that
            match no option are reported as unmatched and never missed

    Returns:
        ReconciliationResult with answers in question order
    """
    qs = list(questions)
    by_id = {q.id: q for q in qs}
    manual = {str(k): str(v) for k, v in (overrides or {}).items()}

    generated: dict[str, str] = {}
    for qid, answer in _candidate_pairs(candidates):
        if qid not in by_id:
            logger.warning("Dropping answer for unknown question id %s", qid)
            continue
        generated.setdefault(qid, answer)

    gen = rng if rng is not None else make_rng()
    resolved: dict[str, tuple[Resolution, bool]] = {}
    for q in qs:
        if q.id in manual:
            resolved[q.id] = (resolve_answer(q, manual[q.id]), True)
        elif q.id in generated:
            resolved[q.id] = (resolve_answer(q, generated[q.id]), False)

    # Only answers that resolved to an option can be turned into a miss.
    eligible = [
        q for q in qs
        if q.id in resolved and not resolved[q.id][1] and resolved[q.id][0].matched
    ]
    chosen = select_deliberate_misses(eligible, wrong_answer_count, rng=gen)

    answers: list[Answer] = []
    misses: set[str] = set()
    unmatched: set[str] = set()
    for q in qs:
        if q.id not in resolved:
            continue
        resolution, is_manual = resolved[q.id]
        text = resolution.text
        if not resolution.matched:
            unmatched.add(q.id)
        if q.id in chosen:
            wrong = choose_wrong_option(q, text, gen)
            if wrong is not None:
                text = wrong
                misses.add(q.id)
        answers.append(Answer(question_id=q.id, text=text, is_manual=is_manual))

    if unmatched:
        logger.info("%d answers did not match any option: %s", len(unmatched), sorted(unmatched))
    return ReconciliationResult(answers, frozenset(misses), frozenset(unmatched))
