"""End-to-end entry points: text to questions, generated reply to answers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from .answers.generation import parse_generation_response
from .answers.reconcile import ReconciliationResult, reconcile_answers
from .config import AppConfig, default_app_config
from .data.schemas import Answer, ParseResult, Question
from .extract.dedupe import dedupe
from .extract.manual import parse_numbered_text
from .extract.scanner import scan
from .utils.determinism import make_rng

logger = logging.getLogger(__name__)

MODES = ("scraped", "numbered")


def parse_form(
    text: str,
    html: Optional[str] = None,
    config: Optional[AppConfig] = None,
    mode: str = "scraped",
) -> ParseResult:
    """Extract the ordered question list and title from a document body.

    ``html`` is accepted alongside the text but not used yet. Empty or
    malformed input gives an empty result rather than an exception.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown parse mode: {mode!r} (expected one of {MODES})")
    cfg = config or default_app_config()
    if not isinstance(text, str) or not text.strip():
        logger.info("Empty document, nothing to parse")
        return ParseResult()

    if mode == "numbered":
        result = ParseResult(title=None, questions=parse_numbered_text(text))
    else:
        lines = tuple(text.splitlines())
        title, questions = scan(lines, cfg.parser)
        result = ParseResult(title=title, questions=dedupe(questions))

    logger.info("Found %d questions after filtering", len(result.questions))
    return result


def answer_form(
    questions: Sequence[Question],
    raw_response: Optional[str],
    wrong_answer_count: Optional[int] = None,
    seed: Optional[int] = None,
    overrides: Optional[Mapping[str, str]] = None,
    config: Optional[AppConfig] = None,
) -> ReconciliationResult:
    """Turn a generation reply into reconciled answers for ``questions``."""
    cfg = config or default_app_config()
    parsed = parse_generation_response(raw_response, questions, cfg.answers.error_template)
    if not parsed.ok:
        logger.warning("Generation reply unusable; returning %d placeholder answers", len(parsed.pairs))
        return ReconciliationResult(
            answers=[Answer(question_id=p.question_id, text=p.answer) for p in parsed.pairs],
            unmatched=frozenset(p.question_id for p in parsed.pairs),
        )
    count = cfg.answers.wrong_answer_count if wrong_answer_count is None else wrong_answer_count
    return reconcile_answers(
        questions,
        parsed.pairs,
        wrong_answer_count=count,
        rng=make_rng(cfg.determinism.seed if seed is None else seed),
        overrides=overrides,
    )


def format_answer_sheet(
    questions: Iterable[Question],
    answers: Iterable[Answer],
    label: str = "Jawaban",
) -> str:
    by_id = {q.id: q for q in questions}
    blocks = []
    for n, a in enumerate(answers, start=1):
        q = by_id.get(a.question_id)
        blocks.append(f"{n}. {q.text if q else ''}\n{label}: {a.text}")
    return "\n\n".join(blocks)
