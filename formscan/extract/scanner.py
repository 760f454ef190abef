"""Question and option extraction from scraped form text.

The scanner is a single forward pass over an immutable list of lines with an
explicit cursor. Every non-boilerplate line is a question candidate; right
after a candidate, ``collect_options`` looks ahead for its options and
reports where the next candidate may start. Both functions are pure: they
take the lines and an index and return new values, so each step can be
exercised on its own.

The option lookahead stops as soon as a line reads like the start of another
question (required marker, trailing ``?`` or ``:``, ordinal prefix). Without
that boundary a later question and its options get absorbed as options of
the current one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple, Optional

from ..config import ParserConfig
from ..data.schemas import Question
from .classify import categorize
from .cleaning import (
    clean_option_candidate,
    clean_question_line,
    has_ordinal,
    has_required_marker,
    strip_option_prefix,
    unescape_markdown,
)
from .rules import (
    has_placeholder_phrase,
    is_ignorable,
    is_navigation,
    is_placeholder,
    is_required_legend,
)

logger = logging.getLogger(__name__)


class OptionScan(NamedTuple):
    options: list[str]
    next_index: int


class ScanResult(NamedTuple):
    title: Optional[str]
    questions: list[Question]


def looks_like_next_question(raw: str, candidate: str) -> bool:
    return (
        has_required_marker(raw)
        or candidate.endswith("?")
        or candidate.endswith(":")
        or has_ordinal(raw)
    )


def _is_option_shape(candidate: str, max_length: int) -> bool:
    return (
        0 < len(candidate) < max_length
        and not candidate.endswith("?")
        and not candidate.endswith(":")
        and "*" not in candidate
        and not candidate.startswith("[")
    )


def collect_options(
    lines: Sequence[str],
    start_index: int,
    config: Optional[ParserConfig] = None,
) -> OptionScan:
    """Gather the option lines that follow a question candidate.

    Returns the distinct options in order of appearance and the index of the
    first line that was not consumed.
    """
    cfg = config or ParserConfig()
    options: list[str] = []
    j = start_index

    while j < len(lines):
        raw = (lines[j] or "").strip()

        if not raw:
            j += 1
            continue
        if is_navigation(raw):
            break
        if is_placeholder(raw) or is_ignorable(raw, cfg.min_line_length):
            j += 1
            continue

        candidate = clean_option_candidate(raw)
        if looks_like_next_question(raw, candidate):
            break

        if _is_option_shape(candidate, cfg.max_option_length):
            option = strip_option_prefix(candidate)
            if option and not is_ignorable(option, cfg.min_line_length) and option not in options:
                options.append(option)
            j += 1
            continue

        # Long free-text-like line after known options: next question began.
        if options:
            break
        j += 1

    return OptionScan(options, j)


def find_title(
    lines: Sequence[str],
    config: Optional[ParserConfig] = None,
) -> tuple[Optional[int], Optional[str]]:
    """Locate the form title, if the document opens with one.

    When the required legend or a required-marked line is present, the first
    meaningful line before it is the title, whatever it looks like. Without
    such a marker the first of the opening lines is only taken as the title
    when it does not read as a question itself and is not followed by its
    own options.
    """
    cfg = config or ParserConfig()
    end = min(len(lines), cfg.title_scan_lines)
    bounded = False
    for k, line in enumerate(lines):
        raw = (line or "").strip()
        if is_required_legend(raw) or (raw and clean_question_line(raw)[1]):
            end, bounded = k, True
            break

    for k in range(end):
        raw = (lines[k] or "").strip()
        if not raw or is_ignorable(raw, cfg.min_line_length):
            continue
        cleaned, _ = clean_question_line(raw)
        if len(cleaned) < cfg.min_line_length:
            continue
        if bounded:
            return k, cleaned
        if cleaned.endswith("?") or has_ordinal(unescape_markdown(raw)):
            return None, None
        if len(collect_options(lines, k + 1, cfg).options) >= 2:
            return None, None
        return k, cleaned
    return None, None


def scan(lines: Sequence[str], config: Optional[ParserConfig] = None) -> ScanResult:
    """Extract questions from scraped lines in one forward pass."""
    cfg = config or ParserConfig()
    title_index, title = find_title(lines, cfg)
    questions: list[Question] = []
    rejected = 0
    i = 0

    while i < len(lines):
        raw = (lines[i] or "").strip()
        if not raw or is_ignorable(raw, cfg.min_line_length) or i == title_index:
            i += 1
            continue

        text, required = clean_question_line(raw)
        if len(text) < cfg.min_line_length or is_ignorable(text, cfg.min_line_length):
            i += 1
            continue

        options, j = collect_options(lines, i + 1, cfg)

        if has_placeholder_phrase(text) or text.startswith("["):
            rejected += 1
        else:
            questions.append(
                Question.build(
                    id=f"q{len(questions) + 1}",
                    text=text,
                    options=options,
                    required=required,
                    category=categorize(text),
                )
            )

        i = j if j > i + 1 else i + 1

    logger.debug(
        "Scanned %d lines: %d candidates, %d rejected, title=%r",
        len(lines), len(questions), rejected, title,
    )
    return ScanResult(title, questions)
