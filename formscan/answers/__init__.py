"""Answer reconciliation and the generation-service boundary."""

from .generation import (
    AnswerPair,
    GenerationError,
    GenerationParse,
    QuotaExhaustedError,
    RateLimitedError,
    build_messages,
    error_for_status,
    parse_generation_response,
)
from .misses import choose_wrong_option, select_deliberate_misses
from .reconcile import (
    ReconciliationResult,
    Resolution,
    reconcile,
    reconcile_answers,
    resolve_answer,
)

__all__ = [
    "AnswerPair",
    "GenerationError",
    "GenerationParse",
    "QuotaExhaustedError",
    "RateLimitedError",
    "build_messages",
    "error_for_status",
    "parse_generation_response",
    "choose_wrong_option",
    "select_deliberate_misses",
    "ReconciliationResult",
    "Resolution",
    "reconcile",
    "reconcile_answers",
    "resolve_answer",
]
