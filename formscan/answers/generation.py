"""Boundary with the answer-generation service.

This module does no network I/O. It builds the chat messages a caller sends
to the generation service, turns the service's free-form reply into
``{questionId, answer}`` pairs, and maps the service's failure statuses onto
named exceptions. Retry policy belongs to the caller.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple, Optional

from ..data.schemas import Question

logger = logging.getLogger(__name__)

DEFAULT_ERROR_TEMPLATE = "Error parsing AI response for question {index}"
UNKNOWN = "Tidak diketahui"

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

SYSTEM_PROMPT = """Kamu adalah AI assistant yang sangat pintar dalam menjawab soal ujian dan kuis.
Tugasmu adalah memberikan jawaban yang BENAR dan AKURAT untuk setiap pertanyaan.

INSTRUKSI PENTING:
1. Untuk soal pilihan ganda, pilih jawaban yang PALING BENAR dari opsi yang tersedia
2. Untuk soal essay/isian, berikan jawaban yang singkat, padat, dan tepat
3. Gunakan pengetahuanmu untuk menjawab dengan akurat
4. Jika ada konteks user (nama, email), gunakan untuk pertanyaan identitas
5. Format jawaban dalam JSON array sesuai urutan pertanyaan

User Context:
- Nama: {full_name}
- Email: {email}"""

USER_PROMPT = """Jawab pertanyaan-pertanyaan berikut ini:

{questions}

Berikan jawaban dalam format JSON array seperti ini:
[
  {{"questionId": "id1", "answer": "jawaban1"}},
  {{"questionId": "id2", "answer": "jawaban2"}}
]

PENTING: Pastikan jawaban untuk pilihan ganda EXACTLY sama dengan salah satu opsi yang tersedia."""


class GenerationError(Exception):
    """Base exception for generation service failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(GenerationError):
    """Raised when the generation service rate-limits the caller (HTTP 429)."""


class QuotaExhaustedError(GenerationError):
    """Raised when the caller's generation credits are used up (HTTP 402)."""


def error_for_status(status_code: int, body: str = "") -> Optional[GenerationError]:
    """Map a failed service status onto a named exception (not raised)."""
    if 200 <= status_code < 300:
        return None
    if status_code == 429:
        return RateLimitedError("Rate limit exceeded. Please try again later.", status_code)
    if status_code == 402:
        return QuotaExhaustedError("AI credits exhausted. Please add credits to continue.", status_code)
    detail = f": {body[:200]}" if body else ""
    return GenerationError(f"Generation service error {status_code}{detail}", status_code)


class AnswerPair(NamedTuple):
    question_id: str
    answer: str

    def to_record(self) -> dict[str, str]:
        return {"questionId": self.question_id, "answer": self.answer}


class GenerationParse(NamedTuple):
    pairs: list[AnswerPair]
    ok: bool


def format_question_list(questions: Sequence[Question]) -> str:
    blocks = []
    for n, q in enumerate(questions, start=1):
        text = f"{n}. {q.text}"
        if q.is_multiple_choice:
            text += f"\n   Pilihan: {', '.join(q.options)}"
        if q.required:
            text += " (Wajib)"
        blocks.append(text)
    return "\n\n".join(blocks)


def build_messages(
    questions: Sequence[Question],
    user_context: Optional[Mapping[str, Any]] = None,
) -> list[dict[str, str]]:
    """Build system/user chat messages asking for one answer per question."""
    ctx = user_context or {}
    system = SYSTEM_PROMPT.format(
        full_name=ctx.get("fullName") or UNKNOWN,
        email=ctx.get("email") or UNKNOWN,
    )
    user = USER_PROMPT.format(questions=format_question_list(questions))
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def _placeholders(questions: Sequence[Question], template: str) -> list[AnswerPair]:
    return [AnswerPair(q.id, template.format(index=n)) for n, q in enumerate(questions, start=1)]


def parse_generation_response(
    raw: Optional[str],
    questions: Sequence[Question],
    error_template: str = DEFAULT_ERROR_TEMPLATE,
) -> GenerationParse:
    """Extract ``{questionId, answer}`` pairs from a generated reply.

    The reply is free text that should contain a JSON array, possibly inside
    a code fence. When no usable pair can be read, one placeholder pair per
    question is returned with ``ok=False`` instead of failing the batch.
    """
    match = _JSON_ARRAY.search(raw or "")
    if not match:
        logger.error("Could not find JSON array in generation response")
        return GenerationParse(_placeholders(questions, error_template), False)

    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse generation response: %s", e)
        return GenerationParse(_placeholders(questions, error_template), False)

    if not isinstance(payload, list):
        return GenerationParse(_placeholders(questions, error_template), False)

    pairs: list[AnswerPair] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        qid, answer = item.get("questionId"), item.get("answer")
        if qid is None or answer is None or isinstance(answer, (dict, list)):
            continue
        pairs.append(AnswerPair(str(qid), str(answer)))

    if not pairs:
        logger.error("Generation response held no questionId/answer pairs")
        return GenerationParse(_placeholders(questions, error_template), False)
    return GenerationParse(pairs, True)
