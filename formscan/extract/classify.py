"""Identity vs. quiz classification of detected questions.

Forms usually open with a handful of identity fields (name, class, student
number, birth date) before the actual quiz. Callers answer those from user
context instead of sending them to the generator.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..data.schemas import Category, Question

IDENTITY_KEYWORDS: tuple[str, ...] = (
    "name", "full name", "nama", "nama lengkap",
    "class", "kelas", "grade",
    "nis", "nisn", "nim", "nip", "nik", "npm",
    "student id", "id number", "student number", "nomor induk", "no induk",
    "absen", "no absen", "nomor absen",
    "date of birth", "birth date", "birthday", "tanggal lahir", "tgl lahir",
    "place of birth", "tempat lahir",
    "email", "e-mail", "phone", "no hp", "nomor hp", "whatsapp",
    "address", "alamat",
    "school", "sekolah", "asal sekolah",
    "gender", "jenis kelamin",
    "age", "umur", "usia",
)

_IDENTITY_RE = re.compile(
    r"(?<![\w-])(?:" + "|".join(re.escape(k) for k in sorted(IDENTITY_KEYWORDS, key=len, reverse=True)) + r")(?![\w-])",
    re.IGNORECASE,
)


def categorize(text: str) -> Category:
    if text and _IDENTITY_RE.search(text):
        return Category.IDENTITY
    return Category.QUIZ


def split_by_category(questions: Iterable[Question]) -> tuple[list[Question], list[Question]]:
    """Split questions into (identity, quiz), preserving order."""
    identity: list[Question] = []
    quiz: list[Question] = []
    for q in questions:
        (identity if q.category is Category.IDENTITY else quiz).append(q)
    return identity, quiz
