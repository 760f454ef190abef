"""Data schemas for formscan."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

_WS = re.compile(r"\s+")


def normalize_key(text: str) -> str:
    """Lower-case, collapse internal whitespace and trim."""
    if not text:
        return ""
    return _WS.sub(" ", text).strip().lower()


class QuestionKind(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TEXT = "text"


class Category(str, Enum):
    IDENTITY = "identity"
    QUIZ = "quiz"


@dataclass(frozen=True)
class Question:
    """One detected prompt of a form.

    Multiple-choice questions always carry at least two distinct options;
    free-text questions never carry any.
    """
    id: str
    text: str
    kind: QuestionKind
    options: Tuple[str, ...] = ()
    required: bool = False
    category: Category = Category.QUIZ

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", QuestionKind(self.kind))
        object.__setattr__(self, "category", Category(self.category))
        object.__setattr__(self, "options", tuple(self.options))
        if self.kind is QuestionKind.MULTIPLE_CHOICE and len(self.options) < 2:
            raise ValueError(f"Multiple-choice question {self.id} needs at least 2 options")
        if self.kind is QuestionKind.TEXT and self.options:
            raise ValueError(f"Free-text question {self.id} cannot carry options")

    @property
    def is_multiple_choice(self) -> bool:
        return self.kind is QuestionKind.MULTIPLE_CHOICE

    @classmethod
    def build(
        cls,
        id: str,
        text: str,
        options: Sequence[str] = (),
        required: bool = False,
        category: Optional[Category] = None,
    ) -> "Question":
        """Create a question, choosing the kind from the option count."""
        opts = tuple(options)
        kind = QuestionKind.MULTIPLE_CHOICE if len(opts) >= 2 else QuestionKind.TEXT
        if kind is QuestionKind.TEXT:
            opts = ()
        if category is None:
            from ..extract.classify import categorize

            category = categorize(text)
        return cls(id=id, text=text, kind=kind, options=opts, required=required, category=category)

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "question": self.text,
            "type": self.kind.value,
        }
        if self.is_multiple_choice:
            record["options"] = list(self.options)
        record["required"] = self.required
        record["category"] = self.category.value
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Question":
        if not isinstance(record, Mapping):
            raise ValueError(f"Invalid question record: expected mapping, got {type(record).__name__}")
        if "id" not in record or "question" not in record:
            raise ValueError(f"Question record missing id or question: {dict(record)!r}")
        options = list(record.get("options") or [])
        category = record.get("category")
        return cls.build(
            id=str(record["id"]),
            text=str(record["question"]),
            options=[str(o) for o in options],
            required=bool(record.get("required", False)),
            category=Category(category) if category else None,
        )


@dataclass(frozen=True)
class Answer:
    question_id: str
    text: str
    is_manual: bool = False

    def to_record(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "answer": self.text,
            "isManual": self.is_manual,
        }


@dataclass
class ParseResult:
    """Questions detected in one document plus its title, if any."""
    title: Optional[str] = None
    questions: List[Question] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.questions)

    def to_dict(self, default_title: Optional[str] = None) -> Dict[str, Any]:
        return {
            "title": self.title or default_title,
            "questions": [q.to_record() for q in self.questions],
        }
