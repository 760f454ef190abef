"""Data handling modules for formscan."""

from .schemas import Answer, Category, ParseResult, Question, QuestionKind, normalize_key
from .loader import load_document, load_questions, save_questions

__all__ = [
    "Answer",
    "Category",
    "ParseResult",
    "Question",
    "QuestionKind",
    "normalize_key",
    "load_document",
    "load_questions",
    "save_questions",
]
