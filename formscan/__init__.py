"""formscan package.

Extracts structured question records from scraped online-form text and
reconciles generated answers back onto each question's canonical options.

The package performs no network I/O; fetching pages and calling the answer
generator are left to the caller.
"""

from .answers import reconcile, reconcile_answers, select_deliberate_misses
from .config import AppConfig, default_app_config, load_config
from .data import Answer, Category, ParseResult, Question, QuestionKind
from .extract import dedupe, is_ignorable, scan
from .pipeline import answer_form, format_answer_sheet, parse_form
from .utils import set_determinism, setup_logging

__all__ = [
    "__version__",
    "AppConfig",
    "default_app_config",
    "load_config",
    "Answer",
    "Category",
    "ParseResult",
    "Question",
    "QuestionKind",
    "dedupe",
    "is_ignorable",
    "scan",
    "reconcile",
    "reconcile_answers",
    "select_deliberate_misses",
    "answer_form",
    "format_answer_sheet",
    "parse_form",
    "setup_logging",
    "set_determinism",
]

__version__ = "0.1.0"
