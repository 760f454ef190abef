"""Loading and saving of scraped documents and question lists."""

import json
from pathlib import Path
from typing import List, Optional, Union

from .schemas import ParseResult, Question
from ..utils.io import read_jsonl, read_text, write_json

TEXT_SUFFIXES = {".md", ".markdown", ".txt"}


def load_document(path: Union[str, Path]) -> str:
    """Read a scraped document body from disk.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the path is not a file
    """
    filepath = Path(path).resolve()
    if not filepath.exists():
        raise FileNotFoundError(f"Document not found: {filepath}")
    if not filepath.is_file():
        raise ValueError(f"Path is not a file: {filepath}")
    return read_text(filepath)


def load_questions(path: Union[str, Path]) -> List[Question]:
    """Load question records from a JSON file or a JSONL file.

    A JSON file may hold either a list of records or a parse result
    (``{"title": ..., "questions": [...]}``).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or data is malformed
    """
    filepath = Path(path).resolve()
    if not filepath.exists():
        raise FileNotFoundError(f"Questions file not found: {filepath}")
    if filepath.suffix not in {".jsonl", ".json"}:
        raise ValueError(f"Expected .jsonl or .json file, got: {filepath.suffix}")

    try:
        if filepath.suffix == ".jsonl":
            rows = list(read_jsonl(filepath))
        else:
            with open(filepath, encoding="utf-8") as f:
                payload = json.load(f)
            rows = payload.get("questions", []) if isinstance(payload, dict) else payload
    except json.JSONDecodeError as e:
        raise ValueError(f"Error loading questions from {filepath}: {e}")

    if not isinstance(rows, list):
        raise ValueError(f"Expected a list of question records in {filepath}")
    return [Question.from_record(row) for row in rows]


def save_questions(
    path: Union[str, Path],
    result: ParseResult,
    default_title: Optional[str] = None,
) -> None:
    write_json(path, result.to_dict(default_title=default_title))
