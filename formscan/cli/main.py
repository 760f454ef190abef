from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import pandas as pd
import yaml
from tqdm import tqdm

from formscan.answers.generation import build_messages
from formscan.config import AppConfig, default_app_config, load_config
from formscan.data.loader import TEXT_SUFFIXES, load_document, load_questions
from formscan.data.schemas import Category
from formscan.pipeline import answer_form, format_answer_sheet, parse_form
from formscan.utils.determinism import set_determinism
from formscan.utils.io import read_text, write_json, write_jsonl
from formscan.utils.logging import setup_logging


def _emit(payload: object, output: str | None, logger) -> None:
    if output:
        write_json(output, payload)
        logger.info("Wrote %s", output)
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))


def _load_cfg(path: str | None) -> AppConfig:
    return load_config(path) if path else default_app_config()


def cmd_parse(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    try:
        text = load_document(args.input)
        html = load_document(args.html) if args.html else None
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    result = parse_form(text, html=html, config=cfg, mode=args.mode)
    _emit(result.to_dict(default_title=cfg.parser.default_title), args.output, logger)
    if not result.questions:
        print("Tidak ada pertanyaan yang terdeteksi.", file=sys.stderr)
    return 0


def cmd_prompt(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    try:
        questions = load_questions(args.questions)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        logger.error("%s: %s", type(e).__name__, e)
        return 1
    context = {"fullName": args.full_name, "email": args.email}
    _emit(build_messages(questions, context), args.output, logger)
    return 0


def cmd_reconcile(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    try:
        questions = load_questions(args.questions)
        raw = read_text(args.answers)
    except (FileNotFoundError, ValueError, OSError) as e:
        print(f"Error: {e}")
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    overrides = {}
    for item in args.override or []:
        qid, sep, value = item.partition("=")
        if not sep:
            print(f"Error: override '{item}' must look like QUESTION_ID=ANSWER")
            return 1
        overrides[qid.strip()] = value.strip()

    result = answer_form(
        questions,
        raw,
        wrong_answer_count=args.wrong,
        seed=args.seed,
        overrides=overrides,
        config=cfg,
    )
    if args.sheet:
        print(format_answer_sheet(questions, result.answers, label=cfg.answers.answer_label))
        return 0
    _emit(result.to_dict(), args.output, logger)
    return 0


def cmd_batch(args: argparse.Namespace, cfg: AppConfig, logger) -> int:
    input_dir = Path(args.input_dir)
    if not input_dir.is_dir():
        print(f"Error: Input directory '{input_dir}' not found")
        logger.error("FileNotFoundError: Input directory '%s' not found", input_dir)
        return 1

    files = sorted(p for p in input_dir.rglob("*") if p.is_file() and p.suffix.lower() in TEXT_SUFFIXES)
    if not files:
        print(f"No .md/.txt documents found in '{input_dir}'")
        return 1

    rows = []
    summary = []
    for path in tqdm(files, desc="Parsing forms", ncols=80, disable=args.no_progress):
        result = parse_form(read_text(path), config=cfg, mode=args.mode)
        record = result.to_dict(default_title=cfg.parser.default_title)
        record["source"] = str(path)
        rows.append(record)
        summary.append({
            "source": str(path),
            "title": record["title"],
            "questions": len(result.questions),
            "multiple_choice": sum(1 for q in result.questions if q.is_multiple_choice),
            "required": sum(1 for q in result.questions if q.required),
            "identity": sum(1 for q in result.questions if q.category is Category.IDENTITY),
        })

    write_jsonl(args.output, rows)
    df = pd.DataFrame(summary)
    if args.summary_csv:
        Path(args.summary_csv).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.summary_csv, index=False)
    totals = {
        "documents": int(len(df)),
        "questions": int(df["questions"].sum()),
        "empty_documents": int((df["questions"] == 0).sum()),
    }
    print(json.dumps({"summary": totals, "output": str(args.output)}))
    logger.info("Parsed %d documents, %d questions", totals["documents"], totals["questions"])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="formscan CLI - extract questions from scraped forms and reconcile generated answers",
        epilog="""Examples:
  # Parse a scraped form into questions
  python -m formscan.cli.main parse --input form.md --output results/questions.json

  # Parse questions typed as "1. ..." / "a. ..." lines
  python -m formscan.cli.main parse --input pasted.txt --mode numbered

  # Build the prompt messages for the answer generator
  python -m formscan.cli.main prompt --questions results/questions.json --full-name "Budi"

  # Reconcile a generated reply, answering two questions wrongly on purpose
  python -m formscan.cli.main reconcile --questions results/questions.json --answers reply.txt --wrong 2 --seed 7

  # Parse a directory of scraped forms
  python -m formscan.cli.main batch --input-dir scraped/ --output results/forms.jsonl --summary-csv results/summary.csv
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", default=None, help="Config file (.json/.yaml); defaults are used when omitted")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Extract questions from one document")
    parse_parser.add_argument("--input", "-i", required=True, help="Scraped text/markdown file")
    parse_parser.add_argument("--html", default=None, help="Raw HTML of the same page (accepted, currently unused)")
    parse_parser.add_argument("--mode", choices=["scraped", "numbered"], default="scraped", help="Input shape")
    parse_parser.add_argument("--output", "-o", help="Output JSON path (stdout when omitted)")

    prompt_parser = subparsers.add_parser("prompt", help="Build generation messages for a question list")
    prompt_parser.add_argument("--questions", "-q", required=True, help="Questions JSON/JSONL")
    prompt_parser.add_argument("--full-name", default=None, help="User's full name for identity questions")
    prompt_parser.add_argument("--email", default=None, help="User's email for identity questions")
    prompt_parser.add_argument("--output", "-o", help="Output JSON path")

    rec_parser = subparsers.add_parser("reconcile", help="Reconcile a generated reply against questions")
    rec_parser.add_argument("--questions", "-q", required=True, help="Questions JSON/JSONL")
    rec_parser.add_argument("--answers", "-a", required=True, help="File holding the generator's raw reply")
    rec_parser.add_argument("--wrong", type=int, default=None, help="Number of multiple-choice questions to answer wrongly")
    rec_parser.add_argument("--seed", type=int, default=None, help="Seed for the deliberate-miss draw")
    rec_parser.add_argument("--override", action="append", help="Manual answer as QUESTION_ID=ANSWER (repeatable)")
    rec_parser.add_argument("--sheet", action="store_true", help="Print a plain-text answer sheet instead of JSON")
    rec_parser.add_argument("--output", "-o", help="Output JSON path")

    batch_parser = subparsers.add_parser("batch", help="Parse every .md/.txt document in a directory")
    batch_parser.add_argument("--input-dir", "-i", required=True, help="Directory of scraped documents")
    batch_parser.add_argument("--output", "-o", required=True, help="Output JSONL path")
    batch_parser.add_argument("--summary-csv", default=None, help="Per-document summary CSV")
    batch_parser.add_argument("--mode", choices=["scraped", "numbered"], default="scraped", help="Input shape")
    batch_parser.add_argument("--no-progress", action="store_true", help="Disable progress bar")

    return parser


COMMANDS = {
    "parse": cmd_parse,
    "prompt": cmd_prompt,
    "reconcile": cmd_reconcile,
    "batch": cmd_batch,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        cfg = _load_cfg(args.config)
    except FileNotFoundError:
        print(f"Error: Config file '{args.config}' not found")
        return 1
    except (json.JSONDecodeError, yaml.YAMLError, ValueError, TypeError) as e:
        print(f"Error: Invalid config '{args.config}': {e}")
        return 1

    logger = setup_logging(cfg.logging)
    set_determinism(seed=cfg.determinism.seed, python_hash_seed=cfg.determinism.python_hash_seed)
    return COMMANDS[args.command](args, cfg, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
