from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: Optional[str] = "logs"  # None logs to the console only
    filename: str = "formscan.log"

    def file_path(self) -> Optional[Path]:
        if not self.log_dir:
            return None
        return Path(self.log_dir) / self.filename


@dataclass
class DeterminismConfig:
    seed: int = 42
    python_hash_seed: int = 0


@dataclass
class ParserConfig:
    min_line_length: int = 3
    max_option_length: int = 120
    title_scan_lines: int = 20  # title window when the form has no required marker
    default_title: str = "Google Form"


@dataclass
class AnswerConfig:
    wrong_answer_count: int = 0
    answer_label: str = "Jawaban"
    error_template: str = "Error parsing AI response for question {index}"


@dataclass
class AppConfig:
    logging: LoggingConfig = None  # type: ignore[assignment]
    determinism: DeterminismConfig = None  # type: ignore[assignment]
    parser: ParserConfig = None  # type: ignore[assignment]
    answers: AnswerConfig = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.logging is None:
            self.logging = LoggingConfig()
        if self.determinism is None:
            self.determinism = DeterminismConfig()
        if self.parser is None:
            self.parser = ParserConfig()
        if self.answers is None:
            self.answers = AnswerConfig()

    @staticmethod
    def from_dict(payload: Dict[str, Any]) -> "AppConfig":
        return AppConfig(
            logging=LoggingConfig(**(payload.get("logging") or {})),
            determinism=DeterminismConfig(**(payload.get("determinism") or {})),
            parser=ParserConfig(**(payload.get("parser") or {})),
            answers=AnswerConfig(**(payload.get("answers") or {})),
        )

    @staticmethod
    def from_json(path: str | Path) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return AppConfig.from_dict(payload)

    @staticmethod
    def from_yaml(path: str | Path) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f) or {}
        return AppConfig.from_dict(payload)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logging": asdict(self.logging),
            "determinism": asdict(self.determinism),
            "parser": asdict(self.parser),
            "answers": asdict(self.answers),
        }

    def to_json(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)


def load_config(path: str | Path) -> AppConfig:
    """Load an AppConfig from a .json, .yaml or .yml file."""
    suffix = Path(path).suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return AppConfig.from_yaml(path)
    if suffix == ".json":
        return AppConfig.from_json(path)
    raise ValueError(f"Unsupported config format: {suffix or path}")


# Provide safe defaults via a factory function for top-level config
def default_app_config() -> AppConfig:
    return AppConfig(
        logging=LoggingConfig(),
        determinism=DeterminismConfig(),
        parser=ParserConfig(),
        answers=AnswerConfig(),
    )
