from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from formscan.data.schemas import Question  # noqa: E402


# ====================
# Document Fixtures
# ====================

QUIZ_FORM_TEXT = """Quiz Form
Siapa presiden pertama Indonesia?*
Soekarno
Soeharto
Habibie
Gus Dur
Tahun berapa Indonesia merdeka?*
1945
1946
"""

# Markdown shaped like a scraped Google Form page, chrome included.
SCRAPED_FORM_MARKDOWN = r"""# Ulangan Harian Sejarah

Sign in to Google to save your progress. Learn more

\* Indicates required question

Nama Lengkap\*

Your answer

Kelas\*

Your answer

1\. Siapa presiden pertama Indonesia?\* 2 points

Soekarno

Soeharto

Habibie

Gus Dur

Clear selection

2\. Tahun berapa Indonesia merdeka?\* 2 points

1945

1946

3\. Jelaskan makna proklamasi kemerdekaan\*

Your answer

Next

Clear form

Never submit passwords through Google Forms.

This content is neither created nor endorsed by Google. - [Terms of Service](https://policies.google.com/terms) - [Privacy Policy](https://policies.google.com/privacy)

Does this form look suspicious? [Report](https://docs.google.com/forms/d/e/abc/reportabuse)

[Google Forms](https://www.google.com/forms/about/)
"""

NUMBERED_TEXT = """Soal latihan
1. Siapa presiden pertama Indonesia?
a. Soekarno
b. Soeharto
c. Habibie
2) Sebutkan isi sila pertama
   Pancasila
3. Ibu kota Indonesia adalah
A) Jakarta
B) Bandung
"""


@pytest.fixture
def quiz_form_text() -> str:
    return QUIZ_FORM_TEXT


@pytest.fixture
def scraped_form_markdown() -> str:
    return SCRAPED_FORM_MARKDOWN


@pytest.fixture
def numbered_text() -> str:
    return NUMBERED_TEXT


# ====================
# Question Fixtures
# ====================

@pytest.fixture
def presiden_question() -> Question:
    return Question.build(
        id="q1",
        text="Siapa presiden pertama Indonesia?",
        options=["Soekarno", "Soeharto", "Habibie", "Gus Dur"],
        required=True,
    )


@pytest.fixture
def merdeka_question() -> Question:
    return Question.build(
        id="q2",
        text="Tahun berapa Indonesia merdeka?",
        options=["1945", "1946"],
        required=True,
    )


@pytest.fixture
def essay_question() -> Question:
    return Question.build(id="q3", text="Jelaskan makna proklamasi kemerdekaan", required=True)


@pytest.fixture
def question_batch(presiden_question, merdeka_question, essay_question) -> list[Question]:
    return [presiden_question, merdeka_question, essay_question]


@pytest.fixture
def questions_file(tmp_path, question_batch) -> Path:
    path = tmp_path / "questions.json"
    path.write_text(
        json.dumps({"title": "Quiz", "questions": [q.to_record() for q in question_batch]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config_file(tmp_path) -> Path:
    """Config that keeps log files inside the test's tmp dir."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"logging": {"log_dir": str(tmp_path / "logs"), "level": "WARNING"}}),
        encoding="utf-8",
    )
    return path
