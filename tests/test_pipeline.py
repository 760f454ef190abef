"""End-to-end tests: document text to questions, generated reply to answers."""

import json

import pytest

from formscan.config import AnswerConfig, AppConfig, ParserConfig
from formscan.data.schemas import Answer, ParseResult, QuestionKind
from formscan.pipeline import answer_form, format_answer_sheet, parse_form

REPLY = json.dumps(
    [
        {"questionId": "q1", "answer": "a. Soekarno"},
        {"questionId": "q2", "answer": "1945"},
        {"questionId": "q3", "answer": "Pernyataan kemerdekaan"},
    ]
)


class TestParseForm:
    def test_quiz_form(self, quiz_form_text):
        result = parse_form(quiz_form_text)
        assert result.title == "Quiz Form"
        assert len(result) == 2
        assert [len(q.options) for q in result.questions] == [4, 2]

    def test_scraped_markdown_round_dict(self, scraped_form_markdown):
        payload = parse_form(scraped_form_markdown).to_dict(default_title="Google Form")
        assert payload["title"] == "Ulangan Harian Sejarah"
        assert [q["id"] for q in payload["questions"]] == ["q1", "q2", "q3", "q4", "q5"]
        assert payload["questions"][3]["options"] == ["1945", "1946"]

    @pytest.mark.parametrize("text", [None, "", "   \n\t\n"])
    def test_empty_input(self, text):
        result = parse_form(text)
        assert result == ParseResult()
        assert result.to_dict("Google Form") == {"title": "Google Form", "questions": []}

    def test_repeated_questions_collapsed(self):
        result = parse_form("Nama*\nYour answer\nnama*\nYour answer\nKelas*")
        assert [(q.id, q.text) for q in result.questions] == [("q1", "Nama"), ("q3", "Kelas")]

    def test_numbered_mode(self, numbered_text):
        result = parse_form(numbered_text, mode="numbered")
        assert result.title is None
        assert [q.kind for q in result.questions] == [
            QuestionKind.MULTIPLE_CHOICE,
            QuestionKind.TEXT,
            QuestionKind.MULTIPLE_CHOICE,
        ]

    def test_unknown_mode(self, quiz_form_text):
        with pytest.raises(ValueError, match="Unknown parse mode"):
            parse_form(quiz_form_text, mode="html")

    def test_parser_config_applied(self):
        text = "Pilih satu?*\nPilihan yang agak panjang\nPilihan lain yang panjang"
        assert parse_form(text).questions[0].is_multiple_choice
        cfg = AppConfig(parser=ParserConfig(max_option_length=10))
        assert not parse_form(text, config=cfg).questions[0].is_multiple_choice

    def test_html_accepted(self, quiz_form_text):
        assert len(parse_form(quiz_form_text, html="<html></html>")) == 2


class TestAnswerForm:
    def test_reconciled_answers(self, question_batch):
        result = answer_form(question_batch, REPLY)
        assert result.answers == [
            Answer("q1", "Soekarno"),
            Answer("q2", "1945"),
            Answer("q3", "Pernyataan kemerdekaan"),
        ]
        assert not result.deliberate_misses

    def test_seeded_misses_repeat(self, question_batch):
        first = answer_form(question_batch, REPLY, wrong_answer_count=1, seed=5)
        second = answer_form(question_batch, REPLY, wrong_answer_count=1, seed=5)
        assert first == second
        assert len(first.deliberate_misses) == 1

    def test_wrong_count_from_config(self, question_batch):
        cfg = AppConfig(answers=AnswerConfig(wrong_answer_count=2))
        result = answer_form(question_batch, REPLY, config=cfg)
        assert result.deliberate_misses == frozenset({"q1", "q2"})

    def test_unusable_reply_gives_placeholders(self, question_batch):
        result = answer_form(question_batch, "Maaf, terjadi kesalahan.", wrong_answer_count=3)
        assert [a.text for a in result.answers] == [
            "Error parsing AI response for question 1",
            "Error parsing AI response for question 2",
            "Error parsing AI response for question 3",
        ]
        assert result.unmatched == frozenset({"q1", "q2", "q3"})
        assert not result.deliberate_misses

    def test_overrides(self, question_batch):
        result = answer_form(question_batch, REPLY, overrides={"q2": "1946"})
        assert result.answers[1] == Answer("q2", "1946", is_manual=True)


def test_answer_sheet(question_batch):
    answers = [Answer("q1", "Soekarno"), Answer("q3", "Kemerdekaan")]
    assert format_answer_sheet(question_batch, answers) == (
        "1. Siapa presiden pertama Indonesia?\nJawaban: Soekarno\n\n"
        "2. Jelaskan makna proklamasi kemerdekaan\nJawaban: Kemerdekaan"
    )
    assert format_answer_sheet(question_batch, answers[:1], label="Answer").endswith("Answer: Soekarno")
