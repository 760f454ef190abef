"""Tests for the generation-service boundary: prompts, reply parsing, errors."""

import pytest

from formscan.answers.generation import (
    UNKNOWN,
    AnswerPair,
    GenerationError,
    QuotaExhaustedError,
    RateLimitedError,
    build_messages,
    error_for_status,
    format_question_list,
    parse_generation_response,
)


class TestPrompt:
    def test_question_list_layout(self, question_batch):
        text = format_question_list(question_batch)
        assert text.startswith("1. Siapa presiden pertama Indonesia?\n   Pilihan: Soekarno, Soeharto, Habibie, Gus Dur (Wajib)")
        assert "2. Tahun berapa Indonesia merdeka?\n   Pilihan: 1945, 1946 (Wajib)" in text
        assert "3. Jelaskan makna proklamasi kemerdekaan (Wajib)" in text
        assert "Pilihan" not in text.split("\n\n")[2]

    def test_messages_with_context(self, question_batch):
        messages = build_messages(question_batch, {"fullName": "Budi Santoso", "email": "budi@example.com"})
        assert [m["role"] for m in messages] == ["system", "user"]
        assert "Nama: Budi Santoso" in messages[0]["content"]
        assert "Email: budi@example.com" in messages[0]["content"]
        assert '{"questionId": "id1", "answer": "jawaban1"}' in messages[1]["content"]
        assert "Pilihan: 1945, 1946" in messages[1]["content"]

    def test_messages_without_context(self, question_batch):
        system = build_messages(question_batch)[0]["content"]
        assert f"Nama: {UNKNOWN}" in system
        assert f"Email: {UNKNOWN}" in system


class TestParseResponse:
    def test_fenced_json(self, question_batch):
        raw = 'Berikut jawabannya:\n```json\n[{"questionId": "q1", "answer": "Soekarno"}, {"questionId": "q2", "answer": 1945}]\n```'
        parsed = parse_generation_response(raw, question_batch)
        assert parsed.ok
        assert parsed.pairs == [AnswerPair("q1", "Soekarno"), AnswerPair("q2", "1945")]

    def test_malformed_items_skipped(self, question_batch):
        raw = '[{"questionId": "q1", "answer": "Soekarno"}, "x", {"answer": "y"}, {"questionId": "q2", "answer": {"a": 1}}]'
        parsed = parse_generation_response(raw, question_batch)
        assert parsed.pairs == [AnswerPair("q1", "Soekarno")]

    @pytest.mark.parametrize(
        "raw",
        [None, "", "Maaf, saya tidak bisa menjawab.", "[not json]", '[{"id": "q1"}]'],
    )
    def test_placeholders_on_failure(self, question_batch, raw):
        parsed = parse_generation_response(raw, question_batch)
        assert not parsed.ok
        assert [p.question_id for p in parsed.pairs] == ["q1", "q2", "q3"]
        assert parsed.pairs[1].answer == "Error parsing AI response for question 2"

    def test_custom_error_template(self, question_batch):
        parsed = parse_generation_response("nope", question_batch, error_template="gagal #{index}")
        assert parsed.pairs[0].to_record() == {"questionId": "q1", "answer": "gagal #1"}


class TestErrorForStatus:
    def test_success_is_none(self):
        assert error_for_status(200) is None
        assert error_for_status(204) is None

    def test_rate_limited(self):
        err = error_for_status(429)
        assert isinstance(err, RateLimitedError)
        assert err.status_code == 429

    def test_quota(self):
        assert isinstance(error_for_status(402), QuotaExhaustedError)

    def test_other_status(self):
        err = error_for_status(500, "upstream down")
        assert type(err) is GenerationError
        assert "500" in str(err)
        assert "upstream down" in str(err)

    def test_hierarchy(self):
        with pytest.raises(GenerationError):
            raise error_for_status(429)
