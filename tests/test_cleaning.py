"""Tests for prompt and option line cleaning."""

import pytest

from formscan.extract.cleaning import (
    clean_option_candidate,
    clean_question_line,
    has_ordinal,
    has_required_marker,
    strip_option_prefix,
    unescape_markdown,
)


class TestQuestionLine:
    def test_trailing_marker_sets_required(self):
        assert clean_question_line("Siapa presiden pertama Indonesia?*") == (
            "Siapa presiden pertama Indonesia?",
            True,
        )

    def test_escaped_marker_sets_required(self):
        text, required = clean_question_line(r"Nama Lengkap\*")
        assert text == "Nama Lengkap"
        assert required

    def test_leading_marker_sets_required(self):
        assert clean_question_line("* Kelas") == ("Kelas", True)

    def test_no_marker(self):
        assert clean_question_line("Alamat rumah") == ("Alamat rumah", False)

    def test_bold_is_not_a_marker(self):
        assert clean_question_line("**Alamat rumah**") == ("Alamat rumah", False)

    def test_heading_ordinal_and_points(self):
        text, required = clean_question_line(r"## 12\. Tahun berapa Indonesia merdeka?\* 3 poin")
        assert text == "Tahun berapa Indonesia merdeka?"
        assert required

    def test_points_suffix_english(self):
        assert clean_question_line("Pick one 2 points")[0] == "Pick one"
        assert clean_question_line("Pick one 1 point")[0] == "Pick one"

    def test_whitespace_collapsed(self):
        assert clean_question_line("  Siapa   nama\tkamu ?  ")[0] == "Siapa nama kamu ?"


class TestOptionLine:
    def test_candidate_strips_numbering_and_points(self):
        assert clean_option_candidate(r"3\. Soekarno 1 poin") == "Soekarno"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("a. Soekarno", "Soekarno"),
            ("B) Soeharto", "Soeharto"),
            ("- Habibie", "Habibie"),
            ("• Gus Dur", "Gus Dur"),
            ("○ 1945", "1945"),
            ("e.g. a sample", "e.g. a sample"),
            ("Soekarno", "Soekarno"),
        ],
    )
    def test_strip_option_prefix(self, raw, expected):
        assert strip_option_prefix(raw) == expected


class TestMarkers:
    def test_unescape(self):
        assert unescape_markdown(r"1\. Soal\* \_x\_") == "1. Soal* _x_"

    def test_required_marker_anywhere(self):
        assert has_required_marker(r"Kelas\*")
        assert has_required_marker("* Kelas")
        assert not has_required_marker("Kelas")

    def test_ordinal(self):
        assert has_ordinal("12. Soal")
        assert not has_ordinal("1945")
        assert not has_ordinal("1.5 meter")
