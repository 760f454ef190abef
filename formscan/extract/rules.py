"""Boilerplate detection for scraped form text.

Scraped form pages carry a lot of UI chrome around the actual questions:
sign-in prompts, the "indicates required question" legend, answer
placeholders, navigation buttons, legal footers and platform branding.
Each kind is one named rule in ``IGNORE_RULES``; rules are evaluated top to
bottom and the first match wins, so ``match_rule`` can tell a caller *why* a
line was dropped. Adding a new pattern means appending a ``Rule``, nothing
else.

English and Indonesian variants are covered since both locales show up in
the forms this was built against.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Pattern

MIN_LINE_LENGTH = 3

# Navigation labels must fill the whole line (arrows and trailing
# punctuation allowed) so words like "Feedback" or "Backpack" survive.
_NAV_WORDS = (
    r"next|back|previous|submit|clear form|"
    r"berikutnya|selanjutnya|kembali|sebelumnya|kirim|hapus formulir"
)
NAVIGATION_RE = re.compile(rf"^[\s<>«»‹›←→\-–—]*(?:{_NAV_WORDS})[\s<>«»‹›←→\-–—.!]*$", re.IGNORECASE)
PLACEHOLDER_RE = re.compile(r"^(?:your answer|jawaban anda)$", re.IGNORECASE)
PLACEHOLDER_PHRASE_RE = re.compile(r"your answer|jawaban anda", re.IGNORECASE)
REQUIRED_LEGEND_RE = re.compile(
    r"indicates required|menunjukkan pertanyaan (?:yang )?wajib", re.IGNORECASE
)


class Rule(NamedTuple):
    name: str
    pattern: Pattern[str]


def _rule(name: str, pattern: str) -> Rule:
    return Rule(name, re.compile(pattern, re.IGNORECASE))


IGNORE_RULES: tuple[Rule, ...] = (
    _rule("sign_in", r"^(?:sign in|login|log in)\b"),
    _rule("save_progress", r"save your progress|simpan progres"),
    Rule("required_legend", REQUIRED_LEGEND_RE),
    Rule("answer_placeholder", PLACEHOLDER_PHRASE_RE),
    Rule("navigation", NAVIGATION_RE),
    _rule("clear_selection", r"^(?:clear selection|kosongkan pilihan)$"),
    _rule("password_warning", r"never submit passwords|jangan pernah mengirimkan sandi"),
    _rule("third_party_notice", r"this content is neither created|konten ini tidak dibuat"),
    _rule("terms_of_service", r"terms of service|persyaratan layanan"),
    _rule("privacy_policy", r"privacy policy|kebijakan privasi"),
    _rule("suspicious_form", r"does this form look suspicious|formulir ini (?:tampak )?mencurigakan"),
    _rule("report_abuse", r"^report\b|report abuse|laporkan penyalahgunaan"),
    _rule("branding", r"google forms|google formulir"),
    _rule("help_feedback", r"help and feedback|bantuan dan masukan"),
    _rule("contact_owner", r"contact form owner|hubungi pemilik formulir"),
    _rule("help_improve", r"help forms improve"),
    _rule("markdown_link", r"^\[[^\]]*\]\([^)]*\)\s*$"),
    _rule("markdown_image", r"^!\[[^\]]*\]\("),
    _rule("section_heading", r"^(?:pilihan ganda|multiple choice)$"),
)


def match_rule(line: str, min_length: int = MIN_LINE_LENGTH) -> Optional[str]:
    """Return the name of the first rule that marks ``line`` as boilerplate."""
    trimmed = (line or "").strip()
    if len(trimmed) < min_length:
        return "too_short"
    for rule in IGNORE_RULES:
        if rule.pattern.search(trimmed):
            return rule.name
    if not any(ch.isalnum() for ch in trimmed):
        return "punctuation_only"
    return None


def is_ignorable(line: str, min_length: int = MIN_LINE_LENGTH) -> bool:
    return match_rule(line, min_length=min_length) is not None


def is_navigation(line: str) -> bool:
    return bool(NAVIGATION_RE.match((line or "").strip()))


def is_placeholder(line: str) -> bool:
    return bool(PLACEHOLDER_RE.match((line or "").strip()))


def has_placeholder_phrase(text: str) -> bool:
    return bool(PLACEHOLDER_PHRASE_RE.search(text or ""))


def is_required_legend(line: str) -> bool:
    return bool(REQUIRED_LEGEND_RE.search(line or ""))
