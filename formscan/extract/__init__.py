"""Question extraction from scraped and hand-typed form text."""

from .classify import categorize, split_by_category
from .dedupe import dedupe
from .manual import parse_numbered_text
from .rules import IGNORE_RULES, Rule, is_ignorable, match_rule
from .scanner import OptionScan, ScanResult, collect_options, find_title, scan

__all__ = [
    "IGNORE_RULES",
    "Rule",
    "is_ignorable",
    "match_rule",
    "OptionScan",
    "ScanResult",
    "collect_options",
    "find_title",
    "scan",
    "dedupe",
    "categorize",
    "split_by_category",
    "parse_numbered_text",
]
