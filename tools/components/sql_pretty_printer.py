"""
Cosmetic SQL line breaking.

The single space in front of each major keyword becomes a newline; nothing
else changes, so the output is still the same statement.
"""
from __future__ import annotations

import re

BREAK_KEYWORDS = ('SELECT', 'FROM', 'WHERE', 'AND', 'OR', 'ORDER BY', 'GROUP BY')

NOT_FOUND_TEXT = "Not found"

_BREAK_PATTERN = re.compile(
    r' (?=(?:' + '|'.join(re.escape(k) for k in BREAK_KEYWORDS) + r') )',
    re.IGNORECASE,
)


def pretty_print_sql(sql: str) -> str:
    """Insert a line break before each space-delimited keyword; idempotent."""
    if not sql:
        return sql
    return _BREAK_PATTERN.sub('\n', sql).strip()


def display_sql(sql: str, format_sql: bool = True) -> str:
    """SQL text for display; blank SQL is shown as ``Not found``."""
    if not sql or not sql.strip():
        return NOT_FOUND_TEXT
    return pretty_print_sql(sql) if format_sql else sql
