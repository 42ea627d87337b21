"""
Record Locator

Finds statement records (``id=<ID> sql=<text>``) and parameter records
(``id=<ID> params=[...]``) in split log lines. Matching is a small tagged-line
grammar implemented with direct string search:

    <prefix> "id=" <ID> <whitespace>+ "sql="    <rest of line>
    <prefix> "id=" <ID> <whitespace>+ "params=" "[" <rest of line>

``id=`` must start a word (line start, or preceded by a non-word character) and
``<ID>`` runs to the next whitespace, so a target ID never matches as a prefix
of a longer one.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .line_splitter import split_lines


ID_LITERAL = "id="
SQL_TAG = "sql="
PARAMS_TAG = "params="

# Index and last-statement scans only accept hex-like IDs
HEX_ID_CHARS = frozenset("0123456789abcdef")

TIMESTAMP_PATTERN = re.compile(r'^(\d{4}/\d{2}/\d{2}\s+\d{2}:\d{2}:\d{2})')

# <timestamp>,<LEVEL>,<thread>, as written by the application's standard layout
FULL_LINE_PATTERN = re.compile(r'^\d{4}/\d{2}/\d{2}\s+\d{2}:\d{2}:\d{2},\w+,[^,]+,')


@dataclass(frozen=True)
class StatementMatch:
    """A located ``sql=`` record. ``found`` is False when nothing matched."""
    id: str
    sql: str = ""
    line_index: int = -1
    timestamp: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.sql)

    @classmethod
    def not_found(cls, transaction_id: str = "") -> StatementMatch:
        return cls(id=transaction_id)


@dataclass(frozen=True)
class ParameterMatch:
    """A located ``params=`` record; ``raw`` is the undecoded bracket list."""
    id: str
    raw: str
    line_index: int
    timestamp: Optional[str] = None


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == '_'


def iter_tagged_records(line: str, tag: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(id, payload)`` for every ``id=<ID> <tag><payload>`` on a line."""
    length = len(line)
    start = 0
    while True:
        pos = line.find(ID_LITERAL, start)
        if pos < 0:
            return
        start = pos + 1
        if pos > 0 and _is_word_char(line[pos - 1]):
            continue

        id_start = pos + len(ID_LITERAL)
        id_end = id_start
        while id_end < length and not line[id_end].isspace():
            id_end += 1
        if id_end == id_start or id_end == length:
            continue

        tag_start = id_end
        while tag_start < length and line[tag_start].isspace():
            tag_start += 1
        if not line.startswith(tag, tag_start):
            continue

        yield line[id_start:id_end], line[tag_start + len(tag):]


def is_hex_id(token: str) -> bool:
    return bool(token) and all(ch in HEX_ID_CHARS for ch in token)


def extract_timestamp(line: str) -> Optional[str]:
    """Return the leading ``YYYY/MM/DD HH:MM:SS`` prefix of a line, if any."""
    m = TIMESTAMP_PATTERN.match(line)
    return m.group(1) if m else None


class RecordLocator:
    """Scans a snapshot of log lines for statement and parameter records."""

    def __init__(self, lines: Sequence[str]):
        self.lines = lines

    @classmethod
    def from_text(cls, text: str) -> RecordLocator:
        return cls(split_lines(text))

    # ------------------------------ Targeted ------------------------------
    def find_statement(self, transaction_id: str) -> StatementMatch:
        """
        Return the ``sql=`` record for ``transaction_id``.

        A record on a fully prefixed line replaces any earlier match, so a
        reused ID resolves to its latest statement. A record without the
        standard prefix is only taken while nothing has matched yet.
        """
        match = StatementMatch.not_found(transaction_id)
        for i, line in enumerate(self.lines):
            sql = self._statement_on_line(line, transaction_id)
            if not sql:
                continue
            if FULL_LINE_PATTERN.match(line):
                match = StatementMatch(
                    id=transaction_id,
                    sql=sql,
                    line_index=i,
                    timestamp=extract_timestamp(line),
                )
            elif not match.found:
                match = StatementMatch(
                    id=transaction_id,
                    sql=sql,
                    line_index=i,
                    timestamp=self.statement_timestamp(i),
                )
        return match

    def find_all_parameter_sets(self, transaction_id: str) -> List[ParameterMatch]:
        """Return every ``params=`` record for ``transaction_id`` in file order."""
        matches: List[ParameterMatch] = []
        for i, line in enumerate(self.lines):
            for record_id, payload in iter_tagged_records(line, PARAMS_TAG):
                if record_id == transaction_id and self._is_param_payload(payload):
                    matches.append(ParameterMatch(
                        id=record_id,
                        raw=payload,
                        line_index=i,
                        timestamp=extract_timestamp(line),
                    ))
        return matches

    def find_last_parameter_set(self, transaction_id: str) -> Optional[ParameterMatch]:
        matches = self.find_all_parameter_sets(transaction_id)
        return matches[-1] if matches else None

    def find_last_statement(self) -> StatementMatch:
        """Return the final non-empty ``sql=`` record in the file, with its ID."""
        last: Optional[Tuple[str, str, int]] = None
        for i, line in enumerate(self.lines):
            if not line.strip():
                continue
            for record_id, payload in iter_tagged_records(line, SQL_TAG):
                sql = payload.strip()
                if sql and is_hex_id(record_id):
                    last = (record_id, sql, i)
                    break

        if last is None:
            return StatementMatch.not_found()

        record_id, sql, index = last
        return StatementMatch(
            id=record_id,
            sql=sql,
            line_index=index,
            timestamp=self.statement_timestamp(index),
        )

    # -------------------------------- Index --------------------------------
    def find_all_ids(self) -> Dict[str, int]:
        """
        Map each hex-like ID that has a ``sql=`` record to its ``params=`` count.

        IDs keep first-seen order. Parameter records whose ID never had a
        statement are not indexed.
        """
        counts: Dict[str, int] = {}
        for line in self.lines:
            for record_id, _ in iter_tagged_records(line, SQL_TAG):
                if is_hex_id(record_id) and record_id not in counts:
                    counts[record_id] = 0

        for line in self.lines:
            for record_id, payload in iter_tagged_records(line, PARAMS_TAG):
                if record_id in counts and self._is_param_payload(payload):
                    counts[record_id] += 1

        return counts

    # ------------------------------ Utilities -------------------------------
    def statement_timestamp(self, index: int) -> Optional[str]:
        """Timestamp of a statement line, falling back to the line before it."""
        timestamp = extract_timestamp(self.lines[index])
        if timestamp is None and index > 0:
            timestamp = extract_timestamp(self.lines[index - 1])
        return timestamp

    @staticmethod
    def _statement_on_line(line: str, transaction_id: str) -> str:
        for record_id, payload in iter_tagged_records(line, SQL_TAG):
            if record_id == transaction_id:
                sql = payload.strip()
                if sql:
                    return sql
        return ""

    @staticmethod
    def _is_param_payload(payload: str) -> bool:
        return payload.startswith('[') and len(payload) > 1
