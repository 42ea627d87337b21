"""
Line splitting for decoded log text.

Line indices produced here are used for look-ahead arithmetic by the
caller resolver, so no line (empty or otherwise) may be dropped.
"""
from __future__ import annotations

from typing import List

from engine.exceptions import LogTextError


def split_lines(text: str) -> List[str]:
    """
    Split decoded log text into 0-indexed lines.

    Only ``\\n`` separates lines; a trailing ``\\r`` is stripped from each.
    A final newline does not produce an extra empty line.

    Raises:
        LogTextError: if ``text`` is not a ``str`` (e.g. undecoded bytes)
    """
    if not isinstance(text, str):
        raise LogTextError(type(text))
    if not text:
        return []

    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]
