"""
Caller (DAO class) resolution.

The framework logs a DAO-end marker such as

    ... Daoの終了jp.co.example.order.dao.OrderDao.findById ...

a few lines after the statement it issued. The nearest marker within a
fixed forward window is taken as the caller. This is a proximity heuristic:
interleaved requests can be attributed to the wrong DAO.
"""
from __future__ import annotations

from typing import Optional, Sequence

from engine.models import UNKNOWN_CALLER


DEFAULT_WINDOW = 50
DEFAULT_MARKER = "Daoの終了"
DEFAULT_PACKAGE_PREFIX = "jp.co."
DEFAULT_SUFFIX = "Dao"


def _path_token(text: str) -> str:
    end = 0
    while end < len(text) and not text[end].isspace() and text[end] != ',':
        end += 1
    return text[:end]


def _trailing_letters(segment: str) -> str:
    start = len(segment)
    while start > 0 and segment[start - 1].isascii() and segment[start - 1].isalpha():
        start -= 1
    return segment[start:]


def extract_caller_name(line: str,
                        marker: str = DEFAULT_MARKER,
                        package_prefix: str = DEFAULT_PACKAGE_PREFIX,
                        suffix: str = DEFAULT_SUFFIX) -> Optional[str]:
    """Return the DAO class named by a caller-marker line, or None."""
    pos = line.find(marker)
    while pos >= 0:
        path = _path_token(line[pos + len(marker):])
        if path.startswith(package_prefix):
            for segment in path[len(package_prefix):].split('.'):
                name = _trailing_letters(segment)
                if name.endswith(suffix) and len(name) > len(suffix):
                    return name
        pos = line.find(marker, pos + 1)
    return None


def resolve_caller(lines: Sequence[str],
                   statement_index: int,
                   window: int = DEFAULT_WINDOW,
                   marker: str = DEFAULT_MARKER,
                   package_prefix: str = DEFAULT_PACKAGE_PREFIX,
                   suffix: str = DEFAULT_SUFFIX,
                   default: str = UNKNOWN_CALLER) -> str:
    """
    Find the caller class for the statement at ``statement_index``.

    Scans at most ``window`` lines following the statement line.

    Returns:
        Short DAO class name, or ``default`` when no marker is in range
    """
    end = min(len(lines), statement_index + 1 + window)
    for i in range(statement_index + 1, end):
        name = extract_caller_name(lines[i], marker, package_prefix, suffix)
        if name:
            return name
    return default
