"""
Parameter dump decoding.

A parameter record looks like ``[String:1:abc][Int:2:42][Timestamp:3:2024-01-01 10:00:00]``.
Each bracket splits on its first two colons only, because values may contain colons.
"""
from __future__ import annotations

import logging
import re
from typing import Iterator, List, Tuple

from engine.exceptions import MalformedParameterToken
from engine.models import ParameterBinding, ParameterSet

logger = logging.getLogger(__name__)

POSITION_PATTERN = re.compile(r'-?[0-9]+')


def iter_bracket_contents(raw: str) -> Iterator[str]:
    """Yield the non-empty text inside each ``[...]`` pair, left to right."""
    pos = 0
    while True:
        open_pos = raw.find('[', pos)
        if open_pos < 0:
            return
        close_pos = raw.find(']', open_pos + 1)
        if close_pos < 0:
            return
        content = raw[open_pos + 1:close_pos]
        pos = close_pos + 1
        if content:
            yield content


def split_token(token: str) -> Tuple[str, int, str]:
    """
    Split one bracket's content into ``(type, position, value)``.

    Raises:
        MalformedParameterToken: fewer than three fields, or a non-integer position
    """
    parts = token.split(':', 2)
    if len(parts) != 3:
        raise MalformedParameterToken(token, "expected type:position:value")
    type_name, position, value = parts
    if not POSITION_PATTERN.fullmatch(position):
        raise MalformedParameterToken(token, f"position '{position}' is not an integer")
    return type_name, int(position), value


def decode_parameters(raw: str) -> ParameterSet:
    """
    Decode a ``params=`` payload into a ParameterSet.

    Malformed brackets are skipped; the remaining bindings are still returned.
    """
    bindings: List[ParameterBinding] = []
    for token in iter_bracket_contents(raw):
        try:
            type_name, position, value = split_token(token)
        except MalformedParameterToken as e:
            logger.debug("Dropping parameter token: %s", e.message)
            continue
        bindings.append(ParameterBinding.from_fields(type_name, position, value))
    return ParameterSet.from_bindings(bindings)


def format_parameters(params: ParameterSet) -> str:
    """Render bindings one per line as ``  [pos] Type: value``."""
    if not params:
        return "Not found"
    return "".join(
        f"  [{b.position}] {b.type_name}: {b.raw_value}\n" for b in params
    )
