"""
Placeholder substitution: rebuild runnable SQL from a template and its bindings.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from engine.exceptions import MissingParameterValue, SubstitutionError, UnsupportedParameterType
from engine.models import ParameterBinding, ParameterSet, ParameterType


PLACEHOLDER = '?'


def quote_string(value: str) -> str:
    """SQL string literal: wrap in single quotes and double embedded quotes."""
    return "'" + value.replace("'", "''") + "'"


def format_value(binding: ParameterBinding) -> str:
    """
    Render one binding as a SQL literal.

    Raises:
        UnsupportedParameterType: for any type other than string or numeric
    """
    if binding.type is ParameterType.STRING:
        return quote_string(binding.raw_value)
    if binding.type.is_numeric:
        return binding.raw_value
    raise UnsupportedParameterType(binding.type_name, binding.position)


def fill_placeholders(template: str, params: ParameterSet) -> str:
    """
    Replace each ``?`` in ``template`` with the value bound at its ordinal.

    The n-th ``?`` takes the binding at position n, regardless of how the
    bindings were ordered in the log line. All bindings are rendered before
    scanning, so one unsupported type fails the whole statement.

    Raises:
        UnsupportedParameterType: a binding has an unrenderable type
        MissingParameterValue: a placeholder has no binding at its position
    """
    values: Dict[int, str] = {b.position: format_value(b) for b in params}

    parts = []
    index = 1
    for ch in template:
        if ch == PLACEHOLDER:
            value = values.get(index)
            if value is None:
                raise MissingParameterValue(index)
            parts.append(value)
            index += 1
        else:
            parts.append(ch)
    return "".join(parts)


def try_fill_placeholders(template: str, params: ParameterSet) -> Tuple[str, Optional[str]]:
    """Like fill_placeholders, but fall back to the template and return the failure reason."""
    try:
        return fill_placeholders(template, params), None
    except SubstitutionError as e:
        return template, e.message
