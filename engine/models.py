"""
Data model for correlated SQL log records.

All records are immutable; every parse request builds fresh instances.
"""
from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


UNKNOWN_CALLER = "Unknown"


class ParameterType(Enum):
    STRING = "String"
    INTEGER = "Integer"
    LONG = "Long"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    OTHER = "Other"

    @classmethod
    def from_token(cls, token: str) -> ParameterType:
        """Map a logged type token (case-insensitive) onto a ParameterType."""
        return _TYPE_TOKENS.get(token.strip().lower(), cls.OTHER)

    @property
    def is_numeric(self) -> bool:
        return self in (ParameterType.INTEGER, ParameterType.LONG,
                        ParameterType.FLOAT, ParameterType.DECIMAL)


_TYPE_TOKENS = {
    'string': ParameterType.STRING,
    'int': ParameterType.INTEGER,
    'long': ParameterType.LONG,
    'float': ParameterType.FLOAT,
    'bigdecimal': ParameterType.DECIMAL,
    'number': ParameterType.DECIMAL,
}


@dataclass(frozen=True)
class ParameterBinding:
    """One `[type:position:value]` entry from a parameter dump."""
    type: ParameterType
    type_name: str  # raw token as logged, e.g. "Int" or "Timestamp"
    position: int
    raw_value: str

    @classmethod
    def from_fields(cls, type_name: str, position: int, raw_value: str) -> ParameterBinding:
        return cls(
            type=ParameterType.from_token(type_name),
            type_name=type_name,
            position=position,
            raw_value=raw_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'type_name': self.type_name,
            'position': self.position,
            'raw_value': self.raw_value,
        }


@dataclass(frozen=True)
class ParameterSet:
    """Bindings keyed by position; a later duplicate position replaces an earlier one."""
    bindings: Tuple[ParameterBinding, ...] = ()

    @classmethod
    def from_bindings(cls, bindings: Iterable[ParameterBinding]) -> ParameterSet:
        by_position: Dict[int, ParameterBinding] = {}
        for binding in bindings:
            by_position[binding.position] = binding
        return cls(bindings=tuple(by_position.values()))

    def get(self, position: int) -> Optional[ParameterBinding]:
        for binding in self.bindings:
            if binding.position == position:
                return binding
        return None

    @property
    def positions(self) -> List[int]:
        return [b.position for b in self.bindings]

    def __len__(self) -> int:
        return len(self.bindings)

    def __iter__(self) -> Iterator[ParameterBinding]:
        return iter(self.bindings)

    def __bool__(self) -> bool:
        return bool(self.bindings)

    def to_dict(self) -> Dict[str, Any]:
        return {str(b.position): b.to_dict() for b in self.bindings}


@dataclass(frozen=True)
class Execution:
    """One concrete occurrence of a statement paired with one parameter set."""
    id: str
    template: str
    filled_sql: str
    sequence_index: int
    timestamp: Optional[str] = None
    caller_name: str = UNKNOWN_CALLER
    parameters: ParameterSet = field(default_factory=ParameterSet)
    fill_error: Optional[str] = None

    @property
    def is_filled(self) -> bool:
        """True when every placeholder was substituted."""
        return self.fill_error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'caller_name': self.caller_name,
            'template': self.template,
            'filled_sql': self.filled_sql,
            'parameters': self.parameters.to_dict(),
            'sequence_index': self.sequence_index,
            'fill_error': self.fill_error,
        }


@dataclass(frozen=True)
class QueryGroup:
    """Executions that share an identical SQL template."""
    template_sql: str
    pretty_template_sql: str
    executions: Tuple[Execution, ...]

    def __post_init__(self):
        if not self.executions:
            raise ValueError("QueryGroup requires at least one execution")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'template_sql': self.template_sql,
            'pretty_template_sql': self.pretty_template_sql,
            'execution_count': len(self.executions),
            'executions': [e.to_dict() for e in self.executions],
        }


@dataclass(frozen=True)
class IdSummary:
    """Navigation entry for one transaction ID."""
    id: str
    has_sql: bool
    parameter_set_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'has_sql': self.has_sql,
            'parameter_set_count': self.parameter_set_count,
        }
