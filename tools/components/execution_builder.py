"""
Execution Builder

Correlates a located statement with the parameter records logged for the
same ID and produces one Execution per parameter set.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from engine.config import EngineConfig
from engine.models import Execution, ParameterSet
from .caller_resolver import resolve_caller
from .parameter_decoder import decode_parameters
from .placeholder_substitution import try_fill_placeholders
from .record_locator import ParameterMatch, RecordLocator, StatementMatch

logger = logging.getLogger(__name__)


class ExecutionBuilder:
    """Builds Executions from a snapshot of log lines."""

    def __init__(self, lines: Sequence[str], config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.locator = RecordLocator(lines)

    @property
    def lines(self) -> Sequence[str]:
        return self.locator.lines

    def build_for_id(self, transaction_id: str) -> List[Execution]:
        """
        All executions of ``transaction_id``, in file order.

        Returns an empty list when the ID has no statement record.
        """
        statement = self.locator.find_statement(transaction_id)
        if not statement.found:
            logger.debug("No statement for id=%s", transaction_id)
            return []

        param_matches = self.locator.find_all_parameter_sets(transaction_id)
        return self._build(statement, param_matches)

    def build_last(self) -> List[Execution]:
        """
        The most recent statement in the log, paired with the last parameter
        set logged for its ID.
        """
        statement = self.locator.find_last_statement()
        if not statement.found:
            logger.debug("No statements in log")
            return []

        last_params = self.locator.find_last_parameter_set(statement.id)
        return self._build(statement, [last_params] if last_params else [])

    def _build(self, statement: StatementMatch,
               param_matches: List[ParameterMatch]) -> List[Execution]:
        caller = resolve_caller(
            self.lines,
            statement.line_index,
            window=self.config.caller_window,
            marker=self.config.caller_marker,
            package_prefix=self.config.caller_package_prefix,
            suffix=self.config.caller_suffix,
            default=self.config.unknown_caller,
        )

        if not param_matches:
            return [Execution(
                id=statement.id,
                template=statement.sql,
                filled_sql=statement.sql,
                sequence_index=1,
                timestamp=statement.timestamp,
                caller_name=caller,
                parameters=ParameterSet(),
            )]

        executions: List[Execution] = []
        for index, match in enumerate(param_matches, start=1):
            params = decode_parameters(match.raw)
            filled_sql, fill_error = try_fill_placeholders(statement.sql, params)
            if fill_error:
                logger.debug(
                    "Substitution fell back to template for id=%s #%d: %s",
                    statement.id, index, fill_error,
                )
            executions.append(Execution(
                id=statement.id,
                template=statement.sql,
                filled_sql=filled_sql,
                sequence_index=index,
                timestamp=match.timestamp or statement.timestamp,
                caller_name=caller,
                parameters=params,
                fill_error=fill_error,
            ))
        return executions
