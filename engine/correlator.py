"""
Log correlation entry points.

Every call takes the decoded log text explicitly and returns freshly built
results; nothing is cached between calls, so separate calls may run
concurrently on the same text.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .config import EngineConfig
from .models import Execution, IdSummary, QueryGroup
from tools.components.execution_builder import ExecutionBuilder
from tools.components.line_splitter import split_lines
from tools.components import query_grouper
from tools.components.record_locator import RecordLocator

logger = logging.getLogger(__name__)


class LogCorrelator:
    """Correlates statement and parameter records in decoded log text."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def locate_by_id(self, text: str, transaction_id: str) -> List[Execution]:
        """
        Executions of one transaction ID.

        An empty list means the ID has no statement record (not found).
        """
        lines = split_lines(text)
        executions = ExecutionBuilder(lines, self.config).build_for_id(transaction_id)
        logger.debug("locate_by_id id=%s -> %d execution(s)", transaction_id, len(executions))
        return executions

    def locate_last(self, text: str) -> List[Execution]:
        """The most recent statement in the log as a single Execution (or empty)."""
        lines = split_lines(text)
        executions = ExecutionBuilder(lines, self.config).build_last()
        if executions:
            logger.debug("locate_last -> id=%s", executions[0].id)
        return executions

    def index_all_ids(self, text: str) -> List[IdSummary]:
        """Navigation summaries for every ID that has a statement record."""
        return query_grouper.index_ids(RecordLocator(split_lines(text)))

    def group_by_template(self, executions: Iterable[Execution]) -> List[QueryGroup]:
        return query_grouper.group_by_template(executions)


def locate_by_id(text: str, transaction_id: str,
                 config: Optional[EngineConfig] = None) -> List[Execution]:
    return LogCorrelator(config).locate_by_id(text, transaction_id)


def locate_last(text: str, config: Optional[EngineConfig] = None) -> List[Execution]:
    return LogCorrelator(config).locate_last(text)


def index_all_ids(text: str) -> List[IdSummary]:
    return LogCorrelator().index_all_ids(text)


def group_by_template(executions: Iterable[Execution]) -> List[QueryGroup]:
    return query_grouper.group_by_template(executions)
