"""
Query grouping and ID indexing for navigation views.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from engine.models import Execution, IdSummary, QueryGroup
from .record_locator import RecordLocator
from .sql_pretty_printer import pretty_print_sql


def group_by_template(executions: Iterable[Execution]) -> List[QueryGroup]:
    """
    Partition executions by identical template text.

    Groups appear in the order their template was first seen, and each
    group keeps its executions in input order.
    """
    buckets: Dict[str, List[Execution]] = {}
    for execution in executions:
        buckets.setdefault(execution.template, []).append(execution)

    return [
        QueryGroup(
            template_sql=template,
            pretty_template_sql=pretty_print_sql(template),
            executions=tuple(members),
        )
        for template, members in buckets.items()
    ]


def index_ids(locator: RecordLocator) -> List[IdSummary]:
    """Summaries of every ID with a statement; parameters are counted, not decoded."""
    return [
        IdSummary(id=record_id, has_sql=True, parameter_set_count=count)
        for record_id, count in locator.find_all_ids().items()
    ]
