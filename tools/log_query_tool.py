"""
SQL Log Query Tool

Looks up executed SQL in decoded DAO application log text: by transaction
ID, the most recent statement, or an index of every ID. Results are plain
dictionaries ready for JSON output or for rendering by a UI.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .base_tool import BaseTool
from .components.parameter_decoder import format_parameters
from .components.sql_pretty_printer import display_sql
from engine.correlator import LogCorrelator
from engine.exceptions import LogCorrelationError, RecordNotFoundError
from engine.logging import EngineLogger
from engine.models import Execution

MODES = ("id", "last", "index")


class LogQueryTool(BaseTool):
    """Recovers SQL statements and parameters from log text."""

    @property
    def name(self) -> str:
        return "sql_log_query"

    @property
    def description(self) -> str:
        return (
            "Find SQL statements logged as 'id=<ID> sql=...' and fill their '?' "
            "placeholders from the matching 'id=<ID> params=[...]' lines"
        )

    @property
    def parameters(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "log_text": {
                    "type": "string",
                    "description": "Decoded log file contents"
                },
                "mode": {
                    "type": "string",
                    "enum": list(MODES),
                    "description": "Lookup by ID, the last statement, or index all IDs",
                    "default": "id"
                },
                "id": {
                    "type": "string",
                    "description": "Transaction ID (required for mode 'id')"
                },
                "format_sql": {
                    "type": "boolean",
                    "description": "Break SQL onto lines before major keywords"
                }
            },
            "required": ["log_text"]
        }

    def execute(self, input_params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.validate_input(input_params):
            return {"error": "Invalid input: log_text is required"}

        log_text = input_params.get("log_text")
        mode = input_params.get("mode") or "id"
        format_sql = bool(input_params.get("format_sql", self.config.format_sql))

        if mode not in MODES:
            return {"error": f"Unknown mode '{mode}'. Expected one of: {', '.join(MODES)}"}

        transaction_id = (input_params.get("id") or "").strip()
        if mode == "id" and not transaction_id:
            return {"error": "Mode 'id' requires a non-empty 'id'"}

        logger = EngineLogger.get_logger(level=self.config.log_level)
        correlator = LogCorrelator(self.config)
        EngineLogger.set_context(operation=self.name, transaction_id=transaction_id or None)

        try:
            if mode == "index":
                with logger.operation(f"{self.name}:index"):
                    summaries = correlator.index_all_ids(log_text)
                return {
                    "mode": mode,
                    "id_count": len(summaries),
                    "ids": [s.to_dict() for s in summaries],
                }

            with logger.operation(f"{self.name}:{mode}", {"id": transaction_id or None}):
                if mode == "last":
                    executions = correlator.locate_last(log_text)
                else:
                    executions = correlator.locate_by_id(log_text, transaction_id)

            if not executions:
                raise RecordNotFoundError(transaction_id if mode == "id" else None)

            return self._execution_result(mode, executions, correlator, format_sql)

        except RecordNotFoundError as e:
            logger.warning(e.message)
            return {"error": e.message, "mode": mode, "id": transaction_id or None}
        except LogCorrelationError as e:
            return {"error": e.message, "mode": mode, "details": e.details}
        finally:
            EngineLogger.clear_context()

    def _execution_result(self, mode: str, executions: List[Execution],
                          correlator: LogCorrelator, format_sql: bool) -> Dict[str, Any]:
        """Mirror of the single-query view: the last execution is the one shown."""
        groups = correlator.group_by_template(executions)
        last = executions[-1]

        return {
            "mode": mode,
            "id": last.id,
            "caller_name": last.caller_name,
            "execution_count": len(executions),
            "executions": [e.to_dict() for e in executions],
            "groups": [g.to_dict() for g in groups],
            "filled_sql": last.filled_sql,
            "formatted_sql": display_sql(last.template, format_sql),
            "formatted_filled_sql": display_sql(last.filled_sql, format_sql),
            "formatted_params": format_parameters(last.parameters),
            "fill_errors": [
                {"sequence_index": e.sequence_index, "reason": e.fill_error}
                for e in executions if e.fill_error
            ],
        }

    def create_compact_output(self, full_result: Dict[str, Any]) -> Dict[str, Any]:
        """Create a compact summary for non-verbose output."""
        if "error" in full_result:
            return full_result

        if full_result.get("mode") == "index":
            ids = full_result.get("ids", [])
            return {
                "summary": f"{len(ids)} IDs with SQL",
                "ids": [f"{i['id']} ({i['parameter_set_count']} params)" for i in ids[:10]],
            }

        executions = full_result.get("executions", [])
        groups = full_result.get("groups", [])
        return {
            "summary": (
                f"id={full_result.get('id')}: {len(executions)} execution(s) "
                f"across {len(groups)} template(s), caller {full_result.get('caller_name')}"
            ),
            "filled_sql": full_result.get("filled_sql"),
            "unfilled": len(full_result.get("fill_errors", [])),
        }
