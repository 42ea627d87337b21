"""
Tests for the LogQueryTool wrapper.
"""
import io
import json

import pytest
from rich.console import Console

from engine.config import EngineConfig
from engine.logging import EngineLogger, LogContext
from tools.log_query_tool import LogQueryTool


def make_tool(mock_console, **overrides):
    config = EngineConfig(**overrides) if overrides else EngineConfig()
    return LogQueryTool(config=config, console=mock_console)


class TestLogQueryTool:
    """Test suite for LogQueryTool."""

    def test_tool_properties(self, mock_console):
        tool = make_tool(mock_console)

        assert tool.name == "sql_log_query"
        assert "placeholders" in tool.description
        assert tool.parameters["required"] == ["log_text"]
        assert set(tool.parameters["properties"]["mode"]["enum"]) == {"id", "last", "index"}

    def test_lookup_by_id(self, mock_console, sample_log):
        result = make_tool(mock_console).execute({"log_text": sample_log, "id": "abc123"})

        assert "error" not in result
        assert result["mode"] == "id"
        assert result["execution_count"] == 2
        assert result["caller_name"] == "UserDao"
        assert len(result["groups"]) == 1
        assert result["groups"][0]["execution_count"] == 2
        assert result["filled_sql"] == "SELECT * FROM users WHERE id = 7 AND name = 'Smith'"
        assert result["formatted_sql"] == "SELECT *\nFROM users\nWHERE id = ?\nAND name = ?"
        assert "[2] String: Smith" in result["formatted_params"]
        assert result["fill_errors"] == []

    def test_format_sql_disabled(self, mock_console, sample_log):
        tool = make_tool(mock_console, format_sql=False)
        result = tool.execute({"log_text": sample_log, "id": "abc123"})
        assert result["formatted_sql"] == "SELECT * FROM users WHERE id = ? AND name = ?"

        result = make_tool(mock_console).execute(
            {"log_text": sample_log, "id": "abc123", "format_sql": False}
        )
        assert "\n" not in result["formatted_sql"]

    def test_id_not_found(self, mock_console, sample_log):
        result = make_tool(mock_console).execute({"log_text": sample_log, "id": "missing"})
        assert result["error"] == "ID not found: missing"

    def test_last_mode(self, mock_console, sample_log):
        result = make_tool(mock_console).execute({"log_text": sample_log, "mode": "last"})

        assert result["id"] == "beef99"
        assert result["execution_count"] == 1
        assert result["formatted_params"] == "Not found"

    def test_last_mode_nothing_found(self, mock_console):
        result = make_tool(mock_console).execute({"log_text": "no sql here", "mode": "last"})
        assert result["error"] == "No SQL queries found in log"

    def test_index_mode(self, mock_console, sample_log):
        result = make_tool(mock_console).execute({"log_text": sample_log, "mode": "index"})

        assert result["id_count"] == 3
        assert result["ids"][0] == {"id": "abc123", "has_sql": True, "parameter_set_count": 2}

    def test_fill_errors_reported(self, mock_console):
        text = "id=abc sql=SELECT ?\nid=abc params=[Int:1:1]\nid=abc params=[Clob:1:x]"
        result = make_tool(mock_console).execute({"log_text": text, "id": "abc"})

        assert result["fill_errors"] == [{"sequence_index": 2, "reason": "Unsupported type: Clob"}]
        assert result["executions"][1]["filled_sql"] == "SELECT ?"

    def test_invalid_input(self, mock_console):
        tool = make_tool(mock_console)

        assert "error" in tool.execute({})
        assert "error" in tool.execute({"log_text": "x", "mode": "everything"})
        assert "error" in tool.execute({"log_text": "x", "mode": "id"})
        assert "error" in tool.execute({"log_text": "x", "id": "   "})

    def test_undecoded_text_is_an_error_result(self, mock_console):
        result = make_tool(mock_console).execute({"log_text": b"id=abc sql=SELECT 1", "id": "abc"})
        assert "must be str" in result["error"]

    def test_result_is_json_serializable(self, mock_console, sample_log):
        tool = make_tool(mock_console)
        result = tool.execute({"log_text": sample_log, "id": "def456"})
        data = json.loads(tool.format_result(result))
        assert data["executions"][0]["parameters"]["2"]["raw_value"] == "9001"

    def test_compact_output(self, mock_console, sample_log):
        tool = make_tool(mock_console)

        compact = tool.create_compact_output(tool.execute({"log_text": sample_log, "id": "abc123"}))
        assert compact["summary"].startswith("id=abc123: 2 execution(s) across 1 template(s)")
        assert compact["unfilled"] == 0

        compact = tool.create_compact_output(tool.execute({"log_text": sample_log, "mode": "index"}))
        assert compact["summary"] == "3 IDs with SQL"

        error = {"error": "ID not found: x"}
        assert tool.create_compact_output(error) is error

    def test_execute_with_debug_prints_when_enabled(self, mock_console, sample_log):
        tool = make_tool(mock_console, debug_enabled=True)
        result = tool.execute_with_debug({"log_text": sample_log, "mode": "index"})

        assert result["id_count"] == 3
        assert mock_console.print.called

    def test_execute_with_debug_silent_by_default(self, mock_console, sample_log):
        tool = make_tool(mock_console)
        tool.execute_with_debug({"log_text": sample_log, "mode": "index"})
        assert not mock_console.print.called


class TestLogQueryToolLogging:
    """The tool tags its log lines with the ID being looked up."""

    @pytest.fixture
    def log_buffer(self):
        buffer = io.StringIO()
        EngineLogger._instance = None
        EngineLogger.get_logger(console=Console(file=buffer, force_terminal=False, width=200))
        yield buffer
        EngineLogger._instance = None

    def test_not_found_warning_carries_id(self, mock_console, sample_log, log_buffer):
        make_tool(mock_console).execute({"log_text": sample_log, "id": "missing"})

        assert "[sql_log_query] [id=missing] ID not found: missing" in log_buffer.getvalue()

    def test_context_cleared_after_execute(self, mock_console, sample_log, log_buffer):
        tool = make_tool(mock_console)

        tool.execute({"log_text": sample_log, "id": "abc123"})
        assert EngineLogger.get_logger().context == LogContext()

        tool.execute({"log_text": b"undecoded", "id": "abc123"})
        assert EngineLogger.get_logger().context == LogContext()
