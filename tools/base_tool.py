"""
Base tool class for log query tools.
"""
from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from rich.console import Console

from engine.config import EngineConfig


class BaseTool(ABC):
    """Abstract base class for tools that answer queries against decoded log text."""

    def __init__(self, config: Optional[EngineConfig] = None, console: Optional[Console] = None):
        """
        Initialize the tool.

        Args:
            config: Engine configuration (defaults plus environment overrides)
            console: Rich console used for debug output
        """
        self.config = config or EngineConfig()
        self.console = console or Console(stderr=True)
        self.debug_enabled = self.config.debug_enabled

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name for identification."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this tool does."""
        pass

    @property
    def parameters(self) -> Dict[str, Any]:
        """
        Tool parameter schema.

        Returns:
            JSON schema describing the tool's input parameters
        """
        return {
            "type": "object",
            "properties": {},
            "required": []
        }

    @abstractmethod
    def execute(self, input_params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute the tool with given parameters.

        Args:
            input_params: Input parameters for tool execution

        Returns:
            Result dictionary; failures carry an "error" key
        """
        pass

    def validate_input(self, input_params: Dict[str, Any]) -> bool:
        """
        Validate input parameters.

        Args:
            input_params: Parameters to validate

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(input_params, dict):
            return False
        for key in self.parameters.get("required", []):
            if key not in input_params:
                return False
        return True

    def format_result(self, result: Any) -> str:
        """
        Format tool result as text.

        Args:
            result: Raw tool result

        Returns:
            Formatted string result
        """
        if isinstance(result, str):
            return result
        elif isinstance(result, (list, dict)):
            return json.dumps(result, indent=2, ensure_ascii=False)
        else:
            return str(result)

    def _debug_log(self, message: str, data: Any = None) -> None:
        """Log debug information if debugging is enabled."""
        if not self.debug_enabled:
            return
        prefix = f"🔧 [{self.name}]"
        self.console.print(f"[dim cyan]{prefix} {message}[/dim cyan]")
        if data is not None:
            if isinstance(data, (dict, list)):
                data_str = json.dumps(data, indent=2, default=str, ensure_ascii=False)
            else:
                data_str = str(data)
            if len(data_str) > 2000:
                data_str = data_str[:2000] + "... [truncated]"
            self.console.print(data_str, style="dim", markup=False)

    def _debug_input(self, input_params: Dict[str, Any]) -> None:
        """Log input parameters, without the (potentially huge) log text."""
        shown = {k: v for k, v in input_params.items() if k != "log_text"}
        if "log_text" in input_params:
            shown["log_text_length"] = len(input_params["log_text"] or "")
        self._debug_log("📥 INPUT", shown)

    def _debug_output(self, result: Any, execution_time_ms: Optional[float] = None) -> None:
        """Log output result for debugging."""
        time_info = f" ({execution_time_ms:.1f}ms)" if execution_time_ms else ""
        if isinstance(result, dict) and "error" in result:
            self._debug_log(f"❌ ERROR{time_info}", result)
        else:
            self._debug_log(f"📤 OUTPUT{time_info}", result)

    def execute_with_debug(self, input_params: Dict[str, Any]) -> Dict[str, Any]:
        """Execute tool with debug logging wrapper."""
        self._debug_input(input_params)
        start_time = time.time()

        try:
            result = self.execute(input_params)
            self._debug_output(result, (time.time() - start_time) * 1000)
            return result
        except Exception as e:
            error_result = {"error": str(e), "type": type(e).__name__}
            self._debug_output(error_result, (time.time() - start_time) * 1000)
            raise
