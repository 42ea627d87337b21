"""
Structured logging for the SQL log correlation engine.

This module provides centralized logging with structured output,
operation timing, and Rich console integration.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional
from contextlib import contextmanager
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler


def _make_handler(console: Console) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter(
        fmt="%(message)s",
        datefmt="[%X]"
    ))
    return handler


@dataclass
class LogContext:
    """Context information for structured logging."""
    log_source: Optional[str] = None
    transaction_id: Optional[str] = None
    operation: Optional[str] = None


class StructuredLogger:
    """Structured logger with Rich console integration."""

    def __init__(self, name: str, level: str = "INFO", console: Optional[Console] = None):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level
            console: Rich console for output
        """
        self.name = name
        self.console = console or Console(stderr=True)
        self.context = LogContext()

        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Disable propagation to avoid duplicate logs when root logger also has handlers
        self.logger.propagate = False
        self.logger.handlers.clear()
        self.logger.addHandler(_make_handler(self.console))

    def set_context(self, **kwargs) -> None:
        """
        Set logging context.

        Args:
            **kwargs: Context variables to set
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)

    def clear_context(self) -> None:
        """Clear logging context."""
        self.context = LogContext()

    def _format_message(self, message: str, extra: Optional[Dict[str, Any]] = None) -> str:
        """Format message with context and extra data."""
        parts = []

        if self.context.operation:
            parts.append(f"[{self.context.operation}]")

        if self.context.transaction_id:
            parts.append(f"[id={self.context.transaction_id}]")

        parts.append(message)

        formatted = " ".join(parts)

        if extra:
            formatted += f" | {json.dumps(extra, default=str, ensure_ascii=False)}"

        return formatted

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None,
              exc_info: bool = False) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, extra), exc_info=exc_info)

    @contextmanager
    def operation(self, operation_name: str, extra: Optional[Dict[str, Any]] = None):
        """
        Context manager for timing operations.

        Args:
            operation_name: Name of the operation
            extra: Additional data to log
        """
        start_time = time.time()
        self.debug(f"Starting operation: {operation_name}", extra)

        try:
            yield
            duration = time.time() - start_time
            self.debug(
                f"Completed operation: {operation_name}",
                {"duration_ms": round(duration * 1000, 2), **(extra or {})}
            )
        except Exception as e:
            duration = time.time() - start_time
            self.error(
                f"Failed operation: {operation_name}",
                {
                    "duration_ms": round(duration * 1000, 2),
                    "error": str(e),
                    "error_type": type(e).__name__,
                    **(extra or {})
                },
                exc_info=True
            )
            raise


class EngineLogger:
    """Centralized logger for the correlation engine and its tools."""

    _instance: Optional[StructuredLogger] = None

    @classmethod
    def get_logger(cls, name: str = "sql_log", level: str = "INFO",
                   console: Optional[Console] = None) -> StructuredLogger:
        """
        Get or create the global engine logger.

        Args:
            name: Logger name
            level: Logging level
            console: Rich console

        Returns:
            StructuredLogger instance
        """
        if cls._instance is None:
            cls._instance = StructuredLogger(name, level, console)
        return cls._instance

    @classmethod
    def configure(cls, level: str = "INFO", console: Optional[Console] = None) -> None:
        """
        Configure the global engine logger and root logger.

        Args:
            level: Logging level for project loggers (INFO or DEBUG)
            console: Rich console
        """
        if cls._instance:
            cls._instance.logger.setLevel(getattr(logging, level.upper()))
            if console:
                cls._instance.console = console
                for handler in cls._instance.logger.handlers:
                    if isinstance(handler, RichHandler):
                        handler.console = console
        else:
            cls._instance = StructuredLogger("sql_log", level, console)

        # Root logger stays at WARNING to silence third-party libraries
        _console = console or Console(stderr=True)
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.WARNING)
        root_logger.handlers.clear()
        root_logger.addHandler(_make_handler(_console))

        # Project loggers respect the requested level and propagate to root
        for module_name in ("engine", "tools", "util"):
            module_logger = logging.getLogger(module_name)
            module_logger.setLevel(getattr(logging, level.upper()))
            module_logger.handlers.clear()
            module_logger.propagate = True

        logging.getLogger("markdown_it").setLevel(logging.WARNING)

    @classmethod
    def set_context(cls, **kwargs) -> None:
        """Set logging context on the global logger."""
        if cls._instance:
            cls._instance.set_context(**kwargs)

    @classmethod
    def clear_context(cls) -> None:
        """Clear logging context on the global logger."""
        if cls._instance:
            cls._instance.clear_context()
