"""
Configuration management for the SQL log correlation engine.

This module provides centralized configuration management with
environment-based overrides and validation.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass
class EngineConfig:
    """Configuration settings for log correlation and display."""

    # Caller resolution
    caller_window: int = 50
    caller_marker: str = "Daoの終了"
    caller_package_prefix: str = "jp.co."
    caller_suffix: str = "Dao"
    unknown_caller: str = "Unknown"

    # Input decoding (used by the file-reading collaborator, not the core)
    encoding: str = "SHIFT_JIS"

    # Display
    format_sql: bool = True

    # Debug and logging
    debug_enabled: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        """Post-initialization validation and environment variable loading."""
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        debug_env = os.getenv('SQLLOG_DEBUG', '').lower()
        if debug_env in ('1', 'true', 'yes'):
            self.debug_enabled = True

        log_level = os.getenv('SQLLOG_LOG_LEVEL', '').upper()
        if log_level in _LOG_LEVELS:
            self.log_level = log_level

        window = os.getenv('SQLLOG_CALLER_WINDOW')
        if window and window.isdigit():
            self.caller_window = int(window)

        encoding = os.getenv('SQLLOG_ENCODING')
        if encoding:
            self.encoding = encoding

        format_env = os.getenv('SQLLOG_FORMAT_SQL', '').lower()
        if format_env in ('0', 'false', 'no'):
            self.format_sql = False
        elif format_env in ('1', 'true', 'yes'):
            self.format_sql = True

    def _validate_config(self) -> None:
        """Validate configuration values."""
        if self.caller_window <= 0:
            raise ValueError("caller_window must be positive")

        if not self.caller_marker:
            raise ValueError("caller_marker cannot be empty")

        if not self.caller_suffix:
            raise ValueError("caller_suffix cannot be empty")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

    @classmethod
    def create_default(cls) -> EngineConfig:
        """Create a default configuration instance."""
        return cls()

    @classmethod
    def create_for_testing(cls) -> EngineConfig:
        """Create a configuration optimized for testing."""
        return cls(
            encoding="UTF-8",
            debug_enabled=True,
            log_level="DEBUG"
        )

    def update(self, **kwargs) -> EngineConfig:
        """
        Create a new config instance with updated values.

        Args:
            **kwargs: Configuration values to update

        Returns:
            New EngineConfig instance with updated values
        """
        current_values = self.to_dict()
        current_values.update(kwargs)
        return EngineConfig(**current_values)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'caller_window': self.caller_window,
            'caller_marker': self.caller_marker,
            'caller_package_prefix': self.caller_package_prefix,
            'caller_suffix': self.caller_suffix,
            'unknown_caller': self.unknown_caller,
            'encoding': self.encoding,
            'format_sql': self.format_sql,
            'debug_enabled': self.debug_enabled,
            'log_level': self.log_level,
        }
