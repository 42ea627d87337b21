"""
Test configuration and fixtures for the SQL log viewer tests.
"""
import os
import pytest
from unittest.mock import Mock

# Add parent directory to Python path for imports
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SAMPLE_LOG = """\
2024/01/01 10:00:00,INFO,main,[SqlLogger] id=abc123 sql=SELECT * FROM users WHERE id = ? AND name = ?
2024/01/01 10:00:00,INFO,main,[SqlLogger] id=abc123 params=[Int:1:42][String:2:O'Brien]
2024/01/01 10:00:01,INFO,main,Daoの終了jp.co.example.user.dao.UserDao.findByIdAndName
2024/01/01 10:00:05,INFO,main,[SqlLogger] id=def456 sql=UPDATE orders SET status = ? WHERE order_id = ?
2024/01/01 10:00:05,INFO,main,[SqlLogger] id=def456 params=[String:1:SHIPPED][Long:2:9001]
2024/01/01 10:00:06,INFO,main,Daoの終了jp.co.example.order.dao.OrderDao.updateStatus
2024/01/01 10:01:00,INFO,main,[SqlLogger] id=abc123 params=[Int:1:7][String:2:Smith]
2024/01/01 10:02:00,INFO,main,[SqlLogger] id=beef99 sql=SELECT COUNT(*) FROM audit_log
2024/01/01 10:02:30,INFO,main,[SqlLogger] id=cafe01 params=[Int:1:1]
"""


@pytest.fixture
def sample_log():
    """Log text with two parameterised statements, one bare statement and an orphan params line."""
    return SAMPLE_LOG


@pytest.fixture
def sample_lines(sample_log):
    """Sample log split into lines."""
    from tools.components.line_splitter import split_lines
    return split_lines(sample_log)


@pytest.fixture
def test_config():
    """Engine configuration for testing."""
    from engine.config import EngineConfig
    return EngineConfig.create_for_testing()


@pytest.fixture
def mock_console():
    """Mock console for testing."""
    return Mock()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep SQLLOG_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("SQLLOG_"):
            monkeypatch.delenv(key, raising=False)
