"""
SQL log correlation engine package.

Recovers SQL statements and their separately logged parameters from DAO
application logs. The public operations live in ``engine.correlator``.
"""

from .config import EngineConfig
from .models import (
    ParameterType, ParameterBinding, ParameterSet,
    Execution, QueryGroup, IdSummary, UNKNOWN_CALLER
)
from .exceptions import (
    LogCorrelationError, LogTextError, RecordNotFoundError,
    MalformedParameterToken, SubstitutionError,
    UnsupportedParameterType, MissingParameterValue
)
from .logging import EngineLogger, StructuredLogger

__all__ = [
    # Configuration
    'EngineConfig',

    # Data structures
    'ParameterType',
    'ParameterBinding',
    'ParameterSet',
    'Execution',
    'QueryGroup',
    'IdSummary',
    'UNKNOWN_CALLER',

    # Exceptions
    'LogCorrelationError',
    'LogTextError',
    'RecordNotFoundError',
    'MalformedParameterToken',
    'SubstitutionError',
    'UnsupportedParameterType',
    'MissingParameterValue',

    # Logging
    'EngineLogger',
    'StructuredLogger',
]

__version__ = '1.0.0'
