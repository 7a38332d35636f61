"""services package."""
from .base import (
    ExpiredKeyError,
    GenerationError,
    InvalidKeyError,
    LoggingError,
    PersistenceError,
    Result,
    ServiceError,
)
from .key_manager import ApiKeyManager

__all__ = [
    'ApiKeyManager',
    'ExpiredKeyError',
    'GenerationError',
    'InvalidKeyError',
    'LoggingError',
    'PersistenceError',
    'Result',
    'ServiceError',
]
