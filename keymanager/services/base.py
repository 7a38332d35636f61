"""Error taxonomy and the result envelope returned by services."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar('T')


class ServiceError(Exception):
    """Base class for errors reported by the key manager."""
    kind = 'service_error'
    default_message = 'Service error'

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class GenerationError(ServiceError):
    kind = 'generation_error'
    default_message = 'Failed to generate API key'


class InvalidKeyError(ServiceError):
    kind = 'invalid_key'
    default_message = 'Invalid API key'


class ExpiredKeyError(ServiceError):
    kind = 'expired_key'
    default_message = 'API key expired'


class PersistenceError(ServiceError):
    kind = 'persistence_error'
    default_message = 'Storage operation failed'


class LoggingError(ServiceError):
    kind = 'logging_error'
    default_message = 'Failed to log API usage'


@dataclass
class Result(Generic[T]):
    """Outcome of a service call. Errors are carried, never raised."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> 'Result[T]':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: ServiceError) -> 'Result[T]':
        return cls(success=False, error=exc.message, error_kind=exc.kind)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'success': self.success}
        if not self.success:
            body['error'] = self.error
            body['error_kind'] = self.error_kind
        return body
