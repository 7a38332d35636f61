from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from keymanager.utils.timestamps import from_db, to_json

USAGE_COLUMNS = (
    'id', 'api_key_id', 'endpoint', 'method', 'response_status', 'request_count', 'timestamp',
)


@dataclass
class ApiKeyUsageEvent:
    id: str
    api_key_id: str
    endpoint: str
    method: str
    response_status: int
    request_count: int = 1
    timestamp: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> 'ApiKeyUsageEvent':
        event_id, api_key_id, endpoint, method, response_status, request_count, timestamp = row
        return cls(
            id=event_id,
            api_key_id=api_key_id,
            endpoint=endpoint,
            method=method,
            response_status=int(response_status),
            request_count=int(request_count),
            timestamp=from_db(timestamp),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'api_key_id': self.api_key_id,
            'endpoint': self.endpoint,
            'method': self.method,
            'response_status': self.response_status,
            'request_count': self.request_count,
            'timestamp': to_json(self.timestamp),
        }
