from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from keymanager.utils.timestamps import ensure_utc, from_db, to_json

# Column order used by every SELECT against api_keys
API_KEY_COLUMNS = (
    'id', 'user_id', 'name', 'key_hash', 'key_prefix', 'permissions',
    'is_active', 'last_used', 'created_at', 'updated_at', 'expires_at',
)


def encode_permissions(permissions: Sequence[str]) -> str:
    return json.dumps(list(permissions))


def decode_permissions(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return list(json.loads(raw))


@dataclass
class ApiKey:
    id: str
    user_id: str
    name: str
    key_hash: str
    key_prefix: str
    permissions: List[str] = field(default_factory=list)
    is_active: bool = True
    last_used: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> 'ApiKey':
        (key_id, user_id, name, key_hash, key_prefix, permissions,
         is_active, last_used, created_at, updated_at, expires_at) = row
        return cls(
            id=key_id,
            user_id=user_id,
            name=name,
            key_hash=key_hash,
            key_prefix=key_prefix,
            permissions=decode_permissions(permissions),
            is_active=bool(is_active),
            last_used=from_db(last_used),
            created_at=from_db(created_at),
            updated_at=from_db(updated_at),
            expires_at=from_db(expires_at),
        )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and ensure_utc(now) > self.expires_at

    def to_public_dict(self) -> Dict[str, Any]:
        """Serializable view without the stored hash."""
        return {
            'id': self.id,
            'name': self.name,
            'key_prefix': self.key_prefix,
            'permissions': list(self.permissions),
            'is_active': self.is_active,
            'last_used': to_json(self.last_used),
            'created_at': to_json(self.created_at),
            'updated_at': to_json(self.updated_at),
            'expires_at': to_json(self.expires_at),
        }
