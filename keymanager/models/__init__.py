from __future__ import annotations

from .api_key import API_KEY_COLUMNS, ApiKey, decode_permissions, encode_permissions
from .usage import USAGE_COLUMNS, ApiKeyUsageEvent

__all__ = [
    'API_KEY_COLUMNS',
    'ApiKey',
    'ApiKeyUsageEvent',
    'USAGE_COLUMNS',
    'decode_permissions',
    'encode_permissions',
]
