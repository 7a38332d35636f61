from __future__ import annotations

import hashlib
import hmac
import secrets

KEY_PREFIX_LENGTH = 12
KEY_BYTES = 32


def generate_api_key(tag: str = 'tk_') -> str:
    """Generate a new API key"""
    return f"{tag}{secrets.token_hex(KEY_BYTES)}"


def hash_api_key(key: str) -> str:
    """Hash an API key for storage"""
    return hashlib.sha256(key.encode('utf-8')).hexdigest()


def key_prefix(key: str) -> str:
    return key[:KEY_PREFIX_LENGTH]


def verify_api_key(key: str, key_hash: str) -> bool:
    """Verify an API key against its hash using constant-time comparison"""
    return hmac.compare_digest(hash_api_key(key), key_hash)
