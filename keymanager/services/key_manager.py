"""API key lifecycle: generation, validation, listing, revocation and usage logging.

Every public method returns a :class:`~keymanager.services.base.Result`.
Storage failures are caught here and reported through the result with the
underlying message preserved, so callers never see a raised exception.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

import sqlite3

from keymanager.models import ApiKey, ApiKeyUsageEvent, encode_permissions
from keymanager.repositories import ApiKeyRepository, ApiKeyUsageRepository
from keymanager.services.base import (
    ExpiredKeyError,
    GenerationError,
    InvalidKeyError,
    LoggingError,
    PersistenceError,
    Result,
)
from keymanager.services.security import generate_api_key, hash_api_key, key_prefix, verify_api_key
from keymanager.utils.timestamps import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class ApiKeyManager:
    """Owns the lifecycle of API keys and their usage events."""

    def __init__(
        self,
        api_key_repo: ApiKeyRepository,
        usage_repo: ApiKeyUsageRepository,
        clock: Optional[Callable[[], datetime]] = None,
        key_tag: str = 'tk_',
    ):
        self._api_key_repo = api_key_repo
        self._usage_repo = usage_repo
        self._clock = clock or utcnow
        self._key_tag = key_tag

    @classmethod
    def from_db_factory(
        cls,
        db_factory: Callable[[], sqlite3.Connection],
        clock: Optional[Callable[[], datetime]] = None,
        key_tag: str = 'tk_',
    ) -> 'ApiKeyManager':
        return cls(ApiKeyRepository(db_factory), ApiKeyUsageRepository(db_factory), clock=clock, key_tag=key_tag)

    def _now(self) -> datetime:
        return ensure_utc(self._clock())

    def generate_api_key(
        self,
        user_id: str,
        name: str,
        permissions: Sequence[str],
        expires_at: Optional[datetime] = None,
    ) -> Result[Dict[str, str]]:
        """Create a key and return its plaintext exactly once.

        Only the SHA-256 hash and the first 12 characters are persisted.
        """
        key_id = str(uuid.uuid4())
        api_key = generate_api_key(self._key_tag)
        prefix = key_prefix(api_key)
        try:
            self._api_key_repo.create(
                key_id=key_id,
                user_id=user_id,
                name=name,
                key_hash=hash_api_key(api_key),
                key_prefix=prefix,
                permissions=encode_permissions(permissions),
                created_at=self._now(),
                expires_at=ensure_utc(expires_at) if expires_at else None,
            )
        except Exception as e:
            logger.error(f"Failed to generate API key for user {user_id}: {e}")
            return Result.fail(GenerationError(str(e) or None))

        logger.info(f"API key created: {prefix}... for user {user_id}")
        return Result.ok({'api_key': api_key, 'key_id': key_id})

    def validate_api_key(self, api_key: str) -> Result[ApiKey]:
        """Resolve a plaintext key to its active, unexpired record."""
        if not api_key:
            return Result.fail(InvalidKeyError())

        try:
            key_hash = hash_api_key(api_key)
            prefix = key_prefix(api_key)
        except (AttributeError, TypeError, UnicodeEncodeError):
            # Not a str, or not encodable as UTF-8: cannot match any stored hash
            return Result.fail(InvalidKeyError())

        try:
            row = self._api_key_repo.find_active(key_hash, prefix)
            record = ApiKey.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Failed to look up API key: {e}")
            return Result.fail(PersistenceError(str(e) or None))

        if record is None:
            return Result.fail(InvalidKeyError())

        if not verify_api_key(api_key, record.key_hash):
            return Result.fail(InvalidKeyError())

        now = self._now()
        if record.is_expired(now):
            return Result.fail(ExpiredKeyError())

        # The caller already holds a valid key; a failed touch must not change that
        try:
            self._api_key_repo.touch_last_used(record.id, now)
        except Exception as e:
            logger.warning(f"Could not update last_used for API key {record.key_prefix}...: {e}")

        return Result.ok(record)

    def get_user_api_keys(self, user_id: str) -> Result[List[ApiKey]]:
        try:
            keys = [ApiKey.from_row(row) for row in self._api_key_repo.list_for_user(user_id)]
        except Exception as e:
            logger.error(f"Failed to list API keys for user {user_id}: {e}")
            return Result.fail(PersistenceError(str(e) or None))
        return Result.ok(keys)

    def get_user_api_key(self, user_id: str, key_id: str) -> Result[Optional[ApiKey]]:
        """Fetch one key owned by the user; data is None when absent or not owned."""
        try:
            row = self._api_key_repo.get_for_user(key_id, user_id)
            record = ApiKey.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Failed to load API key {key_id}: {e}")
            return Result.fail(PersistenceError(str(e) or None))
        return Result.ok(record)

    def revoke_api_key(self, user_id: str, key_id: str) -> Result[None]:
        """Deactivate a key owned by ``user_id``.

        Succeeds even when nothing matched; the affected row count is only
        logged.
        """
        try:
            affected = self._api_key_repo.revoke_for_user(key_id, user_id, self._now())
        except Exception as e:
            logger.error(f"Failed to revoke API key {key_id}: {e}")
            return Result.fail(PersistenceError(str(e) or None))

        if affected:
            logger.info(f"API key revoked: {key_id} for user {user_id}")
        else:
            logger.info(f"Revoke of API key {key_id} by user {user_id} matched no rows")
        return Result.ok()

    def log_usage(self, api_key_id: str, endpoint: str, method: str, response_status: int) -> Result[None]:
        """Append one usage event as given; key validity is not checked."""
        try:
            self._usage_repo.insert(
                event_id=str(uuid.uuid4()),
                api_key_id=api_key_id,
                endpoint=endpoint,
                method=method,
                response_status=response_status,
                timestamp=self._now(),
            )
        except Exception as e:
            logger.error(f"Failed to log usage for API key {api_key_id}: {e}")
            return Result.fail(LoggingError(str(e) or None))
        return Result.ok()

    def get_usage_stats(self, api_key_id: str) -> Result[List[ApiKeyUsageEvent]]:
        try:
            events = [ApiKeyUsageEvent.from_row(row) for row in self._usage_repo.list_for_key(api_key_id)]
        except Exception as e:
            logger.error(f"Failed to load usage for API key {api_key_id}: {e}")
            return Result.fail(PersistenceError(str(e) or None))
        return Result.ok(events)
