from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Tuple

import sqlite3

from keymanager.models import API_KEY_COLUMNS
from keymanager.utils.timestamps import to_db

_SELECT = f"SELECT {', '.join(API_KEY_COLUMNS)} FROM api_keys"


class ApiKeyRepository:
    """Repository for API keys."""
    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    def create(
        self,
        key_id: str,
        user_id: str,
        name: str,
        key_hash: str,
        key_prefix: str,
        permissions: str,
        created_at: datetime,
        expires_at: Optional[datetime],
    ) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                '''
                INSERT INTO api_keys (
                    id, user_id, name, key_hash, key_prefix, permissions,
                    is_active, created_at, updated_at, expires_at
                )
                VALUES (?, ?, ?, ?, ?, ?, 1, ?, ?, ?)
                ''',
                (
                    key_id, user_id, name, key_hash, key_prefix, permissions,
                    to_db(created_at), to_db(created_at), to_db(expires_at),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def find_active(self, key_hash: str, key_prefix: str) -> Optional[Tuple]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f'{_SELECT} WHERE key_hash = ? AND key_prefix = ? AND is_active = 1 LIMIT 1',
                (key_hash, key_prefix),
            )
            return cursor.fetchone()
        finally:
            conn.close()

    def touch_last_used(self, key_id: str, used_at: datetime) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('UPDATE api_keys SET last_used = ? WHERE id = ?', (to_db(used_at), key_id))
            conn.commit()
        finally:
            conn.close()

    def list_for_user(self, user_id: str) -> List[Tuple]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f'{_SELECT} WHERE user_id = ? ORDER BY created_at DESC, rowid DESC',
                (user_id,),
            )
            return cursor.fetchall()
        finally:
            conn.close()

    def get_for_user(self, key_id: str, user_id: str) -> Optional[Tuple]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(f'{_SELECT} WHERE id = ? AND user_id = ?', (key_id, user_id))
            return cursor.fetchone()
        finally:
            conn.close()

    def revoke_for_user(self, key_id: str, user_id: str, revoked_at: datetime) -> int:
        """Soft-delete a key; returns the number of rows affected."""
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                'UPDATE api_keys SET is_active = 0, updated_at = ? WHERE id = ? AND user_id = ?',
                (to_db(revoked_at), key_id, user_id),
            )
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()
