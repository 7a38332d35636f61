from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Tuple

import sqlite3

from keymanager.models import USAGE_COLUMNS
from keymanager.utils.timestamps import to_db


class ApiKeyUsageRepository:
    """Repository for append-only API key usage events."""
    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    def insert(
        self,
        event_id: str,
        api_key_id: str,
        endpoint: str,
        method: str,
        response_status: int,
        timestamp: datetime,
    ) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                '''
                INSERT INTO api_key_usage (id, api_key_id, endpoint, method, response_status, request_count, timestamp)
                VALUES (?, ?, ?, ?, ?, 1, ?)
                ''',
                (event_id, api_key_id, endpoint, method, response_status, to_db(timestamp)),
            )
            conn.commit()
        finally:
            conn.close()

    def list_for_key(self, api_key_id: str) -> List[Tuple]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {', '.join(USAGE_COLUMNS)} FROM api_key_usage "
                'WHERE api_key_id = ? ORDER BY timestamp DESC, rowid DESC',
                (api_key_id,),
            )
            return cursor.fetchall()
        finally:
            conn.close()
