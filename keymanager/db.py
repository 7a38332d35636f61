from __future__ import annotations

import logging
import os
import sqlite3
from typing import Callable, Optional

from keymanager.config import Config

logger = logging.getLogger(__name__)

DATABASE_PATH = Config.DATABASE_PATH


def _get_database_path() -> str:
    """Resolve database path at runtime (supports tests overriding env)."""
    return os.getenv('DATABASE_PATH', DATABASE_PATH)


def get_db() -> sqlite3.Connection:
    """Get database connection."""
    return sqlite3.connect(_get_database_path())


def init_db(db_factory: Optional[Callable[[], sqlite3.Connection]] = None) -> None:
    """Initialize SQLite database through ``db_factory`` (defaults to :func:`get_db`)."""
    conn = (db_factory or get_db)()
    try:
        cursor = conn.cursor()

        # Create api_keys table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS api_keys (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                key_hash TEXT NOT NULL,
                key_prefix TEXT NOT NULL,
                permissions TEXT NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1,
                last_used TIMESTAMP,
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL,
                expires_at TIMESTAMP
            )
        ''')

        # Usage events are append-only; api_key_id is a reference, not a FK
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS api_key_usage (
                id TEXT PRIMARY KEY,
                api_key_id TEXT NOT NULL,
                endpoint TEXT NOT NULL,
                method TEXT NOT NULL,
                response_status INTEGER NOT NULL,
                request_count INTEGER NOT NULL DEFAULT 1,
                timestamp TIMESTAMP NOT NULL
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_user_id ON api_keys(user_id)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_key_hash ON api_keys(key_hash)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_key_prefix ON api_keys(key_prefix)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_key_usage_api_key_id ON api_key_usage(api_key_id)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_key_usage_timestamp ON api_key_usage(timestamp DESC)')

        conn.commit()
    finally:
        conn.close()
    logger.info('Database initialized')


def ensure_data_dir() -> None:
    data_dir = os.path.dirname(_get_database_path()) or '.'
    os.makedirs(data_dir, exist_ok=True)
