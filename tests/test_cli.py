"""Tests for the flask CLI commands"""


def test_init_db_command(runner):
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database initialized' in result.output


def test_keys_list_and_revoke(runner, manager):
    created = manager.generate_api_key('u1', 'deploy', ['read']).data

    result = runner.invoke(args=['keys', 'list', 'u1'])
    assert result.exit_code == 0
    assert created['key_id'] in result.output
    assert 'active' in result.output
    assert created['api_key'] not in result.output

    result = runner.invoke(args=['keys', 'revoke', 'u1', created['key_id']])
    assert result.exit_code == 0

    result = runner.invoke(args=['keys', 'list', 'u1'])
    assert 'revoked' in result.output


def test_keys_list_empty(runner):
    result = runner.invoke(args=['keys', 'list', 'nobody'])
    assert result.exit_code == 0
    assert 'No API keys.' in result.output


def test_init_db_uses_app_connection_factory(tmp_path):
    import sqlite3

    from keymanager import create_app
    from keymanager.config import TestingConfig

    db_path = tmp_path / 'custom.db'
    app = create_app(TestingConfig, db_factory=lambda: sqlite3.connect(str(db_path)))

    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0

    conn = sqlite3.connect(str(db_path))
    try:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    finally:
        conn.close()
    assert {'api_keys', 'api_key_usage'} <= tables
