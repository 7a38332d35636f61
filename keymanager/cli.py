"""Operator commands registered on the Flask CLI."""
from __future__ import annotations

import click
from flask import current_app
from flask.cli import AppGroup, with_appcontext

from keymanager.db import ensure_data_dir, get_db, init_db

keys_cli = AppGroup('keys', help='Inspect and revoke API keys.')


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the api_keys and api_key_usage tables if missing."""
    db_factory = current_app.extensions['db_factory']
    if db_factory is get_db:
        ensure_data_dir()
    init_db(db_factory)
    click.echo('Database initialized.')


@keys_cli.command('list')
@click.argument('user_id')
def list_keys_command(user_id):
    """List a user's keys, newest first."""
    result = current_app.extensions['key_manager'].get_user_api_keys(user_id)
    if not result.success:
        raise click.ClickException(result.error)
    if not result.data:
        click.echo('No API keys.')
        return
    for key in result.data:
        state = 'active' if key.is_active else 'revoked'
        click.echo(f"{key.id}  {key.key_prefix}...  {state}  {key.name}")


@keys_cli.command('revoke')
@click.argument('user_id')
@click.argument('key_id')
def revoke_key_command(user_id, key_id):
    """Revoke one of a user's keys."""
    result = current_app.extensions['key_manager'].revoke_api_key(user_id, key_id)
    if not result.success:
        raise click.ClickException(result.error)
    click.echo(f'Revoked {key_id}.')


def register_cli(app) -> None:
    app.cli.add_command(init_db_command)
    app.cli.add_command(keys_cli)
