from __future__ import annotations

from datetime import datetime, timedelta, timezone

from flask import Blueprint, g, jsonify, request
from flask_login import current_user, login_required

from keymanager.auth import api_key_required
from keymanager.utils.timestamps import to_json
from keymanager.utils.validators import (
    sanitize_string,
    validate_expires_at,
    validate_key_name,
    validate_permissions,
    validate_required_fields,
)


def _parse_expiry(data):
    """Return (expires_at, error) from either expires_at or expires_days."""
    expires_at = data.get('expires_at')
    expires_days = data.get('expires_days')

    if expires_at is not None:
        valid, error = validate_expires_at(expires_at)
        if not valid:
            return None, error
        return datetime.fromisoformat(expires_at.replace('Z', '+00:00')), None

    if expires_days is not None:
        try:
            expires_days = int(expires_days)
        except (TypeError, ValueError):
            return None, 'Invalid expires_days value'
        if expires_days < 1:
            return None, 'expires_days must be a positive integer'
        return datetime.now(timezone.utc) + timedelta(days=expires_days), None

    return None, None


def create_api_keys_blueprint(*, key_manager, logger):
    """Create API key routes with injected dependencies."""
    blueprint = Blueprint('api_keys', __name__)

    @blueprint.route('/api/keys', methods=['GET'])
    @login_required
    def list_api_keys():
        """List all API keys for current user."""
        result = key_manager.get_user_api_keys(current_user.id)
        if not result.success:
            return jsonify(result.to_dict()), 500
        return jsonify({
            'success': True,
            'data': [key.to_public_dict() for key in result.data],
        })

    @blueprint.route('/api/keys', methods=['POST'])
    @login_required
    def create_api_key():
        """Create a new API key."""
        data = request.get_json(silent=True) or {}

        valid, error = validate_required_fields(data, ['name', 'permissions'])
        if not valid:
            return jsonify({'error': error}), 400

        valid, error = validate_key_name(data.get('name'))
        if not valid:
            return jsonify({'error': error}), 400
        name = sanitize_string(data['name'], max_length=100)

        permissions = data.get('permissions')
        valid, error = validate_permissions(permissions)
        if not valid:
            return jsonify({'error': error}), 400

        expires_at, error = _parse_expiry(data)
        if error:
            return jsonify({'error': error}), 400

        result = key_manager.generate_api_key(
            user_id=current_user.id,
            name=name,
            permissions=permissions,
            expires_at=expires_at,
        )
        if not result.success:
            return jsonify(result.to_dict()), 500

        return jsonify({
            'success': True,
            'data': {
                'key_id': result.data['key_id'],
                'api_key': result.data['api_key'],
                'name': name,
                'permissions': permissions,
                'expires_at': to_json(expires_at),
            },
            'message': 'Save this key now - it will not be shown again!',
        }), 201

    @blueprint.route('/api/keys/verify', methods=['GET'])
    @api_key_required
    def verify_api_key():
        """Describe the API key presented with the request."""
        api_key = g.api_key
        return jsonify({
            'success': True,
            'data': {
                'key_id': api_key.id,
                'user_id': api_key.user_id,
                'permissions': api_key.permissions,
            },
        })

    @blueprint.route('/api/keys/<key_id>', methods=['DELETE'])
    @login_required
    def revoke_api_key(key_id: str):
        """Revoke an API key."""
        result = key_manager.revoke_api_key(current_user.id, key_id)
        if not result.success:
            return jsonify(result.to_dict()), 500
        return jsonify({'success': True, 'message': 'API key revoked successfully'})

    @blueprint.route('/api/keys/<key_id>/usage', methods=['GET'])
    @login_required
    def get_api_key_usage(key_id: str):
        """Usage events for one of the caller's keys, newest first."""
        owned = key_manager.get_user_api_key(current_user.id, key_id)
        if not owned.success:
            return jsonify(owned.to_dict()), 500
        if owned.data is None:
            return jsonify({'error': 'Key not found'}), 404

        result = key_manager.get_usage_stats(key_id)
        if not result.success:
            logger.error(f"Failed to load usage for key {key_id}: {result.error}")
            return jsonify(result.to_dict()), 500
        return jsonify({
            'success': True,
            'data': [event.to_dict() for event in result.data],
        })

    return blueprint
