"""Caller identification: gateway-supplied user ids and API key authentication."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, make_response, request
from flask_login import UserMixin

from keymanager.extensions import login_manager
from keymanager.services.base import PersistenceError
from keymanager.utils.validators import sanitize_string

logger = logging.getLogger(__name__)


class User(UserMixin):
    def __init__(self, id):
        self.id = id


@login_manager.request_loader
def load_user_from_request(req):
    """Trust the user id header set by the upstream auth gateway."""
    header = current_app.config.get('USER_ID_HEADER', 'X-User-Id')
    user_id = sanitize_string(req.headers.get(header, ''), max_length=128)
    if not user_id:
        return None
    return User(id=user_id)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Authentication required'}), 401


def extract_api_key(req) -> Optional[str]:
    """Read the key from X-API-Key or an Authorization bearer token."""
    api_key = req.headers.get('X-API-Key')
    if api_key:
        return api_key.strip()
    authorization = req.headers.get('Authorization', '')
    if authorization.startswith('Bearer '):
        return authorization[len('Bearer '):].strip() or None
    return None


def api_key_required(f):
    """Require a valid API key and record a usage event for the request."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        api_key = extract_api_key(request)
        if not api_key:
            return jsonify({'error': 'API key required'}), 401

        key_manager = current_app.extensions['key_manager']
        result = key_manager.validate_api_key(api_key)
        if not result.success:
            status = 500 if result.error_kind == PersistenceError.kind else 401
            return jsonify({'error': result.error, 'error_kind': result.error_kind}), status

        g.api_key = result.data
        response = make_response(f(*args, **kwargs))

        usage = key_manager.log_usage(
            api_key_id=g.api_key.id,
            endpoint=request.path,
            method=request.method,
            response_status=response.status_code,
        )
        if not usage.success:
            logger.warning(f"Usage event dropped for API key {g.api_key.key_prefix}...: {usage.error}")
        return response

    return decorated_function
