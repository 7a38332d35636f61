"""Validation helpers for API key requests."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, List, Tuple


def validate_required_fields(data: Dict, required_fields: List[str]) -> Tuple[bool, str]:
    """Validate that required fields are present in a dictionary."""
    for field in required_fields:
        if field not in data or data[field] is None or data[field] == '':
            return False, f"Missing required field: {field}"
    return True, ""


def validate_key_name(name: Any) -> Tuple[bool, str]:
    """Validate the user-supplied key label."""
    if not name:
        return False, "Name is required"
    if not isinstance(name, str):
        return False, "Name must be a string"
    if len(name) > 100:
        return False, "Name is too long"
    return True, ""


def validate_permissions(permissions: Any) -> Tuple[bool, str]:
    """Validate a non-empty list of capability strings such as 'locations/read'."""
    if not isinstance(permissions, list):
        return False, "Permissions must be a list of strings"
    if not permissions:
        return False, "At least one permission is required"
    for permission in permissions:
        if not isinstance(permission, str) or not permission:
            return False, "Permissions must be non-empty strings"
    return True, ""


def validate_expires_at(value: Any) -> Tuple[bool, str]:
    """Validate an ISO-8601 expiry timestamp."""
    if value is None:
        return True, ""
    if not isinstance(value, str):
        return False, "expires_at must be an ISO-8601 string"
    try:
        datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return False, "expires_at must be an ISO-8601 string"
    return True, ""


def sanitize_string(value: str, max_length: int = 255) -> str:
    """Sanitize string input."""
    if not value:
        return ""
    value = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', str(value))
    return value[:max_length].strip()
