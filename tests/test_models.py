from __future__ import annotations

from datetime import datetime, timedelta, timezone

from keymanager.models import ApiKey, ApiKeyUsageEvent, decode_permissions, encode_permissions


def test_models_from_rows():
    row = (
        'id-1', 'u1', 'ci', 'hash', 'tk_abcdef123', '["read", "write"]',
        1, None, '2030-01-01T00:00:00.000000+00:00', '2030-01-01T00:00:00.000000+00:00', None,
    )
    api_key = ApiKey.from_row(row)
    assert api_key.permissions == ['read', 'write']
    assert api_key.is_active is True
    assert api_key.created_at == datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert api_key.expires_at is None

    event = ApiKeyUsageEvent.from_row(('e1', 'id-1', '/x', 'GET', '200', 1, '2030-01-01T00:00:00+00:00'))
    assert event.response_status == 200
    assert event.to_dict()['timestamp'] == '2030-01-01T00:00:00+00:00'


def test_api_key_expiry_and_public_view():
    expires = datetime(2030, 1, 1, tzinfo=timezone.utc)
    api_key = ApiKey(id='id-1', user_id='u1', name='ci', key_hash='hash', key_prefix='tk_abc', expires_at=expires)

    assert api_key.is_expired(expires - timedelta(seconds=1)) is False
    assert api_key.is_expired(expires + timedelta(seconds=1)) is True
    assert api_key.is_expired(datetime(2031, 1, 1)) is True

    public = api_key.to_public_dict()
    assert 'key_hash' not in public
    assert public['expires_at'] == '2030-01-01T00:00:00+00:00'


def test_permissions_round_trip_preserves_order():
    assert decode_permissions(encode_permissions(['write', 'read'])) == ['write', 'read']
    assert decode_permissions(None) == []
