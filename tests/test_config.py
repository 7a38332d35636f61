"""Tests for configuration classes"""
import logging

from keymanager import create_app
from keymanager.config import TestingConfig


def test_testing_config_carries_secret_key(caplog):
    with caplog.at_level(logging.WARNING, logger='keymanager'):
        app = create_app(TestingConfig)

    assert app.config['SECRET_KEY'] == 'test-secret-key-for-testing'
    assert 'SECRET_KEY not set' not in caplog.text


def test_missing_secret_key_falls_back_with_warning(caplog):
    class NoSecretConfig(TestingConfig):
        SECRET_KEY = None

    with caplog.at_level(logging.WARNING, logger='keymanager'):
        app = create_app(NoSecretConfig)

    assert app.config['SECRET_KEY'] == 'dev-secret-key-change-in-production'
    assert 'SECRET_KEY not set' in caplog.text
