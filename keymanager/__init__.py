"""API key manager service."""

from __future__ import annotations

import logging

from flask import Flask
from flask_talisman import Talisman

from keymanager.config import Config
from keymanager.extensions import limiter, login_manager

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(config_class: type[Config] = Config, db_factory=None) -> Flask:
    """Create and configure the Flask application."""
    from keymanager.cli import register_cli
    from keymanager.db import get_db
    from keymanager.routes import create_api_keys_blueprint, create_health_blueprint
    from keymanager.services import ApiKeyManager

    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config['LOG_LEVEL'])

    if not app.config.get('SECRET_KEY'):
        logger.warning("SECRET_KEY not set! Using insecure default. Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'")
        app.config['SECRET_KEY'] = 'dev-secret-key-change-in-production'

    login_manager.init_app(app)
    limiter.init_app(app)

    # Security Headers (Talisman) only when HTTPS is enforced here rather than at a proxy
    if app.config['FORCE_HTTPS']:
        Talisman(app, force_https=True, strict_transport_security=True, content_security_policy={'default-src': "'none'"})
    else:
        @app.after_request
        def set_security_headers(response):
            response.headers['X-Content-Type-Options'] = 'nosniff'
            response.headers['X-Frame-Options'] = 'DENY'
            response.headers['Referrer-Policy'] = 'no-referrer'
            response.headers['Cache-Control'] = 'no-store'
            return response

    db_factory = db_factory or get_db
    app.extensions['db_factory'] = db_factory
    key_manager = ApiKeyManager.from_db_factory(db_factory, key_tag=app.config['API_KEY_TAG'])
    app.extensions['key_manager'] = key_manager

    api_keys_blueprint = create_api_keys_blueprint(
        key_manager=key_manager,
        logger=logging.getLogger('keymanager.routes.api_keys'),
    )
    limiter.limit(f"{app.config['RATE_LIMIT_PER_MINUTE']} per minute")(api_keys_blueprint)
    app.register_blueprint(api_keys_blueprint)
    app.register_blueprint(create_health_blueprint(db_factory, VERSION))

    register_cli(app)
    return app
