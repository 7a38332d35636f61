"""Routes package."""
from .api_keys import create_api_keys_blueprint
from .health import create_health_blueprint

__all__ = [
    'create_api_keys_blueprint',
    'create_health_blueprint',
]
