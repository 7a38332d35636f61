"""repositories package."""
from .api_keys import ApiKeyRepository
from .usage import ApiKeyUsageRepository

__all__ = [
    'ApiKeyRepository',
    'ApiKeyUsageRepository',
]
