"""
Core module - Configuration, database, security, email and rate limiting.
"""

from wil_api.core.config import get_settings, settings
from wil_api.core.database import Base, close_db, get_db, init_db, transaction
from wil_api.core.redis import close_redis, get_redis, init_redis
from wil_api.core.security import hash_password

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "transaction",
    # Redis
    "get_redis",
    "init_redis",
    "close_redis",
    # Security
    "hash_password",
]
