"""
Caching configuration.

Redis-backed caches for production; sessions get their own cache so that
flushing the default cache never logs customers out or loses their carts.
"""

import os


def get_cache_config():
    """
    Get cache configuration based on environment.

    Returns:
        dict: Cache configuration for Django CACHES setting
    """
    redis_url = os.environ.get("REDIS_URL", "redis://localhost:6379/0")

    return {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": redis_url,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "CONNECTION_POOL_KWARGS": {
                    "max_connections": 50,
                    "retry_on_timeout": True,
                },
                "SOCKET_CONNECT_TIMEOUT": 5,
                "SOCKET_TIMEOUT": 5,
            },
            "KEY_PREFIX": "carts",
            "TIMEOUT": 300,  # 5 minutes default
        },
        # Separate cache for sessions (longer timeout)
        "sessions": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": redis_url,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
            },
            "KEY_PREFIX": "carts_session",
            "TIMEOUT": 1209600,  # 2 weeks, matches SESSION_COOKIE_AGE
        },
    }

