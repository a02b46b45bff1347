from .base import *
from .cache import get_cache_config
import dj_database_url

DEBUG = False

SECRET_KEY = get_env_variable('SECRET_KEY')

ALLOWED_HOSTS = [
    host.strip()
    for host in get_env_variable('ALLOWED_HOSTS', '.onrender.com').split(',')
    if host.strip()
]

# Security settings
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

CSRF_TRUSTED_ORIGINS = [f'https://*{host}' if host.startswith('.') else f'https://{host}' for host in ALLOWED_HOSTS]

# Static files - use WhiteNoise for efficient serving
MIDDLEWARE.insert(1, 'whitenoise.middleware.WhiteNoiseMiddleware')

# Use WhiteNoise's compressed static file storage
STORAGES["staticfiles"]["BACKEND"] = "whitenoise.storage.CompressedManifestStaticFilesStorage"

# Database - PostgreSQL for production
DATABASE_URL = get_env_variable('DATABASE_URL', None)

if DATABASE_URL:
    DATABASES = {
        'default': dj_database_url.config(
            default=DATABASE_URL,
            conn_max_age=600,
            conn_health_checks=True,
        )
    }

# Caches and sessions - Redis when available
if get_env_variable('REDIS_URL', None):
    CACHES = get_cache_config()
    # Sessions hold anonymous cart ids; keep a database copy behind the cache
    SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"
    SESSION_CACHE_ALIAS = "sessions"

LOGGING['handlers']['console']['level'] = 'INFO'
LOGGING['loggers']['django.request'] = {
    'handlers': ['console'],
    'level': 'ERROR',
    'propagate': False,
}

try:
    from .local import *
except ImportError:
    pass
