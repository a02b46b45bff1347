from .base import *

DEBUG = False

SECRET_KEY = "django-insecure-test-key"

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Fast hashing keeps the login flow tests quick
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

COMBINE_CARTS_ON_LOGIN = True
COMBINE_CARTS_ON_ASSIGN = True

LOGGING["root"]["level"] = "WARNING"
LOGGING["loggers"]["carts"]["level"] = "WARNING"
