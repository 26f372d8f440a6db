# club_core/settings/test.py
from .base import *

DEBUG = False
DEBUG_LOG_REQUESTS = False

DATABASES = {'default': {'ENGINE': 'django.db.backends.sqlite3', 'NAME': ':memory:'}}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


class DisableMigrations:
    """Las tablas de test se crean directo desde los modelos."""
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

LOGGING["loggers"]["apps"]["level"] = "DEBUG"
LOGGING["loggers"]["apps"]["propagate"] = True
