# club_core/settings/dev.py
from .base import *
import os

# DEBUG viene de base vía DJANGO_DEBUG
CORS_ALLOW_ALL_ORIGINS = os.getenv("CORS_ALLOW_ALL_ORIGINS", "True") == "True"
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
