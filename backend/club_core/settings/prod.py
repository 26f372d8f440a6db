# club_core/settings/prod.py
from .base import *
from .base import _formatters
import os

DEBUG = False

# --- Seguridad básica ---
SECURE_SSL_REDIRECT = os.getenv('DJANGO_SSL_REDIRECT', 'True') == 'True'
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = int(os.getenv('DJANGO_HSTS_SECONDS', '0'))
SECURE_REFERRER_POLICY = os.getenv('DJANGO_SECURE_REFERRER_POLICY', 'no-referrer-when-downgrade')
X_FRAME_OPTIONS = os.getenv('DJANGO_X_FRAME_OPTIONS', 'DENY')

# Proxy confiable (Nginx)
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

CSRF_TRUSTED_ORIGINS = [o for o in os.getenv('CSRF_TRUSTED_ORIGINS', '').split(',') if o]

# En prod exigimos DB real
if not os.getenv('DATABASE_URL') and not os.getenv('POSTGRES_DB'):
    raise RuntimeError("Configura DATABASE_URL o variables POSTGRES_* en producción.")

# Logs JSON por defecto
if 'DJANGO_LOG_FORMAT' not in os.environ:
    LOGGING["formatters"]["app"] = _formatters["json"]
