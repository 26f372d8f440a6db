# apps/common/middleware.py
# ------------------------------------------------------------------------------
# Log de request/response de la API cuando DEBUG_LOG_REQUESTS está activo.
# - Los campos sensibles (password, tokens) se enmascaran antes de loguear.
# - Se mide la duración de cada request en milisegundos.
# ------------------------------------------------------------------------------
import json
import logging
import time

from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

CAMPOS_SENSIBLES = {"password", "access", "refresh", "token"}


def enmascarar(datos):
    if isinstance(datos, dict):
        return {k: "***" if k in CAMPOS_SENSIBLES else enmascarar(v) for k, v in datos.items()}
    if isinstance(datos, list):
        return [enmascarar(v) for v in datos]
    return datos


def _cuerpo(request):
    if not request.body:
        return ""
    try:
        return enmascarar(json.loads(request.body))
    except (UnicodeDecodeError, ValueError):
        return "<no json>"


class DebugLoggingMiddleware(MiddlewareMixin):

    def _activo(self):
        return getattr(settings, "DEBUG_LOG_REQUESTS", settings.DEBUG)

    def process_view(self, request, view_func, view_args, view_kwargs):
        if not self._activo():
            return None
        request._vista = view_func.__name__
        request._inicio = time.monotonic()
        logger.debug(
            "[api.request] metodo=%s ruta=%s vista=%s usuario=%s cuerpo=%s",
            request.method, request.get_full_path(), request._vista,
            getattr(getattr(request, "user", None), "pk", None), _cuerpo(request),
        )
        return None

    def process_response(self, request, response):
        if self._activo():
            inicio = getattr(request, "_inicio", None)
            duracion_ms = int((time.monotonic() - inicio) * 1000) if inicio else None
            logger.debug(
                "[api.response] metodo=%s ruta=%s vista=%s status=%s ms=%s datos=%s",
                request.method, request.get_full_path(), getattr(request, "_vista", None),
                response.status_code, duracion_ms,
                enmascarar(getattr(response, "data", "<no drf>")),
            )
        return response
