# apps/common/exceptions.py
# ------------------------------------------------------------------------------
# Taxonomía de errores de dominio + handler de excepciones para DRF.
# - Los services levantan ValidationError / NotFoundError / ConflictError.
# - El handler las traduce a {"error": ..., "codigo": ...} con el status correcto.
# - Cualquier otra excepción no contemplada se loguea con trace_id y se responde
#   como error interno genérico (sin filtrar detalles).
# ------------------------------------------------------------------------------
import logging
import uuid

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Error de dominio."
    codigo = "error"

    def __init__(self, mensaje=None, **extra):
        super().__init__(detail=mensaje or self.default_detail, code=self.codigo)
        self.mensaje = str(self.detail)
        self.extra = extra

    def as_payload(self):
        return {"error": self.mensaje, "codigo": self.codigo, **self.extra}


class ValidationError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Datos inválidos."
    codigo = "validacion"


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Recurso no encontrado."
    codigo = "no_encontrado"


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "La operación entra en conflicto con el estado actual."
    codigo = "conflicto"


class InternalError(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Error interno del servidor"
    codigo = "interno"


def manejador_excepciones(exc, context):
    vista = getattr(context.get("view"), "__class__", type(None)).__name__

    if isinstance(exc, InternalError):
        trace_id = str(uuid.uuid4())[:8]
        logger.error("[api.error][interno] trace=%s vista=%s mensaje=%s extra=%s",
                     trace_id, vista, exc.mensaje, exc.extra)
        return Response(
            {"error": InternalError.default_detail, "codigo": exc.codigo, "trace_id": trace_id},
            status=exc.status_code,
        )

    if isinstance(exc, DomainError):
        logger.info("[api.error][%s] vista=%s mensaje=%s", exc.codigo, vista, exc.mensaje)
        return Response(exc.as_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    trace_id = str(uuid.uuid4())[:8]
    logger.exception("[api.error][no_controlado] trace=%s vista=%s", trace_id, vista)
    return Response(
        {"error": InternalError.default_detail, "codigo": InternalError.codigo, "trace_id": trace_id},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
