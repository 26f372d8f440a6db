# apps/practicas_core/views.py

import logging

from django.db.models import Prefetch
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.common.exceptions import NotFoundError
from apps.common.permissions import EsAdminOSoloLectura, EsEntrenador, es_admin
from apps.cuentas_core.models import Entrenador
from apps.practicas_core.models import InscripcionDeportiva, PracticaDeportiva
from apps.practicas_core.serializers import (
    InscripcionEntradaSerializer,
    InscripcionSerializer,
    PracticaEntradaSerializer,
    PracticaSerializer,
)
from apps.practicas_core.services import inscripciones as inscripciones_service
from apps.practicas_core.services import practicas as practicas_service

logger = logging.getLogger(__name__)


def _practicas_qs():
    return (
        PracticaDeportiva.objects
        .select_related("cancha")
        .prefetch_related(
            "horarios",
            "inscripciones",
            Prefetch("entrenadores", queryset=Entrenador.objects.select_related("usuario")),
        )
        .order_by("id")
    )


def _socio_id_para(request, socio_id):
    if es_admin(request.user) and socio_id:
        return socio_id
    socio = getattr(request.user, "socio", None)
    if socio is None:
        raise NotFoundError("El usuario no tiene perfil de socio")
    return socio.id


# ------------------------------------------------------------------------------
# /practicas/practicas/                        → listar / alta
# /practicas/practicas/<id>/                   → detalle / modificación / baja
# /practicas/practicas/<id>/inscripcion/       → POST inscribir / DELETE dar de baja
# ------------------------------------------------------------------------------
class PracticaViewSet(viewsets.ModelViewSet):
    serializer_class = PracticaSerializer
    permission_classes = [IsAuthenticated & EsAdminOSoloLectura]

    def get_queryset(self):
        qs = _practicas_qs()
        deporte = self.request.query_params.get("deporte")
        if deporte:
            qs = qs.filter(deporte=deporte)
        cancha = self.request.query_params.get("cancha")
        if cancha:
            qs = qs.filter(cancha_id=cancha)
        return qs

    def _detalle(self, practica_id):
        return PracticaSerializer(_practicas_qs().get(pk=practica_id)).data

    @swagger_auto_schema(request_body=PracticaEntradaSerializer, responses={201: PracticaSerializer})
    def create(self, request, *args, **kwargs):
        ser = PracticaEntradaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        practica = practicas_service.crear_practica(**ser.validated_data)
        return Response(self._detalle(practica.id), status=status.HTTP_201_CREATED)

    @swagger_auto_schema(request_body=PracticaEntradaSerializer, responses={200: PracticaSerializer})
    def update(self, request, *args, **kwargs):
        parcial = kwargs.pop("partial", False)
        ser = PracticaEntradaSerializer(data=request.data, partial=parcial)
        ser.is_valid(raise_exception=True)
        practica = practicas_service.actualizar_practica(kwargs["pk"], ser.validated_data)
        return Response(self._detalle(practica.id))

    def destroy(self, request, *args, **kwargs):
        resultado = practicas_service.eliminar_practica(kwargs["pk"])
        return Response({"mensaje": "Práctica eliminada correctamente", **resultado})

    @swagger_auto_schema(method="post", request_body=InscripcionEntradaSerializer)
    @action(detail=True, methods=["post", "delete"], url_path="inscripcion",
            permission_classes=[IsAuthenticated])
    def inscripcion(self, request, pk=None):
        ser = InscripcionEntradaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        socio_id = _socio_id_para(request, ser.validated_data.get("socio_id"))

        if request.method == "DELETE":
            inscripciones_service.desinscribir_socio(pk, socio_id)
            return Response({"mensaje": "Inscripción eliminada"})

        inscripcion = inscripciones_service.inscribir_socio(pk, socio_id)
        inscripcion = InscripcionDeportiva.objects.select_related("socio__usuario").get(pk=inscripcion.pk)
        return Response(InscripcionSerializer(inscripcion).data, status=status.HTTP_201_CREATED)


# ------------------------------------------------------------------------------
# GET /practicas/socios/<dni>/inscripciones/ → inscripciones del socio
# ------------------------------------------------------------------------------
class InscripcionesDeSocioView(ListAPIView):
    serializer_class = InscripcionSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        dni = self.kwargs["dni"]
        if not es_admin(self.request.user) and self.request.user.dni != dni:
            raise NotFoundError("Socio no encontrado")
        return (
            InscripcionDeportiva.objects
            .select_related("socio__usuario", "practica__cancha")
            .prefetch_related("practica__horarios", "practica__entrenadores__usuario")
            .filter(socio__usuario__dni=dni)
            .order_by("-fecha_inscripcion")
        )


# ------------------------------------------------------------------------------
# GET /practicas/mis-practicas/ → prácticas del entrenador logueado
# ------------------------------------------------------------------------------
class MisPracticasView(ListAPIView):
    serializer_class = PracticaSerializer
    permission_classes = [IsAuthenticated & EsEntrenador]

    def get_queryset(self):
        return _practicas_qs().filter(entrenadores__usuario=self.request.user)
