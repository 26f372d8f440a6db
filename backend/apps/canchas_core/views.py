# apps/canchas_core/views.py

import logging

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status, viewsets
from rest_framework.filters import OrderingFilter
from rest_framework.generics import ListAPIView
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.canchas_core.filters import AlquilerFilter, TurnoCanchaFilter
from apps.canchas_core.models import AlquilerCancha, Cancha, TurnoCancha
from apps.canchas_core.serializers import (
    AlquilerSerializer,
    CancelacionSerializer,
    CanchaEntradaSerializer,
    CanchaSerializer,
    EstadoAlquilerSerializer,
    GenerarTurnosSerializer,
    ReservaSerializer,
    TurnoCanchaSerializer,
)
from apps.canchas_core.services import alquileres as alquileres_service
from apps.canchas_core.services import canchas as canchas_service
from apps.canchas_core.services.generacion import generar_turnos
from apps.common.exceptions import NotFoundError
from apps.common.permissions import EsAdmin, EsAdminOSoloLectura, es_admin

logger = logging.getLogger(__name__)


def _socio_de(usuario):
    socio = getattr(usuario, "socio", None)
    if socio is None:
        raise NotFoundError("El usuario no tiene perfil de socio")
    return socio


def _alquileres_qs():
    return AlquilerCancha.objects.select_related("socio__usuario", "turno__cancha")


# ------------------------------------------------------------------------------
# /canchas/canchas/       → listar / alta (con horarios)
# /canchas/canchas/<id>/  → detalle / modificación / baja
# - Lectura: cualquier usuario autenticado. Escritura: administrativos.
# ------------------------------------------------------------------------------
class CanchaViewSet(viewsets.ModelViewSet):
    queryset = Cancha.objects.prefetch_related("horarios").order_by("id")
    serializer_class = CanchaSerializer
    permission_classes = [IsAuthenticated & EsAdminOSoloLectura]

    @swagger_auto_schema(request_body=CanchaEntradaSerializer, responses={201: CanchaSerializer})
    def create(self, request, *args, **kwargs):
        ser = CanchaEntradaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        cancha = canchas_service.crear_cancha(ser.validated_data)
        return Response(CanchaSerializer(cancha).data, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(request_body=CanchaEntradaSerializer, responses={200: CanchaSerializer})
    def update(self, request, *args, **kwargs):
        parcial = kwargs.pop("partial", False)
        ser = CanchaEntradaSerializer(data=request.data, partial=parcial)
        ser.is_valid(raise_exception=True)
        cancha = canchas_service.actualizar_cancha(kwargs["pk"], ser.validated_data)
        return Response(CanchaSerializer(cancha).data)

    def destroy(self, request, *args, **kwargs):
        canchas_service.eliminar_cancha(kwargs["pk"])
        return Response({"mensaje": "Cancha eliminada correctamente"}, status=status.HTTP_200_OK)


# ------------------------------------------------------------------------------
# POST /canchas/turnos/generar/ → genera turnos de todas las canchas activas
# ------------------------------------------------------------------------------
class GenerarTurnosView(APIView):
    permission_classes = [IsAuthenticated & EsAdmin]

    @swagger_auto_schema(request_body=GenerarTurnosSerializer)
    def post(self, request):
        ser = GenerarTurnosSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        datos = ser.validated_data
        resultado = generar_turnos(
            datos["fecha_inicio"], datos["fecha_fin"], cancha_ids=datos.get("cancha_ids") or None,
        )
        codigo = status.HTTP_201_CREATED if resultado["insertados"] else status.HTTP_200_OK
        return Response(resultado, status=codigo)


# ------------------------------------------------------------------------------
# GET /canchas/turnos/?cancha=&fecha=&desde=&hasta=&horas=&estado=
# ------------------------------------------------------------------------------
class TurnoListView(ListAPIView):
    serializer_class = TurnoCanchaSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = TurnoCanchaFilter
    ordering_fields = ["fecha", "hora_inicio"]
    ordering = ["fecha", "hora_inicio", "cancha_id"]

    def get_queryset(self):
        return TurnoCancha.objects.select_related("cancha")


class AlquilerPagination(LimitOffsetPagination):
    default_limit = settings.CLUB_PAGE_SIZE


# ------------------------------------------------------------------------------
# GET  /canchas/alquileres/ → admins ven todo; socios sólo lo propio
# POST /canchas/alquileres/ → reserva 1..N turnos consecutivos
# - Un socio sólo reserva para sí mismo (se ignora socio_id del body).
# ------------------------------------------------------------------------------
class AlquilerListCreateView(ListAPIView):
    serializer_class = AlquilerSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AlquilerFilter
    pagination_class = AlquilerPagination
    ordering_fields = ["fecha_reserva", "id"]
    ordering = ["-id"]

    def get_queryset(self):
        qs = _alquileres_qs()
        if es_admin(self.request.user):
            return qs
        return qs.filter(socio__usuario=self.request.user)

    @swagger_auto_schema(request_body=ReservaSerializer, responses={201: AlquilerSerializer(many=True)})
    def post(self, request):
        ser = ReservaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        datos = ser.validated_data

        if es_admin(request.user) and datos.get("socio_id"):
            socio_id = datos["socio_id"]
        else:
            socio_id = _socio_de(request.user).id

        alquileres = alquileres_service.reservar_turnos(
            socio_id=socio_id,
            cancha_id=datos["cancha_id"],
            fecha=datos["fecha"],
            turnos=datos["turnos"],
        )
        return Response(
            {
                "mensaje": "Alquiler registrado correctamente",
                "alquileres": AlquilerSerializer(_alquileres_qs().filter(pk__in=[a.pk for a in alquileres]), many=True).data,
            },
            status=status.HTTP_201_CREATED,
        )


# ------------------------------------------------------------------------------
# GET   /canchas/alquileres/<id>/ → detalle (admin o dueño)
# PATCH /canchas/alquileres/<id>/ → cambio de estado (admin)
# ------------------------------------------------------------------------------
class AlquilerDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def _obtener(self, request, pk):
        alquiler = _alquileres_qs().filter(pk=pk).first()
        if alquiler is None or (not es_admin(request.user) and alquiler.socio.usuario_id != request.user.id):
            raise NotFoundError("Alquiler no encontrado")
        return alquiler

    def get(self, request, pk):
        return Response(AlquilerSerializer(self._obtener(request, pk)).data)

    @swagger_auto_schema(request_body=EstadoAlquilerSerializer, responses={200: AlquilerSerializer})
    def patch(self, request, pk):
        if not es_admin(request.user):
            self.permission_denied(request, message="Sólo un administrativo puede cambiar el estado")
        ser = EstadoAlquilerSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        alquileres_service.actualizar_estado_alquiler(
            pk, ser.validated_data["estado"], ser.validated_data.get("motivo_cancelacion"),
        )
        return Response(AlquilerSerializer(self._obtener(request, pk)).data)

    put = patch


# ------------------------------------------------------------------------------
# POST /canchas/alquileres/<id>/cancelar/ → cancela y libera el turno
# ------------------------------------------------------------------------------
class CancelarAlquilerView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(request_body=CancelacionSerializer, responses={200: AlquilerSerializer})
    def post(self, request, pk):
        alquiler = _alquileres_qs().filter(pk=pk).first()
        if alquiler is None or (not es_admin(request.user) and alquiler.socio.usuario_id != request.user.id):
            raise NotFoundError("Alquiler no encontrado")

        ser = CancelacionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        alquiler = alquileres_service.cancelar_alquiler(pk, ser.validated_data.get("motivo_cancelacion"))
        return Response(
            {"mensaje": "Alquiler cancelado", "alquiler": AlquilerSerializer(alquiler).data}
        )


# ------------------------------------------------------------------------------
# GET /canchas/socios/<dni>/alquileres/ → alquileres del socio (admin o él mismo)
# ------------------------------------------------------------------------------
class AlquileresDeSocioView(ListAPIView):
    serializer_class = AlquilerSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        dni = self.kwargs["dni"]
        if not es_admin(self.request.user) and self.request.user.dni != dni:
            raise NotFoundError("Socio no encontrado")
        return _alquileres_qs().filter(socio__usuario__dni=dni).order_by("-id")
