# apps/cuentas_core/views.py

import logging

from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.choices import Rol
from apps.common.exceptions import NotFoundError, ValidationError
from apps.common.permissions import EsAdmin, EsAdminOSoloLectura, es_admin
from apps.cuentas_core import services
from apps.cuentas_core.models import Entrenador, Familia, Socio, Usuario
from apps.cuentas_core.serializers import (
    EntrenadorAltaSerializer,
    EntrenadorModificacionSerializer,
    EntrenadorSerializer,
    FamiliaAltaSerializer,
    FamiliaSerializer,
    SocioSerializer,
    UsuarioAltaSerializer,
    UsuarioSerializer,
)

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# GET  /cuentas/usuarios/?rol=SOCIO&dni=...  → listar usuarios (admin)
# POST /cuentas/usuarios/                    → alta de usuario con su perfil
# ------------------------------------------------------------------------------
class UsuarioListCreateView(APIView):
    permission_classes = [IsAuthenticated & EsAdmin]

    def get(self, request):
        qs = Usuario.objects.all().order_by("apellido", "nombre")

        rol = request.query_params.get("rol")
        if rol:
            if rol not in Rol.values:
                raise ValidationError("Rol inválido")
            qs = qs.filter(rol=rol)

        dni = request.query_params.get("dni")
        if dni:
            qs = qs.filter(dni=dni)

        return Response(UsuarioSerializer(qs, many=True).data)

    def post(self, request):
        ser = UsuarioAltaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        usuario = services.crear_usuario(**ser.validated_data)
        return Response(UsuarioSerializer(usuario).data, status=status.HTTP_201_CREATED)


# ------------------------------------------------------------------------------
# /cuentas/entrenadores/        → listar / alta
# /cuentas/entrenadores/<dni>/  → detalle / modificación / baja
# ------------------------------------------------------------------------------
class EntrenadorViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated & EsAdminOSoloLectura]
    lookup_field = "dni"

    def list(self, request):
        qs = Entrenador.objects.select_related("usuario").prefetch_related("practicas")
        return Response(EntrenadorSerializer(qs, many=True).data)

    def retrieve(self, request, dni=None):
        entrenador = services.obtener_entrenador_por_dni(dni)
        return Response(EntrenadorSerializer(entrenador).data)

    def create(self, request):
        ser = EntrenadorAltaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entrenador = services.crear_entrenador(**ser.validated_data)
        return Response(EntrenadorSerializer(entrenador).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, dni=None):
        ser = EntrenadorModificacionSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        entrenador = services.actualizar_entrenador(dni, ser.validated_data)
        return Response(EntrenadorSerializer(entrenador).data)

    def update(self, request, dni=None):
        return self.partial_update(request, dni=dni)

    def destroy(self, request, dni=None):
        resultado = services.eliminar_entrenador(dni)
        return Response({"mensaje": "Entrenador eliminado correctamente", **resultado})


# ------------------------------------------------------------------------------
# /cuentas/familias/       → listar / alta de plan familiar
# /cuentas/familias/<id>/  → detalle / cambio de descuento / baja
# ------------------------------------------------------------------------------
class FamiliaViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.UpdateModelMixin,
                     viewsets.GenericViewSet):
    queryset = Familia.objects.prefetch_related("miembros__usuario").order_by("apellido")
    serializer_class = FamiliaSerializer
    permission_classes = [IsAuthenticated & EsAdmin]

    def create(self, request):
        ser = FamiliaAltaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        familia = services.crear_familia(**ser.validated_data)
        familia = self.get_queryset().get(pk=familia.pk)
        return Response(
            {"mensaje": "Familia creada correctamente", "familia": FamiliaSerializer(familia).data},
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, pk=None):
        liberados = services.eliminar_familia(pk)
        return Response({"mensaje": "Familia eliminada correctamente", "socios_liberados": liberados})


# ------------------------------------------------------------------------------
# GET /cuentas/socios/<dni>/ → perfil del socio con plan y familia
# - Un socio sólo puede ver su propio perfil; admins ven cualquiera.
# ------------------------------------------------------------------------------
class SocioDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, dni):
        socio = (
            Socio.objects
            .select_related("usuario", "familia")
            .filter(usuario__dni=dni)
            .first()
        )
        if socio is None or (not es_admin(request.user) and socio.usuario_id != request.user.id):
            raise NotFoundError("Socio no encontrado")
        return Response(SocioSerializer(socio).data)


# ------------------------------------------------------------------------------
# GET /cuentas/yo/ → usuario autenticado
# ------------------------------------------------------------------------------
class MiPerfilView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UsuarioSerializer(request.user).data)
