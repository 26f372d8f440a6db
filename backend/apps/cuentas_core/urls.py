# apps/cuentas_core/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.cuentas_core.views import (
    EntrenadorViewSet,
    FamiliaViewSet,
    MiPerfilView,
    SocioDetailView,
    UsuarioListCreateView,
)

router = DefaultRouter()
# CRUD de entrenadores (lookup por DNI)
router.register(r"entrenadores", EntrenadorViewSet, basename="entrenadores")
# Planes familiares
router.register(r"familias", FamiliaViewSet, basename="familias")

urlpatterns = [
    # GET → listar usuarios filtrando por rol/dni; POST → alta
    path("usuarios/", UsuarioListCreateView.as_view(), name="usuario-list"),

    # GET → usuario autenticado
    path("yo/", MiPerfilView.as_view(), name="yo"),

    # GET → perfil del socio
    path("socios/<str:dni>/", SocioDetailView.as_view(), name="socio-detalle"),

    path("", include(router.urls)),
]
