# apps/canchas_core/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.canchas_core.views import (
    AlquilerDetailView,
    AlquileresDeSocioView,
    AlquilerListCreateView,
    CancelarAlquilerView,
    CanchaViewSet,
    GenerarTurnosView,
    TurnoListView,
)

router = DefaultRouter()
# CRUD de canchas con sus horarios semanales
router.register(r"canchas", CanchaViewSet, basename="canchas")

urlpatterns = [
    # GET → listar turnos filtrando por cancha/fecha/horas/estado
    path("turnos/", TurnoListView.as_view(), name="turno-list"),

    # POST → generar turnos para un rango (admin)
    path("turnos/generar/", GenerarTurnosView.as_view(), name="turnos-generar"),

    # GET → listar alquileres; POST → reservar turnos consecutivos
    path("alquileres/", AlquilerListCreateView.as_view(), name="alquiler-list"),

    # GET → detalle; PATCH → cambio de estado (admin)
    path("alquileres/<int:pk>/", AlquilerDetailView.as_view(), name="alquiler-detalle"),

    # POST → cancelar alquiler y liberar turno
    path("alquileres/<int:pk>/cancelar/", CancelarAlquilerView.as_view(), name="alquiler-cancelar"),

    # GET → alquileres de un socio
    path("socios/<str:dni>/alquileres/", AlquileresDeSocioView.as_view(), name="alquileres-socio"),

    path("", include(router.urls)),
]
