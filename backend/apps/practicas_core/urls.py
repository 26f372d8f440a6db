# apps/practicas_core/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.practicas_core.views import InscripcionesDeSocioView, MisPracticasView, PracticaViewSet

router = DefaultRouter()
# CRUD de prácticas + inscripción de socios
router.register(r"practicas", PracticaViewSet, basename="practicas")

urlpatterns = [
    # GET → prácticas del entrenador autenticado
    path("mis-practicas/", MisPracticasView.as_view(), name="mis-practicas"),

    # GET → inscripciones de un socio
    path("socios/<str:dni>/inscripciones/", InscripcionesDeSocioView.as_view(), name="inscripciones-socio"),

    path("", include(router.urls)),
]
