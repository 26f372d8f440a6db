# club_core/urls.py

from django.contrib import admin
from django.urls import path, include
from rest_framework import permissions
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="API Club",
        default_version='v1',
        description="Portal del club: canchas, turnos, alquileres y prácticas deportivas",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
    authentication_classes=[],
)

urlpatterns = [
    # Esquema OpenAPI + Swagger UI
    path('api/schema/', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('docs/', schema_view.with_ui('swagger', cache_timeout=0), name='swagger-ui'),

    path('admin/', admin.site.urls),

    # JWT
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Apps
    path('api/cuentas/', include('apps.cuentas_core.urls')),
    path('api/canchas/', include('apps.canchas_core.urls')),
    path('api/practicas/', include('apps.practicas_core.urls')),
]
