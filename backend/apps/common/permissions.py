# apps/common/permissions.py

from rest_framework import permissions

from apps.common.choices import Rol


def es_admin(user):
    return bool(
        user and user.is_authenticated
        and (user.is_superuser or getattr(user, "rol", None) == Rol.ADMIN)
    )


class EsAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        return es_admin(request.user)


class EsEntrenador(permissions.BasePermission):
    def has_permission(self, request, view):
        user = request.user
        return user.is_authenticated and getattr(user, "rol", None) == Rol.ENTRENADOR


class EsAdminOSoloLectura(permissions.BasePermission):
    """
    - Permite acceso GET a cualquier usuario autenticado (socio o entrenador).
    - Solo permite escribir a administrativos.
    """

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return es_admin(request.user)
