# apps/cuentas_core/admin.py

from django.contrib import admin
from apps.cuentas_core.models import Usuario, Socio, Entrenador, Familia


@admin.register(Usuario)
class UsuarioAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "dni", "nombre", "apellido", "rol")
    list_filter = ("rol",)
    search_fields = ("email", "dni", "apellido")


@admin.register(Socio)
class SocioAdmin(admin.ModelAdmin):
    list_display = ("id", "usuario", "tipo_plan", "estado", "familia")
    list_filter = ("tipo_plan", "estado")
    search_fields = ("usuario__dni", "usuario__apellido")


@admin.register(Entrenador)
class EntrenadorAdmin(admin.ModelAdmin):
    list_display = ("id", "usuario", "actividad")
    search_fields = ("usuario__dni", "usuario__apellido")


@admin.register(Familia)
class FamiliaAdmin(admin.ModelAdmin):
    list_display = ("id", "apellido", "titular_dni", "descuento")
    search_fields = ("apellido", "titular_dni")
