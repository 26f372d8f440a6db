# apps/canchas_core/admin.py

from django.contrib import admin
from apps.canchas_core.models import AlquilerCancha, Cancha, HorarioCancha, TurnoCancha


class HorarioCanchaInline(admin.TabularInline):
    model = HorarioCancha
    extra = 0


@admin.register(Cancha)
class CanchaAdmin(admin.ModelAdmin):
    list_display = ("id", "nombre", "interior", "capacidad_max", "precio_hora", "activa")
    list_filter = ("activa", "interior")
    search_fields = ("nombre",)
    inlines = [HorarioCanchaInline]


@admin.register(TurnoCancha)
class TurnoCanchaAdmin(admin.ModelAdmin):
    list_display = ("id", "cancha", "fecha", "hora_inicio", "hora_fin", "estado", "practica")
    list_filter = ("estado", "cancha")
    date_hierarchy = "fecha"


@admin.register(AlquilerCancha)
class AlquilerCanchaAdmin(admin.ModelAdmin):
    list_display = ("id", "socio", "turno", "estado", "motivo_cancelacion", "fecha_reserva")
    list_filter = ("estado", "motivo_cancelacion")
    search_fields = ("socio__usuario__dni", "socio__usuario__apellido")
