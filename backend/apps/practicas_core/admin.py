# apps/practicas_core/admin.py

from django.contrib import admin
from apps.practicas_core.models import HorarioPractica, InscripcionDeportiva, PracticaDeportiva


class HorarioPracticaInline(admin.TabularInline):
    model = HorarioPractica
    extra = 0


@admin.register(PracticaDeportiva)
class PracticaDeportivaAdmin(admin.ModelAdmin):
    list_display = ("id", "deporte", "cancha", "fecha_inicio", "fecha_fin", "precio")
    list_filter = ("deporte", "cancha")
    filter_horizontal = ("entrenadores",)
    inlines = [HorarioPracticaInline]


@admin.register(InscripcionDeportiva)
class InscripcionDeportivaAdmin(admin.ModelAdmin):
    list_display = ("id", "socio", "practica", "precio_pagado", "fecha_inscripcion")
    search_fields = ("socio__usuario__dni",)
