# apps/canchas_core/filters.py

import django_filters

from apps.canchas_core.models import AlquilerCancha, TurnoCancha
from apps.common.choices import EstadoAlquiler, EstadoTurno


class HorasFilter(django_filters.BaseInFilter, django_filters.TimeFilter):
    pass


class TurnoCanchaFilter(django_filters.FilterSet):
    cancha = django_filters.NumberFilter(field_name="cancha_id")
    fecha = django_filters.DateFilter(field_name="fecha")
    desde = django_filters.DateFilter(field_name="fecha", lookup_expr="gte")
    hasta = django_filters.DateFilter(field_name="fecha", lookup_expr="lte")
    # ?horas=08:00,08:30
    horas = HorasFilter(field_name="hora_inicio", lookup_expr="in")
    estado = django_filters.ChoiceFilter(choices=EstadoTurno.choices)

    class Meta:
        model = TurnoCancha
        fields = ["cancha", "fecha", "desde", "hasta", "horas", "estado"]


class AlquilerFilter(django_filters.FilterSet):
    estado = django_filters.ChoiceFilter(choices=EstadoAlquiler.choices)
    socio_dni = django_filters.CharFilter(field_name="socio__usuario__dni")
    cancha = django_filters.NumberFilter(field_name="turno__cancha_id")
    desde = django_filters.DateFilter(field_name="turno__fecha", lookup_expr="gte")
    hasta = django_filters.DateFilter(field_name="turno__fecha", lookup_expr="lte")

    class Meta:
        model = AlquilerCancha
        fields = ["estado", "socio_dni", "cancha", "desde", "hasta"]
