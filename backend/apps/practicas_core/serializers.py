# apps/practicas_core/serializers.py

from rest_framework import serializers

from apps.canchas_core.serializers import DiaSemanaField
from apps.common.choices import TipoDeporte
from apps.common.logging import LoggedModelSerializer
from apps.practicas_core.models import HorarioPractica, InscripcionDeportiva, PracticaDeportiva


class HorarioPracticaSerializer(serializers.ModelSerializer):
    hora_inicio = serializers.TimeField(format="%H:%M")
    hora_fin = serializers.TimeField(format="%H:%M")

    class Meta:
        model = HorarioPractica
        fields = ["id", "dia", "hora_inicio", "hora_fin"]


class PracticaSerializer(LoggedModelSerializer):
    cancha_nombre = serializers.CharField(source="cancha.nombre", read_only=True)
    horarios = HorarioPracticaSerializer(many=True, read_only=True)
    entrenadores = serializers.SerializerMethodField()
    inscriptos = serializers.SerializerMethodField()

    class Meta:
        model = PracticaDeportiva
        fields = [
            "id", "deporte", "cancha", "cancha_nombre", "fecha_inicio", "fecha_fin",
            "precio", "entrenadores", "horarios", "inscriptos",
        ]
        read_only_fields = fields

    def get_entrenadores(self, obj):
        return [
            {"id": e.id, "nombre": e.usuario.nombre_completo, "dni": e.usuario.dni}
            for e in obj.entrenadores.all()
        ]

    def get_inscriptos(self, obj):
        return obj.inscripciones.count()


# ------------------------------------------------------------------------------
# Entrada de alta/modificación
# - Los horarios se validan a fondo en el service (solapamientos); acá sólo
#   se normaliza el día para devolver un 400 temprano con el nombre del campo.
# ------------------------------------------------------------------------------
class HorarioPracticaEntradaSerializer(serializers.Serializer):
    dia = DiaSemanaField()
    hora_inicio = serializers.TimeField()
    hora_fin = serializers.TimeField()


class PracticaEntradaSerializer(serializers.Serializer):
    deporte = serializers.ChoiceField(choices=TipoDeporte.choices)
    cancha_id = serializers.IntegerField()
    fecha_inicio = serializers.DateField()
    fecha_fin = serializers.DateField()
    precio = serializers.DecimalField(max_digits=10, decimal_places=2)
    entrenador_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    horarios = HorarioPracticaEntradaSerializer(many=True, required=False)


class InscripcionSerializer(LoggedModelSerializer):
    socio_dni = serializers.CharField(source="socio.usuario.dni", read_only=True)
    practica = PracticaSerializer(read_only=True)

    class Meta:
        model = InscripcionDeportiva
        fields = ["id", "socio", "socio_dni", "practica", "fecha_inscripcion", "precio_pagado"]
        read_only_fields = fields


class InscripcionEntradaSerializer(serializers.Serializer):
    socio_id = serializers.IntegerField(required=False)
