# apps/canchas_core/serializers.py

from rest_framework import serializers

from apps.canchas_core.models import AlquilerCancha, Cancha, HorarioCancha, TurnoCancha
from apps.common.choices import EstadoAlquiler, MotivoCancelacion, TipoDeporte, normalizar_dia
from apps.common.exceptions import ValidationError as ErrorDominio
from apps.common.logging import LoggedModelSerializer


class DiaSemanaField(serializers.Field):
    """Acepta 'miércoles', 'MIERCOLES', 'Miercoles' o 0..6 y lo deja en DiaSemana."""

    def to_internal_value(self, data):
        try:
            return normalizar_dia(data)
        except ErrorDominio as exc:
            raise serializers.ValidationError(exc.mensaje)

    def to_representation(self, value):
        return str(value)


# ------------------------------------------------------------------------------
# Canchas
# - Lectura: cancha + horarios semanales (una fila por día).
# - Escritura: horarios agrupados por franja con la lista de días
#   (`dias_seleccionados`) o un único `dia_semana`.
# ------------------------------------------------------------------------------
class HorarioCanchaSerializer(serializers.ModelSerializer):
    class Meta:
        model = HorarioCancha
        fields = ["id", "dia_semana", "hora_inicio", "hora_fin", "disponible"]


class HorarioCanchaEntradaSerializer(serializers.Serializer):
    dias_seleccionados = serializers.ListField(child=DiaSemanaField(), required=False)
    dia_semana = DiaSemanaField(required=False)
    hora_inicio = serializers.TimeField()
    hora_fin = serializers.TimeField()
    disponible = serializers.BooleanField(required=False, default=True)

    def validate(self, attrs):
        dias = list(attrs.pop("dias_seleccionados", None) or [])
        dia = attrs.pop("dia_semana", None)
        if dia is not None and dia not in dias:
            dias.append(dia)
        if not dias:
            raise serializers.ValidationError("Debe seleccionar al menos un día")
        if attrs["hora_inicio"] >= attrs["hora_fin"]:
            raise serializers.ValidationError("La hora de inicio debe ser anterior a la de fin")
        attrs["dias"] = list(dict.fromkeys(dias))
        return attrs


class CanchaSerializer(LoggedModelSerializer):
    horarios = HorarioCanchaSerializer(many=True, read_only=True)

    class Meta:
        model = Cancha
        fields = [
            "id", "nombre", "deportes", "interior", "capacidad_max",
            "precio_hora", "activa", "horarios",
        ]


class CanchaEntradaSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=100)
    deportes = serializers.ListField(child=serializers.ChoiceField(choices=TipoDeporte.choices), allow_empty=False)
    interior = serializers.BooleanField(required=False, default=False)
    capacidad_max = serializers.IntegerField(min_value=1)
    precio_hora = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    activa = serializers.BooleanField(required=False, default=True)
    horarios = HorarioCanchaEntradaSerializer(many=True, required=False)


# ------------------------------------------------------------------------------
# Turnos
# ------------------------------------------------------------------------------
class TurnoCanchaSerializer(serializers.ModelSerializer):
    cancha_nombre = serializers.CharField(source="cancha.nombre", read_only=True)
    hora_inicio = serializers.TimeField(format="%H:%M")
    hora_fin = serializers.TimeField(format="%H:%M")

    class Meta:
        model = TurnoCancha
        fields = ["id", "cancha", "cancha_nombre", "fecha", "hora_inicio", "hora_fin", "estado", "practica"]
        read_only_fields = fields


class GenerarTurnosSerializer(serializers.Serializer):
    fecha_inicio = serializers.DateField()
    fecha_fin = serializers.DateField()
    cancha_ids = serializers.ListField(child=serializers.IntegerField(), required=False, allow_empty=True)

    def validate(self, attrs):
        if attrs["fecha_fin"] < attrs["fecha_inicio"]:
            raise serializers.ValidationError("La fecha fin debe ser posterior o igual a la fecha inicio")
        return attrs


# ------------------------------------------------------------------------------
# Alquileres
# ------------------------------------------------------------------------------
class AlquilerSerializer(LoggedModelSerializer):
    turno = TurnoCanchaSerializer(read_only=True)
    socio_dni = serializers.CharField(source="socio.usuario.dni", read_only=True)
    socio_nombre = serializers.CharField(source="socio.usuario.nombre_completo", read_only=True)

    class Meta:
        model = AlquilerCancha
        fields = [
            "id", "socio", "socio_dni", "socio_nombre", "turno", "fecha_reserva", "estado",
            "motivo_cancelacion", "fecha_cancelacion", "notificado", "pago_referencia",
        ]
        read_only_fields = fields


class TurnoPedidoSerializer(serializers.Serializer):
    hora_inicio = serializers.TimeField()
    hora_fin = serializers.TimeField()


class ReservaSerializer(serializers.Serializer):
    socio_id = serializers.IntegerField(required=False)
    cancha_id = serializers.IntegerField()
    fecha = serializers.DateField()
    turnos = TurnoPedidoSerializer(many=True, allow_empty=True)


class EstadoAlquilerSerializer(serializers.Serializer):
    estado = serializers.ChoiceField(choices=EstadoAlquiler.choices)
    motivo_cancelacion = serializers.ChoiceField(
        choices=MotivoCancelacion.choices, required=False, allow_null=True
    )


class CancelacionSerializer(serializers.Serializer):
    motivo_cancelacion = serializers.ChoiceField(
        choices=MotivoCancelacion.choices, required=False, allow_null=True
    )
