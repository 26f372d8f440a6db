# apps/cuentas_core/serializers.py

from rest_framework import serializers

from apps.common.choices import Rol, TipoDeporte
from apps.common.logging import LoggedModelSerializer
from apps.cuentas_core.models import Entrenador, Familia, Socio, Usuario


class UsuarioSerializer(LoggedModelSerializer):
    class Meta:
        model = Usuario
        fields = ["id", "nombre", "apellido", "dni", "email", "telefono", "rol", "fecha_alta"]
        read_only_fields = fields


class UsuarioAltaSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=150)
    apellido = serializers.CharField(max_length=150)
    dni = serializers.CharField(max_length=20)
    email = serializers.EmailField()
    telefono = serializers.CharField(max_length=30, required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6)
    rol = serializers.ChoiceField(choices=Rol.choices)


class EntrenadorSerializer(LoggedModelSerializer):
    usuario = UsuarioSerializer(read_only=True)
    practicas = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Entrenador
        fields = ["id", "usuario", "actividad", "practicas"]


class EntrenadorAltaSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=150)
    apellido = serializers.CharField(max_length=150)
    dni = serializers.CharField(max_length=20)
    email = serializers.EmailField()
    telefono = serializers.CharField(max_length=30, required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6)
    actividad = serializers.ChoiceField(choices=TipoDeporte.choices, required=False, allow_null=True)


class EntrenadorModificacionSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=150, required=False)
    apellido = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    telefono = serializers.CharField(max_length=30, required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6, required=False)
    actividad = serializers.ChoiceField(choices=TipoDeporte.choices, required=False, allow_null=True)


class SocioSerializer(LoggedModelSerializer):
    usuario = UsuarioSerializer(read_only=True)
    familia_apellido = serializers.CharField(source="familia.apellido", read_only=True, default=None)

    class Meta:
        model = Socio
        fields = ["id", "usuario", "tipo_plan", "estado", "familia", "familia_apellido"]
        read_only_fields = ["id", "usuario", "tipo_plan", "familia", "familia_apellido"]


class FamiliaSerializer(LoggedModelSerializer):
    miembros = SocioSerializer(many=True, read_only=True)

    class Meta:
        model = Familia
        fields = ["id", "apellido", "titular_dni", "descuento", "miembros"]
        read_only_fields = ["id", "apellido", "titular_dni", "miembros"]


class FamiliaAltaSerializer(serializers.Serializer):
    apellido = serializers.CharField(max_length=150)
    titular_dni = serializers.CharField(max_length=20)
    miembros_dni = serializers.ListField(
        child=serializers.CharField(max_length=20), required=False, default=list
    )
