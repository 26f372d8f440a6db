# backend/tests/conftest.py
from datetime import time

import pytest
from rest_framework.test import APIClient

from apps.canchas_core.models import Cancha, HorarioCancha
from apps.common.choices import DiaSemana, Rol, TipoDeporte
from apps.cuentas_core import services as cuentas_services
from apps.cuentas_core.models import Usuario


@pytest.fixture
def admin_user(db):
    return Usuario.objects.create_user(
        email="admin@club.com",
        password="admin1234",
        nombre="Ana",
        apellido="Admin",
        dni="10000000",
        rol=Rol.ADMIN,
    )


@pytest.fixture
def api_admin(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def crear_socio(db):
    def _crear(dni="20000000", email=None, nombre="Sofía", apellido="Socia"):
        usuario = cuentas_services.crear_usuario(
            nombre=nombre,
            apellido=apellido,
            dni=dni,
            email=email or f"socio{dni}@club.com",
            password="socio1234",
            rol=Rol.SOCIO,
        )
        return usuario.socio
    return _crear


@pytest.fixture
def socio(crear_socio):
    return crear_socio()


@pytest.fixture
def api_socio(socio):
    client = APIClient()
    client.force_authenticate(user=socio.usuario)
    return client


@pytest.fixture
def crear_entrenador(db):
    def _crear(dni="30000000", nombre="Pedro", apellido="Pérez"):
        return cuentas_services.crear_entrenador(
            nombre=nombre,
            apellido=apellido,
            dni=dni,
            email=f"entrenador{dni}@club.com",
            password="entrena1234",
            actividad=TipoDeporte.FUTBOL,
        )
    return _crear


@pytest.fixture
def entrenador(crear_entrenador):
    return crear_entrenador()


@pytest.fixture
def cancha(db):
    """Cancha de fútbol abierta los lunes de 08:00 a 10:00 (4 turnos de 30')."""
    cancha = Cancha.objects.create(
        nombre="Cancha 1",
        deportes=[TipoDeporte.FUTBOL],
        interior=False,
        capacidad_max=2,
        precio_hora="1000.00",
    )
    HorarioCancha.objects.create(
        cancha=cancha,
        dia_semana=DiaSemana.LUNES,
        hora_inicio=time(8, 0),
        hora_fin=time(10, 0),
    )
    return cancha


@pytest.fixture
def cancha_amplia(db):
    """Cancha abierta los lunes de 08:00 a 14:00 (12 turnos)."""
    cancha = Cancha.objects.create(
        nombre="Cancha amplia",
        deportes=[TipoDeporte.FUTBOL, TipoDeporte.HANDBALL],
        capacidad_max=20,
        precio_hora="1500.00",
    )
    HorarioCancha.objects.create(
        cancha=cancha,
        dia_semana=DiaSemana.LUNES,
        hora_inicio=time(8, 0),
        hora_fin=time(14, 0),
    )
    return cancha
