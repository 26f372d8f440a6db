#backend/tests/test_comunes.py
import logging
from datetime import date, time

import pytest
from django.core import checks
from django.core.management import call_command
from django.test import override_settings
from rest_framework import status

from apps.common.choices import DiaSemana, dia_de_fecha, normalizar_dia
from apps.common.exceptions import ConflictError, ValidationError, manejador_excepciones
from apps.common.middleware import enmascarar
from apps.common.tiempo import pasos_de_franja, parse_fecha, parse_hora, rango_fechas, rangos_solapan


@pytest.mark.parametrize("entrada, esperado", [
    ("LUNES", DiaSemana.LUNES),
    ("lunes", DiaSemana.LUNES),
    ("Miércoles", DiaSemana.MIERCOLES),
    ("MIERCOLES", DiaSemana.MIERCOLES),
    (" sábado ", DiaSemana.SABADO),
    ("Sabado", DiaSemana.SABADO),
    (6, DiaSemana.DOMINGO),
    (DiaSemana.JUEVES, DiaSemana.JUEVES),
])
def test_normalizar_dia(entrada, esperado):
    assert normalizar_dia(entrada) == esperado


@pytest.mark.parametrize("entrada", ["", None, "Funday", 7, -1, True])
def test_normalizar_dia_invalido(entrada):
    with pytest.raises(ValidationError):
        normalizar_dia(entrada)


def test_dia_de_fecha():
    assert dia_de_fecha(date(2025, 1, 6)) == DiaSemana.LUNES
    assert dia_de_fecha(date(2025, 1, 12)) == DiaSemana.DOMINGO


def test_parse_hora():
    assert parse_hora("08:30") == time(8, 30)
    assert parse_hora("08:30:15") == time(8, 30, 15)
    assert parse_hora(time(9, 0)) == time(9, 0)
    with pytest.raises(ValidationError):
        parse_hora("8h30")
    with pytest.raises(ValidationError):
        parse_hora("25:00")


def test_parse_fecha():
    assert parse_fecha("2025-01-06") == date(2025, 1, 6)
    with pytest.raises(ValidationError):
        parse_fecha("06/01/2025")


def test_rangos_solapan_es_semiabierto():
    assert rangos_solapan(time(10), time(11), time(10, 30), time(11, 30))
    assert not rangos_solapan(time(10), time(11), time(11), time(12))
    assert rangos_solapan(time(9), time(12), time(10), time(11))


def test_pasos_de_franja():
    assert list(pasos_de_franja(time(8), time(10), 30)) == [480, 510, 540, 570]
    assert list(pasos_de_franja(time(8), time(8, 20), 30)) == []


def test_rango_fechas_inclusivo():
    fechas = list(rango_fechas(date(2025, 1, 30), date(2025, 2, 2)))
    assert fechas == [date(2025, 1, 30), date(2025, 1, 31), date(2025, 2, 1), date(2025, 2, 2)]


def test_manejador_errores_de_dominio():
    res = manejador_excepciones(ConflictError("Ocupado", turnos_no_disponibles=["08:00-08:30"]), {})

    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.data == {"error": "Ocupado", "codigo": "conflicto", "turnos_no_disponibles": ["08:00-08:30"]}


def test_manejador_error_no_controlado(caplog):
    with caplog.at_level(logging.ERROR, logger="apps.common.exceptions"):
        res = manejador_excepciones(RuntimeError("se rompió"), {})

    assert res.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert res.data["error"] == "Error interno del servidor"
    assert "se rompió" not in str(res.data)
    assert res.data["trace_id"] in caplog.text


def test_enmascarar_campos_sensibles():
    assert enmascarar({"email": "a@b.com", "password": "x", "turnos": [{"token": "y"}]}) == {
        "email": "a@b.com", "password": "***", "turnos": [{"token": "***"}],
    }


@pytest.mark.django_db
@override_settings(MIGRATION_MODULES={})
def test_migraciones_al_dia_con_los_modelos():
    # Los tests corren sin migraciones; acá se cargan las reales desde disco
    call_command("makemigrations", "--check", "--dry-run", verbosity=0)


def test_chequeos_de_sistema_sin_advertencia_de_paginacion():
    ids = {m.id for m in checks.run_checks(include_deployment_checks=False)}
    assert "rest_framework.W001" not in ids
