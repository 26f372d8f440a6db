#backend/tests/test_generacion_turnos.py
from datetime import date, time
from io import StringIO
from pathlib import Path

import pytest
import yaml
from django.core.management import CommandError, call_command

from apps.canchas_core.models import Cancha, HorarioCancha, TurnoCancha
from apps.canchas_core.services.generacion import generar_turnos
from apps.common.choices import DiaSemana, EstadoTurno, TipoDeporte, normalizar_dia
from apps.common.exceptions import ValidationError
from apps.common.tiempo import parse_hora
from apps.practicas_core.models import HorarioPractica, PracticaDeportiva

ruta_casos = Path(__file__).resolve().parent / "casos"

with open(ruta_casos / "generacion_turnos.yaml", "r", encoding="utf-8") as f:
    casos_generacion = yaml.safe_load(f)

LUNES = date(2025, 1, 6)


def _armar_cancha(horarios):
    cancha = Cancha.objects.create(
        nombre="Cancha YAML", deportes=[TipoDeporte.FUTBOL], capacidad_max=10, precio_hora="800.00",
    )
    for h in horarios:
        HorarioCancha.objects.create(
            cancha=cancha,
            dia_semana=normalizar_dia(h["dia"]),
            hora_inicio=parse_hora(h["hora_inicio"]),
            hora_fin=parse_hora(h["hora_fin"]),
        )
    return cancha


def _armar_practica(cancha, p):
    practica = PracticaDeportiva.objects.create(
        deporte=TipoDeporte.FUTBOL,
        cancha=cancha,
        fecha_inicio=p["fecha_inicio"],
        fecha_fin=p["fecha_fin"],
        precio="500.00",
    )
    HorarioPractica.objects.create(
        practica=practica,
        dia=normalizar_dia(p["dia"]),
        hora_inicio=parse_hora(p["hora_inicio"]),
        hora_fin=parse_hora(p["hora_fin"]),
    )
    return practica


@pytest.mark.parametrize("caso", casos_generacion, ids=[c["nombre"] for c in casos_generacion])
def test_generacion_segun_horarios_y_practicas(db, caso):
    cancha = _armar_cancha(caso["horarios"])
    practicas = [_armar_practica(cancha, p) for p in caso["practicas"]]

    resultado = generar_turnos(caso["desde"], caso["hasta"])

    esperado = caso["esperado"]
    assert resultado["insertados"] == esperado["insertados"]
    assert TurnoCancha.objects.filter(cancha=cancha).count() == esperado["insertados"]

    turnos = {
        t.hora_inicio.strftime("%H:%M"): t
        for t in TurnoCancha.objects.filter(cancha=cancha, fecha=esperado["fecha"])
    }
    assert set(turnos) == set(esperado["estados"])
    for hora, estado in esperado["estados"].items():
        turno = turnos[hora]
        assert turno.estado == estado, hora
        if estado == EstadoTurno.PRACTICA_DEPORTIVA:
            assert turno.practica_id == practicas[0].id
        else:
            assert turno.practica_id is None


def test_turnos_duran_media_hora(cancha):
    generar_turnos(LUNES, LUNES)

    for turno in TurnoCancha.objects.filter(cancha=cancha):
        inicio = turno.hora_inicio.hour * 60 + turno.hora_inicio.minute
        fin = turno.hora_fin.hour * 60 + turno.hora_fin.minute
        assert fin - inicio == 30


def test_generar_dos_veces_es_idempotente(cancha):
    primero = generar_turnos(LUNES, LUNES)
    segundo = generar_turnos(LUNES, LUNES)

    assert primero["insertados"] == 4
    assert primero["repetido"] is False
    assert segundo["insertados"] == 0
    assert segundo["repetido"] is True
    assert segundo["mensaje"] == "Los turnos ya estaban generados en este período."
    assert TurnoCancha.objects.filter(cancha=cancha).count() == 4


def test_regenerar_no_pisa_turnos_alquilados(cancha):
    generar_turnos(LUNES, LUNES)
    TurnoCancha.objects.filter(cancha=cancha, hora_inicio=time(8, 0)).update(estado=EstadoTurno.ALQUILADO)

    generar_turnos(LUNES, LUNES)

    assert TurnoCancha.objects.get(cancha=cancha, hora_inicio=time(8, 0)).estado == EstadoTurno.ALQUILADO


def test_sin_canchas_no_genera(db):
    resultado = generar_turnos(LUNES, LUNES)

    assert resultado["insertados"] == 0
    assert resultado["canchas_procesadas"] == 0
    assert resultado["mensaje"] == "No hay canchas configuradas. No se generaron turnos."
    assert not TurnoCancha.objects.exists()


def test_cancha_inactiva_no_genera(cancha):
    cancha.activa = False
    cancha.save()

    resultado = generar_turnos(LUNES, LUNES)

    assert resultado["insertados"] == 0
    assert not TurnoCancha.objects.exists()


def test_horario_no_disponible_no_genera(cancha):
    HorarioCancha.objects.filter(cancha=cancha).update(disponible=False)

    resultado = generar_turnos(LUNES, LUNES)

    assert resultado["insertados"] == 0
    assert resultado["mensaje"] == "No se generaron turnos nuevos. Verifica horarios disponibles."


def test_fechas_invertidas(cancha):
    with pytest.raises(ValidationError):
        generar_turnos(date(2025, 1, 10), date(2025, 1, 6))
    assert not TurnoCancha.objects.exists()


def test_fechas_faltantes(cancha):
    with pytest.raises(ValidationError):
        generar_turnos(None, LUNES)


def test_filtrar_por_cancha(cancha, cancha_amplia):
    resultado = generar_turnos(LUNES, LUNES, cancha_ids=[cancha_amplia.id])

    assert resultado["insertados"] == 12
    assert not TurnoCancha.objects.filter(cancha=cancha).exists()


def test_practica_mas_antigua_gana(cancha):
    primera = PracticaDeportiva.objects.create(
        deporte=TipoDeporte.FUTBOL, cancha=cancha,
        fecha_inicio=date(2025, 1, 1), fecha_fin=date(2025, 1, 31), precio="100.00",
    )
    HorarioPractica.objects.create(practica=primera, dia=DiaSemana.LUNES, hora_inicio=time(8, 0), hora_fin=time(9, 0))
    segunda = PracticaDeportiva.objects.create(
        deporte=TipoDeporte.FUTBOL, cancha=cancha,
        fecha_inicio=date(2025, 1, 1), fecha_fin=date(2025, 1, 31), precio="100.00",
    )
    HorarioPractica.objects.create(practica=segunda, dia=DiaSemana.LUNES, hora_inicio=time(8, 30), hora_fin=time(9, 30))

    generar_turnos(LUNES, LUNES)

    turno = TurnoCancha.objects.get(cancha=cancha, hora_inicio=time(8, 30))
    assert turno.practica_id == primera.id
    assert TurnoCancha.objects.get(cancha=cancha, hora_inicio=time(9, 0)).practica_id == segunda.id


def test_cambios_previos_al_lock_de_la_cancha_se_respetan(monkeypatch, cancha):
    select_for_update = Cancha.objects.select_for_update

    def bloquear_tras_otra_ejecucion(*args, **kwargs):
        # Mientras se esperaba el lock, otra ejecución insertó el 08:00 y se
        # dio de alta una práctica de 09:00 a 10:00
        TurnoCancha.objects.create(
            cancha=cancha, fecha=LUNES, hora_inicio=time(8, 0), hora_fin=time(8, 30),
        )
        practica = PracticaDeportiva.objects.create(
            deporte=TipoDeporte.FUTBOL, cancha=cancha,
            fecha_inicio=date(2025, 1, 1), fecha_fin=date(2025, 1, 31), precio="100.00",
        )
        HorarioPractica.objects.create(
            practica=practica, dia=DiaSemana.LUNES, hora_inicio=time(9, 0), hora_fin=time(10, 0),
        )
        return select_for_update(*args, **kwargs)

    monkeypatch.setattr(Cancha.objects, "select_for_update", bloquear_tras_otra_ejecucion)

    resultado = generar_turnos(LUNES, LUNES)

    assert resultado["insertados"] == 3
    assert TurnoCancha.objects.filter(cancha=cancha).count() == 4
    assert TurnoCancha.objects.filter(estado=EstadoTurno.PRACTICA_DEPORTIVA).count() == 2

def test_comando_generar_turnos(cancha):
    salida = StringIO()
    call_command("generar_turnos", "--desde", "2025-01-06", "--hasta", "2025-01-12", stdout=salida)

    assert TurnoCancha.objects.filter(cancha=cancha).count() == 4
    assert "insertados=4" in salida.getvalue()


def test_comando_generar_turnos_fechas_invertidas(cancha):
    with pytest.raises(CommandError):
        call_command("generar_turnos", "--desde", "2025-01-12", "--hasta", "2025-01-06")
