#backend/tests/test_practicas.py
from datetime import date, time

import pytest

from apps.canchas_core.models import Cancha, TurnoCancha
from apps.canchas_core.services.alquileres import reservar_turnos
from apps.canchas_core.services.generacion import generar_turnos
from apps.common.choices import DiaSemana, EstadoTurno, TipoDeporte
from apps.common.exceptions import ConflictError, NotFoundError, ValidationError
from apps.cuentas_core.models import Entrenador
from apps.practicas_core.models import HorarioPractica, PracticaDeportiva
from apps.practicas_core.services import practicas as practicas_service
from apps.practicas_core.services.practicas import (
    actualizar_practica,
    crear_practica,
    eliminar_practica,
)

LUNES = date(2025, 1, 6)
TRES_LUNES = [date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 20)]


def _horario(dia="LUNES", inicio="10:00", fin="11:00"):
    return {"dia": dia, "hora_inicio": inicio, "hora_fin": fin}


def _crear(cancha, entrenadores=(), horarios=None, desde=date(2025, 1, 1), hasta=date(2025, 1, 31), **extra):
    datos = {
        "deporte": TipoDeporte.FUTBOL,
        "cancha_id": cancha.id,
        "fecha_inicio": desde,
        "fecha_fin": hasta,
        "precio": "1200.00",
        "entrenador_ids": [e.id for e in entrenadores],
        "horarios": horarios if horarios is not None else [_horario()],
    }
    datos.update(extra)
    return crear_practica(**datos)


def test_crear_practica(cancha_amplia, entrenador):
    practica = _crear(cancha_amplia, [entrenador], [_horario("miércoles", "18:00", "19:30")])

    assert practica.deporte == TipoDeporte.FUTBOL
    assert list(practica.entrenadores.all()) == [entrenador]
    horario = practica.horarios.get()
    assert horario.dia == DiaSemana.MIERCOLES
    assert (horario.hora_inicio, horario.hora_fin) == (time(18, 0), time(19, 30))


def test_solapamiento_de_entrenador(cancha, cancha_amplia, entrenador):
    _crear(cancha_amplia, [entrenador], [_horario("LUNES", "10:00", "11:00")])

    with pytest.raises(ConflictError) as exc:
        _crear(cancha, [entrenador], [_horario("LUNES", "10:30", "11:30")])

    mensaje = exc.value.mensaje
    assert "LUNES" in mensaje and "10:00" in mensaje and "11:00" in mensaje
    assert mensaje == (
        f"El entrenador {entrenador} ya tiene una práctica el día LUNES entre 10:00 y 11:00."
    )
    assert PracticaDeportiva.objects.count() == 1


def test_horarios_contiguos_no_se_solapan(cancha, cancha_amplia, entrenador):
    _crear(cancha_amplia, [entrenador], [_horario("LUNES", "10:00", "11:00")])

    practica = _crear(cancha, [entrenador], [_horario("LUNES", "11:00", "12:00")])

    assert practica.pk is not None


def test_otro_dia_no_se_solapa(cancha, cancha_amplia, entrenador):
    _crear(cancha_amplia, [entrenador], [_horario("LUNES", "10:00", "11:00")])

    practica = _crear(cancha, [entrenador], [_horario("MARTES", "10:00", "11:00")])

    assert practica.pk is not None


def test_solapamiento_en_la_misma_cancha(cancha_amplia, crear_entrenador):
    _crear(cancha_amplia, [crear_entrenador(dni="1")], [_horario("LUNES", "10:00", "11:00")])

    with pytest.raises(ConflictError):
        _crear(cancha_amplia, [crear_entrenador(dni="2")], [_horario("LUNES", "10:30", "11:00")])


def test_misma_cancha_en_otro_periodo_no_choca(cancha_amplia):
    _crear(cancha_amplia, horarios=[_horario()], desde=date(2025, 1, 1), hasta=date(2025, 1, 31))

    practica = _crear(cancha_amplia, horarios=[_horario()], desde=date(2025, 2, 1), hasta=date(2025, 2, 28))

    assert practica.pk is not None


@pytest.mark.parametrize("extra, error", [
    ({"deporte": "AJEDREZ"}, ValidationError),
    ({"fecha_inicio": date(2025, 2, 1), "fecha_fin": date(2025, 1, 1)}, ValidationError),
    ({"fecha_inicio": None}, ValidationError),
    ({"precio": "-1"}, ValidationError),
    ({"horarios": [_horario("FERIADO")]}, ValidationError),
    ({"horarios": [_horario("LUNES", "11:00", "10:00")]}, ValidationError),
    ({"horarios": [_horario("LUNES", "10:00", "11:00"), _horario("lunes", "10:30", "12:00")]}, ValidationError),
    ({"cancha_id": 999}, NotFoundError),
    ({"entrenador_ids": [999]}, NotFoundError),
])
def test_validaciones_de_alta(cancha, extra, error):
    with pytest.raises(error):
        _crear(cancha, **extra)
    assert not PracticaDeportiva.objects.exists()


def test_alta_reclama_turnos_libres_ya_generados(cancha):
    generar_turnos(LUNES, LUNES)

    practica = _crear(cancha, horarios=[_horario("LUNES", "09:00", "10:00")])

    turnos = TurnoCancha.objects.filter(cancha=cancha, fecha=LUNES).order_by("hora_inicio")
    assert [(t.hora_inicio, t.estado) for t in turnos] == [
        (time(8, 0), EstadoTurno.LIBRE),
        (time(8, 30), EstadoTurno.LIBRE),
        (time(9, 0), EstadoTurno.PRACTICA_DEPORTIVA),
        (time(9, 30), EstadoTurno.PRACTICA_DEPORTIVA),
    ]
    assert {t.practica_id for t in turnos if t.estado == EstadoTurno.PRACTICA_DEPORTIVA} == {practica.id}


def test_alta_no_pisa_turnos_alquilados(cancha, socio):
    generar_turnos(LUNES, LUNES)
    reservar_turnos(
        socio_id=socio.id, cancha_id=cancha.id, fecha=LUNES,
        turnos=[{"hora_inicio": "09:00", "hora_fin": "09:30"}],
    )

    _crear(cancha, horarios=[_horario("LUNES", "09:00", "10:00")])

    assert TurnoCancha.objects.get(cancha=cancha, hora_inicio=time(9, 0)).estado == EstadoTurno.ALQUILADO
    assert TurnoCancha.objects.get(cancha=cancha, hora_inicio=time(9, 30)).estado == EstadoTurno.PRACTICA_DEPORTIVA


def test_eliminar_libera_solo_sus_turnos(cancha):
    practica = _crear(
        cancha, horarios=[_horario("LUNES", "09:00", "10:00")],
        desde=TRES_LUNES[0], hasta=TRES_LUNES[-1],
    )
    generar_turnos(TRES_LUNES[0], TRES_LUNES[-1])
    assert TurnoCancha.objects.filter(estado=EstadoTurno.PRACTICA_DEPORTIVA).count() == 6
    # Un turno marcado a mano sin titular no debe tocarse
    TurnoCancha.objects.filter(fecha=TRES_LUNES[0], hora_inicio=time(8, 0)).update(estado=EstadoTurno.MANTENIMIENTO)

    resultado = eliminar_practica(practica.id)

    assert resultado["liberados"] == 6
    assert resultado["fechas_procesadas"] == [d.isoformat() for d in TRES_LUNES]
    assert not TurnoCancha.objects.filter(estado=EstadoTurno.PRACTICA_DEPORTIVA).exists()
    assert not TurnoCancha.objects.filter(practica__isnull=False).exists()
    assert TurnoCancha.objects.filter(estado=EstadoTurno.LIBRE).count() == 11
    assert TurnoCancha.objects.get(fecha=TRES_LUNES[0], hora_inicio=time(8, 0)).estado == EstadoTurno.MANTENIMIENTO
    assert not PracticaDeportiva.objects.filter(pk=practica.id).exists()
    assert not HorarioPractica.objects.filter(practica_id=practica.id).exists()


def test_eliminar_no_toca_turnos_de_otra_practica(cancha_amplia):
    primera = _crear(cancha_amplia, horarios=[_horario("LUNES", "08:00", "09:00")])
    segunda = _crear(cancha_amplia, horarios=[_horario("LUNES", "09:00", "10:00")])
    generar_turnos(LUNES, LUNES)

    resultado = eliminar_practica(primera.id)

    assert resultado["liberados"] == 2
    assert TurnoCancha.objects.filter(practica=segunda, estado=EstadoTurno.PRACTICA_DEPORTIVA).count() == 2


def test_eliminar_inexistente(db):
    with pytest.raises(NotFoundError):
        eliminar_practica(999)


def test_eliminar_desasocia_entrenadores(cancha, entrenador):
    practica = _crear(cancha, [entrenador])

    eliminar_practica(practica.id)

    assert entrenador.practicas.count() == 0


def test_actualizar_mueve_los_turnos_reclamados(cancha):
    generar_turnos(LUNES, LUNES)
    practica = _crear(cancha, horarios=[_horario("LUNES", "08:00", "09:00")])

    actualizar_practica(practica.id, {"horarios": [_horario("LUNES", "09:00", "10:00")]})

    estados = dict(TurnoCancha.objects.filter(cancha=cancha, fecha=LUNES).values_list("hora_inicio", "estado"))
    assert estados == {
        time(8, 0): EstadoTurno.LIBRE,
        time(8, 30): EstadoTurno.LIBRE,
        time(9, 0): EstadoTurno.PRACTICA_DEPORTIVA,
        time(9, 30): EstadoTurno.PRACTICA_DEPORTIVA,
    }
    assert practica.horarios.count() == 1


def test_actualizar_reemplaza_entrenadores(cancha, crear_entrenador):
    uno, dos = crear_entrenador(dni="1"), crear_entrenador(dni="2")
    practica = _crear(cancha, [uno])

    actualizar_practica(practica.id, {"entrenador_ids": [dos.id], "precio": "900"})

    practica.refresh_from_db()
    assert list(practica.entrenadores.all()) == [dos]
    assert str(practica.precio) == "900.00"


def test_actualizar_no_choca_consigo_misma(cancha, entrenador):
    practica = _crear(cancha, [entrenador], [_horario("LUNES", "10:00", "11:00")])

    actualizada = actualizar_practica(practica.id, {"horarios": [_horario("LUNES", "10:00", "11:30")]})

    assert actualizada.horarios.get().hora_fin == time(11, 30)


def test_actualizar_con_solapamiento_no_modifica(cancha, cancha_amplia, entrenador):
    _crear(cancha_amplia, [entrenador], [_horario("MARTES", "10:00", "11:00")])
    practica = _crear(cancha, [entrenador], [_horario("LUNES", "10:00", "11:00")])

    with pytest.raises(ConflictError):
        actualizar_practica(practica.id, {"horarios": [_horario("MARTES", "10:30", "11:30")]})

    assert practica.horarios.get().dia == DiaSemana.LUNES


def test_actualizar_inexistente(db):
    with pytest.raises(NotFoundError):
        actualizar_practica(999, {"precio": "10"})


def test_solapamientos_se_validan_con_cancha_y_entrenadores_bloqueados(monkeypatch, cancha_amplia, entrenador):
    eventos = []

    def espiar_bloqueo(manager, nombre):
        original = manager.select_for_update

        def select_for_update(*args, **kwargs):
            eventos.append(f"bloqueo_{nombre}")
            return original(*args, **kwargs)

        monkeypatch.setattr(manager, "select_for_update", select_for_update)

    def espiar_validacion(nombre):
        original = getattr(practicas_service, nombre)

        def validar(*args, **kwargs):
            eventos.append(nombre)
            return original(*args, **kwargs)

        monkeypatch.setattr(practicas_service, nombre, validar)

    espiar_bloqueo(Cancha.objects, "cancha")
    espiar_bloqueo(Entrenador.objects, "entrenadores")
    espiar_validacion("validar_solapamiento_entrenadores")
    espiar_validacion("validar_solapamiento_cancha")

    practica = _crear(cancha_amplia, [entrenador])
    assert eventos == [
        "bloqueo_cancha", "bloqueo_entrenadores",
        "validar_solapamiento_entrenadores", "validar_solapamiento_cancha",
    ]

    eventos.clear()
    actualizar_practica(practica.id, {"horarios": [_horario(inicio="12:00", fin="13:00")]})
    assert eventos[:2] == ["bloqueo_cancha", "bloqueo_entrenadores"]
    assert eventos[2:] == ["validar_solapamiento_entrenadores", "validar_solapamiento_cancha"]
