# apps/canchas_core/services/ocupacion.py
# ------------------------------------------------------------------------------
# Resolución de ocupación de un turno por prácticas deportivas.
# - Una práctica reclama el turno si:
#     a) la fecha cae dentro de [fecha_inicio, fecha_fin] de la práctica,
#     b) tiene un HorarioPractica con el mismo día de la semana, y
#     c) el inicio del turno cae en [hora_inicio, hora_fin) de ese horario.
# - Se recorren las prácticas por id ascendente; gana la primera que reclama.
# ------------------------------------------------------------------------------
from apps.common.choices import EstadoTurno, dia_de_fecha
from apps.common.tiempo import a_minutos


def horario_cubre(horario, dia, minuto) -> bool:
    return (
        horario.dia == dia
        and a_minutos(horario.hora_inicio) <= minuto < a_minutos(horario.hora_fin)
    )


def practica_cubre(practica, fecha, minuto) -> bool:
    if not (practica.fecha_inicio <= fecha <= practica.fecha_fin):
        return False
    dia = dia_de_fecha(fecha)
    return any(horario_cubre(h, dia, minuto) for h in practica.horarios.all())


def resolver_ocupacion(practicas, fecha, minuto):
    """
    Devuelve la práctica que ocupa el turno que empieza en `minuto` (minutos
    desde medianoche) el día `fecha`, o None si el turno queda libre.

    `practicas` debe venir con `horarios` prefetcheados para no disparar
    una query por candidato.
    """
    for practica in sorted(practicas, key=lambda p: p.id):
        if practica_cubre(practica, fecha, minuto):
            return practica
    return None


def estado_para(practica):
    return EstadoTurno.PRACTICA_DEPORTIVA if practica is not None else EstadoTurno.LIBRE
