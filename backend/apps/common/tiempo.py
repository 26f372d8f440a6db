# apps/common/tiempo.py
# ------------------------------------------------------------------------------
# Aritmética de horas y fechas para turnos:
# - Horas como datetime.time en BD; "HH:MM" sólo en los bordes.
# - Minutos desde medianoche para iterar franjas.
# ------------------------------------------------------------------------------
from datetime import date, time, timedelta
from typing import Iterator

from apps.common.exceptions import ValidationError


def parse_hora(v) -> time:
    """Acepta time, 'HH:MM' o 'HH:MM:SS' y devuelve datetime.time."""
    if isinstance(v, time):
        return v
    if not v:
        raise ValidationError("Hora inválida")
    s = str(v).strip()
    if len(s) == 5:  # HH:MM
        s = s + ":00"
    try:
        hh, mm, ss = map(int, s.split(":"))
        return time(hh, mm, ss)
    except ValueError:
        raise ValidationError(f"Hora inválida: {v!r}")


def a_minutos(h: time) -> int:
    return h.hour * 60 + h.minute


def desde_minutos(minutos: int) -> time:
    return time(minutos // 60, minutos % 60)


def formatear_hora(h: time) -> str:
    return h.strftime("%H:%M")


def rangos_solapan(inicio1, fin1, inicio2, fin2) -> bool:
    """Verifica si dos rangos [ini, fin) se solapan."""
    return inicio1 < fin2 and fin1 > inicio2


def pasos_de_franja(hora_inicio: time, hora_fin: time, duracion_minutos: int) -> Iterator[int]:
    """
    Minutos de inicio de cada turno completo dentro de [hora_inicio, hora_fin).
    Una franja final más corta que `duracion_minutos` no se emite.
    """
    minuto = a_minutos(hora_inicio)
    fin = a_minutos(hora_fin)
    while minuto + duracion_minutos <= fin:
        yield minuto
        minuto += duracion_minutos


def rango_fechas(desde: date, hasta: date) -> Iterator[date]:
    """Todas las fechas entre 'desde' y 'hasta' (inclusive)."""
    d = desde
    while d <= hasta:
        yield d
        d += timedelta(days=1)


def parse_fecha(v) -> date:
    """Acepta date o 'YYYY-MM-DD' y devuelve datetime.date."""
    if isinstance(v, date):
        return v
    if not v:
        raise ValidationError("Fecha inválida")
    try:
        return date.fromisoformat(str(v).strip())
    except ValueError:
        raise ValidationError(f"Fecha inválida: {v!r}")
