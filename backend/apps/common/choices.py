# apps/common/choices.py
# ------------------------------------------------------------------------------
# Enumeraciones cerradas del club y normalización de días de la semana.
# - Toda entrada externa de día (API, comando, seeds) pasa por normalizar_dia().
# - dia_de_fecha() traduce una fecha calendario al DiaSemana canónico.
# ------------------------------------------------------------------------------
import unicodedata
from datetime import date

from django.db import models

from apps.common.exceptions import ValidationError


class DiaSemana(models.TextChoices):
    LUNES = "LUNES", "Lunes"
    MARTES = "MARTES", "Martes"
    MIERCOLES = "MIERCOLES", "Miércoles"
    JUEVES = "JUEVES", "Jueves"
    VIERNES = "VIERNES", "Viernes"
    SABADO = "SABADO", "Sábado"
    DOMINGO = "DOMINGO", "Domingo"


# Índice == date.weekday()
DIAS_POR_WEEKDAY = [
    DiaSemana.LUNES,
    DiaSemana.MARTES,
    DiaSemana.MIERCOLES,
    DiaSemana.JUEVES,
    DiaSemana.VIERNES,
    DiaSemana.SABADO,
    DiaSemana.DOMINGO,
]


class TipoDeporte(models.TextChoices):
    FUTBOL = "FUTBOL", "Fútbol"
    BASQUET = "BASQUET", "Básquet"
    NATACION = "NATACION", "Natación"
    HANDBALL = "HANDBALL", "Handball"


class EstadoTurno(models.TextChoices):
    LIBRE = "LIBRE", "Libre"
    ALQUILADO = "ALQUILADO", "Alquilado"
    PRACTICA_DEPORTIVA = "PRACTICA_DEPORTIVA", "Práctica deportiva"
    MANTENIMIENTO = "MANTENIMIENTO", "Mantenimiento"


class EstadoAlquiler(models.TextChoices):
    RESERVADO = "RESERVADO", "Reservado"
    CANCELADO = "CANCELADO", "Cancelado"
    COMPLETADO = "COMPLETADO", "Completado"


class MotivoCancelacion(models.TextChoices):
    MANTENIMIENTO = "MANTENIMIENTO", "Mantenimiento"
    LLUVIA = "LLUVIA", "Lluvia"
    CORTE_DE_LUZ = "CORTE_DE_LUZ", "Corte de luz"
    CORTE_DE_AGUA = "CORTE_DE_AGUA", "Corte de agua"
    PROBLEMAS_CALEFACCION = "PROBLEMAS_CALEFACCION", "Problemas de calefacción"


class Rol(models.TextChoices):
    ADMIN = "ADMIN", "Administrativo"
    ENTRENADOR = "ENTRENADOR", "Entrenador"
    SOCIO = "SOCIO", "Socio"


class TipoPlan(models.TextChoices):
    INDIVIDUAL = "INDIVIDUAL", "Individual"
    FAMILIAR = "FAMILIAR", "Familiar"


class EstadoSocio(models.TextChoices):
    ACTIVO = "ACTIVO", "Activo"
    INACTIVO = "INACTIVO", "Inactivo"
    BLOQUEADO = "BLOQUEADO", "Bloqueado"


def _sin_acentos(texto: str) -> str:
    descompuesto = unicodedata.normalize("NFD", texto)
    return "".join(c for c in descompuesto if not unicodedata.combining(c))


def normalizar_dia(valor) -> DiaSemana:
    """
    Devuelve el DiaSemana canónico para `valor`.

    Acepta:
      - DiaSemana
      - int 0..6 (convención de date.weekday(): 0 = lunes)
      - str con o sin acentos, en cualquier capitalización ("miércoles", "Sabado")
    """
    if isinstance(valor, DiaSemana):
        return valor
    if isinstance(valor, int) and not isinstance(valor, bool):
        if 0 <= valor <= 6:
            return DIAS_POR_WEEKDAY[valor]
        raise ValidationError(f"Día inválido: {valor!r}")
    if not isinstance(valor, str) or not valor.strip():
        raise ValidationError(f"Día inválido: {valor!r}")
    clave = _sin_acentos(valor.strip()).upper()
    try:
        return DiaSemana(clave)
    except ValueError:
        raise ValidationError(f"Día inválido: {valor!r}")


def dia_de_fecha(fecha: date) -> DiaSemana:
    return DIAS_POR_WEEKDAY[fecha.weekday()]
