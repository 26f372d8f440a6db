# apps/practicas_core/services/practicas.py
# ------------------------------------------------------------------------------
# Ciclo de vida de prácticas deportivas y su efecto sobre los turnos de cancha.
# - Alta/modificación:
#     * valida deporte, cancha, fechas, entrenadores y horarios
#     * un entrenador no puede tener dos prácticas con horarios solapados
#       (mismo día, rangos [ini, fin) que se pisan)
#     * dos prácticas no pueden reclamar la misma franja de la misma cancha
#     * reclama los turnos LIBRE ya generados que caen en sus horarios
# - Baja:
#     * recorre fecha_inicio..fecha_fin, se queda con los días que tienen
#       horario y libera SOLO los turnos de esa franja horaria que la práctica
#       tenía tomados (PRACTICA_DEPORTIVA → LIBRE, sin titular)
#     * desasocia entrenadores, borra horarios y la práctica
# - Todo lo que muta corre en una única transacción.
# ------------------------------------------------------------------------------
import logging
from collections import namedtuple
from decimal import Decimal, InvalidOperation

from django.db import transaction

from apps.canchas_core.models import Cancha, TurnoCancha
from apps.common.choices import EstadoTurno, TipoDeporte, dia_de_fecha, normalizar_dia
from apps.common.exceptions import ConflictError, NotFoundError, ValidationError
from apps.common.tiempo import formatear_hora, parse_fecha, parse_hora, rango_fechas, rangos_solapan
from apps.cuentas_core.models import Entrenador
from apps.practicas_core.models import HorarioPractica, PracticaDeportiva

logger = logging.getLogger(__name__)

Franja = namedtuple("Franja", ["dia", "hora_inicio", "hora_fin"])


# ------------------------------------------------------------------------------
# Validaciones
# ------------------------------------------------------------------------------

def _validar_deporte(deporte):
    if deporte not in TipoDeporte.values:
        raise ValidationError("Tipo de deporte inválido")
    return TipoDeporte(deporte)


def _obtener_cancha(cancha_id):
    cancha = Cancha.objects.filter(pk=cancha_id).first()
    if cancha is None:
        raise NotFoundError("La cancha especificada no existe")
    return cancha


def _validar_fechas(fecha_inicio, fecha_fin):
    if not fecha_inicio or not fecha_fin:
        raise ValidationError("Debe ingresar las fechas de inicio y fin.")
    fecha_inicio, fecha_fin = parse_fecha(fecha_inicio), parse_fecha(fecha_fin)
    if fecha_fin < fecha_inicio:
        raise ValidationError("La fecha de fin debe ser posterior o igual a la de inicio.")
    return fecha_inicio, fecha_fin


def _validar_precio(precio):
    if precio is None:
        raise ValidationError("Debe ingresar el precio de la práctica.")
    try:
        precio = Decimal(str(precio))
    except InvalidOperation:
        raise ValidationError(f"Precio inválido: {precio!r}")
    if precio < 0:
        raise ValidationError("El precio no puede ser negativo.")
    return precio


def _obtener_entrenadores(entrenador_ids):
    ids = list(dict.fromkeys(entrenador_ids or []))
    entrenadores = list(Entrenador.objects.select_related("usuario").filter(id__in=ids))
    if len(entrenadores) != len(ids):
        faltantes = sorted(set(ids) - {e.id for e in entrenadores})
        raise NotFoundError("Alguno de los entrenadores no existe", entrenadores_inexistentes=faltantes)
    return entrenadores


def _bloquear_cancha_y_entrenadores(cancha_id, entrenadores):
    """
    Toma lock sobre la cancha y los entrenadores antes de validar solapamientos:
    dos altas concurrentes que comparten cancha o entrenador se serializan.
    """
    list(Cancha.objects.select_for_update().filter(pk=cancha_id))
    list(Entrenador.objects.select_for_update().filter(pk__in=[e.id for e in entrenadores]).order_by("id"))


def normalizar_franjas(horarios):
    """
    Convierte [{dia, hora_inicio, hora_fin}] en Franjas con DiaSemana y time.
    Rechaza franjas vacías y franjas de la misma práctica que se pisan entre sí.
    """
    franjas = []
    for h in horarios or []:
        if not h.get("hora_inicio") or not h.get("hora_fin"):
            raise ValidationError("Cada horario debe tener hora_inicio y hora_fin")
        franja = Franja(normalizar_dia(h.get("dia")), parse_hora(h["hora_inicio"]), parse_hora(h["hora_fin"]))
        if franja.hora_inicio >= franja.hora_fin:
            raise ValidationError(
                f"Horario inválido el día {franja.dia}: "
                f"{formatear_hora(franja.hora_inicio)}-{formatear_hora(franja.hora_fin)}"
            )
        for otra in franjas:
            if otra.dia == franja.dia and rangos_solapan(
                franja.hora_inicio, franja.hora_fin, otra.hora_inicio, otra.hora_fin
            ):
                raise ValidationError(f"Los horarios del día {franja.dia} se solapan entre sí.")
        franjas.append(franja)
    return franjas


def validar_solapamiento_entrenadores(entrenadores, franjas, excluir_practica_id=None):
    """
    Para cada entrenador, compara cada franja nueva contra todos los horarios
    de sus otras prácticas. Primer solapamiento encontrado → ConflictError.
    """
    for entrenador in entrenadores:
        otras = PracticaDeportiva.objects.filter(entrenadores=entrenador).prefetch_related("horarios")
        if excluir_practica_id:
            otras = otras.exclude(pk=excluir_practica_id)

        for practica in otras:
            for existente in practica.horarios.all():
                for nueva in franjas:
                    if existente.dia != nueva.dia:
                        continue
                    if rangos_solapan(nueva.hora_inicio, nueva.hora_fin, existente.hora_inicio, existente.hora_fin):
                        logger.info(
                            "[practicas.validar][solapamiento_entrenador] entrenador_id=%s practica_id=%s dia=%s",
                            entrenador.id, practica.id, existente.dia,
                        )
                        raise ConflictError(
                            f"El entrenador {entrenador} ya tiene una práctica el día {existente.dia} "
                            f"entre {formatear_hora(existente.hora_inicio)} y {formatear_hora(existente.hora_fin)}.",
                            entrenador_id=entrenador.id,
                            practica_id=practica.id,
                        )


def validar_solapamiento_cancha(cancha_id, fecha_inicio, fecha_fin, franjas, excluir_practica_id=None):
    """
    Dos prácticas con fechas que se cruzan no pueden reclamar la misma franja
    de la misma cancha.
    """
    otras = (
        PracticaDeportiva.objects
        .filter(cancha_id=cancha_id, fecha_inicio__lte=fecha_fin, fecha_fin__gte=fecha_inicio)
        .prefetch_related("horarios")
    )
    if excluir_practica_id:
        otras = otras.exclude(pk=excluir_practica_id)

    for practica in otras:
        for existente in practica.horarios.all():
            for nueva in franjas:
                if existente.dia == nueva.dia and rangos_solapan(
                    nueva.hora_inicio, nueva.hora_fin, existente.hora_inicio, existente.hora_fin
                ):
                    raise ConflictError(
                        f"La cancha ya está asignada a otra práctica el día {existente.dia} "
                        f"entre {formatear_hora(existente.hora_inicio)} y {formatear_hora(existente.hora_fin)}.",
                        practica_id=practica.id,
                    )


# ------------------------------------------------------------------------------
# Turnos reclamados por la práctica
# ------------------------------------------------------------------------------

def _fechas_con_franjas(fecha_inicio, fecha_fin, franjas):
    """[(fecha, [franjas de ese día])] para cada fecha del rango con algún horario."""
    resultado = []
    for fecha in rango_fechas(fecha_inicio, fecha_fin):
        dia = dia_de_fecha(fecha)
        del_dia = [f for f in franjas if f.dia == dia]
        if del_dia:
            resultado.append((fecha, del_dia))
    return resultado


def _turnos_de_franja(cancha_id, fecha, franja):
    return TurnoCancha.objects.filter(
        cancha_id=cancha_id,
        fecha=fecha,
        hora_inicio__gte=franja.hora_inicio,
        hora_inicio__lt=franja.hora_fin,
    )


def ocupar_turnos_de_practica(practica, franjas):
    """Marca PRACTICA_DEPORTIVA los turnos LIBRE ya generados dentro de las franjas."""
    ocupados = 0
    en_conflicto = 0
    for fecha, del_dia in _fechas_con_franjas(practica.fecha_inicio, practica.fecha_fin, franjas):
        for franja in del_dia:
            turnos = _turnos_de_franja(practica.cancha_id, fecha, franja)
            ocupados += (
                turnos
                .filter(estado=EstadoTurno.LIBRE)
                .update(estado=EstadoTurno.PRACTICA_DEPORTIVA, practica=practica)
            )
            en_conflicto += turnos.filter(estado=EstadoTurno.ALQUILADO).count()

    if en_conflicto:
        logger.warning(
            "[practicas.ocupar][alquilados] practica_id=%s turnos_alquilados_en_franja=%s",
            practica.id, en_conflicto,
        )
    return ocupados, en_conflicto


def liberar_turnos_de_practica(practica, franjas):
    """
    Libera los turnos que la práctica tenía tomados en sus franjas.
    Devuelve (cantidad liberada, fechas procesadas).
    """
    liberados = 0
    fechas_procesadas = []
    for fecha, del_dia in _fechas_con_franjas(practica.fecha_inicio, practica.fecha_fin, franjas):
        fechas_procesadas.append(fecha)
        for franja in del_dia:
            count = (
                _turnos_de_franja(practica.cancha_id, fecha, franja)
                .filter(estado=EstadoTurno.PRACTICA_DEPORTIVA, practica=practica)
                .update(estado=EstadoTurno.LIBRE, practica=None)
            )
            liberados += count
            if count:
                logger.debug(
                    "[practicas.liberar][fecha] practica_id=%s fecha=%s franja=%s-%s liberados=%s",
                    practica.id, fecha, formatear_hora(franja.hora_inicio), formatear_hora(franja.hora_fin), count,
                )
    return liberados, fechas_procesadas


def _crear_horarios(practica, franjas):
    HorarioPractica.objects.bulk_create([
        HorarioPractica(practica=practica, dia=f.dia, hora_inicio=f.hora_inicio, hora_fin=f.hora_fin)
        for f in franjas
    ])


def _franjas_actuales(practica):
    return [Franja(h.dia, h.hora_inicio, h.hora_fin) for h in practica.horarios.all()]


# ------------------------------------------------------------------------------
# Operaciones
# ------------------------------------------------------------------------------

def crear_practica(*, deporte, cancha_id, fecha_inicio, fecha_fin, precio, entrenador_ids=None, horarios=None):
    deporte = _validar_deporte(deporte)
    cancha = _obtener_cancha(cancha_id)
    fecha_inicio, fecha_fin = _validar_fechas(fecha_inicio, fecha_fin)
    precio = _validar_precio(precio)
    entrenadores = _obtener_entrenadores(entrenador_ids)
    franjas = normalizar_franjas(horarios)

    with transaction.atomic():
        _bloquear_cancha_y_entrenadores(cancha.id, entrenadores)
        validar_solapamiento_entrenadores(entrenadores, franjas)
        validar_solapamiento_cancha(cancha.id, fecha_inicio, fecha_fin, franjas)

        practica = PracticaDeportiva.objects.create(
            deporte=deporte,
            cancha=cancha,
            fecha_inicio=fecha_inicio,
            fecha_fin=fecha_fin,
            precio=precio,
        )
        practica.entrenadores.set(entrenadores)
        _crear_horarios(practica, franjas)
        ocupados, en_conflicto = ocupar_turnos_de_practica(practica, franjas)

    logger.info(
        "[practicas.crear][ok] practica_id=%s cancha_id=%s entrenadores=%s horarios=%s turnos_ocupados=%s en_conflicto=%s",
        practica.id, cancha.id, [e.id for e in entrenadores], len(franjas), ocupados, en_conflicto,
    )
    return practica


def actualizar_practica(practica_id, datos):
    """
    Modificación parcial: los campos ausentes en `datos` conservan su valor.
      - entrenador_ids presente → reemplaza el set completo de entrenadores.
      - horarios presente → reemplaza todos los horarios.
    Los turnos tomados se liberan con los horarios viejos y se vuelven a
    reclamar con los nuevos.
    """
    with transaction.atomic():
        practica = PracticaDeportiva.objects.select_for_update().filter(pk=practica_id).first()
        if practica is None:
            raise NotFoundError("Práctica no encontrada")

        franjas_previas = _franjas_actuales(practica)

        deporte = _validar_deporte(datos["deporte"]) if datos.get("deporte") else practica.deporte
        cancha_id = _obtener_cancha(datos["cancha_id"]).id if datos.get("cancha_id") else practica.cancha_id
        fecha_inicio, fecha_fin = _validar_fechas(
            datos.get("fecha_inicio") or practica.fecha_inicio,
            datos.get("fecha_fin") or practica.fecha_fin,
        )
        precio = _validar_precio(datos["precio"]) if datos.get("precio") is not None else practica.precio

        reemplaza_horarios = datos.get("horarios") is not None
        franjas = normalizar_franjas(datos["horarios"]) if reemplaza_horarios else franjas_previas

        reemplaza_entrenadores = datos.get("entrenador_ids") is not None
        entrenadores = (
            _obtener_entrenadores(datos["entrenador_ids"])
            if reemplaza_entrenadores
            else list(practica.entrenadores.all())
        )

        _bloquear_cancha_y_entrenadores(cancha_id, entrenadores)
        validar_solapamiento_entrenadores(entrenadores, franjas, excluir_practica_id=practica.id)
        validar_solapamiento_cancha(cancha_id, fecha_inicio, fecha_fin, franjas, excluir_practica_id=practica.id)

        # Liberar con la cancha/fechas/horarios anteriores antes de pisarlos
        liberados, _ = liberar_turnos_de_practica(practica, franjas_previas)

        practica.deporte = deporte
        practica.cancha_id = cancha_id
        practica.fecha_inicio = fecha_inicio
        practica.fecha_fin = fecha_fin
        practica.precio = precio
        practica.save()

        if reemplaza_entrenadores:
            practica.entrenadores.set(entrenadores)
        if reemplaza_horarios:
            HorarioPractica.objects.filter(practica=practica).delete()
            _crear_horarios(practica, franjas)

        ocupados, en_conflicto = ocupar_turnos_de_practica(practica, franjas)

    logger.info(
        "[practicas.actualizar][ok] practica_id=%s liberados=%s ocupados=%s en_conflicto=%s",
        practica.id, liberados, ocupados, en_conflicto,
    )
    return practica


def eliminar_practica(practica_id):
    """
    Elimina la práctica liberando sus turnos.

    Retorna:
      - liberados: cantidad de turnos que volvieron a LIBRE.
      - fechas_procesadas: fechas ISO del rango cuyo día tenía horario.
    """
    with transaction.atomic():
        practica = (
            PracticaDeportiva.objects
            .select_for_update()
            .filter(pk=practica_id)
            .first()
        )
        if practica is None:
            raise NotFoundError("Práctica no encontrada")

        franjas = _franjas_actuales(practica)
        logger.info(
            "[practicas.eliminar][inicio] practica_id=%s cancha_id=%s rango=[%s..%s] dias=%s",
            practica.id, practica.cancha_id, practica.fecha_inicio, practica.fecha_fin,
            sorted({f.dia for f in franjas}),
        )

        liberados, fechas = liberar_turnos_de_practica(practica, franjas)

        practica.entrenadores.clear()
        horarios_borrados, _ = HorarioPractica.objects.filter(practica=practica).delete()
        practica.delete()

    logger.info(
        "[practicas.eliminar][ok] practica_id=%s liberados=%s fechas=%s horarios_eliminados=%s",
        practica_id, liberados, len(fechas), horarios_borrados,
    )
    return {
        "liberados": liberados,
        "fechas_procesadas": [f.isoformat() for f in fechas],
    }
