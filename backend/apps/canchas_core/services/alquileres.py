# apps/canchas_core/services/alquileres.py
# ------------------------------------------------------------------------------
# Alquiler de turnos de cancha por parte de socios.
# - Reserva de 1..N turnos consecutivos (N = CLUB_MAX_TURNOS_POR_ALQUILER).
# - Todo o nada: si un turno no existe o no está LIBRE, no se reserva ninguno.
# - Concurrencia:
#     a) select_for_update() sobre los turnos pedidos
#     b) cada cambio de estado es un UPDATE condicionado al estado actual
#        (LIBRE → ALQUILADO); 0 filas afectadas aborta y revierte la transacción.
# - Cancelación: ALQUILADO → LIBRE con la misma regla condicional.
# ------------------------------------------------------------------------------
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.canchas_core.models import AlquilerCancha, Cancha, TurnoCancha
from apps.common.choices import EstadoAlquiler, EstadoTurno
from apps.common.exceptions import ConflictError, NotFoundError, ValidationError
from apps.common.tiempo import formatear_hora, parse_hora
from apps.cuentas_core.models import Socio

logger = logging.getLogger(__name__)


def _max_turnos():
    return getattr(settings, "CLUB_MAX_TURNOS_POR_ALQUILER", 6)


def _normalizar_pedido(turnos):
    """Parsea y ordena por hora de inicio los turnos pedidos [{hora_inicio, hora_fin}]."""
    pedido = []
    for t in turnos:
        inicio = parse_hora(t.get("hora_inicio"))
        fin = parse_hora(t.get("hora_fin"))
        if inicio >= fin:
            raise ValidationError(
                f"Turno inválido: {formatear_hora(inicio)}-{formatear_hora(fin)}"
            )
        pedido.append((inicio, fin))
    return sorted(pedido, key=lambda par: par[0])


def son_consecutivos(pedido) -> bool:
    """Cada turno debe empezar exactamente cuando termina el anterior."""
    return all(pedido[i - 1][1] == pedido[i][0] for i in range(1, len(pedido)))


def _etiqueta(inicio, fin):
    return f"{formatear_hora(inicio)}-{formatear_hora(fin)}"


def reservar_turnos(*, socio_id, cancha_id, fecha, turnos):
    """
    Reserva los `turnos` pedidos de la cancha en `fecha` para el socio.

    ► Validaciones (antes de mutar):
      - 1..CLUB_MAX_TURNOS_POR_ALQUILER turnos.
      - Socio y cancha existentes.
      - Turnos consecutivos tras ordenar por hora de inicio.
      - Todos los turnos existen en BD, coinciden en hora_fin y están LIBRE.

    ► Retorna:
      - list[AlquilerCancha]: un alquiler RESERVADO por turno, en orden horario.
    """
    if not turnos:
        raise ValidationError("Datos incompletos para registrar el alquiler")
    maximo = _max_turnos()
    if len(turnos) > maximo:
        raise ValidationError(f"No se pueden reservar más de {maximo} turnos por alquiler")

    socio = Socio.objects.filter(pk=socio_id).first()
    if socio is None:
        raise NotFoundError(f"El socio con id {socio_id} no existe")
    if not Cancha.objects.filter(pk=cancha_id).exists():
        raise NotFoundError("La cancha especificada no existe")

    pedido = _normalizar_pedido(turnos)
    if not son_consecutivos(pedido):
        logger.info(
            "[alquileres.reservar][no_consecutivos] socio_id=%s cancha_id=%s fecha=%s pedido=%s",
            socio_id, cancha_id, fecha, [_etiqueta(i, f) for i, f in pedido],
        )
        raise ConflictError("Los turnos deben ser consecutivos")

    horas_inicio = [inicio for inicio, _ in pedido]

    with transaction.atomic():
        encontrados = {
            t.hora_inicio: t
            for t in (
                TurnoCancha.objects
                .select_for_update()
                .filter(cancha_id=cancha_id, fecha=fecha, hora_inicio__in=horas_inicio)
                .order_by("hora_inicio")
            )
        }

        no_disponibles = []
        for inicio, fin in pedido:
            turno = encontrados.get(inicio)
            if turno is None or turno.hora_fin != fin or turno.estado != EstadoTurno.LIBRE:
                no_disponibles.append(_etiqueta(inicio, fin))

        if no_disponibles:
            logger.info(
                "[alquileres.reservar][no_disponibles] socio_id=%s cancha_id=%s fecha=%s turnos=%s",
                socio_id, cancha_id, fecha, no_disponibles,
            )
            raise ConflictError(
                "Uno o más turnos no están disponibles: " + ", ".join(no_disponibles),
                turnos_no_disponibles=no_disponibles,
            )

        alquileres = []
        for inicio, fin in pedido:
            turno = encontrados[inicio]
            actualizados = (
                TurnoCancha.objects
                .filter(pk=turno.pk, estado=EstadoTurno.LIBRE)
                .update(estado=EstadoTurno.ALQUILADO)
            )
            if actualizados != 1:
                # Otro request lo tomó entre la lectura y el update
                logger.warning(
                    "[alquileres.reservar][carrera] turno_id=%s socio_id=%s", turno.pk, socio_id
                )
                raise ConflictError(
                    f"Uno o más turnos no están disponibles: {_etiqueta(inicio, fin)}",
                    turnos_no_disponibles=[_etiqueta(inicio, fin)],
                )
            turno.estado = EstadoTurno.ALQUILADO
            alquileres.append(
                AlquilerCancha.objects.create(
                    socio=socio,
                    turno=turno,
                    estado=EstadoAlquiler.RESERVADO,
                )
            )

    logger.info(
        "[alquileres.reservar][ok] socio_id=%s cancha_id=%s fecha=%s turnos=%s alquileres=%s",
        socio_id, cancha_id, fecha,
        [_etiqueta(i, f) for i, f in pedido], [a.id for a in alquileres],
    )
    return alquileres


def _obtener_alquiler_bloqueado(alquiler_id):
    alquiler = AlquilerCancha.objects.select_for_update().filter(pk=alquiler_id).first()
    if alquiler is None:
        raise NotFoundError("Alquiler no encontrado")
    return alquiler


def cancelar_alquiler(alquiler_id, motivo=None):
    """
    Cancela el alquiler y libera su turno (ALQUILADO → LIBRE).

    Cancelar un alquiler ya cancelado no cambia nada y devuelve la fila tal cual.
    Un alquiler COMPLETADO no puede cancelarse.
    """
    with transaction.atomic():
        alquiler = _obtener_alquiler_bloqueado(alquiler_id)

        if alquiler.estado == EstadoAlquiler.CANCELADO:
            logger.info("[alquileres.cancelar][ya_cancelado] alquiler_id=%s", alquiler_id)
            return alquiler
        if alquiler.estado == EstadoAlquiler.COMPLETADO:
            raise ConflictError("Un alquiler completado no puede cancelarse")

        alquiler.estado = EstadoAlquiler.CANCELADO
        alquiler.motivo_cancelacion = motivo or None
        alquiler.fecha_cancelacion = timezone.now()
        alquiler.save(update_fields=["estado", "motivo_cancelacion", "fecha_cancelacion"])

        liberados = (
            TurnoCancha.objects
            .filter(pk=alquiler.turno_id, estado=EstadoTurno.ALQUILADO)
            .update(estado=EstadoTurno.LIBRE)
        )

    if not liberados:
        logger.warning(
            "[alquileres.cancelar][turno_no_alquilado] alquiler_id=%s turno_id=%s",
            alquiler_id, alquiler.turno_id,
        )
    logger.info(
        "[alquileres.cancelar][ok] alquiler_id=%s turno_id=%s motivo=%s liberados=%s",
        alquiler_id, alquiler.turno_id, motivo, liberados,
    )
    return alquiler


def actualizar_estado_alquiler(alquiler_id, estado, motivo=None):
    """
    Cambia el estado de un alquiler.
      - CANCELADO → delega en cancelar_alquiler (libera el turno).
      - COMPLETADO → sólo desde RESERVADO; el turno queda ALQUILADO.
      - RESERVADO → sólo si ya lo estaba (no se reabren alquileres cerrados).
    """
    if estado == EstadoAlquiler.CANCELADO:
        return cancelar_alquiler(alquiler_id, motivo)

    with transaction.atomic():
        alquiler = _obtener_alquiler_bloqueado(alquiler_id)
        if alquiler.estado == estado:
            return alquiler
        if alquiler.estado != EstadoAlquiler.RESERVADO or estado != EstadoAlquiler.COMPLETADO:
            raise ConflictError(
                f"No se puede pasar un alquiler de {alquiler.estado} a {estado}"
            )
        alquiler.estado = EstadoAlquiler.COMPLETADO
        alquiler.save(update_fields=["estado"])

    logger.info("[alquileres.estado][ok] alquiler_id=%s estado=%s", alquiler_id, estado)
    return alquiler
