# apps/canchas_core/services/canchas.py
# ------------------------------------------------------------------------------
# Alta / modificación / baja de canchas con sus horarios semanales.
# - Los horarios se reemplazan completos en cada modificación (delete + insert).
# - La baja es física y se bloquea si hay prácticas deportivas asignadas.
# ------------------------------------------------------------------------------
import logging

from django.db import transaction

from apps.canchas_core.models import Cancha, HorarioCancha, TurnoCancha
from apps.common.exceptions import ConflictError, NotFoundError, ValidationError
from apps.common.tiempo import rangos_solapan

logger = logging.getLogger(__name__)

CAMPOS_CANCHA = ("nombre", "deportes", "interior", "capacidad_max", "precio_hora", "activa")


def _filas_horario(cancha, horarios):
    """
    `horarios` llega ya normalizado por el serializer:
      [{"dias": [DiaSemana, ...], "hora_inicio": time, "hora_fin": time, "disponible": bool}]
    Se expande a una fila HorarioCancha por día. Dos franjas del mismo día no
    pueden solaparse: el expansor generaría turnos cruzados con distinta hora
    de inicio para el mismo tiempo de cancha.
    """
    filas = []
    for h in horarios:
        if h["hora_inicio"] >= h["hora_fin"]:
            raise ValidationError(
                f"El horario {h['hora_inicio']:%H:%M}-{h['hora_fin']:%H:%M} es inválido: "
                "la hora de inicio debe ser anterior a la de fin"
            )
        for dia in h["dias"]:
            filas.append(
                HorarioCancha(
                    cancha=cancha,
                    dia_semana=dia,
                    hora_inicio=h["hora_inicio"],
                    hora_fin=h["hora_fin"],
                    disponible=h.get("disponible", True),
                )
            )
    _validar_solapamiento_horarios(filas)
    return filas


def _validar_solapamiento_horarios(filas):
    por_dia = {}
    for fila in filas:
        por_dia.setdefault(fila.dia_semana, []).append(fila)

    for dia, del_dia in por_dia.items():
        del_dia.sort(key=lambda f: (f.hora_inicio, f.hora_fin))
        for previa, actual in zip(del_dia, del_dia[1:]):
            if rangos_solapan(previa.hora_inicio, previa.hora_fin, actual.hora_inicio, actual.hora_fin):
                logger.info(
                    "[canchas.horarios][solapados] dia=%s a=%s-%s b=%s-%s",
                    dia, previa.hora_inicio, previa.hora_fin, actual.hora_inicio, actual.hora_fin,
                )
                raise ValidationError(
                    f"Los horarios del {dia} se solapan: "
                    f"{previa.hora_inicio:%H:%M}-{previa.hora_fin:%H:%M} y "
                    f"{actual.hora_inicio:%H:%M}-{actual.hora_fin:%H:%M}"
                )


def obtener_cancha(cancha_id):
    cancha = Cancha.objects.prefetch_related("horarios").filter(pk=cancha_id).first()
    if cancha is None:
        raise NotFoundError("Cancha no encontrada")
    return cancha


def crear_cancha(datos):
    horarios = datos.get("horarios") or []
    if not horarios:
        raise ValidationError("Debe agregar al menos un horario válido")

    with transaction.atomic():
        cancha = Cancha.objects.create(**{k: datos[k] for k in CAMPOS_CANCHA if k in datos})
        filas = _filas_horario(cancha, horarios)
        HorarioCancha.objects.bulk_create(filas)

    logger.info("[canchas.crear][ok] cancha_id=%s nombre=%s horarios=%s", cancha.id, cancha.nombre, len(filas))
    return obtener_cancha(cancha.id)


def actualizar_cancha(cancha_id, datos):
    cancha = obtener_cancha(cancha_id)

    with transaction.atomic():
        cambios = [k for k in CAMPOS_CANCHA if k in datos]
        for campo in cambios:
            setattr(cancha, campo, datos[campo])
        if cambios:
            cancha.save(update_fields=[*cambios, "actualizado_en"])

        horarios = datos.get("horarios")
        if horarios is not None:
            filas = _filas_horario(cancha, horarios)
            borrados, _ = HorarioCancha.objects.filter(cancha=cancha).delete()
            HorarioCancha.objects.bulk_create(filas)
            logger.info(
                "[canchas.actualizar][horarios] cancha_id=%s borrados=%s nuevos=%s",
                cancha.id, borrados, len(filas),
            )

    logger.info("[canchas.actualizar][ok] cancha_id=%s campos=%s", cancha.id, cambios)
    return obtener_cancha(cancha.id)


def eliminar_cancha(cancha_id):
    cancha = obtener_cancha(cancha_id)

    if cancha.practicas.exists():
        raise ConflictError(
            "No se puede eliminar una cancha con prácticas deportivas asignadas. "
            "Reasigne las prácticas antes de eliminarla.",
            code="PRACTICAS_ASIGNADAS",
        )

    with transaction.atomic():
        HorarioCancha.objects.filter(cancha=cancha).delete()
        _, detalle = TurnoCancha.objects.filter(cancha=cancha).delete()
        turnos = detalle.get("canchas_core.TurnoCancha", 0)
        cancha.delete()

    logger.info("[canchas.eliminar][ok] cancha_id=%s turnos_eliminados=%s", cancha_id, turnos)
