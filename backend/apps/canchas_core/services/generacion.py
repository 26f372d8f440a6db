# apps/canchas_core/services/generacion.py
# ------------------------------------------------------------------------------
# Generación de turnos de media hora a partir de los horarios semanales de
# cada cancha, para un rango de fechas [desde, hasta] inclusive.
# - Sólo horarios con disponible=True y día coincidente con la fecha.
# - Cada candidato se resuelve contra las prácticas de la cancha antes de
#   insertarse (LIBRE o PRACTICA_DEPORTIVA con su práctica titular).
# - Idempotencia:
#     a) cada cancha se procesa con su fila bloqueada (select_for_update):
#        dos generaciones sobre la misma cancha, o una generación y un alta
#        de práctica, no se intercalan
#     b) pre-filtra las claves (cancha, fecha, hora_inicio) que ya existen;
#        con el lock tomado, `insertados` es exacto
#     c) bulk_create(ignore_conflicts=True) igual, por la unicidad de la tabla
# ------------------------------------------------------------------------------
import logging

from django.conf import settings
from django.db import transaction
from django.db.models import Prefetch

from apps.canchas_core.models import Cancha, TurnoCancha
from apps.canchas_core.services.ocupacion import estado_para, resolver_ocupacion
from apps.common.choices import dia_de_fecha
from apps.common.exceptions import ValidationError
from apps.common.tiempo import desde_minutos, pasos_de_franja, rango_fechas
from apps.practicas_core.models import PracticaDeportiva

logger = logging.getLogger(__name__)


def _duracion_turno():
    return getattr(settings, "CLUB_DURACION_TURNO_MINUTOS", 30)


def canchas_con_horarios_y_practicas(cancha_ids=None):
    qs = (
        Cancha.objects
        .filter(activa=True)
        .prefetch_related(
            "horarios",
            Prefetch(
                "practicas",
                queryset=PracticaDeportiva.objects.order_by("id").prefetch_related("horarios"),
            ),
        )
        .order_by("id")
    )
    if cancha_ids:
        qs = qs.filter(id__in=cancha_ids)
    return list(qs)


def candidatos_para_cancha(cancha, fecha_inicio, fecha_fin):
    """
    Expande los horarios semanales de `cancha` en turnos (sin persistir).
    Si dos horarios del mismo día se pisan, el turno repetido se emite una sola vez.
    """
    duracion = _duracion_turno()
    horarios = [h for h in cancha.horarios.all() if h.disponible]
    practicas = list(cancha.practicas.all())

    candidatos = []
    vistos = set()
    for fecha in rango_fechas(fecha_inicio, fecha_fin):
        dia = dia_de_fecha(fecha)
        horarios_dia = [h for h in horarios if h.dia_semana == dia]
        if not horarios_dia:
            continue

        for horario in horarios_dia:
            for minuto in pasos_de_franja(horario.hora_inicio, horario.hora_fin, duracion):
                hora_inicio = desde_minutos(minuto)
                if (fecha, hora_inicio) in vistos:
                    continue
                vistos.add((fecha, hora_inicio))

                practica = resolver_ocupacion(practicas, fecha, minuto)
                candidatos.append(
                    TurnoCancha(
                        cancha=cancha,
                        fecha=fecha,
                        hora_inicio=hora_inicio,
                        hora_fin=desde_minutos(minuto + duracion),
                        estado=estado_para(practica),
                        practica=practica,
                    )
                )
    return candidatos


def _bloquear_y_recargar(cancha):
    # Horarios y prácticas se releen con el lock tomado
    list(Cancha.objects.select_for_update().filter(pk=cancha.id))
    recargadas = canchas_con_horarios_y_practicas([cancha.id])
    return recargadas[0] if recargadas else None


def _insertar_nuevos(cancha, candidatos, fecha_inicio, fecha_fin):
    existentes = set(
        TurnoCancha.objects
        .filter(cancha=cancha, fecha__range=(fecha_inicio, fecha_fin))
        .values_list("fecha", "hora_inicio")
    )
    nuevos = [t for t in candidatos if (t.fecha, t.hora_inicio) not in existentes]
    if nuevos:
        TurnoCancha.objects.bulk_create(nuevos, ignore_conflicts=True, batch_size=500)
    return len(nuevos), len(candidatos) - len(nuevos)


def generar_turnos(fecha_inicio, fecha_fin, *, cancha_ids=None):
    """
    Genera los turnos de todas las canchas activas en [fecha_inicio, fecha_fin].

    Retorna:
      - insertados: filas realmente nuevas en esta invocación.
      - repetido: True si había candidatos pero todos existían (ya generado).
      - canchas_procesadas: canchas que aportaron al menos un candidato.
      - candidatos: total de turnos que el rango produce.
      - mensaje: texto para mostrar al usuario.
    """
    if fecha_inicio is None or fecha_fin is None:
        raise ValidationError("Debe seleccionar fecha de inicio y fin")
    if fecha_fin < fecha_inicio:
        raise ValidationError("La fecha fin debe ser posterior o igual a la fecha inicio")

    canchas = canchas_con_horarios_y_practicas(cancha_ids)
    if not canchas:
        logger.info("[turnos.generar][skip] sin canchas configuradas rango=[%s..%s]", fecha_inicio, fecha_fin)
        return {
            "insertados": 0,
            "repetido": False,
            "canchas_procesadas": 0,
            "candidatos": 0,
            "mensaje": "No hay canchas configuradas. No se generaron turnos.",
        }

    total_insertados = 0
    total_candidatos = 0
    canchas_procesadas = 0

    for cancha in canchas:
        with transaction.atomic():
            cancha = _bloquear_y_recargar(cancha)
            if cancha is None:
                continue
            candidatos = candidatos_para_cancha(cancha, fecha_inicio, fecha_fin)
            if not candidatos:
                logger.debug(
                    "[turnos.generar][cancha] sin horarios en rango cancha_id=%s rango=[%s..%s]",
                    cancha.id, fecha_inicio, fecha_fin,
                )
                continue
            insertados, ya_existian = _insertar_nuevos(cancha, candidatos, fecha_inicio, fecha_fin)

        canchas_procesadas += 1
        total_candidatos += len(candidatos)
        total_insertados += insertados
        logger.info(
            "[turnos.generar][cancha] cancha_id=%s nombre=%s intentados=%s ya_existian=%s creados=%s rango=[%s..%s]",
            cancha.id, cancha.nombre, len(candidatos), ya_existian, insertados, fecha_inicio, fecha_fin,
        )

    if total_candidatos == 0:
        mensaje = "No se generaron turnos nuevos. Verifica horarios disponibles."
        repetido = False
    elif total_insertados == 0:
        mensaje = "Los turnos ya estaban generados en este período."
        repetido = True
    else:
        mensaje = "Turnos generados correctamente."
        repetido = False

    logger.info(
        "[turnos.generar][done] canchas=%s procesadas=%s candidatos=%s insertados=%s repetido=%s",
        len(canchas), canchas_procesadas, total_candidatos, total_insertados, repetido,
    )
    return {
        "insertados": total_insertados,
        "repetido": repetido,
        "canchas_procesadas": canchas_procesadas,
        "candidatos": total_candidatos,
        "mensaje": mensaje,
    }
