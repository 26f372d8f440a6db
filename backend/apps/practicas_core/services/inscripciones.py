# apps/practicas_core/services/inscripciones.py
# ------------------------------------------------------------------------------
# Inscripción de socios a prácticas deportivas.
# - Cupo = capacidad_max de la cancha de la práctica.
# - Socios con plan FAMILIAR pagan precio * (1 - descuento de su familia).
# ------------------------------------------------------------------------------
import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction

from apps.common.choices import TipoPlan
from apps.common.exceptions import ConflictError, NotFoundError
from apps.cuentas_core.models import Socio
from apps.practicas_core.models import InscripcionDeportiva, PracticaDeportiva

logger = logging.getLogger(__name__)


def precio_para_socio(practica, socio) -> Decimal:
    precio = practica.precio
    if socio.tipo_plan == TipoPlan.FAMILIAR and socio.familia_id:
        precio = precio * (Decimal("1") - socio.familia.descuento)
    return precio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def inscribir_socio(practica_id, socio_id):
    socio = Socio.objects.select_related("familia", "usuario").filter(pk=socio_id).first()
    if socio is None:
        raise NotFoundError(f"El socio con id {socio_id} no existe")

    with transaction.atomic():
        practica = (
            PracticaDeportiva.objects
            .select_for_update()
            .select_related("cancha")
            .filter(pk=practica_id)
            .first()
        )
        if practica is None:
            raise NotFoundError("Práctica no encontrada")

        if InscripcionDeportiva.objects.filter(practica=practica, socio=socio).exists():
            raise ConflictError("El socio ya está inscripto en esta práctica")

        inscriptos = InscripcionDeportiva.objects.filter(practica=practica).count()
        if inscriptos >= practica.cancha.capacidad_max:
            logger.info(
                "[inscripciones.crear][sin_cupo] practica_id=%s inscriptos=%s capacidad=%s",
                practica.id, inscriptos, practica.cancha.capacidad_max,
            )
            raise ConflictError("La práctica no tiene cupo disponible")

        try:
            inscripcion = InscripcionDeportiva.objects.create(
                socio=socio,
                practica=practica,
                precio_pagado=precio_para_socio(practica, socio),
            )
        except IntegrityError:
            raise ConflictError("El socio ya está inscripto en esta práctica")

    logger.info(
        "[inscripciones.crear][ok] practica_id=%s socio_id=%s precio_pagado=%s",
        practica.id, socio.id, inscripcion.precio_pagado,
    )
    return inscripcion


def desinscribir_socio(practica_id, socio_id):
    borrados, _ = InscripcionDeportiva.objects.filter(practica_id=practica_id, socio_id=socio_id).delete()
    if not borrados:
        raise NotFoundError("El socio no está inscripto en esta práctica")
    logger.info("[inscripciones.eliminar][ok] practica_id=%s socio_id=%s", practica_id, socio_id)
