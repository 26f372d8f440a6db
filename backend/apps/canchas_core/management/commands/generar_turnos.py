# canchas_core/management/commands/generar_turnos.py
# ------------------------------------------------------------------------------
# Genera los turnos de todas las canchas activas para [--desde, --hasta].
# Sin argumentos: desde hoy hasta el último día del mes siguiente.
#
# Idempotente: volver a correrlo sobre el mismo rango no inserta nada
# (ver canchas_core.services.generacion).
# ------------------------------------------------------------------------------
import logging
from calendar import monthrange
from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.canchas_core.services.generacion import generar_turnos
from apps.common.exceptions import DomainError
from apps.common.tiempo import parse_fecha

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Genera turnos de media hora a partir de los horarios semanales de cada cancha."

    def add_arguments(self, parser):
        parser.add_argument("--desde", help="Fecha inicial YYYY-MM-DD (default: hoy)")
        parser.add_argument("--hasta", help="Fecha final YYYY-MM-DD (default: fin del mes siguiente)")
        parser.add_argument("--cancha", type=int, action="append", dest="canchas",
                            help="Limitar a una cancha (repetible)")

    def handle(self, *args, **options):
        try:
            desde = parse_fecha(options["desde"]) if options.get("desde") else timezone.localdate()
            hasta = parse_fecha(options["hasta"]) if options.get("hasta") else _fin_mes_siguiente(desde)
            resultado = generar_turnos(desde, hasta, cancha_ids=options.get("canchas"))
        except DomainError as exc:
            raise CommandError(exc.mensaje)

        logger.info("[CRON] generar_turnos rango=[%s..%s] resultado=%s", desde, hasta, resultado)
        self.stdout.write(
            f"{resultado['mensaje']} insertados={resultado['insertados']} "
            f"canchas={resultado['canchas_procesadas']}"
        )
        return None


def _fin_mes_siguiente(fecha: date) -> date:
    anio, mes = (fecha.year + 1, 1) if fecha.month == 12 else (fecha.year, fecha.month + 1)
    return date(anio, mes, monthrange(anio, mes)[1])
