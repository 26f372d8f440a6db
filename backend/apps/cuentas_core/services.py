# apps/cuentas_core/services.py
# ------------------------------------------------------------------------------
# Altas/bajas de cuentas que tocan más de una tabla:
# - Entrenador: alta con usuario, baja desasociando prácticas.
# - Familia: alta con titular + miembros (plan FAMILIAR), baja volviendo a INDIVIDUAL.
# ------------------------------------------------------------------------------
import logging

from django.db import transaction
from django.db.models import Q

from apps.common.choices import Rol, TipoPlan
from apps.common.exceptions import ConflictError, NotFoundError, ValidationError
from apps.cuentas_core.models import Entrenador, Familia, Socio, Usuario

logger = logging.getLogger(__name__)


def _validar_unicidad_usuario(dni, email, excluir_id=None):
    qs = Usuario.objects.filter(Q(dni=dni) | Q(email__iexact=email))
    if excluir_id:
        qs = qs.exclude(pk=excluir_id)
    if qs.exists():
        raise ConflictError("El DNI o el email ya están registrados")


def crear_usuario(*, nombre, apellido, dni, email, password, rol, telefono=""):
    _validar_unicidad_usuario(dni, email)
    with transaction.atomic():
        usuario = Usuario.objects.create_user(
            email=email,
            password=password,
            nombre=nombre,
            apellido=apellido,
            dni=dni,
            telefono=telefono or "",
            rol=rol,
        )
        if rol == Rol.SOCIO:
            Socio.objects.create(usuario=usuario)
        elif rol == Rol.ENTRENADOR:
            Entrenador.objects.create(usuario=usuario)
    logger.info("[cuentas.usuario.crear][ok] usuario_id=%s rol=%s", usuario.id, rol)
    return usuario


def crear_entrenador(*, nombre, apellido, dni, email, password, telefono="", actividad=None):
    usuario = crear_usuario(
        nombre=nombre, apellido=apellido, dni=dni, email=email,
        password=password, rol=Rol.ENTRENADOR, telefono=telefono,
    )
    entrenador = usuario.entrenador
    if actividad:
        entrenador.actividad = actividad
        entrenador.save(update_fields=["actividad"])
    return entrenador


def obtener_entrenador_por_dni(dni):
    entrenador = Entrenador.objects.select_related("usuario").filter(usuario__dni=dni).first()
    if entrenador is None:
        raise NotFoundError("Entrenador no encontrado")
    return entrenador


def actualizar_entrenador(dni, datos):
    entrenador = obtener_entrenador_por_dni(dni)
    usuario = entrenador.usuario

    email = datos.get("email")
    if email and email.lower() != usuario.email.lower():
        _validar_unicidad_usuario(usuario.dni, email, excluir_id=usuario.id)

    with transaction.atomic():
        for campo in ("nombre", "apellido", "email", "telefono"):
            if datos.get(campo) is not None:
                setattr(usuario, campo, datos[campo])
        if datos.get("password"):
            usuario.set_password(datos["password"])
        usuario.save()

        if "actividad" in datos:
            entrenador.actividad = datos["actividad"]
            entrenador.save(update_fields=["actividad"])

    logger.info("[cuentas.entrenador.actualizar][ok] entrenador_id=%s", entrenador.id)
    return entrenador


def eliminar_entrenador(dni):
    entrenador = obtener_entrenador_por_dni(dni)
    with transaction.atomic():
        practicas = list(entrenador.practicas.values_list("id", flat=True))
        entrenador.practicas.clear()
        usuario = entrenador.usuario
        entrenador.delete()
        usuario.delete()
    logger.info(
        "[cuentas.entrenador.eliminar][ok] dni=%s practicas_desasociadas=%s", dni, len(practicas)
    )
    return {"practicas_desasociadas": practicas}


def crear_familia(*, apellido, titular_dni, miembros_dni=None):
    miembros_dni = [d for d in (miembros_dni or []) if d and d != titular_dni]

    titular = Socio.objects.select_related("usuario").filter(usuario__dni=titular_dni).first()
    if titular is None:
        raise NotFoundError("El titular no existe en el sistema.")

    miembros = list(Socio.objects.filter(usuario__dni__in=miembros_dni))
    if len(miembros) != len(set(miembros_dni)):
        raise ValidationError("Uno o más DNI de miembros no existen.")

    ya_en_familia = [s for s in [titular, *miembros] if s.familia_id is not None]
    if ya_en_familia:
        raise ConflictError(
            "Uno o más socios ya pertenecen a un plan familiar.",
            socios=[s.usuario.dni for s in ya_en_familia],
        )

    with transaction.atomic():
        familia = Familia.objects.create(apellido=apellido, titular_dni=titular_dni)
        actualizados = (
            Socio.objects
            .filter(pk__in=[titular.pk, *[m.pk for m in miembros]])
            .update(familia=familia, tipo_plan=TipoPlan.FAMILIAR)
        )

    logger.info(
        "[cuentas.familia.crear][ok] familia_id=%s titular=%s socios_actualizados=%s",
        familia.id, titular_dni, actualizados,
    )
    return familia


def eliminar_familia(familia_id):
    familia = Familia.objects.filter(pk=familia_id).first()
    if familia is None:
        raise NotFoundError("Familia no encontrada")
    with transaction.atomic():
        liberados = (
            Socio.objects
            .filter(familia=familia)
            .update(familia=None, tipo_plan=TipoPlan.INDIVIDUAL)
        )
        familia.delete()
    logger.info("[cuentas.familia.eliminar][ok] familia_id=%s socios_liberados=%s", familia_id, liberados)
    return liberados
