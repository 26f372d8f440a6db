#backend/tests/test_cuentas.py
from datetime import date
from decimal import Decimal

import pytest

from apps.common.choices import Rol, TipoDeporte, TipoPlan
from apps.common.exceptions import ConflictError, NotFoundError, ValidationError
from apps.cuentas_core import services
from apps.cuentas_core.models import Entrenador, Familia, Socio, Usuario
from apps.practicas_core.services.practicas import crear_practica


def _alta_usuario(**extra):
    datos = {
        "nombre": "Lucía",
        "apellido": "Gómez",
        "dni": "40000000",
        "email": "lucia@club.com",
        "password": "secreta123",
        "rol": Rol.SOCIO,
    }
    datos.update(extra)
    return datos


# ------------------------------------------------------------------------------
# Usuarios
# ------------------------------------------------------------------------------

def test_alta_de_socio_crea_perfil(api_admin):
    res = api_admin.post("/api/cuentas/usuarios/", _alta_usuario(), format="json")

    assert res.status_code == 201, res.data
    usuario = Usuario.objects.get(dni="40000000")
    assert usuario.check_password("secreta123")
    assert Socio.objects.filter(usuario=usuario, tipo_plan=TipoPlan.INDIVIDUAL).exists()
    assert "password" not in res.data


def test_alta_con_dni_repetido(api_admin, socio):
    res = api_admin.post("/api/cuentas/usuarios/", _alta_usuario(dni=socio.usuario.dni), format="json")

    assert res.status_code == 409


def test_listar_usuarios_por_rol(api_admin, socio, entrenador):
    res = api_admin.get("/api/cuentas/usuarios/", {"rol": "ENTRENADOR"})

    assert res.status_code == 200
    assert [u["dni"] for u in res.data] == [entrenador.usuario.dni]


def test_listar_usuarios_rol_invalido(api_admin):
    res = api_admin.get("/api/cuentas/usuarios/", {"rol": "JARDINERO"})

    assert res.status_code == 400
    assert res.data["error"] == "Rol inválido"


def test_socio_no_lista_usuarios(api_socio):
    assert api_socio.get("/api/cuentas/usuarios/").status_code == 403


def test_mi_perfil(api_socio, socio):
    res = api_socio.get("/api/cuentas/yo/")

    assert res.data["dni"] == socio.usuario.dni
    assert res.data["rol"] == Rol.SOCIO


# ------------------------------------------------------------------------------
# Entrenadores
# ------------------------------------------------------------------------------

def test_entrenador_por_dni(api_admin, entrenador):
    res = api_admin.get(f"/api/cuentas/entrenadores/{entrenador.usuario.dni}/")

    assert res.status_code == 200
    assert res.data["actividad"] == TipoDeporte.FUTBOL


def test_entrenador_inexistente(api_admin):
    assert api_admin.get("/api/cuentas/entrenadores/123/").status_code == 404


def test_modificar_entrenador(api_admin, entrenador):
    res = api_admin.patch(
        f"/api/cuentas/entrenadores/{entrenador.usuario.dni}/",
        {"telefono": "1155554444", "actividad": "BASQUET"},
        format="json",
    )

    assert res.status_code == 200, res.data
    entrenador.refresh_from_db()
    entrenador.usuario.refresh_from_db()
    assert entrenador.actividad == TipoDeporte.BASQUET
    assert entrenador.usuario.telefono == "1155554444"


def test_eliminar_entrenador_lo_desasocia_de_practicas(api_admin, cancha, entrenador):
    practica = crear_practica(
        deporte=TipoDeporte.FUTBOL, cancha_id=cancha.id,
        fecha_inicio=date(2025, 1, 1), fecha_fin=date(2025, 1, 31), precio="100",
        entrenador_ids=[entrenador.id],
        horarios=[{"dia": "LUNES", "hora_inicio": "08:00", "hora_fin": "09:00"}],
    )
    dni = entrenador.usuario.dni

    res = api_admin.delete(f"/api/cuentas/entrenadores/{dni}/")

    assert res.status_code == 200
    assert res.data["practicas_desasociadas"] == [practica.id]
    assert not Entrenador.objects.exists()
    assert not Usuario.objects.filter(dni=dni).exists()
    assert practica.entrenadores.count() == 0


def test_socio_lee_pero_no_crea_entrenadores(api_socio, entrenador):
    assert api_socio.get("/api/cuentas/entrenadores/").status_code == 200
    res = api_socio.post(
        "/api/cuentas/entrenadores/",
        _alta_usuario(dni="50000000", email="x@club.com"),
        format="json",
    )
    assert res.status_code == 403


# ------------------------------------------------------------------------------
# Familias
# ------------------------------------------------------------------------------

def test_crear_familia(socio, crear_socio):
    hijo = crear_socio(dni="20000003")

    familia = services.crear_familia(
        apellido="Socia", titular_dni=socio.usuario.dni, miembros_dni=[hijo.usuario.dni],
    )

    assert set(familia.miembros.values_list("id", flat=True)) == {socio.id, hijo.id}
    assert set(Socio.objects.values_list("tipo_plan", flat=True)) == {TipoPlan.FAMILIAR}


def test_familia_con_titular_inexistente(db):
    with pytest.raises(NotFoundError):
        services.crear_familia(apellido="Nadie", titular_dni="999")


def test_familia_con_miembro_inexistente(socio):
    with pytest.raises(ValidationError):
        services.crear_familia(apellido="Socia", titular_dni=socio.usuario.dni, miembros_dni=["999"])
    assert not Familia.objects.exists()


def test_socio_en_dos_familias(socio, crear_socio):
    services.crear_familia(apellido="Socia", titular_dni=socio.usuario.dni)
    otro = crear_socio(dni="20000004")

    with pytest.raises(ConflictError):
        services.crear_familia(apellido="Otra", titular_dni=otro.usuario.dni, miembros_dni=[socio.usuario.dni])


def test_familia_por_api(api_admin, socio):
    res = api_admin.post(
        "/api/cuentas/familias/", {"apellido": "Socia", "titular_dni": socio.usuario.dni}, format="json",
    )
    assert res.status_code == 201, res.data
    familia_id = res.data["familia"]["id"]

    cambio = api_admin.patch(f"/api/cuentas/familias/{familia_id}/", {"descuento": "0.15"}, format="json")
    assert cambio.status_code == 200
    assert Familia.objects.get(pk=familia_id).descuento == Decimal("0.15")

    fuera_de_rango = api_admin.patch(f"/api/cuentas/familias/{familia_id}/", {"descuento": "1.50"}, format="json")
    assert fuera_de_rango.status_code == 400

    baja = api_admin.delete(f"/api/cuentas/familias/{familia_id}/")
    assert baja.status_code == 200
    assert baja.data["socios_liberados"] == 1
    socio.refresh_from_db()
    assert socio.tipo_plan == TipoPlan.INDIVIDUAL
    assert socio.familia_id is None


def test_perfil_de_socio(api_socio, socio, crear_socio):
    assert api_socio.get(f"/api/cuentas/socios/{socio.usuario.dni}/").status_code == 200

    otro = crear_socio(dni="20000008")
    assert api_socio.get(f"/api/cuentas/socios/{otro.usuario.dni}/").status_code == 404
