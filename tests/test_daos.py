import sqlite3
from datetime import date

import pytest

from gestorapps.daos import AplicacionDAO, AplicacionUsuarioDAO, DatabaseError, UsuarioDAO
from gestorapps.entities import (
    Aplicacion,
    AplicacionUsuario,
    EstadoInstalacion,
    EstadoLicencia,
    Usuario,
)

SCHEMA = """
CREATE TABLE aplicaciones (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    nombre TEXT UNIQUE NOT NULL,
    descripcion TEXT NOT NULL,
    icono TEXT NOT NULL);
CREATE TABLE usuarios (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    nombre TEXT UNIQUE NOT NULL,
    contrasena TEXT NOT NULL);
CREATE TABLE aplicacion_usuario (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    usuario_id INTEGER NOT NULL,
    aplicacion_id INTEGER NOT NULL,
    estado_instalacion TEXT NOT NULL,
    favorito BOOLEAN NOT NULL,
    estado_licencia TEXT NOT NULL,
    fecha_licencia DATE,
    FOREIGN KEY(usuario_id) REFERENCES usuarios(id),
    FOREIGN KEY(aplicacion_id) REFERENCES aplicaciones(id));
"""

EDITOR = Aplicacion(1, "Editor de Texto", "Escribe y edita documentos de texto", ":/editor.png")
CALC = Aplicacion(2, "Calculadora Científica", "Realiza cálculos matemáticos avanzados", ":/calc.png")


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.executescript(SCHEMA)
    yield connection
    connection.close()


@pytest.fixture
def apps(conn):
    dao = AplicacionDAO(conn)
    dao.guardar(EDITOR)
    dao.guardar(CALC)
    return dao


def test_aplicacion_round_trip(apps):
    assert apps.obtener_por_id(EDITOR.id) == EDITOR
    assert apps.obtener_todas() == [EDITOR, CALC]


def test_aplicacion_missing_is_none(apps):
    assert apps.obtener_por_id(99) is None


def test_aplicacion_duplicate_name_raises(apps):
    with pytest.raises(DatabaseError):
        apps.guardar(Aplicacion(3, EDITOR.nombre, "otra", ":/x.png"))


def test_aplicacion_update_and_delete(apps):
    cambiada = Aplicacion(CALC.id, "Calculadora", "Cuentas", ":/c.png")
    apps.actualizar(cambiada)
    assert apps.obtener_por_id(CALC.id) == cambiada
    apps.eliminar(EDITOR.id)
    assert apps.obtener_todas() == [cambiada]


def test_missing_table_raises_database_error():
    connection = sqlite3.connect(":memory:")
    with pytest.raises(DatabaseError):
        AplicacionDAO(connection).obtener_todas()


def test_closed_connection_raises_database_error(conn):
    dao = UsuarioDAO(conn)
    conn.close()
    with pytest.raises(DatabaseError):
        dao.obtener_todos()


def test_usuario_guardar_links_every_application(conn, apps):
    usuarios = UsuarioDAO(conn)
    nuevo_id = usuarios.guardar(Usuario("ana_lopez", "password"))
    guardado = usuarios.obtener_por_id(nuevo_id)
    assert guardado == Usuario("ana_lopez", "password", nuevo_id)

    relaciones = AplicacionUsuarioDAO(conn).obtener_por_usuario(nuevo_id)
    assert sorted(r.aplicacion_id for r in relaciones) == [EDITOR.id, CALC.id]
    for rel in relaciones:
        assert rel.usuario_id == nuevo_id
        assert rel.estado_instalacion is EstadoInstalacion.NO_INSTALADO
        assert rel.estado_licencia is EstadoLicencia.EXPIRADA
        assert rel.favorito is False
        assert rel.fecha_licencia is None


def test_usuario_duplicate_name_raises(conn):
    usuarios = UsuarioDAO(conn)
    usuarios.guardar(Usuario("ana_lopez", "password"))
    with pytest.raises(DatabaseError):
        usuarios.guardar(Usuario("ana_lopez", "secret"))
    assert len(usuarios.obtener_todos()) == 1


def test_usuario_lookup_by_name(conn):
    usuarios = UsuarioDAO(conn)
    nuevo_id = usuarios.guardar(Usuario("ana_lopez", "password"))
    assert usuarios.obtener_por_nombre("ana_lopez").id == nuevo_id
    assert usuarios.obtener_por_nombre("nadie") is None
    assert usuarios.obtener_por_id(nuevo_id + 100) is None


def test_usuario_verificar_credenciales(conn):
    usuarios = UsuarioDAO(conn)
    usuarios.guardar(Usuario("ana_lopez", "password"))
    assert usuarios.verificar_credenciales("ana_lopez", "password") is True
    assert usuarios.verificar_credenciales("ana_lopez", "secret") is False
    assert usuarios.verificar_credenciales("otro", "password") is False


def test_usuario_update_and_delete(conn):
    usuarios = UsuarioDAO(conn)
    primero = usuarios.guardar(Usuario("ana_lopez", "password"))
    segundo = usuarios.guardar(Usuario("luis_perez", "password"))
    assert [u.nombre for u in usuarios.obtener_todos()] == ["ana_lopez", "luis_perez"]

    usuarios.actualizar(Usuario("ana_garcia", "secret", primero))
    assert usuarios.verificar_credenciales("ana_garcia", "secret") is True

    usuarios.eliminar(segundo)
    assert [u.id for u in usuarios.obtener_todos()] == [primero]


def test_relacion_round_trip_with_date(conn, apps):
    relaciones = AplicacionUsuarioDAO(conn)
    rel = AplicacionUsuario(
        7, EDITOR.id, EstadoInstalacion.INSTALADO, True, EstadoLicencia.ACTIVA, date(2024, 3, 9)
    )
    relaciones.guardar(rel)
    assert relaciones.obtener(7, EDITOR.id) == rel
    stored = conn.execute("SELECT fecha_licencia FROM aplicacion_usuario").fetchone()[0]
    assert stored == "2024-03-09"


def test_relacion_missing_is_none(conn):
    assert AplicacionUsuarioDAO(conn).obtener(1, 1) is None


def test_relacion_update(conn, apps):
    relaciones = AplicacionUsuarioDAO(conn)
    relaciones.guardar(AplicacionUsuario(7, CALC.id))
    cambiada = AplicacionUsuario(
        7, CALC.id, EstadoInstalacion.INSTALADO, True,
        EstadoLicencia.PROXIMA_A_CADUCAR, date(2023, 12, 31),
    )
    relaciones.actualizar(cambiada)
    assert relaciones.obtener(7, CALC.id) == cambiada


def test_relacion_without_date_reads_back_none(conn, apps):
    relaciones = AplicacionUsuarioDAO(conn)
    relaciones.guardar(AplicacionUsuario(7, CALC.id))
    assert relaciones.obtener(7, CALC.id).fecha_licencia is None


def test_relaciones_filtered_by_user_and_deleted(conn, apps):
    relaciones = AplicacionUsuarioDAO(conn)
    relaciones.guardar(AplicacionUsuario(1, EDITOR.id))
    relaciones.guardar(AplicacionUsuario(1, CALC.id))
    relaciones.guardar(AplicacionUsuario(2, CALC.id))
    assert [r.aplicacion_id for r in relaciones.obtener_por_usuario(1)] == [EDITOR.id, CALC.id]

    relaciones.eliminar(1, EDITOR.id)
    assert [r.aplicacion_id for r in relaciones.obtener_por_usuario(1)] == [CALC.id]
    assert [r.usuario_id for r in relaciones.obtener_por_usuario(2)] == [2]


def test_relacion_with_unknown_state_raises(conn):
    conn.execute(
        "INSERT INTO aplicacion_usuario (usuario_id, aplicacion_id, estado_instalacion, "
        "favorito, estado_licencia, fecha_licencia) VALUES (1, 1, 9, 0, 0, NULL)"
    )
    with pytest.raises(DatabaseError):
        AplicacionUsuarioDAO(conn).obtener(1, 1)