"""Data access objects over an SQLite connection."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

from .entities import (
    Aplicacion,
    AplicacionUsuario,
    EstadoInstalacion,
    EstadoLicencia,
    Usuario,
)

_FORMATO_FECHA = "%Y-%m-%d"


class DatabaseError(Exception):
    """Raised when a database operation fails."""


class _DAO:
    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection

    @contextmanager
    def _transaction(self, accion: str) -> Iterator[sqlite3.Connection]:
        try:
            with self._conn:
                yield self._conn
        except sqlite3.Error as exc:
            raise DatabaseError(f"{accion}: {exc}") from exc


class AplicacionDAO(_DAO):
    """Reads and writes rows of the ``aplicaciones`` table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        super().__init__(connection)

    def guardar(self, app: Aplicacion) -> None:
        with self._transaction("Error al insertar aplicación") as conn:
            conn.execute(
                "INSERT INTO aplicaciones (id, nombre, descripcion, icono) VALUES (?, ?, ?, ?)",
                (app.id, app.nombre, app.descripcion, app.icono),
            )

    def obtener_por_id(self, app_id: int) -> Aplicacion | None:
        """Return the application with this id, or None."""
        with self._transaction("Error al obtener aplicación") as conn:
            fila = conn.execute(
                "SELECT id, nombre, descripcion, icono FROM aplicaciones WHERE id = ?",
                (app_id,),
            ).fetchone()
        return _aplicacion(fila) if fila else None

    def obtener_todas(self) -> list[Aplicacion]:
        with self._transaction("Error al obtener aplicaciones") as conn:
            filas = conn.execute(
                "SELECT id, nombre, descripcion, icono FROM aplicaciones"
            ).fetchall()
        return [_aplicacion(fila) for fila in filas]

    def actualizar(self, app: Aplicacion) -> None:
        with self._transaction("Error al actualizar aplicación") as conn:
            conn.execute(
                "UPDATE aplicaciones SET nombre = ?, descripcion = ?, icono = ? WHERE id = ?",
                (app.nombre, app.descripcion, app.icono, app.id),
            )

    def eliminar(self, app_id: int) -> None:
        with self._transaction("Error al eliminar aplicación") as conn:
            conn.execute("DELETE FROM aplicaciones WHERE id = ?", (app_id,))


def _aplicacion(fila: tuple) -> Aplicacion:
    app_id, nombre, descripcion, icono = fila
    return Aplicacion(int(app_id), str(nombre), str(descripcion), str(icono))


def _fecha_a_texto(fecha: date | None) -> str:
    return fecha.strftime(_FORMATO_FECHA) if fecha else ""


def _texto_a_fecha(texto: object) -> date | None:
    if not texto:
        return None
    try:
        return date.fromisoformat(str(texto))
    except ValueError:
        return None


def _relacion(usuario_id: int, aplicacion_id: int, instalacion, favorito, licencia, fecha) -> AplicacionUsuario:
    try:
        return AplicacionUsuario(
            usuario_id=usuario_id,
            aplicacion_id=int(aplicacion_id),
            estado_instalacion=EstadoInstalacion(int(instalacion)),
            favorito=bool(int(favorito)),
            estado_licencia=EstadoLicencia(int(licencia)),
            fecha_licencia=_texto_a_fecha(fecha),
        )
    except (TypeError, ValueError) as exc:
        raise DatabaseError(f"Relación con valores no válidos: {exc}") from exc


class AplicacionUsuarioDAO(_DAO):
    """Reads and writes rows of the ``aplicacion_usuario`` table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        super().__init__(connection)

    def guardar(self, relacion: AplicacionUsuario) -> None:
        with self._transaction("Error al insertar relación") as conn:
            conn.execute(
                "INSERT INTO aplicacion_usuario (usuario_id, aplicacion_id, estado_instalacion, "
                "favorito, estado_licencia, fecha_licencia) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    relacion.usuario_id,
                    relacion.aplicacion_id,
                    int(relacion.estado_instalacion),
                    bool(relacion.favorito),
                    int(relacion.estado_licencia),
                    _fecha_a_texto(relacion.fecha_licencia),
                ),
            )

    def obtener(self, usuario_id: int, aplicacion_id: int) -> AplicacionUsuario | None:
        """Return the relation between this user and application, or None."""
        with self._transaction("Error al obtener relación") as conn:
            fila = conn.execute(
                "SELECT estado_instalacion, favorito, estado_licencia, fecha_licencia "
                "FROM aplicacion_usuario WHERE usuario_id = ? AND aplicacion_id = ?",
                (usuario_id, aplicacion_id),
            ).fetchone()
        if fila is None:
            return None
        return _relacion(usuario_id, aplicacion_id, *fila)

    def obtener_por_usuario(self, usuario_id: int) -> list[AplicacionUsuario]:
        with self._transaction("Error al obtener relaciones de usuario") as conn:
            filas = conn.execute(
                "SELECT aplicacion_id, estado_instalacion, favorito, estado_licencia, fecha_licencia "
                "FROM aplicacion_usuario WHERE usuario_id = ?",
                (usuario_id,),
            ).fetchall()
        return [_relacion(usuario_id, *fila) for fila in filas]

    def actualizar(self, relacion: AplicacionUsuario) -> None:
        with self._transaction("Error al actualizar relación") as conn:
            conn.execute(
                "UPDATE aplicacion_usuario SET estado_instalacion = ?, favorito = ?, "
                "estado_licencia = ?, fecha_licencia = ? WHERE usuario_id = ? AND aplicacion_id = ?",
                (
                    int(relacion.estado_instalacion),
                    bool(relacion.favorito),
                    int(relacion.estado_licencia),
                    _fecha_a_texto(relacion.fecha_licencia),
                    relacion.usuario_id,
                    relacion.aplicacion_id,
                ),
            )

    def eliminar(self, usuario_id: int, aplicacion_id: int) -> None:
        with self._transaction("Error al eliminar relación") as conn:
            conn.execute(
                "DELETE FROM aplicacion_usuario WHERE usuario_id = ? AND aplicacion_id = ?",
                (usuario_id, aplicacion_id),
            )


def _usuario(fila: tuple) -> Usuario:
    usuario_id, nombre, contrasena = fila
    return Usuario(str(nombre), str(contrasena), int(usuario_id))


class UsuarioDAO(_DAO):
    """Reads and writes rows of the ``usuarios`` table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        super().__init__(connection)

    def guardar(self, usuario: Usuario) -> int:
        """Insert a user, link every application to it and return its new id."""
        with self._transaction("Error al insertar usuario") as conn:
            cursor = conn.execute(
                "INSERT INTO usuarios (nombre, contrasena) VALUES (?, ?)",
                (usuario.nombre, usuario.contrasena),
            )
            nuevo_id = int(cursor.lastrowid)
            conn.execute(
                "INSERT INTO aplicacion_usuario (usuario_id, aplicacion_id, estado_instalacion, "
                "favorito, estado_licencia, fecha_licencia) "
                "SELECT ?, id, ?, 0, ?, NULL FROM aplicaciones",
                (
                    nuevo_id,
                    int(EstadoInstalacion.NO_INSTALADO),
                    int(EstadoLicencia.EXPIRADA),
                ),
            )
        return nuevo_id

    def obtener_por_id(self, usuario_id: int) -> Usuario | None:
        with self._transaction("Error al obtener usuario") as conn:
            fila = conn.execute(
                "SELECT id, nombre, contrasena FROM usuarios WHERE id = ?", (usuario_id,)
            ).fetchone()
        return _usuario(fila) if fila else None

    def obtener_por_nombre(self, nombre: str) -> Usuario | None:
        with self._transaction("Error al obtener usuario") as conn:
            fila = conn.execute(
                "SELECT id, nombre, contrasena FROM usuarios WHERE nombre = ?", (nombre,)
            ).fetchone()
        return _usuario(fila) if fila else None

    def obtener_todos(self) -> list[Usuario]:
        with self._transaction("Error al obtener usuarios") as conn:
            filas = conn.execute("SELECT id, nombre, contrasena FROM usuarios").fetchall()
        return [_usuario(fila) for fila in filas]

    def actualizar(self, usuario: Usuario) -> None:
        with self._transaction("Error al actualizar usuario") as conn:
            conn.execute(
                "UPDATE usuarios SET nombre = ?, contrasena = ? WHERE id = ?",
                (usuario.nombre, usuario.contrasena, usuario.id),
            )

    def eliminar(self, usuario_id: int) -> None:
        with self._transaction("Error al eliminar usuario") as conn:
            conn.execute("DELETE FROM usuarios WHERE id = ?", (usuario_id,))

    def verificar_credenciales(self, nombre: str, contrasena: str) -> bool:
        """Return True when a user with this name and password exists."""
        with self._transaction("Error al verificar credenciales") as conn:
            fila = conn.execute(
                "SELECT id FROM usuarios WHERE nombre = ? AND contrasena = ?",
                (nombre, contrasena),
            ).fetchone()
        return fila is not None