"""SQLite database holding the application catalogue and its users."""

from __future__ import annotations

import logging
import os
import sqlite3
from typing import ClassVar

from .daos import AplicacionDAO, AplicacionUsuarioDAO, DatabaseError, UsuarioDAO

DATABASE_FILENAME = "aplicaciones.db"

_log = logging.getLogger(__name__)

_ESQUEMA = (
    "CREATE TABLE IF NOT EXISTS aplicaciones ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "nombre TEXT UNIQUE NOT NULL, "
    "descripcion TEXT NOT NULL, "
    "icono TEXT NOT NULL)",
    "CREATE TABLE IF NOT EXISTS usuarios ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "nombre TEXT UNIQUE NOT NULL, "
    "contrasena TEXT NOT NULL)",
    "CREATE TABLE IF NOT EXISTS aplicacion_usuario ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "usuario_id INTEGER NOT NULL, "
    "aplicacion_id INTEGER NOT NULL, "
    "estado_instalacion TEXT NOT NULL, "
    "favorito BOOLEAN NOT NULL, "
    "estado_licencia TEXT NOT NULL, "
    "fecha_licencia DATE, "
    "FOREIGN KEY(usuario_id) REFERENCES usuarios(id), "
    "FOREIGN KEY(aplicacion_id) REFERENCES aplicaciones(id))",
)

APLICACIONES_POR_DEFECTO = (
    ("Gestor de Archivos", "Organiza documentos y archivos", ":/imagenes trabajo/archivo.png"),
    ("Editor de Texto", "Escribe y edita documentos de texto", ":/imagenes trabajo/editor-de-texto.png"),
    ("Calculadora Científica", "Realiza cálculos matemáticos avanzados", ":/imagenes trabajo/calculadora.png"),
    ("Reproductor de Música", "Escucha tus canciones favoritas", ":/imagenes trabajo/musica.png"),
    ("Calendario", "Administra tu agenda y eventos", ":/imagenes trabajo/calendario.png"),
    ("Gestor de Tareas", "Organiza y gestiona tus actividades diarias", ":/imagenes trabajo/portapapeles.png"),
    ("Explorador Web", "Accede a sitios web y realiza búsquedas en internet", ":/imagenes trabajo/sitio-web.png"),
    ("Lector de PDFs", "Abre y visualiza archivos en formato PDF", ":/imagenes trabajo/archivo-pdf.png"),
    ("Cliente de Correo", "Envía y recibe correos electrónicos fácilmente", ":/imagenes trabajo/cliente-correo.png"),
)


class DatabaseManager:
    """Owns the SQLite connection and the data access objects built on it."""

    _instancia: ClassVar[DatabaseManager | None] = None

    def __init__(self, path: str | os.PathLike[str] = DATABASE_FILENAME) -> None:
        self.path = os.fspath(path)
        try:
            self._conn = sqlite3.connect(self.path)
        except sqlite3.Error as exc:
            raise DatabaseError(f"Error al abrir la base de datos: {exc}") from exc
        self._abierta = True
        self.aplicacion_dao = AplicacionDAO(self._conn)
        self.aplicacion_usuario_dao = AplicacionUsuarioDAO(self._conn)
        self.usuario_dao = UsuarioDAO(self._conn)
        try:
            self.inicializar()
        except DatabaseError:
            self.close()
            raise

    @classmethod
    def instance(cls) -> DatabaseManager:
        """Return the shared manager, opening the default database on first use."""
        if cls._instancia is None:
            cls._instancia = cls()
        return cls._instancia

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    @property
    def abierta(self) -> bool:
        return self._abierta

    def inicializar(self) -> None:
        """Create the tables and, when the catalogue is empty, fill it with the defaults."""
        try:
            with self._conn:
                for sentencia in _ESQUEMA:
                    self._conn.execute(sentencia)
                (num_apps,) = self._conn.execute("SELECT COUNT(*) FROM aplicaciones").fetchone()
                if num_apps == 0:
                    self._conn.executemany(
                        "INSERT INTO aplicaciones (nombre, descripcion, icono) VALUES (?, ?, ?)",
                        APLICACIONES_POR_DEFECTO,
                    )
                    _log.debug("Aplicaciones por defecto insertadas correctamente.")
        except sqlite3.Error as exc:
            raise DatabaseError(f"Error al inicializar la base de datos: {exc}") from exc

    def close(self) -> None:
        """Close the connection; the shared instance is forgotten if this was it."""
        if self._abierta:
            self._conn.close()
            self._abierta = False
        if type(self)._instancia is self:
            type(self)._instancia = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()