"""A logged-in user's view of the application catalogue."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from enum import IntEnum

from .daos import DatabaseError
from .database import DatabaseManager
from .entities import (
    Aplicacion,
    AplicacionUsuario,
    EstadoInstalacion,
    EstadoLicencia,
)

DIAS_AVISO_LICENCIA = 20
DIAS_CADUCIDAD_LICENCIA = 30


class Filtro(IntEnum):
    """Which of the user's applications a filtered list shows."""

    DESCARGADOS = 1
    NO_DESCARGADOS = 2
    FAVORITOS = 3


class CatalogError(Exception):
    """Raised when a catalogue action cannot be carried out."""


_CRITERIOS: dict[Filtro, Callable[[AplicacionUsuario], bool]] = {
    Filtro.DESCARGADOS: lambda rel: rel.estado_instalacion == EstadoInstalacion.INSTALADO,
    Filtro.NO_DESCARGADOS: lambda rel: rel.estado_instalacion == EstadoInstalacion.NO_INSTALADO,
    Filtro.FAVORITOS: lambda rel: rel.favorito,
}


class CatalogSession:
    """Browse, filter, install and mark applications on behalf of one user."""

    def __init__(self, manager: DatabaseManager, usuario_id: int) -> None:
        self._manager = manager
        self.usuario_id = usuario_id
        self.filtro_activo = Filtro.NO_DESCARGADOS

    def nombre_usuario(self) -> str:
        """Return the user's name, or an empty string if the user is unknown."""
        usuario = self._manager.usuario_dao.obtener_por_id(self.usuario_id)
        return usuario.nombre if usuario is not None else ""

    def aplicaciones(self) -> list[Aplicacion]:
        """Return every application in the catalogue."""
        return self._manager.aplicacion_dao.obtener_todas()

    def buscar(self, texto: str) -> list[Aplicacion]:
        """Return applications whose name contains the text, ignoring case."""
        buscado = texto.strip().casefold()
        return [app for app in self.aplicaciones() if buscado in app.nombre.casefold()]

    def detalles(self, app_id: int) -> Aplicacion:
        """Return the application with this id."""
        app = self._manager.aplicacion_dao.obtener_por_id(app_id)
        if app is None:
            raise CatalogError(f"No existe la aplicación con id {app_id}.")
        return app

    def filtrar(self, filtro: Filtro | int | None = None) -> list[Aplicacion]:
        """Return the user's applications matching the filter, which becomes the active one."""
        if filtro is not None:
            self.filtro_activo = Filtro(filtro)
        coincide = _CRITERIOS[self.filtro_activo]
        aplicacion_dao = self._manager.aplicacion_dao
        resultado = []
        for relacion in self._relaciones():
            if not coincide(relacion):
                continue
            app = aplicacion_dao.obtener_por_id(relacion.aplicacion_id)
            if app is not None:
                resultado.append(app)
        return resultado

    def alternar_favorito(self, app_id: int | None) -> bool:
        """Flip the favourite mark of an application and return the new value."""
        fallo = "No se pudo actualizar el estado de favorito."
        relacion = self._relacion(app_id, "marcar como favorita", fallo)
        relacion.favorito = not relacion.favorito
        self._guardar(relacion, fallo)
        return relacion.favorito

    def instalar(self, app_id: int | None, hoy: date | None = None) -> AplicacionUsuario:
        """Install an application and start its licence on ``hoy`` (today by default)."""
        fallo = "No se pudo actualizar la instalación y la licencia."
        relacion = self._relacion(app_id, "instalar", fallo)
        if relacion.estado_instalacion == EstadoInstalacion.INSTALADO:
            raise CatalogError("La aplicación ya está instalada.")
        relacion.estado_instalacion = EstadoInstalacion.INSTALADO
        relacion.estado_licencia = EstadoLicencia.ACTIVA
        relacion.fecha_licencia = hoy if hoy is not None else date.today()
        self._guardar(relacion, fallo)
        return relacion

    def desinstalar(self, app_id: int | None) -> AplicacionUsuario:
        """Uninstall an application, leaving its licence as it was."""
        fallo = "No se pudo actualizar la desinstalación."
        relacion = self._relacion(app_id, "desinstalar", fallo)
        if relacion.estado_instalacion == EstadoInstalacion.NO_INSTALADO:
            raise CatalogError("La aplicación ya está desinstalada.")
        relacion.estado_instalacion = EstadoInstalacion.NO_INSTALADO
        self._guardar(relacion, fallo)
        return relacion

    def actualizar_licencias(self, hoy: date | None = None) -> list[AplicacionUsuario]:
        """Age active licences as of ``hoy`` and return the relations whose state changed."""
        hoy = hoy if hoy is not None else date.today()
        cambiadas = []
        for relacion in self._relaciones():
            if relacion.estado_licencia != EstadoLicencia.ACTIVA:
                continue
            dias = (hoy - relacion.fecha_licencia).days if relacion.fecha_licencia else 0
            if dias >= DIAS_CADUCIDAD_LICENCIA:
                relacion.estado_licencia = EstadoLicencia.EXPIRADA
            elif dias >= DIAS_AVISO_LICENCIA:
                relacion.estado_licencia = EstadoLicencia.PROXIMA_A_CADUCAR
            self._manager.aplicacion_usuario_dao.actualizar(relacion)
            if relacion.estado_licencia != EstadoLicencia.ACTIVA:
                cambiadas.append(relacion)
        return cambiadas

    def _relaciones(self) -> list[AplicacionUsuario]:
        return self._manager.aplicacion_usuario_dao.obtener_por_usuario(self.usuario_id)

    def _relacion(self, app_id: int | None, accion: str, fallo: str) -> AplicacionUsuario:
        if app_id is None or app_id == -1:
            raise CatalogError(f"Seleccione una aplicación para {accion}.")
        relacion = self._manager.aplicacion_usuario_dao.obtener(self.usuario_id, app_id)
        if relacion is None:
            raise CatalogError(fallo)
        return relacion

    def _guardar(self, relacion: AplicacionUsuario, fallo: str) -> None:
        try:
            self._manager.aplicacion_usuario_dao.actualizar(relacion)
        except DatabaseError as exc:
            raise CatalogError(fallo) from exc