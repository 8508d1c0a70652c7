"""Observable wrappers around records that can refresh from the database."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING, Any

from .entities import Aplicacion, AplicacionUsuario, Usuario

if TYPE_CHECKING:
    from .database import DatabaseManager


class Signal:
    """A list of callbacks invoked in connection order."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]) -> None:
        self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> None:
        """Remove a callback; raises ValueError if it was not connected."""
        self._callbacks.remove(callback)

    def emit(self, *args: Any) -> None:
        for callback in list(self._callbacks):
            callback(*args)


def _manager_por_defecto() -> DatabaseManager:
    from .database import DatabaseManager

    return DatabaseManager.instance()


class AplicacionModel:
    """An application whose data can be reloaded from the database."""

    def __init__(self, app: Aplicacion, manager: DatabaseManager | None = None) -> None:
        self._app = app
        self._manager = manager
        self.aplicacion_actualizada = Signal()

    @property
    def id(self) -> int:
        return self._app.id

    @property
    def nombre(self) -> str:
        return self._app.nombre

    @property
    def descripcion(self) -> str:
        return self._app.descripcion

    @property
    def icono(self) -> str:
        return self._app.icono

    def actualizar_desde_dao(self) -> None:
        """Reload the application; a missing row yields an empty application."""
        manager = self._manager or _manager_por_defecto()
        nueva = manager.aplicacion_dao.obtener_por_id(self._app.id)
        self._app = nueva if nueva is not None else Aplicacion()
        self.aplicacion_actualizada.emit()


class AplicacionUsuarioModel:
    """A user's relation to an application, with states shown as labels."""

    def __init__(self, relacion: AplicacionUsuario) -> None:
        self._relacion = relacion
        self.aplicacion_usuario_actualizada = Signal()

    @property
    def usuario_id(self) -> int:
        return self._relacion.usuario_id

    @property
    def aplicacion_id(self) -> int:
        return self._relacion.aplicacion_id

    @property
    def estado_instalacion(self) -> str:
        return str(self._relacion.estado_instalacion)

    @property
    def favorito(self) -> bool:
        return self._relacion.favorito

    @property
    def estado_licencia(self) -> str:
        return str(self._relacion.estado_licencia)

    @property
    def fecha_licencia(self) -> date | None:
        return self._relacion.fecha_licencia

    def actualizar_desde_dao(self) -> None:
        """Notify listeners that the relation changed."""
        self.aplicacion_usuario_actualizada.emit()


class UsuarioModel:
    """A user whose data can be reloaded from the database."""

    def __init__(self, usuario: Usuario, manager: DatabaseManager | None = None) -> None:
        self._usuario = usuario
        self._manager = manager
        self.usuario_actualizado = Signal()

    @property
    def id(self) -> int:
        return self._usuario.id

    @property
    def nombre(self) -> str:
        return self._usuario.nombre

    @property
    def contrasena(self) -> str:
        return self._usuario.contrasena

    def actualizar_desde_dao(self) -> None:
        """Reload the user; a missing row yields an empty user with id -1."""
        manager = self._manager or _manager_por_defecto()
        nuevo = manager.usuario_dao.obtener_por_id(self._usuario.id)
        self._usuario = nuevo if nuevo is not None else Usuario("", "", -1)
        self.usuario_actualizado.emit()