"""Plain records for applications, users and their per-user application state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum


@dataclass
class Aplicacion:
    """An application offered in the catalogue."""

    id: int = -1
    nombre: str = ""
    descripcion: str = ""
    icono: str = ""


class EstadoInstalacion(IntEnum):
    """Whether a user has an application installed."""

    NO_INSTALADO = 0
    INSTALADO = 1

    def __str__(self) -> str:
        return _ETIQUETAS_INSTALACION[self]


class EstadoLicencia(IntEnum):
    """State of a user's licence for an application."""

    SIN_LICENCIA = 0
    ACTIVA = 1
    EXPIRADA = 2
    PROXIMA_A_CADUCAR = 3

    def __str__(self) -> str:
        return _ETIQUETAS_LICENCIA[self]


_ETIQUETAS_INSTALACION = {
    EstadoInstalacion.NO_INSTALADO: "No Instalado",
    EstadoInstalacion.INSTALADO: "Instalado",
}

_ETIQUETAS_LICENCIA = {
    EstadoLicencia.SIN_LICENCIA: "Sin Licencia",
    EstadoLicencia.ACTIVA: "Activa",
    EstadoLicencia.PROXIMA_A_CADUCAR: "proxima a caducar",
    EstadoLicencia.EXPIRADA: "Expirada",
}


@dataclass
class AplicacionUsuario:
    """The relation between one user and one application."""

    usuario_id: int
    aplicacion_id: int
    estado_instalacion: EstadoInstalacion = EstadoInstalacion.NO_INSTALADO
    favorito: bool = False
    estado_licencia: EstadoLicencia = EstadoLicencia.SIN_LICENCIA
    fecha_licencia: date | None = None


@dataclass
class Usuario:
    """A registered user."""

    nombre: str
    contrasena: str = field(repr=False)
    id: int = -1

    def verificar_credenciales(self, nombre: str, contrasena: str) -> bool:
        """Return True when both name and password match exactly."""
        return nombre == self.nombre and contrasena == self.contrasena