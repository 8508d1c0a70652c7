"""Login and registration rules on top of the user store."""

from __future__ import annotations

from .daos import DatabaseError
from .database import DatabaseManager
from .entities import Usuario

CAMPO_USUARIO = "usuario"
CAMPO_CONTRASENA = "contrasena"


class AuthError(Exception):
    """Raised when logging in or registering fails."""


class ValidationError(AuthError):
    """Raised when a form field is not acceptable; ``campo`` names the field."""

    def __init__(self, mensaje: str, campo: str) -> None:
        super().__init__(mensaje)
        self.campo = campo


def _validar_obligatorios(nombre: str, contrasena: str) -> str:
    nombre = nombre.strip()
    if not nombre:
        raise ValidationError("El nombre de usuario es obligatorio.", CAMPO_USUARIO)
    if not contrasena:
        raise ValidationError("La contraseña es obligatoria.", CAMPO_CONTRASENA)
    return nombre


def validar_inicio(nombre: str, contrasena: str) -> str:
    """Check login fields and return the trimmed user name."""
    nombre = _validar_obligatorios(nombre, contrasena)
    if len(contrasena) < 6:
        raise ValidationError(
            "La contraseña debe tener al menos 6 caracteres.", CAMPO_CONTRASENA
        )
    return nombre


def validar_registro(nombre: str, contrasena: str) -> str:
    """Check registration fields and return the trimmed user name."""
    nombre = _validar_obligatorios(nombre, contrasena)
    if len(nombre) > 30:
        raise ValidationError(
            "El nombre de usuario no puede tener más de 30 caracteres.", CAMPO_USUARIO
        )
    if len(nombre) < 6:
        raise ValidationError(
            "La contraseña debe tener al menos 6 caracteres.", CAMPO_CONTRASENA
        )
    if len(contrasena) < 6:
        raise ValidationError(
            "La contraseña debe tener al menos 6 caracteres.", CAMPO_CONTRASENA
        )
    if len(contrasena) > 30:
        raise ValidationError(
            "La contraseña no puede tener más de 30 caracteres.", CAMPO_CONTRASENA
        )
    if not contrasena.strip():
        raise ValidationError(
            "La contraseña no puede contener solo espacios en blanco.", CAMPO_CONTRASENA
        )
    return nombre


def iniciar_sesion(manager: DatabaseManager, nombre: str, contrasena: str) -> Usuario:
    """Return the user matching these credentials."""
    nombre = validar_inicio(nombre, contrasena)
    dao = manager.usuario_dao
    if not dao.verificar_credenciales(nombre, contrasena):
        raise AuthError("Nombre de usuario o contraseña incorrectos.")
    usuario = dao.obtener_por_nombre(nombre)
    if usuario is None:
        raise AuthError("Nombre de usuario o contraseña incorrectos.")
    return usuario


def registrar(manager: DatabaseManager, nombre: str, contrasena: str) -> Usuario:
    """Create a new user and return it with its assigned id."""
    nombre = validar_registro(nombre, contrasena)
    dao = manager.usuario_dao
    if dao.obtener_por_nombre(nombre) is not None:
        raise AuthError(
            f"El nombre de usuario '{nombre}' ya existe. Por favor, elige otro."
        )
    try:
        nuevo_id = dao.guardar(Usuario(nombre, contrasena))
    except DatabaseError as exc:
        raise AuthError(
            "No se pudo registrar el usuario. Consulte el log para más detalles."
        ) from exc
    return Usuario(nombre, contrasena, nuevo_id)