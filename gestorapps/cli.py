"""Command-line front end: register, log in and manage applications."""

from __future__ import annotations

import argparse
import getpass
import sys
from collections.abc import Iterable, Sequence

from .auth import AuthError, iniciar_sesion, registrar
from .catalog import CatalogError, CatalogSession, Filtro
from .daos import DatabaseError
from .database import DATABASE_FILENAME, DatabaseManager
from .entities import Aplicacion

_FILTROS = {
    "descargados": Filtro.DESCARGADOS,
    "no-descargados": Filtro.NO_DESCARGADOS,
    "favoritos": Filtro.FAVORITOS,
}


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gestorapps", description="Gestor de aplicaciones.")
    parser.add_argument("--db", default=DATABASE_FILENAME, help="ruta de la base de datos")

    credenciales = argparse.ArgumentParser(add_help=False)
    credenciales.add_argument("--usuario", required=True, help="nombre de usuario")
    credenciales.add_argument("--contrasena", help="contraseña (se pide si falta)")

    comandos = parser.add_subparsers(dest="comando", required=True)
    comandos.add_parser("registrar", parents=[credenciales], help="registrar un usuario")

    apps = comandos.add_parser("apps", help="listar el catálogo")
    apps.add_argument("--buscar", default="", help="texto a buscar en el nombre")

    detalles = comandos.add_parser("detalles", help="mostrar la descripción de una aplicación")
    detalles.add_argument("app_id", type=int)

    filtrar = comandos.add_parser("filtrar", parents=[credenciales], help="listar aplicaciones del usuario")
    filtrar.add_argument("filtro", choices=sorted(_FILTROS))

    for nombre, ayuda in (
        ("instalar", "instalar una aplicación"),
        ("desinstalar", "desinstalar una aplicación"),
        ("favorito", "marcar o desmarcar una aplicación como favorita"),
    ):
        sub = comandos.add_parser(nombre, parents=[credenciales], help=ayuda)
        sub.add_argument("app_id", type=int)
    return parser


def _imprimir(apps: Iterable[Aplicacion]) -> None:
    for app in apps:
        print(f"{app.id}\t{app.nombre}")


def _contrasena(args: argparse.Namespace) -> str:
    return args.contrasena if args.contrasena is not None else getpass.getpass("Contraseña: ")


def _ejecutar(manager: DatabaseManager, args: argparse.Namespace) -> None:
    if args.comando == "registrar":
        usuario = registrar(manager, args.usuario, _contrasena(args))
        print(f"Usuario '{usuario.nombre}' registrado correctamente.")
        return
    if args.comando == "apps":
        _imprimir(CatalogSession(manager, -1).buscar(args.buscar))
        return
    if args.comando == "detalles":
        app = CatalogSession(manager, -1).detalles(args.app_id)
        print(f"Descripción: {app.descripcion}")
        return

    usuario = iniciar_sesion(manager, args.usuario, _contrasena(args))
    sesion = CatalogSession(manager, usuario.id)
    sesion.actualizar_licencias()

    if args.comando == "filtrar":
        _imprimir(sesion.filtrar(_FILTROS[args.filtro]))
    elif args.comando == "instalar":
        sesion.instalar(args.app_id)
        print("La aplicación ha sido instalada y su licencia activada.")
    elif args.comando == "desinstalar":
        sesion.desinstalar(args.app_id)
        print("La aplicación ha sido desinstalada correctamente.")
    elif args.comando == "favorito":
        marcada = sesion.alternar_favorito(args.app_id)
        estado = "marcada como favorita" if marcada else "desmarcada como favorita"
        print(f"La aplicación ahora está {estado}.")


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command and return the exit status."""
    args = _parser().parse_args(argv)
    try:
        with DatabaseManager(args.db) as manager:
            _ejecutar(manager, args)
    except (AuthError, CatalogError, DatabaseError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())