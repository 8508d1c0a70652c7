# gestorapps

An application catalogue kept in a SQLite database. Users register and sign
in, browse and search the available applications, mark favourites, install
and uninstall them, and have the licence of each installed application tracked
over time. Installing an application starts an active licence dated that day.
An active licence becomes "about to expire" once it is 20 days old and
"expired" once it is 30 days old.

A new database is created with three tables (`aplicaciones`, `usuarios`,
`aplicacion_usuario`). When the catalogue is empty it is filled with nine
default applications: file manager, text editor, scientific calculator, music
player, calendar, task manager, web browser, PDF reader and mail client. Every
newly registered user gets one entry per application in the catalogue. Each
entry starts out not installed, not a favourite and with its licence marked as
expired.

## Installation

```
pip install .
```

## Command line

The `gestorapps` command runs one subcommand and exits. It exits with status 0
on success. On failure it prints the error to standard error and exits with
status 1.

```
gestorapps [--db RUTA] <subcommand> ...
```

`--db` chooses the database file. The default is `aplicaciones.db` in the
current directory.

Subcommands that need no account:

- `gestorapps apps [--buscar TEXTO]` lists the catalogue as `id<TAB>name`. With
  `--buscar`, only applications whose name contains the text are listed. The
  match ignores case.
- `gestorapps detalles APP_ID` prints an application's description.

Subcommands that take `--usuario NOMBRE` and optionally `--contrasena`:

- `gestorapps registrar` registers a new user.
- `gestorapps filtrar {descargados,no-descargados,favoritos}` lists the user's
  installed, not installed or favourite applications.
- `gestorapps instalar APP_ID` installs an application and activates its
  licence.
- `gestorapps desinstalar APP_ID` uninstalls an application and leaves its
  licence state unchanged.
- `gestorapps favorito APP_ID` marks an application as a favourite or removes
  the mark.

When `--contrasena` is left out, the password is asked for at the terminal.
The commands that act on a signed-in user (`filtrar`, `instalar`,
`desinstalar`, `favorito`) first sign in. They then update the ages of that
user's active licences before doing their work.

## Library use

`gestorapps.database.DatabaseManager` owns the SQLite connection and the
data-access objects built on it: `aplicacion_dao`, `aplicacion_usuario_dao`
and `usuario_dao`. It can be used as a context manager, which closes the
connection when done. `DatabaseManager.instance()` returns a shared manager
that opens the default database on first use.

```python
from datetime import date

from gestorapps.auth import iniciar_sesion, registrar
from gestorapps.catalog import CatalogSession, Filtro
from gestorapps.database import DatabaseManager

contrasena = "password"

with DatabaseManager("aplicaciones.db") as manager:
    registrar(manager, "usuario_demo", contrasena)
    usuario = iniciar_sesion(manager, "usuario_demo", contrasena)

    sesion = CatalogSession(manager, usuario.id)
    sesion.instalar(1, date(2024, 1, 1))
    print([app.nombre for app in sesion.filtrar(Filtro.DESCARGADOS)])
```

### Signing in and registering

`gestorapps.auth` provides `validar_inicio`, `validar_registro`,
`iniciar_sesion` and `registrar`. Both kinds of input are checked first:

- Signing in needs a name and a password of at least 6 characters.
- Registering needs a name of 6 to 30 characters after trimming.
- Registering also needs a password of 6 to 30 characters that is not only
  blank.

Rejected input raises `ValidationError`. Its `campo` attribute names the field
at fault, either `"usuario"` or `"contrasena"`. Wrong credentials, a name that
is already taken, or a failed insert raise `AuthError`. `ValidationError` is a
subclass of `AuthError`.

### The catalogue

`gestorapps.catalog.CatalogSession(manager, usuario_id)` gives one user's view
of the catalogue:

- `nombre_usuario()` returns the user's name. It returns an empty string if the
  user is unknown.
- `aplicaciones()` returns every application.
- `buscar(texto)` returns the applications whose name contains the text. The
  match ignores case.
- `detalles(app_id)` returns one application.
- `filtrar(filtro)` returns the user's applications that match a `Filtro`
  (`DESCARGADOS`, `NO_DESCARGADOS`, `FAVORITOS`). The filter then becomes
  `filtro_activo`, and the default is `NO_DESCARGADOS`.
- `alternar_favorito(app_id)` flips the favourite mark and returns the new
  value.
- `instalar(app_id, hoy)` sets the application installed, with an active
  licence dated `hoy`. `hoy` defaults to today.
- `desinstalar(app_id)` sets the application not installed.
- `actualizar_licencias(hoy)` ages the active licences as of `hoy`. It returns
  the relations that are no longer active.

Actions that cannot be carried out raise `CatalogError`. These include an
unknown application, no application given, installing an installed
application, uninstalling one that is not installed, and a failed update.

### Records, data access and models

- `gestorapps.entities` holds `Aplicacion`, `Usuario` and `AplicacionUsuario`,
  and the `EstadoInstalacion` and `EstadoLicencia` enumerations. The `str()` of
  an enumeration is its display label, such as `"No Instalado"` or
  `"proxima a caducar"`.
- `gestorapps.daos` holds `AplicacionDAO`, `AplicacionUsuarioDAO` and
  `UsuarioDAO` over an `sqlite3` connection. Lookups return `None` when nothing
  matches, and failures raise `DatabaseError`.
- `gestorapps.models` wraps records in `AplicacionModel`,
  `AplicacionUsuarioModel` and `UsuarioModel`. Each exposes read-only
  properties and a `Signal` that `actualizar_desde_dao()` emits.
  `AplicacionModel` and `UsuarioModel` reload their record from the database
  when they refresh. `AplicacionUsuarioModel` only notifies its listeners.

## What it does not do

- There is no graphical interface and no interactive session. The command line
  runs a single action per call.
- Installing an application only records the new state in the database.
  Nothing is downloaded or run.
- Icons are stored as path strings and are never loaded or displayed.
- Licences are aged only when `actualizar_licencias` is called. The command
  line calls it each time a user signs in.
- Passwords are stored and compared as plain text.

## Tests

```
pip install .[test]
pytest
```