"""
CLI de crudnav - Navegador de registros CRUD.

Comandos:
- tables: Lista las tablas de una base SQLite
- list: Muestra el recordset de una tabla
- browse: Navegador interactivo de registros
"""

import typer

from crudnav.cli.table import table_browse, table_list, table_names

# Crear aplicación principal
app = typer.Typer(
    name="crudnav",
    help="Navegador de registros CRUD sobre tablas SQLite.",
    no_args_is_help=True,
)

app.command("tables")(table_names)
app.command("list")(table_list)
app.command("browse")(table_browse)


__all__ = [
    "app",
]
