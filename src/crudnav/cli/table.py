"""
Comandos CLI sobre tablas SQLite.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from crudnav.cli.theme import (
    create_records_table,
    get_console,
    print_error,
    print_header,
    print_info,
)
from crudnav.database import DatabaseConnection, SQLiteCrudClient, open_table_client


def _require_db(db: Path) -> None:
    if not db.exists():
        print_error(f"Base de datos no encontrada: {db}")
        raise typer.Exit(1)


def _open_client(
    db: Path,
    table: str,
    pk: Optional[str] = None,
    order_by: Optional[str] = None,
) -> SQLiteCrudClient:
    _require_db(db)
    try:
        return open_table_client(db, table, pk, order_by)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)


def table_names(
    db: Annotated[Path, typer.Argument(help="Archivo SQLite")],
):
    """Lista las tablas de la base."""
    _require_db(db)

    names = DatabaseConnection(db).list_tables()
    if not names:
        print_info("La base no posee tablas")
        return
    for name in names:
        get_console().print(f"  {name}")


def table_list(
    db: Annotated[Path, typer.Argument(help="Archivo SQLite")],
    table: Annotated[str, typer.Argument(help="Tabla a consultar")],
    order_by: Annotated[Optional[str], typer.Option("--order-by", "-o", help="Columna de orden")] = None,
):
    """Muestra el recordset de una tabla."""
    client = _open_client(db, table, order_by=order_by)
    result = asyncio.run(client.fetch_all())
    if not result.success:
        print_error(result.message)
        raise typer.Exit(1)

    if not result.records:
        print_info(f"La tabla '{table}' no posee registros")
        return

    get_console().print(create_records_table(result.records, title=table))
    print_info(f"{len(result.records)} registro(s)")


def table_browse(
    db: Annotated[Path, typer.Argument(help="Archivo SQLite")],
    table: Annotated[str, typer.Argument(help="Tabla a navegar")],
    pk: Annotated[Optional[str], typer.Option("--pk", help="Clave primaria (default: del esquema)")] = None,
    order_by: Annotated[Optional[str], typer.Option("--order-by", "-o", help="Columna de orden")] = None,
    required: Annotated[Optional[list[str]], typer.Option("--required", "-r", help="Campo obligatorio")] = None,
    money: Annotated[Optional[list[str]], typer.Option("--money", "-m", help="Campo monetario")] = None,
    readonly: Annotated[Optional[list[str]], typer.Option("--readonly", help="Campo de solo lectura")] = None,
    filters: Annotated[str, typer.Option("--filters", help="Filtros: 'campo = valor AND ...'")] = "",
):
    """Navegador interactivo de registros."""
    from crudnav.cli.feedback import ConsoleFeedback
    from crudnav.cli.viewer import interactive_browser
    from crudnav.config import FormConfig
    from crudnav.core import RecordNavigator
    from crudnav.interfaces import DictFieldAccessor

    client = _open_client(db, table, pk, order_by)
    primary_key = client.primary_key

    config = FormConfig(
        primary_key=primary_key,
        required_fields=required or [],
        readonly_fields=[primary_key, *(readonly or [])],
        money_fields=money or [],
        filters=filters,
    )
    accessor = DictFieldAccessor(client.columns)
    navigator = RecordNavigator(config, accessor, client, ConsoleFeedback())

    print_header(f"Tabla: {table}", f"Clave primaria: {primary_key}")
    asyncio.run(interactive_browser(navigator, accessor, table))
