"""
Backend SQLite para crudnav.

- connection: Conexión e introspección del esquema
- repository: Operaciones CRUD sobre una tabla
- client: CrudClient asíncrono que devuelve el recordset actualizado
"""

from pathlib import Path
from typing import Optional

from crudnav.database.connection import DatabaseConnection, quote_identifier
from crudnav.database.repository import TableRepository
from crudnav.database.client import SQLiteCrudClient


def open_table_client(
    db_path: Path,
    table: str,
    primary_key: Optional[str] = None,
    order_by: Optional[str] = None,
) -> SQLiteCrudClient:
    """Crea un SQLiteCrudClient para una tabla de la base indicada."""
    db = DatabaseConnection(db_path)
    return SQLiteCrudClient(TableRepository(db, table, primary_key, order_by))


__all__ = [
    "DatabaseConnection",
    "quote_identifier",
    "TableRepository",
    "SQLiteCrudClient",
    "open_table_client",
]
