"""
Módulo de conexión a base de datos SQLite.

Proporciona la clase base con manejo de conexión e introspección del
esquema (columnas, clave primaria y claves foráneas).
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Iterator


def quote_identifier(name: str) -> str:
    """Cita un identificador SQL (tabla o columna)."""
    return '"' + name.replace('"', '""') + '"'


class DatabaseConnection:
    """Gestor de conexión a base de datos SQLite."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Inicializa la conexión a la base de datos.

        Args:
            db_path: Ruta al archivo SQLite. Default: ~/.crudnav/crudnav.db
        """
        if db_path is None:
            db_path = Path.home() / ".crudnav" / "crudnav.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager para conexiones a la base de datos."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ========================================================================
    # Introspección
    # ========================================================================

    def list_tables(self) -> list[str]:
        """Tablas de usuario de la base."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
            )
            return [row["name"] for row in cursor]

    def table_columns(self, table: str) -> list[str]:
        """Columnas de una tabla en orden de declaración."""
        with self.connection() as conn:
            cursor = conn.execute(f"PRAGMA table_info({quote_identifier(table)})")
            return [row["name"] for row in cursor]

    def primary_key_of(self, table: str) -> Optional[str]:
        """Columna de clave primaria (la primera si es compuesta)."""
        with self.connection() as conn:
            cursor = conn.execute(f"PRAGMA table_info({quote_identifier(table)})")
            keys = sorted((row["pk"], row["name"]) for row in cursor if row["pk"])
        return keys[0][1] if keys else None

    def foreign_keys_to(self, table: str) -> list[tuple[str, str, str]]:
        """
        Claves foráneas de otras tablas que apuntan a table.

        Returns:
            Lista de (tabla_dependiente, columna_local, columna_referenciada)
        """
        references = []
        for other in self.list_tables():
            with self.connection() as conn:
                cursor = conn.execute(f"PRAGMA foreign_key_list({quote_identifier(other)})")
                for row in cursor:
                    if row["table"] == table:
                        references.append((other, row["from"], row["to"]))
        return references
