"""
Operaciones de base de datos sobre una tabla genérica.
"""

from typing import Any, Optional

from crudnav.database.connection import DatabaseConnection, quote_identifier
from crudnav.models import Dependency, Record, is_blank


class TableRepository:
    """Repositorio para operaciones CRUD de una tabla."""

    def __init__(
        self,
        db: DatabaseConnection,
        table: str,
        primary_key: Optional[str] = None,
        order_by: Optional[str] = None,
    ):
        """
        Inicializa el repositorio.

        Args:
            db: Instancia de DatabaseConnection
            table: Nombre de la tabla
            primary_key: Columna de clave primaria (default: detectada del esquema)
            order_by: Columna de ordenamiento del recordset (default: clave primaria)
        """
        self._db = db
        self.table = table
        self.columns = db.table_columns(table)
        if not self.columns:
            raise ValueError(f"Tabla inexistente: {table}")

        self.primary_key = primary_key or db.primary_key_of(table)
        if self.primary_key not in self.columns:
            raise ValueError(f"Clave primaria inválida para '{table}': {self.primary_key}")

        self.order_by = order_by or self.primary_key
        if self.order_by not in self.columns:
            raise ValueError(f"Columna de ordenamiento inválida: {self.order_by}")

    def _table_values(self, record: Record) -> dict[str, Any]:
        """Filtra el registro a las columnas de la tabla; vacío -> NULL."""
        return {
            name: (None if is_blank(value) else value)
            for name, value in record.items()
            if name in self.columns
        }

    def list_all(self) -> list[Record]:
        """Recordset completo en el orden configurado."""
        sql = (
            f"SELECT * FROM {quote_identifier(self.table)} "
            f"ORDER BY {quote_identifier(self.order_by)}, {quote_identifier(self.primary_key)}"
        )
        with self._db.connection() as conn:
            return [dict(row) for row in conn.execute(sql)]

    def get(self, pk_value: Any) -> Optional[Record]:
        """Obtiene un registro por clave primaria."""
        sql = (
            f"SELECT * FROM {quote_identifier(self.table)} "
            f"WHERE {quote_identifier(self.primary_key)} = ?"
        )
        with self._db.connection() as conn:
            row = conn.execute(sql, (pk_value,)).fetchone()
            return dict(row) if row is not None else None

    def insert(self, record: Record) -> Any:
        """
        Inserta un registro.

        Si la clave primaria viene vacía la asigna la base.

        Returns:
            Clave primaria del registro creado
        """
        values = self._table_values(record)
        if values.get(self.primary_key) is None:
            values.pop(self.primary_key, None)
        if not values:
            raise ValueError("Sin datos para insertar")

        names = ", ".join(quote_identifier(n) for n in values)
        marks = ", ".join("?" for _ in values)
        sql = f"INSERT INTO {quote_identifier(self.table)} ({names}) VALUES ({marks})"

        with self._db.connection() as conn:
            cursor = conn.execute(sql, tuple(values.values()))
            if self.primary_key in values:
                return values[self.primary_key]
            row = conn.execute(
                f"SELECT {quote_identifier(self.primary_key)} FROM {quote_identifier(self.table)} "
                f"WHERE rowid = ?",
                (cursor.lastrowid,),
            ).fetchone()
            return row[0]

    def update(self, record: Record) -> int:
        """
        Actualiza un registro identificado por su clave primaria.

        Returns:
            Cantidad de filas afectadas
        """
        values = self._table_values(record)
        pk_value = values.pop(self.primary_key, None)
        if pk_value is None:
            raise ValueError(f"Registro sin clave primaria '{self.primary_key}'")
        if not values:
            return 0

        assignments = ", ".join(f"{quote_identifier(n)} = ?" for n in values)
        sql = (
            f"UPDATE {quote_identifier(self.table)} SET {assignments} "
            f"WHERE {quote_identifier(self.primary_key)} = ?"
        )
        with self._db.connection() as conn:
            cursor = conn.execute(sql, (*values.values(), pk_value))
            return cursor.rowcount

    def delete(self, pk_value: Any) -> int:
        """Elimina un registro. Retorna filas afectadas."""
        sql = (
            f"DELETE FROM {quote_identifier(self.table)} "
            f"WHERE {quote_identifier(self.primary_key)} = ?"
        )
        with self._db.connection() as conn:
            cursor = conn.execute(sql, (pk_value,))
            return cursor.rowcount

    def dependencies(self, pk_value: Any) -> list[Dependency]:
        """Registros de otras tablas que referencian a pk_value."""
        record = self.get(pk_value)
        if record is None:
            return []

        found = []
        for other, column, referenced in self._db.foreign_keys_to(self.table):
            # Referencia implícita (sin columna) apunta a la clave primaria
            key_value = record.get(referenced or self.primary_key)
            sql = (
                f"SELECT COUNT(*) FROM {quote_identifier(other)} "
                f"WHERE {quote_identifier(column)} = ?"
            )
            with self._db.connection() as conn:
                count = conn.execute(sql, (key_value,)).fetchone()[0]
            if count:
                found.append(Dependency(table=other, count=count))
        return found
