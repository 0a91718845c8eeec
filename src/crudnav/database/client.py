"""
Cliente CRUD sobre una tabla SQLite.

Implementa el contrato CrudClient: cada escritura exitosa retorna el
recordset completo actualizado, como lo hace el backend remoto.
"""

import asyncio
import sqlite3
from typing import Any, Optional

from crudnav.database.repository import TableRepository
from crudnav.models import (
    DEPENDENCIES_FOUND,
    DeleteResult,
    FetchResult,
    Record,
    WriteResult,
)


class SQLiteCrudClient:
    """CrudClient asíncrono respaldado por TableRepository."""

    def __init__(self, repository: TableRepository, return_refreshed: bool = True):
        """
        Args:
            repository: Repositorio de la tabla
            return_refreshed: Si las escrituras devuelven el recordset actualizado
        """
        self._repo = repository
        self.return_refreshed = return_refreshed

    @property
    def primary_key(self) -> str:
        return self._repo.primary_key

    @property
    def columns(self) -> list[str]:
        return list(self._repo.columns)

    async def fetch_all(self) -> FetchResult:
        try:
            records = await asyncio.to_thread(self._repo.list_all)
        except sqlite3.Error as e:
            return FetchResult(success=False, message=str(e))
        return FetchResult(success=True, records=records, message="sucesso")

    async def _refreshed(self) -> Optional[list[Record]]:
        if not self.return_refreshed:
            return None
        return await asyncio.to_thread(self._repo.list_all)

    async def insert(self, record: Record) -> WriteResult:
        try:
            new_pk = await asyncio.to_thread(self._repo.insert, record)
            refreshed = await self._refreshed()
        except (sqlite3.Error, ValueError) as e:
            return WriteResult(success=False, message=f"Error en la inclusión: {e}")
        return WriteResult(
            success=True,
            message="Registro incluido con éxito",
            refreshed_records=refreshed,
            primary_key=new_pk,
        )

    async def update(self, record: Record) -> WriteResult:
        try:
            affected = await asyncio.to_thread(self._repo.update, record)
            if affected == 0:
                return WriteResult(success=False, message="Registro no encontrado para actualizar")
            refreshed = await self._refreshed()
        except (sqlite3.Error, ValueError) as e:
            return WriteResult(success=False, message=f"Error en la actualización: {e}")
        return WriteResult(
            success=True,
            message="Registro actualizado con éxito",
            refreshed_records=refreshed,
        )

    async def delete(self, primary_key: Any, force: bool = False) -> DeleteResult:
        try:
            if not force:
                dependencies = await asyncio.to_thread(self._repo.dependencies, primary_key)
                if dependencies:
                    return DeleteResult(
                        success=False,
                        message="El registro posee dependencias",
                        error=DEPENDENCIES_FOUND,
                        dependencies=dependencies,
                    )
            affected = await asyncio.to_thread(self._repo.delete, primary_key)
        except sqlite3.Error as e:
            return DeleteResult(success=False, message=f"Error en la eliminación: {e}")

        if affected == 0:
            return DeleteResult(success=False, message="Registro no encontrado para eliminar")
        return DeleteResult(success=True, message="Registro eliminado con éxito")
