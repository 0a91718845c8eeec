"""
Modelos de respuesta del backend CRUD.

Cada operación remota retorna un resultado con indicador de éxito,
mensaje y, para escrituras, el recordset actualizado.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from crudnav.models.base import Record


DEPENDENCIES_FOUND = "dependencias_encontradas"


class FetchResult(BaseModel):
    """Resultado de la consulta completa del recordset."""
    success: bool
    records: list[Record] = Field(default_factory=list)
    message: str = ""


class WriteResult(BaseModel):
    """Resultado de insert/update."""
    success: bool
    message: str = ""
    refreshed_records: Optional[list[Record]] = Field(
        None, description="Recordset autoritativo luego de la escritura"
    )
    primary_key: Any = Field(None, description="Clave del registro creado (insert)")


class Dependency(BaseModel):
    """Tabla con registros que dependen del registro a eliminar."""
    table: str
    count: int = Field(..., ge=0)


class DeleteResult(BaseModel):
    """Resultado de delete."""
    success: bool
    message: str = ""
    error: Optional[str] = None
    dependencies: list[Dependency] = Field(default_factory=list)
    refreshed_records: Optional[list[Record]] = None

    @property
    def has_dependencies(self) -> bool:
        """True si el backend rechazó por registros dependientes."""
        return self.error == DEPENDENCIES_FOUND

    @property
    def dependency_count(self) -> int:
        return sum(d.count for d in self.dependencies)
