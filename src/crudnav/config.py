"""Modelos Pydantic para configuración de formularios y enums de estado."""

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Action(str, Enum):
    """Acciones de la barra de botones del formulario."""
    PRIMEIRO = "primeiro"
    ANTERIOR = "anterior"
    PROXIMO = "proximo"
    ULTIMO = "ultimo"
    EDITAR = "editar"
    INCLUIR = "incluir"
    SALVAR = "salvar"
    DELETAR = "deletar"
    ENCERRAR = "encerrar"

    @property
    def is_navigation(self) -> bool:
        return self in NAVIGATION_ACTIONS


NAVIGATION_ACTIONS = frozenset({
    Action.PRIMEIRO,
    Action.ANTERIOR,
    Action.PROXIMO,
    Action.ULTIMO,
})


class Mode(str, Enum):
    """Modo activo del formulario (exclusivo, uno solo a la vez)."""
    BROWSE = "browse"
    EDIT = "edit"
    INSERT = "insert"

    @property
    def is_dirty(self) -> bool:
        """Edit e insert requieren salvar o encerrar para salir."""
        return self is not Mode.BROWSE


DEFAULT_VIEW_FIELD_PATTERN = r"_nome$|_descricao$|_nome_completo$|_sigla$"


# ============================================================================
# Configuración del formulario
# ============================================================================

class FormConfig(BaseModel):
    """Configuración de un formulario ligado a un recordset."""
    primary_key: str = Field(..., min_length=1, description="Campo de clave primaria")
    required_fields: list[str] = Field(default_factory=list, description="Campos obligatorios")
    readonly_fields: list[str] = Field(
        default_factory=list,
        description="Campos de solo lectura (nunca editables ni capturados)",
    )
    money_fields: list[str] = Field(default_factory=list, description="Campos monetarios (1.234,56)")
    view_field_pattern: str = Field(
        default=DEFAULT_VIEW_FIELD_PATTERN,
        description="Regex de columnas de la vista que no pertenecen a la tabla",
    )
    filters: str = Field(default="", description="Filtros en cascada: 'idgrupo = 3 AND idcat = *'")

    @field_validator("view_field_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Patrón inválido: {e}")
        return v

    def is_view_field(self, name: str) -> bool:
        """True si el campo es solo de exhibición (columna de la vista)."""
        if not self.view_field_pattern:
            return False
        return re.search(self.view_field_pattern, name) is not None

    def filter_pairs(self) -> dict[str, str]:
        """
        Extrae los pares concretos de la cadena de filtros.

        Los pares con valor '*' son placeholders y se ignoran.

        Returns:
            Diccionario campo -> valor
        """
        pairs = {}
        if not self.filters:
            return pairs
        for chunk in self.filters.split(" AND "):
            if " = " not in chunk:
                continue
            name, value = chunk.split(" = ", 1)
            name, value = name.strip(), value.strip()
            if name and value and value != "*":
                pairs[name] = value
        return pairs
