"""
Modelos de datos de crudnav.

Contiene el tipo Record, los resultados Pydantic del backend y los
resultados de decisiones del guard y de acciones.
"""

from crudnav.models.base import (
    Record,
    normalize_value,
    is_blank,
    changed_fields,
    filled_fields,
)
from crudnav.models.results import (
    DEPENDENCIES_FOUND,
    FetchResult,
    WriteResult,
    Dependency,
    DeleteResult,
)
from crudnav.models.outcome import GuardDecision, ActionOutcome

__all__ = [
    # Registros
    "Record",
    "normalize_value",
    "is_blank",
    "changed_fields",
    "filled_fields",
    # Respuestas del backend
    "DEPENDENCIES_FOUND",
    "FetchResult",
    "WriteResult",
    "Dependency",
    "DeleteResult",
    # Decisiones
    "GuardDecision",
    "ActionOutcome",
]
