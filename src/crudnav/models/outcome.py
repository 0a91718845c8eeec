"""
Resultados de decisiones del guard y de acciones despachadas.
"""

from dataclasses import dataclass
from typing import Optional

from crudnav.config import Action


@dataclass(frozen=True)
class GuardDecision:
    """Decisión del guard sobre una acción solicitada."""
    allowed: bool
    reason: Optional[str] = None
    needs_confirmation: bool = False  # Solo para encerrar con cambios pendientes
    empty_recordset: bool = False  # Rechazo por recordset vacío

    @classmethod
    def allow(cls, needs_confirmation: bool = False) -> "GuardDecision":
        return cls(True, needs_confirmation=needs_confirmation)

    @classmethod
    def reject(cls, reason: str, empty_recordset: bool = False) -> "GuardDecision":
        return cls(False, reason=reason, empty_recordset=empty_recordset)


@dataclass(frozen=True)
class ActionOutcome:
    """Resultado de despachar una acción desde la UI."""
    action: Action
    ok: bool
    message: str = ""
    limit_reached: bool = False
    cancelled: bool = False  # Usuario respondió 'no' a una confirmación
