"""
Jerarquía de excepciones del navegador de registros.

- GuardRejection: la acción no se ejecuta, el estado no cambia.
- EmptyRecordsetError: no hay registros, solo se permite inclusión.
- BackendFailure: el backend falló o respondió success=False.
- ReconciliationMiss: la clave esperada no aparece en el recordset devuelto.
- InvalidTransition: transición de modo no permitida.
"""

from typing import Optional


class NavigatorError(Exception):
    """Error base del navegador."""


class GuardRejection(NavigatorError):
    """Acción rechazada por la validación previa."""

    def __init__(self, reason: str, missing_fields: Optional[list[str]] = None):
        super().__init__(reason)
        self.reason = reason
        self.missing_fields = list(missing_fields or [])


class EmptyRecordsetError(GuardRejection):
    """El recordset está vacío; solo inclusión está permitida."""

    def __init__(self, reason: str = "La tabla no posee registros, solo se permite inclusión."):
        super().__init__(reason)


class BackendFailure(NavigatorError):
    """Fallo reportado por el backend o error de red."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation


class ReconciliationMiss(NavigatorError):
    """La clave primaria esperada no está en el recordset actualizado."""

    def __init__(self, message: str, primary_key=None, fallback_position: Optional[int] = None):
        super().__init__(message)
        self.primary_key = primary_key
        self.fallback_position = fallback_position


class InvalidTransition(NavigatorError):
    """Transición de modo inválida en la máquina de estados."""
