"""
Validación previa de acciones (Mode Guard).

Punto único que impide perder datos navegando en medio de una edición
o inclusión, y que valida las precondiciones de salvar.
"""

from typing import Any, Mapping, Optional

from crudnav.config import Action, FormConfig, Mode
from crudnav.core.cursor import Cursor
from crudnav.core.fields import is_valid_money
from crudnav.errors import EmptyRecordsetError, GuardRejection
from crudnav.models import GuardDecision, changed_fields, filled_fields, is_blank


MSG_EMPTY = "La tabla no posee registros, solo se permite inclusión."
MSG_BUSY = "Hay una operación en curso. Espere a que termine."
MSG_INVALID_SAVE = "Para salvar es necesario estar en modo de edición o inclusión."
MSG_NO_CHANGES = "No se detectó ninguna alteración en el registro."
MSG_NO_DATA = "No se ingresó ningún dato para la inclusión."
MSG_CLOSED = "El formulario está cerrado."


def in_progress_message(mode: Mode) -> str:
    operation = "edición" if mode is Mode.EDIT else "inclusión"
    return (
        f"Un proceso de {operation} está en curso. "
        f"Para salir del proceso use 'Encerrar' o 'Salvar'."
    )


class ModeGuard:
    """Decide si una acción es legal dado el modo y el recordset."""

    def __init__(self, cursor: Cursor):
        self._cursor = cursor
        self.busy = False
        self.closed = False

    def can_perform(
        self,
        action: Action,
        current_values: Optional[Mapping[str, Any]] = None,
        baseline: Optional[Mapping[str, Any]] = None,
    ) -> GuardDecision:
        """
        Evalúa las reglas del guard en orden.

        Args:
            action: Acción solicitada
            current_values: Valores actuales de los campos
            baseline: Snapshot de referencia del registro actual

        Returns:
            GuardDecision con allowed, reason y needs_confirmation
        """
        mode = self._cursor.mode

        if self.closed:
            return GuardDecision.reject(MSG_CLOSED)
        if self.busy:
            return GuardDecision.reject(MSG_BUSY)

        # Regla 1: edición/inclusión pendiente
        if mode.is_dirty and action not in (Action.SALVAR, Action.ENCERRAR):
            return GuardDecision.reject(in_progress_message(mode))

        # Regla 2: recordset vacío en browse
        if (
            mode is Mode.BROWSE
            and self._cursor.is_empty
            and action not in (Action.INCLUIR, Action.ENCERRAR)
        ):
            return GuardDecision.reject(MSG_EMPTY, empty_recordset=True)

        if action is Action.ENCERRAR and mode.is_dirty:
            return GuardDecision.allow(
                needs_confirmation=self.has_pending_changes(mode, current_values or {}, baseline or {})
            )

        return GuardDecision.allow()

    def require(
        self,
        action: Action,
        current_values: Optional[Mapping[str, Any]] = None,
        baseline: Optional[Mapping[str, Any]] = None,
    ) -> GuardDecision:
        """Como can_perform, pero lanza la excepción correspondiente si rechaza."""
        decision = self.can_perform(action, current_values, baseline)
        if not decision.allowed:
            if decision.empty_recordset:
                raise EmptyRecordsetError(decision.reason)
            raise GuardRejection(decision.reason)
        return decision

    @staticmethod
    def has_pending_changes(
        mode: Mode,
        current_values: Mapping[str, Any],
        baseline: Mapping[str, Any],
    ) -> bool:
        """Edit: difiere del baseline. Insert: algún campo no vacío."""
        if mode is Mode.EDIT:
            return bool(changed_fields(current_values, baseline))
        if mode is Mode.INSERT:
            return bool(filled_fields(current_values))
        return False

    # ========================================================================
    # Precondiciones de salvar
    # ========================================================================

    def check_save_state(self) -> None:
        """El modo debe ser edit o insert."""
        if not self._cursor.mode.is_dirty:
            raise GuardRejection(MSG_INVALID_SAVE)

    def check_save_values(
        self,
        current_values: Mapping[str, Any],
        baseline: Mapping[str, Any],
        config: FormConfig,
    ) -> None:
        """
        Valida los valores antes de enviar al backend.

        Raises:
            GuardRejection: sin cambios, sin datos, obligatorios vacíos
                o formato monetario inválido
        """
        mode = self._cursor.mode

        if mode is Mode.EDIT and not changed_fields(current_values, baseline):
            raise GuardRejection(MSG_NO_CHANGES)

        if mode is Mode.INSERT and not filled_fields(current_values):
            raise GuardRejection(MSG_NO_DATA)

        missing = [name for name in config.required_fields if is_blank(current_values.get(name))]
        if missing:
            raise GuardRejection(
                f"Los siguientes campos obligatorios están vacíos: {', '.join(missing)}",
                missing_fields=missing,
            )

        for name in config.money_fields:
            if name in current_values and not is_valid_money(current_values[name]):
                raise GuardRejection(
                    f"Campo '{name}': contiene caracteres inválidos. "
                    f"Use solo números, punto (.) y coma (,)"
                )
