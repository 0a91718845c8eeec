"""
Cursor y máquina de estados de modo.

El Cursor posee el recordset cacheado, la posición actual (índice o
None para "vacío"), el modo activo y el baseline del registro actual.
"""

from typing import Optional, Sequence

from crudnav.config import Mode
from crudnav.errors import InvalidTransition
from crudnav.models import Record


EMPTY = None

# Transiciones permitidas por acción del usuario
TRANSITIONS = {
    Mode.BROWSE: {Mode.BROWSE, Mode.EDIT, Mode.INSERT},
    Mode.EDIT: {Mode.BROWSE},
    Mode.INSERT: {Mode.BROWSE},
}


class Cursor:
    """Posición sobre el recordset cacheado más el modo activo."""

    def __init__(self) -> None:
        self._records: list[Record] = []
        self._position: Optional[int] = EMPTY
        self._mode: Mode = Mode.BROWSE
        self._baseline: Record = {}

    # ========================================================================
    # Lectura
    # ========================================================================

    @property
    def records(self) -> tuple[Record, ...]:
        """Copia inmutable del recordset."""
        return tuple(dict(r) for r in self._records)

    @property
    def position(self) -> Optional[int]:
        return self._position

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def baseline(self) -> Record:
        """Copia del baseline actual."""
        return dict(self._baseline)

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def current(self) -> Optional[Record]:
        """Registro en la posición actual o None."""
        if self._position is EMPTY or not self._records:
            return None
        return dict(self._records[self._position])

    def record_at(self, index: int) -> Record:
        return dict(self._records[index])

    def is_consistent(self) -> bool:
        """Verifica el invariante posición/modo/recordset."""
        if not self._records:
            return self._position is EMPTY and self._mode is Mode.INSERT
        if self._mode is Mode.INSERT and self._position is EMPTY:
            return False
        return self._position is not EMPTY and 0 <= self._position < len(self._records)

    # ========================================================================
    # Mutación
    # ========================================================================

    def replace_records(self, records: Sequence[Record]) -> None:
        """Reemplaza el recordset completo (nunca se modifica in situ)."""
        self._records = [dict(r) for r in records]

    def remove_at(self, index: int) -> Record:
        """Quita el registro en index del recordset."""
        if not 0 <= index < len(self._records):
            raise IndexError(f"Índice fuera de rango: {index}")
        return self._records.pop(index)

    def move_to(self, index: int) -> None:
        """Mueve el cursor y vuelve a modo browse."""
        if not 0 <= index < len(self._records):
            raise IndexError(f"Índice fuera de rango: {index} (total {len(self._records)})")
        self._position = index
        self._mode = Mode.BROWSE

    def transition(self, target: Mode) -> None:
        """Cambia el modo validando la transición."""
        if target not in TRANSITIONS[self._mode]:
            raise InvalidTransition(f"Transición inválida: {self._mode.value} -> {target.value}")
        if target is Mode.EDIT and self._position is EMPTY:
            raise InvalidTransition("No hay registro actual para editar")
        self._mode = target

    def set_baseline(self, baseline: Record) -> None:
        self._baseline = dict(baseline)

    def force_empty(self) -> None:
        """Recordset vacío: posición vacía y entrada automática a insert."""
        self._records = []
        self._position = EMPTY
        self._mode = Mode.INSERT
        self._baseline = {}

    def reset(self) -> None:
        """Estado inicial (cierre del formulario)."""
        self._records = []
        self._position = EMPTY
        self._mode = Mode.BROWSE
        self._baseline = {}
