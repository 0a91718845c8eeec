"""
Reconciliación del cursor tras una escritura.

Luego de insert/update el backend devuelve el recordset completo, que
puede venir reordenado o filtrado. La nueva posición se localiza por
identidad (clave primaria), nunca por el índice anterior.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from crudnav.errors import ReconciliationMiss
from crudnav.models import Record


@dataclass(frozen=True)
class Reconciliation:
    """Posición resuelta tras reconciliar."""
    position: int
    primary_key: Any = None
    warning: str = ""


def index_of(records: Sequence[Record], pk_field: str, pk_value: Any) -> Optional[int]:
    """Índice del registro con la clave dada, o None."""
    for idx, record in enumerate(records):
        if record.get(pk_field) == pk_value:
            return idx
    return None


def _miss(records: Sequence[Record], pk_value: Any, message: str) -> ReconciliationMiss:
    # Posición 0, o vacío si el recordset quedó sin registros
    return ReconciliationMiss(
        message,
        primary_key=pk_value,
        fallback_position=0 if records else None,
    )


def reconcile_update(records: Sequence[Record], pk_field: str, pk_value: Any) -> Reconciliation:
    """
    Localiza el registro editado en el recordset actualizado.

    Raises:
        ReconciliationMiss: la clave no está en el recordset
    """
    idx = index_of(records, pk_field, pk_value)
    if idx is None:
        raise _miss(
            records, pk_value,
            f"Registro {pk_field}={pk_value} no encontrado en el recordset actualizado",
        )
    return Reconciliation(position=idx, primary_key=pk_value)


def reconcile_insert(
    old_records: Sequence[Record],
    new_records: Sequence[Record],
    pk_field: str,
    new_pk: Any = None,
) -> Reconciliation:
    """
    Localiza el registro recién creado.

    Usa la clave devuelta por el backend si existe; si no, busca la clave
    presente en el recordset nuevo y ausente del anterior.

    Args:
        old_records: Recordset previo a la inclusión
        new_records: Recordset devuelto por el backend
        pk_field: Nombre del campo de clave primaria
        new_pk: Clave del registro creado, si el backend la informa

    Returns:
        Reconciliation con la posición del nuevo registro

    Raises:
        ReconciliationMiss: no se encontró ninguna clave nueva
    """
    if new_pk is not None:
        idx = index_of(new_records, pk_field, new_pk)
        if idx is not None:
            return Reconciliation(position=idx, primary_key=new_pk)

    old_keys = {r.get(pk_field) for r in old_records}
    candidates = [
        (idx, r.get(pk_field))
        for idx, r in enumerate(new_records)
        if r.get(pk_field) not in old_keys
    ]

    if not candidates:
        raise _miss(
            new_records, new_pk,
            "No se pudo localizar el registro incluido en el recordset actualizado",
        )

    idx, pk_value = candidates[0]
    if len(candidates) > 1:
        keys = ", ".join(str(pk) for _, pk in candidates)
        return Reconciliation(
            position=idx,
            primary_key=pk_value,
            warning=f"Varias claves nuevas en el recordset ({keys}); se usa la primera",
        )
    return Reconciliation(position=idx, primary_key=pk_value)


def position_after_delete(remaining: int, removed_index: int) -> Optional[int]:
    """
    Posición tras eliminar el registro en removed_index.

    Retrocede una posición; si era el primero y quedan registros,
    se queda en 0. Recordset vacío -> None.
    """
    if remaining <= 0:
        return None
    position = removed_index - 1
    if position < 0:
        return 0
    return min(position, remaining - 1)
