"""
Núcleo del navegador de registros.

- cursor: Recordset cacheado, posición y máquina de estados de modo
- guard: Validación previa de acciones y precondiciones de salvar
- reconciler: Reposicionamiento del cursor por clave primaria
- fields: Captura y población de los controles del formulario
- navigator: Orquestación de acciones (RecordNavigator)
"""

from crudnav.core.cursor import Cursor, EMPTY
from crudnav.core.guard import ModeGuard
from crudnav.core.reconciler import (
    Reconciliation,
    reconcile_update,
    reconcile_insert,
    position_after_delete,
)
from crudnav.core.navigator import RecordNavigator

__all__ = [
    "Cursor",
    "EMPTY",
    "ModeGuard",
    "Reconciliation",
    "reconcile_update",
    "reconcile_insert",
    "position_after_delete",
    "RecordNavigator",
]
