"""
crudnav - Navegador de registros para formularios CRUD.

Mantiene un cursor sobre el recordset del formulario, garantiza modos
exclusivos (browse/edit/insert) y reconcilia la posición con el
backend luego de cada escritura.
"""

__version__ = "0.1.0"

from crudnav.config import Action, Mode, FormConfig
from crudnav.core import RecordNavigator
from crudnav.errors import (
    NavigatorError,
    GuardRejection,
    EmptyRecordsetError,
    BackendFailure,
    ReconciliationMiss,
    InvalidTransition,
)
from crudnav.interfaces import FieldAccessor, CrudClient, Feedback, DictFieldAccessor

__all__ = [
    "Action",
    "Mode",
    "FormConfig",
    "RecordNavigator",
    "NavigatorError",
    "GuardRejection",
    "EmptyRecordsetError",
    "BackendFailure",
    "ReconciliationMiss",
    "InvalidTransition",
    "FieldAccessor",
    "CrudClient",
    "Feedback",
    "DictFieldAccessor",
]
