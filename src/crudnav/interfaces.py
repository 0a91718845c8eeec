"""
Contratos de los colaboradores externos del navegador.

- FieldAccessor: lee/escribe valores de los controles del formulario
- CrudClient: operaciones remotas asíncronas
- Feedback: mensajes y confirmaciones al usuario
"""

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from crudnav.models import Record, FetchResult, WriteResult, DeleteResult


@runtime_checkable
class FieldAccessor(Protocol):
    """Acceso a los controles del formulario por nombre."""

    def field_names(self) -> list[str]: ...

    def get_value(self, name: str) -> Any: ...

    def set_value(self, name: str, value: Any) -> None: ...

    def set_editable(self, name: str, editable: bool) -> None: ...


@runtime_checkable
class CrudClient(Protocol):
    """Cliente CRUD remoto (asíncrono)."""

    async def fetch_all(self) -> FetchResult: ...

    async def insert(self, record: Record) -> WriteResult: ...

    async def update(self, record: Record) -> WriteResult: ...

    async def delete(self, primary_key: Any, force: bool = False) -> DeleteResult: ...


@runtime_checkable
class Feedback(Protocol):
    """Canal de mensajes y confirmaciones hacia el usuario."""

    def confirm(self, message: str) -> bool: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def limit_reached(self, boundary: str) -> None: ...


class DictFieldAccessor:
    """
    FieldAccessor en memoria.

    Mantiene los valores y el estado de edición de cada campo en
    diccionarios. Usado por la interfaz de terminal y en tests.
    """

    def __init__(self, names: Iterable[str], values: Optional[dict] = None):
        self._names = list(names)
        self.values: dict[str, Any] = {name: "" for name in self._names}
        self.editable: dict[str, bool] = {name: False for name in self._names}
        if values:
            for name, value in values.items():
                self.set_value(name, value)

    def field_names(self) -> list[str]:
        return list(self._names)

    def get_value(self, name: str) -> Any:
        if name not in self.values:
            raise KeyError(f"Campo inexistente: {name}")
        return self.values[name]

    def set_value(self, name: str, value: Any) -> None:
        if name not in self.values:
            raise KeyError(f"Campo inexistente: {name}")
        self.values[name] = "" if value is None else value

    def set_editable(self, name: str, editable: bool) -> None:
        if name not in self.editable:
            raise KeyError(f"Campo inexistente: {name}")
        self.editable[name] = editable

    def is_editable(self, name: str) -> bool:
        return self.editable.get(name, False)
