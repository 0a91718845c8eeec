"""Configuración de pytest para tests de crudnav."""

import asyncio

import pytest

from crudnav.config import FormConfig
from crudnav.core import RecordNavigator
from crudnav.interfaces import DictFieldAccessor
from crudnav.models import (
    DEPENDENCIES_FOUND,
    DeleteResult,
    FetchResult,
    WriteResult,
)


class FakeCrudClient:
    """
    CrudClient en memoria.

    Permite simular fallos, excepciones de red, reordenamiento del
    recordset y dependencias al eliminar.
    """

    def __init__(self, records, pk="id", sort_key=None):
        self.pk = pk
        self.rows = [dict(r) for r in records]
        self.sort_key = sort_key
        self.return_refreshed = True
        self.report_pk = True
        self.fail = set()       # operaciones que responden success=False
        self.raise_on = set()   # operaciones que lanzan excepción
        self.dependencies = {}  # pk -> list[Dependency]
        self.calls = []
        self.next_id = max((r[pk] for r in self.rows), default=0) + 1

    def _snapshot(self):
        rows = [dict(r) for r in self.rows]
        if self.sort_key:
            rows.sort(key=lambda r: r[self.sort_key])
        return rows

    def _check(self, operation):
        if operation in self.raise_on:
            raise ConnectionError("sin conexión")

    def _index(self, pk_value):
        for idx, row in enumerate(self.rows):
            if row[self.pk] == pk_value:
                return idx
        return None

    async def fetch_all(self):
        self.calls.append(("fetch", None))
        self._check("fetch")
        if "fetch" in self.fail:
            return FetchResult(success=False, message="Error al consultar")
        return FetchResult(success=True, records=self._snapshot(), message="sucesso")

    async def insert(self, record):
        self.calls.append(("insert", dict(record)))
        self._check("insert")
        if "insert" in self.fail:
            return WriteResult(success=False, message="Error en la inclusión")

        row = dict(record)
        if not row.get(self.pk):
            row[self.pk] = self.next_id
            self.next_id += 1
        self.rows.append(row)
        return WriteResult(
            success=True,
            message="Registro incluido",
            refreshed_records=self._snapshot() if self.return_refreshed else None,
            primary_key=row[self.pk] if self.report_pk else None,
        )

    async def update(self, record):
        self.calls.append(("update", dict(record)))
        self._check("update")
        idx = self._index(record.get(self.pk))
        if "update" in self.fail or idx is None:
            return WriteResult(success=False, message="Error en la actualización")

        self.rows[idx].update(record)
        return WriteResult(
            success=True,
            message="Registro actualizado",
            refreshed_records=self._snapshot() if self.return_refreshed else None,
        )

    async def delete(self, primary_key, force=False):
        self.calls.append(("delete", (primary_key, force)))
        self._check("delete")
        if "delete" in self.fail:
            return DeleteResult(success=False, message="Error en la eliminación")

        deps = self.dependencies.get(primary_key)
        if deps and not force:
            return DeleteResult(
                success=False,
                message="El registro posee dependencias",
                error=DEPENDENCIES_FOUND,
                dependencies=deps,
            )

        idx = self._index(primary_key)
        if idx is None:
            return DeleteResult(success=False, message="Registro no encontrado")
        self.rows.pop(idx)
        return DeleteResult(success=True, message="Registro eliminado")

    def operations(self):
        return [op for op, _ in self.calls]


class ScriptedFeedback:
    """Feedback que registra mensajes y responde confirmaciones en orden."""

    def __init__(self, answers=None, default=True):
        self.answers = list(answers or [])
        self.default = default
        self.questions = []
        self.messages = []
        self.limits = []

    def confirm(self, message):
        self.questions.append(message)
        if self.answers:
            return self.answers.pop(0)
        return self.default

    def info(self, message):
        self.messages.append(("info", message))

    def success(self, message):
        self.messages.append(("success", message))

    def warning(self, message):
        self.messages.append(("warning", message))

    def error(self, message):
        self.messages.append(("error", message))

    def limit_reached(self, boundary):
        self.limits.append(boundary)

    def of(self, level):
        return [text for lvl, text in self.messages if lvl == level]


@pytest.fixture
def sample_records():
    """Recordset de ejemplo con tres grupos."""
    return [
        {"id": 1, "nome": "Ana", "valor": 1234.5},
        {"id": 2, "nome": "Bruno", "valor": 10.0},
        {"id": 3, "nome": "Carla", "valor": None},
    ]


@pytest.fixture
def form_config():
    """Configuración típica: clave oculta, nombre obligatorio, valor monetario."""
    return FormConfig(
        primary_key="id",
        required_fields=["nome"],
        readonly_fields=["id"],
        money_fields=["valor"],
    )


@pytest.fixture
def accessor():
    return DictFieldAccessor(["id", "nome", "valor"])


@pytest.fixture
def client(sample_records):
    return FakeCrudClient(sample_records)


@pytest.fixture
def feedback():
    return ScriptedFeedback()


@pytest.fixture
def navigator(form_config, accessor, client, feedback):
    """Navegador sin cargar."""
    return RecordNavigator(form_config, accessor, client, feedback)


@pytest.fixture
def loaded_navigator(navigator):
    """Navegador con el recordset de ejemplo cargado (cursor en 0)."""
    asyncio.run(navigator.load())
    return navigator
