"""
Tests para la carga y navegación del RecordNavigator.
"""

import asyncio

import pytest

from crudnav.config import Action, Mode
from crudnav.core import RecordNavigator
from crudnav.core.guard import MSG_BUSY, MSG_EMPTY
from crudnav.errors import BackendFailure, EmptyRecordsetError, GuardRejection

from conftest import FakeCrudClient


run = asyncio.run


class TestLoad:
    """Tests para load()."""

    def test_load_shows_first(self, navigator, accessor):
        assert run(navigator.load()) == 3
        assert navigator.position == 0
        assert navigator.mode is Mode.BROWSE
        assert accessor.values == {"id": 1, "nome": "Ana", "valor": "1.234,50"}
        assert navigator.baseline["valor"] == "1.234,50"
        assert navigator.is_consistent()

    def test_fields_readonly_in_browse(self, loaded_navigator, accessor):
        assert not any(accessor.editable.values())

    def test_load_empty_enters_insert(self, form_config, accessor, feedback):
        nav = RecordNavigator(form_config, accessor, FakeCrudClient([]), feedback)
        assert run(nav.load()) == 0
        assert nav.position is None
        assert nav.mode is Mode.INSERT
        assert accessor.editable == {"id": False, "nome": True, "valor": True}
        assert nav.is_consistent()

    def test_load_failure(self, navigator, client):
        client.fail.add("fetch")
        with pytest.raises(BackendFailure):
            run(navigator.load())

    def test_load_network_error(self, navigator, client):
        client.raise_on.add("fetch")
        with pytest.raises(BackendFailure, match="sin conexión"):
            run(navigator.load())
        assert not navigator.is_busy


class TestReload:
    """Tests para recargar con el formulario abierto."""

    def test_reload_in_browse(self, loaded_navigator, client):
        loaded_navigator.last()
        assert run(loaded_navigator.load()) == 3
        assert loaded_navigator.position == 0
        assert client.operations().count("fetch") == 2

    def test_reload_while_editing(self, loaded_navigator, accessor, client):
        """Recargar en edición perdería los cambios: es rechazado."""
        loaded_navigator.next()
        loaded_navigator.edit()
        accessor.set_value("nome", "Bruna")

        with pytest.raises(GuardRejection, match="edición"):
            run(loaded_navigator.load())
        assert loaded_navigator.position == 1
        assert loaded_navigator.mode is Mode.EDIT
        assert accessor.values["nome"] == "Bruna"
        assert client.operations().count("fetch") == 1

    def test_reload_while_inserting(self, loaded_navigator, client):
        loaded_navigator.insert()
        with pytest.raises(GuardRejection, match="inclusión"):
            run(loaded_navigator.load())
        assert loaded_navigator.mode is Mode.INSERT
        assert client.operations().count("fetch") == 1

    def test_reload_while_busy(self, loaded_navigator, client):
        loaded_navigator.guard.busy = True
        with pytest.raises(GuardRejection, match=MSG_BUSY):
            run(loaded_navigator.load())
        assert client.operations().count("fetch") == 1

    def test_reload_empty_insert_without_data(self, form_config, accessor, feedback):
        """La inclusión automática de un recordset vacío admite recarga."""
        client = FakeCrudClient([])
        nav = RecordNavigator(form_config, accessor, client, feedback)
        run(nav.load())
        client.rows.append({"id": 1, "nome": "Ana", "valor": None})

        assert run(nav.load()) == 1
        assert nav.mode is Mode.BROWSE
        assert nav.position == 0

    def test_reload_empty_insert_with_data(self, form_config, accessor, feedback):
        nav = RecordNavigator(form_config, accessor, FakeCrudClient([]), feedback)
        run(nav.load())
        accessor.set_value("nome", "Algo")

        with pytest.raises(GuardRejection):
            run(nav.load())
        assert nav.mode is Mode.INSERT
        assert accessor.values["nome"] == "Algo"


class TestNavigation:
    """Tests para primeiro/anterior/proximo/ultimo."""

    def test_last(self, loaded_navigator, accessor):
        """Cursor 0 -> ultimo -> registro id=3."""
        assert loaded_navigator.last()
        assert loaded_navigator.position == 2
        assert accessor.values["nome"] == "Carla"
        assert accessor.values["valor"] == ""

    def test_next_and_previous(self, loaded_navigator):
        loaded_navigator.next()
        loaded_navigator.next()
        assert loaded_navigator.position == 2
        loaded_navigator.previous()
        assert loaded_navigator.position == 1

    def test_first_is_idempotent(self, loaded_navigator, feedback):
        """En el primer registro solo se emite la señal de límite."""
        assert not loaded_navigator.first()
        assert not loaded_navigator.previous()
        assert loaded_navigator.position == 0
        assert feedback.limits == ["primeiro", "primeiro"]

    def test_next_at_end(self, loaded_navigator, feedback):
        loaded_navigator.last()
        outcome = run(loaded_navigator.dispatch(Action.PROXIMO))
        assert outcome.ok
        assert outcome.limit_reached
        assert loaded_navigator.position == 2
        assert feedback.limits == ["ultimo"]

    def test_baseline_follows_cursor(self, loaded_navigator):
        loaded_navigator.next()
        assert loaded_navigator.baseline["nome"] == "Bruno"
        assert loaded_navigator.current()["id"] == 2

    def test_dispatch_accepts_strings(self, loaded_navigator):
        outcome = run(loaded_navigator.dispatch("ultimo"))
        assert outcome.action is Action.ULTIMO
        assert loaded_navigator.position == 2


class TestGoTo:
    """Tests para go_to()."""

    def test_go_to(self, loaded_navigator, accessor):
        assert loaded_navigator.go_to(2)
        assert accessor.values["id"] == 3

    def test_go_to_same_position(self, loaded_navigator):
        assert not loaded_navigator.go_to(0)

    def test_go_to_invalid(self, loaded_navigator):
        with pytest.raises(GuardRejection):
            loaded_navigator.go_to(3)

    def test_go_to_while_editing(self, loaded_navigator):
        loaded_navigator.edit()
        with pytest.raises(GuardRejection):
            loaded_navigator.go_to(1)
        assert loaded_navigator.position == 0


class TestGuardedNavigation:
    """Tests para rechazos del guard durante la navegación."""

    def test_empty_recordset(self, navigator, feedback):
        """Sin cargar: solo inclusión; el navegador entra en insert."""
        with pytest.raises(EmptyRecordsetError):
            navigator.next()

        outcome = run(navigator.dispatch(Action.PROXIMO))
        assert not outcome.ok
        assert outcome.message == MSG_EMPTY
        assert feedback.of("warning") == [MSG_EMPTY]
        assert navigator.mode is Mode.INSERT
        assert navigator.is_consistent()

    def test_busy(self, loaded_navigator, feedback):
        loaded_navigator.guard.busy = True
        outcome = run(loaded_navigator.dispatch(Action.ULTIMO))
        assert not outcome.ok
        assert outcome.message == MSG_BUSY
        assert loaded_navigator.position == 0

    def test_can_perform(self, loaded_navigator):
        assert loaded_navigator.can_perform(Action.PROXIMO)
        loaded_navigator.edit()
        assert not loaded_navigator.can_perform(Action.PROXIMO)
        assert loaded_navigator.can_perform("salvar")
