"""
Tests para core/guard.py - Validación previa de acciones.
"""

import pytest

from crudnav.config import Action, FormConfig, Mode
from crudnav.core.cursor import Cursor
from crudnav.core.guard import MSG_BUSY, MSG_EMPTY, MSG_NO_CHANGES, MSG_NO_DATA, ModeGuard
from crudnav.errors import EmptyRecordsetError, GuardRejection


@pytest.fixture
def cursor(sample_records):
    c = Cursor()
    c.replace_records(sample_records)
    c.move_to(1)
    return c


@pytest.fixture
def guard(cursor):
    return ModeGuard(cursor)


@pytest.fixture
def config():
    return FormConfig(primary_key="id", required_fields=["nome"], money_fields=["valor"])


class TestCanPerform:
    """Tests para las reglas del guard."""

    def test_browse_allows_everything(self, guard):
        for action in Action:
            assert guard.can_perform(action).allowed

    @pytest.mark.parametrize("mode", [Mode.EDIT, Mode.INSERT])
    def test_dirty_mode_only_save_or_finish(self, guard, cursor, mode):
        cursor.transition(mode)
        for action in Action:
            decision = guard.can_perform(action)
            assert decision.allowed == (action in (Action.SALVAR, Action.ENCERRAR))

    def test_dirty_mode_message(self, guard, cursor):
        cursor.transition(Mode.EDIT)
        decision = guard.can_perform(Action.PROXIMO)
        assert "edición" in decision.reason
        assert "Encerrar" in decision.reason

    def test_empty_recordset_browse(self):
        c = Cursor()
        guard = ModeGuard(c)
        decision = guard.can_perform(Action.PROXIMO)
        assert not decision.allowed
        assert decision.empty_recordset
        assert decision.reason == MSG_EMPTY
        assert guard.can_perform(Action.INCLUIR).allowed
        assert guard.can_perform(Action.ENCERRAR).allowed

    def test_busy(self, guard):
        guard.busy = True
        decision = guard.can_perform(Action.PRIMEIRO)
        assert not decision.allowed
        assert decision.reason == MSG_BUSY

    def test_closed(self, guard):
        guard.closed = True
        assert not guard.can_perform(Action.INCLUIR).allowed

    def test_finish_confirmation_edit(self, guard, cursor):
        cursor.transition(Mode.EDIT)
        baseline = {"nome": "Bruno"}
        assert not guard.can_perform(Action.ENCERRAR, {"nome": "Bruno"}, baseline).needs_confirmation
        assert guard.can_perform(Action.ENCERRAR, {"nome": "Beto"}, baseline).needs_confirmation

    def test_finish_confirmation_insert(self, guard, cursor):
        cursor.transition(Mode.INSERT)
        assert not guard.can_perform(Action.ENCERRAR, {"nome": ""}).needs_confirmation
        assert guard.can_perform(Action.ENCERRAR, {"nome": "X"}).needs_confirmation


class TestRequire:
    """Tests para require()."""

    def test_raises_guard_rejection(self, guard, cursor):
        cursor.transition(Mode.EDIT)
        with pytest.raises(GuardRejection):
            guard.require(Action.ULTIMO)

    def test_raises_empty(self):
        guard = ModeGuard(Cursor())
        with pytest.raises(EmptyRecordsetError):
            guard.require(Action.EDITAR)


class TestSaveChecks:
    """Tests para las precondiciones de salvar."""

    def test_save_in_browse(self, guard):
        with pytest.raises(GuardRejection):
            guard.check_save_state()

    def test_no_changes(self, guard, cursor, config):
        cursor.transition(Mode.EDIT)
        values = {"nome": "Bruno", "valor": "10,00"}
        with pytest.raises(GuardRejection, match=MSG_NO_CHANGES):
            guard.check_save_values(values, dict(values), config)

    def test_no_data(self, guard, cursor, config):
        cursor.transition(Mode.INSERT)
        with pytest.raises(GuardRejection, match=MSG_NO_DATA):
            guard.check_save_values({"nome": "", "valor": ""}, {}, config)

    def test_missing_required(self, guard, cursor, config):
        cursor.transition(Mode.INSERT)
        with pytest.raises(GuardRejection) as exc:
            guard.check_save_values({"nome": "", "valor": "5"}, {}, config)
        assert exc.value.missing_fields == ["nome"]
        assert "nome" in exc.value.reason

    def test_invalid_money(self, guard, cursor, config):
        cursor.transition(Mode.INSERT)
        with pytest.raises(GuardRejection, match="valor"):
            guard.check_save_values({"nome": "X", "valor": "12a"}, {}, config)

    def test_valid(self, guard, cursor, config):
        cursor.transition(Mode.EDIT)
        guard.check_save_values(
            {"nome": "Beto", "valor": "10,00"},
            {"nome": "Bruno", "valor": "10,00"},
            config,
        )
