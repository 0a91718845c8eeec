"""
Navegador de registros: orquesta cursor, guard, reconciliación y
comunicación con el backend para un formulario activo.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

from crudnav.config import Action, FormConfig, Mode
from crudnav.core import fields
from crudnav.core.cursor import Cursor
from crudnav.core.guard import ModeGuard, MSG_BUSY, MSG_EMPTY, in_progress_message
from crudnav.core.reconciler import (
    Reconciliation,
    reconcile_insert,
    reconcile_update,
    position_after_delete,
)
from crudnav.errors import (
    BackendFailure,
    EmptyRecordsetError,
    GuardRejection,
    NavigatorError,
    ReconciliationMiss,
)
from crudnav.interfaces import CrudClient, FieldAccessor, Feedback
from crudnav.models import ActionOutcome, Record, changed_fields


T = TypeVar("T")

# Límite señalado por cada acción de navegación
BOUNDARY_FIRST = "primeiro"
BOUNDARY_LAST = "ultimo"


class RecordNavigator:
    """
    Máquina de estados CRUD de un formulario.

    Posee el recordset cacheado, el cursor, el modo y el baseline.
    Los métodos de acción lanzan NavigatorError; dispatch() los
    captura, informa al usuario y retorna un ActionOutcome.
    """

    def __init__(
        self,
        config: FormConfig,
        accessor: FieldAccessor,
        client: CrudClient,
        feedback: Feedback,
    ):
        """
        Inicializa el navegador.

        Args:
            config: Configuración del formulario (clave primaria, obligatorios...)
            accessor: Acceso a los controles del formulario
            client: Cliente CRUD asíncrono
            feedback: Mensajes y confirmaciones al usuario
        """
        self.config = config
        self._fields = accessor
        self._client = client
        self._feedback = feedback
        self._cursor = Cursor()
        self._guard = ModeGuard(self._cursor)

    # ========================================================================
    # Estado
    # ========================================================================

    @property
    def mode(self) -> Mode:
        return self._cursor.mode

    @property
    def position(self) -> Optional[int]:
        return self._cursor.position

    @property
    def records(self) -> tuple[Record, ...]:
        return self._cursor.records

    @property
    def baseline(self) -> Record:
        return self._cursor.baseline

    @property
    def guard(self) -> ModeGuard:
        return self._guard

    @property
    def is_open(self) -> bool:
        return not self._guard.closed

    @property
    def is_busy(self) -> bool:
        return self._guard.busy

    def current(self) -> Optional[Record]:
        """Registro en la posición del cursor."""
        return self._cursor.current()

    def is_consistent(self) -> bool:
        return self._cursor.is_consistent()

    def field_values(self) -> Record:
        """Valores capturables tal como se muestran."""
        return fields.raw_values(self._fields, self.config)

    def can_perform(self, action: Action) -> bool:
        """Consulta al guard sin ejecutar la acción."""
        decision = self._guard.can_perform(Action(action), self.field_values(), self._cursor.baseline)
        return decision.allowed

    # ========================================================================
    # Carga inicial
    # ========================================================================

    async def load(self) -> int:
        """
        Consulta el recordset completo y muestra el primer registro.

        Con recordset vacío entra automáticamente en modo inclusión.

        Returns:
            Cantidad de registros cargados
        """
        self._check_reload()
        result = await self._call("fetch", self._client.fetch_all())
        if not result.success:
            raise BackendFailure(result.message or "Error al consultar datos", "fetch")

        self._guard.closed = False
        self._cursor.replace_records(result.records)
        if self._cursor.is_empty:
            self._enter_empty()
        else:
            self._show(0)
        return len(self._cursor)

    def _check_reload(self) -> None:
        """
        Recargar solo es seguro en browse y sin peticiones en curso.

        La inclusión automática de un recordset vacío sin datos tipeados
        también puede recargarse.
        """
        if self._guard.busy:
            raise GuardRejection(MSG_BUSY)
        mode = self._cursor.mode
        if not mode.is_dirty:
            return
        if self._cursor.is_empty and not self._guard.has_pending_changes(
            mode, self.field_values(), self._cursor.baseline
        ):
            return
        raise GuardRejection(in_progress_message(mode))

    # ========================================================================
    # Navegación
    # ========================================================================

    def first(self) -> bool:
        return self._navigate(Action.PRIMEIRO)

    def previous(self) -> bool:
        return self._navigate(Action.ANTERIOR)

    def next(self) -> bool:
        return self._navigate(Action.PROXIMO)

    def last(self) -> bool:
        return self._navigate(Action.ULTIMO)

    def go_to(self, index: int) -> bool:
        """Salta al registro en index (usado por selects de búsqueda)."""
        # Mismas reglas que la navegación secuencial
        self._guard.require(Action.PRIMEIRO)
        if not 0 <= index < len(self._cursor):
            raise GuardRejection(f"Índice inválido: {index}")
        if index == self._cursor.position:
            return False
        self._show(index)
        return True

    def _navigate(self, action: Action) -> bool:
        """Mueve el cursor; en el límite solo emite la señal y retorna False."""
        self._guard.require(action)

        position = self._cursor.position
        last = len(self._cursor) - 1

        if action is Action.PRIMEIRO:
            target, boundary = 0, BOUNDARY_FIRST
        elif action is Action.ULTIMO:
            target, boundary = last, BOUNDARY_LAST
        elif action is Action.PROXIMO:
            target, boundary = min(position + 1, last), BOUNDARY_LAST
        elif action is Action.ANTERIOR:
            target, boundary = max(position - 1, 0), BOUNDARY_FIRST
        else:
            raise ValueError(f"Acción de navegación desconocida: {action}")

        if target == position:
            self._feedback.limit_reached(boundary)
            return False

        self._show(target)
        return True

    # ========================================================================
    # Cambios de modo
    # ========================================================================

    def edit(self) -> None:
        """browse -> edit."""
        self._guard.require(Action.EDITAR)
        self._cursor.transition(Mode.EDIT)
        fields.apply_mode(self._fields, Mode.EDIT, self.config)

    def insert(self) -> None:
        """browse -> insert, con los campos limpios."""
        self._guard.require(Action.INCLUIR)
        self._cursor.transition(Mode.INSERT)
        fields.clear(self._fields)
        fields.apply_mode(self._fields, Mode.INSERT, self.config)

    def finish(self) -> bool:
        """
        Acción encerrar.

        En edit/insert descarta la operación pendiente (confirmando si hay
        cambios); en browse cierra el formulario.

        Returns:
            False si el usuario no confirmó el descarte
        """
        values = self.field_values()
        decision = self._guard.require(Action.ENCERRAR, values, self._cursor.baseline)
        mode = self._cursor.mode

        if mode is Mode.BROWSE:
            self.close()
            return True

        if decision.needs_confirmation and not self._feedback.confirm(
            self._discard_question(mode, values)
        ):
            return False

        if mode is Mode.EDIT:
            fields.populate(self._fields, self._cursor.baseline, self.config)
            self._cursor.transition(Mode.BROWSE)
            fields.apply_mode(self._fields, Mode.BROWSE, self.config)
            return True

        # Inclusión
        if self._cursor.is_empty:
            if not decision.needs_confirmation:
                self.close()
                return True
            fields.clear(self._fields)
            self._feedback.info(MSG_EMPTY)
            return True

        self._show(self._cursor.position)
        return True

    def _discard_question(self, mode: Mode, values: Record) -> str:
        if mode is Mode.EDIT:
            changed = changed_fields(values, self._cursor.baseline)
            return (
                f"Los siguientes campos fueron alterados: {', '.join(changed)}\n\n"
                f"¿Desea descartar las alteraciones y encerrar la edición?"
            )
        return (
            "Se completaron campos durante la inclusión.\n\n"
            "¿Desea encerrar el proceso de inclusión?"
        )

    def close(self) -> None:
        """Cierre del formulario: limpia recordset, cursor y campos."""
        self._cursor.reset()
        fields.clear(self._fields)
        fields.apply_mode(self._fields, Mode.BROWSE, self.config)
        self._guard.closed = True

    # ========================================================================
    # Salvar
    # ========================================================================

    async def save(self) -> bool:
        """
        Acción salvar: update en edit, insert en inclusión.

        Returns:
            False si el usuario no confirmó
        """
        self._guard.require(Action.SALVAR)
        self._guard.check_save_state()

        if not self._feedback.confirm("¿Desea realmente salvar las alteraciones?"):
            return False

        baseline = self._cursor.baseline
        self._guard.check_save_values(self.field_values(), baseline, self.config)
        captured = fields.capture_values(self._fields, self.config)

        if self._cursor.mode is Mode.EDIT:
            await self._commit_update(captured, baseline)
        else:
            await self._commit_insert(captured)
        return True

    async def _commit_update(self, captured: Record, baseline: Record) -> None:
        pk = self.config.primary_key
        current = self._cursor.current()
        pk_value = current.get(pk) if current else baseline.get(pk)

        # Registro cacheado (valores crudos) + valores de los controles:
        # la clave oculta y los campos no capturados viajan sin formato
        payload = {**(current if current is not None else baseline), **captured}

        result = await self._call("update", self._client.update(payload))
        if not result.success:
            raise BackendFailure(result.message or "Error en la actualización", "update")

        records = result.refreshed_records
        if records is None:
            records = await self._refetch()
        self._apply(records, lambda: reconcile_update(records, pk, pk_value))
        self._feedback.success(result.message or "Registro actualizado con éxito")

    async def _commit_insert(self, captured: Record) -> None:
        pk = self.config.primary_key
        old_records = self._cursor.records

        result = await self._call("insert", self._client.insert(captured))
        if not result.success:
            raise BackendFailure(result.message or "Error en la inclusión", "insert")

        records = result.refreshed_records
        if records is None:
            records = await self._refetch()
        self._apply(records, lambda: reconcile_insert(old_records, records, pk, result.primary_key))
        self._feedback.success(result.message or "Registro incluido con éxito")

    async def _refetch(self) -> list[Record]:
        """Recordset actual cuando la escritura no lo devuelve."""
        try:
            result = await self._call("fetch", self._client.fetch_all())
        except BackendFailure as e:
            self._feedback.warning(f"No se pudo actualizar el recordset: {e.message}")
            return list(self._cursor.records)
        if not result.success:
            self._feedback.warning(f"No se pudo actualizar el recordset: {result.message}")
            return list(self._cursor.records)
        return result.records

    def _apply(self, records: list[Record], reconcile: Callable[[], Reconciliation]) -> None:
        """
        Reemplaza el recordset y posiciona el cursor reconciliado.

        Si la clave esperada no aparece, el cursor cae en la posición de
        respaldo (0 o vacío) y se avisa al usuario.
        """
        self._cursor.replace_records(records)
        try:
            reconciliation = reconcile()
            position = reconciliation.position
            if reconciliation.warning:
                self._feedback.warning(reconciliation.warning)
        except ReconciliationMiss as miss:
            self._feedback.warning(str(miss))
            position = miss.fallback_position

        if position is None:
            self._enter_empty()
        else:
            self._show(position)

    # ========================================================================
    # Eliminar
    # ========================================================================

    async def delete(self) -> bool:
        """
        Acción deletar sobre el registro actual.

        Si el backend informa registros dependientes se pide una segunda
        confirmación y se fuerza la eliminación.

        Returns:
            False si el usuario no confirmó
        """
        self._guard.require(Action.DELETAR)
        current = self._cursor.current()
        if current is None:
            raise EmptyRecordsetError()

        if not self._feedback.confirm("¿Está seguro de que desea eliminar este registro?"):
            return False

        pk_value = current.get(self.config.primary_key)
        result = await self._call("delete", self._client.delete(pk_value, force=False))

        if result.has_dependencies:
            if not self._feedback.confirm(self._dependencies_question(result)):
                self._feedback.info("Operación cancelada por el usuario")
                return False
            result = await self._call("delete", self._client.delete(pk_value, force=True))

        if not result.success:
            raise BackendFailure(
                result.message or result.error or "Error en la eliminación", "delete"
            )

        index = self._cursor.position
        if result.refreshed_records is not None:
            self._cursor.replace_records(result.refreshed_records)
        else:
            self._cursor.remove_at(index)

        position = position_after_delete(len(self._cursor), index)
        if position is None:
            self._enter_empty()
        else:
            self._show(position)

        self._feedback.success(result.message or "Registro eliminado con éxito")
        return True

    @staticmethod
    def _dependencies_question(result) -> str:
        details = "\n".join(f"  • {d.table}: {d.count} registro(s)" for d in result.dependencies)
        return (
            f"ATENCIÓN: Este registro posee {result.dependency_count} dependencia(s):\n\n"
            f"{details}\n\n"
            f"¿Eliminar de todos modos?\n"
            f"(Esta acción puede ser IRREVERSIBLE según la configuración de la base)"
        )

    # ========================================================================
    # Despacho desde la UI
    # ========================================================================

    async def dispatch(self, action: Any) -> ActionOutcome:
        """
        Ejecuta una acción de la barra de botones.

        Los rechazos y fallos se informan por Feedback; nunca se propagan.
        """
        action = Action(action)
        try:
            if action.is_navigation:
                moved = self._navigate(action)
                return ActionOutcome(action, ok=True, limit_reached=not moved)

            if action is Action.EDITAR:
                self.edit()
                done = True
            elif action is Action.INCLUIR:
                self.insert()
                done = True
            elif action is Action.SALVAR:
                done = await self.save()
            elif action is Action.DELETAR:
                done = await self.delete()
            else:
                done = self.finish()

            return ActionOutcome(action, ok=done, cancelled=not done)

        except EmptyRecordsetError as e:
            self._feedback.warning(e.reason)
            self._recover_empty()
            return ActionOutcome(action, ok=False, message=e.reason)
        except GuardRejection as e:
            self._feedback.warning(e.reason)
            return ActionOutcome(action, ok=False, message=e.reason)
        except BackendFailure as e:
            self._feedback.error(e.message)
            return ActionOutcome(action, ok=False, message=e.message)
        except NavigatorError as e:
            self._feedback.error(str(e))
            return ActionOutcome(action, ok=False, message=str(e))

    # ========================================================================
    # Auxiliares
    # ========================================================================

    async def _call(self, operation: str, request: Awaitable[T]) -> T:
        """Espera una petición al backend marcando el navegador como ocupado."""
        self._guard.busy = True
        try:
            return await request
        except NavigatorError:
            raise
        except Exception as e:
            raise BackendFailure(str(e) or type(e).__name__, operation) from e
        finally:
            self._guard.busy = False

    def _show(self, index: int) -> None:
        """Posiciona el cursor, puebla los campos y captura el baseline."""
        self._cursor.move_to(index)
        baseline = fields.populate(self._fields, self._cursor.record_at(index), self.config)
        self._cursor.set_baseline(baseline)
        fields.apply_mode(self._fields, Mode.BROWSE, self.config)

    def _enter_empty(self) -> None:
        """Recordset vacío: cursor vacío, campos limpios y modo inclusión."""
        self._cursor.force_empty()
        fields.clear(self._fields)
        fields.apply_mode(self._fields, Mode.INSERT, self.config)

    def _recover_empty(self) -> None:
        if self.is_open and self._cursor.is_empty and self._cursor.mode is Mode.BROWSE:
            self._enter_empty()
