"""
Visor interactivo de registros en terminal.

Muestra el registro actual y traduce teclas en acciones del navegador.
"""

from typing import Optional

import questionary

from crudnav.cli.terminal import clear_screen, get_key
from crudnav.cli.theme import (
    create_record_panel,
    get_console,
    get_palette,
    print_error,
    print_warning,
)
from crudnav.config import Action
from crudnav.core import RecordNavigator
from crudnav.errors import NavigatorError
from crudnav.interfaces import DictFieldAccessor


KEY_ACTIONS = {
    "home": Action.PRIMEIRO,
    "p": Action.PRIMEIRO,
    "left": Action.ANTERIOR,
    "a": Action.ANTERIOR,
    "right": Action.PROXIMO,
    "n": Action.PROXIMO,
    "end": Action.ULTIMO,
    "u": Action.ULTIMO,
    "e": Action.EDITAR,
    "i": Action.INCLUIR,
    "s": Action.SALVAR,
    "d": Action.DELETAR,
    "esc": Action.ENCERRAR,
    "q": Action.ENCERRAR,
}

HELP_KEYS = [
    ("p/a/n/u", "navegar"),
    ("g", "ir a"),
    ("e", "editar"),
    ("i", "incluir"),
    ("c", "cambiar campos"),
    ("s", "salvar"),
    ("d", "deletar"),
    ("q", "encerrar"),
]


def status_line(navigator: RecordNavigator) -> str:
    """Texto de posición y modo para el subtítulo del panel."""
    total = len(navigator.records)
    if navigator.position is None:
        return f"Sin registros · modo {navigator.mode.value}"
    return f"Registro {navigator.position + 1} de {total} · modo {navigator.mode.value}"


def render(navigator: RecordNavigator, accessor: DictFieldAccessor, title: str) -> None:
    """Imprime el panel del registro actual y la ayuda de teclas."""
    console = get_console()
    p = get_palette()
    console.print(create_record_panel(
        accessor.values, accessor.editable, title, status_line(navigator)
    ))
    help_text = "  ".join(f"[{p.nav_key}]{k}[/] {label}" for k, label in HELP_KEYS)
    console.print(help_text)


def edit_field_values(navigator: RecordNavigator, accessor: DictFieldAccessor) -> None:
    """Pide nuevos valores para los campos editables."""
    if not navigator.mode.is_dirty:
        print_warning("Use 'e' (editar) o 'i' (incluir) antes de modificar campos")
        return

    for name in accessor.field_names():
        if not accessor.is_editable(name):
            continue
        current = accessor.get_value(name)
        answer = questionary.text(f"{name}:", default="" if current is None else str(current)).ask()
        if answer is None:
            break
        accessor.set_value(name, answer)


def ask_index(navigator: RecordNavigator) -> Optional[int]:
    """Pide el número de registro (base 1) y retorna el índice."""
    total = len(navigator.records)
    answer = questionary.text(f"Ir al registro (1-{total}):").ask()
    if not answer:
        return None
    try:
        return int(answer) - 1
    except ValueError:
        print_error("Debe ser un número entero")
        return None


async def interactive_browser(
    navigator: RecordNavigator,
    accessor: DictFieldAccessor,
    title: str,
) -> None:
    """
    Loop principal del visor.

    Args:
        navigator: Navegador ya configurado
        accessor: Campos en memoria ligados al navegador
        title: Título del panel
    """
    try:
        await navigator.load()
    except NavigatorError as e:
        print_error(str(e))
        return

    clear_screen()
    while navigator.is_open:
        render(navigator, accessor, title)
        key = get_key()

        if key == "c":
            edit_field_values(navigator, accessor)
            continue

        if key == "g":
            index = ask_index(navigator)
            if index is not None:
                try:
                    navigator.go_to(index)
                except NavigatorError as e:
                    print_warning(str(e))
            continue

        action = KEY_ACTIONS.get(key)
        if action is None:
            continue
        await navigator.dispatch(action)
