"""
Paleta de colores y funciones de impresión para la CLI.

Todas las salidas hacia el usuario pasan por la consola Rich compartida.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme


@dataclass
class ColorPalette:
    """Paleta de colores para la interfaz."""
    primary: str      # Títulos, destacados
    secondary: str    # Subtítulos
    success: str
    warning: str
    error: str
    info: str
    muted: str        # Texto atenuado
    label: str        # Etiquetas de campo
    number: str       # Valores
    border: str
    editable: str     # Campos editables (modo edit/insert)
    nav_key: str      # Atajos de teclado


THEME_DEFAULT = ColorPalette(
    primary="#5f87af",
    secondary="#87afaf",
    success="#87af87",
    warning="#d7af5f",
    error="#d75f5f",
    info="#5f87af",
    muted="#808080",
    label="#87afaf",
    number="#d7d7af",
    border="#5f5f87",
    editable="#ffff87",
    nav_key="#af87af",
)

_console: Optional[Console] = None
_palette: ColorPalette = THEME_DEFAULT


def get_palette() -> ColorPalette:
    """Obtiene la paleta de colores actual."""
    return _palette


def get_console() -> Console:
    """Obtiene la consola Rich con el tema aplicado."""
    global _console
    if _console is None:
        p = _palette
        _console = Console(theme=Theme({
            "primary": p.primary,
            "success": p.success,
            "warning": p.warning,
            "error": p.error,
            "info": p.info,
            "muted": p.muted,
        }))
    return _console


# ============================================================================
# Mensajes
# ============================================================================

def print_success(text: str) -> None:
    """Imprime mensaje de éxito."""
    get_console().print(Text(f"[+] {text}", style=get_palette().success))


def print_warning(text: str) -> None:
    """Imprime advertencia."""
    get_console().print(Text(f"[!] {text}", style=get_palette().warning))


def print_error(text: str) -> None:
    """Imprime error."""
    get_console().print(Text(f"[x] {text}", style=get_palette().error))


def print_info(text: str) -> None:
    """Imprime información."""
    get_console().print(Text(f"[i] {text}", style=get_palette().info))


def print_header(text: str, subtitle: str = None) -> None:
    """Imprime un encabezado."""
    p = get_palette()
    content = Text(text, style=f"bold {p.primary}")
    if subtitle:
        content.append(f"\n{subtitle}", style=p.muted)
    get_console().print(Panel(content, border_style=p.border, box=box.ROUNDED, padding=(0, 2)))


# ============================================================================
# Tablas
# ============================================================================

def create_records_table(records: Sequence[dict], title: str = "", highlight: int = None) -> Table:
    """Crea una tabla Rich con el recordset."""
    p = get_palette()
    table = Table(title=title or None, box=box.SIMPLE_HEAD, border_style=p.border)

    columns = list(records[0].keys()) if records else []
    table.add_column("#", style=p.muted, justify="right")
    for col in columns:
        table.add_column(col, style=p.number)

    for idx, record in enumerate(records):
        style = f"bold {p.primary}" if idx == highlight else None
        table.add_row(str(idx + 1), *[_display(record.get(c)) for c in columns], style=style)
    return table


def create_record_panel(
    values: dict[str, Any],
    editable: dict[str, bool],
    title: str,
    subtitle: str = "",
) -> Panel:
    """Panel con los campos del registro actual; editables resaltados."""
    p = get_palette()
    table = Table(box=None, show_header=False, padding=(0, 1))
    table.add_column(style=p.label, justify="right")
    table.add_column()

    for name, value in values.items():
        style = f"bold {p.editable}" if editable.get(name) else p.number
        table.add_row(name, Text(_display(value), style=style))

    return Panel(
        table,
        title=Text(title, style=f"bold {p.primary}"),
        subtitle=Text(subtitle, style=p.muted) if subtitle else None,
        border_style=p.border,
        box=box.ROUNDED,
        padding=(0, 1),
    )


def _display(value: Any) -> str:
    if value is None or value == "":
        return "-"
    return str(value)
