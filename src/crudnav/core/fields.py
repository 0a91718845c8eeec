"""
Intercambio de valores entre registros y controles del formulario.

Captura, población, limpieza y formato de campos monetarios.
"""

import re
from typing import Any

from crudnav.config import FormConfig, Mode
from crudnav.interfaces import FieldAccessor
from crudnav.models import Record, is_blank


_MONEY_CHARS = re.compile(r"^[\d.,]+$")
_MONEY_STRIP = re.compile(r"[R$%\s]")


# ============================================================================
# Valores monetarios (formato brasileño 1.234,56)
# ============================================================================

def parse_money(value: Any) -> float:
    """
    Convierte un valor monetario formateado a número.

    "1.234,56" -> 1234.56. Valores no convertibles retornan 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return 0.0

    clean = _MONEY_STRIP.sub("", value)
    clean = clean.replace(".", "").replace(",", ".", 1)
    try:
        return float(clean)
    except ValueError:
        return 0.0


def format_money(value: Any) -> str:
    """Formatea un número con miles '.' y decimales ',' (1234.5 -> '1.234,50')."""
    if is_blank(value):
        return ""
    number = parse_money(value) if isinstance(value, str) else float(value)
    text = f"{number:,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def is_valid_money(value: Any) -> bool:
    """Valida que un valor monetario tenga solo dígitos, '.' y ','."""
    if is_blank(value):
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return True
    return bool(_MONEY_CHARS.match(str(value).strip()))


# ============================================================================
# Captura y población
# ============================================================================

def is_capturable(name: str, config: FormConfig) -> bool:
    """True si el campo pertenece a la tabla y no es de solo lectura."""
    if name in config.readonly_fields:
        return False
    return not config.is_view_field(name)


def capture_values(accessor: FieldAccessor, config: FormConfig) -> Record:
    """
    Captura los valores actuales del formulario.

    Omite campos de solo lectura y columnas de exhibición de la vista,
    convierte campos monetarios a número y agrega los pares concretos
    de los filtros en cascada.

    Args:
        accessor: Acceso a los controles
        config: Configuración del formulario

    Returns:
        Registro con los valores capturados
    """
    values: Record = {}
    for name in accessor.field_names():
        if not is_capturable(name, config):
            continue
        value = accessor.get_value(name)
        if name in config.money_fields and not is_blank(value):
            value = parse_money(value)
        values[name] = value

    values.update(config.filter_pairs())
    return values


def raw_values(accessor: FieldAccessor, config: FormConfig) -> Record:
    """Valores capturables tal como se muestran (sin conversión)."""
    return {
        name: accessor.get_value(name)
        for name in accessor.field_names()
        if is_capturable(name, config)
    }


def populate(accessor: FieldAccessor, record: Record, config: FormConfig) -> Record:
    """
    Escribe un registro en los controles y retorna su baseline.

    El baseline guarda los valores ya formateados tal como quedaron en
    los controles; los campos sin control conservan el valor original
    (por ejemplo la clave primaria oculta). Los controles sin valor en
    el registro quedan vacíos.
    """
    names = set(accessor.field_names())
    baseline: Record = {}
    for name in accessor.field_names():
        if name not in record:
            accessor.set_value(name, "")
            baseline[name] = accessor.get_value(name)

    for name, value in record.items():
        if name not in names:
            baseline[name] = value
            continue
        if name in config.money_fields and not is_blank(value):
            value = format_money(value)
        accessor.set_value(name, "" if value is None else value)
        baseline[name] = accessor.get_value(name)
    return baseline


def clear(accessor: FieldAccessor) -> None:
    """Limpia todos los controles."""
    for name in accessor.field_names():
        accessor.set_value(name, "")


def apply_mode(accessor: FieldAccessor, mode: Mode, config: FormConfig) -> None:
    """Habilita edición según el modo; los campos de solo lectura nunca se editan."""
    editable = mode.is_dirty
    for name in accessor.field_names():
        accessor.set_editable(name, editable and name not in config.readonly_fields)
