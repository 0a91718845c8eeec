"""
Tipos base para registros.

Un registro es un mapeo ordenado nombre de campo -> valor escalar que
siempre contiene el campo de clave primaria.
"""

from typing import Any, Mapping


Record = dict[str, Any]


def normalize_value(value: Any) -> str:
    """Normaliza un valor para comparación (None -> '', sin espacios)."""
    if value is None:
        return ""
    return str(value).strip()


def is_blank(value: Any) -> bool:
    """True si el valor está vacío luego de normalizar."""
    return normalize_value(value) == ""


def changed_fields(current: Mapping[str, Any], baseline: Mapping[str, Any]) -> list[str]:
    """
    Lista los campos cuyo valor actual difiere del baseline.

    La comparación es por valor normalizado como string. Campos ausentes
    del baseline se comparan contra vacío.

    Args:
        current: Valores actuales de los campos
        baseline: Snapshot de referencia

    Returns:
        Nombres de campos alterados, en el orden de current
    """
    return [
        name for name, value in current.items()
        if normalize_value(value) != normalize_value(baseline.get(name))
    ]


def filled_fields(values: Mapping[str, Any]) -> list[str]:
    """Lista los campos con valor no vacío."""
    return [name for name, value in values.items() if not is_blank(value)]
