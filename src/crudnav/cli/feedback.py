"""
Feedback de consola: mensajes Rich y confirmaciones con questionary.
"""

import questionary

from crudnav.cli.terminal import bell
from crudnav.cli.theme import print_error, print_info, print_success, print_warning


LIMIT_LABELS = {
    "primeiro": "primer",
    "ultimo": "último",
}


class ConsoleFeedback:
    """Implementa Feedback sobre la consola."""

    def __init__(self, sound: bool = True):
        self.sound = sound

    def confirm(self, message: str) -> bool:
        answer = questionary.confirm(message, default=False).ask()
        # ask() retorna None si el usuario interrumpe con Ctrl+C
        return bool(answer)

    def info(self, message: str) -> None:
        print_info(message)

    def success(self, message: str) -> None:
        print_success(message)

    def warning(self, message: str) -> None:
        print_warning(message)

    def error(self, message: str) -> None:
        print_error(message)

    def limit_reached(self, boundary: str) -> None:
        if self.sound:
            bell()
        print_info(f"Ya está en el {LIMIT_LABELS.get(boundary, boundary)} registro")
