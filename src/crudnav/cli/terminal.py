"""
Utilidades de terminal para el visor interactivo.

Funciones para limpiar pantalla y capturar teclas.
"""

import os
import sys


def clear_screen() -> None:
    """Limpia la pantalla de la terminal."""
    os.system('cls' if os.name == 'nt' else 'clear')


def bell() -> None:
    """Emite el beep de la terminal."""
    sys.stdout.write('\a')
    sys.stdout.flush()


def get_key() -> str:
    """
    Captura una tecla del usuario.

    Returns:
        String representando la tecla presionada:
        - 'left', 'right', 'up', 'down': flechas
        - 'home', 'end': inicio / fin
        - 'esc', 'enter'
        - otro caracter en minúscula
    """
    if os.name == 'nt':
        # Windows
        import msvcrt
        key = msvcrt.getch()

        if key in (b'\xe0', b'\x00'):  # Tecla especial
            key2 = msvcrt.getch()
            return {
                b'K': 'left',
                b'M': 'right',
                b'H': 'up',
                b'P': 'down',
                b'G': 'home',
                b'O': 'end',
            }.get(key2, '')
        elif key == b'\x1b':
            return 'esc'
        elif key == b'\r':
            return 'enter'

        return key.decode('utf-8', errors='ignore').lower()
    else:
        # Unix/Linux/Mac
        import tty
        import termios

        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            key = sys.stdin.read(1)

            if key == '\x1b':  # Secuencia de escape
                key2 = sys.stdin.read(1)
                if key2 == '[':
                    key3 = sys.stdin.read(1)
                    return {
                        'D': 'left',
                        'C': 'right',
                        'A': 'up',
                        'B': 'down',
                        'H': 'home',
                        'F': 'end',
                    }.get(key3, 'esc')
                return 'esc'
            elif key in ('\r', '\n'):
                return 'enter'

            return key.lower()
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
