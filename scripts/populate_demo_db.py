#!/usr/bin/env python3
"""
Script para crear una base de datos de demostración.

Genera tablas relacionadas para probar el navegador:
- grupos
- categorias (dependen de grupos)
- produtos (dependen de categorias, con precio monetario)

Uso:
    python scripts/populate_demo_db.py demo.db
    crudnav browse demo.db produtos --money preco --required nome
"""

import sys
import os
from pathlib import Path

# Forzar UTF-8 en Windows
if sys.platform == "win32":
    os.environ["PYTHONIOENCODING"] = "utf-8"
    sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    sys.stderr.reconfigure(encoding='utf-8', errors='replace')

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from crudnav.database import DatabaseConnection


SCHEMA = """
DROP TABLE IF EXISTS produtos;
DROP TABLE IF EXISTS categorias;
DROP TABLE IF EXISTS grupos;

CREATE TABLE grupos (
    idgrupo INTEGER PRIMARY KEY,
    nome TEXT NOT NULL
);

CREATE TABLE categorias (
    idcategoria INTEGER PRIMARY KEY,
    idgrupo INTEGER NOT NULL REFERENCES grupos(idgrupo) ON DELETE CASCADE,
    nome TEXT NOT NULL
);

CREATE TABLE produtos (
    idproduto INTEGER PRIMARY KEY,
    idcategoria INTEGER REFERENCES categorias(idcategoria) ON DELETE SET NULL,
    nome TEXT NOT NULL,
    preco REAL
);
"""

GRUPOS = ["Papelaria", "Informática", "Limpeza"]

CATEGORIAS = [
    (1, "Cadernos"),
    (1, "Canetas"),
    (2, "Periféricos"),
    (3, "Detergentes"),
]

PRODUTOS = [
    (1, "Caderno universitário", 24.9),
    (2, "Caneta azul", 2.5),
    (2, "Caneta vermelha", 2.5),
    (3, "Teclado USB", 89.0),
    (3, "Monitor 24 polegadas", 1249.99),
    (4, "Detergente neutro", 3.75),
]


def create_demo_database(db_path: Path) -> None:
    """Crea (o recrea) las tablas de demostración."""
    db = DatabaseConnection(db_path)

    print(f"Creando base de datos en {db_path}...")
    with db.connection() as conn:
        conn.executescript(SCHEMA)
        conn.executemany("INSERT INTO grupos (nome) VALUES (?)", [(g,) for g in GRUPOS])
        conn.executemany("INSERT INTO categorias (idgrupo, nome) VALUES (?, ?)", CATEGORIAS)
        conn.executemany(
            "INSERT INTO produtos (idcategoria, nome, preco) VALUES (?, ?, ?)", PRODUTOS
        )

    for table in db.list_tables():
        with db.connection() as conn:
            count = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        print(f"  {table}: {count} registros")
    print("\nListo.")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("demo.db")
    create_demo_database(target)
