"""Command entry point for the enrolment system."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from contextlib import closing

from inscripciones.console import DEFAULT_DATA_DIR, ConsoleUI
from inscripciones.consultas import ConsultasAvanzadasService
from inscripciones.fileutil import LectorArchivoTexto
from inscripciones.inscripcion_service import InscripcionService
from inscripciones.procesador import ProcesadorArchivo
from inscripciones.repository import (
    DEFAULT_DB_PATH,
    EstudianteRepository,
    InscripcionRepository,
    MateriaRepository,
    init_db,
)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="inscripciones",
        description="Sistema de Inscripciones Universitarias",
    )
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="archivo de base de datos")
    parser.add_argument(
        "--datos", default=DEFAULT_DATA_DIR, help="directorio de archivos de inscripciones"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Initialise the database and run the interactive menu."""
    args = _parse_args(argv)

    print("Sistema de Inscripciones Universitarias")
    print("======================================")
    print()

    print("Inicializando base de datos...")
    try:
        db = init_db(args.db)
    except sqlite3.Error as err:
        print(f"Error al inicializar base de datos: {err}", file=sys.stderr)
        return 1

    with closing(db):
        print("✓ Base de datos inicializada correctamente")

        estudiante_repo = EstudianteRepository(db)
        materia_repo = MateriaRepository(db)
        inscripcion_repo = InscripcionRepository(db)

        consola = ConsoleUI(
            ProcesadorArchivo(
                LectorArchivoTexto(), estudiante_repo, materia_repo, inscripcion_repo
            ),
            InscripcionService(estudiante_repo, materia_repo, inscripcion_repo),
            ConsultasAvanzadasService(estudiante_repo, materia_repo, inscripcion_repo),
            directorio_datos=args.datos,
        )

        print("✓ Servicios inicializados correctamente")
        print()
        print("INSTRUCCIONES:")
        print(f"- Para cargar archivos desde {args.datos}/, solo escriba el nombre del archivo")
        print("- Ejemplo: 'inscripciones_validas.txt' en lugar de la ruta completa")
        print("- Los archivos de exportación se guardarán en el directorio actual")
        print()

        consola.mostrar_menu()
    return 0


if __name__ == "__main__":
    sys.exit(main())