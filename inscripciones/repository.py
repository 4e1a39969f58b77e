"""SQLite storage for students, courses and enrolments."""

from __future__ import annotations

import os
import sqlite3

from inscripciones.domain import Estudiante, Materia

DEFAULT_DB_PATH = "inscripciones.db"

_SCHEMA = (
    """CREATE TABLE IF NOT EXISTS estudiantes (
        cedula TEXT PRIMARY KEY,
        nombre TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS materias (
        codigo TEXT PRIMARY KEY,
        nombre TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS inscripciones (
        estudiante_cedula TEXT,
        materia_codigo TEXT,
        FOREIGN KEY(estudiante_cedula) REFERENCES estudiantes(cedula),
        FOREIGN KEY(materia_codigo) REFERENCES materias(codigo),
        PRIMARY KEY(estudiante_cedula, materia_codigo)
    )""",
)


def init_db(path: str | os.PathLike[str] = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open the database at ``path`` and create the tables if missing."""
    db = sqlite3.connect(path)
    try:
        with db:
            for query in _SCHEMA:
                db.execute(query)
    except sqlite3.Error:
        db.close()
        raise
    return db


class EstudianteRepository:
    """Access to the ``estudiantes`` table."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create(self, estudiante: Estudiante) -> None:
        with self._db:
            self._db.execute(
                "INSERT INTO estudiantes (cedula, nombre) VALUES (?, ?)",
                (estudiante.cedula, estudiante.nombre),
            )

    def get_by_cedula(self, cedula: str) -> Estudiante | None:
        row = self._db.execute(
            "SELECT cedula, nombre FROM estudiantes WHERE cedula = ?", (cedula,)
        ).fetchone()
        return Estudiante(*row) if row else None

    def get_all(self) -> list[Estudiante]:
        rows = self._db.execute("SELECT cedula, nombre FROM estudiantes")
        return [Estudiante(*row) for row in rows]

    def exists(self, cedula: str) -> bool:
        (found,) = self._db.execute(
            "SELECT EXISTS(SELECT 1 FROM estudiantes WHERE cedula = ?)", (cedula,)
        ).fetchone()
        return bool(found)


class MateriaRepository:
    """Access to the ``materias`` table."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create(self, materia: Materia) -> None:
        with self._db:
            self._db.execute(
                "INSERT INTO materias (codigo, nombre) VALUES (?, ?)",
                (materia.codigo, materia.nombre),
            )

    def get_by_codigo(self, codigo: str) -> Materia | None:
        row = self._db.execute(
            "SELECT codigo, nombre FROM materias WHERE codigo = ?", (codigo,)
        ).fetchone()
        return Materia(*row) if row else None

    def get_all(self) -> list[Materia]:
        rows = self._db.execute("SELECT codigo, nombre FROM materias")
        return [Materia(*row) for row in rows]

    def exists(self, codigo: str) -> bool:
        (found,) = self._db.execute(
            "SELECT EXISTS(SELECT 1 FROM materias WHERE codigo = ?)", (codigo,)
        ).fetchone()
        return bool(found)


class InscripcionRepository:
    """Access to the ``inscripciones`` table."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create(self, estudiante_cedula: str, materia_codigo: str) -> None:
        with self._db:
            self._db.execute(
                "INSERT INTO inscripciones (estudiante_cedula, materia_codigo) VALUES (?, ?)",
                (estudiante_cedula, materia_codigo),
            )

    def get_by_estudiante(self, cedula: str) -> list[Materia]:
        rows = self._db.execute(
            """SELECT m.codigo, m.nombre
               FROM materias m
               JOIN inscripciones i ON m.codigo = i.materia_codigo
               WHERE i.estudiante_cedula = ?""",
            (cedula,),
        )
        return [Materia(*row) for row in rows]

    def get_by_materia(self, codigo: str) -> list[Estudiante]:
        rows = self._db.execute(
            """SELECT e.cedula, e.nombre
               FROM estudiantes e
               JOIN inscripciones i ON e.cedula = i.estudiante_cedula
               WHERE i.materia_codigo = ?""",
            (codigo,),
        )
        return [Estudiante(*row) for row in rows]

    def count_by_estudiante(self, cedula: str) -> int:
        (count,) = self._db.execute(
            "SELECT COUNT(*) FROM inscripciones WHERE estudiante_cedula = ?", (cedula,)
        ).fetchone()
        return count

    def exists(self, estudiante_cedula: str, materia_codigo: str) -> bool:
        (found,) = self._db.execute(
            "SELECT EXISTS(SELECT 1 FROM inscripciones "
            "WHERE estudiante_cedula = ? AND materia_codigo = ?)",
            (estudiante_cedula, materia_codigo),
        ).fetchone()
        return bool(found)