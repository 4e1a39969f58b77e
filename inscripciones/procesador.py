"""Loading enrolment files into the database."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

from inscripciones.domain import (
    ConsolidadoInscripciones,
    Estudiante,
    InscripcionesError,
    Materia,
)
from inscripciones.repository import (
    EstudianteRepository,
    InscripcionRepository,
    MateriaRepository,
)

_NUM_CAMPOS = 4


class _LectorArchivo(Protocol):
    def obtener_lineas(self, ruta: str | os.PathLike[str]) -> list[str]: ...


def _byte_len(texto: str) -> int:
    return len(texto.encode("utf-8"))


def _campos(linea: str) -> tuple[str, str, str, str]:
    cedula, nombre_estudiante, codigo_materia, nombre_materia = (
        campo.strip() for campo in linea.split(",")
    )
    return cedula, nombre_estudiante, codigo_materia, nombre_materia


def validar_linea(linea: str) -> None:
    """Raise InscripcionesError if ``linea`` is not a valid enrolment record."""
    if not linea.strip():
        raise InscripcionesError("línea vacía")

    campos = linea.split(",")
    if len(campos) != _NUM_CAMPOS:
        raise InscripcionesError(
            "formato incorrecto - se esperan 4 campos separados por coma, "
            f"encontrados {len(campos)}"
        )

    for numero, campo in enumerate(campos, start=1):
        if not campo.strip():
            raise InscripcionesError(f"campo {numero} está vacío")

    cedula, nombre_estudiante, codigo_materia, nombre_materia = _campos(linea)

    if not 6 <= _byte_len(cedula) <= 12:
        raise InscripcionesError(
            f"cédula '{cedula}' debe tener entre 6 y 12 caracteres"
        )
    if _byte_len(nombre_estudiante) < 2:
        raise InscripcionesError(
            f"nombre del estudiante '{nombre_estudiante}' debe tener al menos 2 caracteres"
        )
    if _byte_len(codigo_materia) < 2:
        raise InscripcionesError(
            f"código de materia '{codigo_materia}' debe tener al menos 2 caracteres"
        )
    if _byte_len(nombre_materia) < 2:
        raise InscripcionesError(
            f"nombre de materia '{nombre_materia}' debe tener al menos 2 caracteres"
        )


@contextmanager
def _envolver(mensaje: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as err:
        raise InscripcionesError(f"{mensaje}: {err}") from err


@dataclass
class ProcesadorArchivo:
    """Validates an enrolment file and stores its records."""

    lector: _LectorArchivo
    estudiante_repo: EstudianteRepository
    materia_repo: MateriaRepository
    inscripcion_repo: InscripcionRepository

    def procesar_archivo(self, ruta: str | os.PathLike[str]) -> ConsolidadoInscripciones:
        """Load ``ruta``, skip invalid lines with a warning, and save the rest."""
        try:
            lineas = self.lector.obtener_lineas(ruta)
        except (OSError, UnicodeDecodeError) as err:
            raise InscripcionesError(f"error al leer archivo: {err}") from err

        consolidado = ConsolidadoInscripciones()
        registros: list[tuple[str, str, str, str]] = []

        for numero, linea in enumerate(lineas, start=1):
            try:
                validar_linea(linea)
            except InscripcionesError as err:
                print(f"Advertencia línea {numero}: {err}")
                continue

            registro = _campos(linea)
            cedula, nombre_estudiante, codigo_materia, nombre_materia = registro
            consolidado.estudiantes.setdefault(
                cedula, Estudiante(cedula, nombre_estudiante)
            )
            consolidado.materias.setdefault(
                codigo_materia, Materia(codigo_materia, nombre_materia)
            )
            registros.append(registro)

        if not registros:
            raise InscripcionesError("no se encontraron líneas válidas en el archivo")

        try:
            self._guardar(consolidado, registros)
        except InscripcionesError as err:
            raise InscripcionesError(f"error al guardar en base de datos: {err}") from err

        return consolidado

    def _guardar(
        self,
        consolidado: ConsolidadoInscripciones,
        registros: list[tuple[str, str, str, str]],
    ) -> None:
        for estudiante in consolidado.estudiantes.values():
            with _envolver(
                f"error al verificar existencia del estudiante {estudiante.cedula}"
            ):
                existe = self.estudiante_repo.exists(estudiante.cedula)
            if not existe:
                with _envolver(f"error al crear estudiante {estudiante.cedula}"):
                    self.estudiante_repo.create(estudiante)

        for materia in consolidado.materias.values():
            with _envolver(
                f"error al verificar existencia de la materia {materia.codigo}"
            ):
                existe = self.materia_repo.exists(materia.codigo)
            if not existe:
                with _envolver(f"error al crear materia {materia.codigo}"):
                    self.materia_repo.create(materia)

        for cedula, _, codigo_materia, _ in registros:
            clave = f"{cedula}-{codigo_materia}"
            with _envolver(f"error al verificar existencia de inscripción {clave}"):
                existe = self.inscripcion_repo.exists(cedula, codigo_materia)
            if not existe:
                with _envolver(f"error al crear inscripción {clave}"):
                    self.inscripcion_repo.create(cedula, codigo_materia)