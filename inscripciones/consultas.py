"""Advanced queries: lookups, statistics and manual enrolment."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from inscripciones.domain import Estudiante, InscripcionesError, Materia
from inscripciones.repository import (
    EstudianteRepository,
    InscripcionRepository,
    MateriaRepository,
)

_TOP = 5


@dataclass(frozen=True)
class EstudianteConMaterias:
    estudiante: Estudiante
    cantidad_materias: int


@dataclass(frozen=True)
class MateriaConEstudiantes:
    materia: Materia
    cantidad_estudiantes: int


@dataclass
class EstadisticasGenerales:
    """Totals and rankings over the stored data."""

    total_estudiantes: int = 0
    total_materias: int = 0
    total_inscripciones: int = 0
    estudiantes_con_mas_materias: list[EstudianteConMaterias] = field(default_factory=list)
    materias_con_mas_estudiantes: list[MateriaConEstudiantes] = field(default_factory=list)


@dataclass(frozen=True)
class RegistroCompleto:
    """One enrolment with its student and course."""

    estudiante: Estudiante
    materia: Materia


@contextmanager
def _envolver(mensaje: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as err:
        raise InscripcionesError(f"{mensaje}: {err}") from err


@dataclass
class ConsultasAvanzadasService:
    """Queries spanning students, courses and enrolments."""

    estudiante_repo: EstudianteRepository
    materia_repo: MateriaRepository
    inscripcion_repo: InscripcionRepository

    def buscar_estudiante_por_cedula(
        self, cedula: str
    ) -> tuple[Estudiante | None, list[Materia]]:
        """Return the student and their courses; ``(None, [])`` if unknown."""
        with _envolver("error al buscar estudiante"):
            estudiante = self.estudiante_repo.get_by_cedula(cedula)
        if estudiante is None:
            return None, []
        with _envolver("error al obtener materias del estudiante"):
            materias = self.inscripcion_repo.get_by_estudiante(cedula)
        return estudiante, materias

    def obtener_estadisticas_generales(self) -> EstadisticasGenerales:
        """Compute totals and the top five students and courses."""
        with _envolver("error al obtener estudiantes"):
            estudiantes = self.estudiante_repo.get_all()
        with _envolver("error al obtener materias"):
            materias = self.materia_repo.get_all()

        total_inscripciones = 0
        por_estudiante: list[EstudianteConMaterias] = []
        for estudiante in estudiantes:
            try:
                cantidad = self.inscripcion_repo.count_by_estudiante(estudiante.cedula)
            except sqlite3.Error:
                continue
            total_inscripciones += cantidad
            if cantidad > 0:
                por_estudiante.append(EstudianteConMaterias(estudiante, cantidad))

        por_materia: list[MateriaConEstudiantes] = []
        for materia in materias:
            try:
                inscritos = self.inscripcion_repo.get_by_materia(materia.codigo)
            except sqlite3.Error:
                continue
            if inscritos:
                por_materia.append(MateriaConEstudiantes(materia, len(inscritos)))

        return EstadisticasGenerales(
            total_estudiantes=len(estudiantes),
            total_materias=len(materias),
            total_inscripciones=total_inscripciones,
            estudiantes_con_mas_materias=sorted(
                por_estudiante, key=lambda e: e.cantidad_materias, reverse=True
            )[:_TOP],
            materias_con_mas_estudiantes=sorted(
                por_materia, key=lambda m: m.cantidad_estudiantes, reverse=True
            )[:_TOP],
        )

    def insertar_nuevo_registro(
        self,
        cedula: str,
        nombre_estudiante: str,
        codigo_materia: str,
        nombre_materia: str,
    ) -> None:
        """Enrol a student in a course, creating either if missing."""
        with _envolver("error al verificar existencia del estudiante"):
            existe = self.estudiante_repo.exists(cedula)
        if not existe:
            with _envolver("error al crear estudiante"):
                self.estudiante_repo.create(Estudiante(cedula, nombre_estudiante))

        with _envolver("error al verificar existencia de la materia"):
            existe = self.materia_repo.exists(codigo_materia)
        if not existe:
            with _envolver("error al crear materia"):
                self.materia_repo.create(Materia(codigo_materia, nombre_materia))

        with _envolver("error al verificar existencia de la inscripción"):
            existe = self.inscripcion_repo.exists(cedula, codigo_materia)
        if existe:
            raise InscripcionesError("el estudiante ya está inscrito en esta materia")

        with _envolver("error al crear inscripción"):
            self.inscripcion_repo.create(cedula, codigo_materia)

    def obtener_todos_los_registros(self) -> list[RegistroCompleto]:
        """Return every enrolment, grouped by student."""
        with _envolver("error al obtener estudiantes"):
            estudiantes = self.estudiante_repo.get_all()

        registros: list[RegistroCompleto] = []
        for estudiante in estudiantes:
            try:
                materias = self.inscripcion_repo.get_by_estudiante(estudiante.cedula)
            except sqlite3.Error:
                continue
            registros.extend(RegistroCompleto(estudiante, m) for m in materias)
        return registros