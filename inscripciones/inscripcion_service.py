"""Queries over enrolments and export of the stored data."""

from __future__ import annotations

from dataclasses import dataclass

from inscripciones.domain import ConsolidadoInscripciones, Estudiante, Materia
from inscripciones.repository import (
    EstudianteRepository,
    InscripcionRepository,
    MateriaRepository,
)


@dataclass
class InscripcionService:
    """Enrolment queries backed by the repositories."""

    estudiante_repo: EstudianteRepository
    materia_repo: MateriaRepository
    inscripcion_repo: InscripcionRepository

    def obtener_estudiantes_por_materia(self, codigo_materia: str) -> list[Estudiante]:
        return self.inscripcion_repo.get_by_materia(codigo_materia)

    def obtener_materias_por_estudiante(self, cedula: str) -> list[Materia]:
        return self.inscripcion_repo.get_by_estudiante(cedula)

    def contar_materias_por_estudiante(self, cedula: str) -> int:
        return self.inscripcion_repo.count_by_estudiante(cedula)

    def exportar_datos(self) -> ConsolidadoInscripciones:
        """Return every stored student and course, keyed by identifier."""
        return ConsolidadoInscripciones(
            estudiantes={e.cedula: e for e in self.estudiante_repo.get_all()},
            materias={m.codigo: m for m in self.materia_repo.get_all()},
        )