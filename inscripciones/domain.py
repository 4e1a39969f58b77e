"""Core entities of the enrolment system."""

from __future__ import annotations

from dataclasses import dataclass, field


class InscripcionesError(Exception):
    """Raised when an enrolment operation cannot be completed."""


@dataclass(frozen=True)
class Estudiante:
    """A student, identified by their national id (cédula)."""

    cedula: str
    nombre: str


@dataclass(frozen=True)
class Materia:
    """A course, identified by its code."""

    codigo: str
    nombre: str


@dataclass(frozen=True)
class Inscripcion:
    """The enrolment of one student in one course."""

    estudiante: Estudiante
    materia: Materia


@dataclass
class ConsolidadoInscripciones:
    """Students and courses keyed by their identifiers."""

    estudiantes: dict[str, Estudiante] = field(default_factory=dict)
    materias: dict[str, Materia] = field(default_factory=dict)