import pytest

from inscripciones.domain import Estudiante, Materia
from inscripciones.inscripcion_service import InscripcionService
from inscripciones.repository import (
    EstudianteRepository,
    InscripcionRepository,
    MateriaRepository,
    init_db,
)


@pytest.fixture
def servicio():
    db = init_db(":memory:")
    svc = InscripcionService(
        EstudianteRepository(db), MateriaRepository(db), InscripcionRepository(db)
    )
    yield svc
    db.close()


@pytest.fixture
def poblado(servicio):
    servicio.estudiante_repo.create(Estudiante("1111111", "Ana"))
    servicio.estudiante_repo.create(Estudiante("2222222", "Luis"))
    servicio.materia_repo.create(Materia("MAT101", "Cálculo"))
    servicio.materia_repo.create(Materia("FIS101", "Física"))
    servicio.inscripcion_repo.create("1111111", "MAT101")
    servicio.inscripcion_repo.create("1111111", "FIS101")
    servicio.inscripcion_repo.create("2222222", "FIS101")
    return servicio


def test_exportar_datos_empty(servicio):
    consolidado = servicio.exportar_datos()
    assert consolidado.estudiantes == {}
    assert consolidado.materias == {}


def test_exportar_datos_keys_match_identifiers(poblado):
    consolidado = poblado.exportar_datos()
    assert consolidado.estudiantes["1111111"] == Estudiante("1111111", "Ana")
    assert set(consolidado.materias) == {"MAT101", "FIS101"}
    assert all(k == m.codigo for k, m in consolidado.materias.items())


def test_estudiantes_por_materia(poblado):
    assert poblado.obtener_estudiantes_por_materia("MAT101") == [Estudiante("1111111", "Ana")]
    assert {e.cedula for e in poblado.obtener_estudiantes_por_materia("FIS101")} == {
        "1111111",
        "2222222",
    }
    assert poblado.obtener_estudiantes_por_materia("NOPE") == []


def test_materias_por_estudiante_and_count_agree(poblado):
    for cedula in ("1111111", "2222222", "9999999"):
        materias = poblado.obtener_materias_por_estudiante(cedula)
        assert poblado.contar_materias_por_estudiante(cedula) == len(materias)
    assert poblado.obtener_materias_por_estudiante("2222222") == [Materia("FIS101", "Física")]