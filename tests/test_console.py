import csv
import io
import json

import pytest

from inscripciones.console import ConsoleUI, truncate_string
from inscripciones.consultas import ConsultasAvanzadasService
from inscripciones.fileutil import LectorArchivoTexto
from inscripciones.inscripcion_service import InscripcionService
from inscripciones.procesador import ProcesadorArchivo
from inscripciones.repository import (
    EstudianteRepository,
    InscripcionRepository,
    MateriaRepository,
    init_db,
)

DATOS = (
    "1234567,Ana Perez,MAT101,Calculo\n"
    "1234567,Ana Perez,FIS101,Fisica\n"
    "7654321,Luis Gomez,MAT101,Calculo\n"
)
PARES = {("1234567", "MAT101"), ("1234567", "FIS101"), ("7654321", "MAT101")}


@pytest.fixture
def db():
    conn = init_db(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def archivo(tmp_path):
    ruta = tmp_path / "datos.txt"
    ruta.write_text(DATOS, encoding="utf-8")
    return ruta


def _ui(db, texto, directorio="testdata"):
    er, mr, ir = EstudianteRepository(db), MateriaRepository(db), InscripcionRepository(db)
    salida = io.StringIO()
    ui = ConsoleUI(
        ProcesadorArchivo(LectorArchivoTexto(), er, mr, ir),
        InscripcionService(er, mr, ir),
        ConsultasAvanzadasService(er, mr, ir),
        entrada=io.StringIO(texto),
        salida=salida,
        directorio_datos=directorio,
    )
    return ui, salida


def _cargado(db, archivo, extra=""):
    ui, salida = _ui(db, f"1\n{archivo}\n{extra}7\n")
    ui.mostrar_menu()
    return ui, salida


def test_truncate_string_short_unchanged():
    assert truncate_string("Calculo", 25) == "Calculo"


def test_truncate_string_long():
    texto = "abcdefghijklmnopqrstuvwxyz0123"
    resultado = truncate_string(texto, 25)
    assert len(resultado) == 25
    assert resultado == texto[:22] + "..."


def test_invalid_option_and_exit(db):
    ui, salida = _ui(db, "9\n7\n")
    ui.mostrar_menu()
    out = salida.getvalue()
    assert "Opción no válida. Intente nuevamente." in out
    assert out.rstrip().endswith("Saliendo del programa...")


def test_end_of_input_stops_menu(db):
    ui, salida = _ui(db, "")
    ui.mostrar_menu()
    assert salida.getvalue().count("=== SISTEMA DE INSCRIPCIONES UNIVERSITARIAS ===") == 1


def test_requires_loaded_file(db):
    ui, salida = _ui(db, "2\n3\n7\n")
    ui.mostrar_menu()
    assert salida.getvalue().count("Primero debe cargar un archivo de inscripciones") == 2


def test_load_absolute_path(db, archivo):
    ui, salida = _cargado(db, archivo)
    assert ui.archivo_cargado
    assert "Archivo cargado exitosamente!" in salida.getvalue()
    assert set(ui.consolidado.estudiantes) == {"1234567", "7654321"}
    assert {(c, m) for c, m in PARES} == {
        (e.cedula, m.codigo)
        for e in EstudianteRepository(db).get_all()
        for m in InscripcionRepository(db).get_by_estudiante(e.cedula)
    }


def test_load_bare_name_uses_data_dir(db, archivo):
    ui, salida = _ui(db, "1\ndatos.txt\n7\n", directorio=archivo.parent)
    ui.mostrar_menu()
    assert ui.archivo_cargado
    assert set(ui.consolidado.materias) == {"MAT101", "FIS101"}


def test_load_missing_file(db, tmp_path):
    ui, salida = _ui(db, f"1\n{tmp_path / 'nada.txt'}\n7\n")
    ui.mostrar_menu()
    assert not ui.archivo_cargado
    assert "Error al procesar archivo: error al leer archivo" in salida.getvalue()


def test_count_per_student(db, archivo):
    _, salida = _cargado(db, archivo, "2\n")
    out = salida.getvalue()
    assert "- Ana Perez (Cédula: 1234567): 2 materias" in out
    assert "- Luis Gomez (Cédula: 7654321): 1 materias" in out


def test_filter_by_course(db, archivo):
    _, salida = _cargado(db, archivo, "3\nMAT101\n")
    out = salida.getvalue()
    assert "=== ESTUDIANTES INSCRITOS EN Calculo (MAT101) ===" in out
    assert "Ana Perez (Cédula: 1234567)" in out
    assert "Luis Gomez (Cédula: 7654321)" in out
    assert "Total: 2 estudiantes" in out


def test_filter_unknown_course(db, archivo):
    _, salida = _cargado(db, archivo, "3\nQUI999\n")
    assert "Materia no encontrada. Intente con un código válido." in salida.getvalue()


def test_exportar_json(db, archivo, tmp_path):
    ui, _ = _cargado(db, archivo)
    destino = tmp_path / "out.json"
    ui.exportar_json(destino)
    datos = json.loads(destino.read_text(encoding="utf-8"))
    assert {(d["estudiante"]["cedula"], d["materia"]["codigo"]) for d in datos} == PARES
    assert all(set(d) == {"estudiante", "materia"} for d in datos)


def test_exportar_json_without_load(db, tmp_path):
    ui, salida = _ui(db, "")
    destino = tmp_path / "out.json"
    ui.exportar_json(destino)
    assert not destino.exists()
    assert "Primero debe cargar" in salida.getvalue()


def test_exportar_csv(db, archivo, tmp_path):
    ui, salida = _cargado(db, archivo)
    destino = tmp_path / "out.csv"
    ui.exportar_csv(destino)
    with open(destino, encoding="utf-8", newline="") as f:
        filas = list(csv.reader(f))
    assert filas[0] == ["CEDULA", "NOMBRE_ESTUDIANTE", "CODIGO_MATERIA", "NOMBRE_MATERIA"]
    assert {(f[0], f[2]) for f in filas[1:]} == PARES
    assert f"Datos exportados exitosamente a {destino}" in salida.getvalue()


def test_insert_and_search(db):
    texto = "6\n3\n1111111\nMaria Ruiz\nQUI201\nQuimica\n1\n1111111\n5\n7\n"
    ui, salida = _ui(db, texto)
    ui.mostrar_menu()
    out = salida.getvalue()
    assert "Registro insertado exitosamente!" in out
    assert "Nombre: Maria Ruiz" in out
    assert "1. QUI201 - Quimica" in out
    assert InscripcionRepository(db).exists("1111111", "QUI201")


def test_insert_duplicate(db):
    registro = "3\n1111111\nMaria Ruiz\nQUI201\nQuimica\n"
    ui, salida = _ui(db, f"6\n{registro}{registro}5\n7\n")
    ui.mostrar_menu()
    assert (
        "Error al insertar registro: el estudiante ya está inscrito en esta materia"
        in salida.getvalue()
    )


def test_insert_missing_fields(db):
    ui, salida = _ui(db, "6\n3\n1111111\n \nQUI201\nQuimica\n5\n7\n")
    ui.mostrar_menu()
    assert "Todos los campos son obligatorios." in salida.getvalue()
    assert EstudianteRepository(db).get_all() == []


def test_search_unknown_and_empty(db):
    ui, salida = _ui(db, "6\n1\n9999999\n1\n   \n5\n7\n")
    ui.mostrar_menu()
    out = salida.getvalue()
    assert "No se encontró un estudiante con cédula: 9999999" in out
    assert "La cédula no puede estar vacía." in out


def test_statistics_and_records(db, archivo):
    _, salida = _cargado(db, archivo, "6\n2\n4\n5\n")
    out = salida.getvalue()
    assert "Total de estudiantes: 2" in out
    assert "1. Ana Perez (1234567): 2 materias" in out
    assert "1. Calculo (MAT101): 2 estudiantes" in out
    assert "=== TODOS LOS REGISTROS (3) ===" in out


def test_records_empty(db):
    ui, salida = _ui(db, "6\n4\n5\n7\n")
    ui.mostrar_menu()
    assert "No hay registros en la base de datos." in salida.getvalue()