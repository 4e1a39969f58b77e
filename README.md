# inscripciones

A console system for university course enrolments. It reads enrolment
records from a text file, stores students, subjects and enrolments in a
SQLite database, and lets you query and export them. It needs nothing
beyond the Python standard library.

## Installation

```
pip install .
```

## Usage

Start the interactive menu:

```
inscripciones
```

The same entry point can be run as `python -m inscripciones.cli`.

Options:

- `--db PATH`: the SQLite database file (default `inscripciones.db` in the
  current directory). The tables are created if they do not exist.
- `--datos DIR`: the directory where bare file names are looked up when
  loading (default `testdata`).

The command exits with status 1 if the database cannot be opened.

The main menu offers:

1. Load an enrolment file
2. Show the number of subjects per student
3. List the students enrolled in a subject
4. Export the data to JSON (`inscripciones.json`)
5. Export the data to CSV (`inscripciones.csv`)
6. Advanced queries: look up a student by ID, general statistics (totals
   and top 5 lists), insert a new record, list every record
7. Exit

The menu also ends when standard input is exhausted.

When loading a file, a name with no directory separator is looked up in the
`--datos` directory; any other path is used as given. Options 2 to 5 need a
file to have been loaded first, and they cover the students of the last
loaded file. The export files are written to the current directory; the JSON
export holds a list of `{"estudiante": {...}, "materia": {...}}` objects (or
`null` when there are no enrolments), the CSV export has the header
`CEDULA,NOMBRE_ESTUDIANTE,CODIGO_MATERIA,NOMBRE_MATERIA`.

## Input format

One enrolment per line, four comma-separated fields:

```
cedula,nombre_estudiante,codigo_materia,nombre_materia
```

For example:

```
E000001,Ana Pérez,MAT101,Cálculo I
E000001,Ana Pérez,FIS101,Física I
E000002,Luis Gómez,MAT101,Cálculo I
```

The file is read as UTF-8 and empty lines are ignored. Every other line is
checked before it is stored and is skipped, with a printed warning, when it
is blank, does not have exactly four fields, has an empty field, has a
student ID outside 6 to 12 bytes, or has a name or code shorter than 2 bytes
(lengths are counted in UTF-8 bytes, after trimming spaces). If no line is
valid, loading fails. Students, subjects and enrolments already in the
database are not duplicated; the first name seen for an ID or code wins.

## Using it as a library

```python
from inscripciones.repository import (
    init_db, EstudianteRepository, MateriaRepository, InscripcionRepository,
)
from inscripciones.fileutil import LectorArchivoTexto
from inscripciones.procesador import ProcesadorArchivo, validar_linea
from inscripciones.consultas import ConsultasAvanzadasService
from inscripciones.inscripcion_service import InscripcionService

db = init_db("inscripciones.db")
estudiantes = EstudianteRepository(db)
materias = MateriaRepository(db)
inscripciones = InscripcionRepository(db)

procesador = ProcesadorArchivo(LectorArchivoTexto(), estudiantes, materias, inscripciones)
consolidado = procesador.procesar_archivo("testdata/inscripciones_validas.txt")

consultas = ConsultasAvanzadasService(estudiantes, materias, inscripciones)
estadisticas = consultas.obtener_estadisticas_generales()
print(estadisticas.total_estudiantes, estadisticas.total_inscripciones)

consultas.insertar_nuevo_registro("E000003", "Marta Ruiz", "QUI101", "Química I")
estudiante, sus_materias = consultas.buscar_estudiante_por_cedula("E000003")

servicio = InscripcionService(estudiantes, materias, inscripciones)
print(servicio.contar_materias_por_estudiante("E000003"))
```

The main pieces:

- `inscripciones.domain`: the `Estudiante`, `Materia`, `Inscripcion` and
  `ConsolidadoInscripciones` dataclasses, and `InscripcionesError`.
- `inscripciones.repository`: `init_db` and one repository class per table.
- `inscripciones.procesador`: `validar_linea` and `ProcesadorArchivo`.
- `inscripciones.consultas`: `ConsultasAvanzadasService` with lookups,
  statistics (`EstadisticasGenerales`), manual insertion and
  `obtener_todos_los_registros`.
- `inscripciones.inscripcion_service`: `InscripcionService` with per-subject
  and per-student queries and `exportar_datos`.
- `inscripciones.console`: `ConsoleUI`, whose input and output streams and
  data directory can be given, with `exportar_json` and `exportar_csv`
  taking the output file name; and `truncate_string`.

`ProcesadorArchivo` and `ConsultasAvanzadasService` raise
`inscripciones.domain.InscripcionesError` on failure (enrolling a student
twice in the same subject is one). The repositories and
`InscripcionService` let `sqlite3.Error` through.

## Running the tests

```
pip install .[test]
pytest
```