"""Interactive text menu for the enrolment system."""

from __future__ import annotations

import csv
import json
import os
import sqlite3
import sys
from collections.abc import Callable
from typing import TextIO

from inscripciones.consultas import ConsultasAvanzadasService
from inscripciones.domain import ConsolidadoInscripciones, InscripcionesError
from inscripciones.inscripcion_service import InscripcionService
from inscripciones.procesador import ProcesadorArchivo

DEFAULT_JSON = "inscripciones.json"
DEFAULT_CSV = "inscripciones.csv"
DEFAULT_DATA_DIR = "testdata"

_SIN_ARCHIVO = "\nPrimero debe cargar un archivo de inscripciones (Opción 1)"
_OPCION_INVALIDA = "Opción no válida. Intente nuevamente."
_CSV_HEADERS = ("CEDULA", "NOMBRE_ESTUDIANTE", "CODIGO_MATERIA", "NOMBRE_MATERIA")


def truncate_string(s: str, max_len: int) -> str:
    """Shorten ``s`` to ``max_len`` bytes, ending in "..." when cut."""
    datos = s.encode("utf-8")
    if len(datos) <= max_len:
        return s
    return datos[: max_len - 3].decode("utf-8", errors="ignore") + "..."


class ConsoleUI:
    """Menu-driven console front end over the enrolment services."""

    def __init__(
        self,
        procesador: ProcesadorArchivo,
        inscripcion_svc: InscripcionService,
        consultas_avanzadas: ConsultasAvanzadasService,
        *,
        entrada: TextIO | None = None,
        salida: TextIO | None = None,
        directorio_datos: str | os.PathLike[str] = DEFAULT_DATA_DIR,
    ) -> None:
        self._procesador = procesador
        self._inscripcion_svc = inscripcion_svc
        self._consultas = consultas_avanzadas
        self._entrada = entrada if entrada is not None else sys.stdin
        self._salida = salida if salida is not None else sys.stdout
        self._directorio_datos = directorio_datos
        self.consolidado = ConsolidadoInscripciones()
        self.archivo_cargado = False

    def _print(self, *args: object, end: str = "\n") -> None:
        print(*args, end=end, file=self._salida)

    def _leer(self, prompt: str = "") -> str:
        if prompt:
            self._print(prompt, end="")
        self._salida.flush()
        linea = self._entrada.readline()
        if not linea:
            raise EOFError
        return linea.rstrip("\n").removesuffix("\r")

    def mostrar_menu(self) -> None:
        """Run the main menu until the user exits or input ends."""
        acciones: dict[str, Callable[[], None]] = {
            "1": self._cargar_archivo,
            "2": self._mostrar_materias_por_estudiante,
            "3": self._filtrar_por_materia,
            "4": self.exportar_json,
            "5": self.exportar_csv,
            "6": self._mostrar_menu_consultas_avanzadas,
        }
        try:
            while True:
                self._print("\n=== SISTEMA DE INSCRIPCIONES UNIVERSITARIAS ===")
                self._print("1. Cargar archivo de inscripciones")
                self._print("2. Mostrar total de materias por estudiante")
                self._print("3. Filtrar estudiantes por materia")
                self._print("4. Exportar datos a JSON")
                self._print("5. Exportar datos a CSV")
                self._print("6. Consultas avanzadas")
                self._print("7. Salir")
                opcion = self._leer("Seleccione una opción: ")
                if opcion == "7":
                    self._print("Saliendo del programa...")
                    return
                accion = acciones.get(opcion)
                if accion is None:
                    self._print(_OPCION_INVALIDA)
                else:
                    accion()
        except EOFError:
            return

    def _mostrar_menu_consultas_avanzadas(self) -> None:
        acciones: dict[str, Callable[[], None]] = {
            "1": self._buscar_estudiante_por_cedula,
            "2": self._mostrar_estadisticas_generales,
            "3": self._insertar_nuevo_registro,
            "4": self._mostrar_todos_los_registros,
        }
        while True:
            self._print("\n=== CONSULTAS AVANZADAS ===")
            self._print("1. Buscar estudiante por cédula")
            self._print("2. Ver estadísticas generales")
            self._print("3. Insertar nuevo registro")
            self._print("4. Ver todos los registros")
            self._print("5. Volver al menú principal")
            opcion = self._leer("Seleccione una opción: ")
            if opcion == "5":
                return
            accion = acciones.get(opcion)
            if accion is None:
                self._print(_OPCION_INVALIDA)
            else:
                accion()

    def _cargar_archivo(self) -> None:
        ruta = self._leer("\nIngrese la ruta del archivo de inscripciones: ")
        if not os.path.isabs(ruta) and os.sep not in ruta:
            ruta = os.path.join(self._directorio_datos, ruta)

        try:
            consolidado = self._procesador.procesar_archivo(ruta)
        except InscripcionesError as err:
            self._print(f"\nError al procesar archivo: {err}")
            return

        self.consolidado = consolidado
        self.archivo_cargado = True

        self._print("\nArchivo cargado exitosamente!")
        self._print(f"Estudiantes registrados: {len(consolidado.estudiantes)}")
        self._print(f"Materias registradas: {len(consolidado.materias)}")

    def _mostrar_materias_por_estudiante(self) -> None:
        if not self.archivo_cargado:
            self._print(_SIN_ARCHIVO)
            return

        self._print("\n=== MATERIAS POR ESTUDIANTE ===")
        for cedula, estudiante in self.consolidado.estudiantes.items():
            try:
                cantidad = self._inscripcion_svc.contar_materias_por_estudiante(cedula)
            except sqlite3.Error as err:
                self._print(f"Error al contar materias para {estudiante.nombre}: {err}")
                continue
            self._print(f"- {estudiante.nombre} (Cédula: {cedula}): {cantidad} materias")

    def _filtrar_por_materia(self) -> None:
        if not self.archivo_cargado:
            self._print(_SIN_ARCHIVO)
            return

        codigo = self._leer("\nIngrese el código de la materia: ")
        materia = self.consolidado.materias.get(codigo)
        if materia is None:
            self._print("Materia no encontrada. Intente con un código válido.")
            return

        try:
            estudiantes = self._inscripcion_svc.obtener_estudiantes_por_materia(codigo)
        except sqlite3.Error as err:
            self._print(f"Error al obtener estudiantes: {err}")
            return

        self._print(f"\n=== ESTUDIANTES INSCRITOS EN {materia.nombre} ({materia.codigo}) ===")
        if not estudiantes:
            self._print("No hay estudiantes inscritos en esta materia")
            return

        for numero, estudiante in enumerate(estudiantes, start=1):
            self._print(f"{numero}. {estudiante.nombre} (Cédula: {estudiante.cedula})")
        self._print(f"\nTotal: {len(estudiantes)} estudiantes")

    def _buscar_estudiante_por_cedula(self) -> None:
        cedula = self._leer("\nIngrese la cédula del estudiante: ").strip()
        if not cedula:
            self._print("La cédula no puede estar vacía.")
            return

        try:
            estudiante, materias = self._consultas.buscar_estudiante_por_cedula(cedula)
        except InscripcionesError as err:
            self._print(f"Error al buscar estudiante: {err}")
            return

        if estudiante is None:
            self._print(f"No se encontró un estudiante con cédula: {cedula}")
            return

        self._print("\n=== INFORMACIÓN DEL ESTUDIANTE ===")
        self._print(f"Cédula: {estudiante.cedula}")
        self._print(f"Nombre: {estudiante.nombre}")
        self._print(f"Total de materias inscritas: {len(materias)}\n")

        if materias:
            self._print("Materias inscritas:")
            for numero, materia in enumerate(materias, start=1):
                self._print(f"{numero}. {materia.codigo} - {materia.nombre}")
        else:
            self._print("El estudiante no tiene materias inscritas.")

    def _mostrar_estadisticas_generales(self) -> None:
        try:
            estadisticas = self._consultas.obtener_estadisticas_generales()
        except InscripcionesError as err:
            self._print(f"Error al obtener estadísticas: {err}")
            return

        self._print("\n=== ESTADÍSTICAS GENERALES ===")
        self._print(f"Total de estudiantes: {estadisticas.total_estudiantes}")
        self._print(f"Total de materias: {estadisticas.total_materias}")
        self._print(f"Total de inscripciones: {estadisticas.total_inscripciones}\n")

        if estadisticas.estudiantes_con_mas_materias:
            self._print("TOP 5 - Estudiantes con más materias:")
            for numero, item in enumerate(estadisticas.estudiantes_con_mas_materias, start=1):
                self._print(
                    f"{numero}. {item.estudiante.nombre} ({item.estudiante.cedula}): "
                    f"{item.cantidad_materias} materias"
                )
            self._print()

        if estadisticas.materias_con_mas_estudiantes:
            self._print("TOP 5 - Materias con más estudiantes:")
            for numero, item in enumerate(estadisticas.materias_con_mas_estudiantes, start=1):
                self._print(
                    f"{numero}. {item.materia.nombre} ({item.materia.codigo}): "
                    f"{item.cantidad_estudiantes} estudiantes"
                )

    def _insertar_nuevo_registro(self) -> None:
        self._print("\n=== INSERTAR NUEVO REGISTRO ===")
        cedula = self._leer("Ingrese la cédula del estudiante: ").strip()
        nombre_estudiante = self._leer("Ingrese el nombre del estudiante: ").strip()
        codigo_materia = self._leer("Ingrese el código de la materia: ").strip()
        nombre_materia = self._leer("Ingrese el nombre de la materia: ").strip()

        if not all((cedula, nombre_estudiante, codigo_materia, nombre_materia)):
            self._print("Todos los campos son obligatorios.")
            return

        try:
            self._consultas.insertar_nuevo_registro(
                cedula, nombre_estudiante, codigo_materia, nombre_materia
            )
        except InscripcionesError as err:
            self._print(f"Error al insertar registro: {err}")
            return

        self._print("Registro insertado exitosamente!")

    def _mostrar_todos_los_registros(self) -> None:
        try:
            registros = self._consultas.obtener_todos_los_registros()
        except InscripcionesError as err:
            self._print(f"Error al obtener registros: {err}")
            return

        if not registros:
            self._print("\nNo hay registros en la base de datos.")
            return

        self._print(f"\n=== TODOS LOS REGISTROS ({len(registros)}) ===")
        self._print(f"{'CÉDULA':<12} {'NOMBRE ESTUDIANTE':<25} {'CÓD MAT':<10} {'NOMBRE MATERIA':<25}")
        self._print("-" * 75)
        for registro in registros:
            self._print(
                f"{registro.estudiante.cedula:<12} "
                f"{truncate_string(registro.estudiante.nombre, 25):<25} "
                f"{registro.materia.codigo:<10} "
                f"{truncate_string(registro.materia.nombre, 25):<25}"
            )

    def _filas_inscripciones(self):
        for cedula, estudiante in self.consolidado.estudiantes.items():
            try:
                materias = self._inscripcion_svc.obtener_materias_por_estudiante(cedula)
            except sqlite3.Error as err:
                self._print(f"Error al obtener materias para {estudiante.nombre}: {err}")
                continue
            for materia in materias:
                yield estudiante, materia

    def exportar_json(self, filename: str | os.PathLike[str] = DEFAULT_JSON) -> None:
        """Write the loaded students' enrolments to ``filename`` as JSON."""
        if not self.archivo_cargado:
            self._print(_SIN_ARCHIVO)
            return

        inscripciones = [
            {
                "estudiante": {"cedula": estudiante.cedula, "nombre": estudiante.nombre},
                "materia": {"codigo": materia.codigo, "nombre": materia.nombre},
            }
            for estudiante, materia in self._filas_inscripciones()
        ]
        datos = json.dumps(inscripciones or None, indent=2, ensure_ascii=False)

        try:
            with open(filename, "w", encoding="utf-8") as archivo:
                archivo.write(datos)
        except OSError as err:
            self._print(f"Error al escribir archivo JSON: {err}")
            return

        self._print(f"\nDatos exportados exitosamente a {os.fspath(filename)}")

    def exportar_csv(self, filename: str | os.PathLike[str] = DEFAULT_CSV) -> None:
        """Write the loaded students' enrolments to ``filename`` as CSV."""
        if not self.archivo_cargado:
            self._print(_SIN_ARCHIVO)
            return

        try:
            archivo = open(filename, "w", encoding="utf-8", newline="")
        except OSError as err:
            self._print(f"Error al crear archivo CSV: {err}")
            return

        with archivo:
            writer = csv.writer(archivo, lineterminator="\n")
            try:
                writer.writerow(_CSV_HEADERS)
            except OSError as err:
                self._print(f"Error al escribir encabezados CSV: {err}")
                return
            for estudiante, materia in self._filas_inscripciones():
                try:
                    writer.writerow(
                        (estudiante.cedula, estudiante.nombre, materia.codigo, materia.nombre)
                    )
                except OSError as err:
                    self._print(f"Error al escribir registro CSV: {err}")

        self._print(f"\nDatos exportados exitosamente a {os.fspath(filename)}")