"""Reading enrolment files line by line."""

from __future__ import annotations

import os


class LectorArchivoTexto:
    """Reads a text file and returns its non-empty lines."""

    def obtener_lineas(self, ruta: str | os.PathLike[str]) -> list[str]:
        """Return the lines of ``ruta`` without terminators, skipping empty ones."""
        with open(ruta, encoding="utf-8", newline="\n") as archivo:
            lineas = (linea.rstrip("\n").removesuffix("\r") for linea in archivo)
            return [linea for linea in lineas if linea]