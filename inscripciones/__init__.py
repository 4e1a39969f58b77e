"""University course enrolment system: file loading, SQLite storage, queries and exports."""

__version__ = "0.1.0"
__all__ = ["__version__"]