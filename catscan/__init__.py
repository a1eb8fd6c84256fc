"""Reading and checking of catalog description and catalog translation files."""

__version__ = "0.1.0"

__all__ = ["byteorder", "dates", "diagnostics", "model", "scancd", "scanct", "utils"]