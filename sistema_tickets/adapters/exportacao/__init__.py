"""Adapter de exportação dos snapshots em arquivos JSON."""

from .json_exporter import JsonExportador

__all__ = ["JsonExportador"]
