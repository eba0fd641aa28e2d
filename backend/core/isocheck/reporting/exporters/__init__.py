# reporting/exporters/__init__.py
"""
Exportadores de reportes.
"""

from .file_exporter import FileExporter

__all__ = ['FileExporter']
