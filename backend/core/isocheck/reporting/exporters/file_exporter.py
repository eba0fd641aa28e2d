# reporting/exporters/file_exporter.py
"""
Escritura de reportes a disco, un archivo por formato.
"""

import logging
from pathlib import Path
from typing import Dict, List

from ..models import ValidationReport
from ..errors import ReportingError, ReportingErrors
from ..formatters.base_formatter import BaseFormatter

logger = logging.getLogger(__name__)


class FileExporter:

    @staticmethod
    def target_path(report: ValidationReport, output_dir: str, base_filename: str, extension: str) -> Path:
        """<output_dir>/<base>_<YYYYmmdd_HHMMSS><ext>, con la marca de tiempo del reporte."""
        stamp = report.timestamp.strftime("%Y%m%d_%H%M%S")
        return Path(output_dir) / f"{base_filename}_{stamp}{extension}"

    @classmethod
    def export_to_file(
        cls,
        report: ValidationReport,
        formatter: BaseFormatter,
        output_dir: str,
        base_filename: str
    ) -> str:
        """
        Formatea el reporte y lo escribe en output_dir.

        Returns:
            Ruta del archivo escrito

        Raises:
            ReportingError: Si el directorio o el archivo no se pueden escribir
        """
        target = cls.target_path(report, output_dir, base_filename, formatter.file_extension)
        content = formatter.format(report)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise ReportingErrors.write_failed(str(target), str(e)) from e

        logger.info(f"Reporte {report.report_id} escrito en {target}")
        return str(target)

    @classmethod
    def export_multiple_formats(
        cls,
        report: ValidationReport,
        formatters: List[BaseFormatter],
        output_dir: str,
        base_filename: str
    ) -> Dict[str, str]:
        """
        Exporta en cada formato; un fallo no impide los demás.

        Returns:
            formato -> ruta, o "ERROR: <motivo>" para los formatos fallidos
        """
        written = {}
        for formatter in formatters:
            try:
                written[formatter.format_name] = cls.export_to_file(report, formatter, output_dir, base_filename)
            except ReportingError as e:
                logger.error(f"Fallo exportando {formatter.format_name}: {e}")
                written[formatter.format_name] = f"ERROR: {e}"
        return written
