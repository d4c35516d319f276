"""
Guarda y lee reportes JSON de Jest en disco. El listado del directorio es el indice.
"""
from __future__ import annotations

import json
import os
import pathlib
from typing import Any, Dict, List


class ReportStoreError(Exception):
    """No se pudo leer el directorio de reportes (o alguno de sus ficheros)."""

    message = "Unable to read reports directory"


class ReportWriteError(ReportStoreError):
    """No se pudo escribir el reporte subido."""

    message = "Unable to store report"


class ReportUploadError(Exception):
    message = "Upload rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NoReportFileError(ReportUploadError):
    message = "No file uploaded"


class InvalidReportExtensionError(ReportUploadError):
    message = "Only JSON files are allowed"


def ensure_reports_dir(reports_dir: pathlib.Path) -> pathlib.Path:
    reports_dir.mkdir(parents=True, exist_ok=True)
    return reports_dir


def list_reports(reports_dir: pathlib.Path) -> List[Dict[str, Any]]:
    """
    devuelve [{fileName, content}] para cada .json del directorio, en el orden
    en que lo enumera el sistema de ficheros. Si falla un solo fichero falla todo.
    """
    try:
        entries = list(reports_dir.iterdir())
        reports = []
        for entry in entries:
            if not entry.name.endswith(".json") or not entry.is_file():
                continue
            reports.append({
                "fileName": entry.name,
                "content": json.loads(entry.read_text(encoding="utf-8")),
            })
    except (OSError, ValueError) as e:
        raise ReportStoreError(f"{ReportStoreError.message}: {e}") from e
    return reports


def store_report(reports_dir: pathlib.Path, file_name: str | None, data: bytes) -> str:
    """
    valida y escribe el fichero con su nombre original. Un nombre repetido
    sobrescribe el anterior (gana la ultima escritura, no es atomico).
    """
    if not file_name:
        raise NoReportFileError()
    # solo el nombre base, nunca rutas del cliente
    name = pathlib.PurePath(file_name.replace("\\", "/")).name
    if not name:
        raise NoReportFileError()
    if os.path.splitext(name)[1] != ".json":
        raise InvalidReportExtensionError()

    path = reports_dir / name
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ReportWriteError(f"{ReportWriteError.message}: {e}") from e
    return name
