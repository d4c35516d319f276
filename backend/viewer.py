"""viewer.py
Estado y logica del visor de reportes Jest: cliente HTTP del servicio de
reportes, seleccion del reporte actual, datos de la grafica y mensajes de subida.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel

from reports_common import get_api_url, setup_logger

logger = setup_logger("jest_reports.viewer")

UPLOAD_FAILED_MESSAGE = "Failed to upload the file"

CHART_LABELS = ["Passed", "Failed", "Pending"]
CHART_COLORS = ["#4CAF50", "#FF5252", "#FFEB3B"]


class Report(BaseModel):
    fileName: str
    content: Any


class ChartData(BaseModel):
    labels: List[str]
    data: List[Optional[int]]
    colors: List[str] = CHART_COLORS

    def to_chartjs(self) -> Dict[str, Any]:
        return {
            "labels": self.labels,
            "datasets": [
                {
                    "label": "Test Results",
                    "data": self.data,
                    "backgroundColor": self.colors,
                    "borderColor": self.colors,
                    "borderWidth": 1,
                }
            ],
        }


class ViewerState(BaseModel):
    reports: List[Report] = []
    current_report: Optional[Report] = None
    selected_report_name: str = ""
    upload_error: str = ""
    upload_success: str = ""


def strip_json_extension(file_name: str) -> str:
    if file_name.endswith(".json"):
        return file_name[: -len(".json")]
    return file_name


def _content(report: Report) -> Dict[str, Any]:
    # el servicio no valida el esquema: cualquier JSON puede llegar aqui
    return report.content if isinstance(report.content, dict) else {}


def summary_counts(report: Report) -> Dict[str, Any]:
    content = _content(report)
    return {
        "total": content.get("numTotalTests"),
        "passed": content.get("numPassedTests"),
        "failed": content.get("numFailedTests"),
        "pending": content.get("numPendingTests"),
    }


def chart_data(report: Report) -> ChartData:
    counts = summary_counts(report)
    return ChartData(labels=list(CHART_LABELS), data=[counts["passed"], counts["failed"], counts["pending"]])


def flatten_tests(report: Report) -> List[Dict[str, Any]]:
    """todos los tests de todos los ficheros, en el orden del reporte."""
    tests = []
    for test_file in _content(report).get("testResults") or []:
        if isinstance(test_file, dict):
            tests.extend(t for t in test_file.get("testResults") or [] if isinstance(t, dict))
    return tests


class ReportStoreClient:
    """Cliente minimo del servicio de reportes (GET /api/reports, POST /api/upload)."""

    def __init__(self, base_url: str | None = None, session=None):
        self.base_url = (get_api_url() if base_url is None else base_url).rstrip("/")
        self.session = session or requests.Session()

    def list_reports(self) -> List[Report]:
        r = self.session.get(f"{self.base_url}/api/reports")
        if r.status_code >= 400:
            raise requests.HTTPError(f"{r.status_code} listing reports", response=r)
        return [Report(**item) for item in r.json()]

    def upload_report(self, file_name: str, data: bytes) -> Dict[str, Any]:
        files = {"report": (file_name, data, "application/json")}
        r = self.session.post(f"{self.base_url}/api/upload", files=files)
        return r.json()


class ReportViewer:
    def __init__(self, client: ReportStoreClient, state: ViewerState | None = None):
        self.client = client
        self.state = state or ViewerState()
        self.loaded = False

    def load_reports(self) -> None:
        self.loaded = True
        try:
            self.state.reports = self.client.list_reports()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching reports: %s", e)
            self.state.reports = []

    def select_report(self, report: Report) -> None:
        self.state.current_report = report
        self.state.selected_report_name = strip_json_extension(report.fileName)

    def select_index(self, index: int) -> Report:
        if index < 0 or index >= len(self.state.reports):
            raise IndexError(f"No report at position {index}")
        report = self.state.reports[index]
        self.select_report(report)
        return report

    def clear_report(self) -> None:
        self.state.current_report = None

    def upload(self, file_name: str, data: bytes) -> bool:
        try:
            body = self.client.upload_report(file_name, data)
            if not isinstance(body, dict):
                raise ValueError(f"unexpected upload response: {body!r}")
        except (requests.RequestException, ValueError) as e:
            logger.error("Upload of %s failed: %s", file_name, e)
            self.state.upload_error = UPLOAD_FAILED_MESSAGE
            self.state.upload_success = ""
            return False

        if body.get("error"):
            self.state.upload_error = body["error"]
            self.state.upload_success = ""
            return False

        self.state.upload_success = body.get("message", "")
        self.state.upload_error = ""
        self.load_reports()
        return True
