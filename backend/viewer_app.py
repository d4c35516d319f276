"""viewer_app.py
Front web del visor: renderiza el estado de ReportViewer como HTML y reenvia
las subidas al servicio de reportes.
"""
from __future__ import annotations

import html
import json
from typing import Any, Dict, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from reports_common import get_port
from viewer import (
    ReportStoreClient,
    ReportViewer,
    ViewerState,
    chart_data,
    flatten_tests,
    strip_json_extension,
    summary_counts,
)

CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js"

PAGE_CSS = """
body { font-family: sans-serif; margin: 20px; }
.container { display: flex; gap: 20px; }
.sidebar { width: 25%; }
.main-content { flex: 1; }
.report-item { background: none; border: none; cursor: pointer; padding: 4px 0; color: #1565c0; }
.passed { color: #2e7d32; }
.failed { color: #c62828; }
.error { color: #c62828; }
.success { color: #2e7d32; }
.chart-container { max-width: 600px; }
"""


def _esc(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _render_summary(counts: Dict[str, Any]) -> str:
    return (
        '<div class="summary">'
        "<h2>Test Summary</h2>"
        f"<p>Total Tests: <span>{_esc(counts['total'])}</span></p>"
        f"<p>Passed: <span>{_esc(counts['passed'])}</span></p>"
        f"<p>Failed: <span>{_esc(counts['failed'])}</span></p>"
        f"<p>Pending: <span>{_esc(counts['pending'])}</span></p>"
        "</div>"
    )


def _render_chart(payload: Dict[str, Any]) -> str:
    # "</" no puede aparecer dentro de <script>
    data_json = json.dumps(payload).replace("</", "<\\/")
    return (
        '<div class="chart-container">'
        '<canvas id="results-chart"></canvas>'
        f'<script src="{CHART_JS_URL}"></script>'
        "<script>"
        f"new Chart(document.getElementById('results-chart'), {{type: 'bar', data: {data_json}}});"
        "</script>"
        "</div>"
    )


def render_test(test: Dict[str, Any]) -> str:
    status = test.get("status")
    css = "passed" if status == "passed" else "failed"
    parts = [
        f'<li class="{css}">',
        f"<strong>{_esc(test.get('fullName', ''))}</strong><br />",
        f"Status: {_esc(status)}",
    ]
    messages = test.get("failureMessages") or []
    if messages:
        items = "".join(f"<li>{_esc(m)}</li>" for m in messages)
        parts.append(
            '<div class="failure-messages"><strong>Failure Messages:</strong>'
            f"<ul>{items}</ul></div>"
        )
    parts.append("</li>")
    return "".join(parts)


def render_page(state: ViewerState) -> str:
    if state.selected_report_name:
        heading = f"Selected Report: {_esc(state.selected_report_name)}"
    else:
        heading = "Select a Report to View"

    items = "".join(
        f'<li><form method="post" action="/select/{i}">'
        f'<button type="submit" class="report-item">{_esc(strip_json_extension(r.fileName))}</button>'
        "</form></li>"
        for i, r in enumerate(state.reports)
    )

    report = state.current_report
    if report is not None:
        tests = "".join(render_test(t) for t in flatten_tests(report))
        main = (
            _render_summary(summary_counts(report))
            + _render_chart(chart_data(report).to_chartjs())
            + f'<div class="test-details"><h2>Test Details</h2><ul>{tests}</ul></div>'
        )
    else:
        main = "<p>Select a report from the left to see the details</p>"

    message = ""
    if state.upload_error:
        message = f'<p class="error">{_esc(state.upload_error)}</p>'
    elif state.upload_success:
        message = f'<p class="success">{_esc(state.upload_success)}</p>'

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8" />
<title>Jest Report Viewer</title>
<style>{PAGE_CSS}</style>
</head>
<body>
<div class="App">
<h1>Jest Report Viewer</h1>
<h2>{heading}</h2>
<div class="container">
  <div class="sidebar">
    <h2>Available Reports</h2>
    <ul>{items}</ul>
  </div>
  <div class="main-content">{main}</div>
</div>
<div class="upload-section">
  <h3>Upload a New Jest JSON Report</h3>
  <form method="post" action="/upload" enctype="multipart/form-data">
    <input type="file" name="report" accept=".json" onchange="this.form.submit()" />
  </form>
  {message}
</div>
<form method="post" action="/clear">
  <button type="submit" class="clear-btn">Clear Selected Report</button>
</form>
</div>
</body>
</html>
"""


def create_viewer_app(viewer: Optional[ReportViewer] = None) -> FastAPI:
    viewer = viewer or ReportViewer(ReportStoreClient())
    app = FastAPI(title="Jest Report Viewer")
    app.state.viewer = viewer

    @app.get("/", response_class=HTMLResponse)
    def index():
        # la lista se pide al mostrar la pagina por primera vez
        if not viewer.loaded:
            viewer.load_reports()
        return HTMLResponse(render_page(viewer.state))

    @app.post("/select/{index}")
    def select(index: int):
        try:
            viewer.select_index(index)
        except IndexError:
            raise HTTPException(404, f"No report at position {index}")
        return RedirectResponse("/", status_code=303)

    @app.post("/clear")
    def clear():
        viewer.clear_report()
        return RedirectResponse("/", status_code=303)

    @app.post("/upload")
    def upload(report: Optional[UploadFile] = File(None)):
        # el selector vacio no envia nada
        if report is not None and report.filename:
            viewer.upload(report.filename, report.file.read())
        return RedirectResponse("/", status_code=303)

    return app


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(create_viewer_app(), host=os.getenv("JEST_REPORTS_HOST", "0.0.0.0"), port=get_port("JEST_VIEWER_PORT", 3000))
