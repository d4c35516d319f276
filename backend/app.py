from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import pathlib
from starlette.datastructures import UploadFile as StarletteUploadFile

from reports_common import get_port, get_reports_dir, setup_logger
from report_store import (
    NoReportFileError,
    ReportStoreError,
    ReportUploadError,
    ReportWriteError,
    ensure_reports_dir,
    list_reports,
    store_report,
)

app = FastAPI(title="Jest Reports API")

logger = setup_logger("jest_reports.api")

#para permitir solicitudes desde cualquier origen (el visor corre en otro puerto)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)



REPORTS_DIR: pathlib.Path = ensure_reports_dir(get_reports_dir())

UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully!"



@app.get("/api/reports")
def get_reports():
    """
    devuelve todos los reportes .json del directorio con su contenido parseado.
    Un fichero ilegible o con JSON invalido hace fallar el listado completo.
    """
    try:
        return list_reports(REPORTS_DIR)
    except ReportStoreError:
        logger.exception("Cannot list reports in %s", REPORTS_DIR)
        return JSONResponse(status_code=500, content={"error": ReportStoreError.message})


@app.post("/api/upload")
async def upload_report(request: Request):
    # se lee el form a mano: un campo "report" que no sea fichero es un 400, no un 422
    form = await request.form()
    report = form.get("report")
    if not isinstance(report, StarletteUploadFile):
        logger.warning("Upload rejected: no file")
        return JSONResponse(status_code=400, content={"error": NoReportFileError.message})

    try:
        content = await report.read()
        file_name = store_report(REPORTS_DIR, report.filename, content)
    except ReportUploadError as e:
        logger.warning("Upload rejected for %r: %s", report.filename, e.message)
        return JSONResponse(status_code=400, content={"error": e.message})
    except ReportWriteError:
        logger.exception("Cannot store report %r in %s", report.filename, REPORTS_DIR)
        return JSONResponse(status_code=500, content={"error": ReportWriteError.message})

    logger.info("Stored report %s (%d bytes)", file_name, len(content))
    return {"message": UPLOAD_SUCCESS_MESSAGE, "fileName": file_name}



if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(app, host=os.getenv("JEST_REPORTS_HOST", "0.0.0.0"), port=get_port("JEST_REPORTS_PORT", 5000))
