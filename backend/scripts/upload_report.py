"""Sube un reporte JSON de Jest al servicio de reportes"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path

import requests

sys.path.append(str(Path(__file__).resolve().parent.parent))
from reports_common import get_api_url, setup_logger
from viewer import ReportStoreClient


def subir(client: ReportStoreClient, path: Path, logger) -> dict:
    logger.info('Subiendo %s a %s', path, client.base_url)
    return client.upload_report(path.name, path.read_bytes())


def main(argv=None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument('--file', required=True, help='Reporte .json generado con jest --json')
    parser.add_argument('--api', default=None, help='URL base del servicio (JEST_REPORTS_API_URL)')
    parser.add_argument('--log', required=False, help='Ruta para guardar el log')
    args = parser.parse_args(argv)

    logger = setup_logger('upload_report', log_file=args.log)
    path = Path(args.file)
    if not path.is_file():
        logger.error('No existe el fichero %s', path)
        return 2

    client = ReportStoreClient(args.api or get_api_url())
    try:
        body = subir(client, path, logger)
    except (requests.RequestException, ValueError) as e:
        logger.error('Failed to upload the file: %s', e)
        return 1

    print(json.dumps(body, indent=2, ensure_ascii=False))
    if body.get('error'):
        logger.error('Upload rejected: %s', body['error'])
        return 1
    logger.info('Guardado como %s', body.get('fileName'))
    return 0


if __name__ == '__main__':
    sys.exit(main())
