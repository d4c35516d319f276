"""reports_common.py
Funciones compartidas: get_reports_dir, get_api_url, save_json, setup_logger
"""
from __future__ import annotations
import os
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_API_URL = 'http://localhost:5000'


def get_reports_dir() -> Path:
    reports_dir = os.getenv('JEST_REPORTS_DIR')
    if reports_dir:
        return Path(reports_dir)
    return BASE_DIR / 'jest-reports'


def get_api_url() -> str:
    return os.getenv('JEST_REPORTS_API_URL', DEFAULT_API_URL).rstrip('/')


def get_port(var: str, default: int) -> int:
    value = os.getenv(var)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise RuntimeError(f'La variable de entorno {var} debe ser un entero: {value!r}')


def save_json(path: str | Path, data: Any) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def setup_logger(name: str = 'jest_reports', log_file: str | None = None, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        # Ya configurado
        return logger
    level = level or os.getenv('LOG_LEVEL', 'INFO')
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s - %(message)s')

    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding='utf-8')
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger
