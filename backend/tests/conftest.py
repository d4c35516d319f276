import os
import tempfile

import pytest

# app.py crea el directorio al importarse; nunca el de desarrollo
os.environ.setdefault("JEST_REPORTS_DIR", tempfile.mkdtemp(prefix="jest-reports-"))


def jest_result(passed=3, failed=1, pending=1):
    return {
        "numTotalTests": passed + failed + pending,
        "numPassedTests": passed,
        "numFailedTests": failed,
        "numPendingTests": pending,
        "testResults": [
            {
                "name": "/src/sum.test.js",
                "testResults": [
                    {"fullName": "sum adds numbers", "status": "passed", "failureMessages": []},
                    {"fullName": "sum handles zero", "status": "passed", "failureMessages": []},
                    {"fullName": "sum skips floats", "status": "pending", "failureMessages": []},
                ],
            },
            {
                "name": "/src/api.test.js",
                "testResults": [
                    {"fullName": "api returns 200", "status": "passed", "failureMessages": []},
                    {
                        "fullName": "api rejects bad input",
                        "status": "failed",
                        "failureMessages": ["Error: expected 400", "at api.test.js:12"],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def reports_dir(tmp_path, monkeypatch):
    import app as app_module

    monkeypatch.setattr(app_module, "REPORTS_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def api_client(reports_dir):
    from fastapi.testclient import TestClient
    from app import app

    return TestClient(app)
