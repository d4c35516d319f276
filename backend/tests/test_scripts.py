import json

import report_summary
import upload_report
from conftest import jest_result
from viewer import ReportStoreClient


def test_report_summary_exports_json(tmp_path, capsys):
    src = tmp_path / 'run1.json'
    src.write_text(json.dumps(jest_result()), encoding='utf-8')
    out = tmp_path / 'out' / 'summary.json'

    assert report_summary.main(['--file', str(src), '--out', str(out)]) == 0

    data = json.loads(out.read_text(encoding='utf-8'))
    assert data['name'] == 'run1'
    assert data['chart'] == {'labels': ['Passed', 'Failed', 'Pending'], 'data': [3, 1, 1]}
    assert data['tests_count'] == 5
    assert [f['fullName'] for f in data['failures']] == ['api rejects bad input']
    assert '[FAILED] api rejects bad input' in capsys.readouterr().out


def test_upload_report_script(tmp_path, monkeypatch, api_client, reports_dir):
    monkeypatch.setattr(upload_report, 'ReportStoreClient', lambda url: ReportStoreClient('', session=api_client))
    src = tmp_path / 'nightly.json'
    src.write_text(json.dumps(jest_result()), encoding='utf-8')

    assert upload_report.main(['--file', str(src)]) == 0
    assert (reports_dir / 'nightly.json').exists()

    bad = tmp_path / 'nightly.txt'
    bad.write_text('{}', encoding='utf-8')
    assert upload_report.main(['--file', str(bad)]) == 1


def test_upload_report_missing_file(tmp_path):
    assert upload_report.main(['--file', str(tmp_path / 'nope.json')]) == 2
