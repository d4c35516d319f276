import pytest

from report_store import (
    InvalidReportExtensionError,
    NoReportFileError,
    ReportStoreError,
    ReportWriteError,
    ensure_reports_dir,
    list_reports,
    store_report,
)


def test_ensure_reports_dir_creates_parents(tmp_path):
    target = tmp_path / 'a' / 'b' / 'jest-reports'
    assert ensure_reports_dir(target) == target
    assert target.is_dir()
    # idempotente
    ensure_reports_dir(target)


def test_store_report_keeps_original_name(tmp_path):
    assert store_report(tmp_path, 'run1.json', b'{"a": 1}') == 'run1.json'
    assert (tmp_path / 'run1.json').read_bytes() == b'{"a": 1}'


def test_store_report_drops_client_directories(tmp_path):
    reports = tmp_path / 'reports'
    reports.mkdir()
    assert store_report(reports, '../../evil.json', b'{}') == 'evil.json'
    assert store_report(reports, 'C:\\tmp\\win.json', b'{}') == 'win.json'
    assert sorted(p.name for p in reports.iterdir()) == ['evil.json', 'win.json']
    assert not (tmp_path / 'evil.json').exists()


@pytest.mark.parametrize('name', ['x.txt', 'report.JSON', 'report.json.bak', 'report', '.json'])
def test_store_report_rejects_other_extensions(tmp_path, name):
    with pytest.raises(InvalidReportExtensionError) as exc:
        store_report(tmp_path, name, b'{}')
    assert exc.value.message == 'Only JSON files are allowed'
    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize('name', [None, ''])
def test_store_report_requires_a_file(tmp_path, name):
    with pytest.raises(NoReportFileError):
        store_report(tmp_path, name, b'')


def test_list_reports_skips_json_directories(tmp_path):
    (tmp_path / 'nested.json').mkdir()
    (tmp_path / 'a.json').write_text('[]', encoding='utf-8')
    assert list_reports(tmp_path) == [{'fileName': 'a.json', 'content': []}]


def test_list_reports_missing_dir(tmp_path):
    with pytest.raises(ReportStoreError):
        list_reports(tmp_path / 'missing')


def test_list_reports_invalid_utf8(tmp_path):
    (tmp_path / 'bin.json').write_bytes(b'\xff\xfe\x00')
    with pytest.raises(ReportStoreError):
        list_reports(tmp_path)


def test_store_report_write_failure(tmp_path):
    with pytest.raises(ReportWriteError) as exc:
        store_report(tmp_path / 'missing', 'run.json', b'{}')
    assert isinstance(exc.value, ReportStoreError)
