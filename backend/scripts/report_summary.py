"""Resumen en consola de un reporte JSON de Jest local (contadores, grafica y fallos)"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

sys.path.append(str(Path(__file__).resolve().parent.parent))
from reports_common import save_json
from viewer import Report, chart_data, flatten_tests, strip_json_extension, summary_counts


def resumir(report: Report) -> Dict[str, Any]:
    tests = flatten_tests(report)
    return {
        'name': strip_json_extension(report.fileName),
        'summary': summary_counts(report),
        'chart': chart_data(report).model_dump(include={'labels', 'data'}),
        'tests_count': len(tests),
        'failures': [
            {'fullName': t.get('fullName'), 'failureMessages': t.get('failureMessages', [])}
            for t in tests if t.get('failureMessages')
        ],
    }


def imprimir(resumen: Dict[str, Any]) -> None:
    s = resumen['summary']
    print(f"Report: {resumen['name']}")
    print(f"Total Tests: {s['total']}  Passed: {s['passed']}  Failed: {s['failed']}  Pending: {s['pending']}")
    for f in resumen['failures']:
        print(f"\n[FAILED] {f['fullName']}")
        for msg in f['failureMessages']:
            print(f"  {msg}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument('--file', required=True)
    parser.add_argument('--out', required=False, help='Exporta el resumen a JSON')
    args = parser.parse_args(argv)

    path = Path(args.file)
    report = Report(fileName=path.name, content=json.loads(path.read_text(encoding='utf-8')))
    resumen = resumir(report)
    imprimir(resumen)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        save_json(out_path, resumen)
        print(f"[INFO] Resumen guardado en {out_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
