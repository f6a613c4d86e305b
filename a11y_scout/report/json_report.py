# a11y_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта A11yScout.

Сериализация SiteAuditResult (вместе со сводкой нарушений) в строку или файл.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from a11y_scout.aggregator import aggregate_violations, classify
from a11y_scout.models import AuditResult, SiteAuditResult


def site_audit_to_dict(result: SiteAuditResult) -> Dict[str, Any]:
    """Словарь отчёта: результат запуска плюс вычисленная сводка нарушений."""
    data = result.to_dict()
    data["violation_overview"] = [
        {**entry.to_dict(), "scope": classify(entry)} for entry in aggregate_violations(result.audits)
    ]
    return data


def site_audit_to_json(result: SiteAuditResult, *, pretty: bool = True) -> str:
    return json.dumps(site_audit_to_dict(result), ensure_ascii=False, indent=2 if pretty else None)


def audit_to_json(result: AuditResult, *, pretty: bool = True) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def render_json(
    result: Union[SiteAuditResult, AuditResult], output_path: Union[Path, str], *, pretty: bool = True
) -> Path:
    """
    Сохраняет отчёт в формате JSON по указанному пути.

    :param result: SiteAuditResult или AuditResult одной страницы
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from a11y_scout.report.json_report import render_json
    report_path = render_json(result, 'reports/report.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(result, SiteAuditResult):
        text = site_audit_to_json(result, pretty=pretty)
    else:
        text = audit_to_json(result, pretty=pretty)

    output.write_text(text, encoding="utf-8")
    return output
