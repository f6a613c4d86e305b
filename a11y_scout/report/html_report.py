"""a11y_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape

from a11y_scout.aggregator import aggregate_violations, split_by_scope
from a11y_scout.models import PageAuditSuccess, SiteAuditResult

TEMPLATE_NAME = "report.html.j2"


def _environment(template_dir: Optional[Union[Path, str]]) -> Environment:
    if template_dir is None:
        loader = PackageLoader("a11y_scout.report", "templates")
    else:
        loader = FileSystemLoader(str(template_dir))
    return Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))


def render_html_string(result: SiteAuditResult, template_dir: Optional[Union[Path, str]] = None) -> str:
    """Рендерит HTML-отчёт по результату обхода сайта и возвращает строку."""
    structural, isolated = split_by_scope(aggregate_violations(result.audits))
    context: dict[str, Any] = {
        "result": result,
        "summary": result.summary,
        "crawl": result.crawl,
        "structural": structural,
        "isolated": isolated,
        "overview": [(entry, "structural") for entry in structural]
        + [(entry, "isolated") for entry in isolated],
        "audits": [
            (record, isinstance(record, PageAuditSuccess)) for record in result.audits
        ],
    }
    return _environment(template_dir).get_template(TEMPLATE_NAME).render(**context)


def render_html(
    result: SiteAuditResult,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        result: объект SiteAuditResult.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном ``report.html.j2``; по умолчанию
            используется шаблон из пакета.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html_string(result, template_dir), encoding="utf-8")
    return output_path
