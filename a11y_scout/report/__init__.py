"""a11y_scout.report: генерация отчётов (консоль, JSON, HTML) для CLI и тестов."""

from __future__ import annotations

from a11y_scout.report.console_report import report_audit, report_site_audit
from a11y_scout.report.html_report import render_html, render_html_string
from a11y_scout.report.json_report import (
    audit_to_json,
    render_json,
    site_audit_to_dict,
    site_audit_to_json,
)

__all__ = [
    "report_audit",
    "report_site_audit",
    "render_html",
    "render_html_string",
    "render_json",
    "audit_to_json",
    "site_audit_to_dict",
    "site_audit_to_json",
]
