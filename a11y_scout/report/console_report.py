# a11y_scout/report/console_report.py
"""Coloured terminal output for single-page and site audits."""
from __future__ import annotations

import click

from a11y_scout.aggregator import aggregate_violations, split_by_scope
from a11y_scout.models import (
    AuditResult,
    AuditSummary,
    PageAuditFailure,
    PageAuditSuccess,
    SiteAuditResult,
    Violation,
    ViolationOverviewEntry,
)

__all__ = ["report_audit", "report_site_audit"]

_IMPACT_STYLE = {
    "critical": ("red", "Critical"),
    "serious": ("yellow", "Serious"),
    "moderate": ("blue", "Moderate"),
    "minor": ("white", "Minor"),
}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _print_summary(summary: AuditSummary) -> None:
    click.secho("Summary:", bold=True)
    if summary.total_violations == 0:
        click.secho(f"  {summary.total_passes} checks passed", fg="green")
    else:
        click.secho(f"  {_plural(summary.total_violations, 'violation')} found", fg="red")
        for impact, count in (
            ("critical", summary.critical_violations),
            ("serious", summary.serious_violations),
            ("moderate", summary.moderate_violations),
            ("minor", summary.minor_violations),
        ):
            if count:
                color, label = _IMPACT_STYLE[impact]
                click.secho(f"    {label}: {count}", fg=color)
    if summary.incomplete:
        click.secho(f"  {summary.incomplete} checks need manual review", fg="yellow")
    click.echo("")


def _print_violation(violation: Violation, verbose: bool) -> None:
    color, label = _IMPACT_STYLE[violation.impact]
    click.echo(
        f"{click.style(label.upper(), fg=color, bold=True)} {click.style(violation.id, bold=True)}"
        f" ({violation.wcag_level})"
    )
    click.echo(f"   {violation.help}")
    click.secho(f"   {_plural(len(violation.nodes), 'element')} affected", dim=True)
    if verbose:
        for node in violation.nodes:
            click.secho(f"   • {' '.join(node.target)}", dim=True)
    click.secho(f"   Help: {violation.help_url}", dim=True)


def report_audit(result: AuditResult, *, verbose: bool = False) -> None:
    """Print the audit of one page."""
    click.echo("")
    click.secho("Accessibility Audit Report", fg="blue", bold=True)
    click.secho("=" * 50, dim=True)
    click.secho(f"URL: {result.url}", bold=True)
    click.secho(f"Timestamp: {result.timestamp}", dim=True)
    click.echo("")

    _print_summary(result.summary)

    if not result.violations:
        click.secho("No accessibility violations found!", fg="green", bold=True)
        return
    for violation in result.violations:
        _print_violation(violation, verbose)


def _print_entry(entry: ViolationOverviewEntry) -> None:
    color, _ = _IMPACT_STYLE.get(entry.impact, ("white", ""))
    click.echo(
        f"{click.style(entry.id, fg=color, bold=True)} - "
        f"{_plural(entry.total_occurrences, 'occurrence')} across "
        f"{_plural(len(entry.pages), 'page')}"
    )
    click.secho(f"   {entry.description}", dim=True)
    for page in entry.pages:
        click.secho(f"   • {page.occurrences}x {page.url}", dim=True)
    click.secho(f"   Help: {entry.help_url}", dim=True)
    click.echo("")


def _print_overview(result: SiteAuditResult) -> None:
    structural, isolated = split_by_scope(aggregate_violations(result.audits))
    if not structural and not isolated:
        return

    click.echo("")
    click.secho("Violation overview", fg="cyan", bold=True)
    if structural:
        click.secho(f"Structural (seen on several pages): {len(structural)}", fg="red", bold=True)
        for entry in structural:
            _print_entry(entry)
    if isolated:
        click.secho(f"Isolated (single page): {len(isolated)}", fg="green", bold=True)
        for entry in isolated:
            _print_entry(entry)


def report_site_audit(result: SiteAuditResult, *, verbose: bool = False) -> None:
    """Print crawl summary, cross-page overview, crawl errors and per-page outcomes.

    Crawl errors (page could not be fetched) and audit failures (page fetched
    but the browser or rule engine failed) are listed separately.
    """
    summary = result.summary
    click.echo("")
    click.secho(f"Crawl summary for {result.start_url}", fg="cyan", bold=True)
    click.echo(
        f"Pages discovered: {summary.total_pages} "
        f"(skipped: {result.crawl.skipped}, crawl errors: {len(result.crawl.errors)})"
    )
    click.echo(
        f"Audits run: {summary.total_pages} (success: {summary.successes}, failed: {summary.failures})"
    )
    click.echo(f"Total violations found: {summary.total_violations}")

    _print_overview(result)

    if result.crawl.errors:
        click.echo("")
        click.secho("Crawl errors:", fg="yellow", bold=True)
        for error in result.crawl.errors:
            click.echo(f" • {click.style(error.url, bold=True)} - {error.error}")

    click.echo("")
    click.secho("Per-page results", fg="cyan", bold=True)
    for record in result.audits:
        if isinstance(record, PageAuditSuccess):
            total = record.result.summary.total_violations
            if total == 0:
                detail = click.style("No violations detected", fg="green")
            else:
                detail = click.style(_plural(total, "violation"), fg="yellow")
            click.echo(f"OK   {click.style(record.url, bold=True)} - {detail}")
            if verbose:
                report_audit(record.result, verbose=True)
        elif isinstance(record, PageAuditFailure):
            click.echo(f"FAIL {click.style(record.url, bold=True)} - {click.style(record.error, fg='red')}")
