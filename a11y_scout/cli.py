# === FILE: a11y_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска A11yScout через командную строку.

Команды:
  audit URL   Аудит доступности одной страницы
  quick URL   Быстрая проверка страницы с кратким итогом
  crawl URL   Обойти сайт и провести аудит каждой найденной страницы
  config      Показать текущую конфигурацию
  install-browsers  Установить Chromium для Playwright

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --max-pages N       Макс. число страниц
  --max-depth N       Макс. глубина ссылок от стартовой страницы
  --delay MS          Пауза между запросами краулера
  --allow-external    Переходить по ссылкам на другие домены
  --timeout MS        Таймаут аудита одной страницы
  --output FORMAT     console | json | html
  --file PATH         Сохранить отчёт в файл

Дополнительно:
  --version, -v       Показать версию A11yScout

Пример:
  a11y-scout crawl https://example.com --max-pages 10 --output json --file report.json
"""
import asyncio
import subprocess
import sys
from pathlib import Path

import click

from a11y_scout import __version__
from a11y_scout.config import load_config
from a11y_scout.engine import audit_page, run_site_audit
from a11y_scout.logger import DEFAULT_FORMAT, init_logging
from a11y_scout.report.console_report import report_audit, report_site_audit
from a11y_scout.report.html_report import render_html
from a11y_scout.report.json_report import audit_to_json, site_audit_to_json
from a11y_scout.utils import normalize_url

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _write_or_echo(text: str, file_path):
    if file_path is None:
        click.echo(text)
        return
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding='utf-8')
    click.secho(f'Results saved to {file_path}', fg='green')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='A11yScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Аудит доступности сайтов (WCAG 2.0/2.1 A и AA)."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--timeout', '-t', 'timeout', type=click.IntRange(min=1), default=None,
              help='Таймаут аудита (мс)')
@click.option('--output', '-o', 'output', type=click.Choice(['console', 'json']), default='console',
              show_default=True, help='Формат вывода')
@click.option('--file', '-f', 'file_path', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить JSON-отчёт в файл')
@click.option('--verbose', is_flag=True, help='Показать затронутые элементы')
@click.pass_context
def audit(ctx, url, timeout, output, file_path, verbose):
    """Провести аудит одной страницы."""
    cfg = ctx.obj['config']
    if normalize_url(url) is None:
        print_error(f'Некорректный URL: {url}')
    try:
        result = asyncio.run(audit_page(url, cfg, timeout if timeout is not None else cfg.timeout))
    except Exception as e:
        print_error(f'Ошибка при аудите: {e}')

    if output == 'json' or file_path is not None:
        _write_or_echo(audit_to_json(result), file_path)
    else:
        report_audit(result, verbose=verbose)


@cli.command('quick', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def quick(ctx, url):
    """Быстрая проверка одной страницы: одна строка итога."""
    cfg = ctx.obj['config']
    if normalize_url(url) is None:
        print_error(f'Некорректный URL: {url}')
    try:
        result = asyncio.run(audit_page(url, cfg, cfg.timeout))
    except Exception as e:
        print_error(f'Quick check failed: {e}')

    summary = result.summary
    if summary.total_violations == 0:
        click.secho(f'{url} - No violations found', fg='green')
    else:
        click.secho(f'{url} - {summary.total_violations} violations found', fg='yellow')
        click.secho(
            f'   Critical: {summary.critical_violations}, Serious: {summary.serious_violations}',
            dim=True
        )


def playwright_install_command(browser: str) -> list[str]:
    return [sys.executable, '-m', 'playwright', 'install', browser]


@cli.command('install-browsers', context_settings=CONTEXT_SETTINGS)
@click.option('--browser', 'browser', default='chromium', show_default=True,
              type=click.Choice(['chromium', 'firefox', 'webkit']),
              help='Какой браузер установить')
def install_browsers(browser):
    """Установить браузер Playwright (однократная настройка)."""
    command = playwright_install_command(browser)
    click.echo(f'Running: {" ".join(command)}')
    try:
        completed = subprocess.run(command, check=False)
    except OSError as e:
        print_error(f'Не удалось запустить установку браузера: {e}')
    if completed.returncode != 0:
        print_error(f'playwright install завершился с кодом {completed.returncode}')
    click.secho(f'{browser} installed', fg='green')


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--max-pages', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Макс. число страниц для аудита')
@click.option('--max-depth', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Макс. глубина обхода')
@click.option('--delay', 'delay_ms', type=click.IntRange(min=0), default=None,
              help='Пауза между запросами краулера (мс)')
@click.option('--allow-external', is_flag=True, help='Переходить по ссылкам на другие домены')
@click.option('--timeout', '-t', 'timeout', type=click.IntRange(min=1), default=None,
              help='Таймаут аудита одной страницы (мс)')
@click.option('--output', '-o', 'output', type=click.Choice(['console', 'json', 'html']),
              default='console', show_default=True, help='Формат вывода')
@click.option('--file', '-f', 'file_path', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить отчёт в файл')
@click.option('--pretty/--compact', default=True, help='Форматировать JSON с отступами')
@click.option('--verbose', is_flag=True, help='Подробный отчёт по каждой странице')
@click.pass_context
def crawl(ctx, url, max_pages, max_depth, delay_ms, allow_external, timeout, output, file_path,
          pretty, verbose):
    """Обойти сайт и провести аудит каждой найденной страницы."""
    if output == 'html' and file_path is None:
        print_error('Для --output html нужен --file')
    try:
        cfg = ctx.obj['config'].with_overrides(
            max_pages=max_pages,
            max_depth=max_depth,
            delay_ms=delay_ms,
            same_origin=False if allow_external else None,
            timeout=timeout,
        )
    except Exception as e:
        print_error(f'Некорректные параметры: {e}')
    options = {**cfg.crawl.model_dump(), 'timeout': cfg.timeout}
    try:
        result = asyncio.run(run_site_audit(url, options, cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе сайта: {e}')

    if output == 'json':
        _write_or_echo(site_audit_to_json(result, pretty=pretty), file_path)
    elif output == 'html':
        saved = render_html(result, file_path)
        click.secho(f'HTML report: {saved}', fg='green')
    else:
        report_site_audit(result, verbose=verbose)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
