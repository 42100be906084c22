# === FILE: sitemap_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SitemapScout через командную строку.

Аргументы:
  SITEMAP_URL         URL корневого sitemap (без него печатается usage)

Опции:
  --config PATH       YAML/JSON-конфиг (по умолчанию встроенные значения)
  --workers INT       Число воркеров (override workers)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-format FORMAT Формат логирования
  --json              Вывести итоговый отчёт в stdout в формате JSON
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --version, -v       Показать версию SitemapScout

Пример:
  sitemap-scout https://example.com/sitemap.xml --workers 3 --json --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from sitemap_scout import __version__
from sitemap_scout.config import load_config
from sitemap_scout.engine import start_crawl
from sitemap_scout.logger import DEFAULT_FORMAT, configure

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapScout, version %(version)s')
@click.argument('sitemap_url', required=False)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--workers', '-w', 'workers',
    type=click.IntRange(min=1),
    default=None,
    help='Число параллельных воркеров (override workers)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.option(
    '--json', 'json_output', is_flag=True,
    help='Вывести отчёт в stdout в формате JSON'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def cli(ctx, sitemap_url, config_path, workers, log_level, log_format, json_output, pretty):
    """Обойти все страницы, перечисленные в SITEMAP_URL."""
    if not sitemap_url:
        click.echo(ctx.get_usage())
        return

    # stdout is reserved for the report when --json is given
    configure(
        level=log_level,
        log_format=log_format,
        stream=sys.stderr if json_output else None,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if workers is not None:
        cfg = cfg.model_copy(update={'workers': workers})

    try:
        report = asyncio.run(start_crawl(sitemap_url, cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if report.error:
        print_error(f'Корневой sitemap не обработан: {report.error}')

    if json_output:
        click.echo(report.json(pretty=pretty))
        return

    stats = report.summary()
    click.echo(
        f"Discovered: {stats['discovered']} | crawled: {stats['crawled']} | "
        f"html: {stats['html']} | failed: {stats['failed']}"
    )


if __name__ == "__main__":
    cli()
