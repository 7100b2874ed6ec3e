#!/usr/bin/env python3
"""
Точка входа для запуска краулера wiki_crawl через командную строку.

Команды:
  crawl     Обойти страницы от стартовой, пока не будет проиндексирована новая
  counts    Показать число вхождений термина по страницам
  clear     Удалить все ключи индекса
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Пример:
  wiki-crawl crawl "https://en.wikipedia.org/wiki/Java_(programming_language)" --max-steps 20
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from wiki_crawl import __version__
from wiki_crawl.config import load_config
from wiki_crawl.engine import clear_index, read_counts, run_crawl
from wiki_crawl.errors import WikiCrawlError
from wiki_crawl.logger import configure
from wiki_crawl.report import render_html, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def echo_counts(counts):
    for url, count in sorted(counts.items()):
        click.echo(f'{url}={count}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='wiki_crawl, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд wiki_crawl CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed', required=False)
@click.option('--replay', is_flag=True, help='Читать страницы из офлайн-снимков и не пропускать проиндексированные')
@click.option('--memory', is_flag=True, help='Индекс в памяти вместо Redis')
@click.option('--max-steps', 'max_steps', type=click.IntRange(min=1), default=None, help='Лимит шагов обхода')
@click.option(
    '--preload/--no-preload', 'preload',
    default=None,
    help='Поставить в очередь ссылки стартовой страницы до обхода (по умолчанию из конфига)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (встроенные, если не указана)'
)
@click.pass_context
def crawl(ctx, seed, replay, memory, max_steps, preload, json_output, html_output, template_dir):
    """Обойти страницы и напечатать отчёт по термину из конфига."""
    cfg = ctx.obj['config']
    try:
        report = asyncio.run(
            run_crawl(cfg, seed, replay=replay, memory=memory, preload=preload, max_steps=max_steps)
        )
    except WikiCrawlError as e:
        print_error(f'Ошибка при обходе: {e}')

    status = report.result.status.value
    click.echo(f'{status}: {report.result.url}' if report.result.url else status)
    echo_counts(report.counts)

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(report, json_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(report, template_dir, html_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('counts', context_settings=CONTEXT_SETTINGS)
@click.argument('term')
@click.pass_context
def counts(ctx, term):
    """Показать число вхождений TERM на каждой проиндексированной странице."""
    cfg = ctx.obj['config']
    try:
        result = asyncio.run(read_counts(cfg, term.lower()))
    except WikiCrawlError as e:
        print_error(f'Индекс недоступен: {e}')
    echo_counts(result)


@cli.command('clear', context_settings=CONTEXT_SETTINGS)
@click.confirmation_option(prompt='Удалить все ключи индекса?')
@click.pass_context
def clear(ctx):
    """Удалить все данные индекса."""
    cfg = ctx.obj['config']
    try:
        asyncio.run(clear_index(cfg))
    except WikiCrawlError as e:
        print_error(f'Индекс недоступен: {e}')
    click.echo('Index cleared')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(mode='json'), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
