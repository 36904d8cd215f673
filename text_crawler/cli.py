# === FILE: text_crawler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера TextCrawler через командную строку.

Аргументы:
  SEED_URL              Стартовый URL обхода (обязательный)

Опции:
  --max-cache-mb MB     Порог буфера текста до записи в файл (default: 30)
  --output-dir DIR      Каталог для выходных файлов (default: текущий)
  --concurrency N       Число одновременных загрузок (default: 8)
  --timeout SEC         Таймаут на один запрос
  --retries N           Повторы при 5xx/429
  --user-agent UA       Заголовок User-Agent
  --same-host           Переходить только по ссылкам стартового хоста
  --max-pages N         Лимит по числу загрузок
  --max-depth N         Лимит глубины обхода
  --crawl-timeout SEC   Таймаут всего обхода; по истечении буфер всё равно сохраняется
  --config PATH         YAML/JSON с настройками (опции CLI важнее)
  --json PATH           Сохранить JSON-отчёт об обходе
  --log-level LEVEL     Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH       Файл для логов (stdout, если не указан)
  --log-format FORMAT   Формат логирования
  --version, -v         Показать версию TextCrawler

Код возврата 0 при завершении обхода (в том числе с ошибками отдельных страниц),
1: при неверном стартовом URL/конфиге или ошибке записи выходного файла.

Пример:
  text-crawler https://example.com --max-cache-mb 10 --output-dir out --json crawl.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from text_crawler import __version__
from text_crawler.config import build_config
from text_crawler.crawler.models import SinkError
from text_crawler.engine import start_crawl
from text_crawler.logger import DEFAULT_FORMAT, init_logging
from text_crawler.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "config"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='TextCrawler, version %(version)s')
@click.argument('seed_url')
@click.option('--max-cache-mb', 'max_cache_mb', type=float, default=None,
              help='Порог буфера текста в МиБ  [default: 30]')
@click.option('--output-dir', '-o', 'output_dir', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help='Каталог для выходных файлов  [default: .]')
@click.option('--concurrency', '-c', 'concurrency', type=int, default=None,
              help='Число одновременных загрузок  [default: 8]')
@click.option('--timeout', 'timeout', type=float, default=None,
              help='Таймаут на один запрос, секунд  [default: 10]')
@click.option('--retries', 'retry_times', type=int, default=None,
              help='Повторы при ответах 5xx/429  [default: 2]')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option('--same-host', 'same_host_only', is_flag=True, default=False,
              help='Переходить только по ссылкам стартового хоста')
@click.option('--max-pages', 'max_pages', type=int, default=None, help='Лимит по числу загрузок')
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Лимит глубины обхода')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None,
              help='Таймаут всего обхода, секунд')
@click.option('--config', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Путь к файлу конфигурации YAML/JSON')
@click.option('--json', '-j', 'json_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить JSON-отчёт в файл')
@click.option('--log-level', 'log_level', default='INFO', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              help='Уровень логирования')
@click.option('--log-file', 'log_file', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Путь к файлу логов (stdout, если не указан)')
@click.option('--log-format', 'log_format', default=DEFAULT_FORMAT, show_default=True,
              help='Строка формата для логов')
def cli(seed_url, max_cache_mb, output_dir, concurrency, timeout, retry_times, user_agent,
        same_host_only, max_pages, max_depth, crawl_timeout, config_path, json_output,
        log_level, log_file, log_format):
    """Рекурсивно обойти сайт от SEED_URL и сохранить текст страниц в файлы."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = build_config(
            config_path,
            seed_url=seed_url,
            max_cache_mb=max_cache_mb,
            output_dir=output_dir,
            concurrency=concurrency,
            timeout=timeout,
            retry_times=retry_times,
            user_agent=user_agent,
            same_host_only=same_host_only or None,
            max_pages=max_pages,
            max_depth=max_depth,
            crawl_timeout=crawl_timeout,
        )
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {_format_validation_error(e)}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    click.echo(f'Target URL set to: {cfg.seed_url}')
    try:
        result = asyncio.run(start_crawl(cfg))
    except SinkError as e:
        print_error(f'Ошибка записи выходного файла, обход прерван: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(
        f'Crawl complete: {result.pages_fetched} pages ({len(result.failed)} failed), '
        f'{result.bytes_cached} bytes of text, {len(result.files)} file(s) written.'
    )
    for path in result.files:
        click.echo(f'  {path}')

    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


if __name__ == "__main__":
    cli()
