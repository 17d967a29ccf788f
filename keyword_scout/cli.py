# === FILE: keyword_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска KeywordScout через командную строку.

Команды:
  scan      Искать ключевое слово на каждом URL из списка и сохранить отчёт
  emails    Собрать email-адреса с каждого URL из списка
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       YAML/JSON-конфиг (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Опции scan и emails:
  --in, -i PATH       Файл со списком URL или папка с такими файлами
  --out, -o PATH      Файл отчёта
  --concurrency N     Макс. число одновременных сканирований (default 20)
  --depth N           Лимит ссылок на один URL, 0 - только сам URL
  --timeout SEC       Таймаут одного запроса (секунд)
  --logging           Логировать ход сканирования

Дополнительно:
  --version, -v       Показать версию KeywordScout

Пример:
  keyword-scout scan --in urls.csv --out results.csv --keyword "connect with friends" --depth 5
"""
import asyncio
import re
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Sequence, Tuple

import click

from keyword_scout import __version__
from keyword_scout.aggregator import sort_by_url
from keyword_scout.config import ScannerConfig, load_config
from keyword_scout.errors import ScanError
from keyword_scout.logger import DEFAULT_FORMAT, configure
from keyword_scout.report import render_csv, render_html, render_json
from keyword_scout.scanner import Scanner
from keyword_scout.sources import read_urls

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

ScanOne = Callable[[Scanner, str], Awaitable[None]]


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def _override(cfg: ScannerConfig, **values: Any) -> ScannerConfig:
    """Возвращает *cfg*, в котором заменены все значения не None, с повторной валидацией."""
    updates = {k: v for k, v in values.items() if v is not None}
    if not updates:
        return cfg
    return ScannerConfig(**{**cfg.model_dump(), **updates})


def _compile_regex(value: str, param_hint: str) -> "re.Pattern[str]":
    try:
        return re.compile(value)
    except re.error as exc:
        raise click.BadParameter(f"некорректное регулярное выражение: {exc}", param_hint=param_hint)


async def run_batch(
    scanner: Scanner, urls: Sequence[str], scan_one: ScanOne
) -> List[Tuple[str, ScanError]]:
    """Запускает по одной задаче на URL и возвращает URL, скан которых завершился ошибкой."""
    async with scanner:
        outcomes = await asyncio.gather(
            *(scan_one(scanner, url) for url in urls), return_exceptions=True
        )
    failures: List[Tuple[str, ScanError]] = []
    for url, outcome in zip(urls, outcomes):
        if isinstance(outcome, ScanError):
            failures.append((url, outcome))
        elif isinstance(outcome, BaseException):
            raise outcome
    return failures


def _execute(cfg: ScannerConfig, urls: Sequence[str], scan_one: ScanOne) -> Scanner:
    scanner = Scanner.from_config(cfg)
    failures = asyncio.run(run_batch(scanner, urls, scan_one))
    for url, err in failures:
        click.secho(f"search error for {url}: {err}", fg="red", err=True)
    return scanner


def _summary(results) -> str:
    found = sum(1 for r in results if r.found)
    return (
        f"{len(results)} results, "
        f"{click.style(str(found) + ' found', fg='green')}, "
        f"{click.style(str(len(results) - found) + ' not found', fg='red')}"
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="KeywordScout, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stdout, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд KeywordScout CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


def _batch_options(func):
    """Опции, общие для команд, сканирующих список URL."""
    options = [
        click.option(
            "--in", "-i", "input_path", required=True,
            type=click.Path(exists=True, path_type=Path),
            help="Файл со списком URL или папка с такими файлами",
        ),
        click.option(
            "--out", "-o", "output_path", required=True,
            type=click.Path(writable=True, dir_okay=False, path_type=Path),
            help="Путь к файлу отчёта",
        ),
        click.option("--concurrency", type=click.IntRange(min=1), default=None,
                     help="Макс. число одновременных сканирований (default 20)"),
        click.option("--depth", type=click.IntRange(min=0), default=None,
                     help="Лимит ссылок на один URL, 0 - только сам URL"),
        click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
                     help="Таймаут одного запроса (секунд)"),
        click.option("--logging", "enable_logging", is_flag=True, default=False,
                     help="Логировать ход сканирования"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_batch(ctx, input_path, concurrency, depth, timeout, enable_logging):
    cfg = _override(
        ctx.obj["config"],
        concurrency=concurrency,
        depth=depth,
        timeout=timeout,
        logging=enable_logging or None,
    )
    try:
        urls = read_urls(input_path)
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Ошибка чтения списка URL: {e}")
    if not urls:
        print_error(f"В {input_path} не найдено ни одного URL")
    return cfg, urls


@cli.command("scan", context_settings=CONTEXT_SETTINGS)
@_batch_options
@click.option("--keyword", "-k", required=True, help="Искомое ключевое слово")
@click.option("--regex", "is_regex", is_flag=True, help="Считать ключевое слово регулярным выражением")
@click.option(
    "--format", "-f", "report_format",
    type=click.Choice(["csv", "json", "html"]), default="csv", show_default=True,
    help="Формат отчёта",
)
@click.option(
    "--template", "-t", "template_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Папка с Jinja2-шаблоном report.html.j2",
)
@click.pass_context
def scan(ctx, input_path, output_path, concurrency, depth, timeout, enable_logging,
         keyword, is_regex, report_format, template_dir):
    """Искать ключевое слово на каждом URL и сохранить отчёт, отсортированный по URL."""
    if not keyword:
        raise click.BadParameter("ключевое слово не может быть пустым", param_hint="--keyword")
    cfg, urls = _load_batch(ctx, input_path, concurrency, depth, timeout, enable_logging)

    if is_regex:
        pattern = _compile_regex(keyword, "--keyword")

        async def scan_one(scanner: Scanner, url: str) -> None:
            await scanner.search_with_pattern(url, pattern)
    else:
        async def scan_one(scanner: Scanner, url: str) -> None:
            await scanner.search(url, keyword)

    click.echo(f"Scanning {len(urls)} urls for {keyword!r}")
    scanner = _execute(cfg, urls, scan_one)
    results = sort_by_url(scanner.get_results())

    try:
        if report_format == "json":
            saved = render_json(results, output_path)
        elif report_format == "html":
            saved = render_html(results, output_path, template_dir,
                                title=f"Search for keyword {keyword}")
        else:
            saved = render_csv(results, keyword, output_path)
    except OSError as e:
        print_error(f"Ошибка при сохранении отчёта: {e}")
    click.echo(_summary(results))
    click.echo(f"Report: {saved}")


@cli.command("emails", context_settings=CONTEXT_SETTINGS)
@_batch_options
@click.option("--pattern", "-p", default=None, help="Регулярное выражение для email (по умолчанию встроенное)")
@click.option("--filter", "filters", multiple=True,
              help="Отбросить адреса, содержащие эту подстроку (можно повторять)")
@click.pass_context
def emails(ctx, input_path, output_path, concurrency, depth, timeout, enable_logging,
           pattern, filters):
    """Собрать email-адреса с каждого URL и сохранить их в JSON."""
    cfg, urls = _load_batch(ctx, input_path, concurrency, depth, timeout, enable_logging)
    regex = _compile_regex(pattern, "--pattern") if pattern else None

    async def scan_one(scanner: Scanner, url: str) -> None:
        await scanner.search_for_email(url, regex, list(filters))

    click.echo(f"Scanning {len(urls)} urls for email addresses")
    scanner = _execute(cfg, urls, scan_one)
    results = sort_by_url(scanner.get_results())
    try:
        saved = render_json(results, output_path)
    except OSError as e:
        print_error(f"Ошибка при сохранении отчёта: {e}")
    click.echo(_summary(results))
    click.echo(f"Report: {saved}")


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg: ScannerConfig = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
