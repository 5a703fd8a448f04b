# === FILE: site_robots/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для проверки robots.txt через командную строку.

Команды:
  check      Проверить, разрешены ли пути для агента
  delay      Показать Crawl-delay для агента
  sitemaps   Вывести список Sitemap из файла
  normalize  Разобрать файл и вывести эквивалентный robots.txt
  config     Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (значения по умолчанию, если не указан)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Пример:
  site-robots check robots.txt /example/yeah.txt /example/nope.txt --agent foobot
"""
import sys
from pathlib import Path
from typing import BinaryIO

import click

from site_robots import __version__
from site_robots.builder import to_text
from site_robots.config import RobotsConfig, load_config
from site_robots.logger import configure as configure_logging
from site_robots.rules.ruleset import RuleSet, parse

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def read_rules(ctx: click.Context, source: BinaryIO, optimize: bool = False) -> RuleSet:
    """Читает не больше byte_limit байт и разбирает их."""
    cfg: RobotsConfig = ctx.obj['config']
    try:
        data = source.read(cfg.byte_limit)
    except OSError as e:
        print_error(f'Ошибка чтения robots.txt: {e}')
    return parse(data, optimize=optimize or cfg.optimize)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteRobots, version %(version)s')
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
    """Группа команд SiteRobots CLI."""
    configure_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path) if config_path else RobotsConfig()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.argument('robots', type=click.File('rb'))
@click.argument('paths', nargs=-1, required=True)
@click.option('--agent', '-a', default=None, help='User-agent (по умолчанию из конфига)')
@click.option('--optimize', is_flag=True, help='Сжать правила перед проверкой')
@click.pass_context
def check(ctx, robots, paths, agent, optimize):
    """Проверить пути; код выхода 2, если хотя бы один запрещён."""
    agent = agent or ctx.obj['config'].user_agent
    rules = read_rules(ctx, robots, optimize)
    denied = 0
    for path in paths:
        allowed = rules.is_allowed(agent, path)
        denied += not allowed
        click.echo(f"{'ALLOWED' if allowed else 'DISALLOWED'}\t{path}")
    if denied:
        ctx.exit(2)


@cli.command('delay', context_settings=CONTEXT_SETTINGS)
@click.argument('robots', type=click.File('rb'))
@click.option('--agent', '-a', default=None, help='User-agent (по умолчанию из конфига)')
@click.pass_context
def delay(ctx, robots, agent):
    """Показать Crawl-delay в секундах (пустой вывод, если не задан)."""
    agent = agent or ctx.obj['config'].user_agent
    value = read_rules(ctx, robots).crawl_delay(agent)
    if value is not None:
        click.echo(f'{value:g}')


@cli.command('sitemaps', context_settings=CONTEXT_SETTINGS)
@click.argument('robots', type=click.File('rb'))
@click.pass_context
def show_sitemaps(ctx, robots):
    """Вывести Sitemap-ссылки по одной на строку."""
    for url in read_rules(ctx, robots).sitemaps:
        click.echo(url)


@cli.command('normalize', context_settings=CONTEXT_SETTINGS)
@click.argument('robots', type=click.File('rb'))
@click.option('--optimize', is_flag=True, help='Сжать правила перед выводом')
@click.pass_context
def normalize(ctx, robots, optimize):
    """Разобрать robots.txt и вывести эквивалентный текст."""
    rules = read_rules(ctx, robots, optimize)
    click.echo(to_text(rules).decode('utf-8'), nl=False)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
