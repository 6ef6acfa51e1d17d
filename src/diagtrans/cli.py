"""
Main CLI for diagtrans using Click.

Renders log entries dumped by the evaluation engine as translated,
human-readable lines.
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from .config.loader import load_config
from .config.schema import AppConfig
from .entries import LEVELS, EntryFormatError, LogEntry, parse_entries, read_entries
from .i18n import (
    CatalogFileError,
    ModuleRegistry,
    Translator,
    load_catalog_file,
)
from .logging import configure_logging

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 3

# Current version
_VERSION = "0.3.0"


def build_translator(config: AppConfig) -> Translator:
    """Install the process default Translator described by config.

    Catalog files list every module explicitly, so no base module is
    requested on top of them.
    """
    modules = None
    if config.catalogs:
        modules = ModuleRegistry()
        for path in config.catalogs:
            load_catalog_file(Path(path), registry=modules)

    return Translator.configure(
        config.locale,
        modules=modules,
        base_module=None,
        domain=config.domain,
        locale_dir=config.locale_dir,
    )


def _load_entries(source: Path, fmt: str) -> list[LogEntry]:
    if str(source) == "-":
        text = click.get_text_stream("stdin").read()
        return parse_entries(text, fmt="yaml" if fmt == "yaml" else "json")
    if fmt == "auto":
        return read_entries(source)
    return parse_entries(source.read_text(encoding="utf-8"), fmt=fmt)


@click.group()
@click.version_option(version=_VERSION, prog_name="diagtrans")
def main() -> None:
    """diagtrans - Render diagnostic log entries in your language.

    Entries carry a module, a tag and named arguments; diagtrans looks up
    the message template for the module/tag pair, translates it to the
    active locale and fills in the arguments.
    """
    pass


@main.command()
@click.argument("entries", type=click.Path(allow_dash=True, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the YAML configuration file",
)
@click.option(
    "--catalog",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML module catalog (repeatable, later files win)",
)
@click.option(
    "-l",
    "--locale",
    help="Locale to translate to (e.g. sv_SE.UTF-8). Default: from the environment",
)
@click.option(
    "--locale-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory with compiled <lang>/LC_MESSAGES/<domain>.mo catalogs",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["auto", "json", "yaml"]),
    default="auto",
    show_default=True,
    help="Entries file format (auto = from the file extension)",
)
@click.option(
    "--level",
    type=click.Choice(list(LEVELS), case_sensitive=False),
    help="Only show entries at this level or above",
)
@click.option(
    "--message-only",
    is_flag=True,
    default=False,
    help="Print only the translated message, without timestamp and level",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log verbosity (-v = INFO, -vv = DEBUG)",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Write JSON logs to this file",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="No logs on stderr",
)
def render(entries: Path, **kwargs) -> None:
    """Render log entries, one line each.

    ENTRIES is a JSON array, JSON lines or YAML file ("-" for stdin).

    Examples:

        \b
        $ diagtrans render results.json --catalog modules.yaml
        $ diagtrans render results.json --locale sv_SE.UTF-8 --level notice
        $ cat results.jsonl | diagtrans render - --message-only
    """
    try:
        config = load_config(config_path=kwargs.get("config"), cli_args=kwargs)
        configure_logging(config.logging, quiet=kwargs.get("quiet", False))
        translator = build_translator(config)
    except (FileNotFoundError, CatalogFileError, ValidationError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    try:
        loaded = _load_entries(entries, kwargs.get("fmt", "auto"))
    except (OSError, EntryFormatError) as e:
        click.echo(f"Could not read entries: {e}", err=True)
        sys.exit(EXIT_FAILED)

    min_level = LEVELS[kwargs["level"].upper()] if kwargs.get("level") else None
    render_line = translator.translate_tag if kwargs.get("message_only") else translator.to_string

    for entry in loaded:
        if min_level is not None and entry.numeric_level < min_level:
            continue
        click.echo(render_line(entry))


@main.command("catalog")
@click.argument("module", required=False)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the YAML configuration file",
)
@click.option(
    "--catalog",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML module catalog (repeatable, later files win)",
)
def catalog_cmd(module: str | None, config: Path | None, catalog: tuple[Path, ...]) -> None:
    """List known modules, or the templates of MODULE."""
    try:
        app_config = load_config(config_path=config, cli_args={"catalog": catalog})
        configure_logging(app_config.logging)
        data = build_translator(app_config).data
    except (FileNotFoundError, CatalogFileError, ValidationError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if module is None:
        click.echo("Known modules:\n")
        for name, tags in data.items():
            click.echo(f"  {name:<16} {len(tags)} tags")
        return

    key = module.upper()
    if key not in data:
        click.echo(f"Unknown module: {module}. Known: {', '.join(data)}", err=True)
        sys.exit(EXIT_FAILED)

    click.echo(f"{key}:\n")
    for tag, template in sorted(data[key].items()):
        click.echo(f"  {tag:<32} {template}")


@main.command()
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the configuration file to validate",
)
def validate_config(config: Path | None) -> None:
    """Validate a YAML configuration file."""
    try:
        app_config = load_config(config_path=config)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except ValidationError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_FAILED)

    click.echo("Valid configuration")
    click.echo(f"  Locale: {app_config.locale or '(from environment)'}")
    click.echo(f"  Domain: {app_config.domain}")
    click.echo(f"  Catalogs: {len(app_config.catalogs)}")
