"""
Config command group.

Commands:
    - config show [--field FIELD]   # Display configuration
    - config set KEY VALUE          # Update one setting
    - config reset [--field FIELD]  # Reset to defaults
    - config path                   # Print the config file location
"""

from enum import Enum
from pathlib import Path

import click
from pydantic import ValidationError

from cuedeck.exceptions import CueDeckError, wrap_pydantic_error
from cuedeck.models import DEFAULT_CONFIG_PATH, AppConfig

NONE_WORDS = ("none", "null", "default")


def _config_path(ctx) -> Path:
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


def _load(path: Path) -> AppConfig:
    try:
        return AppConfig.load_or_default(path)
    except CueDeckError as e:
        raise click.ClickException(e.get_full_message()) from e


def _format(value) -> str:
    if isinstance(value, Enum):
        return value.value
    return repr(value)


def _check_field(field: str) -> None:
    if field not in AppConfig.model_fields:
        known = ", ".join(AppConfig.model_fields)
        raise click.BadParameter(f"Unknown field '{field}'. Known fields: {known}")


@click.group(name="config")
def config():
    """Configure cuedeck settings."""
    pass


@config.command(name="show")
@click.option("--field", "-f", default=None, help="Show a single field")
@click.pass_context
def show(ctx, field: str | None):
    """Display the current configuration."""
    path = _config_path(ctx)
    current = _load(path)

    if field:
        _check_field(field)
        click.echo(f"{field} = {_format(getattr(current, field))}")
        return

    click.echo(f"Configuration ({path}):\n")
    for name, info in AppConfig.model_fields.items():
        click.echo(f"  {name} = {_format(getattr(current, name))}")
        if info.description:
            click.echo(f"      {info.description}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx, key: str, value: str):
    """
    Set KEY to VALUE and save.

    Use "none" to clear an optional setting such as serial_port.
    """
    _check_field(key)
    path = _config_path(ctx)
    current = _load(path)

    data = current.model_dump()
    data[key] = None if value.lower() in NONE_WORDS else value

    try:
        updated = AppConfig.model_validate(data)
    except ValidationError as e:
        error = wrap_pydantic_error(e, str(path))
        raise click.ClickException(error.get_full_message()) from e

    updated.save(path)
    click.echo(f"{key} = {_format(getattr(updated, key))}")


@config.command(name="reset")
@click.option("--field", "-f", default=None, help="Reset a single field")
@click.pass_context
def reset(ctx, field: str | None):
    """Reset the configuration (or one field) to defaults."""
    path = _config_path(ctx)

    if field:
        _check_field(field)
        current = _load(path)
        default = AppConfig.model_fields[field].get_default(call_default_factory=True)
        updated = current.model_copy(update={field: default})
        updated.save(path)
        click.echo(f"{field} reset to {_format(default)}")
        return

    AppConfig().save(path)
    click.echo(f"Configuration reset to defaults ({path})")


@config.command(name="path")
@click.pass_context
def show_path(ctx):
    """Print the configuration file location."""
    click.echo(str(_config_path(ctx)))
