"""Config commands -- the default profile, auto-selection and output format.

The global config holds exactly three settings, each set by name::

    trustev config set default_profile shop
    trustev config set auto_select_single_profile false
    trustev config set output.format json

Profiles themselves are managed with ``trustev profile``.
"""

from __future__ import annotations

from typing import Callable

import typer

from trustev.exceptions import InvalidUsageError
from trustev.models import GlobalConfig
from trustev.output import OutputFormat, info, show, success


config_app = typer.Typer(no_args_is_help=True)

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def _set_default_profile(config: GlobalConfig, value: str) -> None:
    from trustev.config import profile_exists

    if value and not profile_exists(value):
        raise InvalidUsageError(f"No profile named '{value}'. Create it with 'trustev profile add'.")
    config.default_profile = value or None


def _set_auto_select(config: GlobalConfig, value: str) -> None:
    flag = value.strip().lower()
    if flag not in _TRUE + _FALSE:
        raise InvalidUsageError(f"auto_select_single_profile expects true or false, got '{value}'")
    config.auto_select_single_profile = flag in _TRUE


def _set_output_format(config: GlobalConfig, value: str) -> None:
    try:
        config.output.format = OutputFormat(value.strip().lower()).value
    except ValueError:
        choices = ", ".join(fmt.value for fmt in OutputFormat)
        raise InvalidUsageError(f"output.format must be one of {choices}, got '{value}'") from None


_SETTERS: dict[str, Callable[[GlobalConfig, str], None]] = {
    "default_profile": _set_default_profile,
    "auto_select_single_profile": _set_auto_select,
    "output.format": _set_output_format,
}


@config_app.command("show")
def config_show() -> None:
    """Show the global config and where it lives."""
    from trustev.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    show(load_global_config())


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="default_profile, auto_select_single_profile or output.format."),
    value: str = typer.Argument(help="New value. An empty default_profile clears it."),
) -> None:
    """Change one global setting."""
    from trustev.config import load_global_config, save_global_config

    setter = _SETTERS.get(key)
    if setter is None:
        raise InvalidUsageError(f"Unknown config key '{key}'. Known keys: {', '.join(_SETTERS)}")

    config = load_global_config()
    setter(config, value)
    save_global_config(config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip the confirmation prompt."),
) -> None:
    """Restore the default global config. Profiles are kept."""
    from trustev.config import save_global_config

    if not force and not typer.confirm("Reset the global config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
