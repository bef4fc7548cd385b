"""Helpers shared by commands that talk to the Trustev API."""

from __future__ import annotations

import typer

from trustev.client import ApiClient
from trustev.config import resolve_config
from trustev.context import ClientContext
from trustev.exceptions import ConfigError
from trustev.models import Profile


def active_profile(ctx: typer.Context) -> Profile:
    """Resolve the profile selected by ``--profile`` and the config precedence rules.

    Raises:
        ConfigError: If no profile is selected and none can be picked.
    """
    cli_profile = ctx.obj.get("profile") if ctx.obj else None
    _, profile = resolve_config(cli_profile)
    if profile is None:
        raise ConfigError(
            "No profile selected. Create one with 'trustev profile add' "
            "or pass --profile."
        )
    return profile


def build_client(context: ClientContext) -> ApiClient:
    return ApiClient(context)
