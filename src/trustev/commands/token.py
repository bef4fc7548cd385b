"""Token command -- issue a token for the active profile.

Useful for checking that a profile's user name, password and shared
secret are accepted by the service before wiring it into an integration.
"""

from __future__ import annotations

from typing import Any

import typer

from trustev.commands import _shared
from trustev.output import show, success


def token_command(
    ctx: typer.Context,
    show_token: bool = typer.Option(
        False, "--show-token", help="Include the token itself in the output."
    ),
) -> None:
    """Issue a fresh token and print its expiry and credential type.

    The token is kept out of the output unless ``--show-token`` is given.

    Example::

        trustev --profile shop token
        trustev --json token --show-token
    """
    from trustev.config import context_from_profile

    profile = _shared.active_profile(ctx)
    context = context_from_profile(profile)
    with _shared.build_client(context) as client:
        token = client.get_token(profile.user_name)

    cached = context.tokens.get(profile.user_name)
    data: dict[str, Any] = {
        "profile": profile.name,
        "user_name": profile.user_name,
        "expire_at": cached.expire_at.isoformat() if cached and cached.expire_at else None,
        "credential_type": cached.credential_type if cached else None,
    }
    if show_token:
        data["token"] = token

    success(f"Token issued for {profile.user_name}.")
    show(data)
