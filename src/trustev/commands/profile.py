"""Profile commands -- create, list, inspect and remove merchant profiles.

A profile records how to reach the service and where to find the
password and shared secret. The secrets themselves are never written to
disk; see :func:`~trustev.config.resolve_credential`.
"""

from __future__ import annotations

from typing import Optional

import typer

from trustev.output import info, show, show_table, success, suggest


profile_app = typer.Typer(no_args_is_help=True)


@profile_app.command("add")
def profile_add(
    name: str = typer.Argument(help="Profile name."),
    user_name: str = typer.Option(..., "--user-name", "-u", help="Merchant user name."),
    password_source: str = typer.Option(
        "prompt",
        "--password-source",
        help="Password source: env:VAR, file:/path or prompt.",
    ),
    secret_source: str = typer.Option(
        "prompt",
        "--secret-source",
        help="Shared secret source: env:VAR, file:/path or prompt.",
    ),
    public_key: str = typer.Option("", "--public-key", help="Public key for session calls."),
    region: str = typer.Option("us", "--region", help="Service region: us or eu."),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the region's base URL."
    ),
    regenerate_token: bool = typer.Option(
        False, "--regenerate-token", help="Issue a new token on every call."
    ),
    timeout_ms: int = typer.Option(
        15000, "--timeout-ms", help="Request timeout in milliseconds."
    ),
) -> None:
    """Create or overwrite a profile.

    Example::

        trustev profile add shop -u merchant \\
            --password-source env:TRUSTEV_PASSWORD \\
            --secret-source file:~/.trustev-secret --region eu
    """
    from trustev.config import profile_exists, save_profile
    from trustev.exceptions import InvalidUsageError
    from trustev.models import Profile, Region

    try:
        parsed_region = Region(region.lower())
    except ValueError:
        raise InvalidUsageError(f"Unknown region: {region} (expected 'us' or 'eu')") from None

    if profile_exists(name):
        info(f'Profile "{name}" already exists and will be overwritten.')

    profile = Profile(
        name=name,
        user_name=user_name,
        password_source=password_source,
        secret_source=secret_source,
        public_key=public_key,
        region=parsed_region,
        base_url=base_url,
        regenerate_token=regenerate_token,
        request_timeout_ms=timeout_ms,
    )
    save_profile(profile)
    success(f'Profile "{name}" created.')
    suggest(f"Check credentials: trustev --profile {name} token")


@profile_app.command("list")
def profile_list() -> None:
    """List all profiles, marking the default one."""
    from trustev.config import list_profiles, load_global_config

    names = list_profiles()
    if not names:
        info("No profiles found.")
        suggest("Create one: trustev profile add NAME --user-name USER")
        return

    default = load_global_config().default_profile
    rows = [{"Profile": name, "Default": "*" if name == default else ""} for name in names]
    show_table(rows, ["Profile", "Default"], title="Profiles")


@profile_app.command("show")
def profile_show(name: str = typer.Argument(help="Profile name.")) -> None:
    """Show a profile's settings. Secret sources are shown, never secret values."""
    from trustev.config import load_profile

    profile = load_profile(name)
    show({**profile.model_dump(mode="json"), "effective_base_url": profile.effective_base_url})


@profile_app.command("remove")
def profile_remove(
    name: str = typer.Argument(help="Profile name."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip the confirmation prompt."),
) -> None:
    """Delete a profile. Asks for confirmation unless ``--force`` is given."""
    from trustev.config import delete_profile, load_global_config, save_global_config

    if not force and not typer.confirm(f'Remove profile "{name}"?'):
        info("Cancelled.")
        raise typer.Exit()

    delete_profile(name)

    config = load_global_config()
    if config.default_profile == name:
        config.default_profile = None
        save_global_config(config)
        info("Cleared default_profile.")

    success(f'Profile "{name}" removed.')
