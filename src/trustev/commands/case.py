"""Case commands -- look up posted cases and their status history."""

from __future__ import annotations

import typer

from trustev.commands import _shared
from trustev.output import info, show, show_table


case_app = typer.Typer(no_args_is_help=True)


@case_app.command("get")
def case_get(
    ctx: typer.Context,
    case_id: str = typer.Argument(help="Case id assigned by the service."),
) -> None:
    """Fetch a case by id.

    Example::

        trustev case get 3f1c...
    """
    from trustev.config import context_from_profile

    context = context_from_profile(_shared.active_profile(ctx))
    with _shared.build_client(context) as client:
        case = client.get_case(case_id)
    show(case)


@case_app.command("statuses")
def case_statuses(
    ctx: typer.Context,
    case_id: str = typer.Argument(help="Case id assigned by the service."),
) -> None:
    """List the statuses recorded against a case."""
    from trustev.config import context_from_profile

    context = context_from_profile(_shared.active_profile(ctx))
    with _shared.build_client(context) as client:
        statuses = client.get_case_statuses(case_id) or []

    if not statuses:
        info(f"No statuses recorded for case {case_id}.")
        return

    show_table(statuses, ["Id", "Status", "Timestamp", "Comment"], title=f"Case {case_id}")
