"""Decision command -- score a posted case."""

from __future__ import annotations

import typer

from trustev.commands import _shared
from trustev.output import info, show


def decision_command(
    ctx: typer.Context,
    case_id: str = typer.Argument(help="Case id assigned by the service."),
    detailed: bool = typer.Option(
        False, "--detailed", "-d", help="Include the per-check breakdown."
    ),
) -> None:
    """Get the decision for a case.

    Example::

        trustev decision 3f1c...
        trustev --json decision 3f1c... --detailed
    """
    from trustev.config import context_from_profile

    context = context_from_profile(_shared.active_profile(ctx))
    with _shared.build_client(context) as client:
        if detailed:
            decision = client.get_detailed_decision(case_id)
        else:
            decision = client.get_decision(case_id)
    if decision is None:
        info(f"No decision returned for case {case_id}.")
        return
    show(decision)
