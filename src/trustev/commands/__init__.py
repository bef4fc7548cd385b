"""Built-in CLI sub-commands for trustev.

* :mod:`~trustev.commands.profile` -- create and manage merchant profiles.
* :mod:`~trustev.commands.config` -- view and modify global settings.
* :mod:`~trustev.commands.token` -- issue a token for the active profile.
* :mod:`~trustev.commands.case` -- fetch cases and their statuses.
* :mod:`~trustev.commands.decision` -- score a posted case.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``profile`` and ``case``) or a plain callback
function registered directly on the root app (for single commands like
``token``).
"""
