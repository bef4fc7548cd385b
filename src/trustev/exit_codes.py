"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~trustev.exceptions.TrustevError` subclass.
Scripts wrapping the ``trustev`` CLI can inspect the exit code to tell a
setup mistake apart from a rejected request.

Example::

    $ trustev decision 0f4c...
    $ echo $?
    3   # EXIT_AUTH_CONFIGURATION -- credentials incomplete
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_CONFIGURATION = 3
"""Credentials are missing or incomplete for the requested operation."""

EXIT_HTTP_ERROR = 5
"""The remote API answered with a non-success HTTP status."""

EXIT_TRANSPORT_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
