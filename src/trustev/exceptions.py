"""Exception hierarchy for trustev.

All exceptions inherit from :class:`TrustevError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`trustev.exit_codes`.
Library callers usually catch :class:`AuthConfigurationError` once around
setup and :class:`HttpError` around each call; the CLI entry point in
:func:`trustev.app.main` turns any ``TrustevError`` into an exit code.

Subclass hierarchy::

    TrustevError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- AuthConfigurationError  (exit 3)
    +-- HttpError               (exit 5)
    +-- TransportError          (exit 6)
    +-- ConfigError             (exit 1)
"""

from trustev.exit_codes import (
    EXIT_AUTH_CONFIGURATION,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_TRANSPORT_ERROR,
)


class TrustevError(Exception):
    """Base exception for all trustev errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(TrustevError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class AuthConfigurationError(TrustevError):
    """Raised before any network call when credentials cannot be used.

    Covers an unknown user name, a credential with an empty user name,
    password or secret, and a session call made without a public key.
    """

    exit_code = EXIT_AUTH_CONFIGURATION


class HttpError(TrustevError):
    """Raised when the remote API answers with a non-success status.

    The status code and the response body are kept exactly as received;
    no interpretation of specific codes is attempted.

    Args:
        status_code: The numeric HTTP status.
        body: The raw response body text.
    """

    exit_code = EXIT_HTTP_ERROR

    def __init__(self, status_code: int, body: str):
        prefix = f"HTTP {status_code}"
        super().__init__(f"{prefix}: {body}" if body else prefix)
        self.status_code = status_code
        self.body = body


class TransportError(TrustevError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_TRANSPORT_ERROR


class ConfigError(TrustevError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
