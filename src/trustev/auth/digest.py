"""Signature digests for the ``/token`` request.

The token endpoint authenticates a request by two digests, one over the
user name and one over the password. Both are bound to the request
timestamp and to the merchant's shared secret::

    inner  = sha256_hex(timestamp + "." + subject)
    digest = sha256_hex(inner + "." + secret)

The timestamp text is part of the signed input, so it must be rendered
exactly as the service renders it: ``yyyy-MM-ddTHH:mm:ss.fffZ`` in UTC,
with milliseconds truncated, not rounded.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone


def format_timestamp(moment: datetime) -> str:
    """Render *moment* as ``2024-01-01T00:00:00.000Z``.

    Naive datetimes are taken to be UTC; aware ones are converted.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def sha256_hex(text: str) -> str:
    """Lowercase hex SHA-256 of the UTF-8 encoding of *text*."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def digest(secret: str, subject: str, timestamp: str) -> str:
    """Compute the secret-bound digest of *subject* at *timestamp*.

    Double quotes are stripped from *secret* and *subject* first, which
    tolerates values copied out of JSON.

    Args:
        secret: The merchant's shared secret.
        subject: The user name or the password.
        timestamp: Output of :func:`format_timestamp`.

    Returns:
        A 64-character lowercase hex string.
    """
    secret = secret.replace('"', "")
    subject = subject.replace('"', "")
    inner = sha256_hex(f"{timestamp}.{subject}")
    return sha256_hex(f"{inner}.{secret}")
