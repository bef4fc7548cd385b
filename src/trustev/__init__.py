"""trustev -- Python client for the Trustev case and decision API.

Callers register one or more credential sets on a
:class:`~trustev.context.ClientContext`, then build domain records
(sessions, cases, customers, transactions) and send them through
:class:`~trustev.client.ApiClient` or :class:`~trustev.client.AsyncApiClient`.
Short-lived API tokens are issued, cached per user name, and refreshed
transparently.

Typical usage::

    from trustev.client import ApiClient
    from trustev.context import ClientContext
    from trustev.entities import Case

    context = ClientContext()
    context.register("merchant", "password", "secret", public_key="pk")

    with ApiClient(context) as client:
        case = client.post_case(Case(case_number="order-1"))
        decision = client.get_decision(case.id)

Modules:
    context: Credential/token state shared by every client.
    auth: Credential store, token cache, digest, and token issuance.
    client: Sync/async dispatchers and resource clients.
    entities: Pydantic wire models for API resources.
    codec: JSON encoding/decoding of wire entities.
    app: Typer CLI entry point.
"""

__version__ = "0.4.0"
