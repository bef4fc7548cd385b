"""HTTP layer for trustev.

Classes:
    :class:`ApiClient` / :class:`AsyncApiClient` -- one method per API
    operation, the usual entry point.
    :class:`Dispatcher` / :class:`AsyncDispatcher` -- the authenticated
    call executor every operation goes through.

Example::

    from trustev.client import ApiClient

    with ApiClient(context) as client:
        decision = client.get_decision(case_id)
"""

from trustev.client.api import ApiClient
from trustev.client.async_api import AsyncApiClient
from trustev.client.async_dispatcher import AsyncDispatcher
from trustev.client.dispatcher import Dispatcher

__all__ = ["ApiClient", "AsyncApiClient", "AsyncDispatcher", "Dispatcher"]
