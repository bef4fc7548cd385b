"""Blocking resource client: one method per API operation.

Every method formats an endpoint template from :mod:`trustev.endpoints`
and hands the request to :class:`~trustev.client.dispatcher.Dispatcher`.
Each accepts an optional trailing ``user_name`` selecting which registered
merchant to authenticate as; when omitted, the first registered merchant
is used.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

import httpx

from trustev import endpoints
from trustev.client.dispatcher import Dispatcher
from trustev.context import ClientContext
from trustev.entities import (
    Case,
    CaseStatus,
    Customer,
    CustomerAddress,
    Decision,
    Detail,
    DetailedDecision,
    Email,
    KBAResult,
    OTPResult,
    Payment,
    Session,
    Transaction,
    TransactionAddress,
    TransactionItem,
)


class ApiClient:
    """Synchronous Trustev API client.

    Args:
        context: Shared credentials, tokens and settings.
        transport: Optional :mod:`httpx` transport, used in tests.

    Example::

        with ApiClient(context) as client:
            session = client.post_session(Session())
            case = client.post_case(Case(session_id=session.session_id, case_number="42"))
            decision = client.get_decision(case.id)
    """

    def __init__(
        self,
        context: ClientContext,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._context = context
        self._dispatcher = Dispatcher(context, transport=transport)

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._dispatcher.close()

    @property
    def _base(self) -> str:
        return self._context.settings.base_url

    def _call(
        self,
        template: str,
        method: str,
        body: Any,
        response_type: Any,
        user_name: str,
        **ids: Any,
    ) -> Any:
        uri = template.format(base=self._base, **ids)
        return self._dispatcher.call(uri, method, body, response_type, user_name=user_name)

    # ------------------------------------------------------------------ #
    # Token
    # ------------------------------------------------------------------ #

    def get_token(self, user_name: str = "") -> str:
        """Return a valid API token for *user_name*, issuing one if needed."""
        return self._dispatcher.issuer.get_valid_token(user_name)

    # ------------------------------------------------------------------ #
    # Sessions (public-key authenticated)
    # ------------------------------------------------------------------ #

    def post_session(self, session: Session, user_name: str = "") -> Session:
        """Post a session; the response carries the assigned ``session_id``."""
        return self._call(endpoints.SESSION, "POST", session, Session, user_name)

    def post_detail(self, session_id: UUID, detail: Detail, user_name: str = "") -> Detail:
        """Attach a detail to an existing session."""
        return self._call(
            endpoints.SESSION_DETAIL, "POST", detail, Detail, user_name, session_id=session_id
        )

    # ------------------------------------------------------------------ #
    # Cases and decisions
    # ------------------------------------------------------------------ #

    def post_case(self, case: Case, user_name: str = "") -> Case:
        """Post a case; the response carries the assigned ``id``."""
        return self._call(endpoints.CASE, "POST", case, Case, user_name)

    def update_case(self, case: Case, case_id: str, user_name: str = "") -> Case:
        return self._call(endpoints.CASE_ITEM, "PUT", case, Case, user_name, case_id=case_id)

    def get_case(self, case_id: str, user_name: str = "") -> Case:
        return self._call(endpoints.CASE_ITEM, "GET", None, Case, user_name, case_id=case_id)

    def get_decision(self, case_id: str, user_name: str = "") -> Optional[Decision]:
        """Score a posted case. The returned decision has ``case_id`` set.

        An empty response body gives ``None``.
        """
        decision = self._call(
            endpoints.DECISION, "GET", None, Decision, user_name, case_id=case_id
        )
        if decision is not None:
            decision.case_id = case_id
        return decision

    def get_detailed_decision(self, case_id: str, user_name: str = "") -> Optional[DetailedDecision]:
        """Score a posted case with the per-check breakdown."""
        decision = self._call(
            endpoints.DETAILED_DECISION, "GET", None, DetailedDecision, user_name, case_id=case_id
        )
        if decision is not None:
            decision.case_id = case_id
        return decision

    def post_otp(self, case_id: str, request: OTPResult, user_name: str = "") -> OTPResult:
        """Request or regenerate a one-time password for a case."""
        return self._call(endpoints.OTP, "POST", request, OTPResult, user_name, case_id=case_id)

    def put_otp(self, case_id: str, request: OTPResult, user_name: str = "") -> OTPResult:
        """Verify a one-time password previously requested for a case."""
        return self._call(endpoints.OTP, "PUT", request, OTPResult, user_name, case_id=case_id)

    def post_kba_result(self, case_id: str, kba_result: KBAResult, user_name: str = "") -> KBAResult:
        return self._call(
            endpoints.KBA_RESULT, "POST", kba_result, KBAResult, user_name, case_id=case_id
        )

    # ------------------------------------------------------------------ #
    # Case statuses
    # ------------------------------------------------------------------ #

    def post_case_status(self, case_id: str, case_status: CaseStatus, user_name: str = "") -> CaseStatus:
        return self._call(
            endpoints.CASE_STATUS, "POST", case_status, CaseStatus, user_name, case_id=case_id
        )

    def get_case_status(self, case_id: str, status_id: UUID, user_name: str = "") -> CaseStatus:
        return self._call(
            endpoints.CASE_STATUS_ITEM, "GET", None, CaseStatus, user_name,
            case_id=case_id, status_id=status_id,
        )

    def get_case_statuses(self, case_id: str, user_name: str = "") -> list[CaseStatus]:
        return self._call(
            endpoints.CASE_STATUS, "GET", None, list[CaseStatus], user_name, case_id=case_id
        )

    # ------------------------------------------------------------------ #
    # Customers
    # ------------------------------------------------------------------ #

    def post_customer(self, case_id: str, customer: Customer, user_name: str = "") -> Customer:
        return self._call(endpoints.CUSTOMER, "POST", customer, Customer, user_name, case_id=case_id)

    def update_customer(self, case_id: str, customer: Customer, user_name: str = "") -> Customer:
        return self._call(endpoints.CUSTOMER, "PUT", customer, Customer, user_name, case_id=case_id)

    def get_customer(self, case_id: str, user_name: str = "") -> Customer:
        return self._call(endpoints.CUSTOMER, "GET", None, Customer, user_name, case_id=case_id)

    def post_customer_address(
        self, case_id: str, address: CustomerAddress, user_name: str = ""
    ) -> CustomerAddress:
        return self._call(
            endpoints.CUSTOMER_ADDRESS, "POST", address, CustomerAddress, user_name, case_id=case_id
        )

    def update_customer_address(
        self, case_id: str, address: CustomerAddress, address_id: UUID, user_name: str = ""
    ) -> CustomerAddress:
        return self._call(
            endpoints.CUSTOMER_ADDRESS_ITEM, "PUT", address, CustomerAddress, user_name,
            case_id=case_id, address_id=address_id,
        )

    def get_customer_address(
        self, case_id: str, address_id: UUID, user_name: str = ""
    ) -> CustomerAddress:
        return self._call(
            endpoints.CUSTOMER_ADDRESS_ITEM, "GET", None, CustomerAddress, user_name,
            case_id=case_id, address_id=address_id,
        )

    def get_customer_addresses(self, case_id: str, user_name: str = "") -> list[CustomerAddress]:
        return self._call(
            endpoints.CUSTOMER_ADDRESS, "GET", None, list[CustomerAddress], user_name,
            case_id=case_id,
        )

    def post_email(self, case_id: str, email: Email, user_name: str = "") -> Email:
        return self._call(endpoints.CUSTOMER_EMAIL, "POST", email, Email, user_name, case_id=case_id)

    def update_email(self, case_id: str, email: Email, email_id: UUID, user_name: str = "") -> Email:
        return self._call(
            endpoints.CUSTOMER_EMAIL_ITEM, "PUT", email, Email, user_name,
            case_id=case_id, email_id=email_id,
        )

    def get_email(self, case_id: str, email_id: UUID, user_name: str = "") -> Email:
        return self._call(
            endpoints.CUSTOMER_EMAIL_ITEM, "GET", None, Email, user_name,
            case_id=case_id, email_id=email_id,
        )

    def get_emails(self, case_id: str, user_name: str = "") -> list[Email]:
        return self._call(
            endpoints.CUSTOMER_EMAIL, "GET", None, list[Email], user_name, case_id=case_id
        )

    # ------------------------------------------------------------------ #
    # Payments
    # ------------------------------------------------------------------ #

    def post_payment(self, case_id: str, payment: Payment, user_name: str = "") -> Payment:
        return self._call(endpoints.PAYMENT, "POST", payment, Payment, user_name, case_id=case_id)

    def update_payment(
        self, case_id: str, payment: Payment, payment_id: UUID, user_name: str = ""
    ) -> Payment:
        return self._call(
            endpoints.PAYMENT_ITEM, "PUT", payment, Payment, user_name,
            case_id=case_id, payment_id=payment_id,
        )

    def get_payment(self, case_id: str, payment_id: UUID, user_name: str = "") -> Payment:
        return self._call(
            endpoints.PAYMENT_ITEM, "GET", None, Payment, user_name,
            case_id=case_id, payment_id=payment_id,
        )

    def get_payments(self, case_id: str, user_name: str = "") -> list[Payment]:
        return self._call(endpoints.PAYMENT, "GET", None, list[Payment], user_name, case_id=case_id)

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #

    def post_transaction(self, case_id: str, transaction: Transaction, user_name: str = "") -> Transaction:
        return self._call(
            endpoints.TRANSACTION, "POST", transaction, Transaction, user_name, case_id=case_id
        )

    def update_transaction(self, case_id: str, transaction: Transaction, user_name: str = "") -> Transaction:
        return self._call(
            endpoints.TRANSACTION, "PUT", transaction, Transaction, user_name, case_id=case_id
        )

    def get_transaction(self, case_id: str, user_name: str = "") -> Transaction:
        return self._call(endpoints.TRANSACTION, "GET", None, Transaction, user_name, case_id=case_id)

    def post_transaction_address(
        self, case_id: str, address: TransactionAddress, user_name: str = ""
    ) -> TransactionAddress:
        return self._call(
            endpoints.TRANSACTION_ADDRESS, "POST", address, TransactionAddress, user_name,
            case_id=case_id,
        )

    def update_transaction_address(
        self, case_id: str, address: TransactionAddress, address_id: UUID, user_name: str = ""
    ) -> TransactionAddress:
        return self._call(
            endpoints.TRANSACTION_ADDRESS_ITEM, "PUT", address, TransactionAddress, user_name,
            case_id=case_id, address_id=address_id,
        )

    def get_transaction_address(
        self, case_id: str, address_id: UUID, user_name: str = ""
    ) -> TransactionAddress:
        return self._call(
            endpoints.TRANSACTION_ADDRESS_ITEM, "GET", None, TransactionAddress, user_name,
            case_id=case_id, address_id=address_id,
        )

    def get_transaction_addresses(self, case_id: str, user_name: str = "") -> list[TransactionAddress]:
        return self._call(
            endpoints.TRANSACTION_ADDRESS, "GET", None, list[TransactionAddress], user_name,
            case_id=case_id,
        )

    def post_transaction_item(
        self, case_id: str, item: TransactionItem, user_name: str = ""
    ) -> TransactionItem:
        return self._call(
            endpoints.TRANSACTION_ITEM, "POST", item, TransactionItem, user_name, case_id=case_id
        )

    def update_transaction_item(
        self, case_id: str, item: TransactionItem, item_id: UUID, user_name: str = ""
    ) -> TransactionItem:
        return self._call(
            endpoints.TRANSACTION_ITEM_ITEM, "PUT", item, TransactionItem, user_name,
            case_id=case_id, item_id=item_id,
        )

    def get_transaction_item(self, case_id: str, item_id: UUID, user_name: str = "") -> TransactionItem:
        return self._call(
            endpoints.TRANSACTION_ITEM_ITEM, "GET", None, TransactionItem, user_name,
            case_id=case_id, item_id=item_id,
        )

    def get_transaction_items(self, case_id: str, user_name: str = "") -> list[TransactionItem]:
        return self._call(
            endpoints.TRANSACTION_ITEM, "GET", None, list[TransactionItem], user_name,
            case_id=case_id,
        )
