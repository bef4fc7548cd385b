"""Wire entities for the Trustev API.

Every entity serialises with PascalCase keys (``case_number`` ->
``CaseNumber``) and accepts either the wire names or the Python field
names on construction.

Fields that the service assigns, such as ids and server timestamps, are
declared with ``Field(frozen=True)``. Callers may not reassign them after
construction, but they are always encoded and always populated when a
response is decoded, so an entity returned by the API can be posted back
unchanged.

Enums serialise as their integer values, which is what the service expects.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal


class Entity(BaseModel):
    """Base class for all wire entities."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )


# --- Enums ---


class DecisionResult(int, enum.Enum):
    UNKNOWN = 0
    PASS = 1
    FLAG = 2
    FAIL = 3


class CaseStatusType(int, enum.Enum):
    COMPLETED = 0
    REJECTED_FRAUD = 1
    REJECTED_AUTH_FAILURE = 2
    REJECTED_SUSPICIOUS = 3
    CANCELLED = 4
    CHARGEBACK_FRAUD = 5
    CHARGEBACK_OTHER = 6
    REFUNDED = 7
    PLACED_ON_HOLD = 8
    ON_HOLD_REVIEW_PASSED = 9
    ON_HOLD_REVIEW_FAILED = 10


class AddressType(int, enum.Enum):
    STANDARD = 0
    BILLING = 1
    DELIVERY = 2


class PaymentType(int, enum.Enum):
    NONE = 0
    CREDIT_CARD = 1
    DEBIT_CARD = 2
    DIRECT_DEBIT = 3
    PAYPAL = 4
    BITCOIN = 5


class OTPStatus(int, enum.Enum):
    UNKNOWN = 0
    IN_PROGRESS = 1
    PASS = 2
    FAIL = 3


# --- Sessions ---


class Detail(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    session_id: Optional[UUID] = Field(default=None, frozen=True)
    key: Optional[str] = None
    value: Optional[str] = None


class Session(Entity):
    session_id: Optional[UUID] = Field(default=None, frozen=True)
    timestamp: Optional[datetime] = Field(default=None, frozen=True)
    details: list[Detail] = Field(default_factory=list)


# --- Customers ---


class Address(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None
    type: AddressType = AddressType.STANDARD
    is_default: bool = False


class CustomerAddress(Address):
    pass


class Email(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    email_address: Optional[str] = None
    is_default: bool = False


class Customer(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    phone_number: Optional[str] = None
    account_number: Optional[str] = None
    social_security_number: Optional[str] = None
    addresses: list[CustomerAddress] = Field(default_factory=list)
    emails: list[Email] = Field(default_factory=list)


# --- Transactions ---


class TransactionAddress(Address):
    pass


class TransactionItem(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    name: Optional[str] = None
    quantity: int = 0
    item_value: float = 0.0


class Transaction(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    total_transaction_value: float = 0.0
    currency: Optional[str] = None
    timestamp: Optional[datetime] = None
    addresses: list[TransactionAddress] = Field(default_factory=list)
    items: list[TransactionItem] = Field(default_factory=list)


class Payment(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    bin_number: Optional[str] = Field(default=None, alias="BINNumber")
    payment_type: PaymentType = PaymentType.NONE


# --- Cases ---


class CaseStatus(Entity):
    id: Optional[UUID] = Field(default=None, frozen=True)
    status: CaseStatusType = CaseStatusType.COMPLETED
    comment: Optional[str] = None
    timestamp: Optional[datetime] = None


class Case(Entity):
    """A case to be scored; ``id`` is assigned by the service on post."""

    id: Optional[str] = Field(default=None, frozen=True)
    session_id: Optional[UUID] = None
    case_number: Optional[str] = None
    timestamp: Optional[datetime] = None
    customer: Optional[Customer] = None
    transaction: Optional[Transaction] = None
    payments: list[Payment] = Field(default_factory=list)
    statuses: list[CaseStatus] = Field(default_factory=list)


class Decision(Entity):
    """Outcome of scoring a case. ``case_id`` is filled in by the client."""

    id: Optional[UUID] = Field(default=None, frozen=True)
    result: DecisionResult = DecisionResult.UNKNOWN
    score: int = 0
    confidence: int = 0
    comment: Optional[str] = None
    case_id: Optional[str] = None


class DetailedDecision(Decision):
    """A :class:`Decision` with the per-check breakdown returned by the service."""

    rule: Optional[dict[str, Any]] = None
    fingerprint: Optional[dict[str, Any]] = None
    device: Optional[dict[str, Any]] = None
    location: Optional[dict[str, Any]] = None
    email: Optional[dict[str, Any]] = None
    phone: Optional[dict[str, Any]] = None


class OTPResult(Entity):
    """Request/response body for one-time-password checks on a case."""

    status: OTPStatus = OTPStatus.UNKNOWN
    otp: Optional[str] = Field(default=None, alias="OTP")
    phone_number: Optional[str] = None


class KBAResult(Entity):
    """Outcome of a knowledge-based authentication check on a case."""

    id: Optional[UUID] = Field(default=None, frozen=True)
    status: int = 0
    score: int = 0
    comment: Optional[str] = None
