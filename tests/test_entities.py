"""Tests for trustev.entities and trustev.codec."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from uuid import UUID

import pytest
from pydantic import ValidationError

from trustev import codec
from trustev.entities import (
    Case,
    CaseStatus,
    CaseStatusType,
    Customer,
    Decision,
    Email,
    OTPResult,
    Payment,
    PaymentType,
    Session,
)

SESSION_ID = UUID("8a1f0d36-3f35-4c39-8d4a-2f1f5f3d9a10")


class TestWireNames:
    def test_fields_encode_as_pascal_case(self) -> None:
        data = json.loads(codec.encode(Case(case_number="42", session_id=SESSION_ID)))
        assert data["CaseNumber"] == "42"
        assert data["SessionId"] == str(SESSION_ID)
        assert "case_number" not in data

    def test_explicit_aliases(self) -> None:
        assert json.loads(codec.encode(Payment(bin_number="4111")))["BINNumber"] == "4111"
        assert json.loads(codec.encode(OTPResult(otp="1234")))["OTP"] == "1234"

    def test_enums_encode_as_integers(self) -> None:
        data = json.loads(codec.encode(Payment(payment_type=PaymentType.PAYPAL)))
        assert data["PaymentType"] == 4

    def test_nested_entities(self) -> None:
        customer = Customer(first_name="Ada", emails=[Email(email_address="ada@example.com")])
        data = json.loads(codec.encode(Case(customer=customer)))
        assert data["Customer"]["FirstName"] == "Ada"
        assert data["Customer"]["Emails"][0]["EmailAddress"] == "ada@example.com"

    def test_construct_from_wire_or_python_names(self) -> None:
        assert Case(CaseNumber="1").case_number == "1"
        assert Case(case_number="1").case_number == "1"


class TestServerAssignedFields:
    def test_frozen_field_cannot_be_reassigned(self) -> None:
        session = Session()
        with pytest.raises(ValidationError):
            session.session_id = SESSION_ID

    def test_mutable_field_can_be_reassigned(self) -> None:
        case = Case()
        case.case_number = "7"
        assert case.case_number == "7"

    def test_decode_populates_frozen_fields(self) -> None:
        body = json.dumps({"SessionId": str(SESSION_ID), "Timestamp": "2024-01-01T00:00:00Z"})
        session = codec.decode(body, Session)
        assert session.session_id == SESSION_ID
        assert session.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_frozen_fields_are_encoded(self) -> None:
        session = codec.decode(json.dumps({"SessionId": str(SESSION_ID)}), Session)
        assert json.loads(codec.encode(session))["SessionId"] == str(SESSION_ID)

    def test_decision_case_id_is_assignable(self) -> None:
        decision = Decision()
        decision.case_id = "c-1"
        assert decision.case_id == "c-1"


class TestCodec:
    def test_encode_none_is_empty(self) -> None:
        assert codec.encode(None) == ""

    def test_encode_string_passthrough(self) -> None:
        assert codec.encode('{"A":1}') == '{"A":1}'

    def test_encode_list_of_entities(self) -> None:
        data = json.loads(codec.encode([Email(email_address="a@x"), Email(email_address="b@x")]))
        assert [item["EmailAddress"] for item in data] == ["a@x", "b@x"]

    def test_encode_keeps_non_ascii(self) -> None:
        assert "Müller" in codec.encode(Customer(last_name="Müller"))

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_empty_body_decodes_to_none(self, text: str) -> None:
        assert codec.decode(text, Case) is None

    def test_decode_list(self) -> None:
        statuses = codec.decode('[{"Status": 8}, {"Status": 0}]', list[CaseStatus])
        assert [s.status for s in statuses] == [
            CaseStatusType.PLACED_ON_HOLD,
            CaseStatusType.COMPLETED,
        ]

    def test_decode_without_shape_returns_plain_json(self) -> None:
        assert codec.decode('{"A": [1, 2]}') == {"A": [1, 2]}

    def test_unknown_fields_ignored(self) -> None:
        case = codec.decode('{"CaseNumber": "1", "Surprise": true}', Case)
        assert case.case_number == "1"

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(ValidationError):
            codec.decode("{oops", Case)

    def test_shape_mismatch_raises(self) -> None:
        with pytest.raises(ValidationError):
            codec.decode('{"Status": "not-a-status"}', CaseStatus)
