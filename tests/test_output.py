"""Tests for trustev.output -- rendering entities and routing diagnostics."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from trustev.entities import Case, CaseStatus, CaseStatusType, Customer, Decision, DecisionResult
from trustev.output import OutputFormat, OutputManager


def _manager(format: OutputFormat, **kwargs) -> OutputManager:
    return OutputManager(format=format, no_color=True, **kwargs)


class TestShow:
    def test_json_uses_wire_names(self, capsys: pytest.CaptureFixture[str]) -> None:
        decision = Decision(result=DecisionResult.FLAG, score=40, case_id="c-1")
        _manager(OutputFormat.JSON).show(decision)
        data = json.loads(capsys.readouterr().out)
        assert data["Result"] == 2
        assert data["Score"] == 40
        assert data["CaseId"] == "c-1"

    def test_json_nested_entities(self, capsys: pytest.CaptureFixture[str]) -> None:
        case = Case(case_number="42", customer=Customer(first_name="Ada"))
        _manager(OutputFormat.JSON).show(case)
        data = json.loads(capsys.readouterr().out)
        assert data["Customer"]["FirstName"] == "Ada"

    def test_plain_prints_one_field_per_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        status = CaseStatus(
            status=CaseStatusType.REFUNDED,
            timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )
        _manager(OutputFormat.PLAIN).show(status)
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "Id\t",
            "Status\tREFUNDED",
            "Comment\t",
            "Timestamp\t2024-01-02T03:04:05+00:00",
        ]

    def test_plain_nested_entity_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        _manager(OutputFormat.PLAIN).show(Case(customer=Customer(first_name="Ada")))
        out = capsys.readouterr().out
        assert '"FirstName":"Ada"' in out

    def test_plain_mapping(self, capsys: pytest.CaptureFixture[str]) -> None:
        _manager(OutputFormat.PLAIN).show({"profile": "shop", "expire_at": None})
        assert capsys.readouterr().out.splitlines() == ["profile\tshop", "expire_at\t"]

    def test_none_prints_nothing(self, capsys: pytest.CaptureFixture[str]) -> None:
        _manager(OutputFormat.JSON).show(None)
        assert capsys.readouterr().out == ""

    def test_rich_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        _manager(OutputFormat.RICH).show(Decision(score=7))
        out = capsys.readouterr().out
        assert "Score" in out
        assert "UNKNOWN" in out


class TestShowTable:
    def test_json_rows_use_enum_names(self, capsys: pytest.CaptureFixture[str]) -> None:
        statuses = [
            CaseStatus(status=CaseStatusType.PLACED_ON_HOLD, comment="review"),
            CaseStatus(status=CaseStatusType.COMPLETED),
        ]
        _manager(OutputFormat.JSON).show_table(statuses, ["Status", "Comment"])
        assert json.loads(capsys.readouterr().out) == [
            {"Status": "PLACED_ON_HOLD", "Comment": "review"},
            {"Status": "COMPLETED", "Comment": ""},
        ]

    def test_plain_has_header_row(self, capsys: pytest.CaptureFixture[str]) -> None:
        rows = [{"Profile": "shop", "Default": "*"}, {"Profile": "eu", "Default": ""}]
        _manager(OutputFormat.PLAIN).show_table(rows, ["Profile", "Default"])
        assert capsys.readouterr().out.splitlines() == ["Profile\tDefault", "shop\t*", "eu\t"]

    def test_unknown_column_is_blank(self, capsys: pytest.CaptureFixture[str]) -> None:
        _manager(OutputFormat.JSON).show_table([Decision()], ["Missing"])
        assert json.loads(capsys.readouterr().out) == [{"Missing": ""}]


class TestDiagnostics:
    def test_diagnostics_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = _manager(OutputFormat.PLAIN)
        output.info("hello")
        output.success("done")
        output.error("broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == ["hello", "done", "Error: broken"]

    def test_quiet_keeps_errors_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = _manager(OutputFormat.PLAIN, quiet=True)
        output.info("hello")
        output.success("done")
        output.suggest("trustev token")
        output.error("broken")
        assert capsys.readouterr().err.splitlines() == ["Error: broken"]

    def test_debug_needs_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        _manager(OutputFormat.PLAIN).debug("GET /case")
        _manager(OutputFormat.PLAIN, verbose=True).debug("POST /token")
        assert capsys.readouterr().err.splitlines() == ["[debug] POST /token"]


class TestFormatResolution:
    def test_auto_is_plain_on_dumb_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERM", "dumb")
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_format_is_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        assert OutputManager(format=OutputFormat.RICH).format == OutputFormat.RICH
