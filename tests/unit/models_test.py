"""Unit tests for Pydantic models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from schemawatch.models import Diagnostic, Failure, Severity


class TestFailureModel:
    def test_message_without_alternatives(self) -> None:
        assert Failure(pointer="/a", message="bad").format_message() == "bad"

    def test_alternatives_joined_with_or(self) -> None:
        failure = Failure(
            pointer="",
            message="not valid under any of the given schemas",
            alternatives=[["not a string"], ["not an object", "missing x"]],
        )
        assert failure.format_message() == (
            "not valid under any of the given schemas\n\tnot a string\nor\n\tnot an object\n\tmissing x"
        )

    def test_failure_is_frozen(self) -> None:
        failure = Failure(pointer="/a", message="bad")
        with pytest.raises(ValidationError):
            failure.pointer = "/b"  # type: ignore[misc]


class TestDiagnosticModel:
    def test_defaults(self) -> None:
        diagnostic = Diagnostic(file=Path("/w/a.json"), message="bad")
        assert diagnostic.line == 1
        assert diagnostic.severity == Severity.ERROR

    def test_line_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Diagnostic(file=Path("/w/a.json"), message="bad", line=0)

    def test_serializes_severity_value(self) -> None:
        data = Diagnostic(file=Path("/w/a.json"), message="bad", severity=Severity.WARNING).model_dump(mode="json")
        assert data == {"file": "/w/a.json", "message": "bad", "line": 1, "severity": "warning"}
