"""Unit tests for exception hierarchy and error handling.

Tests all exception types, error codes and the formatting utilities.
"""

import pytest

from patchrunner.core.exceptions import (
    E_NOT_FOUND,
    E_NOT_PERSISTED,
    E_NOT_UNIQUE,
    E_PERMISSIONS,
    E_RESOURCE,
    E_VALIDATION,
    AmbiguousMatchError,
    ConfigurationError,
    EditValidationError,
    MatchNotFoundError,
    PatchRunnerException,
    ResourceError,
    ToolExecutionError,
    WorkspaceSecurityError,
    format_error_for_log,
    format_error_for_user,
)


class TestPatchRunnerException:
    """Test the base PatchRunnerException class."""

    def test_basic_creation(self):
        exc = PatchRunnerException("Test error")
        assert exc.message == "Test error"
        assert exc.error_code is None
        assert exc.metadata == {}
        assert str(exc) == "Test error"

    def test_with_error_code_and_metadata(self):
        exc = PatchRunnerException("Test error", error_code=E_NOT_FOUND, metadata={"k": "v"})
        assert exc.error_code == E_NOT_FOUND
        assert exc.metadata == {"k": "v"}

    def test_exception_behavior(self):
        with pytest.raises(PatchRunnerException) as exc_info:
            raise PatchRunnerException("Test error")
        assert str(exc_info.value) == "Test error"

    def test_metadata_not_shared(self):
        first = MatchNotFoundError("a", index=1)
        second = MatchNotFoundError("b", index=2)
        assert first.metadata == {"index": 1}
        assert second.metadata == {"index": 2}


class TestEditErrors:
    """Errors raised by the edit engine."""

    def test_validation_error_defaults(self):
        exc = EditValidationError("bad edit", index=2, reason="no_op")
        assert exc.error_code == E_VALIDATION
        assert exc.index == 2
        assert exc.metadata == {"index": 2, "reason": "no_op"}

    def test_validation_error_for_whole_list(self):
        exc = EditValidationError("edits must be a non-empty list", reason="empty_list")
        assert exc.index is None
        assert "index" not in exc.metadata

    def test_not_found(self):
        exc = MatchNotFoundError("missing", index=0)
        assert exc.error_code == E_NOT_FOUND
        assert exc.metadata["index"] == 0

    def test_ambiguous(self):
        exc = AmbiguousMatchError("twice", index=1, count=2)
        assert exc.error_code == E_NOT_UNIQUE
        assert exc.metadata == {"index": 1, "count": 2}

    def test_all_are_patchrunner_exceptions(self):
        for exc in (
            EditValidationError("x"),
            MatchNotFoundError("x"),
            AmbiguousMatchError("x"),
            ResourceError("x"),
        ):
            assert isinstance(exc, PatchRunnerException)


class TestResourceError:
    def test_read_stage(self):
        exc = ResourceError("File not found: a.txt", resource_id="a.txt")
        assert exc.stage == "read"
        assert exc.error_code == E_RESOURCE
        assert exc.metadata == {"resource_id": "a.txt", "stage": "read"}

    def test_write_stage_is_not_persisted(self):
        exc = ResourceError("disk full", resource_id="a.txt", stage="write")
        assert exc.error_code == E_NOT_PERSISTED

    def test_explicit_code_wins(self):
        exc = ResourceError("x", error_code=E_PERMISSIONS, stage="write")
        assert exc.error_code == E_PERMISSIONS


class TestOtherErrors:
    def test_tool_execution_error(self):
        exc = ToolExecutionError("boom", tool_name="multi_edit", details="trace")
        assert exc.error_code is None
        assert exc.metadata == {"tool_name": "multi_edit", "details": "trace"}

    def test_workspace_security_error(self):
        exc = WorkspaceSecurityError("outside", path="/etc/passwd", reason="outside_workspace")
        assert exc.error_code == E_PERMISSIONS
        assert exc.metadata == {"path": "/etc/passwd", "reason": "outside_workspace"}

    def test_configuration_error(self):
        exc = ConfigurationError("must be positive", key="max_edits", reason="invalid_value")
        assert exc.error_code == E_VALIDATION
        assert exc.metadata["config_key"] == "max_edits"


class TestFormatErrorForUser:
    def test_engine_errors_say_file_unchanged(self):
        message = format_error_for_user(MatchNotFoundError("Edit 1: missing", index=0))
        assert message == "Atomic edit failed (file unchanged): Edit 1: missing"

    def test_read_failure(self):
        exc = ResourceError("File not found: a.txt", resource_id="a.txt")
        assert format_error_for_user(exc) == "Could not read 'a.txt': File not found: a.txt"

    def test_write_failure(self):
        exc = ResourceError("disk full", resource_id="a.txt", stage="write")
        message = format_error_for_user(exc)
        assert message.startswith("Edits computed but not persisted to 'a.txt'")
        assert "disk full" in message

    def test_tool_error(self):
        assert format_error_for_user(ToolExecutionError("boom", tool_name="t")) == (
            "Tool 't' failed: boom"
        )
        assert format_error_for_user(ToolExecutionError("boom")) == "Tool execution failed: boom"

    def test_workspace_error(self):
        exc = WorkspaceSecurityError("denied", path="../x")
        assert format_error_for_user(exc) == "Security error with path '../x': denied"

    def test_configuration_error(self):
        exc = ConfigurationError("bad", key="encoding")
        assert format_error_for_user(exc) == "Configuration error 'encoding': bad"
        assert format_error_for_user(ConfigurationError("bad")) == "Configuration error: bad"

    def test_base_exception(self):
        assert format_error_for_user(PatchRunnerException("plain")) == "plain"


class TestFormatErrorForLog:
    def test_ambiguous(self):
        data = format_error_for_log(AmbiguousMatchError("twice", index=1, count=3))
        assert data["error_type"] == "AmbiguousMatchError"
        assert data["error_code"] == E_NOT_UNIQUE
        assert data["index"] == 1
        assert data["count"] == 3

    def test_list_level_validation_has_no_index(self):
        data = format_error_for_log(EditValidationError("empty", reason="empty_list"))
        assert "index" not in data
        assert data["metadata"] == {"reason": "empty_list"}

    def test_resource(self):
        data = format_error_for_log(ResourceError("x", resource_id="a", stage="write"))
        assert data["resource_id"] == "a"
        assert data["stage"] == "write"
        assert data["error_code"] == E_NOT_PERSISTED

    def test_base_without_metadata(self):
        data = format_error_for_log(PatchRunnerException("plain"))
        assert data == {
            "error_type": "PatchRunnerException",
            "message": "plain",
            "error_code": None,
        }
