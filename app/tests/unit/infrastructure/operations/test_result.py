"""Unit tests for OperationResult."""

import pytest

from infrastructure.operations import HOST_ERROR_OK, OperationResult, OperationStatus

pytestmark = pytest.mark.unit


class TestOperationResult:
    """Tests for the result constructors."""

    def test_success(self):
        result = OperationResult.success(data={"id": 1})

        assert result.is_success
        assert not result.is_transient
        assert result.status == OperationStatus.SUCCESS
        assert result.data == {"id": 1}
        assert result.message == "ok"

    def test_transient_error(self):
        result = OperationResult.transient_error("busy", error_code="0x0301")

        assert not result.is_success
        assert result.is_transient
        assert result.error_code == "0x0301"

    def test_permanent_error(self):
        result = OperationResult.permanent_error("denied")

        assert not result.is_success
        assert not result.is_transient
        assert result.status == OperationStatus.PERMANENT_ERROR


class TestFromHostErrorCode:
    """Tests for translating host error codes."""

    def test_ok_code_is_success(self):
        result = OperationResult.from_host_error_code(HOST_ERROR_OK, "request_x", data=7)

        assert result.is_success
        assert result.data == 7
        assert "request_x" in result.message

    @pytest.mark.parametrize(
        "code, expected",
        [(1, "0x0001"), (0x0200, "0x0200"), (0xA08, "0x0a08"), (0x10000, "0x10000")],
    )
    def test_error_codes_are_hex(self, code, expected):
        result = OperationResult.from_host_error_code(code, "request_x")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == expected
