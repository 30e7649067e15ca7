"""Result envelope for requests sent to the host client."""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus

# Host error code meaning "no error"
HOST_ERROR_OK = 0


@dataclass
class OperationResult:
    """Outcome of submitting one request.

    Attributes:
        status: SUCCESS, TRANSIENT_ERROR or PERMANENT_ERROR.
        message: Human-readable summary for logs.
        data: Optional payload of a successful request.
        error_code: Machine-readable code of a failed request.
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_transient(self) -> bool:
        """True when re-submitting the same request may succeed."""
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        return cls(
            status=OperationStatus.TRANSIENT_ERROR,
            message=message,
            error_code=error_code,
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        return cls(
            status=OperationStatus.PERMANENT_ERROR,
            message=message,
            error_code=error_code,
        )

    @classmethod
    def from_host_error_code(
        cls, code: int, operation: str, data: Optional[Any] = None
    ) -> "OperationResult":
        """Translate the integer a host request function returned.

        0 means the host queued the request. Any other code is a permanent
        error whose ``error_code`` is the code in hex, as the host prints it.

        Args:
            code: Value returned by the host function.
            operation: Host function name, used in the message.
            data: Payload to attach on success.
        """
        if code == HOST_ERROR_OK:
            return cls.success(data=data, message=f"{operation} submitted")
        return cls.permanent_error(
            message=f"{operation} rejected by host",
            error_code=f"0x{code:04x}",
        )
