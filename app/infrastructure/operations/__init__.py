"""Operation result envelopes for outbound host requests."""

from infrastructure.operations.result import OperationResult, HOST_ERROR_OK
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "HOST_ERROR_OK",
]
