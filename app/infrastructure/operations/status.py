"""Status of a request submitted to the host client."""

from enum import Enum


class OperationStatus(Enum):
    """Whether a request went through, and if not, whether to try again.

    Attributes:
        SUCCESS: The host accepted the request.
        TRANSIENT_ERROR: The request may succeed if submitted again.
        PERMANENT_ERROR: Submitting again will not help.
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
