"""Infrastructure modules for the CritBot plugin.

Centralized infrastructure components:
- configuration: Settings management (settings, GrantsFeatureSettings, HostSettings)
- logging: Structured logging (get_module_logger, bind_event_context)
- events: Audit event dispatcher
- hookspecs: Host callback hook specifications
- idempotency: Correlation token builder
- operations: Operation results for host requests
- services: Host plugin manager
"""

# Configuration
from infrastructure.configuration import settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
