"""Adapters from the host client's function table to the correlator contracts.

The host hands the plugin a table of request functions. Both requests used
here are asynchronous: the integer they return only says whether the request
was queued (0) or rejected, and the answer to a database id lookup arrives
later through the ``on_client_dbid_from_uid`` callback.
"""

from typing import List, Optional, Protocol

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


class HostFunctions(Protocol):
    """The subset of the host function table the grants module needs."""

    def request_client_dbid_from_uid(
        self,
        connection_handle: int,
        client_unique_identity: str,
        return_code: Optional[str],
    ) -> int:
        ...

    def request_set_client_channel_group(
        self,
        connection_handle: int,
        channel_group_ids: List[int],
        channel_ids: List[int],
        client_database_ids: List[int],
        count: int,
        return_code: Optional[str],
    ) -> int:
        ...


class HostIdentityResolver:
    """IdentityResolver backed by ``request_client_dbid_from_uid``."""

    def __init__(self, functions: HostFunctions):
        self._functions = functions

    def resolve_database_id(
        self,
        connection_handle: int,
        client_unique_identity: str,
        correlation_token: Optional[str] = None,
    ) -> OperationResult:
        code = self._functions.request_client_dbid_from_uid(
            connection_handle, client_unique_identity, correlation_token
        )
        result = OperationResult.from_host_error_code(code, "request_client_dbid_from_uid")
        if not result.is_success:
            logger.debug(
                "host_request_rejected",
                operation="request_client_dbid_from_uid",
                error_code=result.error_code,
                return_code=correlation_token,
            )
        return result


class HostGroupSink:
    """GroupManagementSink backed by ``request_set_client_channel_group``.

    The host call takes parallel arrays so several assignments can share one
    request; the correlator always sends exactly one.
    """

    def __init__(self, functions: HostFunctions):
        self._functions = functions

    def set_client_channel_group(
        self,
        connection_handle: int,
        channel_group_id: int,
        channel_id: int,
        database_id: int,
        correlation_token: Optional[str] = None,
    ) -> OperationResult:
        code = self._functions.request_set_client_channel_group(
            connection_handle,
            [channel_group_id],
            [channel_id],
            [database_id],
            1,
            correlation_token,
        )
        result = OperationResult.from_host_error_code(
            code, "request_set_client_channel_group"
        )
        if not result.is_success:
            logger.debug(
                "host_request_rejected",
                operation="request_set_client_channel_group",
                error_code=result.error_code,
                return_code=correlation_token,
            )
        return result
