from enum import Enum


class AddressStatus(str, Enum):
    PENDING = "pending"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Failure reasons surfaced next to the address."""

    SERVICE_DISABLED = "service_disabled"
    PERMISSION_RESTRICTED = "permission_restricted"
    PERMISSION_DENIED = "permission_denied"
    MISSING_API_KEY = "missing_api_key"
    MALFORMED_REQUEST_URL = "malformed_request_url"
    REQUEST_FAILED = "request_failed"
    DECODE_FAILURE = "decode_failure"
    EMPTY_RESULT_SET = "empty_result_set"
