"""Error codes returned by ledger operations."""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Failure codes carried by a failed Result. Values are wire-compatible."""

    NOT_AUTHORIZED = 100
    INVALID_VIN = 101
    INVALID_SERVICE_TYPE = 102
    INVALID_PARTS = 103
    INVALID_DETAILS = 104
    INVALID_TIMESTAMP = 105  # Reserved, no validation produces it
    RECORD_NOT_FOUND = 106
    MAX_RECORDS_EXCEEDED = 110
    ALREADY_BOUND = 111
    INVALID_AUTHORITY = 112
