"""Field checks shared by log and update."""

from typing import Optional, Sequence

from .errors import ErrorCode

MAX_VIN_LENGTH = 17
MAX_SERVICE_TYPE_LENGTH = 50
MAX_PARTS = 10
MAX_DETAILS_LENGTH = 200


def check_vin(vin: str) -> Optional[ErrorCode]:
    """VIN must be non-empty and at most 17 characters."""
    if not vin or len(vin) > MAX_VIN_LENGTH:
        return ErrorCode.INVALID_VIN
    return None


def check_service_type(service_type: str) -> Optional[ErrorCode]:
    """Service type must be non-empty and at most 50 characters."""
    if not service_type or len(service_type) > MAX_SERVICE_TYPE_LENGTH:
        return ErrorCode.INVALID_SERVICE_TYPE
    return None


def check_parts(parts: Sequence[str]) -> Optional[ErrorCode]:
    if len(parts) > MAX_PARTS:
        return ErrorCode.INVALID_PARTS
    return None


def check_details(details: str) -> Optional[ErrorCode]:
    if len(details) > MAX_DETAILS_LENGTH:
        return ErrorCode.INVALID_DETAILS
    return None


def check_entry(service_type: str, parts: Sequence[str], details: str) -> Optional[ErrorCode]:
    """
    Check the amendable fields of a record.

    Returns the first failing code in order: service type, parts, details.
    """
    return check_service_type(service_type) or check_parts(parts) or check_details(details)
