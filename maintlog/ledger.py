"""MaintenanceLog class - the record ledger and its per-vehicle index."""

import logging
from collections import deque
from dataclasses import replace
from typing import Deque, List, MutableMapping, Optional, Sequence

from .authority import AuthorityGate
from .config import LedgerConfig
from .errors import ErrorCode
from .host import HostContext
from .record import MaintenanceRecord
from .result import Result
from .validation import check_vin, check_entry

_logger = logging.getLogger(__name__)


class MaintenanceLog:
    """
    Validates, stores, amends and indexes maintenance records.

    State:
    - records: record id -> MaintenanceRecord, never removed
    - records_by_vin: vin -> record ids, newest first, bounded by
      config.max_records_per_vin
    - next_record_id: next id to assign, also the total ever created

    records and records_by_vin may be any mutable mapping supplied by the
    host; plain dicts are used when none are given.
    """

    def __init__(
        self,
        gate: AuthorityGate,
        config: Optional[LedgerConfig] = None,
        records: Optional[MutableMapping[int, MaintenanceRecord]] = None,
        records_by_vin: Optional[MutableMapping[str, Deque[int]]] = None,
        next_record_id: int = 0,
    ):
        self.gate = gate
        self.config = config or LedgerConfig()
        self.records = records if records is not None else {}
        self.records_by_vin = records_by_vin if records_by_vin is not None else {}
        self.next_record_id = next_record_id

    @property
    def max_records(self) -> int:
        return self.config.max_records

    def log_maintenance(
        self,
        host: HostContext,
        vin: str,
        service_type: str,
        parts: Sequence[str],
        details: str,
    ) -> Result:
        """
        Create a new record authored by the calling principal.

        Checks run in order and the first failure is returned:
        capacity, vin, service type, parts, details, authority.

        Only the existence of a bound authority is checked. The caller is
        recorded as author but is not compared with the authority.
        """
        if self.next_record_id >= self.config.max_records:
            return self._reject("log", ErrorCode.MAX_RECORDS_EXCEEDED)
        error = check_vin(vin) or check_entry(service_type, parts, details)
        if error is not None:
            return self._reject("log", error)
        if not self.gate.is_bound:
            return self._reject("log", ErrorCode.NOT_AUTHORIZED)

        record_id = self.next_record_id
        self.records[record_id] = MaintenanceRecord(
            vin=vin,
            service_type=service_type,
            mechanic=host.caller,
            parts=list(parts),
            details=details,
            timestamp=host.block_height,
            recorded_by=host.caller,
        )
        self._index(vin, record_id)
        self.next_record_id += 1

        _logger.info(
            "Logged record %d for %s by %s at height %d",
            record_id, vin, host.caller, host.block_height,
        )
        return Result.success(record_id)

    def update_maintenance(
        self,
        host: HostContext,
        record_id: int,
        service_type: str,
        parts: Sequence[str],
        details: str,
    ) -> Result:
        """Amend a record. Only its original author may do so."""
        record = self.records.get(record_id)
        if record is None:
            return self._reject("update", ErrorCode.RECORD_NOT_FOUND)
        if record.recorded_by != host.caller:
            return self._reject("update", ErrorCode.NOT_AUTHORIZED)
        error = check_entry(service_type, parts, details)
        if error is not None:
            return self._reject("update", error)

        self.records[record_id] = record.amended(service_type, parts, details, host.block_height)

        _logger.info("Updated record %d by %s at height %d", record_id, host.caller, host.block_height)
        return Result.success(True)

    def get_record(self, record_id: int) -> Optional[MaintenanceRecord]:
        """The stored record, with its own copy of the parts list, or None."""
        record = self.records.get(record_id)
        if record is None:
            return None
        return replace(record, parts=list(record.parts))

    def get_records_by_vin(self, vin: str) -> Optional[List[int]]:
        """Record ids for a vehicle, newest first, or None if never indexed."""
        ids = self.records_by_vin.get(vin)
        if ids is None:
            return None
        return list(ids)

    def get_record_count(self) -> Result:
        return Result.success(self.next_record_id)

    def _index(self, vin: str, record_id: int) -> None:
        """Prepend record_id to the vin index; the oldest id drops off at the cap."""
        cap = self.config.max_records_per_vin
        ids = self.records_by_vin.get(vin)
        if ids is None:
            ids = deque(maxlen=cap)
        elif not isinstance(ids, deque) or ids.maxlen != cap:
            # Loaded or host-supplied index; keep the newest ids only
            ids = deque(list(ids)[:cap], maxlen=cap)
        ids.appendleft(record_id)
        self.records_by_vin[vin] = ids

    def _reject(self, operation: str, code: ErrorCode) -> Result:
        _logger.debug("%s rejected: %s", operation, code.name)
        return Result.failure(code)
