"""YAML loading and saving utilities for ledger data."""

import logging
from collections import deque
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .authority import AuthorityGate, Bound
from .config import LedgerConfig
from .ledger import MaintenanceLog
from .record import MaintenanceRecord

_logger = logging.getLogger(__name__)


def _record_from_dict(dct: Dict[str, Any]) -> MaintenanceRecord:
    """Build a MaintenanceRecord from its YAML dict (camelCase keys)."""
    return MaintenanceRecord(
        vin=str(dct["vin"]),
        service_type=str(dct["serviceType"]),
        mechanic=str(dct.get("mechanic", dct["recordedBy"])),
        parts=[str(p) for p in dct.get("parts") or []],
        details=str(dct.get("details") or ""),
        timestamp=dct.get("timestamp", 0),
        recorded_by=str(dct["recordedBy"]),
    )


def _config_from_dict(dct: Optional[Dict[str, Any]]) -> LedgerConfig:
    """Build a LedgerConfig from the 'config' section, defaulting missing keys."""
    defaults = LedgerConfig()
    if not dct:
        return defaults
    return LedgerConfig(
        max_records=dct.get("maxRecords", defaults.max_records),
        max_records_per_vin=dct.get("maxRecordsPerVin", defaults.max_records_per_vin),
        burn_address=dct.get("burnAddress", defaults.burn_address),
    )


def _index_from_list(vin: str, ids: list, cap: int) -> deque:
    """
    Build a vin index from its stored newest-first list.

    An over-long list is kept whole so check_invariants can report it;
    the next log for that vin trims it to the newest ids.
    """
    ids = [int(i) for i in ids or []]
    if len(ids) > cap:
        _logger.warning("Index for %s holds %d ids, over the cap of %d", vin, len(ids), cap)
        return deque(ids)
    return deque(ids, maxlen=cap)


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a MaintenanceRecord to the YAML dict format (camelCase keys)."""
    return {
        "vin": record.vin,
        "serviceType": record.service_type,
        "mechanic": record.mechanic,
        "parts": list(record.parts),
        "details": record.details,
        "timestamp": record.timestamp,
        "recordedBy": record.recorded_by,
    }


def _config_to_dict(config: LedgerConfig) -> Dict[str, Any]:
    return {
        "maxRecords": config.max_records,
        "maxRecordsPerVin": config.max_records_per_vin,
        "burnAddress": config.burn_address,
    }


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def ledger_to_dict(log: MaintenanceLog, block_height: int = 0) -> Dict[str, Any]:
    """Serialize a whole ledger, including the host clock, to a plain dict."""
    return {
        "config": _config_to_dict(log.config),
        "host": {"blockHeight": block_height},
        "authority": log.gate.authority,
        "nextRecordId": log.next_record_id,
        "records": {
            record_id: _record_to_dict(log.records[record_id])
            for record_id in sorted(log.records)
        },
        "recordsByVin": {vin: list(ids) for vin, ids in log.records_by_vin.items()},
    }


def load_ledger(filename: Union[str, Path]) -> Tuple[MaintenanceLog, int]:
    """
    Load a ledger from a YAML file.

    Returns the ledger and the stored block height.
    """
    with open(filename, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}

    config = _config_from_dict(data.get("config"))

    authority = data.get("authority")
    gate = AuthorityGate(
        burn_address=config.burn_address,
        binding=Bound(str(authority)) if authority is not None else None,
    )

    # YAML may hand back numeric keys; record ids are ints, vins are strings
    records = {
        int(k): _record_from_dict(v) for k, v in (data.get("records") or {}).items()
    }
    records_by_vin = {
        str(vin): _index_from_list(str(vin), ids, config.max_records_per_vin)
        for vin, ids in (data.get("recordsByVin") or {}).items()
    }
    next_record_id = data.get("nextRecordId")
    if next_record_id is None:
        next_record_id = max(records) + 1 if records else 0

    log = MaintenanceLog(
        gate,
        config=config,
        records=records,
        records_by_vin=records_by_vin,
        next_record_id=next_record_id,
    )
    host = data.get("host") or {}
    return log, host.get("blockHeight", 0)


def save_ledger(filename: Union[str, Path], log: MaintenanceLog, block_height: int = 0) -> None:
    """Write the full ledger state back to a YAML file."""
    _write_yaml(filename, ledger_to_dict(log, block_height))


def create_ledger(filename: Union[str, Path], config: Optional[LedgerConfig] = None) -> MaintenanceLog:
    """
    Create a new ledger YAML file with no authority and no records.

    Returns the empty ledger that was written.
    """
    config = config or LedgerConfig()
    log = MaintenanceLog(AuthorityGate(burn_address=config.burn_address), config=config)
    save_ledger(filename, log, 0)
    return log
