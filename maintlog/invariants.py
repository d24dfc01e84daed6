"""Consistency checks over a ledger's records and vin index."""

from typing import List

from .ledger import MaintenanceLog


def check_invariants(log: MaintenanceLog) -> List[str]:
    """
    Audit a ledger. Returns list of problems, empty when healthy.

    Checks:
    - record ids are below next_record_id
    - mechanic equals recorded_by on every record
    - every indexed id exists as a record for that vin
    - each vin index is newest first and within the per-vin cap
    """
    problems = []
    cap = log.config.max_records_per_vin

    if log.next_record_id > log.config.max_records:
        problems.append(
            f"nextRecordId {log.next_record_id} exceeds maxRecords {log.config.max_records}"
        )

    for record_id, record in log.records.items():
        if record_id < 0 or record_id >= log.next_record_id:
            problems.append(f"record {record_id}: id outside 0..{log.next_record_id - 1}")
        if record.mechanic != record.recorded_by:
            problems.append(
                f"record {record_id}: mechanic {record.mechanic!r} "
                f"differs from recordedBy {record.recorded_by!r}"
            )

    for vin, ids in log.records_by_vin.items():
        ids = list(ids)
        if len(ids) > cap:
            problems.append(f"vin {vin}: {len(ids)} indexed ids exceeds cap of {cap}")
        for record_id in ids:
            record = log.records.get(record_id)
            if record is None:
                problems.append(f"vin {vin}: indexed id {record_id} has no record")
            elif record.vin != vin:
                problems.append(f"vin {vin}: indexed id {record_id} belongs to {record.vin}")
        # Ids are assigned increasing, so newest first means strictly descending
        if any(a <= b for a, b in zip(ids, ids[1:])):
            problems.append(f"vin {vin}: index is not newest first")

    return problems
