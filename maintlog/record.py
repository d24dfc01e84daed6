"""MaintenanceRecord class for logged service events."""

from dataclasses import dataclass, field, replace
from typing import List


@dataclass(frozen=True)
class MaintenanceRecord:
    """A single maintenance event logged against a vehicle. Immutable once built."""

    vin: str
    service_type: str
    mechanic: str
    parts: List[str] = field(default_factory=list)
    details: str = ""
    timestamp: int = 0
    recorded_by: str = ""

    def amended(
        self, service_type: str, parts: List[str], details: str, timestamp: int
    ) -> "MaintenanceRecord":
        """Copy with new mutable fields. vin and authorship stay as created."""
        return replace(
            self,
            service_type=service_type,
            parts=list(parts),
            details=details,
            timestamp=timestamp,
        )
