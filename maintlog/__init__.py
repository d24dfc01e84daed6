"""
Vehicle maintenance record ledger.

This package provides an append/amend store for maintenance events:
- ErrorCode: Failure codes carried by results
- Result: Tagged success/failure outcome of every operation
- MaintenanceRecord: A logged service event
- LedgerConfig: Capacity limits and the reserved burn address
- HostContext: Caller identity and logical clock for a call
- AuthorityGate: Write-once authority binding (Unbound -> Bound)
- MaintenanceLog: Validated storage with a newest-first index per VIN
"""

from .errors import ErrorCode
from .result import Result
from .record import MaintenanceRecord
from .config import BURN_ADDRESS, LedgerConfig
from .host import HostContext
from .authority import AuthorityGate, Bound, Unbound
from .ledger import MaintenanceLog
from .invariants import check_invariants
from .loader import create_ledger, ledger_to_dict, load_ledger, save_ledger

__all__ = [
    "ErrorCode",
    "Result",
    "MaintenanceRecord",
    "BURN_ADDRESS",
    "LedgerConfig",
    "HostContext",
    "AuthorityGate",
    "Bound",
    "Unbound",
    "MaintenanceLog",
    "check_invariants",
    "create_ledger",
    "ledger_to_dict",
    "load_ledger",
    "save_ledger",
]
