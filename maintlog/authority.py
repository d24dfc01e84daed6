"""Authority gate: the write-once binding that makes logging usable."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .config import BURN_ADDRESS
from .errors import ErrorCode
from .result import Result

_logger = logging.getLogger(__name__)


class Unbound:
    """No authority has been bound yet. All logging is denied."""

    def __repr__(self) -> str:
        return "Unbound()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Unbound)

    def __hash__(self) -> int:
        return hash(Unbound)


@dataclass(frozen=True)
class Bound:
    """An authority identity, bound for the lifetime of the ledger."""

    identity: str


Binding = Union[Unbound, Bound]


class AuthorityGate:
    """Holds the single optional authority identity.

    The only legal transition is Unbound -> Bound. Once bound, the
    identity never changes.
    """

    def __init__(self, burn_address: str = BURN_ADDRESS, binding: Optional[Binding] = None):
        self.burn_address = burn_address
        self._binding: Binding = binding if binding is not None else Unbound()

    @property
    def binding(self) -> Binding:
        return self._binding

    @property
    def is_bound(self) -> bool:
        return isinstance(self._binding, Bound)

    @property
    def authority(self) -> Optional[str]:
        """The bound identity, or None while unbound."""
        if isinstance(self._binding, Bound):
            return self._binding.identity
        return None

    def set_authority_contract(self, candidate: str) -> Result:
        """Bind candidate as the authority. Succeeds at most once."""
        if candidate == self.burn_address:
            _logger.debug("Rejected burn address as authority")
            return Result.failure(ErrorCode.INVALID_AUTHORITY)
        if self.is_bound:
            _logger.debug("Authority already bound to %s", self.authority)
            return Result.failure(ErrorCode.ALREADY_BOUND)

        self._binding = Bound(candidate)
        _logger.info("Authority bound to %s", candidate)
        return Result.success(True)
