"""Result dataclass for operation outcomes."""

from dataclasses import dataclass
from typing import Any

from .errors import ErrorCode


@dataclass(frozen=True)
class Result:
    """Tagged success/failure value. On failure, value is an ErrorCode."""

    ok: bool
    value: Any

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, code: ErrorCode) -> "Result":
        return cls(ok=False, value=code)

    @property
    def error(self) -> ErrorCode:
        """The failure code. Raises ValueError on a successful result."""
        if self.ok:
            raise ValueError("Successful result has no error code")
        return self.value
