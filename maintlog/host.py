"""HostContext class: who is calling and when."""


class HostContext:
    """Caller identity and logical clock supplied to each ledger call."""

    def __init__(self, caller: str, block_height: int = 0):
        if block_height < 0:
            raise ValueError("block_height must be non-negative")
        self.caller = caller
        self._block_height = block_height

    @property
    def block_height(self) -> int:
        """Current logical time, used as the record timestamp."""
        return self._block_height

    def as_caller(self, caller: str) -> "HostContext":
        """Context for a different caller at the same height."""
        return HostContext(caller, self._block_height)

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward and return the new height."""
        if blocks < 0:
            raise ValueError("Cannot advance by a negative number of blocks")
        self._block_height += blocks
        return self._block_height

    def set_block_height(self, height: int) -> None:
        """Jump to a given height. The clock never moves backwards."""
        if height < self._block_height:
            raise ValueError(
                f"Block height {height} is behind current height {self._block_height}"
            )
        self._block_height = height

    def __repr__(self) -> str:
        return f"HostContext(caller={self.caller!r}, block_height={self._block_height})"
