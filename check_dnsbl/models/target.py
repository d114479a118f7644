"""Target host model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Target:
    """The host under test.

    Attributes:
        host: Raw input string (hostname or literal address).
        resolved_address: Address used to build list-server queries. Equal to
            host when resolution failed.
        resolved: True if the address lookup succeeded.
    """

    host: str
    resolved_address: str
    resolved: bool

    @classmethod
    def unresolved(cls, host: str) -> "Target":
        """Build a target that falls back to the raw input as its address."""
        return cls(host=host, resolved_address=host, resolved=False)
