"""Threshold evaluation using monitoring plugin conventions."""

from dataclasses import dataclass
from enum import Enum


class ServiceState(Enum):
    """Plugin result state; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        return self.value


@dataclass(frozen=True)
class Thresholds:
    """Warning/critical boundaries on the listed-server count.

    Attributes:
        warning: Listed count at or above which the state is WARNING.
        critical: Listed count at or above which the state is CRITICAL.

    Invariants:
        - 0 <= warning <= critical
    """

    warning: int
    critical: int

    def __post_init__(self) -> None:
        if self.warning < 0 or self.critical < 0:
            raise ValueError("Thresholds must not be negative")
        if self.critical < self.warning:
            raise ValueError(
                f"Critical threshold ({self.critical}) must be >= warning threshold ({self.warning})"
            )

    def evaluate(self, listed_count: int) -> ServiceState:
        """Map a listed count to a service state.

        Args:
            listed_count: Number of servers the host is listed on.

        Returns:
            ServiceState: CRITICAL, WARNING or OK.
        """
        if listed_count >= self.critical:
            return ServiceState.CRITICAL
        if listed_count >= self.warning:
            return ServiceState.WARNING
        return ServiceState.OK
