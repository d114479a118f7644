"""DNS reply status and list-server outcome models."""

from dataclasses import dataclass
from enum import Enum


class QueryStatus(Enum):
    """Terminal status of a single DNS query."""

    OK = "NOERROR"  # Answer with at least one address
    NODATA = "NODATA"  # Name exists, no A records
    NXDOMAIN = "NXDOMAIN"  # Name does not exist
    TIMEOUT = "TIMEOUT"
    SERVFAIL = "SERVFAIL"  # No nameserver could answer
    ERROR = "ERROR"  # Anything else


class OutcomeKind(Enum):
    """Classification of a list-server reply."""

    PRESENT = "PRESENT"  # Address returned, entry exists on the list
    ABSENT = "ABSENT"  # NODATA or NXDOMAIN
    TIMED_OUT = "TIMED_OUT"
    QUERY_ERROR = "QUERY_ERROR"  # Diagnostic only


@dataclass(frozen=True)
class ListOutcome:
    """Classified result of one list-server query.

    Attributes:
        server: List server domain that was queried.
        kind: Classification of the reply.
        status: Raw terminal status reported by the query engine.
        address: Returned address for PRESENT outcomes, None otherwise.
    """

    server: str
    kind: OutcomeKind
    status: QueryStatus
    address: str | None = None

    def is_present(self) -> bool:
        return self.kind == OutcomeKind.PRESENT

    def is_absent(self) -> bool:
        return self.kind == OutcomeKind.ABSENT

    def is_timed_out(self) -> bool:
        return self.kind == OutcomeKind.TIMED_OUT
