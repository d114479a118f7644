"""Aggregation of list-server outcomes for one run.

The ResultSet is mutated from engine completion callbacks while the engine
drains, and finalized by the caller once the engine reports quiescence.
"""

from dataclasses import dataclass, field
from typing import List

from check_dnsbl.models.dns_result import ListOutcome, OutcomeKind


@dataclass
class ResultSet:
    """Accumulated listed/timed-out servers for one run.

    Attributes:
        total_servers: Number of list servers queried.
        whitelist: If True, ABSENT counts as listed (not whitelisted) and
            PRESENT is a no-op.
        listed: Listed servers in completion order.
        timed_out: Timed-out servers in completion order.
        errored: Servers whose query ended in an error (diagnostic only).
        completions: Number of outcomes recorded.
        finalized: Set once every submitted query has completed.

    Invariants:
        - completions == submitted queries before finalization
        - len(listed) <= total_servers
        - no server appears in more than one of listed, timed_out, errored
    """

    total_servers: int
    whitelist: bool = False
    listed: List[str] = field(default_factory=list)
    timed_out: List[str] = field(default_factory=list)
    errored: List[str] = field(default_factory=list)
    completions: int = 0
    finalized: bool = False

    @property
    def listed_count(self) -> int:
        return len(self.listed)

    def counts_as_listed(self, outcome: ListOutcome) -> bool:
        """Check whether an outcome counts as listed under the current mode.

        Args:
            outcome: Classified list-server outcome.

        Returns:
            bool: True for PRESENT in blacklist mode, ABSENT in whitelist mode.
        """
        if self.whitelist:
            return outcome.is_absent()
        return outcome.is_present()

    def record(self, outcome: ListOutcome) -> None:
        """Record a single list-server outcome.

        Args:
            outcome: Classified list-server outcome.

        Raises:
            RuntimeError: If the result set has already been finalized.
        """
        if self.finalized:
            raise RuntimeError(
                f"Outcome for {outcome.server} received after finalization"
            )

        self.completions += 1

        if self.counts_as_listed(outcome):
            self.listed.append(outcome.server)
        elif outcome.is_timed_out():
            self.timed_out.append(outcome.server)
        elif outcome.kind == OutcomeKind.QUERY_ERROR:
            self.errored.append(outcome.server)

    def finalize(self, submitted: int) -> None:
        """Mark the result set final.

        Args:
            submitted: Number of list-server queries submitted for the run.

        Raises:
            RuntimeError: If completions do not match submissions.
        """
        if self.completions != submitted:
            raise RuntimeError(
                f"Cannot finalize: {self.completions} of {submitted} queries completed"
            )
        self.finalized = True


@dataclass
class ResultBundle:
    """Finalized check result handed to threshold evaluation and reporting.

    Attributes:
        host: Raw target as given.
        address: Address the list-server queries were built from.
        resolved: Whether the target address lookup succeeded.
        whitelist: Listing mode of the run.
        listed_servers: Listed servers in completion order.
        timed_out_servers: Timed-out servers in completion order.
        total_servers: Number of list servers queried.
        elapsed_seconds: Wall-clock duration of the check.
    """

    host: str
    address: str
    resolved: bool
    whitelist: bool
    listed_servers: List[str]
    timed_out_servers: List[str]
    total_servers: int
    elapsed_seconds: float

    @property
    def listed_count(self) -> int:
        return len(self.listed_servers)

    @classmethod
    def from_result_set(
        cls,
        host: str,
        address: str,
        resolved: bool,
        result_set: ResultSet,
        elapsed_seconds: float,
    ) -> "ResultBundle":
        """Build a bundle from a finalized result set.

        Raises:
            RuntimeError: If the result set is not finalized.
        """
        if not result_set.finalized:
            raise RuntimeError("Result set must be finalized before reporting")

        return cls(
            host=host,
            address=address,
            resolved=resolved,
            whitelist=result_set.whitelist,
            listed_servers=list(result_set.listed),
            timed_out_servers=list(result_set.timed_out),
            total_servers=result_set.total_servers,
            elapsed_seconds=elapsed_seconds,
        )

    def to_json(self) -> dict:
        """Serialize to JSON-compatible dict.

        Returns:
            dict: JSON-serializable representation matching
                result-bundle-schema.json (without the state field).
        """
        return {
            "host": self.host,
            "address": self.address,
            "resolved": self.resolved,
            "mode": "whitelist" if self.whitelist else "blacklist",
            "listed_servers": list(self.listed_servers),
            "timed_out_servers": list(self.timed_out_servers),
            "total_servers": self.total_servers,
            "listed_count": self.listed_count,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }
