"""DNS checker service: target resolution and list-server queries."""

import logging
from functools import partial
from typing import Optional

from check_dnsbl.models.dns_result import ListOutcome, OutcomeKind, QueryStatus
from check_dnsbl.models.result_set import ResultSet
from check_dnsbl.models.target import Target
from check_dnsbl.services.logger import log_list_check
from check_dnsbl.services.query_engine import AsyncQueryEngine
from check_dnsbl.utils.ip_utils import build_query_name, is_valid_ipv4


logger = logging.getLogger(__name__)


def classify_reply(
    server: str, status: QueryStatus, address: Optional[str]
) -> ListOutcome:
    """Classify a terminal list-server reply.

    Args:
        server: List server domain that was queried.
        status: Terminal query status.
        address: Returned address, if any.

    Returns:
        ListOutcome: PRESENT, ABSENT, TIMED_OUT or QUERY_ERROR outcome.
    """
    if status == QueryStatus.OK and address:
        kind = OutcomeKind.PRESENT
    elif status in (QueryStatus.OK, QueryStatus.NODATA, QueryStatus.NXDOMAIN):
        kind = OutcomeKind.ABSENT
        address = None
    elif status == QueryStatus.TIMEOUT:
        kind = OutcomeKind.TIMED_OUT
    else:
        kind = OutcomeKind.QUERY_ERROR

    return ListOutcome(server=server, kind=kind, status=status, address=address)


def resolve_target(host: str, engine: AsyncQueryEngine) -> Target:
    """Resolve the target host to an address.

    Falls back to the raw host string when the lookup fails, so the check
    can proceed as if it were a literal address. No retry is attempted.

    Args:
        host: Hostname or literal address.
        engine: Query engine to submit the lookup to.

    Returns:
        Target: Resolved target.
    """
    replies: list[tuple[QueryStatus, Optional[str]]] = []

    engine.submit(
        host,
        "A",
        lambda status, address: replies.append((status, address)),
        retries=0,
    )
    engine.run_to_quiescence()

    status, address = replies[0]
    if status == QueryStatus.OK and address:
        logger.info(f"Resolved {host} to {address}")
        return Target(host=host, resolved_address=address, resolved=True)

    logger.warning(
        f"Could not resolve {host} ({status.value}), using it as a literal address"
    )
    return Target.unresolved(host)


def _on_list_reply(
    result_set: ResultSet,
    server: str,
    status: QueryStatus,
    address: Optional[str],
) -> None:
    outcome = classify_reply(server, status, address)
    if outcome.kind == OutcomeKind.QUERY_ERROR:
        logger.warning(f"Query against {server} failed with {status.value}, skipping")

    result_set.record(outcome)
    log_list_check(
        server=server,
        outcome=outcome.kind.value,
        status=status.value,
        address=outcome.address,
        listed=result_set.counts_as_listed(outcome),
    )


def check_list_servers(
    target: Target,
    servers: list[str],
    engine: AsyncQueryEngine,
    whitelist: bool = False,
    retries: int | None = None,
) -> ResultSet:
    """Query every list server for the target address concurrently.

    All queries are submitted back to back, then the engine is driven to
    quiescence once. The result set is finalized only after that.

    Args:
        target: Resolved target.
        servers: List server domains.
        engine: Query engine to submit the queries to.
        whitelist: Invert listing semantics (ABSENT counts as listed).
        retries: Re-attempts after a timeout (None: engine default).

    Returns:
        ResultSet: Finalized result set.
    """
    address = target.resolved_address
    if not is_valid_ipv4(address):
        logger.warning(
            f"Address {address} is not IPv4, list-server queries will not match"
        )

    result_set = ResultSet(total_servers=len(servers), whitelist=whitelist)

    for server in servers:
        query_name = build_query_name(address, server)
        logger.debug(f"Submitting {query_name}")
        engine.submit(
            query_name,
            "A",
            partial(_on_list_reply, result_set, server),
            retries=retries,
        )

    engine.run_to_quiescence()
    result_set.finalize(submitted=len(servers))

    return result_set
