"""Asynchronous DNS query engine.

Queries are scheduled as tasks on a private asyncio event loop and run only
while the caller blocks in run_to_quiescence(). Everything happens on the
calling thread; completion callbacks never run concurrently with each other
or with submit().
"""

import asyncio
import logging
from typing import Callable, Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

from check_dnsbl.models.dns_result import QueryStatus


logger = logging.getLogger(__name__)

QueryCallback = Callable[[QueryStatus, Optional[str]], None]


def categorize_exception(exception: Exception) -> QueryStatus:
    """Map a resolver exception to a terminal query status.

    Args:
        exception: Exception raised by the resolver.

    Returns:
        QueryStatus: NXDOMAIN, NODATA, TIMEOUT, SERVFAIL or ERROR.
    """
    if isinstance(exception, (dns.exception.Timeout, asyncio.TimeoutError)):
        return QueryStatus.TIMEOUT
    elif isinstance(exception, dns.resolver.NXDOMAIN):
        return QueryStatus.NXDOMAIN
    elif isinstance(exception, dns.resolver.NoAnswer):
        return QueryStatus.NODATA
    elif isinstance(exception, dns.resolver.NoNameservers):
        return QueryStatus.SERVFAIL
    else:
        return QueryStatus.ERROR


class AsyncQueryEngine:
    """Submits DNS queries without blocking and drains them on demand.

    Example:
        >>> replies = []
        >>> with AsyncQueryEngine(timeout=5) as engine:
        ...     engine.submit("example.org", "A", lambda s, a: replies.append((s, a)))
        ...     engine.run_to_quiescence()
    """

    def __init__(
        self,
        resolver: Optional[object] = None,
        timeout: float | None = None,
        workers: int | None = None,
        retries: int = 0,
        nameservers: list[str] | None = None,
    ):
        """Initialize the engine.

        Args:
            resolver: Object with an async resolve(name, rdtype) method.
                Defaults to dns.asyncresolver.Resolver().
            timeout: Per-attempt timeout in seconds (None: resolver default).
            workers: Max in-flight queries (None: unbounded).
            retries: Default number of re-attempts after a timeout.
            nameservers: Optional nameserver addresses to query.
        """
        self._resolver = resolver or dns.asyncresolver.Resolver()
        if timeout is not None:
            self._resolver.lifetime = timeout
        if nameservers:
            self._resolver.nameservers = nameservers

        self._timeout = timeout
        self._retries = retries
        self._semaphore = asyncio.Semaphore(workers) if workers else None
        self._loop = asyncio.new_event_loop()
        self._tasks: list[asyncio.Task] = []
        self.submitted = 0
        self.completed = 0

    def __enter__(self) -> "AsyncQueryEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def outstanding(self) -> int:
        """Number of submitted queries whose callback has not fired yet."""
        return self.submitted - self.completed

    def submit(
        self,
        name: str,
        rdtype: str,
        callback: QueryCallback,
        retries: int | None = None,
    ) -> None:
        """Schedule a query without blocking.

        Args:
            name: Query name.
            rdtype: Record type (e.g., "A").
            callback: Called once with (status, address) when terminal.
            retries: Re-attempts after a timeout (None: engine default).
        """
        if retries is None:
            retries = self._retries

        self.submitted += 1
        task = self._loop.create_task(self._run(name, rdtype, callback, retries))
        self._tasks.append(task)

    def run_to_quiescence(self) -> None:
        """Block until every submitted query has invoked its callback.

        Queries submitted from callbacks while draining are awaited too.

        Raises:
            RuntimeError: If completions do not match submissions.
            Exception: The first exception raised by a callback, once all
                other queries have drained.
        """
        self._loop.run_until_complete(self._drain())

        tasks, self._tasks = self._tasks, []
        if self.completed != self.submitted:
            raise RuntimeError(
                f"Engine drained with {self.outstanding} of {self.submitted} queries outstanding"
            )
        for task in tasks:
            exception = task.exception()
            if exception is not None:
                raise exception

    def close(self) -> None:
        """Close the event loop. Submitted-but-undrained queries are dropped."""
        for task in self._tasks:
            task.cancel()
        if self._tasks:
            self._loop.run_until_complete(
                asyncio.gather(*self._tasks, return_exceptions=True)
            )
        self._tasks = []
        self._loop.close()

    async def _drain(self) -> None:
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.wait(pending)

    async def _run(
        self, name: str, rdtype: str, callback: QueryCallback, retries: int
    ) -> None:
        attempt = 0
        while True:
            status, address = await self._query(name, rdtype)
            if status != QueryStatus.TIMEOUT or attempt >= retries:
                break
            attempt += 1
            logger.debug(f"Query {name} timed out, retry {attempt} of {retries}")

        self.completed += 1
        callback(status, address)

    async def _query(self, name: str, rdtype: str) -> tuple[QueryStatus, str | None]:
        if self._semaphore is None:
            return await self._attempt(name, rdtype)
        async with self._semaphore:
            return await self._attempt(name, rdtype)

    async def _attempt(
        self, name: str, rdtype: str
    ) -> tuple[QueryStatus, str | None]:
        try:
            if self._timeout is not None:
                answers = await asyncio.wait_for(
                    self._resolver.resolve(name, rdtype), self._timeout
                )
            else:
                answers = await self._resolver.resolve(name, rdtype)
        except (dns.exception.DNSException, asyncio.TimeoutError) as e:
            status = categorize_exception(e)
            if status == QueryStatus.ERROR:
                logger.debug(f"Query {name} failed: {type(e).__name__}: {e}")
            return status, None
        except Exception as e:
            logger.error(f"Unexpected error querying {name}: {e}")
            return QueryStatus.ERROR, None

        if len(answers) == 0:
            return QueryStatus.NODATA, None
        return QueryStatus.OK, str(answers[0])
