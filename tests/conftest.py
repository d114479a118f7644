"""pytest fixtures for testing."""

import asyncio

import dns.resolver
import pytest

from check_dnsbl.services.query_engine import AsyncQueryEngine


class FakeResolver:
    """Asynchronous resolver stand-in with controllable replies and timing.

    Each entry in replies maps a query name to (delay, result), or to a list
    of such tuples consumed one per attempt (the last one repeats). A result
    is a list of addresses, or an exception class/instance to raise.
    """

    def __init__(self, replies=None, default=None):
        self.replies = dict(replies or {})
        self.default = default
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.lifetime = None
        self.nameservers = []

    def _next_reply(self, name):
        reply = self.replies.get(name)
        if reply is None:
            return (0, self.default)
        if isinstance(reply, list):
            return reply.pop(0) if len(reply) > 1 else reply[0]
        return reply

    async def resolve(self, name, rdtype="A"):
        self.calls.append((name, rdtype))
        delay, result = self._next_reply(name)

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(delay)
        finally:
            self.in_flight -= 1

        if isinstance(result, type) and issubclass(result, BaseException):
            raise result()
        if isinstance(result, BaseException):
            raise result
        return result

    def names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def make_engine():
    """Factory building engines backed by a FakeResolver; closes them afterwards."""
    engines = []

    def factory(replies=None, default=dns.resolver.NXDOMAIN, **kwargs):
        resolver = FakeResolver(replies, default=default)
        engine = AsyncQueryEngine(resolver=resolver, **kwargs)
        engines.append(engine)
        return engine, resolver

    yield factory

    for engine in engines:
        engine.close()
