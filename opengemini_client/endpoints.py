"""Server endpoints: round-robin selection, health checks and auth rules."""

from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)

URL_PING = "/ping"
URL_QUERY = "/query"
URL_STATUS = "/status"
URL_WRITE = "/write"

HEALTH_CHECK_PERIOD = 10.0

_NO_AUTH_REQUIRED: dict[str, frozenset[str]] = {
    URL_PING: frozenset({"HEAD", "GET"}),
    URL_QUERY: frozenset({"OPTIONS"}),
    URL_STATUS: frozenset({"HEAD", "GET"}),
}


def requires_auth(path: str, method: str) -> bool:
    """Whether a request to ``path`` with ``method`` must carry credentials."""
    return method not in _NO_AUTH_REQUIRED.get(path, frozenset())


@dataclass
class Endpoint:
    """A server base URL and whether it is known to be down."""

    url: str
    is_down: bool = False


class EndpointPool:
    """Hands out server URLs in turn, skipping the ones marked down."""

    def __init__(self, urls: Iterable[str]) -> None:
        self.endpoints = [Endpoint(url) for url in urls]
        if not self.endpoints:
            raise ValueError("at least one endpoint is required")
        self._lock = threading.Lock()
        self._prev = -1

    def _advance(self) -> int:
        with self._lock:
            self._prev = (self._prev + 1) % (2**32)
            return self._prev % len(self.endpoints)

    def next_url(self) -> str:
        """Return the next live URL; a random one if every endpoint is down."""
        for _ in self.endpoints:
            endpoint = self.endpoints[self._advance()]
            if not endpoint.is_down:
                return endpoint.url
        logger.error("all servers down, no endpoints found")
        return random.choice(self.endpoints).url

    def mark(self, index: int, is_down: bool) -> None:
        self.endpoints[index].is_down = is_down

    def check_all(self, ping: Callable[[str], Any]) -> list[bool]:
        """Ping every endpoint concurrently and record which are down.

        ``ping`` receives an endpoint URL and raises on failure. The returned
        list holds the new down state of each endpoint.
        """

        def check(index: int) -> bool:
            try:
                ping(self.endpoints[index].url)
            except Exception as err:  # any failure marks the endpoint down
                logger.error("ping failed: index=%d error=%s", index, err)
                down = True
            else:
                logger.info("ping succeeded: index=%d", index)
                down = False
            self.mark(index, down)
            return down

        with ThreadPoolExecutor(max_workers=len(self.endpoints)) as pool:
            return list(pool.map(check, range(len(self.endpoints))))

    def watch(
        self,
        ping: Callable[[str], Any],
        stop: threading.Event,
        period: float = HEALTH_CHECK_PERIOD,
    ) -> None:
        """Run ``check_all`` every ``period`` seconds until ``stop`` is set."""
        while not stop.wait(period):
            self.check_all(ping)