import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .errors import AuditError, ErrorKind

log = logging.getLogger("accessibility-audit")


class AuditLimiter:
    """Caps how many browsers run at once; callers queue for a bounded time."""

    def __init__(self, max_concurrent: int, queue_timeout: float):
        self.max_concurrent = max(max_concurrent, 1)
        self.queue_timeout = queue_timeout
        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self.active = 0

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self.queue_timeout)
        except asyncio.TimeoutError as e:
            log.warning("No audit slot free after %ss (%d running)", self.queue_timeout, self.active)
            raise AuditError(ErrorKind.CAPACITY, "audit capacity exceeded") from e
        self.active += 1
        try:
            yield
        finally:
            self.active -= 1
            self._semaphore.release()
