import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

from fullservice.core.errors import FullServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    FAILED = "failed"
    READY = "ready"


class ListView(Generic[T]):
    """Items plus a load state that keeps "no results" apart from "failed"."""

    def __init__(self) -> None:
        self.items: List[T] = []
        self.state = LoadState.LOADING
        self.error: Optional[FullServiceError] = None

    async def load(self, fetch: Callable[[], Awaitable[List[T]]]) -> List[T]:
        self.state = LoadState.LOADING
        self.error = None
        try:
            items = await fetch()
        except FullServiceError as e:
            logger.warning("List load failed: %s", e)
            self.error = e
            self.state = LoadState.FAILED
            return self.items
        self.apply(items)
        return self.items

    def apply(self, items: List[T]) -> None:
        self.items = list(items)
        self.state = LoadState.READY if self.items else LoadState.EMPTY


class Debouncer:
    """
    Runs only the last call made within ``delay`` seconds of quiet.

    A call still waiting out its delay is dropped when a newer one arrives;
    a call that already started its request is left to finish.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._waiting: set[asyncio.Task] = set()

    def schedule(self, fn: Callable[..., Awaitable[Any]], *args: Any) -> asyncio.Task:
        if self._task is not None and self._task in self._waiting:
            self._task.cancel()
            self._waiting.discard(self._task)

        task = asyncio.ensure_future(self._run(fn, *args))
        self._waiting.add(task)
        self._task = task
        return task

    async def _run(self, fn: Callable[..., Awaitable[Any]], *args: Any) -> Any:
        await asyncio.sleep(self.delay)
        self._waiting.discard(asyncio.current_task())
        return await fn(*args)

    async def wait(self) -> Any:
        if self._task is None:
            return None
        try:
            return await self._task
        except asyncio.CancelledError:
            return None


class ListingSearch:
    """
    Debounced listing search. Only call frequency changes: the results for a
    term are exactly what an immediate search for that term returns.
    """

    def __init__(self, fetch: Callable[[str], Awaitable[List[Any]]], delay: float = 0.3):
        self.fetch = fetch
        self.view: ListView[Any] = ListView()
        self.term = ""
        self._debouncer = Debouncer(delay)
        self._generation = 0

    async def _search(self, term: str, generation: int) -> List[Any]:
        try:
            items = await self.fetch(term)
        except FullServiceError as e:
            if generation != self._generation:
                # superseded; nobody awaits this task any more
                logger.info("Dropping failure of superseded search %r: %s", term, e)
                return []
            self.view.error = e
            self.view.state = LoadState.FAILED
            raise
        # a slower answer for an older term must not overwrite a newer one
        if generation == self._generation:
            self.view.apply(items)
        return items

    def type(self, term: str) -> asyncio.Task:
        self.term = term
        self._generation += 1
        self.view.state = LoadState.LOADING
        return self._debouncer.schedule(self._search, term.strip(), self._generation)

    async def wait(self) -> List[Any]:
        try:
            await self._debouncer.wait()
        except FullServiceError:
            pass
        return self.view.items
