from __future__ import annotations

import queue
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")

_CLOSED = object()


class Handoff(Generic[T]):
    """
    Rendezvous queue between one producer and many consumers.

    ``put`` returns only after a consumer has taken the item, so the producer
    is never more than one item ahead of the consumers. Consumers iterate the
    handoff until the producer calls ``close``.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._closed = False

    def put(self, item: T) -> None:
        if self._closed:
            raise RuntimeError("put() on a closed handoff")
        self._queue.put(item)
        self._queue.join()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self._queue.get()
            self._queue.task_done()
            if item is _CLOSED:
                # Leave the marker for the remaining consumers.
                self._queue.put(_CLOSED)
                return
            yield item  # type: ignore[misc]
