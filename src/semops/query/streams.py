"""
Three-channel result streams.

A query engine hands results back as a ``ResultStream``: a producer coroutine
emits ``data`` events, then exactly one ``end`` or ``error`` event. Consumers
register handlers before starting the stream so no early event is missed.
``collect`` turns a stream into a single awaitable outcome.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)

DATA = "data"
END = "end"
ERROR = "error"

EVENTS = (DATA, END, ERROR)

Handler = Callable[..., None]
Producer = Callable[["ResultStream"], Awaitable[None]]


class ResultStream:
    """
    Event source with ``data``, ``end`` and ``error`` channels.

    After ``end`` or ``error`` the stream is closed and every further
    emission is dropped. An exception escaping the producer is emitted as an
    ``error`` event; a producer that returns without closing the stream is
    ended automatically.
    """

    def __init__(self, producer: Producer, mode: str = "bindings"):
        """
        Initialize the stream.

        Args:
            producer: Coroutine function receiving the stream to emit into
            mode: Result mode label used in logs (quads, bindings)
        """
        self.mode = mode
        self._producer = producer
        self._handlers: dict[str, list[Handler]] = {event: [] for event in EVENTS}
        self._closed = False
        self._task: Optional[asyncio.Task] = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def started(self) -> bool:
        return self._task is not None

    def on(self, event: str, handler: Handler) -> ResultStream:
        """
        Register a handler for ``event``.

        ``data`` and ``error`` handlers receive one argument, ``end`` handlers
        none.
        """
        if event not in self._handlers:
            raise ValueError(f"Unknown stream event: {event}")
        self._handlers[event].append(handler)
        return self

    def emit(self, event: str, payload: Any = None) -> None:
        """Deliver an event to its handlers unless the stream is closed."""
        if event not in self._handlers:
            raise ValueError(f"Unknown stream event: {event}")
        if self._closed:
            logger.debug("Dropping event on closed stream", mode=self.mode, stream_event=event)
            return

        if event in (END, ERROR):
            self._closed = True

        for handler in self._handlers[event]:
            if event == END:
                handler()
            else:
                handler(payload)

    def start(self) -> asyncio.Task:
        """
        Schedule the producer on the running loop.

        Raises:
            RuntimeError: If the stream was already started
        """
        if self._task is not None:
            raise RuntimeError("Result stream already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def _run(self) -> None:
        try:
            await self._producer(self)
        except Exception as e:
            logger.warning("Result stream failed", mode=self.mode, error=str(e))
            self.emit(ERROR, e)
        else:
            if not self._closed:
                self.emit(END)


async def collect(stream: ResultStream) -> list[Any]:
    """
    Materialize a stream.

    Subscribes to all three channels, starts the stream and waits for it to
    settle. The outcome is settled exactly once: the full item list on
    ``end``, or the first error raised on ``error``. Items are kept in
    emission order.

    Args:
        stream: A stream that has not been started

    Returns:
        Every item emitted before ``end``

    Raises:
        Exception: Whatever the stream emitted on its ``error`` channel
    """
    loop = asyncio.get_running_loop()
    outcome: asyncio.Future = loop.create_future()
    items: list[Any] = []

    def on_data(item: Any) -> None:
        if not outcome.done():
            items.append(item)

    def on_end() -> None:
        if not outcome.done():
            outcome.set_result(items)

    def on_error(error: BaseException) -> None:
        if not outcome.done():
            items.clear()
            outcome.set_exception(error)

    stream.on(DATA, on_data).on(END, on_end).on(ERROR, on_error)
    stream.start()
    return await outcome
