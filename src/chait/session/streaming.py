"""Streaming bridge.

Turns the provider's push-style async chunk source into discrete
"receive next chunk" steps. The session controller issues one ReceiveNext
command per step and only issues the next one after the previous result
has been applied, so at most one receive is ever outstanding and the
producer is throttled to the UI's pace.

Cancelling a turn is explicit: the controller drops the handle and asks
the host to ``aclose()`` it, which closes the provider's generator and its
HTTP response instead of leaving the producer running unobserved.
"""

import asyncio
import itertools
from collections.abc import AsyncIterator
from dataclasses import dataclass

_turn_ids = itertools.count(1)


@dataclass(frozen=True)
class StreamChunk:
    """Result of one receive: a content delta, a terminal error, or done."""

    content: str = ""
    done: bool = False
    error: Exception | None = None


class StreamHandle:
    """Receive end of one streaming turn."""

    def __init__(self, source: AsyncIterator[str]) -> None:
        self._source = source
        self._pending = False
        self._finished = False
        self._closed = False
        self._receiver: asyncio.Task | None = None
        self.turn_id = next(_turn_ids)

    async def receive(self) -> StreamChunk:
        """Await the next chunk.

        Any failure from the source becomes a terminal error chunk rather
        than an exception. Malformed deltas never reach here: the provider
        skips them before yielding.

        Raises:
            RuntimeError: If another receive on this handle is still pending
        """
        if self._pending:
            raise RuntimeError("a receive is already outstanding on this stream")
        if self._finished or self._closed:
            return StreamChunk(done=True)

        self._pending = True
        self._receiver = asyncio.current_task()
        try:
            content = await anext(self._source)
            return StreamChunk(content=content)
        except StopAsyncIteration:
            self._finished = True
            return StreamChunk(done=True)
        except Exception as e:
            self._finished = True
            return StreamChunk(error=e)
        finally:
            self._pending = False
            self._receiver = None

    async def aclose(self) -> None:
        """Stop the producer; safe to call more than once.

        A receive still waiting on the source is cancelled first, since an
        async generator cannot be closed while it is running.
        """
        if self._closed:
            return
        self._closed = True
        receiver = self._receiver
        if receiver is not None and receiver is not asyncio.current_task():
            receiver.cancel()
            await asyncio.wait({receiver})
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

    def __repr__(self) -> str:
        return f"StreamHandle(turn={self.turn_id})"
