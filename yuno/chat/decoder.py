"""Incremental decoder for the chat endpoint's SSE stream.

Turns raw response body chunks into content fragments. Chunk boundaries are
arbitrary: a line may be split across several reads, several lines may arrive
in one read, and a multi-byte UTF-8 character may straddle two chunks.

Each meaningful line looks like::

    data: {"choices": [{"delta": {"content": "Hi"}}]}

and the stream ends with ``data: [DONE]``.
"""

import codecs
import json
import logging
from collections.abc import AsyncGenerator, AsyncIterable
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class _Terminated(Exception):
    """Internal signal raised when the terminator line is reached."""


def _extract_content(payload: Any) -> str | None:
    """Pull ``choices[0].delta.content`` out of a parsed frame."""
    try:
        content = payload["choices"][0]["delta"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(content, str) and content:
        return content
    return None


class StreamDecoder:
    """Stateful line decoder for one streamed response.

    Feed it byte chunks as they arrive and call ``finish`` once the transport
    signals end-of-stream. ``content`` holds the concatenation of every fragment
    emitted so far.

    A line that fails JSON parsing while chunks are still arriving is treated as
    split prematurely: it is pushed back onto the front of the buffer and line
    extraction pauses until the next chunk.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.content = ""
        self.done = False

    def feed(self, chunk: bytes) -> list[str]:
        """Process one chunk and return the fragments it completed.

        Args:
            chunk: Raw bytes read from the response body.

        Returns:
            Content fragments in arrival order (possibly empty).
        """
        if self.done:
            return []

        self._buffer += self._decoder.decode(chunk)
        fragments: list[str] = []

        while (newline_index := self._buffer.find("\n")) != -1:
            line = self._buffer[:newline_index]
            self._buffer = self._buffer[newline_index + 1 :]

            try:
                fragment = self._parse_line(line)
            except _Terminated:
                self._terminate()
                break
            except (ValueError, RecursionError):
                # Incomplete frame, wait for more data
                self._buffer = line + "\n" + self._buffer
                break

            if fragment:
                fragments.append(fragment)

        return fragments

    def finish(self) -> list[str]:
        """Flush whatever is left once no more chunks will arrive.

        Remaining lines go through the same rules as ``feed`` but are not pushed
        back; lines that still fail to parse are dropped.

        Returns:
            Fragments recovered from the remaining buffer.
        """
        if self.done:
            return []

        self._buffer += self._decoder.decode(b"", final=True)
        remaining, self._buffer = self._buffer, ""
        self.done = True

        fragments: list[str] = []
        if not remaining.strip():
            return fragments

        for line in remaining.split("\n"):
            try:
                fragment = self._parse_line(line)
            except _Terminated:
                break
            except (ValueError, RecursionError):
                logger.debug(f"Dropping malformed frame at end of stream: {line!r}")
                continue
            if fragment:
                fragments.append(fragment)

        return fragments

    def _terminate(self) -> None:
        self.done = True
        self._buffer = ""

    def _parse_line(self, line: str) -> str | None:
        """Apply the per-line rules and return the fragment, if any.

        Raises:
            _Terminated: On the ``[DONE]`` sentinel.
            ValueError: If the payload is not valid JSON.
            RecursionError: If the payload nests too deeply to parse.
        """
        if line.endswith("\r"):
            line = line[:-1]

        if line.startswith(":") or not line.strip():
            return None
        if not line.startswith(DATA_PREFIX):
            return None

        data = line[len(DATA_PREFIX) :].strip()
        if data == DONE_SENTINEL:
            raise _Terminated

        fragment = _extract_content(json.loads(data))
        if fragment:
            self.content += fragment
        return fragment


async def iter_fragments(
    chunks: AsyncIterable[bytes],
    decoder: StreamDecoder | None = None,
) -> AsyncGenerator[str]:
    """Decode an async byte stream into content fragments.

    Stops pulling chunks as soon as the terminator is seen. The remaining buffer
    is flushed once the source is exhausted.

    Args:
        chunks: Async iterable of raw body chunks, e.g. ``response.aiter_bytes()``.
        decoder: Optional decoder instance, useful to read ``content`` afterwards.

    Yields:
        Content fragments in arrival order.
    """
    decoder = decoder or StreamDecoder()

    async for chunk in chunks:
        for fragment in decoder.feed(chunk):
            yield fragment
        if decoder.done:
            return

    for fragment in decoder.finish():
        yield fragment
