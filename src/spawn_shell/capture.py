"""Accumulate a child's output stream into a single value."""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any

from spawn_shell.errors import StreamError

CHUNK_SIZE = 64 * 1024


def normalize_newlines(text: str) -> str:
    """Rewrite CRLF and bare CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


async def iter_chunks(reader: asyncio.StreamReader, name: str) -> AsyncIterator[bytes]:
    """Yield raw chunks from reader until EOF. Read failures become StreamError."""
    while True:
        try:
            chunk = await reader.read(CHUNK_SIZE)
        except Exception as e:
            raise StreamError(name, str(e)) from e
        if not chunk:
            return
        yield chunk


def _decode(data: bytes, normalize: bool | Callable[[str], str]) -> str:
    text = data.decode("utf-8", errors="replace")
    if callable(normalize):
        return normalize(text)
    if normalize:
        return normalize_newlines(text)
    return text


async def capture(
    reader: asyncio.StreamReader,
    name: str,
    transform: Callable[[bytes], Any] | None = None,
    normalize: bool | Callable[[str], str] = True,
) -> Any:
    """Read reader to EOF and reduce the bytes to the captured value.

    With a transform, returns transform(data). Otherwise returns the decoded
    text, normalized according to ``normalize``.
    """
    chunks = []
    async for chunk in iter_chunks(reader, name):
        chunks.append(chunk)
    data = b"".join(chunks)

    if callable(transform):
        return transform(data)
    return _decode(data, normalize)
