"""Read capability over the compiler's file system backends.

A compiler may expose an output file system (in-memory or on disk, written
during emit) and an input file system. The output one is preferred since it
holds what was actually emitted.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from bundle_compressed.errors import FileSystemUnavailableError

if TYPE_CHECKING:
    from bundle_compressed.models import Compiler

ReadFile = Callable[[str], Awaitable[Any]]

# Lookup order: first backend exposing a callable read_file wins
BACKEND_PREFERENCE: tuple[str, ...] = ("output_file_system", "input_file_system")


def _backend_reader(file_system: object | None) -> Callable[..., Any] | None:
    if file_system is None:
        return None
    read_file = getattr(file_system, "read_file", None)
    if callable(read_file):
        return read_file
    return None


def resolve_read_file(compiler: Compiler) -> ReadFile:
    """Resolve a single async read function for a compiler.

    Coroutine functions are returned as-is. Synchronous readers are run in a
    worker thread and awaited, so reads stay sequential for the caller.

    Args:
        compiler: Compiler owning the file system backends.

    Returns:
        Async function mapping a path to the raw file content.

    Example:
        >>> read_file = resolve_read_file(compilation.compiler)
        >>> content = await read_file("/dist/main.js")
    """
    for attribute in BACKEND_PREFERENCE:
        reader = _backend_reader(getattr(compiler, attribute, None))
        if reader is None:
            continue
        if inspect.iscoroutinefunction(reader):
            return reader
        return _threaded(reader)

    async def unavailable(path: str) -> Any:
        raise FileSystemUnavailableError()

    return unavailable


def _threaded(reader: Callable[[str], Any]) -> ReadFile:
    async def read_file(path: str) -> Any:
        content = await asyncio.to_thread(reader, path)
        # Wrapped or mocked coroutine functions hide behind a plain callable
        if inspect.isawaitable(content):
            content = await content
        return content

    return read_file
