"""Documentation fragments — one-shot async writers of raw bytes.

A fragment is any async callable ``await fragment(sink)`` that writes
its bytes into an output sink. The V2 registry keeps fragments in
registration order and replays every one of them on each render, so
a fragment must be safe to call repeatedly and from concurrent renders.

Two concrete variants cover the common sources:

- ``FileFragment`` reads a file and streams it verbatim.
- ``GeneratedFragment`` wraps caller logic, typically computed from
  live server state, and may produce different bytes on every call.

Fragments are owned by the registry that holds them and refuse to be
copied.
"""

import inspect
import os
from collections.abc import Callable, Coroutine
from typing import Any, Protocol, runtime_checkable

import anyio

from warble.errors import FragmentError
from warble.http.response import OutputSink


@runtime_checkable
class Fragment(Protocol):
    """Protocol for documentation fragments."""

    async def __call__(self, sink: OutputSink) -> None: ...


class BufferSink:
    """Output sink that collects everything written into memory."""

    __slots__ = ("_chunks",)

    def __init__(self) -> None:
        self._chunks: list[bytes] = []

    async def write(self, data: bytes) -> None:
        self._chunks.append(data)

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


class _Uncopyable:
    """Mixin for fragments that may own unique resources."""

    __slots__ = ()

    def __copy__(self) -> Any:
        msg = f"{type(self).__name__} cannot be copied; register a new fragment instead."
        raise TypeError(msg)

    def __deepcopy__(self, memo: dict[int, Any]) -> Any:
        return self.__copy__()


class FileFragment(_Uncopyable):
    """Streams the full contents of a file.

    The file is read on every call, off the event loop, so edits on
    disk show up in the next render. A missing or unreadable file
    raises ``FragmentError``.
    """

    __slots__ = ("path",)

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)

    async def __call__(self, sink: OutputSink) -> None:
        try:
            data = await anyio.Path(self.path).read_bytes()
        except OSError as exc:
            raise FragmentError(self.path, exc.strerror or str(exc)) from exc
        await sink.write(data)

    def __repr__(self) -> str:
        return f"FileFragment({self.path!r})"


class _WriteTracker:
    """Sink wrapper remembering the write calls a function made."""

    __slots__ = ("_inner", "pending")

    def __init__(self, inner: OutputSink) -> None:
        self._inner = inner
        self.pending: list[Coroutine[Any, Any, None]] = []

    def write(self, data: bytes) -> Coroutine[Any, Any, None]:
        call = self._inner.write(data)
        self.pending.append(call)
        return call


class GeneratedFragment(_Uncopyable):
    """Runs caller-supplied logic to produce a fragment.

    ``func`` receives the sink. An ``async def`` function may await
    ``sink.write()`` as often as it likes, or return its bytes. A plain
    ``def`` function cannot await, so it must return ``str``/``bytes``;
    calling ``sink.write()`` from one raises ``TypeError`` instead of
    dropping the output.
    """

    __slots__ = ("func",)

    def __init__(self, func: Callable[[OutputSink], Any]) -> None:
        self.func = func

    async def __call__(self, sink: OutputSink) -> None:
        tracker = _WriteTracker(sink)
        result = self.func(tracker)
        if inspect.isawaitable(result):
            result = await result
        elif tracker.pending:
            for call in tracker.pending:
                call.close()
            msg = (
                f"{self!r} wrote to the sink from a synchronous function. "
                "Return the bytes instead, or make the function async."
            )
            raise TypeError(msg)
        if isinstance(result, str):
            result = result.encode("utf-8")
        if result:
            await sink.write(result)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"GeneratedFragment({name})"



def fragment_from_file(path: str | os.PathLike[str]) -> FileFragment:
    """Create a fragment that streams *path*."""
    return FileFragment(path)


def fragment_from_callable(func: Callable[[OutputSink], Any]) -> GeneratedFragment:
    """Create a fragment from generation logic."""
    return GeneratedFragment(func)


def as_fragment(value: Fragment | Callable[[OutputSink], Any]) -> Fragment:
    """Return *value* as a fragment, wrapping plain callables."""
    if isinstance(value, (FileFragment, GeneratedFragment)):
        return value
    if not callable(value):
        msg = f"Expected a fragment or callable, got {type(value).__name__}."
        raise TypeError(msg)
    return GeneratedFragment(value)
