"""Tests for warble.docs.fragments — file-backed and generated fragments."""

import asyncio
import copy

import pytest

from warble.docs.fragments import (
    BufferSink,
    FileFragment,
    Fragment,
    GeneratedFragment,
    as_fragment,
    fragment_from_callable,
    fragment_from_file,
)
from warble.errors import FragmentError


async def _render(fragment: Fragment) -> bytes:
    sink = BufferSink()
    await fragment(sink)
    return sink.getvalue()


class TestBufferSink:
    async def test_collects_writes_in_order(self) -> None:
        sink = BufferSink()
        await sink.write(b"a")
        await sink.write(b"bc")
        assert sink.getvalue() == b"abc"

    def test_empty(self) -> None:
        assert BufferSink().getvalue() == b""


class TestFileFragment:
    async def test_streams_file_verbatim(self, tmp_path) -> None:
        doc = tmp_path / "pets.json"
        doc.write_bytes(b'"/pets": {"get": {}}\n')

        assert await _render(fragment_from_file(doc)) == b'"/pets": {"get": {}}\n'

    async def test_rereads_file_on_every_call(self, tmp_path) -> None:
        doc = tmp_path / "pets.json"
        doc.write_text("one")
        fragment = FileFragment(doc)

        assert await _render(fragment) == b"one"
        doc.write_text("two")
        assert await _render(fragment) == b"two"

    async def test_missing_file_raises_fragment_error(self, tmp_path) -> None:
        missing = tmp_path / "missing.json"
        fragment = FileFragment(missing)

        with pytest.raises(FragmentError) as exc_info:
            await _render(fragment)

        assert exc_info.value.path == str(missing)
        assert isinstance(exc_info.value.__cause__, OSError)

    async def test_directory_raises_fragment_error(self, tmp_path) -> None:
        with pytest.raises(FragmentError):
            await _render(FileFragment(tmp_path))

    def test_path_is_normalized_to_str(self, tmp_path) -> None:
        assert FileFragment(tmp_path / "a.json").path == str(tmp_path / "a.json")


class TestGeneratedFragment:
    async def test_sync_function_returns_its_text(self) -> None:
        written: list[bytes] = []

        class _Sink:
            async def write(self, data: bytes) -> None:
                written.append(data)

        def gen(sink) -> str:
            return '"/health": {}'

        await GeneratedFragment(gen)(_Sink())
        assert written == [b'"/health": {}']

    async def test_sync_function_writing_to_sink_raises(self) -> None:
        sink = BufferSink()

        def gen(sink) -> None:
            sink.write(b'"/a": {}')

        with pytest.raises(TypeError, match="synchronous function"):
            await GeneratedFragment(gen)(sink)
        assert sink.getvalue() == b""

    async def test_async_function_writing_to_sink(self) -> None:
        async def gen(sink) -> None:
            await sink.write(b'"/a": {},')
            await asyncio.sleep(0)
            await sink.write(b'"/b": {}')

        assert await _render(fragment_from_callable(gen)) == b'"/a": {},"/b": {}'

    async def test_returned_bytes_are_written(self) -> None:
        assert await _render(GeneratedFragment(lambda sink: b"raw")) == b"raw"

    async def test_output_may_change_between_calls(self) -> None:
        counter = {"n": 0}

        def gen(sink) -> str:
            counter["n"] += 1
            return str(counter["n"])

        fragment = GeneratedFragment(gen)
        assert await _render(fragment) == b"1"
        assert await _render(fragment) == b"2"

    async def test_errors_propagate(self) -> None:
        def gen(sink) -> str:
            raise ValueError("no state yet")

        with pytest.raises(ValueError, match="no state yet"):
            await _render(GeneratedFragment(gen))


class TestCopying:
    def test_file_fragment_cannot_be_copied(self, tmp_path) -> None:
        fragment = FileFragment(tmp_path / "a.json")
        with pytest.raises(TypeError):
            copy.copy(fragment)
        with pytest.raises(TypeError):
            copy.deepcopy(fragment)

    def test_generated_fragment_cannot_be_copied(self) -> None:
        with pytest.raises(TypeError):
            copy.copy(GeneratedFragment(lambda sink: ""))


class TestAsFragment:
    def test_passes_fragments_through(self, tmp_path) -> None:
        fragment = FileFragment(tmp_path / "a.json")
        assert as_fragment(fragment) is fragment

    def test_wraps_callables(self) -> None:
        def gen(sink) -> str:
            return ""

        wrapped = as_fragment(gen)
        assert isinstance(wrapped, GeneratedFragment)
        assert wrapped.func is gen

    def test_rejects_non_callables(self) -> None:
        with pytest.raises(TypeError, match="str"):
            as_fragment("pets.json")  # type: ignore[arg-type]
