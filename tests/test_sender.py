"""Tests for warble.server.sender response emission rules."""

import pytest

from warble.http.response import Response, StreamingResponse
from warble.server.sender import send_response, send_streaming_response


def _recorder() -> tuple[list[dict], object]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    return messages, send


class TestSendResponse:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        messages, send = _recorder()

        await send_response(Response("unexpected-body").with_status(204), send)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_200_preserves_body(self) -> None:
        messages, send = _recorder()

        await send_response(Response("ok"), send)

        assert messages[0]["type"] == "http.response.start"
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert messages[1]["body"] == b"ok"

    async def test_content_type_and_extra_headers(self) -> None:
        messages, send = _recorder()

        response = Response(b"{}", content_type="application/json").with_header(
            "Cache-Control", "no-cache"
        )
        await send_response(response, send)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"cache-control"] == b"no-cache"


class TestSendStreamingResponse:
    async def test_each_write_becomes_a_body_message(self) -> None:
        messages, send = _recorder()

        async def writer(sink) -> None:
            await sink.write(b"{")
            await sink.write(b"")
            await sink.write(b"}")

        await send_streaming_response(StreamingResponse(writer=writer), send)

        start, *bodies = messages
        assert start["type"] == "http.response.start"
        assert dict(start["headers"])[b"transfer-encoding"] == b"chunked"
        assert [m["body"] for m in bodies] == [b"{", b"}", b""]
        assert [m["more_body"] for m in bodies] == [True, True, False]

    async def test_writer_failure_propagates_without_closing(self) -> None:
        messages, send = _recorder()

        async def writer(sink) -> None:
            await sink.write(b'{"paths": {')
            raise OSError("disk gone")

        with pytest.raises(OSError, match="disk gone"):
            await send_streaming_response(StreamingResponse(writer=writer), send)

        bodies = [m for m in messages if m["type"] == "http.response.body"]
        assert [m["body"] for m in bodies] == [b'{"paths": {']
        assert all(m["more_body"] for m in bodies)

    async def test_writer_failure_is_logged(self, caplog) -> None:
        _, send = _recorder()

        async def writer(sink) -> None:
            await sink.write(b"abc")
            raise RuntimeError("boom")

        with caplog.at_level("ERROR", logger="warble.server"), pytest.raises(RuntimeError):
            await send_streaming_response(StreamingResponse(writer=writer), send)

        assert "Stream aborted after 3 bytes" in caplog.text
