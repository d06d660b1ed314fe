import asyncio
import random

from companion.streaming import StreamDecoder, collect_text, iter_deltas

from tests.streams import sse


async def _chunks(parts):
    for part in parts:
        yield part


def _decode(parts):
    return asyncio.run(collect_text(_chunks(parts)))


STREAM = sse("Hello", " there ", "💛 ", "ça va?")
EXPECTED = "Hello there 💛 ça va?"


def test_single_chunk():
    assert _decode([STREAM]) == EXPECTED


def test_every_two_way_split_gives_same_text():
    for i in range(len(STREAM) + 1):
        assert _decode([STREAM[:i], STREAM[i:]]) == EXPECTED, i


def test_byte_by_byte():
    assert _decode([STREAM[i : i + 1] for i in range(len(STREAM))]) == EXPECTED


def test_random_splits():
    rng = random.Random(7)
    for _ in range(50):
        cuts = sorted(rng.sample(range(1, len(STREAM)), 6))
        parts = [STREAM[a:b] for a, b in zip([0] + cuts, cuts + [len(STREAM)])]
        assert _decode(parts) == EXPECTED


def test_partial_line_is_held_back():
    decoder = StreamDecoder()
    record = sse("abc", done=False)
    assert decoder.feed(record[:10]) == []
    assert decoder.feed(record[10:]) == ["abc"]


def test_invalid_record_is_skipped_without_losing_text():
    decoder = StreamDecoder()
    decoder.feed(sse("first ", done=False))
    assert decoder.feed(b'data: {"choices": [{"delta": {"content": "tru\n') == []
    decoder.feed(sse("second", done=False))
    assert decoder.text == "first second"


def test_records_without_delta_text_are_ignored():
    body = (
        b'data: {"choices": [{"delta": {"role": "assistant"}}]}\n'
        b'data: {"choices": []}\n'
        b"data: [1, 2]\n"
        b'data: {"choices": [{"delta": {"content": 5}}]}\n'
        b": keep-alive\n"
        b"event: ping\n"
        b"\n"
    ) + sse("ok")
    assert _decode([body]) == "ok"


def test_done_ends_stream_and_later_records_are_ignored():
    body = sse("one") + sse("two", done=False)
    decoder = StreamDecoder()
    assert decoder.feed(body) == ["one"]
    assert decoder.done
    assert decoder.feed(sse("three")) == []


def test_eof_without_done_is_normal():
    assert _decode([sse("a", "b", done=False)]) == "ab"


def test_crlf_lines():
    body = sse("x", "y").replace(b"\n", b"\r\n")
    assert _decode([body]) == "xy"


def test_iter_deltas_stops_at_done():
    async def run():
        seen = []
        async for delta in iter_deltas(_chunks([sse("a"), sse("never")])):
            seen.append(delta)
        return seen

    assert asyncio.run(run()) == ["a"]
