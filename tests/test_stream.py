import io
import json
import math

import pytest

from jsonstream.numbers import UnsupportedValueError
from jsonstream.stream import Stream, StreamConfig


class RecordingWriter:
    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))
        return len(data)


def test_write_raw_should_grow_buffer_bytewise():
    stream = Stream(StreamConfig(), None, 1)
    stream.write_raw("1")
    assert stream.buffer() == b"1"
    assert stream.buffered() == 1
    stream.write_raw("2")
    assert stream.buffer() == b"12"
    assert stream.buffered() == 2
    stream.write_raw("345")
    assert stream.buffer() == b"12345"


def test_write_bytes_should_grow_buffer():
    stream = Stream(StreamConfig(), None, 1)
    assert stream.write(b"12") == 2
    assert stream.buffer() == b"12"
    assert stream.buffered() == 2
    stream.write(b"34567")
    assert stream.buffer() == b"1234567"
    assert stream.buffered() == 7


def test_write_indention_should_grow_buffer():
    stream = Stream(StreamConfig(indention_step=2), None, 1)
    stream.write_array_start()
    stream.write_int(1)
    stream.write_more()
    stream.write_int(2)
    stream.write_more()
    stream.write_int(3)
    stream.write_array_end()
    assert stream.buffer() == b"[\n  1,\n  2,\n  3\n]"


def test_write_raw_should_grow_buffer():
    stream = Stream(StreamConfig(), None, 1)
    stream.write_raw("123")
    assert stream.buffer() == b"123"


def test_write_string_should_grow_buffer():
    stream = Stream(StreamConfig(), None, 0)
    stream.write_string("123")
    assert stream.buffer() == b'"123"'


def test_flush_buffer_should_stop_grow_buffer():
    writer = RecordingWriter()
    stream = Stream(StreamConfig(), writer, 512)
    stream.write_array_start()
    count = 10000
    for _ in range(count):
        stream.write_int(0)
        stream.write_more()
        stream.flush()
        assert stream.available() == 512
    stream.write_int(0)
    stream.write_array_end()
    stream.flush()
    assert stream.available() == 512
    assert json.loads(b"".join(writer.chunks)) == [0] * (count + 1)


def test_write_with_writer_hands_over_buffer():
    out = io.BytesIO()
    stream = Stream(StreamConfig(), out, 16)
    assert stream.write(b"12") == 2
    assert out.getvalue() == b"12"
    assert stream.buffered() == 0


def test_flush_without_writer_keeps_buffer():
    stream = Stream()
    stream.write_nil()
    stream.flush()
    assert stream.buffer() == b"null"


def test_reset_clears_buffer_and_sets_writer():
    stream = Stream()
    stream.write_raw("abc")
    out = io.BytesIO()
    stream.reset(out)
    stream.write_true()
    stream.flush()
    assert out.getvalue() == b"true"
    assert stream.buffered() == 0


def test_set_buffer_appends_after_existing():
    stream = Stream()
    stream.set_buffer(b"[")
    stream.write_empty_array()
    stream.write_raw("]")
    assert json.loads(stream.buffer()) == [[]]


def test_literals():
    stream = Stream()
    stream.write_bool(True)
    stream.write_more()
    stream.write_bool(False)
    stream.write_more()
    stream.write_nil()
    stream.write_more()
    stream.write_empty_object()
    assert stream.buffer() == b"true,false,null,{}"


def test_compact_object():
    stream = Stream()
    stream.write_object_start()
    stream.write_object_field("a")
    stream.write_int32(1)
    stream.write_more()
    stream.write_object_field("b")
    stream.write_string("x")
    stream.write_object_end()
    assert stream.buffer() == b'{"a":1,"b":"x"}'


def test_indented_object():
    stream = Stream(StreamConfig(indention_step=2))
    stream.write_object_start()
    stream.write_object_field("a")
    stream.write_int(1)
    stream.write_object_end()
    assert stream.buffer() == b'{\n  "a": 1\n}'


def test_integer_writers():
    stream = Stream()
    stream.write_uint(123)
    assert stream.buffer() == b"123"
    stream = Stream()
    writers = [
        (stream.write_int8, -128),
        (stream.write_int16, -32768),
        (stream.write_int64, -(2**63)),
        (stream.write_uint8, 255),
        (stream.write_uint16, 65535),
        (stream.write_uint32, 2**32 - 1),
        (stream.write_uint64, 2**64 - 1),
    ]
    stream.write_array_start()
    for index, (write, value) in enumerate(writers):
        if index:
            stream.write_more()
        write(value)
    stream.write_array_end()
    assert json.loads(stream.buffer()) == [value for _, value in writers]


def test_integer_out_of_range_raises():
    stream = Stream()
    with pytest.raises(OverflowError):
        stream.write_uint8(256)
    with pytest.raises(OverflowError):
        stream.write_int32(2**31)


def test_float_writers():
    stream = Stream()
    stream.write_array_start()
    stream.write_float64(12.3)
    stream.write_more()
    stream.write_float32(1.5)
    stream.write_more()
    stream.write_float64_lossy(0.25)
    stream.write_more()
    stream.write_float32_lossy(-2.5)
    stream.write_array_end()
    assert json.loads(stream.buffer()) == [12.3, 1.5, 0.25, -2.5]


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_float_non_finite_raises(value):
    stream = Stream()
    with pytest.raises(UnsupportedValueError):
        stream.write_float64(value)
    with pytest.raises(UnsupportedValueError):
        stream.write_float32_lossy(value)
    assert stream.buffered() == 0


def test_html_escaped_string():
    stream = Stream()
    stream.write_string_html_escaped("<b>")
    data = stream.buffer()
    assert b"<" not in data
    assert json.loads(data) == "<b>"


def test_unicode_string_is_utf8():
    stream = Stream()
    stream.write_string("中文")
    assert stream.buffer() == '"中文"'.encode("utf-8")