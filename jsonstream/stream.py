"""A buffered writer with JSON specific write methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from .numbers import format_float, format_float_lossy, format_int
from .strings import quote_string, quote_string_html

__all__ = ["StreamConfig", "Stream"]


@dataclass(frozen=True)
class StreamConfig:
    """Settings shared by streams; indention_step > 0 turns on pretty output."""

    indention_step: int = 0


def _to_bytes(text: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8", "surrogatepass")
    return bytes(text)


class Stream:
    """Collects JSON text in a buffer and optionally passes it to a writer."""

    def __init__(
        self,
        config: Optional[StreamConfig] = None,
        out: Optional[BinaryIO] = None,
        buf_size: int = 0,
    ) -> None:
        self.config = config if config is not None else StreamConfig()
        self.out = out
        self.attachment: object = None
        self._buf = bytearray()
        self._capacity = max(buf_size, 0)
        self._indention = 0

    def _append(self, data: bytes) -> None:
        self._buf += data
        if len(self._buf) > self._capacity:
            self._capacity = max(len(self._buf), 2 * self._capacity)

    def reset(self, out: Optional[BinaryIO]) -> None:
        """Reuse the stream with a new writer, dropping buffered data."""
        self.out = out
        self._buf.clear()

    def available(self) -> int:
        """Bytes still free in the buffer before it must grow."""
        return self._capacity - len(self._buf)

    def buffered(self) -> int:
        """Bytes written into the buffer and not yet flushed."""
        return len(self._buf)

    def buffer(self) -> bytes:
        """The buffered bytes."""
        return bytes(self._buf)

    def set_buffer(self, buf: Union[bytes, bytearray]) -> None:
        """Replace the buffer contents."""
        self._buf = bytearray(buf)
        self._capacity = len(self._buf)

    def write(self, data: Union[bytes, bytearray]) -> int:
        """Append data; with a writer, hand the whole buffer to it.

        Returns the number of bytes the writer accepted, or len(data)
        when there is no writer.
        """
        self._append(bytes(data))
        if self.out is None:
            return len(data)
        written = self.out.write(bytes(self._buf))
        if written is None:
            written = len(self._buf)
        del self._buf[:written]
        self._capacity -= written
        return written

    def flush(self) -> None:
        """Write buffered data to the writer, if there is one."""
        if self.out is None:
            return
        self.out.write(bytes(self._buf))
        self._buf.clear()

    def write_raw(self, text: Union[str, bytes]) -> None:
        """Append text as is, without quoting."""
        self._append(_to_bytes(text))

    def write_nil(self) -> None:
        self._append(b"null")

    def write_true(self) -> None:
        self._append(b"true")

    def write_false(self) -> None:
        self._append(b"false")

    def write_bool(self, value: bool) -> None:
        if value:
            self.write_true()
        else:
            self.write_false()

    def _write_indention(self, delta: int) -> None:
        if self._indention == 0:
            return
        self._append(b"\n" + b" " * (self._indention - delta))

    def write_object_start(self) -> None:
        self._indention += self.config.indention_step
        self._append(b"{")
        self._write_indention(0)

    def write_object_field(self, field: str) -> None:
        self.write_string(field)
        self._append(b": " if self._indention > 0 else b":")

    def write_object_end(self) -> None:
        self._write_indention(self.config.indention_step)
        self._indention -= self.config.indention_step
        self._append(b"}")

    def write_empty_object(self) -> None:
        self._append(b"{}")

    def write_more(self) -> None:
        self._append(b",")
        self._write_indention(0)

    def write_array_start(self) -> None:
        self._indention += self.config.indention_step
        self._append(b"[")
        self._write_indention(0)

    def write_empty_array(self) -> None:
        self._append(b"[]")

    def write_array_end(self) -> None:
        self._write_indention(self.config.indention_step)
        self._indention -= self.config.indention_step
        self._append(b"]")

    def _write_integer(self, value: int, bits: int, signed: bool) -> None:
        self._append(format_int(value, bits, signed).encode("ascii"))

    def write_int8(self, value: int) -> None:
        self._write_integer(value, 8, True)

    def write_int16(self, value: int) -> None:
        self._write_integer(value, 16, True)

    def write_int32(self, value: int) -> None:
        self._write_integer(value, 32, True)

    def write_int64(self, value: int) -> None:
        self._write_integer(value, 64, True)

    def write_int(self, value: int) -> None:
        self._write_integer(value, 64, True)

    def write_uint8(self, value: int) -> None:
        self._write_integer(value, 8, False)

    def write_uint16(self, value: int) -> None:
        self._write_integer(value, 16, False)

    def write_uint32(self, value: int) -> None:
        self._write_integer(value, 32, False)

    def write_uint64(self, value: int) -> None:
        self._write_integer(value, 64, False)

    def write_uint(self, value: int) -> None:
        self._write_integer(value, 64, False)

    def write_float32(self, value: float) -> None:
        self._append(format_float(value, 32).encode("ascii"))

    def write_float64(self, value: float) -> None:
        self._append(format_float(value, 64).encode("ascii"))

    def write_float32_lossy(self, value: float) -> None:
        self._append(format_float_lossy(value, 32).encode("ascii"))

    def write_float64_lossy(self, value: float) -> None:
        self._append(format_float_lossy(value, 64).encode("ascii"))

    def write_string(self, text: str) -> None:
        self._append(_to_bytes(quote_string(text)))

    def write_string_html_escaped(self, text: str) -> None:
        self._append(_to_bytes(quote_string_html(text)))