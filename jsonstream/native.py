"""Encoders for scalar values: strings, booleans, numbers and byte strings."""

from __future__ import annotations

import base64
from typing import Callable, Optional, Union

from .stream import Stream

__all__ = [
    "StringCodec",
    "BoolCodec",
    "IntCodec",
    "FloatCodec",
    "Base64Codec",
    "encoder_of_native",
]

_INT_WRITERS: dict[tuple[int, bool], Callable[[Stream, int], None]] = {
    (8, True): Stream.write_int8,
    (16, True): Stream.write_int16,
    (32, True): Stream.write_int32,
    (64, True): Stream.write_int64,
    (8, False): Stream.write_uint8,
    (16, False): Stream.write_uint16,
    (32, False): Stream.write_uint32,
    (64, False): Stream.write_uint64,
}

_FLOAT_WRITERS: dict[int, Callable[[Stream, float], None]] = {
    32: Stream.write_float32,
    64: Stream.write_float64,
}


class StringCodec:
    """Writes a str as a quoted JSON string."""

    def encode(self, value: str, stream: Stream) -> None:
        stream.write_string(value)

    def is_empty(self, value: str) -> bool:
        return value == ""


class BoolCodec:
    """Writes true or false."""

    def encode(self, value: bool, stream: Stream) -> None:
        stream.write_bool(value)

    def is_empty(self, value: bool) -> bool:
        return not value


class IntCodec:
    """Writes an integer of a fixed width; out-of-range values raise OverflowError."""

    def __init__(self, bits: int = 64, signed: bool = True) -> None:
        key = (bits, bool(signed))
        if key not in _INT_WRITERS:
            raise ValueError(f"unsupported bit width: {bits}")
        self.bits = bits
        self.signed = bool(signed)
        self._writer = _INT_WRITERS[key]

    def encode(self, value: int, stream: Stream) -> None:
        self._writer(stream, value)

    def is_empty(self, value: int) -> bool:
        return value == 0

    def __repr__(self) -> str:
        return f"IntCodec(bits={self.bits}, signed={self.signed})"


class FloatCodec:
    """Writes a 32- or 64-bit float in its shortest form."""

    def __init__(self, bits: int = 64) -> None:
        if bits not in _FLOAT_WRITERS:
            raise ValueError(f"unsupported float width: {bits}")
        self.bits = bits
        self._writer = _FLOAT_WRITERS[bits]

    def encode(self, value: float, stream: Stream) -> None:
        self._writer(stream, value)

    def is_empty(self, value: float) -> bool:
        return value == 0

    def __repr__(self) -> str:
        return f"FloatCodec(bits={self.bits})"


class Base64Codec:
    """Writes a byte string as standard base64 text in quotes; None as null."""

    def encode(self, value: Optional[Union[bytes, bytearray]], stream: Stream) -> None:
        if value is None:
            stream.write_nil()
            return
        stream.write_raw(b'"' + base64.b64encode(bytes(value)) + b'"')

    def is_empty(self, value: Optional[Union[bytes, bytearray]]) -> bool:
        return not value


_NATIVE_FACTORIES: dict[str, Callable[[], object]] = {
    "string": StringCodec,
    "bool": BoolCodec,
    "int": lambda: IntCodec(64, True),
    "int8": lambda: IntCodec(8, True),
    "int16": lambda: IntCodec(16, True),
    "int32": lambda: IntCodec(32, True),
    "int64": lambda: IntCodec(64, True),
    "uint": lambda: IntCodec(64, False),
    "uint8": lambda: IntCodec(8, False),
    "byte": lambda: IntCodec(8, False),
    "uint16": lambda: IntCodec(16, False),
    "uint32": lambda: IntCodec(32, False),
    "uint64": lambda: IntCodec(64, False),
    "uintptr": lambda: IntCodec(64, False),
    "float32": lambda: FloatCodec(32),
    "float64": lambda: FloatCodec(64),
    "bytes": Base64Codec,
    "[]byte": Base64Codec,
    "[]uint8": Base64Codec,
}


def encoder_of_native(kind: str):
    """Return the encoder for a scalar kind name, or None if it is not scalar."""
    factory = _NATIVE_FACTORIES.get(kind)
    return factory() if factory is not None else None