"""Text forms of JSON numbers: integers of fixed width and floats."""

from __future__ import annotations

import math
import operator
import struct
from decimal import Decimal

__all__ = [
    "UnsupportedValueError",
    "format_int",
    "format_float",
    "format_float_lossy",
]

_WIDTHS = (8, 16, 32, 64)
_LOSSY_LIMIT = 0x4FFFFFF
_LOSSY_SCALE = 1_000_000
_LOSSY_PRECISION = 6


class UnsupportedValueError(ValueError):
    """Raised for values JSON cannot represent, such as NaN or infinity."""

    def __init__(self, value: float) -> None:
        if math.isnan(value):
            text = "NaN"
        else:
            text = "+Inf" if value > 0 else "-Inf"
        super().__init__(f"unsupported value: {text}")
        self.value = value


def _check_width(bits: int) -> None:
    if bits not in _WIDTHS:
        raise ValueError(f"unsupported bit width: {bits}")


def _to_float32(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


_F32_SMALL = _to_float32(1e-6)
_F32_LARGE = _to_float32(1e21)


def format_int(value: int, bits: int = 64, signed: bool = True) -> str:
    """Return the decimal text of an integer of the given width and signedness.

    Raises OverflowError when the value does not fit the width.
    """
    _check_width(bits)
    number = operator.index(value)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= number <= high:
        kind = "int" if signed else "uint"
        raise OverflowError(f"{number} does not fit in {kind}{bits}")
    return str(number)


def _shortest_decimal(value: float, bits: int) -> Decimal:
    """Shortest decimal that reads back as the same value at the given width."""
    if bits == 64:
        return Decimal(repr(value))
    for precision in range(9):
        text = f"{value:.{precision}e}"
        if _to_float32(float(text)) == value:
            return Decimal(text)
    return Decimal(repr(value))


def _fixed(number: Decimal) -> str:
    return format(number.normalize(), "f")


def _scientific(number: Decimal) -> str:
    sign, digits, exponent = number.normalize().as_tuple()
    sci_exp = exponent + len(digits) - 1
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(map(str, digits[1:]))
    magnitude = abs(sci_exp)
    if sci_exp < 0:
        # single-digit negative exponents drop their leading zero: e-7, not e-07
        exp_text = "-" + (str(magnitude) if magnitude < 10 else f"{magnitude:02d}")
    else:
        exp_text = f"+{magnitude:02d}"
    return ("-" if sign else "") + mantissa + "e" + exp_text


def format_float(value: float, bits: int = 64) -> str:
    """Return the shortest text of a 32- or 64-bit float.

    Plain notation is used unless the magnitude is below 1e-6 or at least
    1e21. Raises UnsupportedValueError for NaN and infinities.
    """
    if bits not in (32, 64):
        raise ValueError(f"unsupported float width: {bits}")
    number = float(value)
    if bits == 32:
        number = _to_float32(number)
    if math.isinf(number) or math.isnan(number):
        raise UnsupportedValueError(number)
    magnitude = abs(number)
    scientific = False
    if magnitude != 0:
        if bits == 32:
            probe = _to_float32(magnitude)
            scientific = probe < _F32_SMALL or probe >= _F32_LARGE
        else:
            scientific = magnitude < 1e-6 or magnitude >= 1e21
    decimal = _shortest_decimal(number, bits)
    return _scientific(decimal) if scientific else _fixed(decimal)


def format_float_lossy(value: float, bits: int = 64) -> str:
    """Return a float rounded to at most six fractional digits.

    Values above 0x4ffffff fall back to the exact form of format_float.
    """
    if bits not in (32, 64):
        raise ValueError(f"unsupported float width: {bits}")
    number = float(value)
    if bits == 32:
        number = _to_float32(number)
    if math.isinf(number) or math.isnan(number):
        raise UnsupportedValueError(number)
    prefix = ""
    if number < 0:
        prefix = "-"
        number = -number
    if number > _LOSSY_LIMIT:
        return prefix + format_float(number, bits)
    scaled = int(number * _LOSSY_SCALE + 0.5)
    whole, fraction = divmod(scaled, _LOSSY_SCALE)
    text = prefix + str(whole)
    if fraction == 0:
        return text
    digits = str(fraction).zfill(_LOSSY_PRECISION).rstrip("0")
    return f"{text}.{digits}"