# jsonstream

`jsonstream` writes JSON text into a byte buffer, piece by piece. It can also pass that text on to any object that has a `write(bytes)` method. The package is made of five modules:

- `jsonstream.numbers`: the text of JSON numbers.
  - `format_int(value, bits, signed)`
  - `format_float(value, bits)`
  - `format_float_lossy(value, bits)`
  - `UnsupportedValueError`
- `jsonstream.strings`: quoting of text as JSON string literals.
  - `quote_string(text)`
  - `quote_string_html(text)`
- `jsonstream.stream`: `StreamConfig`, and `Stream`, a buffered writer with JSON-specific methods.
- `jsonstream.native`: encoders for scalar values.
  - `StringCodec`
  - `BoolCodec`
  - `IntCodec`
  - `FloatCodec`
  - `Base64Codec`
  - `encoder_of_native`
- `jsonstream.composite`: encoders for optional values, lists and records.
  - `OptionalEncoder`
  - `SliceEncoder`
  - `StructFieldEncoder`
  - `StructEncoder`
  - `EmptyStructEncoder`
  - `StringModeNumberEncoder`
  - `StringModeStringEncoder`
  - `Binding`
  - `resolve_conflict_binding`
  - `encoder_of_struct`

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Writing with a stream

```python
from jsonstream.stream import Stream, StreamConfig

stream = Stream(StreamConfig(), None, 64)
stream.write_object_start()
stream.write_object_field("name")
stream.write_string("widget")
stream.write_more()
stream.write_object_field("count")
stream.write_int32(3)
stream.write_object_end()

print(stream.buffer().decode())   # {"name":"widget","count":3}
```

`Stream(config, out, buf_size)` takes three arguments:

- `config` is a `StreamConfig`. When `indention_step` is greater than 0, objects and arrays are written over several lines, with that many spaces per level, and object fields are followed by `": "`.
- `out` is an optional writer. `write(data)` appends `data` to the buffer and, when there is a writer, hands the whole buffer to it. `flush()` writes what is buffered to the writer and empties the buffer. Without a writer, take the result with `buffer()`.
- `buf_size` is the starting capacity of the buffer, as reported by `available()`. `buffered()` returns the number of bytes held.

Other methods of `Stream`:

- `reset(out)` sets a new writer and drops buffered data.
- `set_buffer(buf)` replaces the buffer contents.
- `write_raw(text)` appends text unquoted.
- The `attachment` attribute is free for custom encoders to use.

## Numbers

- **Integers.** `write_int8`, `write_int16`, `write_int32`, `write_int64`, `write_uint8`, `write_uint16`, `write_uint32` and `write_uint64` write an integer exactly. `write_int` and `write_uint` use 64 bits. A value that does not fit the width raises `OverflowError`.
- **Floats.** `write_float32` and `write_float64` write the shortest text that reads back to the same value at that width. Exponent form is used for magnitudes below `1e-6`, and for magnitudes at or above `1e21`. Exponent examples are `1e-7` and `1e+21`.
- **Lossy floats.** `write_float32_lossy` and `write_float64_lossy` round to at most six fractional digits. Values above `0x4ffffff` fall back to the exact form.

NaN and infinities raise `UnsupportedValueError`, which is a `ValueError`.

## Strings

`write_string` (`quote_string`) escapes these characters:

- `"`
- `\`
- control characters below U+0020: `\n`, `\r` and `\t` get their short escapes, the rest become `\u00XX`

`write_string_html_escaped` (`quote_string_html`) also escapes:

- `<`, `>` and `&`
- U+2028 and U+2029

It also replaces lone surrogate characters, which cannot be encoded as UTF-8, with `\ufffd`.

## Encoders

Every encoder has the same two methods:

- `encode(value, stream)`
- `is_empty(value)`

Encoders nest, so you can combine them:

```python
from jsonstream.native import IntCodec
from jsonstream.composite import SliceEncoder
from jsonstream.stream import Stream, StreamConfig

stream = Stream(StreamConfig(indention_step=2))
SliceEncoder(IntCodec(64)).encode([1, 2, 3], stream)
print(stream.buffer().decode())
# [
#   1,
#   2,
#   3
# ]
```

### Native encoders

`encoder_of_native(kind)` returns a fresh encoder for a scalar kind name, or `None` for any other name. The kinds are:

| Kind | Encoder |
| --- | --- |
| `string` | `StringCodec` |
| `bool` | `BoolCodec` |
| `int8`, `int16`, `int32`, `int64`, `int` | `IntCodec`, signed; `int` is 64 bits |
| `uint8`, `byte`, `uint16`, `uint32`, `uint64`, `uint`, `uintptr` | `IntCodec`, unsigned; `uint` and `uintptr` are 64 bits |
| `float32`, `float64` | `FloatCodec` |
| `bytes`, `[]byte`, `[]uint8` | `Base64Codec` |

`Base64Codec` writes bytes as standard base64 in quotes, and `None` as `null`.

### Composite encoders

- `OptionalEncoder` and `SliceEncoder` write `None` as `null`. An empty list is written as `[]`.
- `StringModeNumberEncoder` wraps the output of its inner encoder in quotes.
- `StringModeStringEncoder` writes the JSON text of its inner encoder as a quoted JSON string.

Records are built from `Binding` entries:

```python
from jsonstream.composite import Binding, StructFieldEncoder, encoder_of_struct
from jsonstream.native import IntCodec, StringCodec
from jsonstream.stream import Stream

name = StructFieldEncoder("name", StringCodec())
count = StructFieldEncoder("count", IntCodec(32), omitempty=True)
encoder = encoder_of_struct("Item", [
    Binding("name", name, to_names=["name"]),
    Binding("count", count, to_names=["count"]),
])

stream = Stream()
encoder.encode({"name": "widget", "count": 0}, stream)
print(stream.buffer().decode())   # {"name":"widget"}
```

How record fields are read and written:

- `StructFieldEncoder` reads its field by key from a mapping, or as an attribute of any other object.
- Fields marked `omitempty` are skipped when their encoder reports them empty.
- When the bindings give no names at all, `encoder_of_struct` returns an `EmptyStructEncoder`, which writes `{}`.

When two bindings share an output name, `resolve_conflict_binding` settles the clash by these rules:

1. A `tagged` binding wins over an untagged one.
2. Otherwise, the binding with fewer `levels` wins.
3. If neither rule decides, both bindings are dropped.

## What it does not do

`jsonstream` only writes JSON. It does not:

- parse or decode JSON text
- include an encoder for mappings with arbitrary keys
- choose encoders by inspecting a value's type

You pick and combine the encoders yourself.