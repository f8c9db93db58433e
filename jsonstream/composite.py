"""Encoders for optional values, sequences and records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .stream import Stream, StreamConfig

__all__ = [
    "OptionalEncoder",
    "SliceEncoder",
    "Binding",
    "StructFieldEncoder",
    "StructEncoder",
    "EmptyStructEncoder",
    "StringModeNumberEncoder",
    "StringModeStringEncoder",
    "resolve_conflict_binding",
    "encoder_of_struct",
]


class OptionalEncoder:
    """Writes null for None, otherwise delegates to the value encoder."""

    def __init__(self, value_encoder) -> None:
        self.value_encoder = value_encoder

    def encode(self, value: Any, stream: Stream) -> None:
        if value is None:
            stream.write_nil()
        else:
            self.value_encoder.encode(value, stream)

    def is_empty(self, value: Any) -> bool:
        return value is None


class SliceEncoder:
    """Writes a sequence as a JSON array; None becomes null."""

    def __init__(self, elem_encoder) -> None:
        self.elem_encoder = elem_encoder

    def encode(self, value: Optional[Sequence[Any]], stream: Stream) -> None:
        if value is None:
            stream.write_nil()
            return
        if len(value) == 0:
            stream.write_empty_array()
            return
        stream.write_array_start()
        for position, element in enumerate(value):
            if position:
                stream.write_more()
            self.elem_encoder.encode(element, stream)
        stream.write_array_end()

    def is_empty(self, value: Optional[Sequence[Any]]) -> bool:
        return not value


def _field_value(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj[name]
    return getattr(obj, name)


class StructFieldEncoder:
    """Encodes one named field of a record with its own encoder."""

    def __init__(self, name: str, encoder, omitempty: bool = False) -> None:
        self.name = name
        self.encoder = encoder
        self.omitempty = omitempty

    def encode(self, obj: Any, stream: Stream) -> None:
        self.encoder.encode(_field_value(obj, self.name), stream)

    def is_empty(self, obj: Any) -> bool:
        return self.encoder.is_empty(_field_value(obj, self.name))

    def is_embedded_ptr_nil(self, obj: Any) -> bool:
        """True when the field's encoder reports an absent embedded value."""
        check = getattr(self.encoder, "is_embedded_ptr_nil", None)
        if check is None:
            return False
        return check(_field_value(obj, self.name))


@dataclass
class Binding:
    """A record field with the names it is written under and its encoder."""

    name: str
    encoder: StructFieldEncoder
    to_names: list[str] = field(default_factory=list)
    from_names: list[str] = field(default_factory=list)
    levels: tuple[int, ...] = ()
    tagged: bool = False


class StructEncoder:
    """Writes a record as a JSON object, field by field in order."""

    def __init__(
        self,
        type_name: str,
        fields: Sequence[tuple[str, StructFieldEncoder]] = (),
    ) -> None:
        self.type_name = type_name
        self.fields = list(fields)

    def encode(self, obj: Any, stream: Stream) -> None:
        stream.write_object_start()
        first = True
        for to_name, encoder in self.fields:
            if encoder.omitempty and encoder.is_empty(obj):
                continue
            if encoder.is_embedded_ptr_nil(obj):
                continue
            if not first:
                stream.write_more()
            stream.write_object_field(to_name)
            encoder.encode(obj, stream)
            first = False
        stream.write_object_end()

    def is_empty(self, obj: Any) -> bool:
        return False


class EmptyStructEncoder:
    """Writes {} for a record with no fields."""

    def encode(self, obj: Any, stream: Stream) -> None:
        stream.write_empty_object()

    def is_empty(self, obj: Any) -> bool:
        return False


class StringModeNumberEncoder:
    """Writes a number wrapped in quotes."""

    def __init__(self, elem_encoder) -> None:
        self.elem_encoder = elem_encoder

    def encode(self, value: Any, stream: Stream) -> None:
        stream.write_raw('"')
        self.elem_encoder.encode(value, stream)
        stream.write_raw('"')

    def is_empty(self, value: Any) -> bool:
        return self.elem_encoder.is_empty(value)


class StringModeStringEncoder:
    """Writes the JSON text of a value as a quoted JSON string."""

    def __init__(self, elem_encoder, config: Optional[StreamConfig] = None) -> None:
        self.elem_encoder = elem_encoder
        self.config = config if config is not None else StreamConfig()

    def encode(self, value: Any, stream: Stream) -> None:
        inner = Stream(self.config)
        inner.attachment = stream.attachment
        self.elem_encoder.encode(value, inner)
        stream.write_string(inner.buffer().decode("utf-8", "surrogatepass"))

    def is_empty(self, value: Any) -> bool:
        return self.elem_encoder.is_empty(value)


def _by_depth(old: Binding, new: Binding) -> tuple[bool, bool]:
    if len(old.levels) > len(new.levels):
        return True, False
    if len(new.levels) > len(old.levels):
        return False, True
    return True, True


def resolve_conflict_binding(old: Binding, new: Binding) -> tuple[bool, bool]:
    """Decide which of two bindings under one name to drop.

    Returns (ignore_old, ignore_new). A tagged field beats an untagged one;
    otherwise the shallower field wins and equal depth drops both.
    """
    if new.tagged:
        if old.tagged:
            return _by_depth(old, new)
        return True, False
    if old.tagged:
        return True, False
    return _by_depth(old, new)


@dataclass
class _BindingTo:
    binding: Binding
    to_name: str
    ignored: bool = False


def encoder_of_struct(type_name: str, bindings: Sequence[Binding]):
    """Build the encoder of a record from its field bindings."""
    ordered: list[_BindingTo] = []
    for binding in bindings:
        for to_name in binding.to_names:
            entry = _BindingTo(binding, to_name)
            for old in ordered:
                if old.to_name != to_name:
                    continue
                old.ignored, entry.ignored = resolve_conflict_binding(
                    old.binding, entry.binding
                )
            ordered.append(entry)
    if not ordered:
        return EmptyStructEncoder()
    fields = [(e.to_name, e.binding.encoder) for e in ordered if not e.ignored]
    return StructEncoder(type_name, fields)