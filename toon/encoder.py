"""
TOON encoder for Python objects.

TOON (Token-Oriented Object Notation) is an indentation-based notation for
the JSON data model, written to keep LLM prompts short:
- Objects are `key: value` lines, nested objects indented below their key
- Arrays carry an explicit length `[N]`
- Arrays of uniform objects become a table: one `{fields}` header, then rows
- Arrays of primitives are written inline
- Any other array becomes a `- item` list
- Strings are quoted only when they would otherwise be ambiguous

Input must be acyclic; cycles and excessive nesting raise instead of
recursing without bound.
"""
import json
import logging
import math
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from toon.classifier import (
    OBJECT_KINDS,
    PRIMITIVE_KINDS,
    ValueKind,
    classify,
    classify_array,
    is_array,
    is_object,
)
from toon.errors import CyclicStructure, DepthExceeded
from toon.options import EncodeOptions, build_options

logger = logging.getLogger(__name__)

RESERVED_LITERALS = frozenset({"true", "false", "null"})

# Beyond this magnitude floats keep their exponent form
_INTEGRAL_FLOAT_LIMIT = 1e16


def needs_quoting(text: str, delimiter: str) -> bool:
    """
    Check whether a string must be quoted to stay unambiguous.

    A literal comma is always quoted, whatever the active delimiter.
    """
    return (
        delimiter in text
        or '"' in text
        or " " in text
        or "\n" in text
        or "\t" in text
        or "," in text
        or text in RESERVED_LITERALS
    )


def quote(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


def format_number(value: Any) -> str:
    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
            return str(int(value))
        return repr(value)
    return str(value)


def format_string(text: str, delimiter: str) -> str:
    if needs_quoting(text, delimiter):
        return quote(text)
    return text


def encode_scalar(value: Any, delimiter: str = ",") -> str:
    """
    Render a null, boolean, number or string leaf.

    Args:
        value: The scalar to render
        delimiter: Active delimiter, used by the quoting rule

    Returns:
        The scalar's TOON text
    """
    kind = classify(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return format_number(value)
    if kind is ValueKind.STRING:
        return format_string(value if isinstance(value, str) else str(value), delimiter)
    raise TypeError(f"encode_scalar() expects a scalar, got {kind.value}")


class _Encoder:
    """Walks one value tree for a single encode call."""

    def __init__(self, options: EncodeOptions):
        self.options = options
        self.unit = options.indent_unit
        self.delimiter = options.delimiter
        self.marker = options.length_marker
        # ids of the containers on the current path
        self._ancestors: List[int] = []

    def indent(self, depth: int) -> str:
        return self.unit * depth

    @contextmanager
    def _entering(self, container: Any, kind: str) -> Iterator[None]:
        if len(self._ancestors) >= self.options.max_depth:
            raise DepthExceeded(len(self._ancestors) + 1, self.options.max_depth)
        ident = id(container)
        if ident in self._ancestors:
            raise CyclicStructure(kind)
        self._ancestors.append(ident)
        try:
            yield
        finally:
            self._ancestors.pop()

    def encode_value(self, value: Any, depth: int) -> str:
        """Encode any value; multi-line results have every line indented for `depth`."""
        return self._encode_kind(value, classify(value), depth)

    def _encode_kind(self, value: Any, kind: ValueKind, depth: int) -> str:
        if kind in _ARRAY_HANDLERS:
            with self._entering(value, "array"):
                return _ARRAY_HANDLERS[kind](self, value, depth)
        if kind is ValueKind.EMPTY_OBJECT:
            return ""
        if kind is ValueKind.OBJECT:
            with self._entering(value, "object"):
                return self.encode_object(value, depth)
        return encode_scalar(value, self.delimiter)

    def encode_array(self, values: Sequence[Any], depth: int) -> str:
        kind = classify_array(values)
        with self._entering(values, "array"):
            return _ARRAY_HANDLERS[kind](self, values, depth)

    def _header(self, count: int, suffix: str = "") -> str:
        return f"[{self.marker}{count}{suffix}]"

    def _empty(self, values: Sequence[Any], depth: int) -> str:
        return f"{self.indent(depth)}{self._header(0)}:"

    def _inline(self, values: Sequence[Any], depth: int) -> str:
        joined = self.delimiter.join(encode_scalar(v, self.delimiter) for v in values)
        return f"{self.indent(depth)}{self._header(len(values))}: {joined}"

    def _tabular(self, values: Sequence[Mapping[str, Any]], depth: int) -> str:
        keys = list(values[0].keys())
        fields = self.delimiter.join(str(k) for k in keys)
        lines = [
            f"{self.indent(depth)}{self._header(len(values), self.delimiter)}{{{fields}}}:"
        ]
        row_indent = self.indent(depth + 1)
        for item in values:
            cells = [self._cell(item[key]) for key in keys]
            lines.append(row_indent + self.delimiter.join(cells))
        return "\n".join(lines)

    def _cell(self, value: Any) -> str:
        if not (is_array(value) or is_object(value)):
            return encode_scalar(value, self.delimiter)
        # Nested containers inside a row are written as compact JSON literals
        self._check_nested(value)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)

    def _check_nested(self, value: Any) -> None:
        if is_array(value):
            children = value
        elif is_object(value):
            children = value.values()
        else:
            return
        with self._entering(value, "array" if is_array(value) else "object"):
            for child in children:
                self._check_nested(child)

    def _list(self, values: Sequence[Any], depth: int) -> str:
        lines = [f"{self.indent(depth)}{self._header(len(values))}:"]
        bullet = f"{self.indent(depth + 1)}-"
        for item in values:
            kind = classify(item)
            encoded = self._encode_kind(item, kind, depth + 2)
            if not encoded and kind in OBJECT_KINDS:
                lines.append(bullet)
                continue
            first, _, rest = encoded.partition("\n")
            lines.append(f"{bullet} {first.lstrip(' ')}")
            if rest:
                lines.append(rest)
        return "\n".join(lines)

    def encode_object(self, fields: Mapping[str, Any], depth: int) -> str:
        prefix = self.indent(depth)
        entries = []
        for key, value in fields.items():
            kind = classify(value)
            if kind is ValueKind.EMPTY_OBJECT:
                # Empty objects contribute no line, not even their key
                continue
            encoded = self._encode_kind(value, kind, depth + 1)
            if kind in PRIMITIVE_KINDS or "\n" not in encoded:
                entries.append(f"{prefix}{key}: {encoded.lstrip(' ')}")
            else:
                entries.append(f"{prefix}{key}:\n{encoded}")
        return "\n".join(entries)


_ARRAY_HANDLERS = {
    ValueKind.EMPTY_ARRAY: _Encoder._empty,
    ValueKind.UNIFORM_OBJECT_ARRAY: _Encoder._tabular,
    ValueKind.PRIMITIVE_ARRAY: _Encoder._inline,
    ValueKind.MIXED_ARRAY: _Encoder._list,
}


def encode(value: Any, options: Optional[EncodeOptions] = None, **overrides) -> str:
    """
    Encode a JSON-like value as TOON text.

    Args:
        value: dict, list, tuple, str, int, float, bool or None (nested freely)
        options: Encoder options; defaults to indent 2, comma delimiter
        **overrides: Individual option fields, e.g. delimiter="\\t"

    Returns:
        TOON text, lines joined by "\\n", no trailing newline

    Raises:
        InvalidConfiguration: If the options are invalid
        DepthExceeded: If nesting exceeds options.max_depth
        CyclicStructure: If a container contains one of its ancestors
    """
    resolved = build_options(options, **overrides)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Encoding {classify(value).value} value "
            f"(indent={resolved.indent}, delimiter={resolved.delimiter!r}, "
            f"length_marker={resolved.length_marker!r})"
        )
    return _Encoder(resolved).encode_value(value, 0)


def encode_array(values: Sequence[Any], depth: int = 0,
                 options: Optional[EncodeOptions] = None) -> str:
    """Encode an array at the given indentation depth."""
    return _Encoder(build_options(options)).encode_array(values, depth)


def encode_object(fields: Mapping[str, Any], depth: int = 0,
                  options: Optional[EncodeOptions] = None) -> str:
    """Encode an object at the given indentation depth; empty objects give ""."""
    return _Encoder(build_options(options)).encode_value(fields, depth)
