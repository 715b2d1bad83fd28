"""
Encoder options for the TOON encoder.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from toon.errors import InvalidConfiguration

DEFAULT_INDENT = 2
DEFAULT_DELIMITER = ","
DEFAULT_MAX_DEPTH = 100

# Named delimiters accepted by the CLI and used by the benchmarks
DELIMITERS: Dict[str, str] = {
    "comma": ",",
    "tab": "\t",
    "pipe": "|",
}

# Characters that carry meaning in headers, list items and quoted strings
STRUCTURAL_CHARS = frozenset("[]{}:-\"\\\n\r")

# Numbers and true/false/null are never quoted, so a delimiter must not
# appear in their text (letters and digits are rejected outright)
_NUMBER_PUNCTUATION = frozenset(".+")

# A length marker sits directly in front of the element count
_FORBIDDEN_MARKER_CHARS = frozenset("[]{}:\n\r0123456789")


@dataclass(frozen=True)
class EncodeOptions:
    """
    Immutable settings for a single encode call.

    Attributes:
        indent: Spaces per indentation level
        delimiter: Single character separating inline and tabular values
        length_marker: Prefix written in front of every array length
        max_depth: Deepest container nesting accepted before failing
    """
    indent: int = DEFAULT_INDENT
    delimiter: str = DEFAULT_DELIMITER
    length_marker: str = ""
    max_depth: int = DEFAULT_MAX_DEPTH

    def validate(self) -> "EncodeOptions":
        """
        Check that these options produce unambiguous output.

        Returns:
            The options themselves, so calls can be chained

        Raises:
            InvalidConfiguration: If any field is out of range
        """
        if not _is_positive_int(self.indent):
            raise InvalidConfiguration(
                f"indent must be a positive integer, got {self.indent!r}"
            )
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise InvalidConfiguration(
                f"delimiter must be a single character, got {self.delimiter!r}"
            )
        if self.delimiter in STRUCTURAL_CHARS:
            raise InvalidConfiguration(
                f"delimiter {self.delimiter!r} collides with a structural character"
            )
        if self.delimiter.isalnum() or self.delimiter in _NUMBER_PUNCTUATION:
            raise InvalidConfiguration(
                f"delimiter {self.delimiter!r} can appear in unquoted numbers or keywords"
            )
        if not isinstance(self.length_marker, str):
            raise InvalidConfiguration(
                f"length_marker must be a string, got {self.length_marker!r}"
            )
        bad = _FORBIDDEN_MARKER_CHARS.intersection(self.length_marker)
        if bad:
            raise InvalidConfiguration(
                f"length_marker {self.length_marker!r} contains reserved characters: "
                f"{''.join(sorted(bad))!r}"
            )
        if not _is_positive_int(self.max_depth):
            raise InvalidConfiguration(
                f"max_depth must be a positive integer, got {self.max_depth!r}"
            )
        return self

    @property
    def indent_unit(self) -> str:
        return " " * self.indent


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as indent=1
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def resolve_delimiter(name: str) -> str:
    """Map a delimiter name (comma, tab, pipe) to its character; other values pass through."""
    return DELIMITERS.get(name.lower(), name) if name else name


def build_options(options: Optional[EncodeOptions] = None, **overrides) -> EncodeOptions:
    """
    Merge keyword overrides into an options object and validate the result.

    Args:
        options: Base options, defaults when None
        **overrides: Any EncodeOptions field

    Returns:
        Validated options
    """
    base = options if options is not None else EncodeOptions()
    unknown = set(overrides) - set(EncodeOptions.__dataclass_fields__)
    if unknown:
        raise InvalidConfiguration(f"Unknown encoder option(s): {', '.join(sorted(unknown))}")
    if overrides:
        base = replace(base, **overrides)
    return base.validate()
