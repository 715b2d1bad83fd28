"""
Exceptions raised by the TOON encoder.
"""


class ToonError(ValueError):
    """Base class for all encoder errors."""


class InvalidConfiguration(ToonError):
    """Encoder options that would produce output that cannot be parsed back."""


class DepthExceeded(ToonError):
    """Input nests containers deeper than the configured maximum."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Nesting depth {depth} exceeds the maximum of {max_depth}"
        )


class CyclicStructure(ToonError):
    """A container holds a reference to one of its own ancestors."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Cyclic reference detected in {kind}")
