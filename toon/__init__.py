"""
TOON (Token-Oriented Object Notation) encoder.
"""
from toon.classifier import ValueKind, classify
from toon.encoder import encode, encode_array, encode_object, encode_scalar, needs_quoting
from toon.errors import CyclicStructure, DepthExceeded, InvalidConfiguration, ToonError
from toon.options import DELIMITERS, EncodeOptions

__all__ = [
    "encode",
    "encode_array",
    "encode_object",
    "encode_scalar",
    "needs_quoting",
    "classify",
    "ValueKind",
    "EncodeOptions",
    "DELIMITERS",
    "ToonError",
    "InvalidConfiguration",
    "DepthExceeded",
    "CyclicStructure",
]
