"""
Token counting with tiktoken, falling back to a character estimate.
"""
import logging
import math
from functools import lru_cache

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"

# Rough average characters per token for English text and code
CHARS_PER_TOKEN = 4


@lru_cache(maxsize=None)
def _get_encoding(model: str) -> tiktoken.Encoding:
    # Model names (gpt-4o) and encoding names (cl100k_base) are both accepted
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        return tiktoken.get_encoding(model)


def estimate_tokens(text: str) -> int:
    """Estimate tokens as one per four characters, rounded up."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def count_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """
    Count the tokens `model` would see for `text`.

    Never raises: if the tokenizer for `model` is unknown or cannot be
    loaded (e.g. offline), the character estimate is returned instead.

    Args:
        text: Text to tokenize
        model: Model or encoding name

    Returns:
        Number of tokens
    """
    try:
        encoding = _get_encoding(model)
        return len(encoding.encode(text or "", disallowed_special=()))
    except Exception as e:
        logger.warning(f"Could not use tokenizer for {model}, using estimate: {e}")
        return estimate_tokens(text)
