"""
Configuration settings for the TOON encoder and format benchmarks.

Values come from the environment; a .env file in the working directory is
loaded first.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent


def _csv(value: str):
    return tuple(item.strip() for item in value.split(",") if item.strip())


# Local Ollama server
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
# Explicit model to benchmark; empty picks one of PREFERRED_MODELS
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "")
PREFERRED_MODELS = _csv(os.getenv(
    "PREFERRED_MODELS", "llama3.1,llama3.1:8b,llama3,mistral,codellama"
))

# HTTP
CONNECT_TIMEOUT = float(os.getenv("CONNECT_TIMEOUT", "10"))  # seconds
READ_TIMEOUT = float(os.getenv("READ_TIMEOUT", "300"))  # local models can be slow to answer
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
RETRY_DELAY = float(os.getenv("RETRY_DELAY", "1"))  # seconds

# Token counting: first model is the one reported and ranked on
TOKENIZER_MODELS = _csv(os.getenv("TOKENIZER_MODELS", "gpt-4o,gpt-4,cl100k_base"))
DEFAULT_TOKEN_MODEL = TOKENIZER_MODELS[0] if TOKENIZER_MODELS else "gpt-4o"

# Encoder defaults for the CLI
DEFAULT_INDENT = int(os.getenv("TOON_INDENT", "2"))
DEFAULT_DELIMITER = os.getenv("TOON_DELIMITER", "comma")
DEFAULT_MAX_DEPTH = int(os.getenv("TOON_MAX_DEPTH", "100"))

# Reports
SAMPLE_PREVIEW_CHARS = int(os.getenv("SAMPLE_PREVIEW_CHARS", "400"))
RESPONSE_PREVIEW_CHARS = int(os.getenv("RESPONSE_PREVIEW_CHARS", "300"))
DATASET_SEED = int(os.getenv("DATASET_SEED", "42"))

# Logging; an empty LOG_FILE logs to stdout only
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")
