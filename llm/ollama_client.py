"""
Ollama API client used to time model responses.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from utils.retry import retry_with_backoff
import config

logger = logging.getLogger(__name__)

ANALYST_SYSTEM_PROMPT = "You are a helpful assistant that analyzes data accurately."
WARMUP_PROMPT = "Hi, are you ready?"


class OllamaUnavailable(Exception):
    """The Ollama server could not be reached or answered with an error."""


@dataclass
class ChatResult:
    """A model reply and how long it took."""
    text: str
    elapsed_ms: float
    prompt_length: int
    eval_count: Optional[int] = None

    @property
    def content_length(self) -> int:
        return len(self.text)


def model_base_name(name: str) -> str:
    """'llama3.1:8b' -> 'llama3.1'"""
    return name.split(":", 1)[0]


class OllamaClient:
    """Client for a local Ollama server's REST API."""

    def __init__(
        self,
        base_url: str = config.OLLAMA_BASE_URL,
        connect_timeout: float = config.CONNECT_TIMEOUT,
        read_timeout: float = config.READ_TIMEOUT,
        max_retries: int = config.MAX_RETRIES,
        retry_delay: float = config.RETRY_DELAY
    ):
        """
        Initialize Ollama client.

        Args:
            base_url: Server URL, e.g. http://localhost:11434
            connect_timeout: Seconds to wait for a connection
            read_timeout: Seconds to wait for a reply
            max_retries: Retry attempts for transient failures
            retry_delay: Initial backoff delay in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = (connect_timeout, read_timeout)
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": "toon-bench/1.0"
        })
        adapter = requests.adapters.HTTPAdapter(
            pool_connections=2,
            pool_maxsize=2,
            max_retries=0  # We handle retries ourselves
        )
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self._request = retry_with_backoff(
            max_retries=max_retries, initial_delay=retry_delay
        )(self._send)

    def _send(self, method: str, endpoint: str, payload: Optional[Dict] = None) -> Dict:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            logger.warning(f"Request timeout for {url}: {str(e)[:100]}")
            raise
        except requests.exceptions.ConnectionError as e:
            logger.warning(f"Connection issue for {url}: {str(e)[:100]}")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise

    def list_models(self) -> List[str]:
        """
        Names of the models installed on the server.

        Raises:
            OllamaUnavailable: If the server cannot be reached
        """
        try:
            response = self._request("GET", "api/tags")
        except (requests.exceptions.RequestException, ValueError) as e:
            raise OllamaUnavailable(f"Ollama is not reachable at {self.base_url}: {e}") from e
        return [m["name"] for m in response.get("models", []) if m.get("name")]

    def chat(self, model: str, prompt: str, system: Optional[str] = None) -> Optional[ChatResult]:
        """
        Send one prompt and time the reply.

        Args:
            model: Installed model name
            prompt: User message
            system: Optional system message

        Returns:
            ChatResult, or None if the request failed
        """
        messages: List[Dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        payload = {"model": model, "messages": messages, "stream": False}

        start = time.perf_counter()
        try:
            response = self._request("POST", "api/chat", payload)
            elapsed_ms = (time.perf_counter() - start) * 1000
            text = response["message"]["content"]
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error(f"Chat request to {model} failed: {e}")
            return None

        return ChatResult(
            text=text,
            elapsed_ms=round(elapsed_ms, 1),
            prompt_length=len(prompt),
            eval_count=response.get("eval_count"),
        )

    def send_prompt(self, model: str, prompt: str) -> Optional[ChatResult]:
        """Ask `model` to analyze data in `prompt`; None when no reply was received."""
        return self.chat(model, prompt, system=ANALYST_SYSTEM_PROMPT)

    def warmup(self, model: str) -> bool:
        """Load the model into memory so later timings exclude load time."""
        logger.info(f"Warming up {model} (this may take a moment on first run)...")
        result = self.chat(model, WARMUP_PROMPT)
        if result is None:
            logger.error(f"Warmup of {model} failed")
            return False
        logger.info(f"Model is ready (warmup took {result.elapsed_ms:.0f}ms)")
        return True

    def is_model_ready(self, model: str) -> bool:
        """
        Check the model is installed and answers.

        Returns:
            True if the model is listed by the server and the warmup succeeds
        """
        try:
            available = self.list_models()
        except OllamaUnavailable as e:
            logger.error(f"Error checking model {model}: {e}")
            return False

        base = model_base_name(model)
        if not any(name == model or base in name for name in available):
            logger.warning(f"Model {model} is not installed")
            return False
        return self.warmup(model)
