"""
Unit tests for the retry decorator.

Run with: pytest tests/test_retry.py -v
"""
import pytest
import requests

from utils.retry import is_retryable_error, retry_with_backoff


def http_error(status_code):
    response = requests.Response()
    response.status_code = status_code
    return requests.exceptions.HTTPError(f"{status_code} error", response=response)


@pytest.mark.parametrize("exception, expected", [
    (requests.exceptions.ConnectionError("refused"), True),
    (requests.exceptions.Timeout("slow"), True),
    (requests.exceptions.ChunkedEncodingError("cut"), True),
    (http_error(429), True),
    (http_error(503), True),
    (http_error(404), False),
    (http_error(400), False),
    (requests.exceptions.HTTPError("no response"), False),
    (ValueError("bad json"), False),
])
def test_is_retryable_error(exception, expected):
    assert is_retryable_error(exception) is expected


def test_retries_transient_errors():
    calls = []

    @retry_with_backoff(max_retries=2, initial_delay=0)
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise requests.exceptions.ConnectionError("refused")
        return "ok"

    assert flaky() == "ok"
    assert len(calls) == 3
    assert flaky.__name__ == "flaky"


def test_gives_up_after_max_retries():
    calls = []

    @retry_with_backoff(max_retries=1, initial_delay=0)
    def down():
        calls.append(1)
        raise requests.exceptions.Timeout("slow")

    with pytest.raises(requests.exceptions.Timeout):
        down()
    assert len(calls) == 2


def test_does_not_retry_client_errors():
    calls = []

    @retry_with_backoff(max_retries=3, initial_delay=0)
    def not_found():
        calls.append(1)
        raise http_error(404)

    with pytest.raises(requests.exceptions.HTTPError):
        not_found()
    assert len(calls) == 1
