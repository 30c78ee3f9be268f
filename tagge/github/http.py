"""HTTP client abstraction for the GitHub API.

This module provides:
- HttpClient: Protocol for JSON GET requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import threading
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from tagge import __version__
from tagge.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpErrorKind",
    "MockHttpClient",
    "RealHttpClient",
]


# status: the server answered with an error status
# network: no usable response (DNS, connection reset, timeout)
# payload: a response arrived but its body is not what was expected
HttpErrorKind = Literal["status", "network", "payload"]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
        kind: What went wrong; only network errors are worth retrying
    """

    url: str
    status: int
    message: str
    kind: HttpErrorKind = "status"

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Implementations must be safe to call from several threads at once.
    """

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        """Fetch URL and parse the body as JSON (object or array)."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Stateless apart from configuration, so one instance is shared by all
    concurrent lookups.
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = f"tagge/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(self, url: str, headers: Mapping[str, str] | None) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(
                url,
                headers={"User-Agent": self.user_agent, **(headers or {})},
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason), kind="network"))
        except TimeoutError:
            return Err(
                HttpError(url=url, status=0, message="Request timed out", kind="network")
            )
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e), kind="network"))

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        result = self._request(url, headers)
        if isinstance(result, Err):
            return result

        try:
            data: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(
                HttpError(url=url, status=0, message=f"JSON parse error: {e}", kind="payload")
            )
        return Ok(data)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/x", [{"number": 1}])
        result = client.get_json("https://api.github.com/x")
        assert result == Ok([{"number": 1}])
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, object | HttpError] = {}
        self._lock = threading.Lock()
        self.calls: list[tuple[str, dict[str, str]]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        self._json_responses[url] = response

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        with self._lock:
            self.calls.append((url, dict(headers or {})))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
