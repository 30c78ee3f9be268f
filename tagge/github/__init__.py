"""GitHub REST API access."""

from .client import GitHubClient
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = [
    "GitHubClient",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]
