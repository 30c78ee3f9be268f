from __future__ import annotations

import logging
from time import sleep
from urllib.parse import quote

from tagge.core.result import Err, Ok, Result
from tagge.core.structured import as_obj_list, as_str_dict
from tagge.github.http import HttpClient, HttpError, RealHttpClient

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

# Idempotent GET retry policy
READ_RETRY_ATTEMPTS = 3
READ_RETRY_DELAY_SECONDS = 1.0

_TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})

logger = logging.getLogger(__name__)


def _is_transient(error: HttpError) -> bool:
    return error.kind == "network" or error.status in _TRANSIENT_STATUSES


class GitHubClient:
    """Minimal GitHub REST client authenticated with a bearer token.

    The token is passed in explicitly; nothing here reads the environment.
    Instances are shared across worker threads.
    """

    def __init__(
        self,
        token: str,
        *,
        http: HttpClient | None = None,
        api_url: str = GITHUB_API_URL,
        retry_attempts: int = READ_RETRY_ATTEMPTS,
    ) -> None:
        self.token = token
        self.http = http if http is not None else RealHttpClient()
        self.api_url = api_url.rstrip("/")
        self.retry_attempts = retry_attempts

    @property
    def has_token(self) -> bool:
        return bool(self.token.strip())

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token.strip()}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def get_json(self, endpoint: str) -> Result[object, HttpError]:
        url = f"{self.api_url}/{endpoint.lstrip('/')}"
        attempts = max(1, self.retry_attempts)
        for attempt in range(attempts):
            result = self.http.get_json(url, self._headers())
            if isinstance(result, Ok):
                return result

            if attempt < attempts - 1 and _is_transient(result.error):
                logger.debug("transient error on %s (%s), retrying", url, result.error)
                sleep(READ_RETRY_DELAY_SECONDS * (attempt + 1))
                continue
            return result

        return Err(HttpError(url=url, status=0, message="retries exhausted", kind="network"))

    def pull_numbers_for_commit(
        self, owner: str, repo: str, sha: str
    ) -> Result[list[int], HttpError]:
        """PR numbers associated with ``sha``, in the order GitHub returns them."""
        endpoint = f"repos/{quote(owner, safe='')}/{quote(repo, safe='')}/commits/{sha}/pulls"
        result = self.get_json(endpoint)
        if isinstance(result, Err):
            return result

        items = as_obj_list(result.value)
        if items is None:
            return Err(
                HttpError(
                    url=endpoint,
                    status=0,
                    message="unexpected payload: expected a list",
                    kind="payload",
                )
            )

        numbers: list[int] = []
        for item in items:
            d = as_str_dict(item)
            if d is None:
                continue
            number = d.get("number")
            if isinstance(number, int) and not isinstance(number, bool):
                numbers.append(number)
        return Ok(numbers)
