"""REST client for the vocabulary backend (``/words/`` and ``/clusters/``)."""

import logging
import os
from typing import Any

import requests

from fuaim.notify import Notifier

logger = logging.getLogger(__name__)

API_URL = os.environ.get("FUAIM_API_URL", "http://localhost:8000/api")
REQUEST_TIMEOUT = 10

STATUS_MESSAGES = {
    400: "Bad Request.",
    401: "Unauthorized. Please log in.",
    403: "Forbidden. You don't have access.",
    404: "Resource not found.",
    500: "Internal Server Error.",
}
NO_RESPONSE_MESSAGE = "No response from server. Please try again later."
UNEXPECTED_MESSAGE = "An unexpected error occurred."


class ApiError(RuntimeError):
    """Raised when a backend request fails; str() is the user-facing message."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


def error_message(response: requests.Response) -> str:
    """User-facing message for a non-2xx response.

    The backend's ``detail`` field wins over the per-status default.
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return STATUS_MESSAGES.get(response.status_code, f"Error: {response.status_code}")


class ApiClient:
    """Thin wrapper over the backend endpoints.

    Every failure is logged, passed to ``notifier`` when one is set, and
    raised as ApiError.
    """

    def __init__(
        self,
        base_url: str = API_URL,
        notifier: Notifier | None = None,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.notifier = notifier
        self.http = session or requests.Session()
        self.http.headers.update({"Content-Type": "application/json"})
        self.timeout = timeout

    # Public API ---------------------------------------------------------
    def fetch_words(self) -> list[dict]:
        return self._request("GET", "/words/")

    def create_word(self, word_data: dict) -> dict:
        return self._request("POST", "/words/", json_body=word_data)

    def fetch_clusters(self) -> list[dict]:
        return self._request("GET", "/clusters/")

    def create_cluster(self, cluster_data: dict) -> dict:
        return self._request("POST", "/clusters/", json_body=cluster_data)

    # Internal helpers ---------------------------------------------------
    def _fail(self, message: str, status: int | None = None) -> ApiError:
        if status is not None:
            logger.error(f"API Error [{status}]: {message}")
        else:
            logger.error(message)
        if self.notifier is not None:
            self.notifier.error(message)
        return ApiError(message, status)

    def _request(self, method: str, path: str, *, json_body: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(method, url, json=json_body, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.debug(f"No response from {url}: {exc}")
            raise self._fail(NO_RESPONSE_MESSAGE) from exc
        except requests.RequestException as exc:
            logger.debug(f"Request to {url} could not be sent: {exc}")
            raise self._fail(UNEXPECTED_MESSAGE) from exc

        if response.status_code >= 400:
            raise self._fail(error_message(response), response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.debug(f"Response from {url} is not JSON: {exc}")
            raise self._fail(UNEXPECTED_MESSAGE, response.status_code) from exc
