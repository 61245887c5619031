from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any
from typing import Literal

import requests

from toggl.utils import drop_unset

logger = logging.getLogger("toggl")

DEFAULT_USER_AGENT = "toggl-client"

ErrorDecoder = Callable[[requests.Response], Exception]
Timeout = float | tuple[float, float] | None


class TogglSession:
    """
    Performs the HTTP round trips shared by every Toggl API resource.

    A session is bound to one base URL and one set of basic auth credentials.
    Non-2xx responses are turned into exceptions by ``error_decoder``.
    """

    def __init__(
        self,
        base_url: str,
        auth: tuple[str, str],
        error_decoder: ErrorDecoder,
        http_client: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.error_decoder = error_decoder
        self.http_client = http_client or requests.Session()
        self.headers = {
            "Content-Type": "application/json",
            "User-Agent": DEFAULT_USER_AGENT,
        }

    def __enter__(self) -> TogglSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self.http_client.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: Literal["GET", "POST", "PUT", "DELETE"],
        path: str,
        *,
        timeout: Timeout,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Sends one request and returns the decoded JSON response."""
        if timeout is None:
            raise ContextNotFoundError("The provided timeout must be non-nil")

        url = self.url(path)
        logger.debug(f"{method} {url}")
        response = self.http_client.request(
            method,
            url,
            params=params,
            json=drop_unset(body) if body is not None else None,
            headers=self.headers,
            auth=self.auth,
            timeout=timeout,
        )
        logger.debug(f"{response.status_code} {response.reason} <- {url}")

        if response.status_code < 200 or response.status_code >= 300:
            error = self.error_decoder(response)
            logger.warning(f"{method} {url} failed: {response.status_code}")
            raise error

        data = self._decode_json(response)
        if decode is None or data is None:
            return data
        return decode(data)

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except requests.JSONDecodeError:
            msg = f"Unable to parse response as JSON: '{response.text}'"
            raise APIResponseParseError(msg)

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, body: dict[str, Any], **kwargs: Any) -> Any:
        return self.request("POST", path, body=body, **kwargs)

    def put(self, path: str, body: dict[str, Any], **kwargs: Any) -> Any:
        return self.request("PUT", path, body=body, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)


class TogglAPIException(Exception):
    pass


class ContextNotFoundError(TogglAPIException):
    pass


class APIResponseParseError(TogglAPIException):
    pass


class APITokenMissingError(TogglAPIException):
    pass
