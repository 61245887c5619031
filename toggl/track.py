from __future__ import annotations

from datetime import datetime
from typing import Any
from typing import NamedTuple

import requests

from toggl.api import APIResponseParseError
from toggl.api import Timeout
from toggl.api import TogglAPIException
from toggl.api import TogglSession
from toggl.utils import parse_datetime

DEFAULT_BASE_URL = "https://api.track.toggl.com"
BASIC_AUTH_PASSWORD = "api_token"
WORKSPACES_PATH = "api/v9/workspaces"


class Tag(NamedTuple):
    id: int | None = None
    workspace_id: int | None = None
    name: str | None = None
    at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tag:
        try:
            at = parse_datetime(data.get("at"))
            deleted_at = parse_datetime(data.get("deleted_at"))
        except ValueError as e:
            raise APIResponseParseError(f"Unable to parse tag: {e}")
        return cls(
            id=data.get("id"),
            workspace_id=data.get("workspace_id"),
            name=data.get("name"),
            at=at,
            deleted_at=deleted_at,
        )


class CreateTagRequestBody(NamedTuple):
    name: str | None = None
    workspace_id: int | None = None


class UpdateTagRequestBody(NamedTuple):
    name: str | None = None
    workspace_id: int | None = None


class ErrorResponse(TogglAPIException):
    """An unsuccessful response of the Track API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code, message)
        self.status_code = status_code
        self.message = message
        self.headers = headers or {}

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    @classmethod
    def from_response(cls, response: requests.Response) -> ErrorResponse:
        return cls(response.status_code, response.text, dict(response.headers))


def _tags_path(workspace_id: int, tag_id: int | None = None) -> str:
    path = f"{WORKSPACES_PATH}/{workspace_id}/tags"
    if tag_id is not None:
        path = f"{path}/{tag_id}"
    return path


class TrackClient:
    def __init__(
        self,
        *,
        api_token: str | None = None,
        email: str | None = None,
        password: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        http_client: requests.Session | None = None,
    ) -> None:
        if api_token:
            auth = (api_token, BASIC_AUTH_PASSWORD)
        elif email and password:
            auth = (email, password)
        else:
            raise ValueError("Either an API token or email and password is required")
        self.session = TogglSession(
            base_url, auth, ErrorResponse.from_response, http_client
        )

    def __enter__(self) -> TrackClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def get_tags(self, workspace_id: int, *, timeout: Timeout) -> list[Tag]:
        """Lists workspace tags."""
        tags = self.session.get(_tags_path(workspace_id), timeout=timeout)
        return [Tag.from_dict(tag) for tag in tags or []]

    def create_tag(
        self,
        workspace_id: int,
        body: CreateTagRequestBody,
        *,
        timeout: Timeout,
    ) -> Tag:
        return self.session.post(
            _tags_path(workspace_id),
            body._asdict(),
            timeout=timeout,
            decode=Tag.from_dict,
        )

    def update_tag(
        self,
        workspace_id: int,
        tag_id: int,
        body: UpdateTagRequestBody,
        *,
        timeout: Timeout,
    ) -> Tag:
        return self.session.put(
            _tags_path(workspace_id, tag_id),
            body._asdict(),
            timeout=timeout,
            decode=Tag.from_dict,
        )

    def delete_tag(self, workspace_id: int, tag_id: int, *, timeout: Timeout) -> None:
        self.session.delete(_tags_path(workspace_id, tag_id), timeout=timeout)
