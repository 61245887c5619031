"""
Client for the Toggl Reports API v2.

Three reports are available: detailed, summary and weekly. Each report has its
own response structure, which this module does not define. Callers pass a
``decode`` callable that turns the decoded JSON into their own structure; by
default the JSON is returned as is.

https://github.com/toggl/toggl_api_docs/blob/master/reports.md
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import date
from http import HTTPStatus
from typing import Any
from typing import NamedTuple

import requests

from toggl.api import Timeout
from toggl.api import TogglAPIException
from toggl.api import TogglSession
from toggl.utils import add_flag
from toggl.utils import add_value
from toggl.utils import format_date

DEFAULT_BASE_URL = "https://toggl.com"
# Defined by the Reports API
BASIC_AUTH_PASSWORD = "api_token"

DETAILED_ENDPOINT = "/reports/api/v2/details"
SUMMARY_ENDPOINT = "/reports/api/v2/summary"
WEEKLY_ENDPOINT = "/reports/api/v2/weekly"


class StandardRequestParameters(NamedTuple):
    """Request parameters shared by all of the reports."""

    user_agent: str
    workspace_id: str
    since: date | None = None
    until: date | None = None
    billable: str = ""
    client_ids: str = ""
    project_ids: str = ""
    user_ids: str = ""
    members_of_group_ids: str = ""
    or_members_of_group_ids: str = ""
    tag_ids: str = ""
    task_ids: str = ""
    time_entry_ids: str = ""
    description: str = ""
    without_description: bool = False
    order_field: str = ""
    order_desc: bool = False
    distinct_rates: bool = False
    rounding: bool = False
    display_hours: str = ""

    def values(self) -> dict[str, str]:
        # user_agent and workspace_id are required
        params = {
            "user_agent": self.user_agent,
            "workspace_id": self.workspace_id,
        }
        if self.since is not None:
            params["since"] = format_date(self.since)
        if self.until is not None:
            params["until"] = format_date(self.until)
        add_value(params, "billable", self.billable)
        add_value(params, "client_ids", self.client_ids)
        add_value(params, "project_ids", self.project_ids)
        add_value(params, "user_ids", self.user_ids)
        add_value(params, "members_of_group_ids", self.members_of_group_ids)
        add_value(params, "or_members_of_group_ids", self.or_members_of_group_ids)
        add_value(params, "tag_ids", self.tag_ids)
        add_value(params, "task_ids", self.task_ids)
        add_value(params, "time_entry_ids", self.time_entry_ids)
        add_value(params, "description", self.description)
        add_flag(params, "without_description", self.without_description, "true")
        add_value(params, "order_field", self.order_field)
        add_flag(params, "order_desc", self.order_desc, "on")
        add_flag(params, "distinct_rates", self.distinct_rates, "on")
        add_flag(params, "rounding", self.rounding, "on")
        add_value(params, "display_hours", self.display_hours)
        return params


class DetailedRequestParameters(NamedTuple):
    standard: StandardRequestParameters
    page: int = 0

    def values(self) -> dict[str, str]:
        params = self.standard.values()
        add_value(params, "page", self.page)
        return params


class SummaryRequestParameters(NamedTuple):
    standard: StandardRequestParameters
    grouping: str = ""
    subgrouping: str = ""
    subgrouping_ids: bool = False
    grouped_time_entry_ids: bool = False

    def values(self) -> dict[str, str]:
        params = self.standard.values()
        add_value(params, "grouping", self.grouping)
        add_value(params, "subgrouping", self.subgrouping)
        add_flag(params, "subgrouping_ids", self.subgrouping_ids, "true")
        add_flag(
            params, "grouped_time_entry_ids", self.grouped_time_entry_ids, "true"
        )
        return params


class WeeklyRequestParameters(NamedTuple):
    standard: StandardRequestParameters
    grouping: str = ""
    calculate: str = ""

    def values(self) -> dict[str, str]:
        params = self.standard.values()
        add_value(params, "grouping", self.grouping)
        add_value(params, "calculate", self.calculate)
        return params


class ReportsError(TogglAPIException):
    """An unsuccessful response of the Reports API."""

    def __init__(self, message: str, tip: str, code: int) -> None:
        super().__init__(message)
        self.message = message
        self.tip = tip
        self.code = code

    def __str__(self) -> str:
        return f"HTTP Status: {self.code}\n{self.message}\n\n{self.tip}\n"

    @classmethod
    def from_response(cls, response: requests.Response) -> ReportsError:
        try:
            err = response.json().get("error")
        except (requests.JSONDecodeError, AttributeError):
            err = None
        if isinstance(err, dict):
            try:
                code = int(err.get("code", response.status_code))
            except (TypeError, ValueError):
                code = response.status_code
            return cls(
                err.get("message") or response.reason or "",
                err.get("tip") or "",
                code,
            )
        # Rate limited requests are answered with an HTML page
        if response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
            return cls(
                "Too Many Requests",
                "Add delay between requests",
                response.status_code,
            )
        return cls(response.reason or "", "", response.status_code)


class ReportsClient:
    def __init__(
        self,
        api_token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        http_client: requests.Session | None = None,
    ) -> None:
        self.api_token = api_token
        self.session = TogglSession(
            base_url,
            (api_token, BASIC_AUTH_PASSWORD),
            ReportsError.from_response,
            http_client,
        )

    def __enter__(self) -> ReportsClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def get_detailed(
        self,
        params: DetailedRequestParameters,
        *,
        timeout: Timeout,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        return self.session.get(
            DETAILED_ENDPOINT, params.values(), timeout=timeout, decode=decode
        )

    def get_summary(
        self,
        params: SummaryRequestParameters,
        *,
        timeout: Timeout,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        return self.session.get(
            SUMMARY_ENDPOINT, params.values(), timeout=timeout, decode=decode
        )

    def get_weekly(
        self,
        params: WeeklyRequestParameters,
        *,
        timeout: Timeout,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        return self.session.get(
            WEEKLY_ENDPOINT, params.values(), timeout=timeout, decode=decode
        )
