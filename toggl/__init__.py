from toggl.api import APIResponseParseError
from toggl.api import APITokenMissingError
from toggl.api import ContextNotFoundError
from toggl.api import TogglAPIException
from toggl.api import TogglSession
from toggl.config import Config
from toggl.config import ConfigError
from toggl.reports import DetailedRequestParameters
from toggl.reports import ReportsClient
from toggl.reports import ReportsError
from toggl.reports import StandardRequestParameters
from toggl.reports import SummaryRequestParameters
from toggl.reports import WeeklyRequestParameters
from toggl.track import CreateTagRequestBody
from toggl.track import ErrorResponse
from toggl.track import Tag
from toggl.track import TrackClient
from toggl.track import UpdateTagRequestBody

__all__ = [
    "APIResponseParseError",
    "APITokenMissingError",
    "Config",
    "ConfigError",
    "ContextNotFoundError",
    "CreateTagRequestBody",
    "DetailedRequestParameters",
    "ErrorResponse",
    "ReportsClient",
    "ReportsError",
    "StandardRequestParameters",
    "SummaryRequestParameters",
    "Tag",
    "TogglAPIException",
    "TogglSession",
    "TrackClient",
    "UpdateTagRequestBody",
    "WeeklyRequestParameters",
]
