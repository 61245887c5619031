from __future__ import annotations

import functools
import json
import logging
import os
from typing import Any

from toggl import reports
from toggl import track
from toggl.api import APITokenMissingError
from toggl.reports import ReportsClient
from toggl.track import TrackClient

logger = logging.getLogger("toggl")

API_TOKEN_ENV_VAR = "TOGGL_API_TOKEN"
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    pass


class Config:
    """
    Settings read from an optional JSON config file and the environment.

    ``TIMEOUT`` is not stored on the clients; pass it as ``timeout=`` to each
    client operation.
    """

    def __init__(self, config_file: str | None = None) -> None:
        self._config: dict[str, Any] = {}
        if config_file is not None:
            try:
                with open(config_file) as f:
                    self._config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Error in {config_file}: {e}")
            logger.debug(f"Using config file: {config_file}")

        self.API_TOKEN = self._get_setting(
            "api_token", os.getenv(API_TOKEN_ENV_VAR), required=False
        )
        self.EMAIL = self._get_setting("email", required=False)
        self.PASSWORD = self._get_setting("password", required=False)
        try:
            self.TIMEOUT = float(self._get_setting("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {e}")
        self._load_reports_config()
        self._load_track_config()

    def _get_setting(
        self,
        setting: str,
        default: Any | None = None,
        required: bool = True,
        cfg: dict[str, Any] | None = None,
    ) -> Any:
        _cfg = cfg if cfg is not None else self._config
        if not isinstance(_cfg, dict):
            raise ConfigError(f"Invalid config: {_cfg}")
        val = _cfg.get(setting, default)
        if required and val is None:
            raise ConfigError(f"Setting is required: {setting}")
        return val

    def _load_reports_config(self) -> None:
        _reports_cfg = self._get_setting("reports", default={})
        _get_reports_setting = functools.partial(self._get_setting, cfg=_reports_cfg)
        self.REPORTS_BASE_URL = _get_reports_setting(
            "base_url", default=reports.DEFAULT_BASE_URL
        )

    def _load_track_config(self) -> None:
        _track_cfg = self._get_setting("track", default={})
        _get_track_setting = functools.partial(self._get_setting, cfg=_track_cfg)
        self.TRACK_BASE_URL = _get_track_setting(
            "base_url", default=track.DEFAULT_BASE_URL
        )

    def _require_api_token(self) -> str:
        if not self.API_TOKEN:
            raise APITokenMissingError(
                f"'{API_TOKEN_ENV_VAR}' environment variable not set.\n"
                "Connection to Toggl's API requires an API Token which can "
                "be found in your profile settings."
            )
        return self.API_TOKEN

    def reports_client(self) -> ReportsClient:
        return ReportsClient(self._require_api_token(), base_url=self.REPORTS_BASE_URL)

    def track_client(self) -> TrackClient:
        if not self.API_TOKEN and self.EMAIL and self.PASSWORD:
            return TrackClient(
                email=self.EMAIL,
                password=self.PASSWORD,
                base_url=self.TRACK_BASE_URL,
            )
        return TrackClient(
            api_token=self._require_api_token(), base_url=self.TRACK_BASE_URL
        )
