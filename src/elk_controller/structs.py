"""Connection options for the Elk M1 client."""

from __future__ import annotations

import os
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

from elk_controller import const

__all__ = ["ConnectOptions"]

# Option field -> environment variable
_ENV_FIELDS = {
    "host": "ELK_HOST",
    "port": "ELK_PORT",
    "secure": "ELK_SECURE",
    "username": "ELK_USERNAME",
    "password": "ELK_PASSWORD",
    "keypad_code": "ELK_KEYPAD_CODE",
    "reject_unauthorized": "ELK_REJECT_UNAUTHORIZED",
    "tls_min_version": "ELK_TLS_MIN_VERSION",
    "connect_timeout": "ELK_CONNECT_TIMEOUT",
    "request_timeout": "ELK_REQUEST_TIMEOUT",
    "description_timeout": "ELK_DESCRIPTION_TIMEOUT",
    "reconnect_mode": "ELK_RECONNECT_MODE",
    "reconnect_max_attempts": "ELK_RECONNECT_MAX_ATTEMPTS",
}
_FLAG_FIELDS = ("secure", "reject_unauthorized")


class ConnectOptions(BaseModel):
    """Validated connection options."""

    host: str = const.DEFAULT_HOST
    port: int = Field(default=const.DEFAULT_PORT, ge=1, le=65535)
    secure: bool = False
    username: str | None = None
    password: str | None = None
    keypad_code: str = Field(default="", pattern=r"^\d{0,6}$")
    reject_unauthorized: bool = False
    tls_min_version: str | None = const.DEFAULT_TLS_MIN_VERSION
    connect_timeout: float = Field(default=const.DEFAULT_CONNECT_TIMEOUT, gt=0)
    request_timeout: float = Field(default=const.DEFAULT_REQUEST_TIMEOUT, gt=0)
    description_timeout: float = Field(default=const.DEFAULT_DESCRIPTION_TIMEOUT, gt=0)
    reconnect_mode: Literal["backoff", "immediate"] = "backoff"
    reconnect_max_attempts: int = Field(default=const.DEFAULT_RECONNECT_MAX_ATTEMPTS, ge=1)

    @model_validator(mode="after")
    def _check_credentials(self) -> Self:
        if self.secure and (not self.username or not self.password):
            msg = "username and password are required for a secure connection"
            raise ValueError(msg)
        return self

    @classmethod
    def from_env(cls) -> ConnectOptions:
        """Build options from the ELK_* variables currently set.

        Unset or empty variables keep the field default. Values are validated
        like any other input, so a malformed ``ELK_PORT`` raises instead of
        falling back. ``ELK_TLS_MIN_VERSION=null`` disables the minimum.
        """
        values: dict[str, object] = {}
        for field, name in _ENV_FIELDS.items():
            raw = os.environ.get(name)
            if not raw:
                continue
            if field in _FLAG_FIELDS:
                values[field] = raw.casefold() in const.YES_ANSWER
            elif field == "reconnect_mode":
                values[field] = raw.casefold()
            elif field == "tls_min_version" and raw.lower() == "null":
                values[field] = None
            else:
                values[field] = raw
        return cls.model_validate(values)
