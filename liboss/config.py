# -*- coding: utf-8 -*-
# LibOss Python Library for Aliyun Object Storage Service, (C)
# 2025 LibOss Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Endpoint and credential configuration to access OSS service."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .error import ConfigError

ENV_PREFIX = "LIBOSS_"
_ACCESS_KEY_ID_REGEX = re.compile(r"^[A-Za-z0-9_]+$")
_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


@dataclass(frozen=True)
class Config:
    """
    Represents OSS endpoint, access key ID and access key secret with
    connection settings.
    """

    endpoint: str
    access_key_id: str
    access_key_secret: str
    secure: bool = True
    timeout: int = 300
    max_retries: int = 5
    cert_check: bool = True

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigError("endpoint must not be empty")

        if self.endpoint.startswith(("http://", "https://")):
            raise ConfigError(
                f"endpoint {self.endpoint} must not include protocol",
            )

        if not self.access_key_id:
            raise ConfigError("access key ID must not be empty")

        if not self.access_key_secret:
            raise ConfigError("access key secret must not be empty")

        if self.timeout <= 0:
            raise ConfigError(f"timeout {self.timeout} must be positive")

        if self.max_retries < 0:
            raise ConfigError(
                f"max retries {self.max_retries} must not be negative",
            )

    @property
    def scheme(self) -> str:
        """Get URL scheme."""
        return "https" if self.secure else "http"

    @property
    def port(self) -> int:
        """Get port of URL scheme."""
        return 443 if self.secure else 80

    def check_format(self):
        """Check endpoint and credentials against OSS naming rules."""
        if "." not in self.endpoint:
            raise ConfigError(f"invalid endpoint {self.endpoint}")

        if len(self.access_key_id) < 10:
            raise ConfigError("access key ID is too short")

        if not _ACCESS_KEY_ID_REGEX.match(self.access_key_id):
            raise ConfigError("access key ID has invalid characters")

        if len(self.access_key_secret) < 20:
            raise ConfigError("access key secret is too short")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Config:
        """Create config from LIBOSS_* environment variables."""
        environ = os.environ if environ is None else environ

        def getenv(name: str) -> Optional[str]:
            return environ.get(ENV_PREFIX + name) or None

        kwargs = {}
        for name, key in (("TIMEOUT", "timeout"),
                          ("MAX_RETRIES", "max_retries")):
            value = getenv(name)
            if value is not None:
                try:
                    kwargs[key] = int(value)
                except ValueError as exc:
                    raise ConfigError(
                        f"invalid {ENV_PREFIX}{name} value {value}",
                    ) from exc

        value = getenv("SSL_VERIFY")
        if value is not None:
            if value.lower() in _TRUE_VALUES:
                kwargs["cert_check"] = True
            elif value.lower() in _FALSE_VALUES:
                kwargs["cert_check"] = False
            else:
                raise ConfigError(
                    f"invalid {ENV_PREFIX}SSL_VERIFY value {value}",
                )

        return cls(
            endpoint=getenv("ENDPOINT") or "",
            access_key_id=getenv("ACCESS_KEY_ID") or "",
            access_key_secret=getenv("ACCESS_KEY_SECRET") or "",
            **kwargs,
        )
