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

"""
Upload tokens for browser-based direct upload (PostObject) to OSS.

A token is a JSON document carrying the access key ID, the upload host,
a Base64 encoded policy, its signature and optional Base64 encoded
callback settings. Refer
https://help.aliyun.com/document_detail/31926.html for more information.
"""

from __future__ import absolute_import, annotations

import base64
import json
from datetime import datetime, timedelta
from typing import Any, Optional

from . import time
from .config import Config
from .error import EncodingError
from .signer import sign_policy

DEFAULT_EXPIRE_SECONDS = 3600

CALLBACK_BODY = (
    "filename=${object}&size=${size}&mimeType=${mimeType}"
    "&height=${imageInfo.height}&width=${imageInfo.width}\n"
)
CALLBACK_BODY_TYPE = "application/x-www-form-urlencoded"


def _encode_json(value: Any, name: str) -> str:
    """Encode value to JSON text; raise EncodingError on failure."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"failed to encode {name}; {exc}") from exc


def _b64encode(value: str) -> str:
    return base64.b64encode(value.strip().encode()).decode()


def content_length_range(min_size: int, max_size: int) -> list:
    """Get policy condition limiting upload size."""
    if min_size > max_size:
        raise ValueError(
            f"minimum size {min_size} must not exceed maximum size {max_size}",
        )
    return ["content-length-range", min_size, max_size]


def starts_with_condition(prefix: str) -> list:
    """Get policy condition limiting object key prefix."""
    return ["starts-with", "$key", prefix]


def content_type_condition(content_type: str) -> list:
    """Get policy condition requiring content type."""
    return ["eq", "$content-type", content_type]


def build_policy(conditions: list, expiration: datetime) -> str:
    """Get Base64 encoded policy document."""
    policy = {
        "expiration": time.to_iso8601utc(expiration),
        "conditions": conditions,
    }
    return _b64encode(_encode_json(policy, "policy"))


def build_callback(callback_url: str) -> str:
    """Get Base64 encoded callback settings, empty for no callback URL."""
    if not callback_url:
        return ""
    callback = {
        "callbackUrl": callback_url,
        "callbackBody": CALLBACK_BODY,
        "callbackBodyType": CALLBACK_BODY_TYPE,
    }
    return _b64encode(_encode_json(callback, "callback"))


def _build_token(  # pylint: disable=too-many-positional-arguments
        config: Config,
        bucket_name: str,
        conditions: list,
        expire_seconds: int,
        directory: str,
        callback_url: str,
        now: Optional[datetime],
) -> str:
    """Build signed upload token as JSON text."""
    if expire_seconds <= 0:
        raise ValueError("expire seconds must be positive")
    expiration = (now or time.utcnow()) + timedelta(seconds=expire_seconds)
    policy = build_policy(conditions, expiration)
    token = {
        "accessid": config.access_key_id,
        "host": f"{config.scheme}://{bucket_name}.{config.endpoint}",
        "policy": policy,
        "signature": sign_policy(policy, config.access_key_secret),
        "expire": time.to_unix(expiration),
        "dir": directory,
        "callback": build_callback(callback_url),
    }
    return _encode_json(token, "token")


def get_token(  # pylint: disable=too-many-positional-arguments
        config: Config,
        bucket_name: str,
        object_prefix: str,
        expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
        callback_url: str = "",
        now: Optional[datetime] = None,
) -> str:
    """
    Get upload token allowing object keys starting with object prefix.

    Example::
        >>> token = get_token(config, "my-bucket", "uploads/")
        >>> parse_token(token)["dir"]
        'uploads/'
    """
    return _build_token(
        config,
        bucket_name,
        [starts_with_condition(object_prefix)],
        expire_seconds,
        object_prefix,
        callback_url,
        now,
    )


def get_token_with_policy(  # pylint: disable=too-many-positional-arguments
        config: Config,
        bucket_name: str,
        conditions: list,
        expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
        callback_url: str = "",
        now: Optional[datetime] = None,
) -> str:
    """Get upload token with custom policy conditions."""
    return _build_token(
        config,
        bucket_name,
        conditions,
        expire_seconds,
        "",
        callback_url,
        now,
    )


def parse_token(token: str) -> dict:
    """Parse upload token JSON text."""
    try:
        value = json.loads(token)
    except ValueError as exc:
        raise ValueError(f"failed to parse token; {exc}") from exc
    if not isinstance(value, dict):
        raise ValueError("token must be a JSON object")
    return value


def _get_expire(token: str) -> int:
    expire = parse_token(token).get("expire")
    if not isinstance(expire, int):
        raise ValueError("token does not contain expire field")
    return expire


def token_remaining_time(token: str, now: Optional[datetime] = None) -> int:
    """Get remaining seconds of token validity, zero if expired."""
    return max(0, _get_expire(token) - time.to_unix(now or time.utcnow()))


def token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """Check whether token is expired; an unreadable token is expired."""
    try:
        return token_remaining_time(token, now) == 0
    except ValueError:
        return True
