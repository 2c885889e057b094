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

"""Helper functions."""

from __future__ import absolute_import, annotations

import base64
import hashlib
import math
import re
import urllib.parse
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

MAX_MULTIPART_COUNT = 10000  # 10000 parts
MAX_PART_SIZE = 5 * 1024 * 1024 * 1024  # 5GiB
MIN_PART_SIZE = 5 * 1024 * 1024  # 5MiB

_BUCKET_NAME_REGEX = re.compile(r'^[a-z0-9][a-z0-9\-]{1,61}[a-z0-9]$')
_AUTHORIZATION_REGEX = re.compile(r"^(OSS [^:]+:)(.+)$")
_SIGNATURE_PARAM_REGEX = re.compile(r"Signature=([^&]+)")

SubResource = Tuple[str, Optional[str]]


def quote(
        resource: str,
        safe: str = "/",
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
) -> str:
    """
    Wrapper to urllib.parse.quote() replacing back to '~' for older python
    versions.
    """
    return urllib.parse.quote(
        resource,
        safe=safe,
        encoding=encoding,
        errors=errors,
    ).replace("%7E", "~")


def queryencode(
        query: str,
        safe: str = "",
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
) -> str:
    """Encode query parameter value."""
    return quote(query, safe, encoding, errors)


def get_resource(bucket_name: str = "", object_name: str = "") -> str:
    """
    Get canonical resource of bucket and object, i.e. '/', '/{bucket}/' or
    '/{bucket}/{object}'. Object without bucket gives '/{object}'.
    """
    if not bucket_name:
        return "/" + object_name.lstrip("/")
    return f"/{bucket_name}/{object_name.lstrip('/')}"


def get_host(host: str, bucket_name: str, endpoint: str) -> str:
    """Get virtual-hosted-style host, an explicit host always wins."""
    if host:
        return host
    if not bucket_name:
        return endpoint
    return f"{bucket_name}.{endpoint}"


def encode_sub_resources(sub_resources: Iterable[SubResource]) -> str:
    """
    Render sub-resources as 'key' or 'key=value' joined by '&' in given
    order. Used for both string-to-sign and URL path.
    """
    return "&".join(
        key if value is None else f"{key}={value}"
        for key, value in sub_resources
    )


def get_path(object_name: str, sub_resources: Iterable[SubResource]) -> str:
    """Get URL path of object with sub-resources as query string."""
    path = "/" + object_name.lstrip("/")
    query = encode_sub_resources(sub_resources)
    return f"{path}?{query}" if query else path


def get_header(
        headers: Iterable[Tuple[str, str]],
        name: str,
        ignore_case: bool = False,
) -> Optional[str]:
    """Get value of first header matching name."""
    for key, value in headers:
        if key == name or (ignore_case and key.lower() == name.lower()):
            return value
    return None


def headers_to_strings(
        headers: Union[Mapping[str, str], Sequence[Tuple[str, str]]],
        redact: bool = False,
) -> str:
    """Convert HTTP headers to multi-line string."""
    items = headers.items() if isinstance(headers, Mapping) else headers
    values = []
    for key, value in items:
        if redact and key.lower() == "authorization":
            value = _AUTHORIZATION_REGEX.sub(r"\1*REDACTED*", value)
        values.append(f"{key}: {value}")
    return "\n".join(values)


def redact_query(url: str) -> str:
    """Hide signature query parameter of presigned URL."""
    return _SIGNATURE_PARAM_REGEX.sub("Signature=*REDACTED*", url)


def check_bucket_name(bucket_name: str):
    """Check whether bucket name is valid."""
    if not _BUCKET_NAME_REGEX.match(bucket_name):
        raise ValueError(f"invalid bucket name {bucket_name}")


def check_object_name(object_name: str):
    """Check whether object name is not empty."""
    if not object_name:
        raise ValueError("object name must not be empty")


def md5sum_hash(data: Union[str, bytes, None]) -> Optional[str]:
    """Compute MD5 of data and return hash as Base64 encoded value."""
    if data is None:
        return None

    # indicate md5 hashing algorithm is not used in a security context.
    # Refer https://bugs.python.org/issue9216 for more information.
    hasher = hashlib.new(  # type: ignore[call-arg]
        "md5",
        usedforsecurity=False,
    )
    hasher.update(data.encode() if isinstance(data, str) else data)
    return base64.b64encode(hasher.digest()).decode()


def calculate_part_count(
        object_size: int, part_size: int = MIN_PART_SIZE,
) -> int:
    """Compute number of parts of object for part size."""
    if part_size <= 0:
        raise ValueError(f"part size {part_size} must be positive")
    return math.ceil(object_size / part_size)


def recommended_part_size(object_size: int) -> int:
    """
    Compute smallest part size keeping part count within
    MAX_MULTIPART_COUNT, but not less than MIN_PART_SIZE.
    """
    return max(MIN_PART_SIZE, math.ceil(object_size / MAX_MULTIPART_COUNT))


def validate_multipart_params(object_size: int, part_size: int):
    """Validate object and part size for multipart upload."""
    if part_size < MIN_PART_SIZE:
        raise ValueError(
            f"part size {part_size} is not supported; minimum allowed 5MiB"
        )
    if part_size > MAX_PART_SIZE:
        raise ValueError(
            f"part size {part_size} is not supported; maximum allowed 5GiB"
        )
    part_count = calculate_part_count(object_size, part_size)
    if part_count > MAX_MULTIPART_COUNT:
        raise ValueError(
            f"object size {object_size} and part size {part_size} "
            f"make {part_count} parts; maximum allowed {MAX_MULTIPART_COUNT}"
        )


def check_part_number(part_number: int):
    """Check whether part number is in 1..MAX_MULTIPART_COUNT."""
    if not 1 <= part_number <= MAX_MULTIPART_COUNT:
        raise ValueError(
            f"part number must be between 1 and {MAX_MULTIPART_COUNT}, "
            f"got {part_number}"
        )
