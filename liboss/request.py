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
Request description and assembly of signed wire-level request.

A `Request` describes one OSS call independent of any endpoint or
credentials. `assemble()` turns it into a `SignedRequest` carrying the
final headers, host and path, ready for an `HttpTransport`.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from . import time
from .config import Config
from .helpers import (SubResource, get_header, get_host, get_path,
                      get_resource, md5sum_hash, quote)
from .signer import get_authorization, get_string_to_sign, sign

METHODS = ("GET", "PUT", "POST", "DELETE", "HEAD", "OPTIONS", "PATCH")
SCHEMES = ("https", "http", "rtmp")
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Headers computed by assemble(); caller copies of them are dropped.
_BUILT_HEADERS = (
    "host", "content-type", "content-md5", "content-length", "date",
)

# Built-in table only, system mime.types files are not read.
_MIME_TYPES = mimetypes.MimeTypes()

Header = Tuple[str, str]


@dataclass(frozen=True)
class Request:
    """Describes a single OSS request before signing."""

    method: str
    bucket_name: str = ""
    object_name: str = ""
    sub_resources: Tuple[SubResource, ...] = ()
    params: Mapping[str, str] = field(default_factory=dict, hash=False)
    headers: Tuple[Header, ...] = ()
    body: bytes = b""
    expires: int = 0
    host: str = ""
    scheme: str = "https"
    resource: str = field(init=False)

    def __post_init__(self):
        method = self.method.upper()
        if method not in METHODS:
            raise ValueError(f"unsupported HTTP method {self.method}")
        if self.scheme not in SCHEMES:
            raise ValueError(f"unsupported scheme {self.scheme}")
        if self.expires < 0:
            raise ValueError("expires must not be negative")
        body = self.body.encode() if isinstance(self.body, str) else self.body
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "body", body or b"")
        object.__setattr__(self, "sub_resources", tuple(self.sub_resources))
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(
            self, "params", MappingProxyType(dict(self.params)),
        )
        object.__setattr__(
            self, "resource",
            get_resource(self.bucket_name, self.object_name),
        )

    def with_headers(self, *headers: Header) -> Request:
        """Return copy with headers appended."""
        return replace(self, headers=self.headers + tuple(headers))

    def with_sub_resources(self, *sub_resources: SubResource) -> Request:
        """Return copy with sub-resources appended."""
        return replace(
            self, sub_resources=self.sub_resources + tuple(sub_resources),
        )

    def with_params(self, params: Mapping[str, str]) -> Request:
        """Return copy with query parameters merged."""
        return replace(self, params={**self.params, **params})

    def with_body(self, body: Union[str, bytes]) -> Request:
        """Return copy with body."""
        return replace(self, body=body)


@dataclass(frozen=True)
class SignedRequest:
    """Wire-level request produced by `assemble()`."""

    request: Request
    headers: Tuple[Header, ...]
    scheme: str
    host: str
    port: int
    path: str
    string_to_sign: str

    @property
    def method(self) -> str:
        """Get HTTP method."""
        return self.request.method

    @property
    def body(self) -> bytes:
        """Get request body."""
        return self.request.body

    @property
    def params(self) -> Mapping[str, str]:
        """Get unsigned query parameters."""
        return self.request.params


def guess_content_type(resource: str) -> str:
    """Guess Content-Type from extension of resource."""
    return _MIME_TYPES.guess_type(resource)[0] or DEFAULT_CONTENT_TYPE


def build_headers(
        request: Request, host: str, date: datetime,
) -> list[Header]:
    """
    Build Host, Content-Type, Content-MD5, Content-Length and Date headers
    followed by caller headers.
    """
    content_type = (
        get_header(request.headers, "Content-Type", ignore_case=True)
        or guess_content_type(request.resource)
    )
    headers = [
        ("Host", host),
        ("Content-Type", content_type),
        ("Content-MD5", md5sum_hash(request.body) if request.body else ""),
        ("Content-Length", str(len(request.body))),
        ("Date", time.to_http_header(date)),
    ]
    headers.extend(
        (key, value) for key, value in request.headers
        if key.lower() not in _BUILT_HEADERS
    )
    return headers


def assemble(
        request: Request,
        config: Config,
        date: Optional[datetime] = None,
) -> SignedRequest:
    """Sign request by config and resolve its host and path."""
    host = get_host(request.host, request.bucket_name, config.endpoint)
    headers = build_headers(request, host, date or time.utcnow())
    string_to_sign = get_string_to_sign(request, headers)
    authorization = get_authorization(
        config.access_key_id, sign(string_to_sign, config.access_key_secret),
    )
    return SignedRequest(
        request=request,
        headers=(("Authorization", authorization), *headers),
        scheme=config.scheme,
        host=host,
        port=config.port,
        path=get_path(quote(request.object_name), request.sub_resources),
        string_to_sign=string_to_sign,
    )
