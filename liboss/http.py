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

"""HTTP transport to send signed requests and classify OSS responses."""

from __future__ import absolute_import, annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

import certifi
import urllib3
from typing_extensions import Protocol
from urllib3._collections import HTTPHeaderDict
from urllib3.exceptions import HTTPError
from urllib3.util import Retry, Timeout

from . import xml
from .config import Config
from .error import (InvalidResponseError, RemoteError, TransportError,
                    XmlParseError)
from .helpers import quote

_DEFAULT_PORTS = {"http": 80, "https": 443}

UNKNOWN_ERROR_CODE = "UnknownError"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and body of HTTP response."""

    status: int
    headers: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)
    data: bytes = b""

    @property
    def ok(self) -> bool:
        """Check whether status is 2xx."""
        return 200 <= self.status < 300


class HttpTransport(Protocol):
    """typing stub for HTTP transport executing signed requests."""

    def execute(  # pylint: disable=too-many-positional-arguments
            self,
            method: str,
            scheme: str,
            host: str,
            port: int,
            path: str,
            headers: Sequence[Tuple[str, str]],
            body: bytes,
            params: Mapping[str, str],
    ) -> HttpResponse:
        """Send request and return response, raise TransportError on
        network failure."""


def build_url(
        scheme: str,
        host: str,
        port: int,
        path: str,
        params: Optional[Mapping[str, str]] = None,
) -> str:
    """Build URL of host, path and query parameters."""
    netloc = host if _DEFAULT_PORTS.get(scheme) == port else f"{host}:{port}"
    url = f"{scheme}://{netloc}{path}"
    if params:
        url += ("&" if "?" in path else "?") + urlencode(
            params, quote_via=quote,
        )
    return url


class Urllib3Transport:
    """HTTP transport over urllib3.PoolManager."""
    _http: urllib3.PoolManager

    def __init__(
            self,
            timeout: int = 300,
            max_retries: int = 5,
            cert_check: bool = True,
            http_client: Optional[urllib3.PoolManager] = None,
    ):
        # Validate http client has correct base class.
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )

        # Load CA certificates from SSL_CERT_FILE file if set
        self._http = http_client or urllib3.PoolManager(
            timeout=Timeout(connect=timeout, read=timeout),
            maxsize=10,
            cert_reqs='CERT_REQUIRED' if cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
            retries=Retry(
                total=max_retries,
                backoff_factor=0.2,
                status_forcelist=[500, 502, 503, 504]
            )
        )

    @classmethod
    def from_config(cls, config: Config) -> Urllib3Transport:
        """Create transport with connection settings of config."""
        return cls(
            timeout=config.timeout,
            max_retries=config.max_retries,
            cert_check=config.cert_check,
        )

    def __del__(self):
        if hasattr(self, "_http"):  # Only required for unit test run
            self._http.clear()

    def execute(  # pylint: disable=too-many-positional-arguments
            self,
            method: str,
            scheme: str,
            host: str,
            port: int,
            path: str,
            headers: Sequence[Tuple[str, str]],
            body: bytes,
            params: Mapping[str, str],
    ) -> HttpResponse:
        """Execute HTTP request."""
        http_headers = HTTPHeaderDict()
        for key, value in headers:
            http_headers.add(key, value)

        try:
            response = self._http.urlopen(
                method,
                build_url(scheme, host, port, path, params),
                body=body or None,
                headers=http_headers,
            )
        except HTTPError as exc:
            raise TransportError(
                f"{method} {scheme}://{host}{path} failed; {exc}",
            ) from exc

        return HttpResponse(
            status=response.status,
            headers=response.headers,
            data=response.data or b"",
        )


def _get_empty_body_error(
        status: int, bucket_name: str, object_name: str,
) -> tuple[Optional[str], Optional[str]]:
    """Get error code and message by status of response without body."""
    error_map = {
        400: lambda: ("BadRequest", "Bad request"),
        403: lambda: ("AccessDenied", "Access denied"),
        404: lambda: (
            ("NoSuchKey", "Object does not exist")
            if object_name
            else ("NoSuchBucket", "Bucket does not exist")
            if bucket_name
            else ("ResourceNotFound", "Request resource not found")
        ),
        405: lambda: (
            "MethodNotAllowed",
            "The specified method is not allowed against this resource",
        ),
        409: lambda: (
            ("BucketConflict", "Bucket conflicts with its current state")
            if bucket_name
            else ("ResourceConflict", "Request resource conflicts")
        ),
        501: lambda: (
            "MethodNotAllowed",
            "The specified method is not allowed against this resource",
        ),
    }
    func = error_map.get(status)
    return func() if func else (None, None)


def classify_response(
        response: HttpResponse,
        bucket_name: str = "",
        object_name: str = "",
        resource: Optional[str] = None,
) -> HttpResponse:
    """
    Return 2xx response as is; raise RemoteError decoded from XML error
    body, or InvalidResponseError when error body is not XML.
    """
    if response.ok:
        return response

    request_id = response.headers.get("x-oss-request-id")
    content_type = response.headers.get("content-type")

    if not response.data:
        code, message = _get_empty_body_error(
            response.status, bucket_name, object_name,
        )
        if not code:
            raise InvalidResponseError(response.status, content_type, None)
        raise RemoteError(
            code=code,
            message=message or UNKNOWN_ERROR_MESSAGE,
            request_id=request_id,
            status_code=response.status,
            resource=resource,
            headers=response.headers,
        )

    try:
        node = xml.unwrap(xml.decode(response.data))
    except XmlParseError as exc:
        raise InvalidResponseError(
            response.status,
            content_type,
            response.data.decode(errors="replace"),
        ) from exc

    raise RemoteError(
        code=xml.findtext(node, "Code") or UNKNOWN_ERROR_CODE,
        message=xml.findtext(node, "Message") or UNKNOWN_ERROR_MESSAGE,
        request_id=xml.findtext(node, "RequestId") or request_id,
        status_code=response.status,
        host_id=xml.findtext(node, "HostId"),
        resource=resource,
        headers=response.headers,
    )
