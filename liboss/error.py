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
liboss.error
~~~~~~~~~~~~~~~~~~~

This module provides custom exception classes for LibOss library
and API specific errors.

:copyright: (c) 2025 by LibOss Authors.
:license: Apache 2.0, see LICENSE for more details.

"""

from __future__ import absolute_import, annotations

from typing import Mapping, Optional


class LibOssException(Exception):
    """Base LibOss exception."""


class ConfigError(LibOssException):
    """Raised to indicate missing or invalid credentials or endpoint."""


class EncodingError(LibOssException):
    """Raised to indicate JSON encoding failure of policy or callback."""


class XmlParseError(LibOssException):
    """Raised to indicate malformed XML in a response body."""

    def __init__(self, message: str, xml: Optional[str] = None):
        self._xml = xml
        super().__init__(message)

    @property
    def xml(self) -> Optional[str]:
        """Get XML text failed to parse."""
        return self._xml

    def __reduce__(self):
        return type(self), (str(self), self._xml)


class TransportError(LibOssException):
    """Raised to indicate network level failure of HTTP transport."""


class InvalidResponseError(LibOssException):
    """Raised to indicate that non-xml error response from server."""

    def __init__(
            self,
            status_code: int,
            content_type: Optional[str],
            body: Optional[str],
    ):
        self._status_code = status_code
        self._content_type = content_type
        self._body = body
        super().__init__(
            f"HTTP {status_code}: non-XML response from server; "
            f"Content-Type: {content_type}, Body: {body}"
        )

    @property
    def status_code(self) -> int:
        """Get HTTP status code."""
        return self._status_code

    @property
    def body(self) -> Optional[str]:
        """Get response body."""
        return self._body

    def __reduce__(self):
        return type(self), (self._status_code, self._content_type, self._body)


class RemoteError(LibOssException):
    """
    Raised to indicate that error response is received
    when executing OSS operation.
    """

    def __init__(  # pylint: disable=too-many-positional-arguments
            self,
            code: str,
            message: str,
            request_id: Optional[str],
            status_code: int,
            host_id: Optional[str] = None,
            resource: Optional[str] = None,
            headers: Optional[Mapping[str, str]] = None,
    ):
        self._code = code
        self._message = message
        self._request_id = request_id
        self._status_code = status_code
        self._host_id = host_id
        self._resource = resource
        self._headers = headers
        super().__init__(
            f"{code}: {message}; status_code: {status_code}, "
            f"request_id: {request_id}, host_id: {host_id}, "
            f"resource: {resource}"
        )

    @property
    def code(self) -> str:
        """Get error code."""
        return self._code

    @property
    def message(self) -> str:
        """Get error message."""
        return self._message

    @property
    def request_id(self) -> Optional[str]:
        """Get request ID."""
        return self._request_id

    @property
    def status_code(self) -> int:
        """Get HTTP status code."""
        return self._status_code

    @property
    def host_id(self) -> Optional[str]:
        """Get host ID."""
        return self._host_id

    @property
    def resource(self) -> Optional[str]:
        """Get resource."""
        return self._resource

    @property
    def headers(self) -> Optional[Mapping[str, str]]:
        """Get response headers."""
        return self._headers

    def __reduce__(self):
        return type(self), (
            self._code, self._message, self._request_id, self._status_code,
            self._host_id, self._resource,
        )

    def __repr__(self):
        return (
            f"RemoteError(code={self._code!r}, message={self._message!r}, "
            f"request_id={self._request_id!r}, "
            f"status_code={self._status_code!r})"
        )

    def __eq__(self, other):
        if not isinstance(other, RemoteError):
            return NotImplemented
        return (
            self.code == other.code
            and self.message == other.message
            and self.request_id == other.request_id
            and self.status_code == other.status_code
            and self.host_id == other.host_id
            and self.resource == other.resource
        )

    def __hash__(self):
        return hash(
            (
                self.code,
                self.message,
                self.request_id,
                self.status_code,
                self.host_id,
                self.resource,
            )
        )
