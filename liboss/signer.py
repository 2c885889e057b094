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
liboss.signer
~~~~~~~~~~~~~~~

This module implements all helpers for OSS header signature version '1'
support.

:copyright: (c) 2025 by LibOss Authors.
:license: Apache 2.0, see LICENSE for more details.

"""

from __future__ import absolute_import, annotations

import base64
import hashlib
import hmac
from typing import TYPE_CHECKING, Iterable, Mapping, Tuple, Union

from .helpers import SubResource, encode_sub_resources, get_header

if TYPE_CHECKING:
    from .request import Request

OSS_HEADER_PREFIX = "x-oss-"

Headers = Iterable[Tuple[str, str]]


def sign(message: Union[str, bytes], secret: str) -> str:
    """Return Base64 encoded HMAC-SHA1 digest of message by secret."""
    if isinstance(message, str):
        message = message.encode()
    digest = hmac.new(secret.encode(), message, hashlib.sha1).digest()
    return base64.b64encode(digest).decode()


def get_canonicalized_oss_headers(headers: Headers) -> str:
    """
    Get 'x-oss-' prefixed headers as lower-cased 'name:value' lines.
    Order of headers is kept as given.
    """
    lines = [
        f"{key.lower()}:{value}" for key, value in headers
        if key.lower().startswith(OSS_HEADER_PREFIX)
    ]
    return "".join(line + "\n" for line in lines)


def get_canonicalized_resource(
        resource: str, sub_resources: Iterable[SubResource],
) -> str:
    """Get resource with sub-resources as query string."""
    query = encode_sub_resources(sub_resources)
    return f"{resource}?{query}" if query else resource


def get_canonicalized_query_params(params: Mapping[str, str]) -> str:
    """Get query parameters as 'key:value' lines for RTMP signing."""
    return "".join(f"{key}:{value}\n" for key, value in params.items())


def get_string_to_sign(request: Request, headers: Headers) -> str:
    """Get string-to-sign of request with final headers."""
    headers = list(headers)
    resource = get_canonicalized_resource(
        request.resource, request.sub_resources,
    )

    if request.scheme == "rtmp":
        return (
            f"{request.expires}\n"
            f"{get_canonicalized_query_params(request.params)}"
            f"{resource}"
        )

    # StringToSign =
    #   VERB + "\n" +
    #   Content-MD5 + "\n" +
    #   Content-Type + "\n" +
    #   Date + "\n" +
    #   CanonicalizedOSSHeaders +
    #   CanonicalizedResource
    date = (
        str(request.expires) if request.expires
        else get_header(headers, "Date") or ""
    )
    return (
        f"{request.method}\n"
        f"{get_header(headers, 'Content-MD5') or ''}\n"
        f"{get_header(headers, 'Content-Type') or ''}\n"
        f"{date}\n"
        f"{get_canonicalized_oss_headers(headers)}"
        f"{resource}"
    )


def get_authorization(access_key_id: str, signature: str) -> str:
    """Get Authorization header value."""
    return f"OSS {access_key_id}:{signature}"


def sign_request(
        request: Request,
        headers: Headers,
        access_key_id: str,
        access_key_secret: str,
) -> str:
    """Do signature V1 of given request and return Authorization value."""
    signature = sign(get_string_to_sign(request, headers), access_key_secret)
    return get_authorization(access_key_id, signature)


def sign_policy(policy: Union[str, bytes], access_key_secret: str) -> str:
    """Sign Base64 encoded policy document for browser-based upload."""
    return sign(policy, access_key_secret)


def presign_url_query(
        request: Request,
        access_key_id: str,
        access_key_secret: str,
) -> dict[str, str]:
    """Get query parameters of presigned URL of request."""
    if request.expires <= 0:
        raise ValueError("expires must be set to sign URL")
    signature = sign(
        get_string_to_sign(request, request.headers), access_key_secret,
    )
    return {
        "OSSAccessKeyId": access_key_id,
        "Expires": str(request.expires),
        "Signature": signature,
    }
