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

# pylint: disable=too-many-lines,too-many-public-methods
# pylint: disable=too-many-positional-arguments

"""
Simple Storage Service (aka OSS) client to perform bucket and object
operations.
"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Mapping, Optional, TextIO, Union
from urllib.parse import unquote

from urllib3._collections import HTTPHeaderDict

from . import time, token
from .commonconfig import (LRS, STANDARD, CompleteMultipartUpload,
                           CreateBucketConfiguration, DeleteRequest, Tagging,
                           Tags, check_bucket_acl, check_object_acl)
from .config import Config
from .datatypes import (AccessControlPolicy, BucketInfo, BucketStat,
                        CompleteMultipartUploadResult, DeleteResult,
                        InitiateMultipartUploadResult,
                        ListMultipartUploadsResult, ListObjectsResult,
                        ListObjectsV2Result, ListPartsResult)
from .error import RemoteError
from .helpers import (check_bucket_name, check_object_name, check_part_number,
                      get_header, get_host, get_path, headers_to_strings,
                      quote, redact_query)
from .http import (HttpResponse, HttpTransport, Urllib3Transport, build_url,
                   classify_response)
from .request import Request, SignedRequest, assemble
from .signer import presign_url_query
from .xml import findtext, marshal, unmarshal

_SYMLINK_TARGET_HEADER = "x-oss-symlink-target"
_USER_METADATA_PREFIX = "x-oss-meta-"
_MAX_PRESIGN_EXPIRY = timedelta(days=7)

HeaderMap = Optional[Mapping[str, str]]


@dataclass(frozen=True)
class ObjectWriteResult:
    """Result of any APIs doing object creation."""
    bucket_name: str
    object_name: str
    etag: Optional[str]
    request_id: Optional[str]
    http_headers: HTTPHeaderDict
    next_position: Optional[int] = None


@dataclass(frozen=True)
class SymlinkMeta:
    """Target and response headers of symlink."""
    target: str
    http_headers: HTTPHeaderDict


def _header_items(headers: HeaderMap) -> tuple[tuple[str, str], ...]:
    return tuple((headers or {}).items())


def _metadata_headers(metadata: HeaderMap) -> tuple[tuple[str, str], ...]:
    """Convert user metadata to x-oss-meta-* headers."""
    return tuple(
        (
            key if key.lower().startswith(_USER_METADATA_PREFIX)
            else _USER_METADATA_PREFIX + key,
            str(value),
        )
        for key, value in (metadata or {}).items()
    )


class Oss:
    """
    Aliyun Object Storage Service client to perform bucket and object
    operations.
    """
    _config: Config
    _transport: HttpTransport
    _trace_stream: Optional[TextIO]

    def __init__(
            self,
            config: Config,
            transport: Optional[HttpTransport] = None,
    ):
        """
        Initializes a new Oss client object.

        Args:
            config (Config):
                Endpoint, credentials and connection settings.

            transport (Optional[HttpTransport], default=None):
                Customized HTTP transport; `Urllib3Transport` of config
                connection settings is used by default.

        Notes:
            The `Oss` object is thread-safe when used with the Python
            `threading` library.

        Example:
            >>> from liboss import Config, Oss
            >>>
            >>> client = Oss(
            ...     Config(
            ...         endpoint="oss-cn-hangzhou.aliyuncs.com",
            ...         access_key_id="ACCESS-KEY-ID",
            ...         access_key_secret="ACCESS-KEY-SECRET",
            ...     ),
            ... )
        """
        self._config = config
        self._transport = transport or Urllib3Transport.from_config(config)
        self._trace_stream = None

    @classmethod
    def from_env(cls, transport: Optional[HttpTransport] = None) -> Oss:
        """Create client with config from LIBOSS_* environment variables."""
        return cls(Config.from_env(), transport)

    @property
    def config(self) -> Config:
        """Get config."""
        return self._config

    def trace_on(self, stream: TextIO):
        """
        Enable http trace.

        Args:
            stream (TextIO):
                Stream for writing HTTP call tracing.

        Example:
            >>> client.trace_on(sys.stdout)
        """
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        # Save new output stream.
        self._trace_stream = stream

    def trace_off(self):
        """Disable HTTP trace."""
        self._trace_stream = None

    def _trace_request(self, signed: SignedRequest):
        """Write request line, headers and string-to-sign to trace."""
        if not self._trace_stream:
            return
        query = "&".join(
            f"{key}={value}" for key, value in signed.params.items()
        )
        separator = "&" if "?" in signed.path else "?"
        self._trace_stream.write("---------START-HTTP---------\n")
        self._trace_stream.write(
            f"{signed.method} {signed.path}"
            f"{separator + query if query else ''} HTTP/1.1\n"
        )
        self._trace_stream.write(
            headers_to_strings(signed.headers, redact=True),
        )
        self._trace_stream.write("\n")
        self._trace_stream.write("\nStringToSign:\n")
        self._trace_stream.write(signed.string_to_sign)
        self._trace_stream.write("\n\n")

    def _trace_response(self, method: str, response: HttpResponse):
        """Write response status, headers and error body to trace."""
        if not self._trace_stream:
            return
        self._trace_stream.write(f"HTTP/1.1 {response.status}\n")
        self._trace_stream.write(headers_to_strings(response.headers))
        self._trace_stream.write("\n")
        if not response.ok and method != "HEAD" and response.data:
            self._trace_stream.write("\n")
            self._trace_stream.write(response.data.decode(errors="replace"))
            self._trace_stream.write("\n")
        self._trace_stream.write("----------END-HTTP----------\n")

    def _execute(self, request: Request) -> HttpResponse:
        """Sign and send request, raise error on failure response."""
        signed = assemble(request, self._config)
        self._trace_request(signed)
        response = self._transport.execute(
            signed.method,
            signed.scheme,
            signed.host,
            signed.port,
            signed.path,
            signed.headers,
            signed.body,
            signed.params,
        )
        self._trace_response(signed.method, response)
        return classify_response(
            response,
            bucket_name=request.bucket_name,
            object_name=request.object_name,
            resource=request.resource,
        )

    @staticmethod
    def _write_result(
            request: Request, response: HttpResponse,
    ) -> ObjectWriteResult:
        etag = response.headers.get("etag")
        position = response.headers.get("x-oss-next-append-position")
        return ObjectWriteResult(
            bucket_name=request.bucket_name,
            object_name=request.object_name,
            etag=etag.replace('"', "") if etag else None,
            request_id=response.headers.get("x-oss-request-id"),
            http_headers=response.headers,
            next_position=int(position) if position else None,
        )

    # Objects

    def put_object(
            self,
            bucket_name: str,
            object_name: str,
            data: Union[bytes, str],
            headers: HeaderMap = None,
            metadata: HeaderMap = None,
    ) -> ObjectWriteResult:
        """
        Uploads data to an object in a bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            data (Union[bytes, str]):
                Object content.

            headers (Optional[Mapping[str, str]], default=None):
                Additional headers, e.g. Content-Type or x-oss-object-acl.

            metadata (Optional[Mapping[str, str]], default=None):
                User metadata sent as x-oss-meta-* headers.

        Returns:
            ObjectWriteResult:
                The result of the object creation operation.

        Example:
            >>> result = client.put_object(
            ...     "my-bucket", "my-object", b"hello",
            ... )
            >>> print(result.etag)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        request = Request(
            "PUT",
            bucket_name,
            object_name,
            headers=_header_items(headers) + _metadata_headers(metadata),
            body=data,
        )
        return self._write_result(request, self._execute(request))

    def get_object(
            self,
            bucket_name: str,
            object_name: str,
            offset: int = 0,
            length: Optional[int] = None,
            headers: HeaderMap = None,
    ) -> bytes:
        """
        Gets data of an object, optionally a byte range of it.

        Example:
            >>> data = client.get_object("my-bucket", "my-object")
            >>> data = client.get_object(
            ...     "my-bucket", "my-object", offset=10, length=100,
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if offset < 0:
            raise ValueError("offset must not be negative")
        if length is not None and length <= 0:
            raise ValueError("length must be greater than zero")
        items = _header_items(headers)
        if offset or length is not None:
            end = (offset + length - 1) if length is not None else ""
            items += (("Range", f"bytes={offset}-{end}"),)
        request = Request("GET", bucket_name, object_name, headers=items)
        return self._execute(request).data

    def copy_object(
            self,
            bucket_name: str,
            object_name: str,
            source_object_name: str,
            source_bucket_name: Optional[str] = None,
            headers: HeaderMap = None,
    ) -> ObjectWriteResult:
        """
        Create an object by server-side copying data from another object.
        Source bucket defaults to destination bucket.

        Example:
            >>> result = client.copy_object(
            ...     "my-bucket", "my-object", "source-object",
            ...     source_bucket_name="source-bucket",
            ... )
        """
        source_bucket_name = source_bucket_name or bucket_name
        check_bucket_name(bucket_name)
        check_bucket_name(source_bucket_name)
        check_object_name(object_name)
        check_object_name(source_object_name)
        source = (
            f"/{source_bucket_name}/"
            f"{quote(source_object_name.lstrip('/'))}"
        )
        request = Request(
            "PUT",
            bucket_name,
            object_name,
            headers=(("x-oss-copy-source", source),) + _header_items(headers),
        )
        return self._write_result(request, self._execute(request))

    def delete_object(self, bucket_name: str, object_name: str):
        """
        Remove an object.

        Example:
            >>> client.delete_object("my-bucket", "my-object")
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._execute(Request("DELETE", bucket_name, object_name))

    def delete_multiple_objects(
            self,
            bucket_name: str,
            object_names: list[str],
            quiet: bool = True,
    ) -> DeleteResult:
        """
        Remove multiple objects in one request. Deleted object names are
        reported only when quiet is False.

        Example:
            >>> client.delete_multiple_objects(
            ...     "my-bucket", ["my-object1", "my-object2"],
            ... )
        """
        check_bucket_name(bucket_name)
        body = marshal(DeleteRequest(object_names, quiet))
        response = self._execute(
            Request(
                "POST",
                bucket_name,
                sub_resources=(("delete", None),),
                headers=(("Content-Type", "application/xml"),),
                body=body,
            ),
        )
        if not response.data:
            return DeleteResult()
        return unmarshal(DeleteResult, response.data)

    def append_object(
            self,
            bucket_name: str,
            object_name: str,
            position: int,
            data: Union[bytes, str],
            headers: HeaderMap = None,
    ) -> ObjectWriteResult:
        """
        Append data to an appendable object at position. The next position
        is returned in `ObjectWriteResult.next_position`.

        Example:
            >>> result = client.append_object(
            ...     "my-bucket", "my-object", 0, b"hello",
            ... )
            >>> result = client.append_object(
            ...     "my-bucket", "my-object", result.next_position, b"world",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if position < 0:
            raise ValueError(f"position {position} must not be negative")
        request = Request(
            "POST",
            bucket_name,
            object_name,
            sub_resources=(("append", None), ("position", str(position))),
            headers=_header_items(headers),
            body=data,
        )
        return self._write_result(request, self._execute(request))

    def head_object(
            self,
            bucket_name: str,
            object_name: str,
            headers: HeaderMap = None,
    ) -> HTTPHeaderDict:
        """
        Get all metadata of an object as response headers.

        Example:
            >>> headers = client.head_object("my-bucket", "my-object")
            >>> print(headers["Content-Length"])
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        return self._execute(
            Request(
                "HEAD",
                bucket_name,
                object_name,
                headers=_header_items(headers),
            ),
        ).headers

    def get_object_meta(
            self, bucket_name: str, object_name: str,
    ) -> HTTPHeaderDict:
        """Get basic metadata i.e. ETag, size and last modified time."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        return self._execute(
            Request(
                "HEAD",
                bucket_name,
                object_name,
                sub_resources=(("objectMeta", None),),
            ),
        ).headers

    def object_exists(self, bucket_name: str, object_name: str) -> bool:
        """
        Check if an object exists.

        Example:
            >>> if client.object_exists("my-bucket", "my-object"):
            ...     print("my-object exists")
        """
        try:
            self.head_object(bucket_name, object_name)
            return True
        except RemoteError as exc:
            if exc.code != "NoSuchKey":
                raise
        return False

    def get_object_size(self, bucket_name: str, object_name: str) -> int:
        """Get size of an object in bytes."""
        size = self.head_object(bucket_name, object_name).get(
            "content-length",
        )
        if size is None:
            raise ValueError("Content-Length header not found in response")
        return int(size)

    def presigned_get_object(
            self,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(hours=1),
            request_date: Optional[datetime] = None,
    ) -> str:
        """
        Get presigned URL of an object to download its data with expiry
        time.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            expires (timedelta, default=timedelta(hours=1)):
                Expiry in seconds; up to 7 days.

            request_date (Optional[datetime], default=None):
                Base time to calculate expiry; current time by default.

        Returns:
            str:
                URL string.

        Example:
            >>> url = client.presigned_get_object(
            ...     "my-bucket", "my-object", expires=timedelta(hours=2),
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if expires.total_seconds() < 1 or expires > _MAX_PRESIGN_EXPIRY:
            raise ValueError(
                "expires must be between 1 second to 7 days",
            )
        request = Request(
            "GET",
            bucket_name,
            object_name,
            expires=time.to_unix(
                (request_date or time.utcnow()) + expires,
            ),
        )
        url = build_url(
            self._config.scheme,
            get_host(request.host, bucket_name, self._config.endpoint),
            self._config.port,
            get_path(quote(object_name), request.sub_resources),
            presign_url_query(
                request,
                self._config.access_key_id,
                self._config.access_key_secret,
            ),
        )
        if self._trace_stream:
            self._trace_stream.write(f"PRESIGN {redact_query(url)}\n")
        return url

    # ACL

    def put_object_acl(self, bucket_name: str, object_name: str, acl: str):
        """
        Set ACL of an object; one of private, public-read,
        public-read-write or default.
        """
        check_object_acl(acl)
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._execute(
            Request(
                "PUT",
                bucket_name,
                object_name,
                sub_resources=(("acl", None),),
                headers=(("x-oss-object-acl", acl),),
            ),
        )

    def get_object_acl(
            self, bucket_name: str, object_name: str,
    ) -> AccessControlPolicy:
        """Get ACL of an object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._execute(
            Request(
                "GET",
                bucket_name,
                object_name,
                sub_resources=(("acl", None),),
            ),
        )
        return unmarshal(AccessControlPolicy, response.data)

    def put_bucket_acl(self, bucket_name: str, acl: str):
        """Set ACL of a bucket; one of private, public-read or
        public-read-write."""
        check_bucket_acl(acl)
        check_bucket_name(bucket_name)
        self._execute(
            Request(
                "PUT",
                bucket_name,
                sub_resources=(("acl", None),),
                headers=(("x-oss-acl", acl),),
            ),
        )

    def get_bucket_acl(self, bucket_name: str) -> AccessControlPolicy:
        """Get ACL of a bucket."""
        check_bucket_name(bucket_name)
        response = self._execute(
            Request("GET", bucket_name, sub_resources=(("acl", None),)),
        )
        return unmarshal(AccessControlPolicy, response.data)

    # Symlink

    def put_symlink(
            self,
            bucket_name: str,
            object_name: str,
            target_object_name: str,
            headers: HeaderMap = None,
    ):
        """
        Create symlink object pointing to target object.

        Example:
            >>> client.put_symlink("my-bucket", "my-link", "my-object")
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        check_object_name(target_object_name)
        self._execute(
            Request(
                "PUT",
                bucket_name,
                object_name,
                sub_resources=(("symlink", None),),
                headers=(
                    (_SYMLINK_TARGET_HEADER, quote(target_object_name)),
                ) + _header_items(headers),
            ),
        )

    def put_symlink_with_metadata(
            self,
            bucket_name: str,
            object_name: str,
            target_object_name: str,
            metadata: Mapping[str, str],
    ):
        """Create symlink object with user metadata."""
        self.put_symlink(
            bucket_name,
            object_name,
            target_object_name,
            dict(_metadata_headers(metadata)),
        )

    def get_symlink_meta(
            self, bucket_name: str, object_name: str,
    ) -> SymlinkMeta:
        """Get target and response headers of symlink object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._execute(
            Request(
                "GET",
                bucket_name,
                object_name,
                sub_resources=(("symlink", None),),
            ),
        )
        target = get_header(
            response.headers.items(), _SYMLINK_TARGET_HEADER, ignore_case=True,
        )
        if target is None:
            raise ValueError(
                f"{_SYMLINK_TARGET_HEADER} header not found in response",
            )
        return SymlinkMeta(unquote(target), response.headers)

    def get_symlink(self, bucket_name: str, object_name: str) -> str:
        """Get target object name of symlink object."""
        return self.get_symlink_meta(bucket_name, object_name).target

    def is_symlink(self, bucket_name: str, object_name: str) -> bool:
        """Check if an object is a symlink."""
        try:
            self.get_symlink_meta(bucket_name, object_name)
            return True
        except RemoteError as exc:
            if exc.code not in ("NoSuchKey", "NotSymlink"):
                raise
        return False

    # Tagging

    def put_object_tagging(
            self,
            bucket_name: str,
            object_name: str,
            tags: Mapping[str, str],
    ):
        """
        Set tags of an object; up to 10 tags.

        Example:
            >>> client.put_object_tagging(
            ...     "my-bucket", "my-object", {"Project": "Project One"},
            ... )
        """
        tags = tags if isinstance(tags, Tags) else Tags(tags)
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._execute(
            Request(
                "PUT",
                bucket_name,
                object_name,
                sub_resources=(("tagging", None),),
                headers=(("Content-Type", "application/xml"),),
                body=marshal(Tagging(tags)),
            ),
        )

    def get_object_tagging(self, bucket_name: str, object_name: str) -> Tags:
        """Get tags of an object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._execute(
            Request(
                "GET",
                bucket_name,
                object_name,
                sub_resources=(("tagging", None),),
            ),
        )
        return unmarshal(Tagging, response.data).tags

    def delete_object_tagging(self, bucket_name: str, object_name: str):
        """Remove all tags of an object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._execute(
            Request(
                "DELETE",
                bucket_name,
                object_name,
                sub_resources=(("tagging", None),),
            ),
        )

    def get_tag_count(self, bucket_name: str, object_name: str) -> int:
        """Get number of tags of an object."""
        return len(self.get_object_tagging(bucket_name, object_name))

    def has_tags(self, bucket_name: str, object_name: str) -> bool:
        """Check if an object has any tag."""
        return self.get_tag_count(bucket_name, object_name) > 0

    def update_object_tagging(
            self,
            bucket_name: str,
            object_name: str,
            tags: Mapping[str, str],
    ):
        """Add tags to an object; values of existing tags are kept."""
        existing = self.get_object_tagging(bucket_name, object_name)
        self.put_object_tagging(
            bucket_name, object_name, Tags({**tags, **existing}),
        )

    # Bucket

    def put_bucket(
            self,
            bucket_name: str,
            storage_class: str = STANDARD,
            data_redundancy_type: str = LRS,
            headers: HeaderMap = None,
    ):
        """
        Create a bucket with storage class and data redundancy type.

        Example:
            >>> client.put_bucket("my-bucket")
            >>> client.put_bucket("my-bucket", storage_class="IA")
        """
        configuration = CreateBucketConfiguration(
            storage_class, data_redundancy_type,
        )
        check_bucket_name(bucket_name)
        self._execute(
            Request(
                "PUT",
                bucket_name,
                headers=(
                    ("Content-Type", "application/xml"),
                ) + _header_items(headers),
                body=marshal(configuration),
            ),
        )

    def delete_bucket(self, bucket_name: str):
        """Remove an empty bucket."""
        check_bucket_name(bucket_name)
        self._execute(Request("DELETE", bucket_name))

    def get_bucket(
            self,
            bucket_name: str,
            params: Optional[Mapping[str, str]] = None,
    ) -> ListObjectsResult:
        """
        List objects of a bucket by ListObjects (version 1) API.

        Args:
            bucket_name (str):
                Name of the bucket.

            params (Optional[Mapping[str, str]], default=None):
                Query parameters prefix, marker, delimiter, max-keys and
                encoding-type.

        Returns:
            ListObjectsResult:
                Objects and common prefixes of one page.
        """
        check_bucket_name(bucket_name)
        response = self._execute(
            Request("GET", bucket_name, params=params or {}),
        )
        return unmarshal(ListObjectsResult, response.data)

    def list_objects_v2(
            self,
            bucket_name: str,
            params: Optional[Mapping[str, str]] = None,
    ) -> ListObjectsV2Result:
        """
        List objects of a bucket by ListObjectsV2 API; params are prefix,
        continuation-token, start-after, delimiter, max-keys and
        encoding-type.
        """
        check_bucket_name(bucket_name)
        response = self._execute(
            Request(
                "GET",
                bucket_name,
                params={**(params or {}), "list-type": "2"},
            ),
        )
        return unmarshal(ListObjectsV2Result, response.data)

    def get_bucket_info(self, bucket_name: str) -> BucketInfo:
        """Get information of a bucket."""
        check_bucket_name(bucket_name)
        response = self._execute(
            Request("GET", bucket_name, sub_resources=(("bucketInfo", None),)),
        )
        return unmarshal(BucketInfo, response.data)

    def get_bucket_location(self, bucket_name: str) -> str:
        """Get region of a bucket, e.g. oss-cn-hangzhou."""
        check_bucket_name(bucket_name)
        response = self._execute(
            Request("GET", bucket_name, sub_resources=(("location", None),)),
        )
        return unmarshal(_Location, response.data).location

    def get_bucket_stat(self, bucket_name: str) -> BucketStat:
        """Get storage size and object counts of a bucket."""
        check_bucket_name(bucket_name)
        response = self._execute(
            Request("GET", bucket_name, sub_resources=(("stat", None),)),
        )
        return unmarshal(BucketStat, response.data)

    def bucket_exists(self, bucket_name: str) -> bool:
        """
        Check if a bucket exists.

        Example:
            >>> if client.bucket_exists("my-bucket"):
            ...     print("my-bucket exists")
        """
        try:
            self.get_bucket_info(bucket_name)
            return True
        except RemoteError as exc:
            if exc.code != "NoSuchBucket":
                raise
        return False

    def get_object_count(self, bucket_name: str, prefix: str = "") -> int:
        """
        Count objects of a bucket having prefix by listing all pages of
        ListObjectsV2.
        """
        count = 0
        params = {"prefix": prefix, "max-keys": "1000"}
        while True:
            result = self.list_objects_v2(bucket_name, params)
            count += sum(1 for obj in result.objects if not obj.is_dir)
            if not result.is_truncated or not result.next_continuation_token:
                return count
            params["continuation-token"] = result.next_continuation_token

    # Multipart

    def init_multi_upload(
            self,
            bucket_name: str,
            object_name: str,
            headers: HeaderMap = None,
    ) -> str:
        """
        Initiate multipart upload of an object and return its upload ID.

        Example:
            >>> upload_id = client.init_multi_upload("my-bucket", "my-object")
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._execute(
            Request(
                "POST",
                bucket_name,
                object_name,
                sub_resources=(("uploads", None),),
                headers=_header_items(headers),
            ),
        )
        result = unmarshal(InitiateMultipartUploadResult, response.data)
        return result.upload_id

    def upload_part(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            part_number: int,
            data: Union[bytes, str],
    ) -> str:
        """
        Upload a part of multipart upload and return its ETag. Every part
        except the last must be at least 5MiB, which the service checks
        on completion.

        Example:
            >>> etag = client.upload_part(
            ...     "my-bucket", "my-object", upload_id, 1, data,
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        check_part_number(part_number)
        if not data:
            raise ValueError("part data must not be empty")
        response = self._execute(
            Request(
                "PUT",
                bucket_name,
                object_name,
                sub_resources=(
                    ("partNumber", str(part_number)),
                    ("uploadId", upload_id),
                ),
                body=data,
            ),
        )
        etag = response.headers.get("etag")
        if not etag:
            raise ValueError("ETag header not found in response")
        return etag.replace('"', "")

    def complete_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            parts: list[tuple[int, str]],
            headers: HeaderMap = None,
    ) -> CompleteMultipartUploadResult:
        """
        Complete multipart upload by (part number, ETag) pairs.

        Example:
            >>> result = client.complete_multipart_upload(
            ...     "my-bucket", "my-object", upload_id,
            ...     [(1, etag1), (2, etag2)],
            ... )
        """
        body = marshal(CompleteMultipartUpload.new(parts))
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._execute(
            Request(
                "POST",
                bucket_name,
                object_name,
                sub_resources=(("uploadId", upload_id),),
                headers=(
                    ("Content-Type", "application/xml"),
                ) + _header_items(headers),
                body=body,
            ),
        )
        return unmarshal(CompleteMultipartUploadResult, response.data)

    def abort_multipart_upload(
            self, bucket_name: str, object_name: str, upload_id: str,
    ):
        """Abort multipart upload and remove its uploaded parts."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._execute(
            Request(
                "DELETE",
                bucket_name,
                object_name,
                sub_resources=(("uploadId", upload_id),),
            ),
        )

    def list_multipart_uploads(
            self,
            bucket_name: str,
            params: Optional[Mapping[str, str]] = None,
    ) -> ListMultipartUploadsResult:
        """
        List in-progress multipart uploads of a bucket; params are prefix,
        delimiter, key-marker, upload-id-marker, max-uploads and
        encoding-type.
        """
        check_bucket_name(bucket_name)
        response = self._execute(
            Request(
                "GET",
                bucket_name,
                sub_resources=(("uploads", None),),
                params=params or {},
            ),
        )
        return unmarshal(ListMultipartUploadsResult, response.data)

    def list_parts(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            params: Optional[Mapping[str, str]] = None,
    ) -> ListPartsResult:
        """List uploaded parts; params are max-parts and
        part-number-marker."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._execute(
            Request(
                "GET",
                bucket_name,
                object_name,
                sub_resources=(("uploadId", upload_id),),
                params=params or {},
            ),
        )
        return unmarshal(ListPartsResult, response.data)

    # Tokens

    def get_token(
            self,
            bucket_name: str,
            object_prefix: str,
            expire_seconds: int = token.DEFAULT_EXPIRE_SECONDS,
            callback_url: str = "",
    ) -> str:
        """
        Get JSON upload token for browser-based direct upload of objects
        having prefix.

        Example:
            >>> upload_token = client.get_token("my-bucket", "uploads/")
        """
        check_bucket_name(bucket_name)
        return token.get_token(
            self._config, bucket_name, object_prefix, expire_seconds,
            callback_url,
        )

    def get_token_with_policy(
            self,
            bucket_name: str,
            conditions: list,
            expire_seconds: int = token.DEFAULT_EXPIRE_SECONDS,
            callback_url: str = "",
    ) -> str:
        """
        Get JSON upload token with custom policy conditions.

        Example:
            >>> from liboss.token import (content_length_range,
            ...                           starts_with_condition)
            >>> upload_token = client.get_token_with_policy(
            ...     "my-bucket",
            ...     [
            ...         starts_with_condition("photos/"),
            ...         content_length_range(1, 5 * 1024 * 1024),
            ...     ],
            ... )
        """
        check_bucket_name(bucket_name)
        return token.get_token_with_policy(
            self._config, bucket_name, conditions, expire_seconds,
            callback_url,
        )


@dataclass(frozen=True)
class _Location:
    """GetBucketLocation API result."""
    location: str

    @classmethod
    def fromxml(cls, node) -> _Location:
        """Create new object with values from XML node."""
        return cls(findtext(node, "#content") or str(node))
