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
Response of GetObjectACL, ListObjects, ListObjectsV2, GetBucketInfo,
GetBucketStat and multipart upload APIs.
"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Type, TypeVar, cast
from urllib.parse import unquote_plus

from .time import from_iso8601utc
from .xml import Node, find, findall, findtext


def _to_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def _to_bool(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"


def _trim_etag(value: Optional[str]) -> Optional[str]:
    return value.replace('"', "") if value else value


def _decode_key(value: Optional[str], encoding_type: Optional[str]):
    if value and encoding_type == "url":
        return unquote_plus(value)
    return value


A = TypeVar("A", bound="Owner")


@dataclass(frozen=True)
class Owner:
    """Owner information."""
    owner_id: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def fromxml(cls: Type[A], node: Optional[Node]) -> A:
        """Create new object with values from XML node."""
        return cls(
            owner_id=findtext(node, "ID"),
            display_name=findtext(node, "DisplayName"),
        )


B = TypeVar("B", bound="AccessControlPolicy")


@dataclass(frozen=True)
class AccessControlPolicy:
    """GetObjectACL and GetBucketACL API result."""
    owner: Owner
    grant: str

    @classmethod
    def fromxml(cls: Type[B], node: Node) -> B:
        """Create new object with values from XML node."""
        return cls(
            owner=Owner.fromxml(find(node, "Owner")),
            grant=cast(str, findtext(node, "AccessControlList.Grant", True)),
        )


C = TypeVar("C", bound="Object")


@dataclass(frozen=True)
class Object:
    """Object information."""
    bucket_name: str
    object_name: str
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    size: Optional[int] = None
    object_type: Optional[str] = None
    storage_class: Optional[str] = None
    owner: Optional[Owner] = None
    is_dir: bool = field(default=False, init=False)

    def __post_init__(self):
        object.__setattr__(self, "is_dir", self.object_name.endswith("/"))

    @classmethod
    def fromxml(
            cls: Type[C],
            node: Node,
            bucket_name: str,
            encoding_type: Optional[str] = None,
    ) -> C:
        """Create new object with values from XML node."""
        tag = findtext(node, "LastModified")
        owner = find(node, "Owner")
        return cls(
            bucket_name=bucket_name,
            object_name=cast(
                str,
                _decode_key(findtext(node, "Key", True), encoding_type),
            ),
            last_modified=from_iso8601utc(tag) if tag else None,
            etag=_trim_etag(findtext(node, "ETag")),
            size=_to_int(findtext(node, "Size")),
            object_type=findtext(node, "Type"),
            storage_class=findtext(node, "StorageClass"),
            owner=None if owner is None else Owner.fromxml(owner),
        )


def _parse_objects(
        node: Node, bucket_name: str, encoding_type: Optional[str],
) -> list[Object]:
    """Parse Contents and CommonPrefixes of listing."""
    objects = [
        Object.fromxml(item, bucket_name, encoding_type)
        for item in findall(node, "Contents")
    ]
    objects += [
        Object(
            bucket_name,
            cast(
                str,
                _decode_key(findtext(item, "Prefix", True), encoding_type),
            ),
        )
        for item in findall(node, "CommonPrefixes")
    ]
    return objects


D = TypeVar("D", bound="ListObjectsResult")


@dataclass(frozen=True)
class ListObjectsResult:
    """ListObjects API result."""
    bucket_name: str
    prefix: Optional[str]
    marker: Optional[str]
    next_marker: Optional[str]
    max_keys: Optional[int]
    delimiter: Optional[str]
    is_truncated: bool
    objects: list[Object]

    @classmethod
    def fromxml(cls: Type[D], node: Node) -> D:
        """Create new object with values from XML node."""
        bucket_name = cast(str, findtext(node, "Name", True))
        encoding_type = findtext(node, "EncodingType")
        return cls(
            bucket_name=bucket_name,
            prefix=_decode_key(findtext(node, "Prefix"), encoding_type),
            marker=_decode_key(findtext(node, "Marker"), encoding_type),
            next_marker=_decode_key(
                findtext(node, "NextMarker"), encoding_type,
            ),
            max_keys=_to_int(findtext(node, "MaxKeys")),
            delimiter=findtext(node, "Delimiter"),
            is_truncated=_to_bool(findtext(node, "IsTruncated")),
            objects=_parse_objects(node, bucket_name, encoding_type),
        )


E = TypeVar("E", bound="ListObjectsV2Result")


@dataclass(frozen=True)
class ListObjectsV2Result:
    """ListObjectsV2 API result."""
    bucket_name: str
    prefix: Optional[str]
    start_after: Optional[str]
    continuation_token: Optional[str]
    next_continuation_token: Optional[str]
    key_count: Optional[int]
    max_keys: Optional[int]
    delimiter: Optional[str]
    is_truncated: bool
    objects: list[Object]

    @classmethod
    def fromxml(cls: Type[E], node: Node) -> E:
        """Create new object with values from XML node."""
        bucket_name = cast(str, findtext(node, "Name", True))
        encoding_type = findtext(node, "EncodingType")
        return cls(
            bucket_name=bucket_name,
            prefix=_decode_key(findtext(node, "Prefix"), encoding_type),
            start_after=_decode_key(
                findtext(node, "StartAfter"), encoding_type,
            ),
            continuation_token=findtext(node, "ContinuationToken"),
            next_continuation_token=findtext(node, "NextContinuationToken"),
            key_count=_to_int(findtext(node, "KeyCount")),
            max_keys=_to_int(findtext(node, "MaxKeys")),
            delimiter=findtext(node, "Delimiter"),
            is_truncated=_to_bool(findtext(node, "IsTruncated")),
            objects=_parse_objects(node, bucket_name, encoding_type),
        )


F = TypeVar("F", bound="BucketInfo")


@dataclass(frozen=True)
class BucketInfo:
    """GetBucketInfo API result."""
    name: str
    location: Optional[str] = None
    creation_date: Optional[datetime] = None
    extranet_endpoint: Optional[str] = None
    intranet_endpoint: Optional[str] = None
    storage_class: Optional[str] = None
    data_redundancy_type: Optional[str] = None
    owner: Optional[Owner] = None
    grant: Optional[str] = None
    comment: Optional[str] = None

    @classmethod
    def fromxml(cls: Type[F], node: Node) -> F:
        """Create new object with values from XML node."""
        node = cast(Node, find(node, "Bucket") or node)
        creation_date = findtext(node, "CreationDate")
        owner = find(node, "Owner")
        return cls(
            name=cast(str, findtext(node, "Name", True)),
            location=findtext(node, "Location"),
            creation_date=(
                from_iso8601utc(creation_date) if creation_date else None
            ),
            extranet_endpoint=findtext(node, "ExtranetEndpoint"),
            intranet_endpoint=findtext(node, "IntranetEndpoint"),
            storage_class=findtext(node, "StorageClass"),
            data_redundancy_type=findtext(node, "DataRedundancyType"),
            owner=None if owner is None else Owner.fromxml(owner),
            grant=findtext(node, "AccessControlList.Grant"),
            comment=findtext(node, "Comment"),
        )


G = TypeVar("G", bound="BucketStat")


@dataclass(frozen=True)
class BucketStat:
    """GetBucketStat API result; storage sizes are in bytes."""
    storage: int = 0
    object_count: int = 0
    multipart_upload_count: int = 0
    live_channel_count: int = 0
    last_modified_time: Optional[datetime] = None
    standard_storage: int = 0
    standard_object_count: int = 0
    infrequent_access_storage: int = 0
    infrequent_access_object_count: int = 0
    archive_storage: int = 0
    archive_object_count: int = 0
    cold_archive_storage: int = 0
    cold_archive_object_count: int = 0

    @classmethod
    def fromxml(cls: Type[G], node: Node) -> G:
        """Create new object with values from XML node."""

        def getint(name: str) -> int:
            return _to_int(findtext(node, name)) or 0

        last_modified_time = _to_int(findtext(node, "LastModifiedTime"))
        return cls(
            storage=getint("Storage"),
            object_count=getint("ObjectCount"),
            multipart_upload_count=getint("MultipartUploadCount"),
            live_channel_count=getint("LiveChannelCount"),
            last_modified_time=(
                datetime.fromtimestamp(last_modified_time, timezone.utc)
                if last_modified_time else None
            ),
            standard_storage=getint("StandardStorage"),
            standard_object_count=getint("StandardObjectCount"),
            infrequent_access_storage=getint("InfrequentAccessStorage"),
            infrequent_access_object_count=getint(
                "InfrequentAccessObjectCount",
            ),
            archive_storage=getint("ArchiveStorage"),
            archive_object_count=getint("ArchiveObjectCount"),
            cold_archive_storage=getint("ColdArchiveStorage"),
            cold_archive_object_count=getint("ColdArchiveObjectCount"),
        )


H = TypeVar("H", bound="InitiateMultipartUploadResult")


@dataclass(frozen=True)
class InitiateMultipartUploadResult:
    """InitiateMultipartUpload API result."""
    bucket_name: str
    object_name: str
    upload_id: str

    @classmethod
    def fromxml(cls: Type[H], node: Node) -> H:
        """Create new object with values from XML node."""
        return cls(
            bucket_name=cast(str, findtext(node, "Bucket", True)),
            object_name=cast(str, findtext(node, "Key", True)),
            upload_id=cast(str, findtext(node, "UploadId", True)),
        )


I = TypeVar("I", bound="Part")


@dataclass(frozen=True)
class Part:
    """Part information of a multipart upload."""
    part_number: int
    etag: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None

    @classmethod
    def fromxml(cls: Type[I], node: Node) -> I:
        """Create new object with values from XML node."""
        tag = findtext(node, "LastModified")
        return cls(
            part_number=int(cast(str, findtext(node, "PartNumber", True))),
            etag=cast(str, _trim_etag(findtext(node, "ETag", True))),
            last_modified=from_iso8601utc(tag) if tag else None,
            size=_to_int(findtext(node, "Size")),
        )


J = TypeVar("J", bound="ListPartsResult")


@dataclass(frozen=True)
class ListPartsResult:
    """ListParts API result."""
    bucket_name: Optional[str] = None
    object_name: Optional[str] = None
    upload_id: Optional[str] = None
    storage_class: Optional[str] = None
    part_number_marker: Optional[int] = None
    next_part_number_marker: Optional[int] = None
    max_parts: Optional[int] = None
    is_truncated: bool = False
    parts: list[Part] = field(default_factory=list)

    @classmethod
    def fromxml(cls: Type[J], node: Node) -> J:
        """Create new object with values from XML node."""
        return cls(
            bucket_name=findtext(node, "Bucket"),
            object_name=findtext(node, "Key"),
            upload_id=findtext(node, "UploadId"),
            storage_class=findtext(node, "StorageClass"),
            part_number_marker=_to_int(findtext(node, "PartNumberMarker")),
            next_part_number_marker=_to_int(
                findtext(node, "NextPartNumberMarker"),
            ),
            max_parts=_to_int(findtext(node, "MaxParts")),
            is_truncated=_to_bool(findtext(node, "IsTruncated")),
            parts=[Part.fromxml(item) for item in findall(node, "Part")],
        )


K = TypeVar("K", bound="MultipartUpload")


@dataclass(frozen=True)
class MultipartUpload:
    """Upload information of a multipart upload."""
    object_name: str
    upload_id: str
    initiated_time: Optional[datetime] = None
    storage_class: Optional[str] = None

    @classmethod
    def fromxml(
            cls: Type[K], node: Node, encoding_type: Optional[str] = None,
    ) -> K:
        """Create new object with values from XML node."""
        initiated = findtext(node, "Initiated")
        return cls(
            object_name=cast(
                str,
                _decode_key(findtext(node, "Key", True), encoding_type),
            ),
            upload_id=cast(str, findtext(node, "UploadId", True)),
            initiated_time=from_iso8601utc(initiated) if initiated else None,
            storage_class=findtext(node, "StorageClass"),
        )


L = TypeVar("L", bound="ListMultipartUploadsResult")


@dataclass(frozen=True)
class ListMultipartUploadsResult:
    """ListMultipartUploads API result."""
    bucket_name: Optional[str] = None
    prefix: Optional[str] = None
    delimiter: Optional[str] = None
    key_marker: Optional[str] = None
    upload_id_marker: Optional[str] = None
    next_key_marker: Optional[str] = None
    next_upload_id_marker: Optional[str] = None
    max_uploads: Optional[int] = None
    is_truncated: bool = False
    uploads: list[MultipartUpload] = field(default_factory=list)
    common_prefixes: list[str] = field(default_factory=list)

    @classmethod
    def fromxml(cls: Type[L], node: Node) -> L:
        """Create new object with values from XML node."""
        encoding_type = findtext(node, "EncodingType")
        return cls(
            bucket_name=findtext(node, "Bucket"),
            prefix=_decode_key(findtext(node, "Prefix"), encoding_type),
            delimiter=findtext(node, "Delimiter"),
            key_marker=_decode_key(findtext(node, "KeyMarker"), encoding_type),
            upload_id_marker=findtext(node, "UploadIdMarker"),
            next_key_marker=_decode_key(
                findtext(node, "NextKeyMarker"), encoding_type,
            ),
            next_upload_id_marker=findtext(node, "NextUploadIdMarker"),
            max_uploads=_to_int(findtext(node, "MaxUploads")),
            is_truncated=_to_bool(findtext(node, "IsTruncated")),
            uploads=[
                MultipartUpload.fromxml(item, encoding_type)
                for item in findall(node, "Upload")
            ],
            common_prefixes=[
                cast(
                    str,
                    _decode_key(findtext(item, "Prefix", True), encoding_type),
                )
                for item in findall(node, "CommonPrefixes")
            ],
        )


M = TypeVar("M", bound="CompleteMultipartUploadResult")


@dataclass(frozen=True)
class CompleteMultipartUploadResult:
    """CompleteMultipartUpload API result."""
    bucket_name: Optional[str] = None
    object_name: Optional[str] = None
    location: Optional[str] = None
    etag: Optional[str] = None

    @classmethod
    def fromxml(cls: Type[M], node: Node) -> M:
        """Create new object with values from XML node."""
        return cls(
            bucket_name=findtext(node, "Bucket"),
            object_name=findtext(node, "Key"),
            location=findtext(node, "Location"),
            etag=_trim_etag(findtext(node, "ETag")),
        )


N = TypeVar("N", bound="DeleteResult")


@dataclass(frozen=True)
class DeleteResult:
    """DeleteMultipleObjects API result."""
    deleted: list[str] = field(default_factory=list)

    @classmethod
    def fromxml(cls: Type[N], node: Node) -> N:
        """Create new object with values from XML node."""
        encoding_type = findtext(node, "EncodingType")
        return cls(
            deleted=[
                cast(
                    str,
                    _decode_key(findtext(item, "Key", True), encoding_type),
                )
                for item in findall(node, "Deleted")
            ],
        )
