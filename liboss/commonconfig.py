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

"""Common request configurations and bodies of OSS APIs."""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Type, TypeVar, cast
from xml.etree import ElementTree as ET

from .helpers import MAX_MULTIPART_COUNT, check_part_number
from .xml import Node, add_subelement, find, findall, findtext, new_element

PRIVATE = "private"
PUBLIC_READ = "public-read"
PUBLIC_READ_WRITE = "public-read-write"
DEFAULT = "default"
OBJECT_ACLS = (PRIVATE, PUBLIC_READ, PUBLIC_READ_WRITE, DEFAULT)
BUCKET_ACLS = (PRIVATE, PUBLIC_READ, PUBLIC_READ_WRITE)

STANDARD = "Standard"
IA = "IA"
ARCHIVE = "Archive"
COLD_ARCHIVE = "ColdArchive"
DEEP_COLD_ARCHIVE = "DeepColdArchive"
STORAGE_CLASSES = (STANDARD, IA, ARCHIVE, COLD_ARCHIVE, DEEP_COLD_ARCHIVE)

LRS = "LRS"
ZRS = "ZRS"
REDUNDANCY_TYPES = (LRS, ZRS)

MAX_TAG_COUNT = 10
MAX_TAG_KEY_LENGTH = 128
MAX_TAG_VALUE_LENGTH = 256


def check_object_acl(acl: str):
    """Check whether ACL is valid for object."""
    if acl not in OBJECT_ACLS:
        raise ValueError(
            f"invalid object ACL {acl}; valid values {OBJECT_ACLS}",
        )


def check_bucket_acl(acl: str):
    """Check whether ACL is valid for bucket."""
    if acl not in BUCKET_ACLS:
        raise ValueError(
            f"invalid bucket ACL {acl}; valid values {BUCKET_ACLS}",
        )


def check_storage_class(storage_class: str):
    """Check whether storage class is valid."""
    if storage_class not in STORAGE_CLASSES:
        raise ValueError(
            f"invalid storage class {storage_class}; "
            f"valid values {STORAGE_CLASSES}"
        )


def check_redundancy_type(redundancy_type: str):
    """Check whether data redundancy type is valid."""
    if redundancy_type not in REDUNDANCY_TYPES:
        raise ValueError(
            f"invalid data redundancy type {redundancy_type}; "
            f"valid values {REDUNDANCY_TYPES}"
        )


A = TypeVar("A", bound="Tags")


class Tags(dict):
    """dict extended to object tags."""

    def __init__(self, tags: Optional[Mapping[str, str]] = None):
        super().__init__()
        for key, value in (tags or {}).items():
            self[key] = value

    def __setitem__(self, key: str, value: str):
        if key not in self and len(self) == MAX_TAG_COUNT:
            raise ValueError(f"only {MAX_TAG_COUNT} object tags are allowed")
        if not key or len(key) > MAX_TAG_KEY_LENGTH:
            raise ValueError(f"invalid tag key '{key}'")
        if value is None or len(value) > MAX_TAG_VALUE_LENGTH:
            raise ValueError(f"invalid tag value '{value}'")
        super().__setitem__(key, value)

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    @classmethod
    def fromxml(cls: Type[A], node: Optional[Node]) -> A:
        """Create new object with values from XML node."""
        obj = cls()
        for tag in findall(node, "Tag"):
            obj[cast(str, findtext(tag, "Key", True))] = (
                findtext(tag, "Value") or ""
            )
        return obj

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to XML."""
        if element is None:
            raise ValueError("element must be provided")
        for key, value in self.items():
            tag = add_subelement(element, "Tag")
            add_subelement(tag, "Key", key)
            add_subelement(tag, "Value", value)
        return element


B = TypeVar("B", bound="Tagging")


@dataclass(frozen=True)
class Tagging:
    """Tagging for objects."""

    tags: Tags

    @classmethod
    def fromxml(cls: Type[B], node: Node) -> B:
        """Create new object with values from XML node."""
        return cls(tags=Tags.fromxml(find(node, "TagSet")))

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to XML."""
        element = new_element("Tagging")
        self.tags.toxml(add_subelement(element, "TagSet"))
        return element


@dataclass(frozen=True)
class CreateBucketConfiguration:
    """Storage class and data redundancy type of new bucket."""

    storage_class: str = STANDARD
    data_redundancy_type: str = LRS

    def __post_init__(self):
        check_storage_class(self.storage_class)
        check_redundancy_type(self.data_redundancy_type)

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to XML."""
        element = new_element("CreateBucketConfiguration")
        add_subelement(element, "StorageClass", self.storage_class)
        add_subelement(
            element, "DataRedundancyType", self.data_redundancy_type,
        )
        return element


@dataclass(frozen=True)
class CompletePart:
    """Part number and ETag of uploaded part."""

    part_number: int
    etag: str

    def __post_init__(self):
        check_part_number(self.part_number)

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to XML."""
        if element is None:
            raise ValueError("element must be provided")
        element = add_subelement(element, "Part")
        add_subelement(element, "PartNumber", str(self.part_number))
        add_subelement(element, "ETag", self.etag)
        return element


@dataclass(frozen=True)
class CompleteMultipartUpload:
    """CompleteMultipartUpload API request."""

    parts: list[CompletePart]

    def __post_init__(self):
        if not self.parts:
            raise ValueError("parts must not be empty")
        if len(self.parts) > MAX_MULTIPART_COUNT:
            raise ValueError(
                f"only {MAX_MULTIPART_COUNT} parts are allowed",
            )

    @classmethod
    def new(
            cls, parts: Iterable[tuple[int, str]],
    ) -> CompleteMultipartUpload:
        """Create from (part number, ETag) pairs."""
        return cls([CompletePart(number, etag) for number, etag in parts])

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to XML."""
        element = new_element("CompleteMultipartUpload")
        for part in self.parts:
            part.toxml(element)
        return element


@dataclass(frozen=True)
class DeleteRequest:
    """DeleteMultipleObjects API request."""

    object_names: list[str]
    quiet: bool = True

    def __post_init__(self):
        if not self.object_names:
            raise ValueError("object names must not be empty")

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to XML."""
        element = new_element("Delete")
        add_subelement(element, "Quiet", "true" if self.quiet else "false")
        for name in self.object_names:
            add_subelement(add_subelement(element, "Object"), "Key", name)
        return element
