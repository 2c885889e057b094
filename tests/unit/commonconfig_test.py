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

from unittest import TestCase

from liboss import xml
from liboss.commonconfig import (CompleteMultipartUpload,
                                 CreateBucketConfiguration, DeleteRequest,
                                 Tagging, Tags, check_bucket_acl,
                                 check_object_acl)


class TaggingTest(TestCase):
    def test_tagging(self):
        tags = Tags()
        tags["Project"] = "Project One"
        tags["User"] = "jsmith"
        self.assertEqual(
            xml.marshal(Tagging(tags)),
            b"<Tagging><TagSet>"
            b"<Tag><Key>Project</Key><Value>Project One</Value></Tag>"
            b"<Tag><Key>User</Key><Value>jsmith</Value></Tag>"
            b"</TagSet></Tagging>",
        )

        tagging = xml.unmarshal(
            Tagging,
            """<Tagging>
  <TagSet>
    <Tag>
      <Key>key1</Key>
      <Value>value1</Value>
    </Tag>
    <Tag>
      <Key>key2</Key>
      <Value>value2</Value>
    </Tag>
  </TagSet>
</Tagging>""",
        )
        self.assertEqual(tagging.tags, {"key1": "value1", "key2": "value2"})

    def test_single_and_empty_tag_set(self):
        tagging = xml.unmarshal(
            Tagging,
            "<Tagging><TagSet><Tag><Key>a</Key><Value></Value></Tag>"
            "</TagSet></Tagging>",
        )
        self.assertEqual(tagging.tags, {"a": ""})
        tagging = xml.unmarshal(Tagging, "<Tagging><TagSet/></Tagging>")
        self.assertEqual(tagging.tags, {})

    def test_tags_limits(self):
        tags = Tags({str(i): "v" for i in range(10)})
        tags["0"] = "replaced"
        with self.assertRaises(ValueError):
            tags["10"] = "v"
        with self.assertRaises(ValueError):
            Tags({"k" * 129: "v"})
        with self.assertRaises(ValueError):
            Tags({"k": "v" * 257})
        with self.assertRaises(ValueError):
            Tags({"": "v"})
        with self.assertRaises(ValueError):
            Tags().update({str(i): "v" for i in range(11)})


class AclTest(TestCase):
    def test_acl(self):
        check_object_acl("default")
        check_bucket_acl("public-read")
        with self.assertRaises(ValueError):
            check_bucket_acl("default")
        with self.assertRaises(ValueError):
            check_object_acl("public")


class RequestBodyTest(TestCase):
    def test_create_bucket_configuration(self):
        self.assertEqual(
            xml.marshal(CreateBucketConfiguration("IA", "ZRS")),
            b"<CreateBucketConfiguration><StorageClass>IA</StorageClass>"
            b"<DataRedundancyType>ZRS</DataRedundancyType>"
            b"</CreateBucketConfiguration>",
        )
        with self.assertRaises(ValueError):
            CreateBucketConfiguration("Glacier")
        with self.assertRaises(ValueError):
            CreateBucketConfiguration("Standard", "GRS")

    def test_complete_multipart_upload(self):
        self.assertEqual(
            xml.marshal(CompleteMultipartUpload.new([(1, "a"), (2, "b")])),
            b"<CompleteMultipartUpload>"
            b"<Part><PartNumber>1</PartNumber><ETag>a</ETag></Part>"
            b"<Part><PartNumber>2</PartNumber><ETag>b</ETag></Part>"
            b"</CompleteMultipartUpload>",
        )
        with self.assertRaises(ValueError):
            CompleteMultipartUpload.new([])
        with self.assertRaises(ValueError):
            CompleteMultipartUpload.new([(0, "a")])

    def test_delete_request(self):
        self.assertEqual(
            xml.marshal(DeleteRequest(["a", "b/c"])),
            b"<Delete><Quiet>true</Quiet>"
            b"<Object><Key>a</Key></Object><Object><Key>b/c</Key></Object>"
            b"</Delete>",
        )
        self.assertIn(
            b"<Quiet>false</Quiet>",
            xml.marshal(DeleteRequest(["a"], quiet=False)),
        )
        with self.assertRaises(ValueError):
            DeleteRequest([])
