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

from datetime import datetime, timedelta, timezone
from unittest import TestCase

from liboss.error import RemoteError

from .liboss_mocks import mock_client, mock_response

HOST = "my-bucket.oss-cn-hangzhou.aliyuncs.com"


def error_body(code):
    return (
        f"<Error><Code>{code}</Code><Message>error</Message>"
        "<RequestId>RID</RequestId></Error>"
    )


class PutObjectTest(TestCase):
    def test_put_object(self):
        client, transport = mock_client(
            mock_response(200, {"ETag": '"ABC"', "x-oss-request-id": "RID"}),
        )
        result = client.put_object(
            "my-bucket", "hello.txt", b"hello",
            headers={"x-oss-object-acl": "private"},
            metadata={"author": "me"},
        )
        self.assertEqual(result.etag, "ABC")
        self.assertEqual(result.request_id, "RID")
        self.assertEqual(result.object_name, "hello.txt")
        self.assertIsNone(result.next_position)

        request = transport.requests[0]
        self.assertEqual(request.method, "PUT")
        self.assertEqual(request.host, HOST)
        self.assertEqual(request.path, "/hello.txt")
        self.assertEqual(request.body, b"hello")
        self.assertEqual(request.header("Content-Type"), "text/plain")
        self.assertEqual(request.header("Content-MD5"),
                         "XUFAKrxLKna5cZ2REBfFkg==")
        self.assertEqual(request.header("x-oss-meta-author"), "me")
        self.assertEqual(request.header("x-oss-object-acl"), "private")
        self.assertTrue(request.header("Authorization").startswith("OSS KEY:"))

    def test_invalid_names(self):
        client, transport = mock_client()
        with self.assertRaises(ValueError):
            client.put_object("AB", "o", b"data")
        with self.assertRaises(ValueError):
            client.put_object("my-bucket", "", b"data")
        self.assertEqual(transport.requests, [])

    def test_append_object(self):
        client, transport = mock_client(
            mock_response(200, {"x-oss-next-append-position": "5"}),
        )
        result = client.append_object("my-bucket", "log.txt", 0, b"hello")
        self.assertEqual(result.next_position, 5)
        request = transport.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.path, "/log.txt?append&position=0")
        with self.assertRaises(ValueError):
            client.append_object("my-bucket", "log.txt", -1, b"hello")

    def test_copy_object(self):
        client, transport = mock_client(mock_response(200))
        client.copy_object(
            "my-bucket", "copy.txt", "dir/a b.txt",
            source_bucket_name="src-bucket",
        )
        self.assertEqual(
            transport.requests[0].header("x-oss-copy-source"),
            "/src-bucket/dir/a%20b.txt",
        )


class GetObjectTest(TestCase):
    def test_get_object(self):
        client, transport = mock_client(mock_response(200, data=b"hello"))
        self.assertEqual(client.get_object("my-bucket", "hello.txt"),
                         b"hello")
        request = transport.requests[0]
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.header("Content-MD5"), "")
        self.assertIsNone(request.header("Range"))

    def test_get_object_range(self):
        client, transport = mock_client(
            mock_response(206, data=b"l"), mock_response(206, data=b"llo"),
        )
        client.get_object("my-bucket", "hello.txt", offset=2, length=1)
        self.assertEqual(transport.requests[0].header("Range"), "bytes=2-2")
        client.get_object("my-bucket", "hello.txt", offset=2)
        self.assertEqual(transport.requests[1].header("Range"), "bytes=2-")

    def test_get_object_invalid_range(self):
        client, transport = mock_client()
        with self.assertRaises(ValueError):
            client.get_object("my-bucket", "hello.txt", offset=5, length=0)
        with self.assertRaises(ValueError):
            client.get_object("my-bucket", "hello.txt", offset=-1)
        self.assertEqual(transport.requests, [])

    def test_get_missing_object(self):
        client, _ = mock_client(mock_response(404))
        with self.assertRaises(RemoteError) as context:
            client.get_object("my-bucket", "missing")
        self.assertEqual(context.exception.code, "NoSuchKey")
        self.assertEqual(context.exception.resource, "/my-bucket/missing")

    def test_head_object(self):
        client, transport = mock_client(
            mock_response(200, {"Content-Length": "5", "ETag": '"ABC"'}),
            mock_response(200, {"Content-Length": "5"}),
            mock_response(200, {"Content-Length": "5"}),
        )
        headers = client.head_object("my-bucket", "hello.txt")
        self.assertEqual(headers["etag"], '"ABC"')
        client.get_object_meta("my-bucket", "hello.txt")
        self.assertEqual(transport.requests[1].method, "HEAD")
        self.assertEqual(transport.requests[1].path, "/hello.txt?objectMeta")
        self.assertEqual(client.get_object_size("my-bucket", "hello.txt"), 5)

    def test_object_exists(self):
        client, _ = mock_client(
            mock_response(200), mock_response(404), mock_response(403),
        )
        self.assertTrue(client.object_exists("my-bucket", "o"))
        self.assertFalse(client.object_exists("my-bucket", "o"))
        with self.assertRaises(RemoteError):
            client.object_exists("my-bucket", "o")


class DeleteObjectTest(TestCase):
    def test_delete_object(self):
        client, transport = mock_client(mock_response(204))
        client.delete_object("my-bucket", "hello.txt")
        self.assertEqual(transport.requests[0].method, "DELETE")
        self.assertEqual(transport.requests[0].path, "/hello.txt")

    def test_delete_multiple_objects(self):
        client, transport = mock_client(
            mock_response(200),
            mock_response(
                200,
                data="<DeleteResult><Deleted><Key>a</Key></Deleted>"
                "</DeleteResult>",
            ),
        )
        self.assertEqual(
            client.delete_multiple_objects("my-bucket", ["a", "b"]).deleted,
            [],
        )
        request = transport.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.host, HOST)
        self.assertEqual(request.path, "/?delete")
        self.assertEqual(request.header("Content-Type"), "application/xml")
        self.assertIn(b"<Object><Key>b</Key></Object>", request.body)

        result = client.delete_multiple_objects("my-bucket", ["a"], False)
        self.assertEqual(result.deleted, ["a"])
        self.assertIn(b"<Quiet>false</Quiet>", transport.requests[1].body)


class PresignedGetObjectTest(TestCase):
    def test_presigned_get_object(self):
        client, transport = mock_client()
        url = client.presigned_get_object(
            "my-bucket",
            "o.txt",
            expires=timedelta(hours=1),
            request_date=datetime(2029, 12, 31, 23, tzinfo=timezone.utc),
        )
        self.assertEqual(
            url,
            "https://my-bucket.oss-cn-hangzhou.aliyuncs.com/o.txt"
            "?OSSAccessKeyId=KEY&Expires=1893456000"
            "&Signature=UOEJXnP%2FQVIxn3rupgvuzaAKHgY%3D",
        )
        self.assertEqual(transport.requests, [])

    def test_presigned_get_object_expiry(self):
        client, _ = mock_client()
        with self.assertRaises(ValueError):
            client.presigned_get_object(
                "my-bucket", "o.txt", expires=timedelta(days=8),
            )
        with self.assertRaises(ValueError):
            client.presigned_get_object(
                "my-bucket", "o.txt", expires=timedelta(0),
            )


class AclTest(TestCase):
    def test_put_object_acl(self):
        client, transport = mock_client(mock_response(200))
        client.put_object_acl("my-bucket", "o", "public-read")
        request = transport.requests[0]
        self.assertEqual(request.path, "/o?acl")
        self.assertEqual(request.header("x-oss-object-acl"), "public-read")
        with self.assertRaises(ValueError):
            client.put_object_acl("my-bucket", "o", "everyone")

    def test_get_object_acl(self):
        client, _ = mock_client(
            mock_response(
                200,
                data="<AccessControlPolicy><Owner><ID>1</ID></Owner>"
                "<AccessControlList><Grant>default</Grant>"
                "</AccessControlList></AccessControlPolicy>",
            ),
        )
        self.assertEqual(client.get_object_acl("my-bucket", "o").grant,
                         "default")


class SymlinkTest(TestCase):
    def test_put_symlink(self):
        client, transport = mock_client(mock_response(200), mock_response(200))
        client.put_symlink("my-bucket", "link", "dir/a b.txt")
        request = transport.requests[0]
        self.assertEqual(request.method, "PUT")
        self.assertEqual(request.path, "/link?symlink")
        self.assertEqual(request.header("x-oss-symlink-target"),
                         "dir/a%20b.txt")

        client.put_symlink_with_metadata(
            "my-bucket", "link", "target", {"owner": "me"},
        )
        self.assertEqual(transport.requests[1].header("x-oss-meta-owner"),
                         "me")

    def test_get_symlink(self):
        client, _ = mock_client(
            mock_response(200, {"x-oss-symlink-target": "dir/a%20b.txt"}),
        )
        self.assertEqual(client.get_symlink("my-bucket", "link"),
                         "dir/a b.txt")

    def test_is_symlink(self):
        client, _ = mock_client(
            mock_response(200, {"x-oss-symlink-target": "target"}),
            mock_response(400, data=error_body("NotSymlink")),
            mock_response(404),
            mock_response(403, data=error_body("AccessDenied")),
        )
        self.assertTrue(client.is_symlink("my-bucket", "link"))
        self.assertFalse(client.is_symlink("my-bucket", "plain"))
        self.assertFalse(client.is_symlink("my-bucket", "missing"))
        with self.assertRaises(RemoteError):
            client.is_symlink("my-bucket", "secret")


TAGGING = (
    "<Tagging><TagSet>"
    "<Tag><Key>a</Key><Value>1</Value></Tag>"
    "</TagSet></Tagging>"
)


class TaggingTest(TestCase):
    def test_put_object_tagging(self):
        client, transport = mock_client(mock_response(200))
        client.put_object_tagging("my-bucket", "o", {"a": "1"})
        request = transport.requests[0]
        self.assertEqual(request.path, "/o?tagging")
        self.assertEqual(
            request.body,
            b"<Tagging><TagSet><Tag><Key>a</Key><Value>1</Value></Tag>"
            b"</TagSet></Tagging>",
        )

    def test_get_object_tagging(self):
        client, _ = mock_client(
            mock_response(200, data=TAGGING),
            mock_response(200, data=TAGGING),
            mock_response(200, data="<Tagging><TagSet/></Tagging>"),
        )
        self.assertEqual(client.get_object_tagging("my-bucket", "o"),
                         {"a": "1"})
        self.assertEqual(client.get_tag_count("my-bucket", "o"), 1)
        self.assertFalse(client.has_tags("my-bucket", "o"))

    def test_update_object_tagging_keeps_existing(self):
        client, transport = mock_client(
            mock_response(200, data=TAGGING), mock_response(200),
        )
        client.update_object_tagging("my-bucket", "o", {"a": "2", "b": "3"})
        body = transport.requests[1].body
        self.assertIn(b"<Key>a</Key><Value>1</Value>", body)
        self.assertIn(b"<Key>b</Key><Value>3</Value>", body)

    def test_delete_object_tagging(self):
        client, transport = mock_client(mock_response(204))
        client.delete_object_tagging("my-bucket", "o")
        self.assertEqual(transport.requests[0].method, "DELETE")
        self.assertEqual(transport.requests[0].path, "/o?tagging")
