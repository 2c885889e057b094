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

import io
import os
import unittest.mock as mock
from unittest import TestCase

import liboss
from liboss import Config, Oss, RemoteError
from liboss.error import ConfigError
from liboss.http import Urllib3Transport
from liboss.token import parse_token

from .liboss_mocks import ENDPOINT, MockTransport, mock_client, mock_response


class OssTest(TestCase):
    @mock.patch("urllib3.PoolManager")
    def test_default_transport(self, _):
        client = Oss(Config(ENDPOINT, "KEY", "SECRET"))
        self.assertIsInstance(client._transport, Urllib3Transport)

    def test_custom_transport(self):
        transport = MockTransport()
        client = Oss(Config(ENDPOINT, "KEY", "SECRET"), transport)
        self.assertIs(client._transport, transport)

    @mock.patch("urllib3.PoolManager")
    def test_from_env(self, _):
        with mock.patch.dict(
                os.environ,
                {
                    "LIBOSS_ENDPOINT": ENDPOINT,
                    "LIBOSS_ACCESS_KEY_ID": "KEY",
                    "LIBOSS_ACCESS_KEY_SECRET": "SECRET",
                },
        ):
            client = Oss.from_env()
        self.assertEqual(client.config.endpoint, ENDPOINT)
        self.assertIsInstance(client._transport, Urllib3Transport)

    def test_exports(self):
        for name in [
                "ConfigError", "EncodingError", "InvalidResponseError",
                "LibOssException", "RemoteError", "TransportError",
                "XmlParseError",
        ]:
            self.assertTrue(
                issubclass(getattr(liboss, name), liboss.LibOssException),
            )

    def test_from_env_missing(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                Oss.from_env()


class TraceTest(TestCase):
    def test_trace_on_invalid_stream(self):
        client, _ = mock_client()
        with self.assertRaises(ValueError):
            client.trace_on(None)

    def test_trace(self):
        client, _ = mock_client(
            mock_response(200, {"x-oss-request-id": "RID"}, b"hello"),
        )
        stream = io.StringIO()
        client.trace_on(stream)
        client.get_object("my-bucket", "hello.txt")
        output = stream.getvalue()
        self.assertTrue(output.startswith("---------START-HTTP---------\n"))
        self.assertIn("GET /hello.txt HTTP/1.1\n", output)
        self.assertIn("Authorization: OSS KEY:*REDACTED*\n", output)
        self.assertIn("Host: my-bucket.oss-cn-hangzhou.aliyuncs.com\n", output)
        self.assertIn("StringToSign:\nGET\n\ntext/plain\n", output)
        self.assertIn("HTTP/1.1 200\n", output)
        self.assertIn("x-oss-request-id: RID\n", output)
        self.assertNotIn("hello\n", output)
        self.assertTrue(output.endswith("----------END-HTTP----------\n"))

    def test_trace_error_body(self):
        body = (
            "<Error><Code>AccessDenied</Code><Message>denied</Message>"
            "</Error>"
        )
        client, _ = mock_client(mock_response(403, data=body))
        stream = io.StringIO()
        client.trace_on(stream)
        with self.assertRaises(RemoteError):
            client.get_object("my-bucket", "hello.txt")
        self.assertIn(body, stream.getvalue())

    def test_trace_params(self):
        client, _ = mock_client(
            mock_response(
                200,
                data="<ListBucketResult><Name>my-bucket</Name>"
                "</ListBucketResult>",
            ),
        )
        stream = io.StringIO()
        client.trace_on(stream)
        client.list_objects_v2("my-bucket", {"prefix": "a"})
        self.assertIn("GET /?prefix=a&list-type=2 HTTP/1.1\n",
                      stream.getvalue())

    def test_trace_off(self):
        client, _ = mock_client(mock_response(200))
        stream = io.StringIO()
        client.trace_on(stream)
        client.trace_off()
        client.get_object("my-bucket", "hello.txt")
        self.assertEqual(stream.getvalue(), "")


class TokenTest(TestCase):
    def test_get_token(self):
        client, transport = mock_client()
        token = parse_token(client.get_token("my-bucket", "uploads/"))
        self.assertEqual(token["accessid"], "KEY")
        self.assertEqual(token["dir"], "uploads/")
        self.assertEqual(transport.requests, [])

    def test_get_token_with_policy(self):
        client, _ = mock_client()
        token = parse_token(
            client.get_token_with_policy(
                "my-bucket", [["content-length-range", 0, 10]], 60,
            ),
        )
        self.assertEqual(token["dir"], "")
        with self.assertRaises(ValueError):
            client.get_token("AB", "uploads/")
