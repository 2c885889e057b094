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

import unittest.mock as mock
from unittest import TestCase

from urllib3.exceptions import MaxRetryError

from liboss.error import InvalidResponseError, RemoteError, TransportError
from liboss.http import (UNKNOWN_ERROR_CODE, Urllib3Transport, build_url,
                         classify_response)

from .liboss_mocks import mock_response


def generate_error(code, message, request_id, host_id):
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<Error>
  <Code>{code}</Code>
  <Message>{message}</Message>
  <RequestId>{request_id}</RequestId>
  <HostId>{host_id}</HostId>
</Error>
'''


class BuildUrlTest(TestCase):
    def test_default_port(self):
        self.assertEqual(
            build_url("https", "b.oss.example.com", 443, "/o"),
            "https://b.oss.example.com/o",
        )
        self.assertEqual(
            build_url("http", "b.oss.example.com", 80, "/o"),
            "http://b.oss.example.com/o",
        )

    def test_custom_port(self):
        self.assertEqual(
            build_url("https", "localhost", 8443, "/"),
            "https://localhost:8443/",
        )

    def test_params(self):
        self.assertEqual(
            build_url("https", "h", 443, "/", {"prefix": "a b/c"}),
            "https://h/?prefix=a%20b%2Fc",
        )
        self.assertEqual(
            build_url("https", "h", 443, "/?uploads", {"max-uploads": "10"}),
            "https://h/?uploads&max-uploads=10",
        )


class ClassifyResponseTest(TestCase):
    def test_success(self):
        response = mock_response(200, data="ok")
        self.assertIs(classify_response(response), response)
        response = mock_response(206)
        self.assertIs(classify_response(response), response)

    def test_error_body(self):
        response = mock_response(
            403,
            {"x-oss-request-id": "header-id"},
            generate_error(
                "SignatureDoesNotMatch",
                "The request signature we calculated does not match",
                "5C3D9175B6FC201293AD****",
                "oss-cn-hangzhou.aliyuncs.com",
            ),
        )
        with self.assertRaises(RemoteError) as context:
            classify_response(response, "my-bucket", "o", "/my-bucket/o")
        error = context.exception
        self.assertEqual(error.code, "SignatureDoesNotMatch")
        self.assertEqual(
            error.message,
            "The request signature we calculated does not match",
        )
        self.assertEqual(error.request_id, "5C3D9175B6FC201293AD****")
        self.assertEqual(error.host_id, "oss-cn-hangzhou.aliyuncs.com")
        self.assertEqual(error.status_code, 403)
        self.assertEqual(error.resource, "/my-bucket/o")

    def test_error_body_without_fields(self):
        response = mock_response(
            500, {"x-oss-request-id": "header-id"}, "<Error></Error>",
        )
        with self.assertRaises(RemoteError) as context:
            classify_response(response)
        self.assertEqual(context.exception.code, UNKNOWN_ERROR_CODE)
        self.assertEqual(context.exception.request_id, "header-id")

    def test_empty_body(self):
        for bucket_name, object_name, code in [
                ("my-bucket", "o", "NoSuchKey"),
                ("my-bucket", "", "NoSuchBucket"),
                ("", "", "ResourceNotFound"),
        ]:
            with self.assertRaises(RemoteError) as context:
                classify_response(
                    mock_response(404), bucket_name, object_name,
                )
            self.assertEqual(context.exception.code, code)
            self.assertEqual(context.exception.status_code, 404)

        with self.assertRaises(RemoteError) as context:
            classify_response(mock_response(409), "my-bucket")
        self.assertEqual(context.exception.code, "BucketConflict")

    def test_empty_body_unknown_status(self):
        with self.assertRaises(InvalidResponseError) as context:
            classify_response(mock_response(418))
        self.assertEqual(context.exception.status_code, 418)

    def test_non_xml_body(self):
        with self.assertRaises(InvalidResponseError) as context:
            classify_response(
                mock_response(
                    502, {"Content-Type": "text/html"}, "Bad Gateway",
                ),
            )
        self.assertEqual(context.exception.body, "Bad Gateway")


class Urllib3TransportTest(TestCase):
    @mock.patch("urllib3.PoolManager")
    def test_execute(self, mock_connection):
        mock_server = mock_connection.return_value
        mock_server.urlopen.return_value = mock.Mock(
            status=200, headers={"ETag": '"abc"'}, data=b"hello",
        )
        transport = Urllib3Transport()
        response = transport.execute(
            "GET",
            "https",
            "b.oss.example.com",
            443,
            "/o?acl",
            [("Host", "b.oss.example.com"), ("x-oss-meta-a", "1")],
            b"",
            {"x": "1"},
        )
        self.assertEqual(response.status, 200)
        self.assertEqual(response.data, b"hello")
        args, kwargs = mock_server.urlopen.call_args
        self.assertEqual(args, ("GET", "https://b.oss.example.com/o?acl&x=1"))
        self.assertIsNone(kwargs["body"])
        self.assertEqual(kwargs["headers"]["X-Oss-Meta-A"], "1")

    @mock.patch("urllib3.PoolManager")
    def test_execute_failure(self, mock_connection):
        mock_server = mock_connection.return_value
        mock_server.urlopen.side_effect = MaxRetryError(
            None, "https://b.oss.example.com/o",
        )
        transport = Urllib3Transport()
        with self.assertRaises(TransportError):
            transport.execute(
                "GET", "https", "b.oss.example.com", 443, "/o", [], b"", {},
            )

    def test_invalid_http_client(self):
        with self.assertRaises(TypeError):
            Urllib3Transport(http_client=object())
