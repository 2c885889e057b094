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
liboss - Python SDK for Aliyun Object Storage Service

    >>> from liboss import Config, Oss
    >>> client = Oss(
    ...     Config(
    ...         endpoint="oss-cn-hangzhou.aliyuncs.com",
    ...         access_key_id="ACCESS-KEY-ID",
    ...         access_key_secret="ACCESS-KEY-SECRET",
    ...     ),
    ... )
    >>> client.put_object("my-bucket", "hello.txt", b"hello")
    >>> print(client.get_object("my-bucket", "hello.txt"))

:copyright: (C) 2025 LibOss Authors.
:license: Apache 2.0, see LICENSE for more details.
"""

__title__ = "liboss"
__author__ = "LibOss Authors"
__version__ = "0.1.0"
__license__ = "Apache 2.0"
__copyright__ = "Copyright 2025 LibOss Authors"

# pylint: disable=unused-import,useless-import-alias
from .api import Oss as Oss
from .config import Config as Config
from .error import ConfigError as ConfigError
from .error import EncodingError as EncodingError
from .error import InvalidResponseError as InvalidResponseError
from .error import LibOssException as LibOssException
from .error import RemoteError as RemoteError
from .error import TransportError as TransportError
from .error import XmlParseError as XmlParseError
