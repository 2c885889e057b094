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
XML encoding and decoding functions.

Response bodies are decoded without any schema into a tree of `Text`,
`Element` and `NodeList` nodes:

    >>> decode("<root><item>1</item><item>2</item></root>")
    Element({'root': Element({'item': NodeList([Text('1'), Text('2')])})})
    >>> to_python(_)
    {'root': {'item': ['1', '2']}}
"""

from __future__ import annotations

import io
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Optional, TypeVar, Union, overload
from xml.etree import ElementTree as ET

from typing_extensions import Protocol

from .error import XmlParseError

CONTENT_KEY = "#content"


@dataclass(frozen=True)
class Text:
    """Text content of an element."""
    value: str

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Text({self.value!r})"


class Element(Mapping):
    """Element content as read-only ordered mapping of tag name to node."""
    __slots__ = ("_children",)

    def __init__(self, children: Optional[Mapping[str, Node]] = None):
        self._children: dict[str, Node] = dict(children or {})

    def __getitem__(self, key: str) -> Node:
        return self._children[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"Element({self._children!r})"


class NodeList(Sequence):
    """Values of repeated child tags in document order."""
    __slots__ = ("_items",)

    def __init__(self, items: Sequence[Node]):
        self._items: tuple[Node, ...] = tuple(items)

    @overload
    def __getitem__(self, index: int) -> Node: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Node]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other):
        if not isinstance(other, NodeList):
            return NotImplemented
        return self._items == other._items

    def __hash__(self):
        return hash(self._items)

    def __repr__(self) -> str:
        return f"NodeList({list(self._items)!r})"


Node = Union[Text, Element, NodeList]


def _local_name(name: str) -> str:
    """Strip namespace URI from ElementTree qualified name."""
    return name.rsplit("}", 1)[-1] if name.startswith("{") else name


def _child_nodes(element: ET.Element) -> list[Union[str, ET.Element]]:
    """Return text and element children without whitespace-only text."""
    nodes: list[Union[str, ET.Element]] = []
    if element.text is not None:
        nodes.append(element.text)
    for child in element:
        nodes.append(child)
        if child.tail is not None:
            nodes.append(child.tail)
    return [
        node for node in nodes if not isinstance(node, str) or node.strip()
    ]


def _get_content(element: ET.Element) -> Node:
    """Get processed children content of element."""
    nodes = _child_nodes(element)
    if not nodes:
        return Text("")

    if len(nodes) == 1:
        node = nodes[0]
        if isinstance(node, str):
            return Text(node.strip())
        return _convert(node)

    grouped: dict[str, list[Node]] = {}
    for node in nodes:
        if isinstance(node, str):
            continue
        for key, value in _convert(node).items():
            grouped.setdefault(key, []).append(value)

    return Element({
        key: values[0] if len(values) == 1 else NodeList(values)
        for key, values in grouped.items()
    })


def _convert(element: ET.Element) -> Element:
    """Convert ElementTree.Element to single entry Element."""
    content = _get_content(element)
    if element.attrib:
        attrs: dict[str, Node] = {
            _local_name(key): Text(value)
            for key, value in element.attrib.items()
        }
        if isinstance(content, Element):
            attrs.update(content)
        else:
            attrs[CONTENT_KEY] = content
        content = Element(attrs)
    return Element({_local_name(element.tag): content})


def decode(xml: Union[str, bytes]) -> Element:
    """
    Decode XML document into `Element` keyed by root tag name.

    Raises `XmlParseError` on malformed input.
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as exc:
        text = xml.decode(errors="replace") if isinstance(xml, bytes) else xml
        raise XmlParseError(f"failed to parse XML; {exc}", text) from exc
    return _convert(root)


def to_python(node: Node) -> Union[str, dict, list]:
    """Convert node to plain str, dict and list values."""
    if isinstance(node, Text):
        return node.value
    if isinstance(node, NodeList):
        return [to_python(item) for item in node]
    return {key: to_python(value) for key, value in node.items()}


def naive_map(xml: Union[str, bytes]) -> dict:
    """Decode XML document into plain dict."""
    return to_python(decode(xml))  # type: ignore[return-value]


def unwrap(root: Element) -> Node:
    """Return content of the root element of decoded document."""
    if len(root) != 1:
        raise ValueError("decoded document must have exactly one root")
    return next(iter(root.values()))


def find(node: Optional[Node], path: str) -> Optional[Node]:
    """
    Find node by dot separated tag names. A NodeList met on the way is
    entered through its first item.
    """
    for name in path.split("."):
        if isinstance(node, NodeList):
            node = node[0] if node else None
        if not isinstance(node, Element):
            return None
        node = node.get(name)
    return node


def findall(node: Optional[Node], path: str) -> list[Node]:
    """Find nodes by path; always returns a list."""
    found = find(node, path)
    if found is None:
        return []
    if isinstance(found, NodeList):
        return list(found)
    return [found]


def findtext(
        node: Optional[Node],
        path: str,
        strict: bool = False,
        default: Optional[str] = None,
) -> Optional[str]:
    """
    Find text by path with strict flag raises ValueError if path does not
    exist.
    """
    found = find(node, path)
    if isinstance(found, NodeList):
        found = found[0] if found else None
    if isinstance(found, Element):
        found = found.get(CONTENT_KEY)
    if isinstance(found, Text):
        return found.value
    if strict:
        raise ValueError(f"XML element <{path}> not found")
    return default


def new_element(tag: str) -> ET.Element:
    """Create ElementTree.Element with tag."""
    return ET.Element(tag)


def add_subelement(
        parent: ET.Element, tag: str, text: Optional[str] = None,
) -> ET.Element:
    """Create ElementTree.SubElement on parent with tag and text."""
    element = ET.SubElement(parent, tag)
    if text is not None:
        element.text = text
    return element


UnmarshalT = TypeVar("UnmarshalT", bound="UnmarshalProtocol")


class UnmarshalProtocol(Protocol):
    """typing stub for class with `fromxml` method"""

    @classmethod
    def fromxml(cls: type[UnmarshalT], node: Node) -> UnmarshalT:
        """Create object by values from content node of root element."""


def unmarshal(cls: type[UnmarshalT], xml: Union[str, bytes]) -> UnmarshalT:
    """Unmarshal given XML document to an object of passed class."""
    return cls.fromxml(unwrap(decode(xml)))


def getbytes(element: ET.Element) -> bytes:
    """Convert ElementTree.Element to bytes."""
    with io.BytesIO() as data:
        ET.ElementTree(element).write(
            data,
            encoding=None,
            xml_declaration=False,
        )
        return data.getvalue()


class MarshalT(Protocol):
    """typing stub for class with `toxml` method"""

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """
        Convert python object to ElementTree.Element.
        For root, `element` argument is always `None` hence
        root `Element` must be created.
        """


def marshal(obj: MarshalT) -> bytes:
    """Get XML data as bytes of ElementTree.Element."""
    return getbytes(obj.toxml(None))
