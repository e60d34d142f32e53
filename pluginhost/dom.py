"""
Node tree - minimal DOM-like surface that plugins render into.

Nodes carry a tag, attributes, a class list, optional text and children.
Each node owns an EventTarget, so listeners attached to a node are dropped
together with it. Serialization goes through xml.etree.ElementTree.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from typing import Any

from pluginhost.core.box import Box
from pluginhost.core.event_bus import EventTarget
from pluginhost.events import EventKind


class NodeError(Exception):
    """Base exception for node tree errors."""

    pass


class SelectorError(NodeError):
    """Raised when a selector cannot be parsed."""

    pass


_ATTR_SELECTOR = re.compile(r"^\[([\w-]+)(?:=['\"]?([^'\"\]]*)['\"]?)?\]$")
_TAG_SELECTOR = re.compile(r"^[a-zA-Z][\w-]*$")


def _compile_selector(selector: str):
    """
    Compile a single simple selector into a predicate.

    Supported forms: ``.class``, ``[attr]``, ``[attr=value]``, ``tag``.
    """
    selector = selector.strip()
    if selector.startswith(".") and len(selector) > 1:
        name = selector[1:]
        return lambda node: name in node.class_list
    match = _ATTR_SELECTOR.match(selector)
    if match:
        attr, value = match.group(1), match.group(2)
        if value is None:
            return lambda node: attr in node.attributes
        return lambda node: node.attributes.get(attr) == value
    if _TAG_SELECTOR.match(selector):
        tag = selector.lower()
        return lambda node: node.tag == tag
    raise SelectorError(f"Unsupported selector: {selector!r}")


class Node:
    """
    A single element in the render tree.

    Example:
        root = Node("div", {"class": "plugin-root"})
        root.append(Node("p", text="hello"))
        root.query_selector(".plugin-root")
    """

    def __init__(
        self,
        tag: str,
        attributes: dict[str, str] | None = None,
        text: str | None = None,
    ):
        self.tag = tag.lower()
        self.attributes: dict[str, str] = {}
        self.class_list: list[str] = []
        self.text = text
        self.children: list[Node] = []
        self.parent: Node | None = None
        self.events = EventTarget()

        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)

    # Attributes
    def set_attribute(self, name: str, value: Any) -> None:
        if name == "class":
            self.class_list = [c for c in str(value).split() if c]
            return
        self.attributes[name] = str(value)

    def get_attribute(self, name: str) -> str | None:
        if name == "class":
            return " ".join(self.class_list) if self.class_list else None
        return self.attributes.get(name)

    def add_class(self, name: str) -> None:
        if name not in self.class_list:
            self.class_list.append(name)

    def remove_class(self, name: str) -> None:
        if name in self.class_list:
            self.class_list.remove(name)

    def has_class(self, name: str) -> bool:
        return name in self.class_list

    # Tree mutation
    def append(self, child: Node) -> Node:
        child.detach()
        child.parent = self
        self.children.append(child)
        return child

    def prepend(self, child: Node) -> Node:
        child.detach()
        child.parent = self
        self.children.insert(0, child)
        return child

    def detach(self) -> None:
        """Remove this node from its parent, keeping its listeners."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def remove(self) -> None:
        """Remove this node from the tree and drop every listener in its subtree."""
        self.detach()
        for node in self.iter():
            node.events.clear_listeners()

    def clear(self) -> None:
        """Remove all children and text in place. Own listeners are kept."""
        for child in list(self.children):
            child.remove()
        self.text = None

    # Lookup
    def iter(self) -> Iterator[Node]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    def query_selector_all(self, selector: str) -> list[Node]:
        """Find descendants (excluding self) matching a simple selector."""
        predicate = _compile_selector(selector)
        return [node for node in self.iter() if node is not self and predicate(node)]

    def query_selector(self, selector: str) -> Node | None:
        """Find the first descendant (excluding self) matching a simple selector."""
        predicate = _compile_selector(selector)
        for node in self.iter():
            if node is not self and predicate(node):
                return node
        return None

    # Events
    def add_event_listener(self, kind: EventKind, callback, priority: int = 0):
        return self.events.add_event_listener(kind, callback, priority)

    def remove_event_listener(self, kind: EventKind, callback) -> None:
        self.events.remove_event_listener(kind, callback)

    def dispatch_event(self, kind: EventKind, detail: Any = None) -> None:
        """
        Dispatch an event on this node.

        Args:
            kind: Event kind
            detail: Payload, boxed by reference unless it already is a Box.
                None means no payload.
        """
        if detail is None:
            content = Box.empty()
        elif isinstance(detail, Box):
            content = detail
        else:
            content = Box.ref(detail)
        self.events.dispatch_event(kind, content)

    # Serialization
    def to_element(self) -> ET.Element:
        attrib = {}
        if self.class_list:
            attrib["class"] = " ".join(self.class_list)
        attrib.update(self.attributes)
        element = ET.Element(self.tag, attrib)
        element.text = self.text
        for child in self.children:
            element.append(child.to_element())
        return element

    def to_html(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode", method="html")

    def inner_html(self) -> str:
        parts = [self.text or ""]
        parts.extend(child.to_html() for child in self.children)
        return "".join(parts)

    def __repr__(self) -> str:
        classes = "." + ".".join(self.class_list) if self.class_list else ""
        return f"<Node {self.tag}{classes} children={len(self.children)}>"


def create_tag(tag: str, attributes: dict[str, Any] | None = None, text: str | None = None) -> Node:
    """Create a detached node with the given attributes."""
    return Node(tag, {k: str(v) for k, v in (attributes or {}).items()}, text)
