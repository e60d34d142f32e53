"""
Tests for the node tree.

This test suite covers:
1. Attribute and class handling
2. Tree mutation (append, prepend, remove, clear)
3. Selector lookup
4. Node-scoped events and listener lifetime
5. HTML serialization
"""

import pytest

from pluginhost.core.box import Box
from pluginhost.dom import Node, SelectorError, create_tag
from pluginhost.events import EventKind


class TestAttributes:
    """Test attributes and class list."""

    def test_class_attribute_populates_class_list(self):
        node = create_tag("div", {"class": "plugin-root extra", "data-testid": "plugin-root"})

        assert node.class_list == ["plugin-root", "extra"]
        assert node.get_attribute("class") == "plugin-root extra"
        assert node.get_attribute("data-testid") == "plugin-root"

    def test_add_and_remove_class(self):
        node = Node("div")
        node.add_class("visible")
        node.add_class("visible")
        assert node.class_list == ["visible"]

        node.remove_class("visible")
        node.remove_class("visible")
        assert not node.has_class("visible")


class TestMutation:
    """Test tree mutation."""

    def test_prepend_puts_child_first(self):
        root = Node("section")
        a = root.append(Node("a"))
        b = root.prepend(Node("b"))

        assert root.children == [b, a]
        assert b.parent is root

    def test_append_moves_node_between_parents(self):
        first, second = Node("div"), Node("div")
        child = first.append(Node("p"))

        second.append(child)

        assert first.children == []
        assert child.parent is second

    def test_remove_detaches_and_drops_listeners(self):
        root = Node("section")
        child = root.append(Node("div"))
        grandchild = child.append(Node("span"))
        child.add_event_listener(EventKind.TOAST, lambda c: None)
        grandchild.add_event_listener(EventKind.TOAST, lambda c: None)

        child.remove()

        assert root.children == []
        assert child.parent is None
        assert child.events.listener_count(EventKind.TOAST) == 0
        assert grandchild.events.listener_count(EventKind.TOAST) == 0

    def test_remove_detached_node_is_noop(self):
        Node("div").remove()

    def test_clear_keeps_own_listeners(self):
        node = Node("div", text="old")
        node.append(Node("p"))
        node.add_event_listener(EventKind.TOAST, lambda c: None)

        node.clear()

        assert node.children == []
        assert node.text is None
        assert node.events.listener_count(EventKind.TOAST) == 1


class TestSelectors:
    """Test query_selector lookups."""

    def test_class_selector(self):
        root = Node("section")
        target = root.append(create_tag("div", {"class": "plugin-root"}))

        assert root.query_selector(".plugin-root") is target
        assert root.query_selector(".missing") is None

    def test_attribute_selector(self):
        root = Node("section")
        link = root.append(create_tag("link", {"rel": "stylesheet", "href": "a.css"}))

        assert root.query_selector("[rel=stylesheet]") is link
        assert root.query_selector('[href="a.css"]') is link
        assert root.query_selector("[href]") is link

    def test_tag_selector_and_all(self):
        root = Node("section")
        inner = root.append(Node("div"))
        nested = inner.append(Node("div"))

        assert root.query_selector_all("div") == [inner, nested]

    def test_selector_excludes_self(self):
        root = create_tag("div", {"class": "plugin-root"})
        assert root.query_selector(".plugin-root") is None

    def test_unsupported_selector(self):
        with pytest.raises(SelectorError):
            Node("div").query_selector("div > p")


class TestNodeEvents:
    """Test node-scoped dispatch."""

    def test_dispatch_boxes_plain_detail(self):
        node = Node("div")
        received = []
        node.add_event_listener(EventKind.TOAST, lambda c: received.append(c.into()))

        node.dispatch_event(EventKind.TOAST, {"message": "saved"})

        assert received == [{"message": "saved"}]

    def test_dispatch_keeps_detail_identity(self):
        node = Node("div")
        detail = {"message": "deleted", "target": Node("li")}
        received = []
        node.add_event_listener(EventKind.TOAST, lambda c: received.append(c.into()))

        node.dispatch_event(EventKind.TOAST, detail)

        assert received[0] is detail
        assert received[0]["target"] is detail["target"]

    def test_dispatch_without_detail_sends_empty_box(self):
        node = Node("div")
        received = []
        node.add_event_listener(EventKind.DISPLAY_LOADER, received.append)

        node.dispatch_event(EventKind.DISPLAY_LOADER)

        assert received[0].is_empty()

    def test_dispatch_passes_box_through(self):
        node = Node("div")
        received = []
        node.add_event_listener(EventKind.TOAST, received.append)
        box = Box.any("x")

        node.dispatch_event(EventKind.TOAST, box)

        assert received == [box]


class TestSerialization:
    """Test HTML output."""

    def test_to_html(self):
        root = create_tag("div", {"class": "plugin-root", "data-testid": "plugin-root"})
        root.append(create_tag("p", text="hello"))

        html = root.to_html()

        assert html.startswith('<div class="plugin-root" data-testid="plugin-root">')
        assert "<p>hello</p>" in html
        assert html.endswith("</div>")

    def test_inner_html(self):
        root = Node("div", text="a")
        root.append(Node("b", text="c"))

        assert root.inner_html() == "a<b>c</b>"
