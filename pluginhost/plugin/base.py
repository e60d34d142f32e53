"""Plugin capability interface."""

from typing import Any, Protocol, runtime_checkable

from pluginhost.dom import Node


@runtime_checkable
class Decoratable(Protocol):
    """
    Anything that can render itself into a container.

    Plugin modules satisfy this with a top-level ``decorate`` function;
    classes satisfy it with a ``decorate`` method.
    """

    def decorate(self, container: Node, data: Any, search_query: str | None = None) -> None:
        ...
