"""
Mount surface - container, stylesheet and loader bookkeeping.

The surface owns the single plugin container under a render root. The
container is never referenced directly between events: it is looked up by
its marker class, so a container removed by anyone is simply "absent".
"""

from typing import Any

from pluginhost.config.settings import RendererSettings
from pluginhost.core.box import Box
from pluginhost.core.event_bus import EventBus
from pluginhost.dom import Node, create_tag
from pluginhost.events import EventKind


def derive_stylesheet_href(path: str, module_suffix: str = ".js", stylesheet_suffix: str = ".css") -> str:
    """
    Derive a plugin's stylesheet locator from its module locator.

    Only the first occurrence of the module suffix is replaced; a path
    without it is returned unchanged.

    Example:
        derive_stylesheet_href("plugins/foo/foo.js") -> "plugins/foo/foo.css"
    """
    return path.replace(module_suffix, stylesheet_suffix, 1)


class MountSurface:
    """
    Container, stylesheet link and loader visibility of one render root.

    Every operation that needs a container or a loader surface does nothing
    when it is missing.
    """

    def __init__(self, render_root: Node, bus: EventBus, settings: RendererSettings | None = None):
        self.render_root = render_root
        self.bus = bus
        self.settings = settings or RendererSettings()
        # Set once the host has rendered its loader markup
        self.loader_surface: Node | None = None

    @property
    def container_selector(self) -> str:
        return f".{self.settings.container_class}"

    # Container
    def create_container(self) -> Node:
        """Create an empty container as the first child of the render root."""
        container = create_tag(
            "div",
            {
                "class": self.settings.container_class,
                "data-testid": self.settings.container_test_id,
            },
        )
        container.events.isolate_errors = self.settings.isolate_handler_errors
        self.render_root.prepend(container)
        return container

    def find_container(self) -> Node | None:
        return self.render_root.query_selector(self.container_selector)

    def containers(self) -> list[Node]:
        return self.render_root.query_selector_all(self.container_selector)

    def remove_container(self) -> bool:
        """
        Detach the current container and drop its listeners.

        Returns:
            True if a container was removed
        """
        container = self.find_container()
        if container is None:
            return False
        container.remove()
        return True

    def clear_container(self, container: Node) -> None:
        """Empty the container in place; its identity and listeners survive."""
        container.clear()

    # Stylesheet
    def attach_stylesheet(self, path: str) -> Node:
        """Insert a stylesheet link for the plugin at ``path`` ahead of the container."""
        href = derive_stylesheet_href(
            path, self.settings.module_suffix, self.settings.stylesheet_suffix
        )
        link = create_tag("link", {"rel": "stylesheet", "href": href})
        self.render_root.prepend(link)
        return link

    def stylesheets(self) -> list[Node]:
        return self.render_root.query_selector_all("[rel=stylesheet]")

    # Loader
    def render_loader(self) -> Node:
        """Render the loader surface at the end of the render root."""
        if self.loader_surface is not None:
            return self.loader_surface
        surface = create_tag("div", {"class": self.settings.loader_class})
        surface.append(
            create_tag(
                "sp-progress-circle",
                {"indeterminate": "", "label": self.settings.loader_label},
            )
        )
        self.render_root.append(surface)
        self.loader_surface = surface
        return surface

    def show_loader(self, content: Box | None = None) -> None:
        if self.loader_surface is not None:
            self.loader_surface.add_class(self.settings.loader_visible_class)

    def hide_loader(self, content: Box | None = None) -> None:
        if self.loader_surface is not None:
            self.loader_surface.remove_class(self.settings.loader_visible_class)

    @property
    def loader_visible(self) -> bool:
        if self.loader_surface is None:
            return False
        return self.loader_surface.has_class(self.settings.loader_visible_class)

    # Notifications
    def forward_toast(self, content: Any) -> None:
        """Re-emit a container toast on the shared bus, payload unchanged."""
        if not isinstance(content, Box):
            content = Box.ref(content)
        self.bus.dispatch(EventKind.TOAST, content.clone())
