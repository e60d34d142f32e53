"""
Plugin renderer - host component that mounts the active plugin.

The component owns a render root holding, in order: stylesheet links, the
plugin container and the loader surface. connect() renders the loader and
starts listening; disconnect() stops listening and leaves the tree as is.
"""

from pluginhost.config.settings import RendererSettings
from pluginhost.core.event_bus import EventBus, default_bus
from pluginhost.dom import Node
from pluginhost.renderer.listener import LifecycleListener, SnapshotSource
from pluginhost.renderer.surface import MountSurface
from pluginhost.store import AppStore

TAG_NAME = "plugin-renderer"


class PluginRenderer:
    """
    Example:
        store = AppStore(bus)
        renderer = PluginRenderer(store, bus)
        renderer.connect()
        store.activate(plugin, "plugins/foo/foo.js", data)
        print(renderer.to_html())
    """

    def __init__(
        self,
        store: SnapshotSource,
        bus: EventBus | None = None,
        settings: RendererSettings | None = None,
    ):
        self.settings = settings or RendererSettings()
        self.bus = bus if bus is not None else default_bus()
        self.render_root = Node(TAG_NAME)
        self.surface = MountSurface(self.render_root, self.bus, self.settings)
        self.listener = LifecycleListener(
            self.surface,
            store,
            self.bus,
            replace_on_activate=self.settings.replace_on_activate,
        )

    def render(self) -> Node:
        """Render the component's static markup (the loader surface)."""
        return self.surface.render_loader()

    def connect(self) -> None:
        self.render()
        self.listener.connect()

    def disconnect(self) -> None:
        self.listener.disconnect()

    @property
    def container(self) -> Node | None:
        return self.surface.find_container()

    @property
    def loader_visible(self) -> bool:
        return self.surface.loader_visible

    def to_html(self) -> str:
        return self.render_root.to_html()


def build_host(
    settings: RendererSettings | None = None, bus: EventBus | None = None
) -> tuple[AppStore, PluginRenderer]:
    """
    Wire a store and a connected renderer on one bus.

    A new bus is created when none is given, honouring the
    isolate_handler_errors setting.
    """
    settings = settings or RendererSettings()
    if bus is None:
        bus = EventBus(isolate_errors=settings.isolate_handler_errors)
    store = AppStore(bus)
    renderer = PluginRenderer(store, bus, settings)
    renderer.connect()
    return store, renderer
