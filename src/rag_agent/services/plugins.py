"""Plugin registry and intent detection.

A plugin is an async capability that takes the raw user message and
returns text. Plugins are registered by name at startup; the intent
detector maps a message to at most one plugin name by case-insensitive
substring matching against an ordered trigger list (first match wins).
"""

import logging
from collections.abc import Awaitable, Callable, Iterable

logger = logging.getLogger(__name__)

PluginFn = Callable[[str], Awaitable[str]]


class PluginError(Exception):
    """A plugin failed while producing its output."""

    def __init__(self, message: str, plugin: str | None = None):
        super().__init__(message)
        self.plugin = plugin


class PluginNotFoundError(PluginError):
    """No plugin is registered under the requested name."""


class PluginRegistry:
    """Mapping from plugin name to async capability."""

    def __init__(self) -> None:
        self._plugins: dict[str, PluginFn] = {}

    def register(self, name: str, plugin: PluginFn) -> None:
        """Register (or replace) a plugin under ``name``."""
        self._plugins[name] = plugin
        logger.debug(f"Registered plugin: {name}")

    def get(self, name: str) -> PluginFn | None:
        return self._plugins.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    async def invoke(self, name: str, text: str) -> str:
        """
        Invoke a registered plugin with the raw message text.

        Args:
            name: Registered plugin name
            text: The whole user message, passed through unparsed

        Returns:
            The plugin's text output

        Raises:
            PluginNotFoundError: If no plugin has this name
            PluginError: If the plugin itself raises
        """
        plugin = self._plugins.get(name)
        if plugin is None:
            raise PluginNotFoundError(f"Plugin not registered: {name}", plugin=name)

        try:
            return await plugin(text)
        except PluginError:
            raise
        except Exception as e:
            raise PluginError(f"Plugin '{name}' failed: {e}", plugin=name) from e


class IntentDetector:
    """Pick a plugin for a message via ordered trigger phrases."""

    def __init__(self, triggers: Iterable[tuple[str, str]]):
        self.triggers: list[tuple[str, str]] = [
            (phrase.lower(), plugin) for phrase, plugin in triggers
        ]

    def detect(self, message: str) -> str | None:
        """
        Return the plugin name for the first trigger found in ``message``.

        Never raises: any internal failure is logged and treated as no match.
        """
        try:
            lowered = message.lower()
            for phrase, plugin in self.triggers:
                if phrase in lowered:
                    return plugin
            return None
        except Exception:
            logger.exception("Intent detection failed; continuing without plugin")
            return None


async def weather_plugin(location: str) -> str:
    """Canned weather report; the whole message stands in for the location."""
    return f"Weather in {location}: 24°C, Sunny"


DEFAULT_TRIGGERS: list[tuple[str, str]] = [
    ("weather", "weather"),
]


def create_default_registry() -> PluginRegistry:
    """Build the registry with the built-in plugins."""
    registry = PluginRegistry()
    registry.register("weather", weather_plugin)
    return registry
