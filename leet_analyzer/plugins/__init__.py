from typing import Dict, Optional, Type

from .language_plugin import LanguagePlugin
from .registry import parse_code_file, plugin_for_path, resolve_language

from .languages.go_plugin import GoPlugin
from .languages.javascript_plugin import JavaScriptPlugin
from .languages.typescript_plugin import TypeScriptPlugin

# Import constants to populate
from leet_analyzer.core import constants


PLUGINS: Dict[str, LanguagePlugin] = {}


def register_plugin(plugin_cls: Type[LanguagePlugin]):
    """Register a plugin and update global constants."""
    plugin = plugin_cls()
    PLUGINS[plugin.name] = plugin

    constants.SUPPORTED_LANGUAGES.add(plugin.name)

    for alias in getattr(plugin, "aliases", []):
        constants.LANGUAGE_ALIASES[alias] = plugin.name

    for extension in getattr(plugin, "extensions", []):
        constants.LANGUAGE_EXTENSIONS[extension] = plugin.name


def get_plugin(name: str) -> Optional[LanguagePlugin]:
    return PLUGINS.get(name)


# Register all available plugins
register_plugin(TypeScriptPlugin)
register_plugin(JavaScriptPlugin)
register_plugin(GoPlugin)

__all__ = [
    "LanguagePlugin",
    "get_plugin",
    "parse_code_file",
    "plugin_for_path",
    "register_plugin",
    "resolve_language",
]
