from .javascript_plugin import JavaScriptPlugin


class TypeScriptPlugin(JavaScriptPlugin):
    """TypeScript language plugin; function detection is shared with JavaScript."""

    name = "typescript"
    aliases = ["ts"]
    extensions = [".ts"]
