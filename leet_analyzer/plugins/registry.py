from pathlib import Path
from typing import Union

from leet_analyzer.analysis.models import ParsedCode
from leet_analyzer.core import constants
from leet_analyzer.core.exceptions import (
    ConfigurationError,
    ParseError,
    UnsupportedLanguageError,
)


def resolve_language(lang: str) -> str:
    """Resolve language alias to standard name."""
    lowered = lang.lower()

    if lowered in constants.SUPPORTED_LANGUAGES:
        return lowered

    resolved = constants.LANGUAGE_ALIASES.get(lowered)
    if resolved:
        return resolved

    supported = ", ".join(sorted(constants.SUPPORTED_LANGUAGES))
    aliases = ", ".join(sorted(constants.LANGUAGE_ALIASES.keys()))
    raise ConfigurationError(
        f"Unsupported language: '{lang}'. "
        f"Supported languages: {supported}. "
        f"Aliases: {aliases}"
    )


def plugin_for_path(file_path: Union[str, Path]):
    """Find the plugin responsible for a file, by extension."""
    # Import here to avoid circular dependency
    from . import get_plugin

    extension = Path(file_path).suffix.lower()
    language = constants.LANGUAGE_EXTENSIONS.get(extension)
    if not language:
        supported = ", ".join(sorted(constants.LANGUAGE_EXTENSIONS))
        raise UnsupportedLanguageError(
            f"Unsupported file extension: {extension or '(none)'}. "
            f"Supported: {supported}"
        )
    return get_plugin(language)


def parse_code_file(file_path: Union[str, Path]) -> ParsedCode:
    """
    Read a solution file and run its language plugin over it.

    Raises:
        UnsupportedLanguageError: If the extension is not supported
        ParseError: If the file cannot be read
    """
    plugin = plugin_for_path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not read {file_path}: {e}") from e
    return plugin.parse(content, str(file_path))
