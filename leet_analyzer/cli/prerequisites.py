"""
Checks run before an analysis.
"""

import sys
from pathlib import Path

from leet_analyzer.core.exceptions import PrerequisiteError
from leet_analyzer.core.logging import log_debug, log_warning
from leet_analyzer.output import print_info, print_warning
from leet_analyzer.plugins import plugin_for_path

from .options import ResolvedOptions
from .wizard import run_setup_wizard


def _is_interactive() -> bool:
    return sys.stdin.isatty()


def check_prerequisites(options: ResolvedOptions, file_path: str) -> None:
    """
    Make sure an analysis of ``file_path`` can run with ``options``.

    Missing settings trigger the setup wizard when running in a terminal;
    otherwise the run continues with static analysis or without export.

    Raises:
        PrerequisiteError: If the file is missing
        UnsupportedLanguageError: If the file extension is not supported
    """
    path = Path(file_path)
    if not path.is_file():
        raise PrerequisiteError(f"File not found: {file_path}")

    plugin = plugin_for_path(path)
    log_debug(f"Language plugin: {plugin.name}")

    config = options.config

    if options.use_ai and not config.gemini_api_key:
        print_warning("No Gemini API key found in configuration or environment.")
        if _is_interactive():
            run_setup_wizard(config, options.config_path)

    if not options.export:
        log_debug("Obsidian export disabled, skipping vault checks.")
        return

    if options.output_path:
        log_debug(f"Explicit output path given: {options.output_path}")
        return

    if not config.obsidian_vault_path or not Path(config.obsidian_vault_path).is_dir():
        if config.obsidian_vault_path:
            print_warning(
                f"Configured Obsidian vault path does not exist: {config.obsidian_vault_path}"
            )
        else:
            print_warning("Valid Obsidian vault path not found for export.")
        if _is_interactive():
            run_setup_wizard(config, options.config_path)

    notes_dir = config.notes_dir()
    if notes_dir is None or not Path(config.obsidian_vault_path).is_dir():
        log_warning("Obsidian vault path is not configured. Skipping export.")
        options.export = False
        return

    if not notes_dir.exists():
        print_info(f"Creating Obsidian notes folder: {notes_dir}")
        notes_dir.mkdir(parents=True, exist_ok=True)
