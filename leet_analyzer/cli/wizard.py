"""
Interactive configuration setup.
"""

from pathlib import Path
from typing import Optional

import typer

from leet_analyzer.core.config import DEFAULT_NOTES_FOLDER, AnalyzerConfig, expand_path
from leet_analyzer.core.logging import log_info
from leet_analyzer.output import console, print_success, print_warning


def _prompt_vault_path(default: str) -> str:
    while True:
        value = typer.prompt(
            "Enter path to your Obsidian vault (leave empty to skip)",
            default=default,
            show_default=bool(default),
        ).strip()
        if not value:
            return ""
        if Path(expand_path(value)).is_dir():
            return value
        print_warning(f"Directory does not exist: {value}")


def run_setup_wizard(
    config: AnalyzerConfig, config_path: Optional[str] = None
) -> AnalyzerConfig:
    """
    Prompt for missing settings, update ``config`` in place and save it.

    Args:
        config: Current configuration
        config_path: Where to save; defaults to ~/.leet_analyzer_config.json
    Returns:
        The updated configuration
    """
    console.print("[cyan]Setting up Leet Analyzer configuration...[/cyan]")

    if not config.gemini_api_key:
        api_key = typer.prompt(
            "Enter your Gemini AI API key (leave empty to skip)",
            default="",
            show_default=False,
            hide_input=True,
        ).strip()
        config.gemini_api_key = api_key or None

    vault_path = _prompt_vault_path(config.obsidian_vault_path or "")
    config.obsidian_vault_path = expand_path(vault_path) or None

    config.obsidian_notes_folder = typer.prompt(
        "Enter folder name for LeetCode notes (inside vault)",
        default=config.obsidian_notes_folder or DEFAULT_NOTES_FOLDER,
    ).strip() or DEFAULT_NOTES_FOLDER

    saved_to = config.save(Path(config_path) if config_path else None)
    log_info(f"Configuration saved to {saved_to}")
    print_success(f"Configuration complete! Saved to {saved_to}")
    return config
