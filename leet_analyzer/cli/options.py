"""
Resolved options and configuration handling for Leet Analyzer.
"""

from dataclasses import dataclass
from typing import Optional

from leet_analyzer.core.config import AnalyzerConfig, set_config
from leet_analyzer.core.constants import DEFAULT_SOLUTION_NAME, MY_SOLUTION_NAME
from leet_analyzer.core.logging import configure_logging, log_debug, log_info


@dataclass
class ResolvedOptions:
    """Container for resolved CLI options."""

    solution_name: str
    use_ai: bool
    export: bool
    output_path: Optional[str]
    config_path: Optional[str]
    debug: bool
    config: AnalyzerConfig


def resolve_solution_name(solution_name: Optional[str], my_solution: bool) -> str:
    """--solution-name wins, then --my-solution, then the default name."""
    if solution_name and solution_name.strip():
        return " ".join(solution_name.split())
    if my_solution:
        return MY_SOLUTION_NAME
    return DEFAULT_SOLUTION_NAME


def resolve_options(
    solution_name: Optional[str] = None,
    my_solution: bool = False,
    output_override: Optional[str] = None,
    config_override: Optional[str] = None,
    ai: bool = True,
    export: bool = True,
    debug_override: bool = False,
    verbose: bool = False,
    log_file: Optional[str] = None,
) -> ResolvedOptions:
    """Resolves options based on command args, config files, and defaults."""
    configure_logging(debug=debug_override, verbose=verbose, log_file=log_file)

    log_debug(f"Loading config file: {config_override or 'default locations'}")
    config = AnalyzerConfig.from_file(config_override)
    if debug_override:
        config.debug = True
    set_config(config)

    resolved = ResolvedOptions(
        solution_name=resolve_solution_name(solution_name, my_solution),
        use_ai=ai,
        export=export,
        output_path=output_override,
        config_path=config_override,
        debug=config.debug,
        config=config,
    )

    log_info(
        f"Options resolved (ai={resolved.use_ai}, export={resolved.export}, "
        f"api_key={'set' if config.gemini_api_key else 'not set'}, "
        f"vault={config.obsidian_vault_path or 'not set'})",
        solution=resolved.solution_name,
    )
    return resolved
