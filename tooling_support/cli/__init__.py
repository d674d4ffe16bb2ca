"""CLI module for tooling-support.

This module provides the command-line interface for extracting canonical
dependency records from a build description. Options can also be supplied
through environment variables.
"""

from .main import (
    Config,
    build_config,
    cli,
    main,
    run_extraction,
)

__all__ = [
    "cli",
    "Config",
    "build_config",
    "main",
    "run_extraction",
]
