"""
CLI commands for the proteoclean package.

This module provides Click commands for the proteoclean CLI.
"""

from proteoclean.commands.clean import clean_command, example_config_command
from proteoclean.commands.contaminants import fetch_crap_command, build_crap_command
from proteoclean.commands.enrich import enrich_command

__all__ = [
    "clean_command",
    "example_config_command",
    "fetch_crap_command",
    "build_crap_command",
    "enrich_command",
]
