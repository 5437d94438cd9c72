"""
CLI command implementations.
"""

from .render_cli import cmd_render
from .summary_cli import cmd_summary

__all__ = ["cmd_render", "cmd_summary"]
