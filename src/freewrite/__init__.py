"""Public package interface for freewrite."""

from .cli import cli_main
from .server import analyze_style, analyze_style_file, continue_list, highlight_markdown, main

__all__ = [
    "analyze_style",
    "analyze_style_file",
    "cli_main",
    "continue_list",
    "highlight_markdown",
    "main",
]
