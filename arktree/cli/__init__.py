"""
Command line interface and console display.
"""

from .display import Colors, DisplayService
from .main import build_parser, main

__all__ = [
    "Colors",
    "DisplayService",
    "build_parser",
    "main",
]
