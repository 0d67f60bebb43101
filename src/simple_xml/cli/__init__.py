"""Command-line interface for simple-xml.

Provides the ``simple-xml`` command for parsing, reformatting and profiling
XML files.
"""

from .main import main

__all__ = ["main"]
