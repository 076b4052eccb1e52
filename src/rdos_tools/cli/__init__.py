"""
RDOS Tools Command-Line Interface
=================================

This package provides the command-line tool for the RDOS toolkit:

- **rdoscat**: List, classify, and extract files from RDOS disk images

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["rdoscat"]
