"""
objecthash Command Line Interface.

This package provides command-line tools for hashing JSON documents and
checking golden fixture files.
"""

# Import the main CLI entry point
from .main import cli

__all__ = [
    'cli',
]
