"""
foxfetch CLI module.

This module provides the command-line interface for foxfetch.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
