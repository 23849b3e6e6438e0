"""
CI integration for foxfetch.

Reports downloaded binaries to CI environment files and the process
environment.
"""

from .reporting import BINARY_ENV_VAR, BINARY_OUTPUT_NAME, ResultReporter

__all__ = ["BINARY_ENV_VAR", "BINARY_OUTPUT_NAME", "ResultReporter"]
