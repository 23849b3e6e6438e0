"""
Entry point for running foxfetch CLI as a module.

Usage: python -m foxfetch.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
