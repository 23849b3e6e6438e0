"""
Entry point for running foxfetch CLI as a module.

Usage: python -m foxfetch [command] [options]
"""

from foxfetch.cli.parser import main

if __name__ == "__main__":
    main()
