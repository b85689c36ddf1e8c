"""
Entry point for running the CLI as a module.

Usage:
    python -m semops <command>
"""

from semops.cli.commands import main

if __name__ == "__main__":
    main()
