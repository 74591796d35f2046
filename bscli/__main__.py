"""
Main entry point for the bscli package.

Allows running the CLI as: python -m bscli HOST GROUP ACTION
"""

from bscli.cli import main

if __name__ == "__main__":
    main()
