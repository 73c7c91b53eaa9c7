"""
Entry point for running rustndk as a module.

Usage: python -m rustndk [command] [options]
"""

from rustndk.cli.parser import main

if __name__ == "__main__":
    main()
