"""
Entry point for running cmakekits CLI as a module.

Usage: python -m cmakekits.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
