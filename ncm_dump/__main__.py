"""
Main entry point for the ncm_dump package.

Allows running the dumper as: python -m ncm_dump
"""

from ncm_dump.cli import main

if __name__ == "__main__":
    main()
