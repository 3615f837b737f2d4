"""Entry point for `python -m configor`."""
import sys

from configor.cli import main

if __name__ == "__main__":
    sys.exit(main())
