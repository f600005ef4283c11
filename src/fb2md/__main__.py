"""Module entry point for running with python -m fb2md."""

import sys

from fb2md.cli import main

if __name__ == "__main__":
    sys.exit(main())
