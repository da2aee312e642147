"""Entry point for the diaglsp server."""

import sys

from diaglsp.cli import run


def main() -> None:
    """Parse arguments, start the server and exit with its status."""
    sys.exit(run())


if __name__ == "__main__":
    main()
