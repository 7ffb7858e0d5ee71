"""Command-line entry point of the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .parsing import UsageError, parse_arguments
from .simulation import Table


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the simulation and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_arguments(args)
    except UsageError as error:
        sys.stdout.write(str(error))
        sys.stdout.flush()
        return 1
    Table(settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())