"""Entry point for `python -m ta_engine`."""

import sys

from ta_engine.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
