"""Allow ``python -m git_auto_commit``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
