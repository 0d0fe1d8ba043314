"""Allow ``python -m tortoisemap``."""

import sys

from tortoisemap.cli import main

sys.exit(main())
