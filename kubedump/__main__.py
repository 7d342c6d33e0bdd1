"""Allow ``python -m kubedump``."""

import sys

from kubedump.cli import main

sys.exit(main())
