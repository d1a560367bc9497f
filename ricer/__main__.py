"""Allow ``python -m ricer``."""

import sys

from ricer.cli import main

sys.exit(main())
