"""Allow ``python -m shiporder``."""

import sys

from shiporder.cli import main

sys.exit(main())
