"""Allow running the price report tool with ``python -m price_report``."""

import sys

from price_report.cli import main

sys.exit(main())
