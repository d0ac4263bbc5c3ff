"""Allow running as ``python -m propanim``."""

import sys

from .cli import main

sys.exit(main())
