"""Allow running as python -m locoexport."""

import sys

from locoexport.cli import main

sys.exit(main())
