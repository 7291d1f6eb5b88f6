"""Allow running as ``python -m takeout``."""

import sys

from takeout.main import main

sys.exit(main())
