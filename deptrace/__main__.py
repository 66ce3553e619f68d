"""Allow ``python -m deptrace``."""

import sys

from deptrace.main import main

sys.exit(main())
