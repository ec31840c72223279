"""Mini README: Entry point script for a sequential reconstruction run.

Equivalent to the ``sfm-incremental`` console script. Process-wide settings
(log level, engine, export strictness) come from ``SFM_*`` environment
variables or a ``.env`` file; per-run options come from the command line.
"""

from __future__ import annotations

import sys

from sequential_sfm.cli import main

if __name__ == "__main__":
    sys.exit(main())
