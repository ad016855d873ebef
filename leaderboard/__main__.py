"""Allow running the leaderboard CLI as ``python -m leaderboard``."""

import sys

from leaderboard.cli import main

sys.exit(main())
