"""Central configuration for runtime-tunable parameters.

Network and timing constants can be overridden via environment variables so
that two local processes (or the test-suite) can pick their own ports, while
the game constants are fixed: the wire protocol only knows an 8x8 grid.
"""

from __future__ import annotations

import os

# ===========================================================================
# Network Defaults
# ===========================================================================
# SEABATTLE_PORT: Port the hosting side listens on when none is given.
#   Defaults to 61337.
#   Example: export SEABATTLE_PORT=5001
DEFAULT_PORT: int = int(os.getenv("SEABATTLE_PORT", "61337"))

# SEABATTLE_BIND: Address the hosting side listens on.
#   Defaults to "0.0.0.0" (all IPv4 interfaces).
#   Example: export SEABATTLE_BIND=127.0.0.1
BIND_ADDRESS: str = os.getenv("SEABATTLE_BIND", "0.0.0.0")


# ===========================================================================
# Automated Player
# ===========================================================================
# SEABATTLE_BOT_DELAY: Pause (in seconds) before each automated shot.
#   Defaults to 0.0 (maximum throughput).
#   A value such as 0.5 makes an --auto game watchable on the console.
#   Example: export SEABATTLE_BOT_DELAY=0.5
BOT_DELAY: float = float(os.getenv("SEABATTLE_BOT_DELAY", "0"))


# ===========================================================================
# Game Constants
# ===========================================================================
# Width and height of the grid. Not overridable: moves are encoded as a single
# letter A-H and a single digit 1-8.
FIELD_SIZE: int = 8

# Standard fleet, in placement order: one 4-deck, two 3-deck, three 2-deck and
# four 1-deck ships.
FLEET: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)

# Total number of ship segments on a full field.
FLEET_SEGMENTS: int = sum(FLEET)

# Random draws allowed per ship before a placement attempt is abandoned.
MAX_PLACEMENT_ATTEMPTS: int = 100


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# SEABATTLE_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled). Equivalent to the --debug CLI flag.
#   Example: export SEABATTLE_DEBUG=1
DEBUG: bool = os.getenv("SEABATTLE_DEBUG", "0") == "1"

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
