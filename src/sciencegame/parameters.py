"""Game parameters for the science game core.

This module is the SINGLE SOURCE OF TRUTH for default game constants.
`sciencegame.config.GameConfig` reads its defaults from here, and the
environment loader falls back to these values when a variable is unset.

Usage:
    from sciencegame.parameters import DEFAULT_MIN_PLAYERS, DEFAULT_WEIGHT

All time values are measured in ticks, never in wall-clock time.
"""

# =============================================================================
# LOBBY PARAMETERS
# =============================================================================

DEFAULT_MIN_PLAYERS = 2
"""Minimum number of registered players required to start a game.

Current: 2

A single-player game is allowed by configuring min_players=1, but the
default matches the multiplayer nature of the game.
"""

DEFAULT_MAX_PLAYERS = None
"""Maximum number of players accepted during registration.

Current: None (unbounded)

The substrate usually enforces its own cap on game accounts, so the core
leaves this open.
"""


# =============================================================================
# QUESTION PARAMETERS
# =============================================================================

DEFAULT_WEIGHT = 1
"""Points awarded for a correct answer when a question record omits a weight."""

DEFAULT_TIME_LIMIT = 30
"""Ticks a round stays open when a question record omits a time limit.

Current: 30

Matches a 30 second action timeout at one tick per second. Ticks replace
seconds so that every replaying node agrees on when a round expires.
"""


# =============================================================================
# SETTLEMENT PARAMETERS
# =============================================================================

DEFAULT_POINTS_VALUE = 1
"""Payout weight credited per scored point when no payout schedule is set.

Each accepted solution credits a fixed coin amount per point.
"""

DEFAULT_PAYOUT_SCHEDULE = None
"""Rank-indexed payout weights (rank 1 first).

Current: None (payout proportional to score)

When set, e.g. [50, 30, 20], rank N receives schedule[N-1] and ranks past
the end of the schedule receive 0.
"""


# =============================================================================
# ROUND PARAMETERS
# =============================================================================

DEFAULT_ROUND_COUNT = None
"""Number of rounds per game.

Current: None (one round per question in the pool)
"""

DEFAULT_ELIMINATE_ON_MISS = False
"""Whether a player who misses a round is eliminated from later rounds.

Current: False

Eliminated players keep their score and still appear in settlement, but
can no longer submit answers and no longer count toward early close.
"""
