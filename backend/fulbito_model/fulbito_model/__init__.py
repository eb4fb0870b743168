from .config import Config
from .errors import (
    BalancingError,
    DuplicatePlayerId,
    InvalidPlayerRating,
    InvalidRosterSize,
    InvalidTopN,
    UnsupportedTeamSize,
)
from .stats import best_duo, duo_stats, last_match, leaderboard, player_stats
from .teamgen import balance_roster, canonical_key, generate_balanced_teams, split_count
from .types import (
    BalancingResult,
    DuoStats,
    MatchRecord,
    MatchSummary,
    Participation,
    Player,
    PlayerStats,
    TeamSplit,
)

__all__ = [
    "BalancingError",
    "BalancingResult",
    "Config",
    "DuoStats",
    "DuplicatePlayerId",
    "InvalidPlayerRating",
    "InvalidRosterSize",
    "InvalidTopN",
    "MatchRecord",
    "MatchSummary",
    "Participation",
    "Player",
    "PlayerStats",
    "TeamSplit",
    "UnsupportedTeamSize",
    "balance_roster",
    "best_duo",
    "canonical_key",
    "duo_stats",
    "generate_balanced_teams",
    "last_match",
    "leaderboard",
    "player_stats",
    "split_count",
]
