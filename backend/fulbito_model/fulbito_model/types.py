from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from .utils import format_win_rate


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    rating: Optional[float] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "rating": self.rating}


@dataclass(frozen=True)
class TeamSplit:
    team_a: Tuple[Player, ...]
    team_b: Tuple[Player, ...]
    sum_a: float
    sum_b: float
    diff: float
    key: str

    @property
    def team_a_ids(self) -> List[int]:
        return [p.id for p in self.team_a]

    @property
    def team_b_ids(self) -> List[int]:
        return [p.id for p in self.team_b]

    def to_dict(self) -> dict:
        return {
            "team_a": [p.to_dict() for p in self.team_a],
            "team_b": [p.to_dict() for p in self.team_b],
            "sum_a": self.sum_a,
            "sum_b": self.sum_b,
            "diff": self.diff,
        }


@dataclass
class BalancingResult:
    team_size: int
    splits: List[TeamSplit] = field(default_factory=list)
    combinations_checked: int = 0
    unique_splits: int = 0
    partial: bool = False
    cancelled: bool = False

    def to_dict(self) -> dict:
        return {
            "team_size": self.team_size,
            "options": [s.to_dict() for s in self.splits],
            "combinations_checked": self.combinations_checked,
            "unique_splits": self.unique_splits,
            "partial": self.partial,
            "cancelled": self.cancelled,
        }


@dataclass(frozen=True)
class MatchRecord:
    id: int
    date: date
    score_a: int
    score_b: int


@dataclass(frozen=True)
class Participation:
    match_id: int
    player_id: int
    team: str  # "A" or "B"


@dataclass
class PlayerStats:
    player_id: int
    name: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    streak: int = 0
    win_rate: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "games_played": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "streak": self.streak,
            "win_rate": self.win_rate,
            "win_rate_display": format_win_rate(self.win_rate),
        }


@dataclass
class DuoStats:
    player1_id: int
    player1_name: str
    player2_id: int
    player2_name: str
    games_together: int = 0
    wins_together: int = 0
    win_rate: float = 0.0

    def includes(self, player_id: int) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def to_dict(self) -> dict:
        return {
            "player1_id": self.player1_id,
            "player1_name": self.player1_name,
            "player2_id": self.player2_id,
            "player2_name": self.player2_name,
            "games_together": self.games_together,
            "wins_together": self.wins_together,
            "losses_together": self.games_together - self.wins_together,
            "win_rate": self.win_rate,
            "win_rate_display": format_win_rate(self.win_rate),
        }


@dataclass(frozen=True)
class MatchSummary:
    id: int
    date: date
    score_a: int
    score_b: int
    team_a_ids: Tuple[int, ...]
    team_b_ids: Tuple[int, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "match_date": self.date.isoformat(),
            "score_a": self.score_a,
            "score_b": self.score_b,
            "team_a": list(self.team_a_ids),
            "team_b": list(self.team_b_ids),
        }
