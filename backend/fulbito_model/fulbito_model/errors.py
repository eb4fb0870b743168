from typing import Iterable, Sequence


class BalancingError(ValueError):
    """Base class for requests the balancer refuses before enumerating anything."""

    code = "balancing_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message}


class InvalidRosterSize(BalancingError):
    code = "invalid_roster_size"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} players, got {actual}")


class InvalidPlayerRating(BalancingError):
    code = "invalid_player_rating"

    def __init__(self, players: Sequence):
        self.players = list(players)
        names = ", ".join(f"{p.name} (id={p.id})" for p in self.players)
        super().__init__(f"players without a valid rating: {names}")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["player_ids"] = [p.id for p in self.players]
        return data


class UnsupportedTeamSize(BalancingError):
    code = "unsupported_team_size"

    def __init__(self, team_size: int, supported: Iterable[int]):
        self.team_size = team_size
        self.supported = tuple(supported)
        allowed = ", ".join(str(size) for size in self.supported)
        super().__init__(f"team size {team_size} is not one of {allowed}")


class DuplicatePlayerId(BalancingError):
    code = "duplicate_player_id"

    def __init__(self, player_ids: Iterable[int]):
        self.player_ids = sorted(set(player_ids))
        super().__init__(f"players listed more than once: {', '.join(map(str, self.player_ids))}")


class InvalidTopN(BalancingError):
    code = "invalid_top_n"

    def __init__(self, top_n):
        self.top_n = top_n
        super().__init__(f"top_n must be a positive integer, got {top_n!r}")
