import heapq
import logging
import math
from collections import Counter
from itertools import combinations
from operator import itemgetter
from typing import Callable, Iterable, List, Optional, Sequence

from .config import Config
from .errors import DuplicatePlayerId, InvalidPlayerRating, InvalidRosterSize, InvalidTopN, UnsupportedTeamSize
from .types import BalancingResult, Player, TeamSplit
from .utils import is_finite_number

logger = logging.getLogger("fulbito.teamgen")


def canonical_key(team_a_ids: Iterable[int], team_b_ids: Iterable[int]) -> str:
    """Fingerprint of a split that does not depend on which side is called A."""
    side_a = ",".join(str(pid) for pid in sorted(team_a_ids))
    side_b = ",".join(str(pid) for pid in sorted(team_b_ids))
    return "|".join(sorted((side_a, side_b)))


def split_count(team_size: int) -> int:
    if team_size <= 0:
        return 0
    return math.comb(2 * team_size, team_size) // 2


def search_order(roster: Sequence[Player]) -> List[int]:
    """Roster indices in the order the combinations walk them.

    Lexicographic combinations keep the leading positions on team A for most of
    the run, so a capped search only sees splits built around them. Putting the
    strongest player first and the weakest right after it makes the early
    splits pair the top of the roster with its bottom.
    """
    by_rating = sorted(range(len(roster)), key=lambda idx: (roster[idx].rating, idx))
    strongest = by_rating.pop()
    return [strongest] + by_rating


def validate_request(roster: Sequence[Player], team_size: int, top_n: int, cfg: Config) -> None:
    if isinstance(team_size, bool) or not isinstance(team_size, int):
        raise UnsupportedTeamSize(team_size, cfg.supported_team_sizes)
    expected = 2 * team_size
    if len(roster) != expected:
        raise InvalidRosterSize(expected, len(roster))
    unrated = [p for p in roster if not is_finite_number(p.rating)]
    if unrated:
        raise InvalidPlayerRating(unrated)
    if team_size not in cfg.supported_team_sizes:
        raise UnsupportedTeamSize(team_size, cfg.supported_team_sizes)
    counts = Counter(p.id for p in roster)
    duplicated = [pid for pid, count in counts.items() if count > 1]
    if duplicated:
        raise DuplicatePlayerId(duplicated)
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
        raise InvalidTopN(top_n)


def balance_roster(
    roster: Sequence[Player],
    team_size: int,
    top_n: Optional[int] = None,
    config: Optional[Config] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> BalancingResult:
    """Rank the ways of splitting ``roster`` into two teams of ``team_size``.

    Every combination of ``team_size`` roster indices is taken as team A and its
    complement as team B, with indices visited in ``search_order``. Mirror
    pairings are dropped by canonical key, the rest are ranked by rating
    difference and the ``top_n`` best are returned.

    Enumeration stops early when ``config.max_combinations`` combinations have
    been visited or when ``should_stop()`` returns true; the result then carries
    ``partial=True`` and holds the best splits seen so far.
    """
    cfg = config or Config()
    if top_n is None:
        top_n = cfg.default_top_n
    players = list(roster)
    validate_request(players, team_size, top_n, cfg)

    n = len(players)
    order = search_order(players)
    ratings = [p.rating for p in players]
    ids = [p.id for p in players]
    limit = cfg.max_combinations
    check_every = max(1, cfg.stop_check_interval)

    result = BalancingResult(team_size=team_size)
    seen_keys = set()
    candidates = []
    in_team_a = [False] * n
    checked = 0

    logger.debug(
        "Balancing %d players into %dv%d (%d unique splits, ceiling %s)",
        n,
        team_size,
        team_size,
        split_count(team_size),
        limit,
    )

    for positions in combinations(range(n), team_size):
        if limit and checked >= limit:
            result.partial = True
            logger.warning(
                "Combination ceiling of %d reached for %dv%d; returning best of %d unique splits",
                limit,
                team_size,
                team_size,
                len(candidates),
            )
            break
        if should_stop is not None and checked % check_every == 0 and should_stop():
            result.partial = True
            result.cancelled = True
            logger.info("Balancing stopped by caller after %d combinations", checked)
            break
        checked += 1

        team_a = tuple(sorted(order[pos] for pos in positions))
        for idx in team_a:
            in_team_a[idx] = True
        team_b = tuple(idx for idx in range(n) if not in_team_a[idx])
        for idx in team_a:
            in_team_a[idx] = False

        key = canonical_key((ids[i] for i in team_a), (ids[i] for i in team_b))
        if key in seen_keys:
            continue
        seen_keys.add(key)

        sum_a = sum(ratings[i] for i in team_a)
        sum_b = sum(ratings[i] for i in team_b)
        candidates.append((abs(sum_a - sum_b), team_a, team_b, sum_a, sum_b, key))

    # nsmallest keeps insertion order among equal diffs, same as sorted()[:top_n]
    best = heapq.nsmallest(top_n, candidates, key=itemgetter(0))
    result.splits = [
        TeamSplit(
            team_a=tuple(players[i] for i in team_a),
            team_b=tuple(players[i] for i in team_b),
            sum_a=sum_a,
            sum_b=sum_b,
            diff=diff,
            key=key,
        )
        for diff, team_a, team_b, sum_a, sum_b, key in best
    ]
    result.combinations_checked = checked
    result.unique_splits = len(candidates)

    logger.info(
        "Balanced %dv%d: %d combinations, %d unique splits, best diff %s%s",
        team_size,
        team_size,
        checked,
        len(candidates),
        result.splits[0].diff if result.splits else None,
        " (partial)" if result.partial else "",
    )
    return result


def generate_balanced_teams(
    roster: Sequence[Player],
    team_size: int,
    top_n: Optional[int] = None,
    config: Optional[Config] = None,
) -> List[TeamSplit]:
    return balance_roster(roster, team_size, top_n=top_n, config=config).splits
