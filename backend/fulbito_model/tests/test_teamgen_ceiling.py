import logging

from fulbito_model import Config, Player
from fulbito_model.teamgen import balance_roster, search_order


def _roster(size):
    return [Player(idx, f"P{idx}", float(idx * 7 % 23)) for idx in range(1, size + 1)]


def test_ceiling_returns_best_so_far(caplog):
    cfg = Config(max_combinations=100)

    with caplog.at_level(logging.WARNING, logger="fulbito.teamgen"):
        result = balance_roster(_roster(16), 8, top_n=3, config=cfg)

    assert result.partial
    assert not result.cancelled
    assert result.combinations_checked == 100
    assert result.unique_splits == 100
    assert len(result.splits) == 3
    assert [s.diff for s in result.splits] == sorted(s.diff for s in result.splits)
    assert "ceiling" in caplog.text


def test_ceiling_not_hit_when_everything_fits():
    result = balance_roster(_roster(10), 5, config=Config(max_combinations=252))

    assert not result.partial
    assert result.combinations_checked == 252


def test_eleven_a_side_stays_bounded():
    result = balance_roster(_roster(22), 11, top_n=3, config=Config(max_combinations=2000))

    assert result.partial
    assert result.combinations_checked == 2000
    assert len(result.splits) == 3


def test_zero_ceiling_disables_limit():
    result = balance_roster(_roster(12), 6, config=Config(max_combinations=0))

    assert not result.partial
    assert result.unique_splits == 462


def test_should_stop_cancels_enumeration():
    result = balance_roster(_roster(10), 5, config=Config(), should_stop=lambda: True)

    assert result.cancelled
    assert result.partial
    assert result.splits == []
    assert result.combinations_checked == 0


def test_should_stop_is_polled_on_interval():
    calls = []

    def stop_after_two_checks():
        calls.append(1)
        return len(calls) > 2

    cfg = Config(stop_check_interval=10)
    result = balance_roster(_roster(12), 6, config=cfg, should_stop=stop_after_two_checks)

    assert result.cancelled
    assert result.combinations_checked == 20
    assert len(calls) == 3
    assert result.splits


def test_result_serializes():
    result = balance_roster(_roster(10), 5, top_n=2)
    data = result.to_dict()

    assert data["team_size"] == 5
    assert len(data["options"]) == 2
    assert set(data["options"][0]) == {"team_a", "team_b", "sum_a", "sum_b", "diff"}
    assert data["partial"] is False


def _optimum(ratings, team_size):
    reachable = {(0, 0)}
    for rating in ratings:
        reachable |= {(count + 1, total + rating) for count, total in reachable if count < team_size}
    total = sum(ratings)
    return min(abs(total - 2 * s) for count, s in reachable if count == team_size)


def test_capped_search_spreads_strongest_first_roster():
    ratings = [100, 95, 90] + [50] * 19
    roster = [Player(idx, f"P{idx}", rating) for idx, rating in enumerate(ratings, start=1)]

    result = balance_roster(roster, 11, top_n=1, config=Config())

    assert result.partial
    assert result.splits[0].diff == _optimum(ratings, 11) == 35
    best = result.splits[0]
    assert not {1, 2, 3} <= set(best.team_a_ids)
    assert not {1, 2, 3} <= set(best.team_b_ids)


def test_capped_search_on_descending_ratings_is_near_optimal():
    ratings = list(range(22, 0, -1))
    roster = [Player(idx, f"P{idx}", rating) for idx, rating in enumerate(ratings, start=1)]

    result = balance_roster(roster, 11, top_n=1, config=Config())

    assert result.partial
    assert result.splits[0].diff == _optimum(ratings, 11) == 1


def test_search_order_puts_strongest_then_weakest_first():
    roster = [Player(1, "A", 7), Player(2, "B", 9), Player(3, "C", 1), Player(4, "D", 7)]

    assert search_order(roster) == [1, 2, 0, 3]
