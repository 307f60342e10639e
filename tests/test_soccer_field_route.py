from __future__ import annotations

import pytest

from kwg.contracts import RouteStepStatus
from kwg.core import Vec2, seeded_random
from kwg.soccer_math import FieldPlayer, RouteSequence, assign_ball, generate_players, generate_route, too_close


def test_players_have_unique_jerseys_inside_safe_area():
    for seed in range(10):
        players = generate_players(8, seeded_random(seed))
        assert len(players) == 8
        numbers = [p.jersey_number for p in players]
        assert len(set(numbers)) == 8
        assert all(1 <= n <= 20 for n in numbers)
        assert [p.player_id for p in players] == list(range(8))
        for p in players:
            assert 0.15 <= p.position.x <= 0.85
            assert 0.15 <= p.position.y <= 0.85


def test_small_squads_respect_spacing():
    players = generate_players(4, seeded_random(12))
    for i, p in enumerate(players):
        others = [q.position for j, q in enumerate(players) if j != i]
        assert not too_close(p.position, others)


def test_full_squad_uses_every_jersey():
    players = generate_players(20, seeded_random(5))
    assert sorted(p.jersey_number for p in players) == list(range(1, 21))


def test_player_count_out_of_range():
    with pytest.raises(ValueError):
        generate_players(21, seeded_random(1))
    with pytest.raises(ValueError):
        generate_players(0, seeded_random(1))


def test_ball_starts_at_holder():
    players = generate_players(6, seeded_random(2))
    holder_id, ball = assign_ball(players, seeded_random(3))
    holder = next(p for p in players if p.player_id == holder_id)
    assert ball.position == holder.position
    assert not ball.is_moving


def test_route_never_includes_holder():
    rng = seeded_random(30)
    for seed in range(40):
        players = generate_players(8, seeded_random(seed))
        holder_id, _ = assign_ball(players, rng)
        holder_number = next(p.jersey_number for p in players if p.player_id == holder_id)
        route = generate_route(players, holder_id, rng)
        assert 3 <= len(route.target_numbers) <= 5
        assert holder_number not in route.target_numbers
        assert len(set(route.target_numbers)) == len(route.target_numbers)
        assert set(route.target_numbers) <= {p.jersey_number for p in players}


def test_route_shrinks_with_few_players():
    players = [
        FieldPlayer(0, 3, Vec2(0.3, 0.3)),
        FieldPlayer(1, 8, Vec2(0.7, 0.7)),
    ]
    route = generate_route(players, 0, seeded_random(1))
    assert route.target_numbers == (8,)


def test_route_progression_to_goal():
    route = RouteSequence(target_numbers=(4, 7, 2))
    assert route.total_steps == 4
    assert route.current_target_number == 4
    assert route.is_current_target(4)
    assert not route.is_current_target(7)

    route = route.advance().advance()
    assert route.current_target_number == 2
    assert route.step_status(0) is RouteStepStatus.COMPLETED
    assert route.step_status(2) is RouteStepStatus.CURRENT
    assert route.step_status(3) is RouteStepStatus.UPCOMING
    assert not route.is_ready_for_goal

    route = route.advance()
    assert route.is_ready_for_goal
    assert route.current_target_number is None
    assert not route.is_complete
    assert route.to_dict()["steps"][-1] == {"target": "GOAL", "status": "current"}

    assert route.advance().is_complete


def test_route_advance_leaves_original_untouched():
    route = RouteSequence(target_numbers=(1, 2, 3))
    advanced = route.advance()
    assert route.current_step == 0
    assert advanced.current_step == 1
