from __future__ import annotations

from kwg.contracts import RandomSource
from kwg.soccer_math.models import FieldPlayer, RouteSequence

MIN_ROUTE_LENGTH = 3
MAX_ROUTE_LENGTH = 5


def generate_route(
    players: list[FieldPlayer],
    ball_holder_id: int | None,
    random_source: RandomSource,
) -> RouteSequence:
    """Draw 3-5 distinct pass recipients, never the player already on the ball.

    With fewer eligible players than the drawn length the route is shorter.
    """
    length = random_source.randint(MIN_ROUTE_LENGTH, MAX_ROUTE_LENGTH)
    candidates = [p.jersey_number for p in players if p.player_id != ball_holder_id]
    random_source.shuffle(candidates)
    return RouteSequence(target_numbers=tuple(candidates[:length]))
