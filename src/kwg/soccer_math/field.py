from __future__ import annotations

import logging

from kwg.contracts import RandomSource
from kwg.core.geometry import Vec2
from kwg.soccer_math.models import Ball, FieldPlayer

logger = logging.getLogger(__name__)

# players stay clear of the goals at x=0.05 and x=0.95
SAFE_MIN = 0.15
SAFE_MAX = 0.85
MIN_SPACING = 0.15
MAX_PLACEMENT_ATTEMPTS = 50
MAX_JERSEY_NUMBER = 20

LEFT_GOAL = Vec2(0.05, 0.5)
RIGHT_GOAL = Vec2(0.95, 0.5)


def too_close(position: Vec2, others: list[Vec2], min_spacing: float = MIN_SPACING) -> bool:
    for other in others:
        if abs(position.x - other.x) < min_spacing and abs(position.y - other.y) < min_spacing:
            return True
    return False


def generate_players(count: int, random_source: RandomSource) -> list[FieldPlayer]:
    """Place ``count`` players with unique jersey numbers in 1..20.

    Spacing is best effort: after ``MAX_PLACEMENT_ATTEMPTS`` rejected draws the
    last candidate is accepted even if it crowds a teammate.
    """
    if not 1 <= count <= MAX_JERSEY_NUMBER:
        raise ValueError(f"player count must be within [1, {MAX_JERSEY_NUMBER}], got {count}")

    numbers = list(range(1, MAX_JERSEY_NUMBER + 1))
    random_source.shuffle(numbers)

    players: list[FieldPlayer] = []
    placed: list[Vec2] = []
    for player_id in range(count):
        attempts = 0
        while True:
            candidate = Vec2(
                random_source.uniform(SAFE_MIN, SAFE_MAX),
                random_source.uniform(SAFE_MIN, SAFE_MAX),
            )
            attempts += 1
            if not too_close(candidate, placed) or attempts >= MAX_PLACEMENT_ATTEMPTS:
                break
        if too_close(candidate, placed):
            logger.warning("player %d placed inside minimum spacing after %d attempts", player_id, attempts)
        placed.append(candidate)
        players.append(FieldPlayer(player_id=player_id, jersey_number=numbers[player_id], position=candidate))
    return players


def assign_ball(players: list[FieldPlayer], random_source: RandomSource) -> tuple[int, Ball]:
    holder = random_source.choice(players)
    return holder.player_id, Ball(position=holder.position)
