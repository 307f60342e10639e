from __future__ import annotations

import math

from kwg.contracts import ActionRequest, ActionResult, ActionType
from kwg.core import Vec2, make_id
from kwg.soccer_math import Ball, FieldPlayer, RouteSequence, SoccerMathSession


def act(runtime, action_type: ActionType | str, payload: dict | None = None) -> ActionResult:
    return runtime.handle_action(ActionRequest(make_id("req"), action_type, payload or {}))


def stage_field(
    session: SoccerMathSession,
    layout: dict[int, tuple[float, float]],
    holder_number: int,
    route: tuple[int, ...],
) -> None:
    """Replace the generated field with a fixed layout keyed by jersey number."""
    session.players = [
        FieldPlayer(player_id=i, jersey_number=number, position=Vec2(*pos))
        for i, (number, pos) in enumerate(layout.items())
    ]
    holder = session.player_by_number(holder_number)
    if holder is None:
        raise RuntimeError(f"stage_field: holder #{holder_number} is not in the layout")
    session.ball_holder_id = holder.player_id
    session.ball = Ball(position=holder.position)
    session.current_route = RouteSequence(target_numbers=route)


def aim_at(session: SoccerMathSession, jersey_number: int) -> float:
    player = session.player_by_number(jersey_number)
    if player is None:
        raise RuntimeError(f"aim_at: no player #{jersey_number}")
    delta = player.position - session.ball.position
    return math.atan2(delta.y, delta.x)


# holder #9 in the middle, receivers spread around it
DEFAULT_LAYOUT: dict[int, tuple[float, float]] = {
    9: (0.5, 0.5),
    4: (0.8, 0.5),
    7: (0.2, 0.5),
    11: (0.5, 0.8),
    2: (0.5, 0.2),
}
