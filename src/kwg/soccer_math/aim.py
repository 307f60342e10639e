"""Kick resolution by directional alignment.

There is no ray cast and no collision between the ball and bystanders. A pass
is judged only against the player the route currently asks for: the kick is
accepted when the cosine between the aim direction and the direction from the
ball to that player reaches the pass threshold (0.5, about 60 degrees either
side). Once the route is ready for goal, any kick whose horizontal component
exceeds the goal threshold scores in the goal it points toward, whatever its
vertical aim.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from kwg.contracts import KickResultType
from kwg.core import integrity_failure
from kwg.core.geometry import Vec2, cosine_similarity
from kwg.soccer_math.field import LEFT_GOAL, RIGHT_GOAL
from kwg.soccer_math.models import FieldPlayer, RouteSequence

logger = logging.getLogger(__name__)

DEFAULT_PASS_THRESHOLD = 0.5
DEFAULT_GOAL_THRESHOLD = 0.5
# cosines within this of the threshold count as on it
ALIGNMENT_TOLERANCE = 1e-9


@dataclass(frozen=True, slots=True)
class AimDecision:
    type: KickResultType
    target_number: int | None = None
    target_player: FieldPlayer | None = None
    goal_mouth: Vec2 | None = None
    similarity: float | None = None


class AlignmentAimResolver:
    def __init__(
        self,
        pass_threshold: float = DEFAULT_PASS_THRESHOLD,
        goal_threshold: float = DEFAULT_GOAL_THRESHOLD,
    ) -> None:
        self.pass_threshold = pass_threshold
        self.goal_threshold = goal_threshold

    def resolve(
        self,
        ball_position: Vec2,
        aim_angle: float,
        route: RouteSequence | None,
        players: list[FieldPlayer],
    ) -> AimDecision:
        if route is None or not math.isfinite(aim_angle):
            return AimDecision(KickResultType.MISSED_ALL)

        direction = Vec2.from_angle(aim_angle)
        logger.debug(
            "kick from (%.2f, %.2f) at %.1f deg",
            ball_position.x,
            ball_position.y,
            math.degrees(aim_angle),
        )

        if route.is_ready_for_goal:
            if self.is_aiming_at_goal(direction):
                mouth = RIGHT_GOAL if direction.x > 0 else LEFT_GOAL
                return AimDecision(KickResultType.GOAL_SCORED, goal_mouth=mouth)
            return AimDecision(KickResultType.MISSED_ALL)

        target_number = route.current_target_number
        if target_number is None:
            return AimDecision(KickResultType.MISSED_ALL)

        target = self._lookup(players, target_number, route)
        to_target = target.position - ball_position
        if to_target.is_zero():
            return AimDecision(KickResultType.MISSED_ALL, target_number=target_number)

        similarity = cosine_similarity(direction, to_target)
        logger.debug("aim check on #%d similarity=%.3f need>=%.2f", target_number, similarity, self.pass_threshold)
        if similarity >= self.pass_threshold - ALIGNMENT_TOLERANCE:
            return AimDecision(
                KickResultType.CORRECT_PASS,
                target_number=target_number,
                target_player=target,
                similarity=similarity,
            )
        return AimDecision(KickResultType.WRONG_TARGET, target_number=target_number, similarity=similarity)

    def is_aiming_at_goal(self, direction: Vec2) -> bool:
        unit = direction.normalized()
        return abs(unit.x) > self.goal_threshold

    def _lookup(self, players: list[FieldPlayer], jersey_number: int, route: RouteSequence) -> FieldPlayer:
        for player in players:
            if player.jersey_number == jersey_number:
                return player
        raise integrity_failure(
            "soccer_math",
            "ROUTE_TARGET_UNKNOWN",
            f"route asks for jersey #{jersey_number} but no such player is on the field",
            snapshot={"route": list(route.target_numbers), "step": route.current_step},
            context={"jerseys": [p.jersey_number for p in players]},
            identifiers={"jersey_number": jersey_number},
            trail=["process_kick", "target_lookup"],
        )
