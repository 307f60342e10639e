from __future__ import annotations

from dataclasses import dataclass, replace

from kwg.contracts import KickResultType, RouteStepStatus
from kwg.core.geometry import Vec2


@dataclass(frozen=True, slots=True)
class FieldPlayer:
    player_id: int
    jersey_number: int
    position: Vec2

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.player_id,
            "jersey_number": self.jersey_number,
            "x": self.position.x,
            "y": self.position.y,
        }


@dataclass(frozen=True, slots=True)
class Ball:
    position: Vec2
    aim_angle: float = 0.0
    is_moving: bool = False
    origin: Vec2 | None = None
    flight_progress: float = 0.0

    @property
    def aim_direction(self) -> Vec2:
        return Vec2.from_angle(self.aim_angle)

    def launched(self, destination: Vec2, aim_angle: float) -> Ball:
        """The ball logically at ``destination`` but still travelling from here."""
        return Ball(position=destination, aim_angle=aim_angle, is_moving=True, origin=self.position, flight_progress=0.0)

    def settled(self) -> Ball:
        return Ball(position=self.position, aim_angle=self.aim_angle)

    def render_position(self) -> Vec2:
        if not self.is_moving or self.origin is None:
            return self.position
        return self.origin.lerp(self.position, min(self.flight_progress, 1.0))


@dataclass(frozen=True, slots=True)
class RouteSequence:
    """Ordered pass recipients by jersey number, finished by a shot on goal.

    Value object: ``advance`` returns a new sequence, so a step transition is a
    single reference swap on the owning session.
    """

    target_numbers: tuple[int, ...]
    current_step: int = 0
    ends_with_goal: bool = True

    @property
    def total_steps(self) -> int:
        return len(self.target_numbers) + (1 if self.ends_with_goal else 0)

    @property
    def current_target_number(self) -> int | None:
        if self.current_step >= len(self.target_numbers):
            return None
        return self.target_numbers[self.current_step]

    @property
    def is_ready_for_goal(self) -> bool:
        return self.ends_with_goal and self.current_step == len(self.target_numbers)

    @property
    def is_complete(self) -> bool:
        return self.current_step >= self.total_steps

    def advance(self) -> RouteSequence:
        return replace(self, current_step=self.current_step + 1)

    def is_current_target(self, jersey_number: int) -> bool:
        target = self.current_target_number
        return target is not None and target == jersey_number

    def step_status(self, step_index: int) -> RouteStepStatus:
        if step_index < self.current_step:
            return RouteStepStatus.COMPLETED
        if step_index == self.current_step:
            return RouteStepStatus.CURRENT
        return RouteStepStatus.UPCOMING

    def to_dict(self) -> dict[str, object]:
        steps: list[dict[str, object]] = [
            {"target": number, "status": self.step_status(i).value}
            for i, number in enumerate(self.target_numbers)
        ]
        if self.ends_with_goal:
            steps.append({"target": "GOAL", "status": self.step_status(len(self.target_numbers)).value})
        return {
            "target_numbers": list(self.target_numbers),
            "current_step": self.current_step,
            "ready_for_goal": self.is_ready_for_goal,
            "steps": steps,
        }


@dataclass(frozen=True, slots=True)
class KickResult:
    type: KickResultType
    message: str
    target_position: Vec2 | None = None
    hit_player: FieldPlayer | None = None
    similarity: float | None = None

    @property
    def success(self) -> bool:
        return self.type in {KickResultType.CORRECT_PASS, KickResultType.GOAL_SCORED}
