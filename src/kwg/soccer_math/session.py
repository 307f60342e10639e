from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from kwg.contracts import (
    CueType,
    DifficultyProfile,
    GameKind,
    GameSummary,
    KickResultType,
    RandomSource,
    SessionPhase,
    ValidationError,
    ValidationIssue,
)
from kwg.core import (
    EventBus,
    gameplay_random,
    integrity_failure,
    profile_for_level,
    validate_session_config,
)
from kwg.core.geometry import Vec2
from kwg.soccer_math.aim import AlignmentAimResolver
from kwg.soccer_math.field import assign_ball, generate_players
from kwg.soccer_math.models import Ball, FieldPlayer, KickResult, RouteSequence
from kwg.soccer_math.route import generate_route

logger = logging.getLogger(__name__)

GameEndHandler = Callable[[GameSummary], None]

# nominal 60 Hz frames for a pass to reach its receiver
BALL_FLIGHT_FRAMES = 30.0
FLIGHT_EPSILON = 1e-9


class SoccerMathSession:
    """Passing game: follow the route of jersey numbers, then shoot.

    Kicks are resolved by ``AlignmentAimResolver``. A correct pass moves the
    ball to the receiver and advances the route; a goal scores a treasure and
    replaces the finished route with a fresh one built around a newly drawn
    ball holder. Kicks are ignored while the ball is still in flight.
    """

    SCOPE = "soccer_math"

    def __init__(
        self,
        *,
        level: int = 1,
        duration_seconds: int = 120,
        player_count: int = 8,
        random_source: RandomSource | None = None,
        event_bus: EventBus | None = None,
        ball_flight_frames: float = BALL_FLIGHT_FRAMES,
        on_game_end: GameEndHandler | None = None,
    ) -> None:
        validate_session_config({"level": level, "duration_seconds": duration_seconds, "player_count": player_count})
        if ball_flight_frames < 0:
            raise ValidationError(
                [ValidationIssue("BAD_FLIGHT_FRAMES", "blocking", "ball_flight_frames", "ball flight must not be negative")]
            )

        self.level = level
        self.profile: DifficultyProfile = profile_for_level(level)
        self.duration_seconds = duration_seconds
        self.player_count = player_count
        self.ball_flight_frames = ball_flight_frames
        self.resolver = AlignmentAimResolver(
            pass_threshold=self.profile.pass_alignment_threshold,
            goal_threshold=self.profile.goal_alignment_threshold,
        )

        rand = random_source or gameplay_random()
        self._field_random = rand.spawn("soccer_math:field")
        self._route_random = rand.spawn("soccer_math:route")
        self.event_bus = event_bus or EventBus()
        self._on_game_end = on_game_end

        self.phase = SessionPhase.NOT_STARTED
        self.remaining_seconds = duration_seconds
        self.players: list[FieldPlayer] = []
        self.ball = Ball(position=Vec2(0.5, 0.5))
        self.ball_holder_id: int | None = None
        self.current_route: RouteSequence | None = None
        self.highlighted_player_id: int | None = None

        self.treasure_count = 0
        self.correct_pass_count = 0
        self.total_attempt_count = 0
        self.routes_completed_count = 0
        self.summary: GameSummary | None = None

    @property
    def ball_holder(self) -> FieldPlayer | None:
        if self.ball_holder_id is None:
            return None
        for player in self.players:
            if player.player_id == self.ball_holder_id:
                return player
        return None

    @property
    def accuracy(self) -> float:
        if self.total_attempt_count == 0:
            return 0.0
        return (self.correct_pass_count / self.total_attempt_count) * 100

    @property
    def elapsed_seconds(self) -> int:
        return self.duration_seconds - max(self.remaining_seconds, 0)

    def player_by_number(self, jersey_number: int) -> FieldPlayer | None:
        for player in self.players:
            if player.jersey_number == jersey_number:
                return player
        return None

    def initialize_field(self) -> None:
        self.players = generate_players(self.player_count, self._field_random)
        self._assign_ball_to_random_player()
        self.current_route = self._new_route()
        logger.debug(
            "field ready: %d players, holder=%s route=%s",
            len(self.players),
            self.ball_holder_id,
            self.current_route.target_numbers,
        )

    def start(self) -> bool:
        if self.phase is not SessionPhase.NOT_STARTED:
            return False
        if not self.players:
            self.initialize_field()
        self.phase = SessionPhase.RUNNING
        logger.info("soccer math started level=%d players=%d duration=%ds", self.level, len(self.players), self.duration_seconds)
        self.announce_current_target()
        return True

    def pause(self) -> bool:
        if self.phase is not SessionPhase.RUNNING:
            return False
        self.phase = SessionPhase.PAUSED
        return True

    def resume(self) -> bool:
        if self.phase is not SessionPhase.PAUSED:
            return False
        self.phase = SessionPhase.RUNNING
        return True

    def toggle_pause(self) -> bool:
        return self.pause() or self.resume()

    def exit(self) -> GameSummary | None:
        if self.phase is SessionPhase.ENDED:
            return self.summary
        if self.phase is SessionPhase.NOT_STARTED:
            self.phase = SessionPhase.ENDED
            return None
        return self._end()

    def tick_clock(self) -> None:
        if self.phase is not SessionPhase.RUNNING:
            return
        self.remaining_seconds -= 1
        if self.remaining_seconds <= 0:
            self.remaining_seconds = 0
            self._end()

    def advance_tick(self, elapsed_fraction: float = 1.0) -> None:
        """Carry an in-flight ball toward its receiver."""
        if self.phase is not SessionPhase.RUNNING or elapsed_fraction <= 0 or not self.ball.is_moving:
            return
        progress = self.ball.flight_progress + elapsed_fraction / self.ball_flight_frames
        if progress >= 1.0 - FLIGHT_EPSILON:
            self.ball = self.ball.settled()
        else:
            self.ball = replace(self.ball, flight_progress=progress)

    def ball_arrived(self) -> None:
        if self.ball.is_moving:
            self.ball = self.ball.settled()

    def process_kick(self, aim_angle: float) -> KickResult | None:
        """Resolve one kick; ``None`` when the kick is ignored."""
        if self.phase is not SessionPhase.RUNNING or self.ball.is_moving:
            return None

        self.total_attempt_count += 1
        self.highlighted_player_id = None
        route = self.current_route
        decision = self.resolver.resolve(self.ball.position, aim_angle, route, self.players)

        if decision.type is KickResultType.GOAL_SCORED:
            self.treasure_count += 1
            self.routes_completed_count += 1
            self.correct_pass_count += 1
            self._assign_ball_to_random_player()
            self.current_route = self._new_route()
            result = KickResult(KickResultType.GOAL_SCORED, "GOAL! Great job!", target_position=decision.goal_mouth)
            self.event_bus.cue(self.SCOPE, CueType.SOUND, "goal")
        elif decision.type is KickResultType.CORRECT_PASS and decision.target_player is not None and route is not None:
            receiver = decision.target_player
            self.correct_pass_count += 1
            self.ball_holder_id = receiver.player_id
            if self.ball_flight_frames > 0:
                self.ball = self.ball.launched(receiver.position, aim_angle)
            else:
                self.ball = Ball(position=receiver.position, aim_angle=aim_angle)
            self.current_route = route.advance()
            message = "Now shoot to goal!" if self.current_route.is_ready_for_goal else "Great pass!"
            result = KickResult(
                KickResultType.CORRECT_PASS,
                message,
                target_position=receiver.position,
                hit_player=receiver,
                similarity=decision.similarity,
            )
            self.event_bus.cue(self.SCOPE, CueType.SOUND, "kick")
        elif decision.type is KickResultType.WRONG_TARGET:
            result = KickResult(
                KickResultType.WRONG_TARGET,
                f"Oops! Find number {decision.target_number}",
                similarity=decision.similarity,
            )
            self.event_bus.cue(self.SCOPE, CueType.SOUND, "wrong")
        else:
            result = KickResult(KickResultType.MISSED_ALL, "Oops! Try again!")
            self.event_bus.cue(self.SCOPE, CueType.SOUND, "wrong")

        logger.debug("kick resolved %s attempts=%d", result.type.value, self.total_attempt_count)
        self.event_bus.cue(self.SCOPE, CueType.ENCOURAGE, result.message, correct=result.success)
        if result.success:
            self.announce_current_target()
        return result

    def announce_current_target(self) -> str | None:
        route = self.current_route
        if route is None:
            return None
        target = route.current_target_number
        if target is not None:
            text = f"Pass to {target}!"
        elif route.is_ready_for_goal:
            text = "Shoot to goal!"
        else:
            return None
        self.event_bus.cue(self.SCOPE, CueType.SPEAK, text)
        return text

    def show_hint(self) -> int | None:
        """Highlight the player the route currently asks for, until the next kick."""
        if self.phase is not SessionPhase.RUNNING or self.current_route is None:
            return None
        target = self.current_route.current_target_number
        if target is None:
            return None
        player = self.player_by_number(target)
        self.highlighted_player_id = player.player_id if player else None
        return self.highlighted_player_id

    def snapshot(self) -> dict[str, object]:
        render_pos = self.ball.render_position()
        return {
            "game": GameKind.SOCCER_MATH.value,
            "phase": self.phase.value,
            "level": self.level,
            "remaining_seconds": self.remaining_seconds,
            "treasures": self.treasure_count,
            "correct": self.correct_pass_count,
            "total": self.total_attempt_count,
            "routes_completed": self.routes_completed_count,
            "accuracy": self.accuracy,
            "ball": {"x": render_pos.x, "y": render_pos.y, "moving": self.ball.is_moving},
            "ball_holder_id": self.ball_holder_id,
            "highlighted_player_id": self.highlighted_player_id,
            "players": [p.to_dict() for p in self.players],
            "route": self.current_route.to_dict() if self.current_route else None,
        }

    def _assign_ball_to_random_player(self) -> None:
        self.ball_holder_id, self.ball = assign_ball(self.players, self._field_random)

    def _new_route(self) -> RouteSequence:
        route = generate_route(self.players, self.ball_holder_id, self._route_random)
        holder = self.ball_holder
        if holder is not None and holder.jersey_number in route.target_numbers:
            raise integrity_failure(
                self.SCOPE,
                "ROUTE_INCLUDES_HOLDER",
                f"route {route.target_numbers} asks the holder #{holder.jersey_number} to pass to themself",
                snapshot={"route": list(route.target_numbers), "holder": holder.jersey_number},
                context={"player_count": len(self.players)},
                identifiers={"ball_holder_id": holder.player_id},
                trail=["generate_route"],
            )
        return route

    def _end(self) -> GameSummary:
        self.phase = SessionPhase.ENDED
        self.summary = GameSummary(
            game=GameKind.SOCCER_MATH,
            level=self.level,
            score=self.treasure_count,
            correct=self.correct_pass_count,
            total=self.total_attempt_count,
            duration_played=self.elapsed_seconds,
        )
        logger.info(
            "soccer math ended treasures=%d correct=%d total=%d routes=%d",
            self.treasure_count,
            self.correct_pass_count,
            self.total_attempt_count,
            self.routes_completed_count,
        )
        self.event_bus.cue(
            self.SCOPE,
            CueType.GAME_END,
            "game over",
            treasures=self.treasure_count,
            correct=self.correct_pass_count,
            total=self.total_attempt_count,
        )
        if self._on_game_end is not None:
            self._on_game_end(self.summary)
        return self.summary
