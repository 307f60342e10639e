from __future__ import annotations

import logging
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable

from kwg.contracts import (
    ActionRequest,
    ActionResult,
    ActionType,
    CueEvent,
    ForensicArtifact,
    GameKind,
    GameSummary,
    ValidationError,
)
from kwg.core import (
    EngineIntegrityError,
    EventBus,
    gameplay_random,
    integrity_failure,
    persist_forensic_artifact,
    seeded_random,
)
from kwg.soccer_math import SoccerMathSession
from kwg.vocabulary import FALLBACK_VOCABULARY
from kwg.word_rain import WordRainSession

logger = logging.getLogger(__name__)


class RuntimePaths:
    def __init__(self, root: Path) -> None:
        self.root = root

    @property
    def forensic_dir(self) -> Path:
        return self.root / "forensics"


class GameRuntime:
    """Action-request boundary between a UI driver and one game session.

    Every input arrives as an ``ActionRequest`` and every answer leaves as an
    ``ActionResult``. A broken engine invariant persists a forensic artifact
    and halts the runtime; later requests are refused with a pointer to it.
    """

    def __init__(
        self,
        game: GameKind | str,
        *,
        root: Path,
        seed: int | None = None,
        level: int = 1,
        duration_seconds: int = 120,
        vocabulary: Iterable[str] | None = None,
        player_count: int = 8,
        **session_options: Any,
    ) -> None:
        self.paths = RuntimePaths(root)
        self.game = GameKind(game)
        self.seed = seed
        self.rand = seeded_random(seed) if seed is not None else gameplay_random()
        self.event_bus = EventBus()
        self.cue_log: list[CueEvent] = []
        self.event_bus.subscribe_cues(self.cue_log.append)
        self.summaries: list[GameSummary] = []

        self.session: WordRainSession | SoccerMathSession
        if self.game is GameKind.WORD_RAIN:
            self.session = WordRainSession(
                vocabulary if vocabulary is not None else FALLBACK_VOCABULARY,
                level=level,
                duration_seconds=duration_seconds,
                random_source=self.rand.spawn("word_rain"),
                event_bus=self.event_bus,
                on_game_end=self.summaries.append,
                **session_options,
            )
        else:
            self.session = SoccerMathSession(
                level=level,
                duration_seconds=duration_seconds,
                player_count=player_count,
                random_source=self.rand.spawn("soccer_math"),
                event_bus=self.event_bus,
                on_game_end=self.summaries.append,
                **session_options,
            )

        self.halted = False
        self.last_forensic_path: str | None = None

    def handle_action(self, request: ActionRequest) -> ActionResult:
        if self.halted:
            return ActionResult(
                request.request_id,
                False,
                f"runtime halted after integrity failure; forensic={self.last_forensic_path}",
                {"forensic_path": self.last_forensic_path},
            )

        try:
            action = self._normalize_action(request.action_type)
        except ValueError:
            return ActionResult(request.request_id, False, f"Unsupported action '{request.action_type}'")

        try:
            return self._handle_action_core(action, request)
        except EngineIntegrityError as exc:
            return self._halt(request, exc.artifact)
        except ValidationError as exc:
            return ActionResult(
                request.request_id,
                False,
                "request rejected",
                data={"issues": [asdict(i) for i in exc.issues]},
            )
        except Exception as exc:
            failure = integrity_failure(
                "runtime",
                "UNHANDLED_RUNTIME_EXCEPTION",
                f"{type(exc).__name__}: {exc}",
                snapshot={"game": self.game.value, "phase": self.session.phase.value},
                context={"action_type": action.value, "payload": request.payload},
                identifiers={"request_id": request.request_id},
                trail=["runtime_dispatch"],
            )
            return self._halt(request, failure.artifact)

    def _handle_action_core(self, action: ActionType, request: ActionRequest) -> ActionResult:
        session = self.session
        payload = request.payload

        if action == ActionType.START:
            started = session.start()
            return ActionResult(request.request_id, started, "started" if started else "already started", data=session.snapshot())

        if action == ActionType.PAUSE:
            paused = session.pause()
            return ActionResult(request.request_id, paused, "paused" if paused else "not running")

        if action == ActionType.RESUME:
            resumed = session.resume()
            return ActionResult(request.request_id, resumed, "resumed" if resumed else "not paused")

        if action == ActionType.EXIT:
            summary = session.exit()
            data = asdict(summary) if summary else {}
            return ActionResult(request.request_id, True, "session ended", data=data)

        if action == ActionType.TICK:
            elapsed = float(payload.get("elapsed", 1.0))
            frames = int(payload.get("frames", 1))
            for _ in range(frames):
                session.advance_tick(elapsed)
            return ActionResult(request.request_id, True, "ticked", data=session.snapshot())

        if action == ActionType.CLOCK_TICK:
            seconds = int(payload.get("seconds", 1))
            for _ in range(seconds):
                session.tick_clock()
            return ActionResult(
                request.request_id,
                True,
                f"{session.remaining_seconds}s remaining",
                data={"remaining_seconds": session.remaining_seconds, "phase": session.phase.value},
            )

        if action == ActionType.TAP:
            if not isinstance(session, WordRainSession):
                return ActionResult(request.request_id, False, "tap is only available in word rain")
            label = payload.get("label")
            if not label:
                return ActionResult(request.request_id, False, "label required")
            outcome = session.tap_label(str(label))
            if outcome is None:
                return ActionResult(request.request_id, False, "tap ignored")
            return ActionResult(
                request.request_id,
                True,
                outcome.value,
                data={"outcome": outcome.value, "score": session.score, "total": session.total_count},
            )

        if action == ActionType.KICK:
            if not isinstance(session, SoccerMathSession):
                return ActionResult(request.request_id, False, "kick is only available in soccer math")
            angle = self._kick_angle(session, payload)
            if angle is None:
                return ActionResult(request.request_id, False, "angle or aim point required")
            result = session.process_kick(angle)
            if result is None:
                return ActionResult(request.request_id, False, "kick ignored")
            return ActionResult(
                request.request_id,
                True,
                result.message,
                data={
                    "type": result.type.value,
                    "target_position": result.target_position.as_tuple() if result.target_position else None,
                    "hit_player": result.hit_player.to_dict() if result.hit_player else None,
                    "treasures": session.treasure_count,
                    "route": session.current_route.to_dict() if session.current_route else None,
                },
            )

        if action == ActionType.REPEAT_CUE:
            if isinstance(session, WordRainSession):
                repeated = session.repeat_target()
                return ActionResult(request.request_id, repeated, session.current_target or "")
            text = session.announce_current_target()
            return ActionResult(request.request_id, text is not None, text or "")

        if action == ActionType.SHOW_HINT:
            if not isinstance(session, SoccerMathSession):
                return ActionResult(request.request_id, False, "hints are only available in soccer math")
            player_id = session.show_hint()
            return ActionResult(request.request_id, player_id is not None, "hint", data={"highlighted_player_id": player_id})

        if action == ActionType.GET_SNAPSHOT:
            return ActionResult(request.request_id, True, "snapshot", data=session.snapshot())

        return ActionResult(request.request_id, False, f"Unsupported action '{request.action_type}'")

    def _kick_angle(self, session: SoccerMathSession, payload: dict[str, Any]) -> float | None:
        if "angle" in payload:
            return float(payload["angle"])
        if "x" in payload and "y" in payload:
            origin = session.ball.position
            return math.atan2(float(payload["y"]) - origin.y, float(payload["x"]) - origin.x)
        return None

    def _halt(self, request: ActionRequest, artifact: ForensicArtifact) -> ActionResult:
        self.last_forensic_path = str(persist_forensic_artifact(artifact, self.paths.forensic_dir))
        self.halted = True
        logger.error("runtime halted: %s (%s)", artifact.error_code, self.last_forensic_path)
        return ActionResult(
            request.request_id,
            False,
            f"integrity failure: {artifact.error_code}",
            {"forensic_path": self.last_forensic_path},
        )

    def _normalize_action(self, action: ActionType | str) -> ActionType:
        if isinstance(action, ActionType):
            return action
        return ActionType(action)
