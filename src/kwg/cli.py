from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from kwg.contracts import ActionRequest, ActionType, GameKind, RandomSource, SessionPhase, ValidationError
from kwg.core import gameplay_random, make_id, seeded_random
from kwg.simulation import GameRuntime
from kwg.soccer_math import SoccerMathSession
from kwg.word_rain import WordRainSession

FRAMES_PER_SECOND = 60


def _act(runtime: GameRuntime, action: ActionType, payload: dict | None = None):
    return runtime.handle_action(ActionRequest(make_id("req"), action, payload or {}))


def _word_rain_move(session: WordRainSession, bot: RandomSource, skill: float) -> dict | None:
    if session.current_round is None or session.respawn_pending:
        return None
    candidates = [obj for obj in session.current_round if not obj.tapped and obj.y > 0.0]
    if not candidates:
        return None
    target = next((obj for obj in candidates if obj.is_target), None)
    if target is not None and bot.rand() < skill:
        return {"label": target.label}
    return {"label": bot.choice(candidates).label}


def _soccer_move(session: SoccerMathSession, bot: RandomSource, skill: float) -> dict:
    route = session.current_route
    if bot.rand() >= skill or route is None:
        return {"angle": bot.uniform(-math.pi, math.pi)}
    if route.is_ready_for_goal:
        return {"angle": 0.0 if session.ball.position.x < 0.5 else math.pi}
    target = session.player_by_number(route.current_target_number) if route.current_target_number else None
    if target is None:
        return {"angle": bot.uniform(-math.pi, math.pi)}
    return {"x": target.position.x, "y": target.position.y}


def autoplay(runtime: GameRuntime, bot: RandomSource, skill: float, reaction_frames: int) -> None:
    _act(runtime, ActionType.START)
    session = runtime.session
    frame = 0
    while session.phase is not SessionPhase.ENDED and not runtime.halted:
        _act(runtime, ActionType.TICK)
        frame += 1
        if frame % reaction_frames == 0:
            if isinstance(session, WordRainSession):
                move = _word_rain_move(session, bot, skill)
                if move is not None:
                    _act(runtime, ActionType.TAP, move)
            elif not session.ball.is_moving:
                _act(runtime, ActionType.KICK, _soccer_move(session, bot, skill))
        if frame % FRAMES_PER_SECOND == 0:
            _act(runtime, ActionType.CLOCK_TICK)


def main() -> None:
    parser = argparse.ArgumentParser(description="KindleWood mini-games: headless autoplay")
    parser.add_argument("game", choices=[g.value for g in GameKind], help="which game to run")
    parser.add_argument("--root", type=Path, default=Path.cwd(), help="runtime root directory (forensics land here)")
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic dev/testing runs")
    parser.add_argument("--level", type=int, default=1, choices=[1, 2, 3], help="difficulty level")
    parser.add_argument("--duration", type=int, default=60, help="game length in seconds")
    parser.add_argument("--words", type=str, default=None, help="comma-separated vocabulary for word rain")
    parser.add_argument("--players", type=int, default=8, help="players on the field for soccer math")
    parser.add_argument("--skill", type=float, default=0.8, help="chance the autoplayer picks the right answer")
    parser.add_argument("--reaction-frames", type=int, default=45, help="frames between autoplayer inputs")
    parser.add_argument("--verbose", action="store_true", help="log cues and resolutions")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    vocabulary = args.words.split(",") if args.words else None
    try:
        runtime = GameRuntime(
            args.game,
            root=args.root,
            seed=args.seed,
            level=args.level,
            duration_seconds=args.duration,
            vocabulary=vocabulary,
            player_count=args.players,
        )
    except ValidationError as exc:
        parser.error(str(exc))
    bot = seeded_random(args.seed).spawn("cli:autoplayer") if args.seed is not None else gameplay_random()
    if args.verbose:
        runtime.event_bus.subscribe_cues(lambda cue: print(f"[{cue.scope}] {cue.cue_type.value}: {cue.text}"))

    autoplay(runtime, bot, skill=args.skill, reaction_frames=max(1, args.reaction_frames))

    if runtime.halted:
        print(f"Runtime halted; forensic artifact at {runtime.last_forensic_path}")
        return
    for summary in runtime.summaries:
        label = "treasures" if summary.game is GameKind.SOCCER_MATH else "score"
        print(
            f"{summary.game.value} level {summary.level}: {label}={summary.score} "
            f"correct={summary.correct}/{summary.total} accuracy={summary.accuracy:.1f}% "
            f"played={summary.duration_played}s"
        )


if __name__ == "__main__":
    main()
