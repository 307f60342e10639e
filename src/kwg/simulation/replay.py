from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from kwg.contracts import ActionRequest, GameKind
from kwg.core import make_id
from kwg.simulation.runtime import GameRuntime


@dataclass(slots=True)
class ReplayAction:
    action_type: str
    payload: dict


class ReplayHarness:
    """Records a driver's action stream and replays it against two seeded runtimes."""

    def __init__(self, game: GameKind | str, seed: int, level: int = 1, duration_seconds: int = 120) -> None:
        self.game = GameKind(game)
        self.seed = seed
        self.level = level
        self.duration_seconds = duration_seconds
        self.actions: list[ReplayAction] = []

    def record(self, action_type: str, payload: dict | None = None) -> None:
        self.actions.append(ReplayAction(action_type=str(action_type), payload=dict(payload or {})))

    def save(self, path: Path) -> None:
        data = {
            "game": self.game.value,
            "seed": self.seed,
            "level": self.level,
            "duration_seconds": self.duration_seconds,
            "actions": [{"action_type": a.action_type, "payload": a.payload} for a in self.actions],
        }
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @staticmethod
    def load(path: Path) -> ReplayHarness:
        data = json.loads(path.read_text(encoding="utf-8"))
        harness = ReplayHarness(
            game=data["game"],
            seed=int(data["seed"]),
            level=int(data.get("level", 1)),
            duration_seconds=int(data.get("duration_seconds", 120)),
        )
        for raw in data["actions"]:
            harness.actions.append(ReplayAction(action_type=raw["action_type"], payload=raw["payload"]))
        return harness

    def replay(self, root: Path) -> tuple[dict, dict]:
        runtime_a = self._runtime(root / "replay_a")
        runtime_b = self._runtime(root / "replay_b")

        for action in self.actions:
            runtime_a.handle_action(ActionRequest(make_id("req"), action.action_type, dict(action.payload)))
            runtime_b.handle_action(ActionRequest(make_id("req"), action.action_type, dict(action.payload)))

        return self._fingerprint(runtime_a), self._fingerprint(runtime_b)

    def _runtime(self, root: Path) -> GameRuntime:
        return GameRuntime(self.game, root=root, seed=self.seed, level=self.level, duration_seconds=self.duration_seconds)

    def _fingerprint(self, runtime: GameRuntime) -> dict:
        return {
            "snapshot": runtime.session.snapshot(),
            "cues": [(c.cue_type.value, c.text) for c in runtime.cue_log],
            "summaries": [(s.score, s.correct, s.total) for s in runtime.summaries],
            "halted": runtime.halted,
        }
