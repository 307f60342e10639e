from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameKind(str, Enum):
    WORD_RAIN = "word_rain"
    SOCCER_MATH = "soccer_math"


class SessionPhase(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


class TapOutcome(str, Enum):
    UNTAPPED = "untapped"
    CORRECT = "correct"
    WRONG = "wrong"


class KickResultType(str, Enum):
    CORRECT_PASS = "correct_pass"
    GOAL_SCORED = "goal_scored"
    WRONG_TARGET = "wrong_target"
    MISSED_ALL = "missed_all"


class RouteStepStatus(str, Enum):
    COMPLETED = "completed"
    CURRENT = "current"
    UPCOMING = "upcoming"


class CueType(str, Enum):
    SPEAK = "speak"
    SOUND = "sound"
    ENCOURAGE = "encourage"
    GAME_END = "game_end"


class ActionType(str, Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    EXIT = "exit"
    TICK = "tick"
    CLOCK_TICK = "clock_tick"
    TAP = "tap"
    KICK = "kick"
    REPEAT_CUE = "repeat_cue"
    SHOW_HINT = "show_hint"
    GET_SNAPSHOT = "get_snapshot"


class RandomSource(Protocol):
    def rand(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, items: Sequence[Any]) -> Any: ...

    def shuffle(self, items: list[Any]) -> None: ...

    def spawn(self, substream_id: str) -> RandomSource: ...


@dataclass(frozen=True, slots=True)
class DifficultyProfile:
    name: Difficulty
    level: int
    fall_speed: float
    concurrency: int
    show_hint: bool
    pass_alignment_threshold: float
    goal_alignment_threshold: float

    def validate(self) -> None:
        if self.fall_speed <= 0:
            raise ValueError("fall_speed must be positive")
        if not 1 <= self.concurrency <= 5:
            raise ValueError(f"concurrency must be within [1, 5], got {self.concurrency}")
        if not -1.0 <= self.pass_alignment_threshold <= 1.0:
            raise ValueError("pass_alignment_threshold must be a cosine in [-1, 1]")
        if not 0.0 <= self.goal_alignment_threshold <= 1.0:
            raise ValueError("goal_alignment_threshold must be within [0, 1]")


@dataclass(slots=True)
class CueEvent:
    event_id: str
    time: datetime
    scope: str
    cue_type: CueType
    text: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GameSummary:
    game: GameKind
    level: int
    score: int
    correct: int
    total: int
    duration_played: int

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.correct / self.total) * 100


@dataclass(slots=True)
class ActionRequest:
    request_id: str
    action_type: ActionType | str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ActionResult:
    request_id: str
    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    message: str


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.field_path}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


@dataclass(slots=True)
class ForensicArtifact:
    artifact_id: str
    timestamp: datetime
    engine_scope: str
    error_code: str
    message: str
    state_snapshot: Mapping[str, Any]
    context: Mapping[str, Any]
    identifiers: Mapping[str, str]
    causal_fragment: Sequence[str]
