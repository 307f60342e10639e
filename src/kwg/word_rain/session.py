from __future__ import annotations

import logging
from typing import Callable, Iterable

from kwg.contracts import (
    CueType,
    DifficultyProfile,
    GameKind,
    GameSummary,
    RandomSource,
    SessionPhase,
    TapOutcome,
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
from kwg.core.difficulty import FALL_SPEED_SCALE
from kwg.vocabulary import CORRECT_MESSAGES, MISS_MESSAGES, normalize_vocabulary
from kwg.word_rain.generator import create_set
from kwg.word_rain.models import FallingObject, RoundSet

logger = logging.getLogger(__name__)

GameEndHandler = Callable[[GameSummary], None]

POINTS_PER_LEVEL = 10
# nominal 60 Hz frames: 800 ms after a catch, 500 ms after a fall-off
CORRECT_RESPAWN_FRAMES = 48.0
MISS_RESPAWN_FRAMES = 30.0


class WordRainSession:
    """Falling-word listening game: hear a word, tap it before it lands.

    The session owns one round of falling objects at a time. A round ends at
    the first terminal event for its target (caught, or fallen past the bottom
    edge); leftover distractors are dropped with it and a fresh round spawns
    after the configured respawn delay. Time is driven from outside through
    ``advance_tick`` (per frame) and ``tick_clock`` (per second).
    """

    SCOPE = "word_rain"

    def __init__(
        self,
        vocabulary: Iterable[str],
        *,
        level: int = 1,
        duration_seconds: int = 120,
        concurrency: int | None = None,
        random_source: RandomSource | None = None,
        event_bus: EventBus | None = None,
        correct_respawn_frames: float = CORRECT_RESPAWN_FRAMES,
        miss_respawn_frames: float = MISS_RESPAWN_FRAMES,
        on_game_end: GameEndHandler | None = None,
    ) -> None:
        words = normalize_vocabulary(vocabulary)
        config: dict[str, object] = {"level": level, "duration_seconds": duration_seconds, "vocabulary": words}
        if concurrency is not None:
            config["concurrency"] = concurrency
        validate_session_config(config)
        if correct_respawn_frames < 0 or miss_respawn_frames < 0:
            raise ValidationError(
                [ValidationIssue("BAD_RESPAWN_DELAY", "blocking", "respawn_frames", "respawn delays must not be negative")]
            )

        self.level = level
        self.profile: DifficultyProfile = profile_for_level(level)
        self.vocabulary: tuple[str, ...] = tuple(words)
        self.duration_seconds = duration_seconds
        self.concurrency = concurrency if concurrency is not None else self.profile.concurrency
        self.correct_respawn_frames = correct_respawn_frames
        self.miss_respawn_frames = miss_respawn_frames

        rand = random_source or gameplay_random()
        self._spawn_random = rand.spawn("word_rain:spawn")
        self._feedback_random = rand.spawn("word_rain:feedback")
        self.event_bus = event_bus or EventBus()
        self._on_game_end = on_game_end

        self.phase = SessionPhase.NOT_STARTED
        self.remaining_seconds = duration_seconds
        self.score = 0
        self.correct_count = 0
        self.total_count = 0
        self.treasures_collected = 0
        self.rounds_played = 0
        self.current_round: RoundSet | None = None
        self.summary: GameSummary | None = None
        self._respawn_countdown: float | None = None

    @property
    def fall_speed(self) -> float:
        return self.profile.fall_speed * FALL_SPEED_SCALE

    @property
    def show_hint(self) -> bool:
        return self.profile.show_hint

    @property
    def accuracy(self) -> float:
        if self.total_count == 0:
            return 0.0
        return (self.correct_count / self.total_count) * 100

    @property
    def current_target(self) -> str | None:
        return self.current_round.target_label if self.current_round else None

    @property
    def respawn_pending(self) -> bool:
        return self._respawn_countdown is not None

    @property
    def elapsed_seconds(self) -> int:
        return self.duration_seconds - max(self.remaining_seconds, 0)

    def start(self) -> bool:
        if self.phase is not SessionPhase.NOT_STARTED:
            return False
        self.phase = SessionPhase.RUNNING
        logger.info("word rain started level=%d words=%d duration=%ds", self.level, len(self.vocabulary), self.duration_seconds)
        self._spawn_round()
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

    def advance_tick(self, elapsed_fraction: float = 1.0) -> None:
        """Move untapped objects down by ``fall_speed * elapsed_fraction``.

        ``elapsed_fraction`` is measured in nominal 60 Hz frames, so a driver
        running at exactly 60 Hz passes 1.0 every frame.
        """
        if self.phase is not SessionPhase.RUNNING or elapsed_fraction <= 0:
            return

        if self._respawn_countdown is not None:
            self._respawn_countdown -= elapsed_fraction
            if self._respawn_countdown <= 0:
                self._spawn_round()
            return

        round_set = self.current_round
        if round_set is None:
            self._spawn_round()
            return

        step = self.fall_speed * elapsed_fraction
        for obj in round_set:
            if not obj.tapped:
                obj.y += step

        target = round_set.target
        if target is not None and not target.tapped and target.fallen:
            round_set.target_missed = True
            logger.debug("round %d target %r fell untapped", round_set.round_index, target.label)
            self.record_wrong()
            self._encourage(correct=False)
            self._schedule_respawn(self.miss_respawn_frames)

    def on_tap(self, obj: FallingObject) -> TapOutcome | None:
        """Resolve a tap; returns ``None`` when the tap is ignored."""
        if self.phase is not SessionPhase.RUNNING or self._respawn_countdown is not None:
            return None
        if self.current_round is None or obj not in self.current_round or obj.tapped or obj.fallen:
            return None

        outcome = obj.mark_tapped()
        if outcome is TapOutcome.CORRECT:
            self.record_correct()
            self.treasures_collected += 1
            self.event_bus.cue(self.SCOPE, CueType.SOUND, "correct")
            self._encourage(correct=True)
            self._schedule_respawn(self.correct_respawn_frames)
        else:
            self.record_wrong()
            self.event_bus.cue(self.SCOPE, CueType.SOUND, "wrong")
            self._encourage(correct=False)
        return outcome

    def tap_label(self, label: str) -> TapOutcome | None:
        if self.current_round is None:
            return None
        for obj in self.current_round:
            if obj.label == label:
                return self.on_tap(obj)
        return None

    def record_correct(self) -> None:
        self.correct_count += 1
        self.total_count += 1
        self.score += POINTS_PER_LEVEL * self.level

    def record_wrong(self) -> None:
        self.total_count += 1

    def tick_clock(self) -> None:
        if self.phase is not SessionPhase.RUNNING:
            return
        self.remaining_seconds -= 1
        if self.remaining_seconds <= 0:
            self.remaining_seconds = 0
            self._end()

    def repeat_target(self) -> bool:
        if self.phase is not SessionPhase.RUNNING or self.respawn_pending or not self.current_target:
            return False
        self.event_bus.cue(self.SCOPE, CueType.SPEAK, self.current_target)
        return True

    def snapshot(self) -> dict[str, object]:
        return {
            "game": GameKind.WORD_RAIN.value,
            "phase": self.phase.value,
            "level": self.level,
            "show_hint": self.show_hint,
            "remaining_seconds": self.remaining_seconds,
            "score": self.score,
            "treasures": self.treasures_collected,
            "correct": self.correct_count,
            "total": self.total_count,
            "accuracy": self.accuracy,
            "target": self.current_target,
            "respawn_pending": self.respawn_pending,
            "objects": [obj.to_dict() for obj in self.current_round] if self.current_round else [],
        }

    def _spawn_round(self) -> None:
        self._respawn_countdown = None
        target_word = self._spawn_random.choice(self.vocabulary)
        round_set = create_set(
            self.vocabulary,
            self.concurrency,
            target_word,
            self._spawn_random,
            round_index=self.rounds_played,
        )
        problems = round_set.integrity_problems()
        if problems:
            raise integrity_failure(
                self.SCOPE,
                "ROUND_SET_INVARIANT_BROKEN",
                "; ".join(problems),
                snapshot={"labels": round_set.labels, "target": target_word},
                context={"concurrency": self.concurrency, "vocabulary_size": len(self.vocabulary)},
                identifiers={"round_index": round_set.round_index},
                trail=["spawn_round", "create_set"],
            )
        self.current_round = round_set
        self.rounds_played += 1
        self.event_bus.cue(self.SCOPE, CueType.SPEAK, target_word, round_index=round_set.round_index)

    def _schedule_respawn(self, frames: float) -> None:
        if frames <= 0:
            self._spawn_round()
        else:
            self._respawn_countdown = frames

    def _encourage(self, *, correct: bool) -> None:
        pool = CORRECT_MESSAGES if correct else MISS_MESSAGES
        self.event_bus.cue(self.SCOPE, CueType.ENCOURAGE, self._feedback_random.choice(pool), correct=correct)

    def _end(self) -> GameSummary:
        self.phase = SessionPhase.ENDED
        self._respawn_countdown = None
        self.summary = GameSummary(
            game=GameKind.WORD_RAIN,
            level=self.level,
            score=self.score,
            correct=self.correct_count,
            total=self.total_count,
            duration_played=self.elapsed_seconds,
        )
        logger.info(
            "word rain ended score=%d correct=%d total=%d accuracy=%.1f",
            self.score,
            self.correct_count,
            self.total_count,
            self.accuracy,
        )
        self.event_bus.cue(
            self.SCOPE,
            CueType.GAME_END,
            "game over",
            score=self.score,
            correct=self.correct_count,
            total=self.total_count,
        )
        if self._on_game_end is not None:
            self._on_game_end(self.summary)
        return self.summary
