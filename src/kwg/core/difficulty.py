from __future__ import annotations

from kwg.contracts import Difficulty, DifficultyProfile, ValidationError, ValidationIssue

LEVEL_TO_DIFFICULTY: dict[int, Difficulty] = {
    1: Difficulty.EASY,
    2: Difficulty.MEDIUM,
    3: Difficulty.HARD,
}

# fall speed units per nominal 60 Hz frame, before FALL_SPEED_SCALE
FALL_SPEED_SCALE = 1.0 / 10000

SESSION_CONFIG_KEYS = {"level", "duration_seconds", "concurrency", "player_count", "vocabulary"}


def default_difficulty_profiles() -> dict[Difficulty, DifficultyProfile]:
    return {
        Difficulty.EASY: DifficultyProfile(
            name=Difficulty.EASY,
            level=1,
            fall_speed=15.0,
            concurrency=3,
            show_hint=True,
            pass_alignment_threshold=0.5,
            goal_alignment_threshold=0.5,
        ),
        Difficulty.MEDIUM: DifficultyProfile(
            name=Difficulty.MEDIUM,
            level=2,
            fall_speed=25.0,
            concurrency=3,
            show_hint=False,
            pass_alignment_threshold=0.5,
            goal_alignment_threshold=0.5,
        ),
        Difficulty.HARD: DifficultyProfile(
            name=Difficulty.HARD,
            level=3,
            fall_speed=35.0,
            concurrency=3,
            show_hint=False,
            pass_alignment_threshold=0.5,
            goal_alignment_threshold=0.5,
        ),
    }


def difficulty_for_level(level: int) -> Difficulty:
    try:
        return LEVEL_TO_DIFFICULTY[level]
    except KeyError:
        raise ValidationError(
            [ValidationIssue("UNKNOWN_LEVEL", "blocking", "level", f"level must be one of 1, 2, 3; got {level!r}")]
        ) from None


def profile_for_level(level: int) -> DifficultyProfile:
    profile = default_difficulty_profiles()[difficulty_for_level(level)]
    profile.validate()
    return profile


def fall_speed(level: int) -> float:
    """Normalized downward distance covered per nominal frame at ``level``."""
    return profile_for_level(level).fall_speed * FALL_SPEED_SCALE


def validate_session_config(config: dict[str, object]) -> None:
    issues: list[ValidationIssue] = []
    unknown = sorted(set(config) - SESSION_CONFIG_KEYS)
    for key in unknown:
        issues.append(ValidationIssue("UNKNOWN_CONFIG_KEY", "blocking", key, "unsupported session setting"))

    level = config.get("level", 1)
    if not isinstance(level, int) or isinstance(level, bool) or level not in LEVEL_TO_DIFFICULTY:
        issues.append(ValidationIssue("UNKNOWN_LEVEL", "blocking", "level", f"level must be one of 1, 2, 3; got {level!r}"))

    duration = config.get("duration_seconds", 120)
    if not isinstance(duration, int) or isinstance(duration, bool) or duration <= 0:
        issues.append(ValidationIssue("BAD_DURATION", "blocking", "duration_seconds", "duration must be a positive integer"))

    concurrency = config.get("concurrency")
    if concurrency is not None and (not isinstance(concurrency, int) or isinstance(concurrency, bool) or not 1 <= concurrency <= 5):
        issues.append(ValidationIssue("BAD_CONCURRENCY", "blocking", "concurrency", "concurrency must be within [1, 5]"))

    player_count = config.get("player_count")
    if player_count is not None and (not isinstance(player_count, int) or not 2 <= player_count <= 20):
        issues.append(ValidationIssue("BAD_PLAYER_COUNT", "blocking", "player_count", "player count must be within [2, 20]"))

    if "vocabulary" in config:
        vocabulary = config["vocabulary"]
        if not isinstance(vocabulary, (list, tuple)) or not [w for w in vocabulary if str(w).strip()]:
            issues.append(ValidationIssue("EMPTY_VOCABULARY", "blocking", "vocabulary", "vocabulary must contain at least one word"))

    if issues:
        raise ValidationError(issues)
