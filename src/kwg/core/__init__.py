from .difficulty import (
    default_difficulty_profiles,
    difficulty_for_level,
    fall_speed,
    profile_for_level,
    validate_session_config,
)
from .errors import EngineIntegrityError, integrity_failure, persist_forensic_artifact
from .events import EventBus, make_id, now_utc
from .geometry import Vec2, cosine_similarity
from .randomness import PythonRandomSource, gameplay_random, seeded_random

__all__ = [
    "EngineIntegrityError",
    "EventBus",
    "PythonRandomSource",
    "Vec2",
    "cosine_similarity",
    "default_difficulty_profiles",
    "difficulty_for_level",
    "fall_speed",
    "gameplay_random",
    "integrity_failure",
    "make_id",
    "now_utc",
    "persist_forensic_artifact",
    "profile_for_level",
    "seeded_random",
    "validate_session_config",
]
