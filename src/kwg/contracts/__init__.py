from .types import (
    ActionRequest,
    ActionResult,
    ActionType,
    CueEvent,
    CueType,
    Difficulty,
    DifficultyProfile,
    ForensicArtifact,
    GameKind,
    GameSummary,
    KickResultType,
    RandomSource,
    RouteStepStatus,
    SessionPhase,
    TapOutcome,
    ValidationError,
    ValidationIssue,
)

__all__ = [
    "ActionRequest",
    "ActionResult",
    "ActionType",
    "CueEvent",
    "CueType",
    "Difficulty",
    "DifficultyProfile",
    "ForensicArtifact",
    "GameKind",
    "GameSummary",
    "KickResultType",
    "RandomSource",
    "RouteStepStatus",
    "SessionPhase",
    "TapOutcome",
    "ValidationError",
    "ValidationIssue",
]
