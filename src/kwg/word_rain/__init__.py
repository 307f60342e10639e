from .generator import create_set
from .models import FALL_OFF_Y, SPAWN_Y, FallingObject, RoundSet
from .session import WordRainSession

__all__ = [
    "FALL_OFF_Y",
    "FallingObject",
    "RoundSet",
    "SPAWN_Y",
    "WordRainSession",
    "create_set",
]
