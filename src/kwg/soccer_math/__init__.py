from .aim import AimDecision, AlignmentAimResolver
from .field import LEFT_GOAL, RIGHT_GOAL, assign_ball, generate_players, too_close
from .models import Ball, FieldPlayer, KickResult, RouteSequence
from .route import generate_route
from .session import SoccerMathSession

__all__ = [
    "AimDecision",
    "AlignmentAimResolver",
    "Ball",
    "FieldPlayer",
    "KickResult",
    "LEFT_GOAL",
    "RIGHT_GOAL",
    "RouteSequence",
    "SoccerMathSession",
    "assign_ball",
    "generate_players",
    "generate_route",
    "too_close",
]
