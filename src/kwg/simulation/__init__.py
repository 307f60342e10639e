from .replay import ReplayAction, ReplayHarness
from .runtime import GameRuntime, RuntimePaths

__all__ = ["GameRuntime", "ReplayAction", "ReplayHarness", "RuntimePaths"]
