from __future__ import annotations

import hashlib
import random
from typing import Any, Sequence

from kwg.contracts import RandomSource


class PythonRandomSource(RandomSource):
    """Seedable randomness for spawns, routes and field layouts.

    Each consumer takes its own sub-stream through ``spawn`` so that adding a
    draw in one place never shifts the sequence seen by another. Sub-stream
    seeds hash the full path (``root/word_rain/word_rain:spawn``), so the same
    name under different parents gives different streams.
    """

    def __init__(self, seed: int | None = None, stream: str = "root") -> None:
        self.seed = seed
        self.stream = stream
        self._rng = random.Random(seed)

    def __repr__(self) -> str:
        return f"PythonRandomSource(seed={self.seed!r}, stream={self.stream!r})"

    @property
    def deterministic(self) -> bool:
        return self.seed is not None

    def rand(self) -> float:
        return self._rng.random()

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError(f"{self.stream}: cannot choose from an empty sequence")
        return self._rng.choice(items)

    def shuffle(self, items: list[Any]) -> None:
        self._rng.shuffle(items)

    def spawn(self, substream_id: str) -> PythonRandomSource:
        path = f"{self.stream}/{substream_id}"
        if self.seed is None:
            return PythonRandomSource(seed=None, stream=path)
        digest = hashlib.sha256(f"{self.seed}|{path}".encode("utf-8")).digest()
        return PythonRandomSource(seed=int.from_bytes(digest[:8], "big"), stream=path)


def gameplay_random() -> PythonRandomSource:
    return PythonRandomSource(seed=None)


def seeded_random(seed: int) -> PythonRandomSource:
    return PythonRandomSource(seed=seed)
