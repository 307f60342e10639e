from __future__ import annotations

from dataclasses import dataclass

from kwg.contracts import TapOutcome

SPAWN_Y = -0.1
FALL_OFF_Y = 1.1


@dataclass(slots=True)
class FallingObject:
    label: str
    glyph_hint: str
    x: float
    y: float = SPAWN_Y
    is_target: bool = False
    tapped: bool = False
    correctness: TapOutcome = TapOutcome.UNTAPPED

    @property
    def fallen(self) -> bool:
        return self.y > FALL_OFF_Y

    @property
    def resolved(self) -> bool:
        return self.tapped or self.fallen

    def mark_tapped(self) -> TapOutcome:
        self.tapped = True
        self.correctness = TapOutcome.CORRECT if self.is_target else TapOutcome.WRONG
        return self.correctness

    def to_dict(self) -> dict[str, object]:
        return {
            "label": self.label,
            "glyph_hint": self.glyph_hint,
            "x": self.x,
            "y": self.y,
            "is_target": self.is_target,
            "tapped": self.tapped,
            "correctness": self.correctness.value,
        }


@dataclass(slots=True)
class RoundSet:
    objects: list[FallingObject]
    target_label: str
    round_index: int = 0
    target_missed: bool = False

    def __iter__(self):
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __contains__(self, item: object) -> bool:
        return any(obj is item for obj in self.objects)

    @property
    def labels(self) -> list[str]:
        return [obj.label for obj in self.objects]

    @property
    def target(self) -> FallingObject | None:
        for obj in self.objects:
            if obj.is_target:
                return obj
        return None

    @property
    def all_resolved(self) -> bool:
        return bool(self.objects) and all(obj.resolved for obj in self.objects)

    def integrity_problems(self) -> list[str]:
        problems: list[str] = []
        targets = [obj for obj in self.objects if obj.is_target]
        if len(targets) != 1:
            problems.append(f"expected exactly one target, found {len(targets)}")
        labels = self.labels
        if len(set(labels)) != len(labels):
            problems.append("duplicate labels in round set")
        if any(not 0.0 <= obj.x <= 1.0 for obj in self.objects):
            problems.append("horizontal position outside [0, 1]")
        return problems
