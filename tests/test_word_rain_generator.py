from __future__ import annotations

import pytest

from kwg.core import seeded_random
from kwg.vocabulary import DEFAULT_GLYPH, glyph_for, normalize_vocabulary
from kwg.word_rain import create_set


def test_set_has_exactly_one_target_and_unique_labels():
    rng = seeded_random(3)
    vocabulary = ["cat", "dog", "bird", "fish", "tree", "sun"]
    for i in range(25):
        target = vocabulary[i % len(vocabulary)]
        round_set = create_set(vocabulary, 3, target, rng, round_index=i)
        targets = [obj for obj in round_set if obj.is_target]
        assert len(targets) == 1
        assert targets[0].label == target
        assert len(set(round_set.labels)) == len(round_set)
        assert len(round_set) == 3
        assert round_set.integrity_problems() == []


def test_three_word_set_spreads_evenly_across_width():
    round_set = create_set(["cat", "dog", "bird"], 3, "cat", seeded_random(8))

    assert sorted(round_set.labels) == ["bird", "cat", "dog"]
    xs = sorted(obj.x for obj in round_set)
    assert xs == pytest.approx([1 / 6, 1 / 2, 5 / 6])
    for obj in round_set:
        assert -0.15 <= obj.y <= -0.05
        assert not obj.tapped


def test_short_vocabulary_yields_short_set():
    round_set = create_set(["cat", "dog"], 5, "cat", seeded_random(1))
    assert len(round_set) == 2
    assert round_set.target.label == "cat"


def test_single_word_vocabulary_yields_single_target():
    round_set = create_set(["moon"], 3, "moon", seeded_random(1))
    assert round_set.labels == ["moon"]
    assert round_set.target.x == pytest.approx(0.5)


def test_target_outside_vocabulary_is_still_seeded():
    round_set = create_set(["dog", "bird", "fish"], 3, "zebra", seeded_random(4))
    assert "zebra" in round_set.labels
    assert round_set.target.label == "zebra"
    assert len(round_set) == 3


def test_duplicate_vocabulary_entries_never_repeat_in_a_set():
    round_set = create_set(["cat", "cat", "dog", "dog"], 3, "cat", seeded_random(2))
    assert sorted(round_set.labels) == ["cat", "dog"]


def test_same_seed_same_round():
    a = create_set(["cat", "dog", "bird", "fish"], 3, "fish", seeded_random(21))
    b = create_set(["cat", "dog", "bird", "fish"], 3, "fish", seeded_random(21))
    assert [o.to_dict() for o in a] == [o.to_dict() for o in b]


def test_glyphs_and_vocabulary_normalization():
    assert glyph_for("cat") == "🐱"
    assert glyph_for("Cat") == "🐱"
    assert glyph_for("xylophone") == DEFAULT_GLYPH
    assert normalize_vocabulary([" cat", "dog", "cat", "", "  "]) == ["cat", "dog"]
