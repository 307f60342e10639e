from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from kwg.contracts import Difficulty, ValidationError
from kwg.core import (
    default_difficulty_profiles,
    difficulty_for_level,
    integrity_failure,
    persist_forensic_artifact,
    profile_for_level,
    seeded_random,
    validate_session_config,
)


def test_levels_map_to_difficulties():
    assert difficulty_for_level(1) is Difficulty.EASY
    assert difficulty_for_level(2) is Difficulty.MEDIUM
    assert difficulty_for_level(3) is Difficulty.HARD
    with pytest.raises(ValidationError):
        difficulty_for_level(4)


def test_default_profiles_are_valid():
    profiles = default_difficulty_profiles()
    assert set(profiles) == set(Difficulty)
    for profile in profiles.values():
        profile.validate()
        assert profile.concurrency == 3
    assert profile_for_level(1).fall_speed == 15.0
    assert profile_for_level(3).fall_speed == 35.0


def test_session_config_collects_every_issue():
    with pytest.raises(ValidationError) as ex:
        validate_session_config({"level": True, "duration_seconds": -5, "colour": "red"})
    codes = {issue.code for issue in ex.value.issues}
    assert codes == {"UNKNOWN_LEVEL", "BAD_DURATION", "UNKNOWN_CONFIG_KEY"}


def test_session_config_accepts_defaults():
    validate_session_config({"level": 2, "duration_seconds": 90, "player_count": 8, "vocabulary": ["cat"]})


def test_substreams_are_stable_and_independent():
    a = seeded_random(7).spawn("word_rain").spawn("word_rain:spawn")
    b = seeded_random(7).spawn("word_rain").spawn("word_rain:spawn")
    other = seeded_random(7).spawn("soccer_math").spawn("word_rain:spawn")

    draws = [a.rand() for _ in range(5)]
    assert draws == [b.rand() for _ in range(5)]
    assert draws != [other.rand() for _ in range(5)]
    assert a.stream == "root/word_rain/word_rain:spawn"
    assert a.deterministic


def test_choice_from_empty_sequence_names_the_stream():
    with pytest.raises(ValueError, match="root/field"):
        seeded_random(1).spawn("field").choice([])


def test_integrity_failure_persists_readable_artifact(tmp_path):
    error = integrity_failure(
        "word_rain",
        "ROUND_SET_INVARIANT_BROKEN",
        "expected exactly one target, found 0",
        snapshot={"labels": ["cat", "dog"]},
        identifiers={"round_index": 3},
        trail=["spawn_round"],
    )
    assert error.error_code == "ROUND_SET_INVARIANT_BROKEN"
    assert error.artifact.identifiers == {"round_index": "3"}
    assert "word_rain" in str(error)

    path = persist_forensic_artifact(error.artifact, tmp_path / "forensics")
    assert path.exists()
    assert path.name.startswith("word_rain_round_set_invariant_broken_")
    assert '"labels"' in path.read_text(encoding="utf-8")


def test_package_metadata_does_not_publish_design_notes():
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    project = tomllib.loads(pyproject.read_text(encoding="utf-8"))["project"]
    assert "readme" not in project
    assert project["scripts"]["kwg"] == "kwg.cli:main"


def test_boolean_concurrency_is_rejected():
    with pytest.raises(ValidationError) as ex:
        validate_session_config({"concurrency": True})
    assert [issue.code for issue in ex.value.issues] == ["BAD_CONCURRENCY"]
