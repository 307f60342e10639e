from __future__ import annotations

import pytest

from kwg.contracts import CueType, SessionPhase, TapOutcome, ValidationError
from kwg.core import EventBus, fall_speed, seeded_random
from kwg.word_rain import WordRainSession

WORDS = ["cat", "dog", "bird"]


def _session(**kwargs) -> WordRainSession:
    kwargs.setdefault("random_source", seeded_random(17))
    return WordRainSession(kwargs.pop("vocabulary", WORDS), **kwargs)


def _distractor(session: WordRainSession):
    return next(obj for obj in session.current_round if not obj.is_target and not obj.tapped)


def test_fall_speed_grows_with_level():
    assert fall_speed(1) == pytest.approx(0.0015)
    assert fall_speed(1) < fall_speed(2) < fall_speed(3)
    assert _session(level=3).fall_speed == pytest.approx(0.0035)


def test_hint_only_on_easy():
    assert _session(level=1).show_hint
    assert not _session(level=2).show_hint
    assert not _session(level=3).show_hint


def test_start_spawns_round_and_speaks_target():
    bus = EventBus()
    cues = []
    bus.subscribe_cues(cues.append)
    session = _session(event_bus=bus)

    assert session.start()
    assert not session.start()
    assert session.phase is SessionPhase.RUNNING
    assert len(session.current_round) == 3
    assert session.current_target in WORDS
    assert cues[0].cue_type is CueType.SPEAK
    assert cues[0].text == session.current_target


def test_tick_moves_untapped_objects_only():
    session = _session()
    session.start()
    distractor = _distractor(session)
    session.on_tap(distractor)
    before = {obj.label: obj.y for obj in session.current_round}

    session.advance_tick()

    for obj in session.current_round:
        expected = before[obj.label] if obj.tapped else before[obj.label] + session.fall_speed
        assert obj.y == pytest.approx(expected)


def test_correct_tap_scores_and_is_idempotent():
    session = _session(level=2)
    session.start()
    target = session.current_round.target

    assert session.on_tap(target) is TapOutcome.CORRECT
    assert target.correctness is TapOutcome.CORRECT
    assert session.on_tap(target) is None
    assert session.score == 20
    assert session.correct_count == 1
    assert session.total_count == 1
    assert session.treasures_collected == 1


def test_wrong_tap_counts_once_and_round_continues():
    session = _session()
    session.start()
    round_set = session.current_round
    distractor = _distractor(session)

    assert session.on_tap(distractor) is TapOutcome.WRONG
    assert session.on_tap(distractor) is None
    assert session.total_count == 1
    assert session.correct_count == 0
    assert session.current_round is round_set
    assert not session.respawn_pending


def test_fallen_distractor_cannot_be_tapped():
    session = _session()
    session.start()
    distractor = _distractor(session)
    distractor.y = 1.5

    assert session.on_tap(distractor) is None
    assert session.tap_label(distractor.label) is None
    assert session.total_count == 0
    assert distractor.correctness is TapOutcome.UNTAPPED
    assert session.on_tap(session.current_round.target) is TapOutcome.CORRECT


def test_twelve_right_three_wrong_at_level_one():
    session = _session(correct_respawn_frames=0)
    session.start()
    for i in range(12):
        if i < 3:
            assert session.on_tap(_distractor(session)) is TapOutcome.WRONG
        assert session.tap_label(session.current_target) is TapOutcome.CORRECT

    assert session.score == 120
    assert session.correct_count == 12
    assert session.total_count == 15
    assert session.accuracy == pytest.approx(80.0)


def test_accuracy_without_attempts_is_zero():
    session = _session()
    assert session.accuracy == 0.0
    session.record_correct()
    session.record_correct()
    session.record_correct()
    session.record_wrong()
    assert session.accuracy == pytest.approx(75.0)


def test_respawn_waits_for_delay_after_catch():
    session = _session(correct_respawn_frames=48)
    session.start()
    first_round = session.current_round
    session.on_tap(first_round.target)

    assert session.respawn_pending
    session.advance_tick(47)
    assert session.current_round is first_round
    assert session.tap_label(_distractor(session).label) is None

    session.advance_tick(1)
    assert not session.respawn_pending
    assert session.current_round is not first_round
    assert session.rounds_played == 2


def test_target_falling_off_counts_one_miss():
    session = _session(miss_respawn_frames=30)
    session.start()
    first_round = session.current_round

    session.advance_tick(1000)

    assert first_round.target_missed
    assert session.total_count == 1
    assert session.correct_count == 0
    assert session.respawn_pending

    session.advance_tick(10)
    assert session.total_count == 1
    session.advance_tick(20)
    assert session.current_round is not first_round
    assert session.total_count == 1


def test_pause_freezes_objects_and_rejects_taps():
    session = _session()
    session.start()
    target = session.current_round.target
    y = target.y

    assert session.pause()
    session.advance_tick(100)
    assert target.y == y
    assert session.on_tap(target) is None
    assert session.total_count == 0

    assert session.toggle_pause()
    assert session.phase is SessionPhase.RUNNING
    assert session.on_tap(target) is TapOutcome.CORRECT


def test_timer_ends_game_once_with_summary():
    summaries = []
    bus = EventBus()
    cues = []
    bus.subscribe_cues(cues.append)
    session = _session(duration_seconds=3, event_bus=bus, on_game_end=summaries.append)
    session.start()
    session.tap_label(session.current_target)

    for _ in range(5):
        session.tick_clock()

    assert session.phase is SessionPhase.ENDED
    assert session.remaining_seconds == 0
    assert len(summaries) == 1
    summary = summaries[0]
    assert summary.score == 10
    assert summary.correct == 1
    assert summary.total == 1
    assert summary.duration_played == 3
    assert summary.accuracy == pytest.approx(100.0)
    assert [c.cue_type for c in cues].count(CueType.GAME_END) == 1

    assert session.exit() is summary
    assert len(summaries) == 1


def test_exit_before_start_has_no_summary():
    session = _session()
    assert session.exit() is None
    assert session.phase is SessionPhase.ENDED
    assert not session.start()


def test_encouragement_follows_each_judgement():
    bus = EventBus()
    cues = []
    bus.subscribe_cues(cues.append)
    session = _session(event_bus=bus)
    session.start()
    session.on_tap(_distractor(session))
    session.on_tap(session.current_round.target)

    encouragements = [c for c in cues if c.cue_type is CueType.ENCOURAGE]
    assert [c.payload["correct"] for c in encouragements] == [False, True]
    sounds = [c.text for c in cues if c.cue_type is CueType.SOUND]
    assert sounds == ["wrong", "correct"]


@pytest.mark.parametrize(
    "kwargs,code",
    [
        ({"vocabulary": []}, "EMPTY_VOCABULARY"),
        ({"vocabulary": ["  "]}, "EMPTY_VOCABULARY"),
        ({"level": 4}, "UNKNOWN_LEVEL"),
        ({"duration_seconds": 0}, "BAD_DURATION"),
        ({"concurrency": 9}, "BAD_CONCURRENCY"),
        ({"concurrency": True}, "BAD_CONCURRENCY"),
        ({"miss_respawn_frames": -1}, "BAD_RESPAWN_DELAY"),
    ],
)
def test_invalid_configuration_is_rejected(kwargs, code):
    with pytest.raises(ValidationError) as ex:
        _session(**kwargs)
    assert code in {issue.code for issue in ex.value.issues}
