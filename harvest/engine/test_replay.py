"""Tests for the paced tournament replay."""

import copy

import pytest

from .replay import ReplayPacing, TournamentReplay
from .tournament import run_tournament
from ..core import config
from ..core.config import DEFAULT_SCORING
from ..core.types import TournamentSummary
from ..strategies import ALWAYS_COOPERATE, ALWAYS_DEFECT, TIT_FOR_TAT, make_participant

PACING = ReplayPacing(
    enter_delay=0.8,
    hold_delay=1.0,
    gap_delay=0.4,
    match_gap_delay=1.5,
    finish_delay=2.0,
)


class FakeClock:
    """Records requested sleeps instead of waiting."""

    def __init__(self):
        self.sleeps = []

    def sleep(self, seconds):
        self.sleeps.append(seconds)


def village(*strategies):
    return [
        make_participant(f"Villager {i}", s, participant_id=f"p{i}")
        for i, s in enumerate(strategies)
    ]


class TestReplaySequence:
    """Order of replay steps and pacing."""

    def test_single_match_steps(self):
        summary = run_tournament(village(TIT_FOR_TAT, TIT_FOR_TAT), 3, DEFAULT_SCORING)
        clock = FakeClock()
        frames = list(TournamentReplay(summary, pacing=PACING, clock=clock, enable_tracking=False))

        assert [f.phase for f in frames] == [
            "enter_match",
            "hold_round", "reveal_round",
            "hold_round", "reveal_round",
            "finish",
        ]
        assert clock.sleeps == [0.8, 1.0, 0.4, 1.0, 0.4, 2.0]
        assert [f.round_index for f in frames] == [1, 1, 2, 2, 3, 3]
        assert [f.scores.get("p0", 0) for f in frames] == [3, 3, 6, 6, 9, 9]
        assert frames[-1].running is False

    def test_match_gaps_between_pairings(self):
        summary = run_tournament(village(ALWAYS_COOPERATE, ALWAYS_COOPERATE, ALWAYS_COOPERATE), 1, DEFAULT_SCORING)
        clock = FakeClock()
        frames = list(TournamentReplay(summary, pacing=PACING, clock=clock, enable_tracking=False))

        assert [f.phase for f in frames] == [
            "enter_match", "next_match",
            "enter_match", "next_match",
            "enter_match", "finish",
        ]
        assert clock.sleeps == [0.8, 1.5, 0.8, 1.5, 0.8, 2.0]
        assert [f.match_index for f in frames] == [0, 1, 1, 2, 2, 2]

    def test_current_round_follows_reveals(self):
        summary = run_tournament(village(ALWAYS_DEFECT, ALWAYS_COOPERATE), 2, DEFAULT_SCORING)
        frames = list(TournamentReplay(summary, pacing=PACING, clock=FakeClock(), enable_tracking=False))
        revealed = [f.current_round for f in frames if f.phase in ("enter_match", "reveal_round")]
        assert revealed == list(summary.matches[0].rounds)

    def test_speed_scales_delays(self):
        summary = run_tournament(village(TIT_FOR_TAT, TIT_FOR_TAT), 1, DEFAULT_SCORING)
        clock = FakeClock()
        pacing = ReplayPacing(enter_delay=0.8, finish_delay=2.0, speed=2.0)
        TournamentReplay(summary, pacing=pacing, clock=clock, enable_tracking=False).play()
        assert clock.sleeps == [pytest.approx(0.4), pytest.approx(1.0)]

    def test_invalid_speed(self):
        with pytest.raises(ValueError):
            ReplayPacing(speed=0).delay_for("enter_match")


class TestReplayResults:
    """Replay output against the summary it replays."""

    def test_final_scores_match_summary(self):
        summary = run_tournament(village(TIT_FOR_TAT, ALWAYS_DEFECT, ALWAYS_COOPERATE), 4, DEFAULT_SCORING)
        final = TournamentReplay(summary, pacing=PACING, clock=FakeClock(), enable_tracking=False).play()
        assert final.scores == summary.participant_scores

    def test_summary_not_mutated(self):
        summary = run_tournament(village(TIT_FOR_TAT, ALWAYS_DEFECT, ALWAYS_COOPERATE), 3, DEFAULT_SCORING)
        before = copy.deepcopy(summary)
        TournamentReplay(summary, pacing=PACING, clock=FakeClock(), enable_tracking=False).play()
        assert summary == before

    def test_on_frame_callback(self):
        summary = run_tournament(village(TIT_FOR_TAT, TIT_FOR_TAT), 2, DEFAULT_SCORING)
        seen = []
        last = TournamentReplay(summary, pacing=PACING, clock=FakeClock(), enable_tracking=False).play(seen.append)
        assert seen[-1] is last
        assert len(seen) == 4

    def test_empty_summary_finishes_without_waiting(self):
        summary = TournamentSummary(participant_scores={}, matches=(), rankings=())
        clock = FakeClock()
        frames = list(TournamentReplay(summary, pacing=PACING, clock=clock, enable_tracking=False))
        assert [f.phase for f in frames] == ["finish"]
        assert clock.sleeps == []
        assert frames[0].match is None

    def test_zero_round_matches_are_skipped(self):
        summary = run_tournament(village(TIT_FOR_TAT, TIT_FOR_TAT, TIT_FOR_TAT), 0, DEFAULT_SCORING)
        frames = list(TournamentReplay(summary, pacing=PACING, clock=FakeClock(), enable_tracking=False))
        assert [f.phase for f in frames] == ["next_match", "next_match", "finish"]
        assert frames[-1].scores == {}


class TestReplayTracking:
    """Replays recorded with Burr's local tracker."""

    def test_tracked_replay_writes_log(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "BURR_STORAGE_DIR", str(tmp_path))
        summary = run_tournament(village(TIT_FOR_TAT, ALWAYS_DEFECT), 2, DEFAULT_SCORING)

        final = TournamentReplay(summary, pacing=PACING, clock=FakeClock(), enable_tracking=True).play()

        assert final.scores == summary.participant_scores
        logs = list((tmp_path / config.BURR_PROJECT).rglob("log.jsonl"))
        assert len(logs) == 1
        assert logs[0].read_text().strip()
