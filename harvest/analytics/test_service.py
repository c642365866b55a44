"""Tests for tournament analytics."""

import numpy as np
import pytest

from .service import TournamentAnalytics
from ..core.config import DEFAULT_SCORING
from ..engine import run_tournament
from ..strategies import ALWAYS_COOPERATE, ALWAYS_DEFECT, TIT_FOR_TAT, make_participant


@pytest.fixture
def participants():
    return [
        make_participant("Ada", TIT_FOR_TAT, participant_id="a"),
        make_participant("Bo", ALWAYS_DEFECT, participant_id="b"),
        make_participant("Cy", ALWAYS_COOPERATE, participant_id="c"),
    ]


@pytest.fixture
def analytics(participants):
    summary = run_tournament(participants, 4, DEFAULT_SCORING)
    return TournamentAnalytics(summary, participants)


class TestFrames:
    """DataFrame builders."""

    def test_rankings_frame(self, analytics):
        df = analytics.rankings_frame()
        assert df["rank"].to_list() == [1, 2, 3]
        assert df["name"][0] == "Bo"
        assert df["total_score"].to_list() == [r.total_score for r in analytics.summary.rankings]

    def test_matches_frame(self, analytics):
        df = analytics.matches_frame()
        assert df.height == 3
        assert df["rounds"].to_list() == [4, 4, 4]

    def test_rounds_frame_cumulative(self, analytics):
        df = analytics.rounds_frame()
        last = df.filter(df["round_number"] == 4)
        totals = [(m.p1_total_score, m.p2_total_score) for m in analytics.summary.matches]
        assert list(zip(last["p1_cumulative"].to_list(), last["p2_cumulative"].to_list())) == totals

    def test_cooperation_rates(self, analytics):
        rates = dict(analytics.cooperation_rates().select(["participant_id", "cooperation_rate"]).iter_rows())
        assert rates["b"] == 0
        assert rates["c"] == 100
        # against b: C D D C, against c: C C C C
        assert rates["a"] == pytest.approx(75.0)

    def test_outcome_counts(self, analytics):
        counts = dict(analytics.outcome_counts().iter_rows())
        assert sum(counts.values()) == 12
        assert counts["DC"] == 4
        assert counts["CD"] == 2

    def test_empty_summary(self, participants):
        summary = run_tournament(participants[:1], 4, DEFAULT_SCORING)
        analytics = TournamentAnalytics(summary, participants[:1])
        assert analytics.rounds_frame().is_empty()
        assert analytics.cooperation_rates().is_empty()
        assert analytics.outcome_counts().is_empty()
        assert analytics.rankings_frame().height == 1

    def test_empty_frames_keep_columns(self, participants):
        summary = run_tournament(participants, 0, DEFAULT_SCORING)
        analytics = TournamentAnalytics(summary, participants)
        assert analytics.cooperation_rates().columns == ["participant_id", "cooperation_rate", "total_decisions"]
        assert analytics.outcome_counts().columns == ["outcome", "count"]


class TestHeadToHead:
    """Score matrix."""

    def test_matrix_matches_totals(self, analytics):
        matrix = analytics.head_to_head_matrix()
        assert matrix.shape == (3, 3)
        assert np.all(np.diag(matrix) == 0)
        scores = analytics.summary.participant_scores
        assert matrix.sum(axis=1).tolist() == [scores["a"], scores["b"], scores["c"]]

    def test_default_order_from_scores(self, analytics):
        plain = TournamentAnalytics(analytics.summary)
        assert plain.participant_ids == ["a", "b", "c"]
        assert np.array_equal(plain.head_to_head_matrix(), analytics.head_to_head_matrix())
