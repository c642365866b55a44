"""Analytics over finished tournaments."""

from typing import Dict, List, Optional, Sequence

import numpy as np
import polars as pl

from ..core.types import Move, Participant, TournamentSummary
from ..storage.results import ROUND_SCHEMA, summary_to_rows

COOPERATION_SCHEMA = {
    "participant_id": pl.Utf8,
    "cooperation_rate": pl.Float64,
    "total_decisions": pl.UInt32,
}

OUTCOME_SCHEMA = {
    "outcome": pl.Utf8,
    "count": pl.UInt32,
}


class TournamentAnalytics:
    """Builds DataFrames and matrices from a TournamentSummary."""

    def __init__(
        self,
        summary: TournamentSummary,
        participants: Optional[Sequence[Participant]] = None,
    ):
        """Initialize the analytics.

        Args:
            summary: The finished tournament.
            participants: Optional participants, used for display names and
                ordering. Defaults to the order of the summary's scores.
        """
        self.summary = summary
        self.participants = list(participants) if participants is not None else None

    @property
    def participant_ids(self) -> List[str]:
        if self.participants is not None:
            return [p.id for p in self.participants]
        return list(self.summary.participant_scores.keys())

    @property
    def names(self) -> Dict[str, str]:
        if self.participants is None:
            return {pid: pid for pid in self.participant_ids}
        return {p.id: p.name for p in self.participants}

    def rankings_frame(self) -> pl.DataFrame:
        """Ranking table with 1-based rank and display names."""
        names = self.names
        return pl.DataFrame(
            {
                "rank": list(range(1, len(self.summary.rankings) + 1)),
                "participant_id": [r.participant_id for r in self.summary.rankings],
                "name": [names.get(r.participant_id, r.participant_id) for r in self.summary.rankings],
                "total_score": [r.total_score for r in self.summary.rankings],
                "avg_score_per_round": [r.avg_score_per_round for r in self.summary.rankings],
            },
            schema={
                "rank": pl.Int64,
                "participant_id": pl.Utf8,
                "name": pl.Utf8,
                "total_score": pl.Int64,
                "avg_score_per_round": pl.Float64,
            },
        )

    def matches_frame(self) -> pl.DataFrame:
        """One row per match with both totals."""
        return pl.DataFrame(
            [
                {
                    "match_index": i,
                    "p1_id": m.p1_id,
                    "p2_id": m.p2_id,
                    "p1_total_score": m.p1_total_score,
                    "p2_total_score": m.p2_total_score,
                    "rounds": len(m.rounds),
                }
                for i, m in enumerate(self.summary.matches)
            ],
            schema={
                "match_index": pl.Int64,
                "p1_id": pl.Utf8,
                "p2_id": pl.Utf8,
                "p1_total_score": pl.Int64,
                "p2_total_score": pl.Int64,
                "rounds": pl.Int64,
            },
        )

    def rounds_frame(self) -> pl.DataFrame:
        """One row per round with running totals inside each match."""
        df = pl.DataFrame(summary_to_rows(self.summary), schema=ROUND_SCHEMA)
        return df.with_columns([
            pl.col("p1_score").cum_sum().over("match_index").alias("p1_cumulative"),
            pl.col("p2_score").cum_sum().over("match_index").alias("p2_cumulative"),
        ])

    def _decisions(self) -> pl.DataFrame:
        rounds = self.rounds_frame()
        p1_data = rounds.select([
            pl.col("p1_id").alias("participant_id"),
            pl.col("p1_move").alias("move"),
            pl.col("p1_score").alias("score"),
        ])
        p2_data = rounds.select([
            pl.col("p2_id").alias("participant_id"),
            pl.col("p2_move").alias("move"),
            pl.col("p2_score").alias("score"),
        ])
        return pl.concat([p1_data, p2_data])

    def cooperation_rates(self) -> pl.DataFrame:
        """Share of COOPERATE moves per participant, in percent.

        Returns:
            DataFrame with columns: participant_id, cooperation_rate,
            total_decisions. Empty, with those columns, if no rounds were played.
        """
        combined = self._decisions()

        if combined.is_empty():
            return pl.DataFrame(schema=COOPERATION_SCHEMA)

        return combined.group_by("participant_id").agg([
            (
                (pl.col("move") == Move.COOPERATE.value).sum()
                / pl.len() * 100
            ).alias("cooperation_rate"),
            pl.len().alias("total_decisions"),
        ]).sort("participant_id")

    def outcome_counts(self) -> pl.DataFrame:
        """Frequency of each joint outcome key (CC, CD, DC, DD)."""
        rounds = self.rounds_frame()

        if rounds.is_empty():
            return pl.DataFrame(schema=OUTCOME_SCHEMA)

        return (
            rounds.group_by("outcome")
            .agg(pl.len().alias("count"))
            .sort("outcome")
        )

    def head_to_head_matrix(self) -> np.ndarray:
        """Score matrix where entry [i, j] is what i earned against j."""
        ids = self.participant_ids
        index = {pid: i for i, pid in enumerate(ids)}
        matrix = np.zeros((len(ids), len(ids)), dtype=np.int64)

        for match in self.summary.matches:
            if match.p1_id not in index or match.p2_id not in index:
                continue
            i, j = index[match.p1_id], index[match.p2_id]
            matrix[i, j] += match.p1_total_score
            matrix[j, i] += match.p2_total_score

        return matrix
