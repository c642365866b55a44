"""Altair chart factories for tournament visualization."""

import altair as alt
import numpy as np
import polars as pl

from ..core.types import MatchResult


def create_rankings_chart(
    rankings_df: pl.DataFrame,
    metric: str = "total_score",
    width: int = 600,
    height: int = 300,
) -> alt.Chart:
    """Generate horizontal bar chart of the harvest distribution.

    Args:
        rankings_df: DataFrame from TournamentAnalytics.rankings_frame().
        metric: Column to plot ("total_score" or "avg_score_per_round").
        width: Chart width.
        height: Chart height.

    Returns:
        An Altair chart object.
    """
    return (
        alt.Chart(rankings_df.to_pandas())
        .mark_bar()
        .encode(
            x=alt.X(f"{metric}:Q", title=metric.replace("_", " ").title()),
            y=alt.Y("name:N", sort="-x", title="Villager"),
            color=alt.Color("name:N", legend=None),
            tooltip=["rank", "name", "total_score", "avg_score_per_round"],
        )
        .properties(
            title="Harvest Distribution",
            width=width,
            height=height,
        )
    )


def create_cumulative_score_chart(
    match: MatchResult,
    p1_label: str = "Player 1",
    p2_label: str = "Player 2",
    width: int = 600,
    height: int = 300,
) -> alt.Chart:
    """Generate cumulative score lines for both sides of one match.

    Args:
        match: The match to plot.
        p1_label: Legend label for the row player.
        p2_label: Legend label for the column player.
        width: Chart width.
        height: Chart height.

    Returns:
        An Altair chart object.
    """
    rounds = list(range(1, len(match.rounds) + 1))
    df = pl.DataFrame({
        "round": rounds * 2,
        "player": [p1_label] * len(rounds) + [p2_label] * len(rounds),
        "move": [r.p1_move.value for r in match.rounds] + [r.p2_move.value for r in match.rounds],
        "cumulative_score": (
            np.cumsum([r.p1_score for r in match.rounds]).tolist()
            + np.cumsum([r.p2_score for r in match.rounds]).tolist()
        ),
    }, schema={
        "round": pl.Int64,
        "player": pl.Utf8,
        "move": pl.Utf8,
        "cumulative_score": pl.Int64,
    })

    return (
        alt.Chart(df.to_pandas())
        .mark_line(point=True)
        .encode(
            x=alt.X("round:O", title="Day"),
            y=alt.Y("cumulative_score:Q", title="Cumulative Harvest"),
            color=alt.Color("player:N", legend=alt.Legend(title="Villager")),
            tooltip=["round", "player", "move", "cumulative_score"],
        )
        .properties(
            title=f"{p1_label} vs {p2_label}",
            width=width,
            height=height,
        )
    )


def create_outcome_distribution_chart(
    outcome_df: pl.DataFrame,
    width: int = 400,
    height: int = 300,
) -> alt.Chart:
    """Generate joint outcome frequency chart.

    Args:
        outcome_df: DataFrame from TournamentAnalytics.outcome_counts().
        width: Chart width.
        height: Chart height.

    Returns:
        An Altair chart object.
    """
    return (
        alt.Chart(outcome_df.to_pandas())
        .mark_bar()
        .encode(
            x=alt.X("outcome:N", title="Outcome", sort=["CC", "CD", "DC", "DD"]),
            y=alt.Y("count:Q", title="Frequency"),
            color=alt.Color("outcome:N", legend=None),
            tooltip=["outcome", "count"],
        )
        .properties(
            title="Outcome Distribution",
            width=width,
            height=height,
        )
    )


def create_cooperation_rate_chart(
    coop_df: pl.DataFrame,
    width: int = 500,
    height: int = 300,
) -> alt.Chart:
    """Generate cooperation rate bar chart per participant.

    Args:
        coop_df: DataFrame from TournamentAnalytics.cooperation_rates().
        width: Chart width.
        height: Chart height.

    Returns:
        An Altair chart object.
    """
    return (
        alt.Chart(coop_df.to_pandas())
        .mark_bar()
        .encode(
            x=alt.X("participant_id:N", title="Villager"),
            y=alt.Y("cooperation_rate:Q", title="Sharing Rate (%)", scale=alt.Scale(domain=[0, 100])),
            tooltip=["participant_id", "cooperation_rate", "total_decisions"],
        )
        .properties(
            title="Sharing Rates",
            width=width,
            height=height,
        )
    )


def create_head_to_head_heatmap(
    matrix: np.ndarray,
    labels: list,
    width: int = 400,
    height: int = 400,
) -> alt.Chart:
    """Generate heatmap of head-to-head scores.

    Args:
        matrix: Square matrix from TournamentAnalytics.head_to_head_matrix().
        labels: Row/column labels in matrix order.
        width: Chart width.
        height: Chart height.

    Returns:
        An Altair chart object.
    """
    n = len(labels)
    df = pl.DataFrame({
        "villager": [labels[i] for i in range(n) for _ in range(n)],
        "opponent": [labels[j] for _ in range(n) for j in range(n)],
        "score": [int(matrix[i, j]) for i in range(n) for j in range(n)],
    }, schema={"villager": pl.Utf8, "opponent": pl.Utf8, "score": pl.Int64})

    return (
        alt.Chart(df.to_pandas())
        .mark_rect()
        .encode(
            x=alt.X("opponent:N", title="Against"),
            y=alt.Y("villager:N", title="Villager"),
            color=alt.Color("score:Q", title="Score"),
            tooltip=["villager", "opponent", "score"],
        )
        .properties(
            title="Head-to-Head Harvest",
            width=width,
            height=height,
        )
    )
