"""Visualization module for harvest tournaments."""

from .charts import (
    create_rankings_chart,
    create_cumulative_score_chart,
    create_outcome_distribution_chart,
    create_cooperation_rate_chart,
    create_head_to_head_heatmap,
)

__all__ = [
    "create_rankings_chart",
    "create_cumulative_score_chart",
    "create_outcome_distribution_chart",
    "create_cooperation_rate_chart",
    "create_head_to_head_heatmap",
]
