"""Analytics module for harvest tournaments."""

from .service import TournamentAnalytics

__all__ = ["TournamentAnalytics"]
