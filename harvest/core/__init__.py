"""Core module for the harvest package."""

from .config import (
    DEFAULT_SCORING,
    DEFAULT_NUM_ROUNDS,
    MAX_NUM_ROUNDS,
)
from .types import (
    Move,
    Reaction,
    SCORING_KEYS,
    Strategy,
    Participant,
    ScoringMatrix,
    GameRound,
    MatchResult,
    RankingEntry,
    TournamentSummary,
    VillagePreset,
)

__all__ = [
    "DEFAULT_SCORING",
    "DEFAULT_NUM_ROUNDS",
    "MAX_NUM_ROUNDS",
    "Move",
    "Reaction",
    "SCORING_KEYS",
    "Strategy",
    "Participant",
    "ScoringMatrix",
    "GameRound",
    "MatchResult",
    "RankingEntry",
    "TournamentSummary",
    "VillagePreset",
]
