"""Harvest - repeated Prisoner's Dilemma tournament engine.

A village of neighbours, each with a small reactive strategy, plays a
round-robin season of sharing or hogging their harvest.
"""

from .core import (
    DEFAULT_SCORING,
    DEFAULT_NUM_ROUNDS,
    Move,
    Reaction,
    Strategy,
    Participant,
    ScoringMatrix,
    GameRound,
    MatchResult,
    RankingEntry,
    TournamentSummary,
    VillagePreset,
)
from .engine import (
    resolve_reaction,
    simulate_match,
    run_tournament,
    ReplayPacing,
    ReplayFrame,
    TournamentReplay,
)
from .strategies import (
    STRATEGY_REGISTRY,
    get_strategy,
    list_strategies,
    get_strategy_names,
    make_participant,
)
from .storage import (
    ArchiveFormatError,
    VillageArchive,
    ResultStore,
    validate_tournament_input,
)
from .analytics import TournamentAnalytics

__all__ = [
    # Core
    "DEFAULT_SCORING",
    "DEFAULT_NUM_ROUNDS",
    "Move",
    "Reaction",
    "Strategy",
    "Participant",
    "ScoringMatrix",
    "GameRound",
    "MatchResult",
    "RankingEntry",
    "TournamentSummary",
    "VillagePreset",
    # Engine
    "resolve_reaction",
    "simulate_match",
    "run_tournament",
    "ReplayPacing",
    "ReplayFrame",
    "TournamentReplay",
    # Strategies
    "STRATEGY_REGISTRY",
    "get_strategy",
    "list_strategies",
    "get_strategy_names",
    "make_participant",
    # Storage
    "ArchiveFormatError",
    "VillageArchive",
    "ResultStore",
    "validate_tournament_input",
    # Analytics
    "TournamentAnalytics",
]
