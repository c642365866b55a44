"""Tournament engine: move resolution, matches, round-robin and replay."""

from .resolver import resolve_reaction
from .match import select_reaction, determine_move, simulate_match
from .tournament import compute_rankings, run_tournament
from .replay import (
    ReplayPacing,
    ReplayFrame,
    SystemClock,
    TournamentReplay,
    build_replay_app,
)

__all__ = [
    "resolve_reaction",
    "select_reaction",
    "determine_move",
    "simulate_match",
    "compute_rankings",
    "run_tournament",
    "ReplayPacing",
    "ReplayFrame",
    "SystemClock",
    "TournamentReplay",
    "build_replay_app",
]
