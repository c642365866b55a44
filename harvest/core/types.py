"""Type definitions for the harvest tournament engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Move(str, Enum):
    """Concrete action taken in a round."""
    COOPERATE = "COOPERATE"
    DEFECT = "DEFECT"


class Reaction(str, Enum):
    """Symbolic policy for a decision point, resolved into a Move."""
    COOPERATE = "COOPERATE"
    DEFECT = "DEFECT"
    RANDOM = "RANDOM"


SCORING_KEYS: Tuple[str, ...] = ("CC", "CD", "DC", "DD")


@dataclass(frozen=True)
class Strategy:
    """Reactive rule set owned by a participant.

    Exactly one field governs a round: ``initial_move`` for the first round,
    ``final_move`` for the last, otherwise the reaction keyed on the
    opponent's previous move.
    """
    initial_move: Reaction
    on_opponent_defect: Reaction
    on_opponent_cooperate: Reaction
    final_move: Reaction
    id: str = ""
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class Participant:
    """A tournament entrant."""
    id: str
    name: str
    strategy: Strategy
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class ScoringMatrix:
    """Payoff pairs keyed by (row move, column move)."""
    cc: Tuple[int, int]
    cd: Tuple[int, int]
    dc: Tuple[int, int]
    dd: Tuple[int, int]

    @staticmethod
    def key_for(row_move: Move, column_move: Move) -> str:
        """Return the outcome key ("CC", "CD", "DC" or "DD") for two moves."""
        return Move(row_move).value[0] + Move(column_move).value[0]

    def __getitem__(self, key: str) -> Tuple[int, int]:
        if key not in SCORING_KEYS:
            raise KeyError(f"Unknown outcome key '{key}'. Valid keys: {', '.join(SCORING_KEYS)}")
        return getattr(self, key.lower())

    def payoff(self, row_move: Move, column_move: Move) -> Tuple[int, int]:
        """Payoff pair for a joint outcome, row player first."""
        return self[self.key_for(row_move, column_move)]

    def as_dict(self) -> Dict[str, Tuple[int, int]]:
        return {key: self[key] for key in SCORING_KEYS}


@dataclass(frozen=True)
class GameRound:
    """Outcome of one round for an ordered pair (p1, p2)."""
    p1_move: Move
    p2_move: Move
    p1_score: int
    p2_score: int

    @property
    def key(self) -> str:
        return ScoringMatrix.key_for(self.p1_move, self.p2_move)


@dataclass(frozen=True)
class MatchResult:
    """Full outcome of one pairing."""
    p1_id: str
    p2_id: str
    rounds: Tuple[GameRound, ...]
    p1_total_score: int
    p2_total_score: int

    def total_for(self, participant_id: str) -> int:
        """Total earned by a participant in this match (0 if absent)."""
        if participant_id == self.p1_id:
            return self.p1_total_score
        if participant_id == self.p2_id:
            return self.p2_total_score
        return 0


@dataclass(frozen=True)
class RankingEntry:
    """One participant's line in the tournament ranking."""
    participant_id: str
    total_score: int
    avg_score_per_round: float


@dataclass(frozen=True)
class TournamentSummary:
    """Complete tournament results."""
    participant_scores: Dict[str, int]
    matches: Tuple[MatchResult, ...]
    rankings: Tuple[RankingEntry, ...]


@dataclass(frozen=True)
class VillagePreset:
    """A saved village: participants, scoring and season length."""
    id: str
    name: str
    participants: Tuple[Participant, ...]
    scoring: ScoringMatrix
    num_rounds: int
    timestamp: int = 0
