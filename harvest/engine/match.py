"""Pairwise match simulation."""

import logging
import random
from typing import List, Optional, Sequence

from ..core.types import (
    GameRound,
    MatchResult,
    Move,
    Participant,
    Reaction,
    ScoringMatrix,
    Strategy,
)
from .resolver import resolve_reaction

logger = logging.getLogger(__name__)


def select_reaction(
    strategy: Strategy,
    opponent_history: Sequence[Move],
    round_num: int,
    total_rounds: int,
) -> Reaction:
    """Pick the strategy field governing a round.

    The first-round rule is checked before the last-round rule, so a
    single-round match plays ``initial_move``.

    Args:
        strategy: The deciding side's strategy.
        opponent_history: Opponent moves from strictly earlier rounds.
        round_num: Zero-based round index.
        total_rounds: Number of rounds in the match.

    Returns:
        The unresolved Reaction for this round.
    """
    if round_num == 0:
        return strategy.initial_move
    if round_num == total_rounds - 1:
        return strategy.final_move
    if opponent_history[-1] == Move.DEFECT:
        return strategy.on_opponent_defect
    return strategy.on_opponent_cooperate


def determine_move(
    strategy: Strategy,
    opponent_history: Sequence[Move],
    round_num: int,
    total_rounds: int,
    rng: Optional[random.Random] = None,
) -> Move:
    """Resolve the move a strategy plays in a given round."""
    reaction = select_reaction(strategy, opponent_history, round_num, total_rounds)
    return resolve_reaction(reaction, rng)


def simulate_match(
    p1: Participant,
    p2: Participant,
    rounds: int,
    scoring: ScoringMatrix,
    rng: Optional[random.Random] = None,
) -> MatchResult:
    """Play a fixed-length match between two participants.

    Both sides choose their round-``r`` move from the opponent's moves in
    rounds ``0..r-1`` only; histories are extended after both have chosen.

    Args:
        p1: Row player.
        p2: Column player.
        rounds: Number of rounds. Zero or negative gives an empty match.
        scoring: Payoff matrix, row player's payoff first.
        rng: Optional random source for ``RANDOM`` reactions.

    Returns:
        MatchResult with the round trace and both totals.
    """
    p1_history: List[Move] = []
    p2_history: List[Move] = []
    trace: List[GameRound] = []
    p1_total = 0
    p2_total = 0

    for round_num in range(max(rounds, 0)):
        m1 = determine_move(p1.strategy, p2_history, round_num, rounds, rng)
        m2 = determine_move(p2.strategy, p1_history, round_num, rounds, rng)

        p1_history.append(m1)
        p2_history.append(m2)

        p1_score, p2_score = scoring.payoff(m1, m2)
        p1_total += p1_score
        p2_total += p2_score

        trace.append(GameRound(
            p1_move=m1,
            p2_move=m2,
            p1_score=p1_score,
            p2_score=p2_score,
        ))

    logger.debug(
        "Match %s vs %s: %d rounds, totals %d-%d",
        p1.id, p2.id, len(trace), p1_total, p2_total,
    )

    return MatchResult(
        p1_id=p1.id,
        p2_id=p2.id,
        rounds=tuple(trace),
        p1_total_score=p1_total,
        p2_total_score=p2_total,
    )
