"""Round-robin tournament orchestration.

Every participant meets every other participant exactly once; scores are
accumulated per participant and turned into a ranking.
"""

import logging
import random
from itertools import combinations
from typing import Callable, Dict, List, Optional, Sequence

from ..core.types import (
    MatchResult,
    Participant,
    RankingEntry,
    ScoringMatrix,
    TournamentSummary,
)
from .match import simulate_match

logger = logging.getLogger(__name__)


def compute_rankings(
    participants: Sequence[Participant],
    participant_scores: Dict[str, int],
    rounds: int,
) -> List[RankingEntry]:
    """Build the ranking, highest total first.

    The average is taken over the ``(N - 1) * rounds`` rounds each
    participant plays, and is 0 when that count is not positive. Equal
    totals keep input order.

    Args:
        participants: Participants in input order.
        participant_scores: Participant id -> cumulative total.
        rounds: Rounds per match.

    Returns:
        Sorted list of RankingEntry.
    """
    rounds_played = (len(participants) - 1) * rounds
    entries = [
        RankingEntry(
            participant_id=p.id,
            total_score=participant_scores[p.id],
            avg_score_per_round=(
                participant_scores[p.id] / rounds_played if rounds_played > 0 else 0.0
            ),
        )
        for p in participants
    ]
    # sorted() is stable, so ties stay in input order
    return sorted(entries, key=lambda e: e.total_score, reverse=True)


def run_tournament(
    participants: Sequence[Participant],
    rounds: int,
    scoring: ScoringMatrix,
    rng: Optional[random.Random] = None,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
) -> TournamentSummary:
    """Run a round-robin tournament.

    Pairs are generated in input order with ``i < j``; participant ``i``
    plays as p1. Fewer than two participants gives no matches and a
    zero-score ranking.

    Args:
        participants: Ordered participants with unique ids.
        rounds: Rounds per match.
        scoring: Payoff matrix shared by every match.
        rng: Optional random source for ``RANDOM`` reactions.
        progress_callback: Optional callback(completed, total, message).

    Returns:
        TournamentSummary with scores, matches and rankings.
    """
    participant_scores: Dict[str, int] = {p.id: 0 for p in participants}
    matches: List[MatchResult] = []

    pairings = list(combinations(participants, 2))
    total = len(pairings)

    for p1, p2 in pairings:
        match = simulate_match(p1, p2, rounds, scoring, rng)
        matches.append(match)
        participant_scores[p1.id] += match.p1_total_score
        participant_scores[p2.id] += match.p2_total_score

        if progress_callback:
            progress_callback(len(matches), total, f"{p1.name} vs {p2.name}")

    rankings = compute_rankings(participants, participant_scores, rounds)

    logger.debug(
        "Tournament complete: %d participants, %d matches, %d rounds each",
        len(participants), len(matches), rounds,
    )

    return TournamentSummary(
        participant_scores=participant_scores,
        matches=tuple(matches),
        rankings=tuple(rankings),
    )
