"""Premade strategy registry.

Each preset is a memory-one Strategy: an opening reaction, a reaction to
the opponent's last move, and a closing reaction for the final round.
"""

import uuid
from typing import Dict, List, Optional

from .core.types import Participant, Reaction, Strategy

C = Reaction.COOPERATE
D = Reaction.DEFECT
R = Reaction.RANDOM

TIT_FOR_TAT = Strategy(
    id="tit_for_tat",
    name="Tit for Tat",
    description="Shares first, then mirrors the neighbor's previous move.",
    initial_move=C,
    on_opponent_defect=D,
    on_opponent_cooperate=C,
    final_move=C,
)

SUSPICIOUS_TIT_FOR_TAT = Strategy(
    id="suspicious_tit_for_tat",
    name="Suspicious Tit for Tat",
    description="Hogs first, then mirrors the neighbor's previous move.",
    initial_move=D,
    on_opponent_defect=D,
    on_opponent_cooperate=C,
    final_move=C,
)

ALWAYS_COOPERATE = Strategy(
    id="always_cooperate",
    name="Always Share",
    description="Shares every day regardless of the neighbor.",
    initial_move=C,
    on_opponent_defect=C,
    on_opponent_cooperate=C,
    final_move=C,
)

ALWAYS_DEFECT = Strategy(
    id="always_defect",
    name="Always Hog",
    description="Hogs every day regardless of the neighbor.",
    initial_move=D,
    on_opponent_defect=D,
    on_opponent_cooperate=D,
    final_move=D,
)

RANDOM = Strategy(
    id="random",
    name="Coin Flipper",
    description="Flips a coin every day.",
    initial_move=R,
    on_opponent_defect=R,
    on_opponent_cooperate=R,
    final_move=R,
)

CONTRARIAN = Strategy(
    id="contrarian",
    name="Contrarian",
    description="Does the opposite of whatever the neighbor did last.",
    initial_move=C,
    on_opponent_defect=C,
    on_opponent_cooperate=D,
    final_move=D,
)

BACKSTABBER = Strategy(
    id="backstabber",
    name="Backstabber",
    description="Plays Tit for Tat but hogs on the last day of the season.",
    initial_move=C,
    on_opponent_defect=D,
    on_opponent_cooperate=C,
    final_move=D,
)

FORGIVING = Strategy(
    id="forgiving",
    name="Forgiving Neighbor",
    description="Shares after sharing, answers hogging with a coin flip.",
    initial_move=C,
    on_opponent_defect=R,
    on_opponent_cooperate=C,
    final_move=C,
)

STRATEGY_REGISTRY: Dict[str, Strategy] = {
    s.id: s
    for s in (
        TIT_FOR_TAT,
        SUSPICIOUS_TIT_FOR_TAT,
        ALWAYS_COOPERATE,
        ALWAYS_DEFECT,
        RANDOM,
        CONTRARIAN,
        BACKSTABBER,
        FORGIVING,
    )
}


def get_strategy(strategy_id: str) -> Strategy:
    """Retrieve a premade strategy by ID.

    Raises:
        KeyError: If the strategy_id is not found.
    """
    if strategy_id in STRATEGY_REGISTRY:
        return STRATEGY_REGISTRY[strategy_id]
    available = ", ".join(STRATEGY_REGISTRY.keys())
    raise KeyError(f"Strategy '{strategy_id}' not found. Available strategies: {available}")


def list_strategies() -> List[str]:
    """List all premade strategy IDs."""
    return list(STRATEGY_REGISTRY.keys())


def get_strategy_names() -> Dict[str, str]:
    """Get a mapping of strategy_id to display name."""
    return {strategy_id: s.name for strategy_id, s in STRATEGY_REGISTRY.items()}


def make_participant(
    name: str,
    strategy: Strategy,
    participant_id: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> Participant:
    """Create a participant with a fresh id unless one is given."""
    return Participant(
        id=participant_id or f"p-{uuid.uuid4().hex[:8]}",
        name=name,
        strategy=strategy,
        avatar_url=avatar_url,
    )
