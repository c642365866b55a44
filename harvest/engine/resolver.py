"""Resolution of symbolic reactions into concrete moves."""

import random
from typing import Optional

from ..core.types import Move, Reaction


def resolve_reaction(reaction: Reaction, rng: Optional[random.Random] = None) -> Move:
    """Turn a reaction into a move.

    Deterministic reactions pass through unchanged. ``RANDOM`` is an
    independent fair coin flip on every call.

    Args:
        reaction: The reaction to resolve.
        rng: Optional random source exposing ``random()``. Defaults to the
            module-level generator.

    Returns:
        The resolved Move.
    """
    reaction = Reaction(reaction)
    if reaction is Reaction.RANDOM:
        source = rng if rng is not None else random
        return Move.COOPERATE if source.random() < 0.5 else Move.DEFECT
    return Move(reaction.value)
