"""Conversion and validation of archive data.

Archives store villages in the camelCase JSON shape used by the village
archive files. These helpers turn that shape into core types and back,
rejecting anything the engine is not defined for.
"""

from typing import Any, Dict, List, Sequence, Tuple

from ..core.config import MAX_NUM_ROUNDS
from ..core.types import (
    SCORING_KEYS,
    Participant,
    Reaction,
    ScoringMatrix,
    Strategy,
    VillagePreset,
)


class ArchiveFormatError(ValueError):
    """Raised when archive data cannot be turned into a valid village."""


def _require(data: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(data, dict):
        raise ArchiveFormatError(f"{context} must be an object, got {type(data).__name__}")
    if key not in data:
        raise ArchiveFormatError(f"{context} is missing '{key}'")
    return data[key]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_reaction(raw: Any) -> Reaction:
    """Parse a reaction name such as ``"COOPERATE"``."""
    if isinstance(raw, str) and raw.upper() in Reaction.__members__:
        return Reaction[raw.upper()]
    valid = ", ".join(r.value for r in Reaction)
    raise ArchiveFormatError(f"Unknown reaction '{raw}'. Valid reactions: {valid}")


def parse_scoring(data: Dict[str, Any]) -> ScoringMatrix:
    """Parse a scoring matrix; all four outcome keys are required."""
    pairs = {}
    for key in SCORING_KEYS:
        pair = _require(data, key, "Scoring matrix")
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ArchiveFormatError(f"Scoring entry {key} must be a pair, got {pair!r}")
        if not all(_is_int(v) for v in pair):
            raise ArchiveFormatError(f"Scoring entry {key} must hold integers, got {pair!r}")
        pairs[key.lower()] = (pair[0], pair[1])
    return ScoringMatrix(**pairs)


def scoring_to_dict(scoring: ScoringMatrix) -> Dict[str, List[int]]:
    return {key: list(pair) for key, pair in scoring.as_dict().items()}


def parse_strategy(data: Dict[str, Any]) -> Strategy:
    """Parse a strategy object."""
    return Strategy(
        initial_move=parse_reaction(_require(data, "initialMove", "Strategy")),
        on_opponent_defect=parse_reaction(_require(data, "onOpponentDefect", "Strategy")),
        on_opponent_cooperate=parse_reaction(_require(data, "onOpponentCooperate", "Strategy")),
        final_move=parse_reaction(_require(data, "finalMove", "Strategy")),
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
    )


def strategy_to_dict(strategy: Strategy) -> Dict[str, Any]:
    return {
        "id": strategy.id,
        "name": strategy.name,
        "initialMove": strategy.initial_move.value,
        "onOpponentDefect": strategy.on_opponent_defect.value,
        "onOpponentCooperate": strategy.on_opponent_cooperate.value,
        "finalMove": strategy.final_move.value,
        "description": strategy.description,
    }


def parse_participant(data: Dict[str, Any]) -> Participant:
    """Parse a participant object including its strategy."""
    return Participant(
        id=str(_require(data, "id", "Participant")),
        name=str(_require(data, "name", "Participant")),
        strategy=parse_strategy(_require(data, "strategy", "Participant")),
        avatar_url=data.get("avatarUrl"),
    )


def participant_to_dict(participant: Participant) -> Dict[str, Any]:
    data = {
        "id": participant.id,
        "name": participant.name,
        "strategy": strategy_to_dict(participant.strategy),
    }
    if participant.avatar_url is not None:
        data["avatarUrl"] = participant.avatar_url
    return data


def parse_num_rounds(raw: Any) -> int:
    """Parse a round count, rejecting negatives and values above the limit."""
    if not _is_int(raw):
        raise ArchiveFormatError(f"Round count must be an integer, got {raw!r}")
    if raw < 0 or raw > MAX_NUM_ROUNDS:
        raise ArchiveFormatError(f"Round count must be between 0 and {MAX_NUM_ROUNDS}, got {raw}")
    return raw


def check_unique_ids(participants: Sequence[Participant]) -> None:
    """Raise if two participants share an id."""
    seen = set()
    for p in participants:
        if p.id in seen:
            raise ArchiveFormatError(f"Duplicate participant id '{p.id}'")
        seen.add(p.id)


def parse_preset(data: Dict[str, Any]) -> VillagePreset:
    """Parse a full village preset."""
    raw_participants = _require(data, "participants", "Village")
    if not isinstance(raw_participants, list):
        raise ArchiveFormatError("Village participants must be a list")
    participants = tuple(parse_participant(p) for p in raw_participants)
    check_unique_ids(participants)

    timestamp = data.get("timestamp", 0)
    return VillagePreset(
        id=str(_require(data, "id", "Village")),
        name=str(_require(data, "name", "Village")),
        participants=participants,
        scoring=parse_scoring(_require(data, "scoring", "Village")),
        num_rounds=parse_num_rounds(_require(data, "numRounds", "Village")),
        timestamp=timestamp if _is_int(timestamp) else 0,
    )


def preset_to_dict(preset: VillagePreset) -> Dict[str, Any]:
    return {
        "id": preset.id,
        "name": preset.name,
        "participants": [participant_to_dict(p) for p in preset.participants],
        "scoring": scoring_to_dict(preset.scoring),
        "numRounds": preset.num_rounds,
        "timestamp": preset.timestamp,
    }


def validate_tournament_input(
    participants: Sequence[Participant],
    rounds: int,
    scoring: ScoringMatrix,
) -> Tuple[Participant, ...]:
    """Check a tournament request before it reaches the engine.

    Args:
        participants: Ordered participants.
        rounds: Rounds per match.
        scoring: Payoff matrix.

    Returns:
        The participants as a tuple.

    Raises:
        ValueError: On duplicate ids, an invalid round count or a scoring
            object that is not a ScoringMatrix.
    """
    participants = tuple(participants)
    check_unique_ids(participants)
    parse_num_rounds(rounds)
    if not isinstance(scoring, ScoringMatrix):
        raise ArchiveFormatError(f"Expected a ScoringMatrix, got {type(scoring).__name__}")
    return participants
