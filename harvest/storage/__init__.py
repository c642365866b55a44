"""Storage module: village archives, stored seasons and input validation."""

from .validation import (
    ArchiveFormatError,
    parse_reaction,
    parse_scoring,
    parse_strategy,
    parse_participant,
    parse_preset,
    preset_to_dict,
    validate_tournament_input,
)
from .archive import VillageArchive
from .results import ResultStore, summary_to_rows

__all__ = [
    "ArchiveFormatError",
    "parse_reaction",
    "parse_scoring",
    "parse_strategy",
    "parse_participant",
    "parse_preset",
    "preset_to_dict",
    "validate_tournament_input",
    "VillageArchive",
    "ResultStore",
    "summary_to_rows",
]
