"""Village archive persistence."""

import json
import logging
import time
import uuid
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..core.config import ARCHIVE_PATH
from ..core.types import Participant, ScoringMatrix, VillagePreset
from .validation import (
    ArchiveFormatError,
    check_unique_ids,
    parse_num_rounds,
    parse_preset,
    preset_to_dict,
)

logger = logging.getLogger(__name__)


class VillageArchive:
    """Manages saved villages in a JSON file."""

    def __init__(self, storage_path: str = ARCHIVE_PATH):
        """Initialize the archive.

        Args:
            storage_path: Path of the JSON file holding the villages.
        """
        self.storage_path = Path(storage_path)
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> List[VillagePreset]:
        if not self.storage_path.exists():
            return []
        with open(self.storage_path) as f:
            data = json.load(f)
        return [parse_preset(item) for item in data]

    def _write(self, presets: Sequence[VillagePreset]) -> None:
        with open(self.storage_path, "w") as f:
            json.dump([preset_to_dict(p) for p in presets], f, indent=2)
        logger.debug("Wrote %d villages to %s", len(presets), self.storage_path)

    def list_presets(self) -> List[VillagePreset]:
        """Return all saved villages, oldest first."""
        return self._read()

    def get_preset(self, preset_id: str) -> VillagePreset:
        """Retrieve a village by ID.

        Raises:
            KeyError: If the preset_id is not found.
        """
        for preset in self._read():
            if preset.id == preset_id:
                return preset
        raise KeyError(f"Village '{preset_id}' not found")

    def save_preset(
        self,
        name: str,
        participants: Sequence[Participant],
        scoring: ScoringMatrix,
        num_rounds: int,
    ) -> VillagePreset:
        """Save the current village under a name.

        Args:
            name: Display name of the village.
            participants: Participants to store.
            scoring: Payoff matrix in use.
            num_rounds: Season length.

        Returns:
            The stored VillagePreset.

        Raises:
            ValueError: If the name is blank, there are no participants, or
                the data is invalid.
        """
        if not name.strip():
            raise ValueError("Village name cannot be blank")
        if not participants:
            raise ValueError("Cannot save a village without participants")
        check_unique_ids(participants)

        preset = VillagePreset(
            id=f"preset-{uuid.uuid4().hex[:8]}",
            name=name.strip(),
            participants=tuple(participants),
            scoring=scoring,
            num_rounds=parse_num_rounds(num_rounds),
            timestamp=int(time.time() * 1000),
        )
        self._write(self._read() + [preset])
        return preset

    def delete_preset(self, preset_id: str) -> bool:
        """Delete a village. Returns True if something was removed."""
        presets = self._read()
        remaining = [p for p in presets if p.id != preset_id]
        if len(remaining) == len(presets):
            return False
        self._write(remaining)
        return True

    def export_archives(self, directory: str, date_: Optional[date] = None) -> Path:
        """Write all villages to a dated interchange file.

        Args:
            directory: Destination directory.
            date_: Date used in the file name, defaults to today.

        Returns:
            Path to the exported file.

        Raises:
            ValueError: If there is nothing to export.
        """
        presets = self._read()
        if not presets:
            raise ValueError("No village archives to export")

        date_ = date_ or date.today()
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        filepath = out_dir / f"village_archives_{date_.isoformat()}.json"

        with open(filepath, "w") as f:
            json.dump([preset_to_dict(p) for p in presets], f, indent=2)

        return filepath

    def import_archives(self, path: str) -> Tuple[List[VillagePreset], VillagePreset]:
        """Merge villages from an interchange file.

        Villages whose id is already stored are skipped. The last village in
        the file is returned as the one to load, whether or not it was new.

        Args:
            path: Path of the file to import.

        Returns:
            Tuple of (newly added villages, village to load).

        Raises:
            ArchiveFormatError: If the file is not a non-empty list of
                valid villages.
        """
        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ArchiveFormatError(f"Archive is not a valid JSON file: {e}") from e

        if not isinstance(data, list):
            raise ArchiveFormatError("Invalid archive format: expected a list of villages")
        if not data:
            raise ArchiveFormatError("The imported file contains no villages")

        imported = [parse_preset(item) for item in data]
        existing = self._read()
        existing_ids = {p.id for p in existing}
        added = [p for p in imported if p.id not in existing_ids]

        if added:
            self._write(existing + added)

        logger.debug("Imported %d villages (%d new) from %s", len(imported), len(added), path)
        return added, imported[-1]
