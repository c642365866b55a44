"""Tests for village archive persistence."""

import json
from datetime import date

import pytest

from .archive import VillageArchive
from .validation import ArchiveFormatError, preset_to_dict
from ..core.config import DEFAULT_SCORING
from ..strategies import ALWAYS_DEFECT, TIT_FOR_TAT, make_participant


@pytest.fixture
def archive(tmp_path):
    return VillageArchive(str(tmp_path / "archives" / "villages.json"))


@pytest.fixture
def neighbors():
    return [
        make_participant("Marigold", TIT_FOR_TAT, participant_id="p-1"),
        make_participant("Thistle", ALWAYS_DEFECT, participant_id="p-2"),
    ]


class TestPresets:
    """Saving, listing and deleting villages."""

    def test_empty_archive(self, archive):
        assert archive.list_presets() == []

    def test_save_and_reload(self, archive, neighbors):
        saved = archive.save_preset("Millbrook", neighbors, DEFAULT_SCORING, 7)
        presets = archive.list_presets()
        assert presets == [saved]
        assert presets[0].participants == tuple(neighbors)
        assert presets[0].num_rounds == 7
        assert archive.get_preset(saved.id) == saved

    def test_blank_name_rejected(self, archive, neighbors):
        with pytest.raises(ValueError):
            archive.save_preset("   ", neighbors, DEFAULT_SCORING, 5)

    def test_empty_village_rejected(self, archive):
        with pytest.raises(ValueError):
            archive.save_preset("Empty", [], DEFAULT_SCORING, 5)

    def test_delete(self, archive, neighbors):
        first = archive.save_preset("One", neighbors, DEFAULT_SCORING, 5)
        second = archive.save_preset("Two", neighbors, DEFAULT_SCORING, 5)
        assert archive.delete_preset(first.id) is True
        assert archive.delete_preset(first.id) is False
        assert [p.id for p in archive.list_presets()] == [second.id]

    def test_unknown_preset(self, archive):
        with pytest.raises(KeyError):
            archive.get_preset("preset-missing")


class TestInterchange:
    """Export and import of archive files."""

    def test_export_file_name(self, archive, neighbors, tmp_path):
        archive.save_preset("Millbrook", neighbors, DEFAULT_SCORING, 5)
        path = archive.export_archives(str(tmp_path / "out"), date_=date(2025, 3, 1))
        assert path.name == "village_archives_2025-03-01.json"
        with open(path) as f:
            data = json.load(f)
        assert data[0]["name"] == "Millbrook"
        assert data[0]["scoring"]["DC"] == [5, 0]

    def test_export_nothing(self, archive, tmp_path):
        with pytest.raises(ValueError):
            archive.export_archives(str(tmp_path))

    def test_import_merges_new_ids(self, archive, neighbors, tmp_path):
        kept = archive.save_preset("Millbrook", neighbors, DEFAULT_SCORING, 5)
        incoming = [
            preset_to_dict(kept),
            dict(preset_to_dict(kept), id="preset-new", name="Oakridge", numRounds=9),
        ]
        path = tmp_path / "incoming.json"
        path.write_text(json.dumps(incoming))

        added, to_load = archive.import_archives(str(path))

        assert [p.id for p in added] == ["preset-new"]
        assert to_load.name == "Oakridge"
        assert to_load.num_rounds == 9
        assert [p.id for p in archive.list_presets()] == [kept.id, "preset-new"]

    def test_import_last_village_loaded_even_if_known(self, archive, neighbors, tmp_path):
        kept = archive.save_preset("Millbrook", neighbors, DEFAULT_SCORING, 5)
        path = tmp_path / "incoming.json"
        path.write_text(json.dumps([preset_to_dict(kept)]))
        added, to_load = archive.import_archives(str(path))
        assert added == []
        assert to_load == kept

    @pytest.mark.parametrize("content", ['{"id": "x"}', "[]", "not json"])
    def test_import_rejects_invalid_files(self, archive, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content)
        with pytest.raises(ArchiveFormatError):
            archive.import_archives(str(path))
        assert archive.list_presets() == []

    def test_import_rejects_undecodable_file(self, archive, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ArchiveFormatError, match="valid JSON"):
            archive.import_archives(str(path))
        assert archive.list_presets() == []
