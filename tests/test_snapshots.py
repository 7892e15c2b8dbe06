"""
Tests for the JSON snapshot store.
"""
import json

from fleet_km.crews import adjust
from fleet_km.ledger import normalize
from fleet_km.records import CrewGroup, Dataset
from fleet_km.snapshots import SnapshotStore, default_key
from fleet_km.totals import compute_totals


class TestSnapshotStore:
    def setup_method(self):
        self.rows = [
            {"Driver": "Ann", "Total": 100, "distance with Bob": 40},
            {"Driver": "Bob", "Total": 90, "distance with Ann": 40},
        ]

    def _dataset(self, imported_at, source_name="march.xlsx"):
        return normalize(self.rows, source_name=source_name, source_sheet="Sheet1", imported_at=imported_at)

    def test_save_and_load(self, tmp_path):
        store = SnapshotStore(tmp_path / "store.json")
        ds = self._dataset("2026-03-01T10:00:00")
        assert store.save("march", ds) == "march"
        assert store.load("march") == ds
        assert store.load("april") is None

    def test_blank_key_uses_source_name(self, tmp_path):
        store = SnapshotStore(tmp_path / "store.json")
        assert store.save("  ", self._dataset("x")) == "march"
        assert default_key(self._dataset("x", source_name="")) == "dataset"

    def test_list_newest_first(self, tmp_path):
        store = SnapshotStore(tmp_path / "store.json")
        store.save("old", self._dataset("2026-01-01T00:00:00"))
        store.save("new", self._dataset("2026-02-01T00:00:00"))
        entries = store.list_entries()
        assert [e["key"] for e in entries] == ["new", "old"]
        assert entries[0]["drivers"] == 2
        assert entries[0]["source_name"] == "march.xlsx"

    def test_delete_and_clear(self, tmp_path):
        store = SnapshotStore(tmp_path / "store.json")
        store.save("a", self._dataset("1"))
        store.save("b", self._dataset("2"))
        assert store.delete("a") is True
        assert store.delete("a") is False
        assert [e["key"] for e in store.list_entries()] == ["b"]
        store.clear()
        assert store.list_entries() == []

    def test_corrupt_store_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        assert SnapshotStore(path).list_entries() == []

    def test_blob_without_pairs_uses_driver_fallback(self, tmp_path):
        path = tmp_path / "store.json"
        blob = self._dataset("2025-12-01T00:00:00").to_dict()
        del blob["duet_pairs"]
        path.write_text(json.dumps({"legacy": blob}))

        ds = SnapshotStore(path).load("legacy")
        assert isinstance(ds, Dataset)
        assert ds.duet_pairs is None
        groups = [CrewGroup("1", ["Ann"])]
        totals = compute_totals(adjust(ds.drivers, groups, ["Ann"]), ds.duet_pairs, groups)
        assert totals.shared_kilometers == 40
        assert totals.solo_kilometers == 110
