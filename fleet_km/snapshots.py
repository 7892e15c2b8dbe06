"""
Snapshot store: ingested datasets saved under a user-chosen key in one JSON file.
Entries are opaque blobs; older entries may lack fields (see Dataset.from_dict).
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .records import Dataset

logger = logging.getLogger(__name__)

DEFAULT_STORE_FILE = "kilometry-datasets.json"


def default_key(dataset: Dataset) -> str:
    """File name without extension, else 'dataset'."""
    stem = Path(dataset.source_name).stem if dataset.source_name else ""
    return stem or "dataset"


class SnapshotStore:
    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("could not read snapshot store %s", self.path, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp.replace(self.path)

    def save(self, key: str, dataset: Dataset) -> str:
        """Store (or overwrite) under key. Blank key falls back to default_key. Returns the key used."""
        key = (key or "").strip() or default_key(dataset)
        data = self._read()
        data[key] = dataset.to_dict()
        self._write(data)
        return key

    def load(self, key: str) -> Optional[Dataset]:
        blob = self._read().get(key)
        if not isinstance(blob, dict):
            return None
        return Dataset.from_dict(blob)

    def delete(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def list_entries(self) -> List[Dict[str, Any]]:
        """Newest import first."""
        entries = []
        for key, blob in self._read().items():
            if not isinstance(blob, dict):
                continue
            entries.append({
                "key": key,
                "drivers": len(blob.get("drivers") or []),
                "source_name": blob.get("source_name") or "",
                "imported_at": blob.get("imported_at") or "",
            })
        entries.sort(key=lambda e: e["imported_at"], reverse=True)
        return entries
