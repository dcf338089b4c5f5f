"""Persistent solving progress.

Each puzzle's entered values are saved as a JSON document named after the
puzzle identifier under ``local_db/progress/``. Block cells are stored as
``null`` and empty cells as ``""``.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from ..core.exceptions import ProgressStoreError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/progress")

Values = List[List[Optional[str]]]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class ProgressStore(Protocol):
    def load(self, puzzle_id: str) -> Optional[Values]:
        """Return saved values for ``puzzle_id`` or ``None``."""

    def save(self, puzzle_id: str, values: Values) -> None:
        """Persist the full value matrix for ``puzzle_id``."""


class MemoryProgressStore:
    """Dictionary-backed store for tests and short-lived sessions."""

    def __init__(self) -> None:
        self.documents: Dict[str, Values] = {}
        self.save_count = 0

    def load(self, puzzle_id: str) -> Optional[Values]:
        values = self.documents.get(puzzle_id)
        return [list(row) for row in values] if values is not None else None

    def save(self, puzzle_id: str, values: Values) -> None:
        self.documents[puzzle_id] = [list(row) for row in values]
        self.save_count += 1


class JsonProgressStore:
    """Save progress matrices as one JSON document per puzzle."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def load(self, puzzle_id: str) -> Optional[Values]:
        path = self._path(puzzle_id)
        if not path.exists():
            return None
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ProgressStoreError(f"Cannot read progress for {puzzle_id}: {exc}") from exc
        values = doc.get("values") if isinstance(doc, dict) else None
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            raise ProgressStoreError(f"Malformed progress document for {puzzle_id}")
        LOGGER.debug("Loaded progress for %s", puzzle_id)
        return values

    def save(self, puzzle_id: str, values: Values) -> None:
        doc = {
            "id": puzzle_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "values": values,
        }
        path = self._path(puzzle_id)
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.debug("Progress saved: %s", puzzle_id)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _path(self, puzzle_id: str) -> Path:
        return self.store_dir / f"{_UNSAFE_CHARS.sub('_', puzzle_id)}.json"
