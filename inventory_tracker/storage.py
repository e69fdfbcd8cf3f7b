"""Flat-file persistence for inventory records."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .codec import decode_record, encode_record
from .errors import DecodeError, PersistenceError
from .records import InventoryRecord

logger = logging.getLogger(__name__)


@dataclass
class FlatFileStorage:
    """Reads and rewrites the whole inventory file.

    A missing file is the first-run case and loads as an empty inventory.
    Lines that cannot be decoded are skipped so a partly damaged file still
    yields every readable record.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[InventoryRecord]:
        if not self.path.exists():
            logger.info("No data file at %s, starting with an empty inventory", self.path)
            return []
        records: List[InventoryRecord] = []
        try:
            with self.path.open("rb") as handle:
                for line_number, raw in enumerate(handle, start=1):
                    if not raw.strip():
                        continue
                    try:
                        records.append(decode_record(raw.decode("utf-8")))
                    except (DecodeError, UnicodeDecodeError) as exc:
                        logger.debug(
                            "Skipping line %d of %s: %s", line_number, self.path, exc
                        )
        except OSError as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc
        return records

    def save_all(self, records: Iterable[InventoryRecord]) -> None:
        lines = [encode_record(record) + "\n" for record in records]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                handle.writelines(lines)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc


__all__ = ["FlatFileStorage"]
