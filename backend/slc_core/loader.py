from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from .event import PersonRecord, RawEvent
from .metadata import EventRegistry, default_registry


logger = logging.getLogger(__name__)

SCHEDULE_FILENAME = "competition-schedule.json"


def normalise_key(key: str) -> str:
    return key.strip().lower()


class DataStore:
    """Loads the competition schedule from the static JSON dataset."""

    def __init__(self, data_dir: Path | None = None, schedule_path: Path | None = None) -> None:
        """Initialize the DataStore.

        Args:
            data_dir: Directory containing the dataset file
            schedule_path: Explicit dataset path (overrides SLC_SCHEDULE_PATH and data_dir)
        """
        self.data_dir = data_dir or (Path(__file__).parent.parent / "data")
        env_path = os.getenv("SLC_SCHEDULE_PATH", "").strip()
        if schedule_path is not None:
            self.schedule_path = Path(schedule_path)
        elif env_path:
            self.schedule_path = Path(env_path)
        else:
            self.schedule_path = self.data_dir / SCHEDULE_FILENAME
        self._schedule: Mapping[str, PersonRecord] | None = None

    def load_schedule(self) -> Mapping[str, PersonRecord]:
        """Return the read-only schedule keyed by lower-cased "last, first"."""
        if self._schedule is not None:
            return self._schedule

        if not self.schedule_path.exists():
            raise FileNotFoundError(f"Schedule file not found: {self.schedule_path}")

        with self.schedule_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)

        self._schedule = MappingProxyType(self._build_schedule(raw))
        logger.info("Loaded %d competitors from %s", len(self._schedule), self.schedule_path)
        return self._schedule

    def _build_schedule(self, raw: Any) -> Dict[str, PersonRecord]:
        if not isinstance(raw, dict):
            raise ValueError(f"{self.schedule_path.name} must contain a JSON object keyed by competitor")

        schedule: Dict[str, PersonRecord] = {}
        for raw_key, row in raw.items():
            if not isinstance(row, dict):
                logger.warning("Skipping schedule row %r: expected an object", raw_key)
                continue

            name = str(row.get("name") or "").strip()
            if not name:
                logger.warning("Skipping schedule row %r: missing name", raw_key)
                continue

            key = normalise_key(str(raw_key))
            if key in schedule:
                logger.warning("Duplicate schedule key %r; keeping the first row", key)
                continue

            schedule[key] = PersonRecord(
                name=name,
                school=str(row.get("school") or "").strip(),
                events=self._coerce_events(row.get("events")),
            )

        return schedule

    @staticmethod
    def _coerce_events(raw: Any) -> tuple[RawEvent, ...]:
        if not isinstance(raw, list):
            return ()
        return tuple(RawEvent.from_dict(item) for item in raw if isinstance(item, dict))

    def schedule_summary(self, registry: EventRegistry | None = None) -> Dict[str, Any]:
        """Counts used by the dataset report and the health endpoint."""
        registry = registry or default_registry()
        schedule = self.load_schedule()

        schools = set()
        event_rows = 0
        skipped: List[Dict[str, str]] = []
        for person in schedule.values():
            if person.school:
                schools.add(person.school)
            for event in person.events:
                if registry.is_real_event(event.competition):
                    event_rows += 1
                else:
                    skipped.append({"name": person.name, "competition": event.competition})

        return {
            "people": len(schedule),
            "schools": len(schools),
            "eventRows": event_rows,
            "nonEventRows": len(skipped),
            "skipped": skipped,
        }
