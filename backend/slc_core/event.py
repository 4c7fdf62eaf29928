from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

OBJECTIVE_TEST = "Objective Test"

_TEAM_PATTERN = re.compile("team", re.IGNORECASE)


def is_team_event(type_: str) -> bool:
    """Return True when an event type string denotes group participation."""

    return bool(_TEAM_PATTERN.search(type_ or ""))


@dataclass(frozen=True)
class RawEvent:
    """A single schedule row for a competitor, as it appears in the dataset."""

    competition: str = ""
    type: str = ""
    date: str = ""
    check_in_time: str = ""
    start_time: str = ""
    end_time: str = ""
    category: str = ""

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "RawEvent":
        def text(key: str) -> str:
            value = row.get(key)
            return "" if value is None else str(value)

        return cls(
            competition=text("competition"),
            type=text("type"),
            date=text("date"),
            check_in_time=text("checkInTime"),
            start_time=text("startTime"),
            end_time=text("endTime"),
            category=text("category"),
        )


@dataclass(frozen=True)
class PersonRecord:
    name: str
    school: str
    events: Tuple[RawEvent, ...] = ()


@dataclass
class EnrichedEvent:
    competition: str
    type: str
    date: str
    check_in_time: str
    start_time: str
    end_time: str
    category: str
    rubric_url: str
    bizybear_url: Optional[str]
    is_objective_test: bool
    is_team_event: bool
    competitor_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "competition": self.competition,
            "type": self.type,
            "date": self.date,
            "checkInTime": self.check_in_time,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "category": self.category,
            "rubricUrl": self.rubric_url,
            "bizybearUrl": self.bizybear_url,
            "isObjectiveTest": self.is_objective_test,
            "isTeamEvent": self.is_team_event,
            "competitorCount": self.competitor_count,
        }


@dataclass
class EnrichedPerson:
    name: str
    school: str
    events: List[EnrichedEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "school": self.school,
            "events": [event.to_dict() for event in self.events],
        }
