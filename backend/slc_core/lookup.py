from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Set, Tuple

from .errors import NotFoundError, ValidationError
from .event import OBJECTIVE_TEST, EnrichedEvent, EnrichedPerson, PersonRecord, RawEvent, is_team_event
from .metadata import EventRegistry

MAX_RESULTS = 10
MIN_QUERY_LENGTH = 2


@dataclass
class LookupResults:
    results: List[EnrichedPerson] = field(default_factory=list)
    total_matches: int = 0


def validate_query(name: Any) -> str:
    """Return the trimmed query, or raise ValidationError if it is unusable."""

    if not isinstance(name, str) or len(name.strip()) < MIN_QUERY_LENGTH:
        raise ValidationError("Please enter a valid name (at least 2 characters).")
    return name.strip()


def not_found_message(name: str) -> str:
    return (
        f'No schedule found for "{name}". Names are in "Last, First" format. '
        "Make sure you are registered for SLC 2026."
    )


class ScheduleLookup:
    """Matches competitor names and enriches their events for display."""

    def __init__(self, schedule: Mapping[str, PersonRecord], registry: EventRegistry) -> None:
        self.schedule = schedule
        self.registry = registry

    def lookup(self, name: Any) -> LookupResults:
        query = validate_query(name)
        records, total = self.match(query)
        return LookupResults(results=[self.enrich(person) for person in records], total_matches=total)

    def match(self, query: str) -> Tuple[List[PersonRecord], int]:
        """Find people for a query; returns at most MAX_RESULTS plus the uncapped total.

        Tries an exact "last, first" key, then a substring search over keys and
        display names, then the same search with a "First Last" query reversed
        into "Last, First".
        """

        search = query.strip().lower()
        matches: List[PersonRecord] = []

        exact = self.schedule.get(search)
        if exact is not None:
            matches.append(exact)

        if not matches:
            matches.extend(self._substring_matches(search))

        if not matches:
            parts = search.split()
            if len(parts) >= 2:
                reversed_query = f"{parts[-1]}, {' '.join(parts[:-1])}"
                seen = {(person.name, person.school) for person in matches}
                for person in self._substring_matches(reversed_query):
                    identity = (person.name, person.school)
                    if identity not in seen:
                        seen.add(identity)
                        matches.append(person)

        if not matches:
            raise NotFoundError(not_found_message(query))

        return matches[:MAX_RESULTS], len(matches)

    def _substring_matches(self, search: str) -> List[PersonRecord]:
        return [
            person
            for key, person in self.schedule.items()
            if search in key or search in person.name.lower()
        ]

    def count_competitors(self, event: RawEvent, person: PersonRecord) -> int:
        """Count the other people, or other teams, entered in the same event.

        Events are identified by competition name and category together. Teams
        are identified by (school, start time) since one school may field
        several teams in an event.
        """

        if is_team_event(event.type):
            own_team = (person.school, event.start_time)
            teams: Set[Tuple[str, str]] = set()
            for other in self.schedule.values():
                for entry in other.events:
                    if self._same_event(entry, event):
                        teams.add((other.school, entry.start_time))
            teams.discard(own_team)
            return len(teams)

        count = 0
        for other in self.schedule.values():
            if other.name == person.name:
                continue
            for entry in other.events:
                if self._same_event(entry, event):
                    count += 1
                    break
        return count

    @staticmethod
    def _same_event(entry: RawEvent, event: RawEvent) -> bool:
        return entry.competition == event.competition and entry.category == event.category

    def enrich(self, person: PersonRecord) -> EnrichedPerson:
        events: List[EnrichedEvent] = []
        for event in person.events:
            if not self.registry.is_real_event(event.competition):
                continue
            meta = self.registry.get(event.competition)
            events.append(
                EnrichedEvent(
                    competition=event.competition,
                    type=event.type,
                    date=event.date,
                    check_in_time=event.check_in_time,
                    start_time=event.start_time,
                    end_time=event.end_time,
                    category=event.category,
                    rubric_url=meta.rubric_url,
                    bizybear_url=meta.bizybear_url,
                    # The event's own category wins over the registry flag.
                    is_objective_test=event.category == OBJECTIVE_TEST,
                    is_team_event=is_team_event(event.type),
                    competitor_count=self.count_competitors(event, person),
                )
            )
        return EnrichedPerson(name=person.name, school=person.school, events=events)
