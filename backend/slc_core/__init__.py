"""Schedule lookup domain models reused by the API."""

from .event import EnrichedEvent, EnrichedPerson, PersonRecord, RawEvent
from .loader import DataStore
from .lookup import LookupResults, ScheduleLookup
from .mailer import ResendMailer
from .metadata import EventMetadata, EventRegistry

__all__ = [
    "DataStore",
    "EnrichedEvent",
    "EnrichedPerson",
    "EventMetadata",
    "EventRegistry",
    "LookupResults",
    "PersonRecord",
    "RawEvent",
    "ResendMailer",
    "ScheduleLookup",
]
