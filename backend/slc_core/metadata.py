"""Event metadata registry for the 2025-26 competitive events.

Each canonical event name maps to the rubric PDF for its tier (high school or
middle school), an optional BizYBear practice-question page, and whether the
event is an objective test. BizYBear slugs are listed per event because the
site does not use a consistent slug format.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

HS_RUBRIC_URL = (
    "https://greektrack-fbla-public.s3.amazonaws.com/files/1/"
    "High%20School%20Competitive%20Events%20Resources/25-26-High-School-Guidelines-All-in-One.pdf"
)
MS_RUBRIC_URL = (
    "https://greektrack-fbla-public.s3.amazonaws.com/files/1/"
    "Middle%20School%20Competitive%20Events%20Resources/25-26-Middle-School-Guidelines-All-in-One.pdf"
)
BIZYBEAR_BASE_URL = "https://bizybear.app/fbla/"

BIZYBEAR_SLUGS: Dict[str, str] = {
    # Objective tests
    "Accounting": "accounting",
    "Advanced Accounting": "advanced-accounting",
    "Advertising": "Advertising",
    "Agribusiness": "Agribusiness",
    "Business Communication": "Business+Communication",
    "Business Law": "Business+Law",
    "Career Exploration": "Career+Exploration",
    "Career Research": "Career+Research",
    "Computer Problem Solving": "Computer+Problem+Solving",
    "Cybersecurity": "Cyber+Security",
    "Data Science & AI": "data-science-ai",
    "Digital Citizenship": "Digital+Citizenship",
    "Economics": "Economics",
    "Exploring Agribusiness": "exploring-agribusiness",
    "Exploring Accounting & Finance": "exploring-accounting-finance",
    "Exploring Business Communication": "exploring-business-communication",
    "Exploring Business Concepts": "exploring-business-concepts",
    "Exploring Computer Science": "Exploring+Computer+Science",
    "Exploring Economics": "Exploring+Economics",
    "Exploring FBLA": "exploring-fbla",
    "Exploring Leadership": "Exploring+Leadership",
    "Exploring Marketing Concepts": "exploring-marketing-concepts",
    "Exploring Parliamentary Procedure": "Exploring+Parliamentary+Procedure",
    "Exploring Personal Finance": "exploring-personal-finance",
    "Exploring Professionalism": "exploring-professionalism",
    "Exploring Technology": "Exploring+Technology",
    "Health Care Administration": "Healthcare+Administration",
    "Human Resource Management": "Human+Resource+Management",
    "Insurance & Risk Management": "Insurance+%26+Risk+Management",
    "Interpersonal Communication": "Interpersonal+Communication",
    "Introduction to Business Communication": "Introduction+to+Business+Communication",
    "Introduction to Business Concepts": "Introduction+to+Business+Concepts",
    "Introduction to Business Procedures": "Introduction+to+Business+Procedures",
    "Introduction to FBLA": "Introduction+to+FBLA",
    "Introduction to Information Technology": "Introduction+to+Information+Technology",
    "Introduction to Marketing Concepts": "Introduction+to+Marketing+Concepts",
    "Introduction to Parliamentary Procedure": "Introduction+to+Parliamentary+Procedure",
    "Introduction to Retail & Merchandising": "intro-retail-merchandising",
    "Introduction to Supply Chain Management": "intro-supply-chain-management",
    "Journalism": "Journalism",
    "Networking Infrastructures": "Networking+Infrastructures",
    "Organizational Leadership": "Organizational+Leadership",
    "Personal Finance": "Personal+Finance",
    "Project Management": "project-management",
    "Public Administration & Management": "public-administration-management",
    "Real Estate": "real-estate",
    "Retail Management": "retail-management",
    "Securities & Investments": "Securities+%26+Investments",
    # Performance, production and chapter events
    "American Enterprise Project": "American+Enterprise+Project",
    "Banking & Financial Systems": "Banking+%26+Financial+Systems",
    "Broadcast Journalism": "Broadcast+Journalism",
    "Business Ethics": "Business+Ethics",
    "Business Management": "Business+Management",
    "Business Plan": "Business+Plan",
    "Career Portfolio": "career-portfolio",
    "Coding and Programming": "Coding+%26+Programming",
    "Community Service Project": "Community+Service+Project",
    "Computer Applications": "Computer+Applications",
    "Computer Game & Simulation Programming": "Computer+Game+%26+Simulation+Programming",
    "Customer Service": "customer-service",
    "Data Analysis": "Data+Analysis",
    "Digital Animation": "Digital+Animation",
    "Digital Video Production": "Digital+Video+Production",
    "Entrepreneurship": "Entrepreneurship",
    "Event Planning": "event-planning",
    "Exploring Animation": "exploring-animation",
    "Exploring Business Ethics": "Exploring+Business+Ethics",
    "Exploring Business Issues": "Exploring+Business+Issues",
    "Exploring Customer Service": "exploring-customer-service",
    "Exploring Management & Entrepreneurship": "exploring-management-entrepreneurship",
    "Exploring Marketing Strategies": "exploring-marketing-strategies",
    "Exploring Public Speaking": "Exploring+Public+Speaking",
    "Exploring Website Design": "Exploring+Website+Design",
    "Financial Planning": "financial-planning",
    "Financial Statement Analysis": "Financial+Statement+Analysis",
    "Future Business Educator": "Future+Business+Educator",
    "Future Business Leader": "Future+Business+Leader",
    "Graphic Design": "Graphic+Design",
    "Hospitality and Event Management": "Hospitality+%26+Event+Management",
    "Impromptu Speaking": "Impromptu+Speaking",
    "International Business": "International+Business",
    "Introduction to Business Presentation": "Introduction+to+Business+Presentation",
    "Introduction to Programming": "Introduction+to+Programming",
    "Introduction to Public Speaking": "Introduction+to+Public+Speaking",
    "Introduction to Social Media Strategy": "Introduction+to+Social+Media+Strategy",
    "Job Interview": "Job+Interview",
    "Local Chapter Annual Business Report": "Local+Chapter+Annual+Business+Report",
    "Management Information Systems": "Management+Information+Systems",
    "Marketing": "Marketing",
    "Mobile Application Development": "Mobile+Application+Development",
    "Network Design": "Network+Design",
    "Parliamentary Procedure": "Parliamentary+Procedure",
    "Partnership with Business Project": "Partnership+with+Business+Project",
    "Public Service Announcement": "Public+Service+Announcement",
    "Public Speaking": "Public+Speaking",
    "Sales Presentation": "Sales+Presentation",
    "Slide Deck Applications": "slide-deck-applications",
    "Social Media Strategies": "Social+Media+Strategies",
    "Sports & Entertainment Management": "Sports+%26+Entertainment+Management",
    "Supply Chain Management": "Supply+Chain+Management",
    "Visual Design": "Visual+Design",
    "Website Coding & Development": "Website+Coding+%26+Development",
    "Website Design": "Website+Design",
}

# Middle-school (FBLA-ML) events use the middle-school rubric PDF.
MIDDLE_SCHOOL_EVENTS = frozenset(
    {
        "Career Exploration",
        "Digital Citizenship",
        "Interpersonal Communication",
        "Slide Deck Applications",
        "Exploring Agribusiness",
        "Exploring Accounting & Finance",
        "Exploring Animation",
        "Exploring Business Communication",
        "Exploring Business Concepts",
        "Exploring Business Ethics",
        "Exploring Business Issues",
        "Exploring Computer Science",
        "Exploring Customer Service",
        "Exploring Economics",
        "Exploring FBLA",
        "Exploring Leadership",
        "Exploring Management & Entrepreneurship",
        "Exploring Marketing Concepts",
        "Exploring Marketing Strategies",
        "Exploring Parliamentary Procedure",
        "Exploring Personal Finance",
        "Exploring Professionalism",
        "Exploring Public Speaking",
        "Exploring Technology",
        "Exploring Website Design",
    }
)

OBJECTIVE_TEST_EVENTS: Tuple[str, ...] = (
    "Accounting",
    "Advanced Accounting",
    "Advertising",
    "Agribusiness",
    "Business Communication",
    "Business Law",
    "Career Exploration",
    "Career Research",
    "Computer Problem Solving",
    "Cybersecurity",
    "Data Science & AI",
    "Digital Citizenship",
    "Economics",
    "Exploring Agribusiness",
    "Exploring Accounting & Finance",
    "Exploring Business Communication",
    "Exploring Business Concepts",
    "Exploring Computer Science",
    "Exploring Economics",
    "Exploring FBLA",
    "Exploring Leadership",
    "Exploring Marketing Concepts",
    "Exploring Parliamentary Procedure",
    "Exploring Personal Finance",
    "Exploring Professionalism",
    "Exploring Technology",
    "Health Care Administration",
    "Human Resource Management",
    "Insurance & Risk Management",
    "Interpersonal Communication",
    "Introduction to Business Communication",
    "Introduction to Business Concepts",
    "Introduction to Business Procedures",
    "Introduction to FBLA",
    "Introduction to Information Technology",
    "Introduction to Marketing Concepts",
    "Introduction to Parliamentary Procedure",
    "Introduction to Retail & Merchandising",
    "Introduction to Supply Chain Management",
    "Journalism",
    "Networking Infrastructures",
    "Organizational Leadership",
    "Personal Finance",
    "Project Management",
    "Public Administration & Management",
    "Real Estate",
    "Retail Management",
    "Securities & Investments",
)

PERFORMANCE_EVENTS: Tuple[str, ...] = (
    "American Enterprise Project",
    "Banking & Financial Systems",
    "Broadcast Journalism",
    "Business Ethics",
    "Business Management",
    "Business Plan",
    "Career Portfolio",
    "Coding and Programming",
    "Community Service Project",
    "Computer Applications",
    "Computer Game & Simulation Programming",
    "Customer Service",
    "Data Analysis",
    "Digital Animation",
    "Digital Video Production",
    "Entrepreneurship",
    "Event Planning",
    "Exploring Animation",
    "Exploring Business Ethics",
    "Exploring Business Issues",
    "Exploring Customer Service",
    "Exploring Management & Entrepreneurship",
    "Exploring Marketing Strategies",
    "Exploring Public Speaking",
    "Exploring Website Design",
    "Financial Planning",
    "Financial Statement Analysis",
    "Future Business Educator",
    "Future Business Leader",
    "Graphic Design",
    "Hospitality and Event Management",
    "Impromptu Speaking",
    "International Business",
    "Introduction to Business Presentation",
    "Introduction to Programming",
    "Introduction to Public Speaking",
    "Introduction to Social Media Strategy",
    "Job Interview",
    "Local Chapter Annual Business Report",
    "Management Information Systems",
    "Marketing",
    "Mobile Application Development",
    "Network Design",
    "Parliamentary Procedure",
    "Partnership with Business Project",
    "Public Service Announcement",
    "Public Speaking",
    "Sales Presentation",
    "Slide Deck Applications",
    "Social Media Strategies",
    "Sports & Entertainment Management",
    "Supply Chain Management",
    "Visual Design",
    "Website Coding & Development",
    "Website Design",
)

_LEADING_DIGIT = re.compile(r"^\d")
_LEADING_TIME = re.compile(r"^\d{1,2}:\d{2}")
_NON_EVENT_PREFIXES = ("performance (", "role play (", "production")
_NON_EVENT_NAMES = frozenset({"state parliamentarian candidate"})


@dataclass(frozen=True)
class EventMetadata:
    rubric_url: str
    bizybear_url: Optional[str] = None
    is_objective_test: bool = False


FALLBACK_METADATA = EventMetadata(rubric_url=HS_RUBRIC_URL, bizybear_url=None, is_objective_test=False)


def bizybear_url(name: str, slugs: Dict[str, str] | None = None) -> Optional[str]:
    """Build the BizYBear practice URL for an event, or None if it has no page."""

    slug = (slugs if slugs is not None else BIZYBEAR_SLUGS).get(name)
    return f"{BIZYBEAR_BASE_URL}{slug}" if slug else None


class EventRegistry:
    """Read-only lookup from canonical event name to its metadata."""

    def __init__(
        self,
        objective_tests: Iterable[str] = OBJECTIVE_TEST_EVENTS,
        performance_events: Iterable[str] = PERFORMANCE_EVENTS,
        middle_school_events: Iterable[str] = MIDDLE_SCHOOL_EVENTS,
        slugs: Dict[str, str] | None = None,
    ) -> None:
        middle_school = frozenset(middle_school_events)
        slug_table = BIZYBEAR_SLUGS if slugs is None else slugs

        events: Dict[str, EventMetadata] = {}
        for names, objective in ((objective_tests, True), (performance_events, False)):
            for name in names:
                events[name] = EventMetadata(
                    rubric_url=MS_RUBRIC_URL if name in middle_school else HS_RUBRIC_URL,
                    bizybear_url=bizybear_url(name, slug_table),
                    is_objective_test=objective,
                )

        self._events = events
        # Sorted so that the prefix fallback resolves the same way on every run.
        self._sorted_keys: List[Tuple[str, str]] = sorted((name.lower(), name) for name in events)

    def __contains__(self, name: object) -> bool:
        return name in self._events

    def __len__(self) -> int:
        return len(self._events)

    def get(self, name: str) -> EventMetadata:
        """Return metadata for an event name.

        Tries an exact match, then accepts the first registry key (in sorted
        order) where either name is a case-insensitive prefix of the other.
        Unknown events get the high-school rubric with no practice link.
        """

        exact = self._events.get(name)
        if exact is not None:
            return exact

        lower = name.lower()
        for key_lower, key in self._sorted_keys:
            if lower.startswith(key_lower) or key_lower.startswith(lower):
                return self._events[key]

        return FALLBACK_METADATA

    def is_real_event(self, name: str) -> bool:
        """Filter out header rows, time stamps and other schedule artifacts."""

        if name in self._events:
            return True

        lower = name.lower()
        if _LEADING_DIGIT.match(name) or _LEADING_TIME.match(name):
            return False
        if lower.startswith(_NON_EVENT_PREFIXES):
            return False
        if lower in _NON_EVENT_NAMES:
            return False
        return True

    def entries(self) -> List[Tuple[str, EventMetadata]]:
        return [(key, self._events[key]) for _, key in self._sorted_keys]


@lru_cache(maxsize=1)
def default_registry() -> EventRegistry:
    return EventRegistry()


def is_real_event(name: str) -> bool:
    return default_registry().is_real_event(name)
