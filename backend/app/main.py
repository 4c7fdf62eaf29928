from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from slc_core import DataStore, EnrichedEvent, EnrichedPerson, EventRegistry, ResendMailer, ScheduleLookup
from slc_core.errors import NotFoundError, SLCError
from slc_core.metadata import default_registry

UNEXPECTED_ERROR = "An unexpected error occurred."

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schedule is loaded once, before the first request.
    get_store().load_schedule()
    yield


app = FastAPI(title="SLC Event Lookup API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class EventModel(BaseModel):
    competition: str
    type: str = ""
    date: str = ""
    check_in_time: str = Field(default="", alias="checkInTime")
    start_time: str = Field(default="", alias="startTime")
    end_time: str = Field(default="", alias="endTime")
    category: str = ""
    rubric_url: str = Field(default="", alias="rubricUrl")
    bizybear_url: Optional[str] = Field(default=None, alias="bizybearUrl")
    is_objective_test: bool = Field(default=False, alias="isObjectiveTest")
    is_team_event: bool = Field(default=False, alias="isTeamEvent")
    competitor_count: int = Field(default=0, alias="competitorCount")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_event(cls, event: EnrichedEvent) -> "EventModel":
        return cls(**event.to_dict())

    def to_event(self) -> EnrichedEvent:
        return EnrichedEvent(
            competition=self.competition,
            type=self.type,
            date=self.date,
            check_in_time=self.check_in_time,
            start_time=self.start_time,
            end_time=self.end_time,
            category=self.category,
            rubric_url=self.rubric_url,
            bizybear_url=self.bizybear_url,
            is_objective_test=self.is_objective_test,
            is_team_event=self.is_team_event,
            competitor_count=self.competitor_count,
        )


class PersonModel(BaseModel):
    name: str
    school: str = ""
    events: List[EventModel] = Field(default_factory=list)

    @classmethod
    def from_person(cls, person: EnrichedPerson) -> "PersonModel":
        return cls(
            name=person.name,
            school=person.school,
            events=[EventModel.from_event(event) for event in person.events],
        )

    def to_person(self) -> EnrichedPerson:
        return EnrichedPerson(
            name=self.name,
            school=self.school,
            events=[event.to_event() for event in self.events],
        )


class LookupRequest(BaseModel):
    # Any: non-string names are rejected by validate_query with a 400.
    name: Any = None


class LookupResponse(BaseModel):
    results: List[PersonModel]
    total_matches: int = Field(alias="totalMatches")

    model_config = ConfigDict(populate_by_name=True)


class EmailRequest(BaseModel):
    email: Optional[str] = None
    person: Optional[PersonModel] = None


class EmailResponse(BaseModel):
    message: str


class ReferenceEventModel(BaseModel):
    name: str
    rubric_url: str = Field(alias="rubricUrl")
    bizybear_url: Optional[str] = Field(default=None, alias="bizybearUrl")
    is_objective_test: bool = Field(alias="isObjectiveTest")

    model_config = ConfigDict(populate_by_name=True)


class ReferenceResponse(BaseModel):
    events: List[ReferenceEventModel]


@lru_cache(maxsize=1)
def get_store() -> DataStore:
    return DataStore()


def get_registry() -> EventRegistry:
    return default_registry()


def get_lookup(
    store: DataStore = Depends(get_store),
    registry: EventRegistry = Depends(get_registry),
) -> ScheduleLookup:
    return ScheduleLookup(store.load_schedule(), registry)


def get_mailer() -> ResendMailer:
    return ResendMailer()


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(400, "Invalid request body.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/reference", response_model=ReferenceResponse)
def reference(registry: EventRegistry = Depends(get_registry)):
    return ReferenceResponse(
        events=[
            ReferenceEventModel(
                name=name,
                rubricUrl=meta.rubric_url,
                bizybearUrl=meta.bizybear_url,
                isObjectiveTest=meta.is_objective_test,
            )
            for name, meta in registry.entries()
        ]
    )


@app.post("/lookup", response_model=LookupResponse)
def lookup(payload: LookupRequest, service: ScheduleLookup = Depends(get_lookup)):
    try:
        found = service.lookup(payload.name)
    except NotFoundError as exc:
        return error_response(exc.status_code, str(exc), results=[])
    except SLCError as exc:
        return error_response(exc.status_code, str(exc))
    except Exception:
        logger.exception("Lookup failed")
        return error_response(500, UNEXPECTED_ERROR)

    return LookupResponse(
        results=[PersonModel.from_person(person) for person in found.results],
        totalMatches=found.total_matches,
    )


@app.post("/email", response_model=EmailResponse)
def email(payload: EmailRequest, mailer: ResendMailer = Depends(get_mailer)):
    person = payload.person.to_person() if payload.person else None
    try:
        mailer.send_schedule(payload.email, person)
    except SLCError as exc:
        return error_response(exc.status_code, str(exc))
    except Exception:
        logger.exception("Email API error")
        return error_response(500, UNEXPECTED_ERROR)

    return EmailResponse(message=f"Schedule sent to {payload.email}!")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
