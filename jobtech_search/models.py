from __future__ import annotations

import logging
import math
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    PUBDATE_DESC = "pubdate-desc"
    PUBDATE_ASC = "pubdate-asc"
    RELEVANCE = "relevance"

    @classmethod
    def recognized(cls, value: Any) -> Optional["SortOrder"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class SourceSelector(str, Enum):
    JOBAD = "jobad"
    JOBSEARCH = "jobsearch"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Any) -> "SourceSelector":
        """Unknown selectors fall back to querying both sources."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown source selector %r, using 'both'", value)
            return cls.BOTH

    @property
    def tags(self) -> List[str]:
        if self is SourceSelector.BOTH:
            return [SourceSelector.JOBAD.value, SourceSelector.JOBSEARCH.value]
        return [self.value]


class SearchFilter(BaseModel):
    """
    Structured search input. Range checks on limit/offset are not done here:
    the query builder clamps them so out-of-range values never get rejected.
    """
    model_config = ConfigDict(frozen=True)

    q: str = ""
    occupation_field: str = ""
    occupation_group: str = ""
    municipality: str = ""
    region: str = ""
    country: str = ""
    employer: str = ""
    remote: bool = False
    published_after: Optional[datetime] = None
    exclude_source: str = ""
    sort: Optional[str] = SortOrder.PUBDATE_DESC.value
    limit: int = 20
    offset: int = 0
    abroad: bool = False
    position: Optional[str] = None  # "latitude,longitude"
    position_radius: Optional[float] = None  # km
    language: str = ""
    sources: SourceSelector = SourceSelector.BOTH

    @field_validator(
        "q", "occupation_field", "occupation_group", "municipality", "region",
        "country", "employer", "exclude_source", "language",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("published_after", "position_radius", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("position", mode="before")
    @classmethod
    def join_position(cls, v: Any) -> Any:
        if isinstance(v, (tuple, list)):
            return ",".join(str(x) for x in v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("sort", mode="before")
    @classmethod
    def sort_value(cls, v: Any) -> Any:
        return v.value if isinstance(v, SortOrder) else v

    @field_validator("sources", mode="before")
    @classmethod
    def parse_sources(cls, v: Any) -> SourceSelector:
        return SourceSelector.parse(v)

    def has_radius(self) -> bool:
        r = self.position_radius
        return r is not None and not math.isnan(r) and r != 0


def _scalar_to_str(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class Employer(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    organization_number: Optional[str] = None

    @field_validator("name", "website", "logo_url", "organization_number", mode="before")
    @classmethod
    def numbers_to_str(cls, v: Any) -> Any:
        return _scalar_to_str(v)


class WorkplaceAddress(BaseModel):
    model_config = ConfigDict(extra="allow")

    municipality: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    coordinates: Optional[List[Any]] = None
    street_address: Optional[str] = None
    postcode: Optional[str] = None
    city: Optional[str] = None

    @field_validator(
        "municipality", "region", "country", "street_address", "postcode", "city",
        mode="before",
    )
    @classmethod
    def numbers_to_str(cls, v: Any) -> Any:
        return _scalar_to_str(v)


class ScopeOfWork(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None


class JobHit(BaseModel):
    """
    Canonical job posting. Fields the upstream sends that are not modelled
    here (description, must_have, application_details, ...) are kept as extras.
    """
    model_config = ConfigDict(extra="allow")

    id: str = ""
    headline: str = ""
    employer: Employer = Field(default_factory=Employer)
    workplace_address: WorkplaceAddress = Field(default_factory=WorkplaceAddress)
    publication_date: Optional[str] = None
    application_deadline: Optional[str] = None
    remote: bool = False
    scope_of_work: Optional[ScopeOfWork] = None
    source: str = ""
    logotype_url: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("headline", mode="before")
    @classmethod
    def headline_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("publication_date", "application_deadline", mode="before")
    @classmethod
    def dates_to_str(cls, v: Any) -> Any:
        return _scalar_to_str(v)

    @field_validator("remote", mode="before")
    @classmethod
    def remote_to_bool(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("scope_of_work", mode="before")
    @classmethod
    def widen_scope(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return {"min": int(v), "max": int(v)}
        return v


class SourceResult(BaseModel):
    """What one endpoint fetcher hands back: never raised, always inspected."""
    hits: List[JobHit] = Field(default_factory=list)
    total: int = 0
    source: str
    query: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SearchResult(BaseModel):
    hits: List[JobHit] = Field(default_factory=list)
    total: int = 0
    sources: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "SearchResult":
        return cls(hits=[], total=0, sources=[], error=error)


class TypeaheadSuggestion(BaseModel):
    value: str
    occurrences: int = 1


class SuggestionBatch(BaseModel):
    source: str
    suggestions: List[TypeaheadSuggestion] = Field(default_factory=list)
    error: Optional[str] = None


class LookupFailure(BaseModel):
    error: str
    status: Optional[int] = None
    source: Optional[str] = None
