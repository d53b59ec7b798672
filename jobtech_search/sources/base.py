# jobtech_search/sources/base.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

import requests
from pydantic import BaseModel, Field, field_validator

from jobtech_search.config import Limits, SourceConfig
from jobtech_search.models import (
    JobHit,
    LookupFailure,
    SearchFilter,
    SourceResult,
    SuggestionBatch,
    TypeaheadSuggestion,
)
from jobtech_search.query import build_search_params, build_url
from jobtech_search.utils import error_message_for_status, safe_str

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json"}


class SearchPage(BaseModel):
    """
    Search payload shared by both upstreams. total arrives as a number or as
    {"value": n} / {"min": n} depending on the API; anything else reads as 0.
    """
    hits: List[Any] = Field(default_factory=list)
    total: Any = 0

    @field_validator("hits", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def total_count(self) -> int:
        return read_total(self.total)


def read_total(value: Any) -> int:
    if isinstance(value, dict):
        value = value.get("value", value.get("min"))
    if isinstance(value, bool):
        return 0
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


class TypeaheadResponse(BaseModel):
    typeahead: List[Any] = Field(default_factory=list)


def normalize_address(address: Any) -> Dict[str, Any]:
    """One upstream sends a list of addresses, the other a single object."""
    if isinstance(address, list):
        address = address[0] if address else None
    if not isinstance(address, dict):
        return {}
    return dict(address)


def _occurrences(value: Any) -> int:
    try:
        return int(value) or 1
    except (TypeError, ValueError):
        return 1


class JobSource:
    """
    One upstream JobTech endpoint. Every public method returns a value;
    HTTP and decoding failures end up in the result's error field.
    """

    tag: str = ""
    label: str = ""
    include_geo: bool = True

    def __init__(
        self,
        config: SourceConfig,
        session: Optional[requests.Session] = None,
        limits: Optional[Limits] = None,
        timeout: Optional[float] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.limits = limits or Limits()
        self.timeout = timeout

    # ----------------------------
    # Normalization
    # ----------------------------

    def parse_search_payload(self, data: Any) -> Tuple[List[JobHit], int]:
        """
        Turn the decoded response body into canonical hits and a total.
        A record that does not normalize is skipped; the rest of the page is kept.
        """
        payload = SearchPage.model_validate(data)

        hits: List[JobHit] = []
        for raw in payload.hits:
            try:
                hits.append(self.normalize_hit(raw))
            except ValueError as e:
                job_id = raw.get("id") if isinstance(raw, dict) else None
                logger.warning("[%s] skipping hit %s → %s", self.tag.upper(), job_id, e)

        return hits, payload.total_count

    def normalize_hit(self, raw: Any) -> JobHit:
        if not isinstance(raw, dict):
            raise ValueError(f"{self.label}: expected a job object, got {type(raw).__name__}")

        data = dict(raw)
        data["id"] = raw.get("id") or ""
        data["headline"] = raw.get("headline") or raw.get("title") or ""

        employer = raw.get("employer")
        if not isinstance(employer, dict):
            employer = {"name": safe_str(raw.get("employer_name")) or None}
        data["employer"] = employer

        address = raw.get("workplace_address") or raw.get("workplace_addresses")
        data["workplace_address"] = normalize_address(address)
        data.pop("workplace_addresses", None)

        data["source"] = self.tag
        return JobHit.model_validate(data)

    # ----------------------------
    # HTTP
    # ----------------------------

    def _get(self, url: str) -> requests.Response:
        logger.debug("[%s] GET %s", self.tag.upper(), url)
        return self.session.get(url, headers=JSON_HEADERS, timeout=self.timeout)

    def _path(self, template: str, job_id: str) -> str:
        return template.format(id=quote(str(job_id), safe=""))

    def search(self, filt: SearchFilter) -> SourceResult:
        params = build_search_params(filt, self.limits, include_geo=self.include_geo)
        url = build_url(self.config.base_url, self.config.search_path, params)

        try:
            response = self._get(url)
        except requests.RequestException as e:
            logger.warning("[%s] request failed → %s", self.tag.upper(), e)
            return SourceResult(source=self.tag, query=url, error=str(e))

        if not response.ok:
            logger.warning("[%s] HTTP error %s", self.tag.upper(), response.status_code)
            return SourceResult(
                source=self.tag,
                query=url,
                error=error_message_for_status(response.status_code),
            )

        try:
            hits, total = self.parse_search_payload(response.json())
        except ValueError as e:
            logger.warning("[%s] malformed response → %s", self.tag.upper(), e)
            return SourceResult(source=self.tag, query=url, error=str(e))

        return SourceResult(hits=hits, total=total, source=self.tag, query=url)

    def get_job(self, job_id: str) -> Union[JobHit, LookupFailure]:
        url = build_url(self.config.base_url, self._path(self.config.detail_path, job_id))

        try:
            response = self._get(url)
        except requests.RequestException as e:
            return LookupFailure(error=f"{self.tag} API error: {e}", source=self.tag)

        if not response.ok:
            return LookupFailure(
                error=error_message_for_status(response.status_code, str(job_id)),
                status=response.status_code,
                source=self.tag,
            )

        try:
            data = response.json()
            if not data:
                return LookupFailure(error="Empty response from API", source=self.tag)
            return self.normalize_hit(data)
        except ValueError as e:
            return LookupFailure(error=f"{self.tag} API error: {e}", source=self.tag)

    def complete(self, q: str) -> SuggestionBatch:
        url = build_url(self.config.base_url, self.config.typeahead_path, [("q", q.strip())])

        try:
            response = self._get(url)
            if not response.ok:
                logger.warning("[%s] typeahead HTTP error %s", self.tag.upper(), response.status_code)
                return SuggestionBatch(
                    source=self.tag, error=error_message_for_status(response.status_code)
                )
            payload = TypeaheadResponse.model_validate(response.json() or {})
        except (requests.RequestException, ValueError) as e:
            logger.warning("[%s] typeahead failed → %s", self.tag.upper(), e)
            return SuggestionBatch(source=self.tag, error=str(e))

        suggestions: List[TypeaheadSuggestion] = []
        for item in payload.typeahead:
            if not isinstance(item, dict):
                continue
            value = safe_str(item.get("value") or item.get("term"))
            if not value:
                continue
            suggestions.append(
                TypeaheadSuggestion(value=value, occurrences=_occurrences(item.get("occurrences")))
            )

        return SuggestionBatch(source=self.tag, suggestions=suggestions)

    def logo_url(self, job_id: Any) -> Optional[str]:
        if not job_id:
            return None
        return build_url(self.config.base_url, self._path(self.config.logo_path, job_id))
