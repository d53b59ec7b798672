# jobtech_search/engine.py
from __future__ import annotations

import asyncio
import logging
import math
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import requests

from jobtech_search.config import Config
from jobtech_search.models import (
    JobHit,
    LookupFailure,
    SearchFilter,
    SearchResult,
    SourceResult,
    SourceSelector,
    SuggestionBatch,
    TypeaheadSuggestion,
)
from jobtech_search.query import clamp_limit, clamp_offset
from jobtech_search.sources import JobAdSource, JobSearchSource, JobSource
from jobtech_search.utils import parse_datetime, safe_str

logger = logging.getLogger(__name__)

# Registry of known upstreams, in fallback/tie-break order.
SOURCE_TYPES = {
    JobAdSource.tag: JobAdSource,
    JobSearchSource.tag: JobSearchSource,
}

SOURCE_LABELS = {tag: cls.label for tag, cls in SOURCE_TYPES.items()}


def build_sources(
    config: Config,
    session: Optional[requests.Session] = None,
) -> Dict[str, JobSource]:
    """
    Without an explicit session every source gets its own, so concurrent
    fetches never share a Session between worker threads.
    """
    out: Dict[str, JobSource] = {}
    for tag, cls in SOURCE_TYPES.items():
        source_cfg = getattr(config.sources, tag)
        out[tag] = cls(
            source_cfg,
            session=session or _default_session(config),
            limits=config.limits,
            timeout=config.http.timeout_seconds,
        )
    return out


# ----------------------------
# Merging
# ----------------------------

def dedupe_hits(hits: Iterable[JobHit]) -> List[JobHit]:
    """
    Keep the first hit per id. Concatenation order decides the winner,
    so the JobAd copy survives a collision with JobSearch.
    """
    kept: Dict[str, JobHit] = {}
    out: List[JobHit] = []
    for hit in hits:
        prev = kept.get(hit.id)
        if prev is not None:
            if prev.source != hit.source and prev.headline != hit.headline:
                # ids are assumed unique across upstreams; this may be a real second posting
                logger.info(
                    "[DEDUPE] dropped %s hit %s (%r), kept %s copy (%r)",
                    hit.source, hit.id, hit.headline, prev.source, prev.headline,
                )
            continue
        kept[hit.id] = hit
        out.append(hit)
    return out


def _compare_pubdate(a: JobHit, b: JobHit) -> int:
    da = parse_datetime(a.publication_date)
    db = parse_datetime(b.publication_date)
    if da is None or db is None:
        return 0
    return (db > da) - (db < da)


def sort_by_pubdate(hits: List[JobHit]) -> List[JobHit]:
    """Newest first; a pair where either date is missing compares equal."""
    return sorted(hits, key=cmp_to_key(_compare_pubdate))


def _source_label(tag: str) -> str:
    return SOURCE_LABELS.get(tag, tag)


def from_single_source(result: SourceResult) -> SearchResult:
    return SearchResult(
        hits=list(result.hits),
        total=result.total,
        sources=[result.source] if result.ok else [],
        error=result.error,
    )


def combine_search_results(results: Sequence[SourceResult], limit: int) -> SearchResult:
    """
    Merge fetcher outputs: concatenate in order, dedupe by id, sort newest first,
    truncate to limit. The total is the largest upstream total, an upper-bound
    estimate since the deduplicated total is unknown.
    """
    if not results:
        return SearchResult.failure("No job source was queried")
    if len(results) == 1:
        return from_single_source(results[0])

    errors = [f"{_source_label(r.source)}: {r.error}" for r in results if not r.ok]

    all_hits: List[JobHit] = []
    for r in results:
        all_hits.extend(r.hits)

    hits = sort_by_pubdate(dedupe_hits(all_hits))[:limit]

    return SearchResult(
        hits=hits,
        total=max(r.total or 0 for r in results),
        sources=[r.source for r in results if r.ok],
        error="; ".join(errors) if errors else None,
    )


def merge_suggestions(batches: Iterable[SuggestionBatch], size: int = 10) -> List[TypeaheadSuggestion]:
    totals: Dict[str, int] = {}
    for batch in batches:
        for s in batch.suggestions:
            totals[s.value] = totals.get(s.value, 0) + (s.occurrences or 1)

    # sorted() is stable, ties keep first-seen order
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [TypeaheadSuggestion(value=v, occurrences=n) for v, n in ranked[:size]]


# ----------------------------
# Client
# ----------------------------

def _default_session(config: Config) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": config.http.user_agent})
    return session


class JobSearchClient:
    """
    Aggregating client over the JobAd and JobSearch APIs.

    Fetchers are blocking requests calls; the async methods dispatch them with
    asyncio.to_thread and join with asyncio.gather, so a dual-source search has
    both requests in flight at once and always waits for both.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[requests.Session] = None,
        sources: Optional[Mapping[str, JobSource]] = None,
    ):
        self.config = config or Config()
        # an injected session is shared by every source
        self.session = session or _default_session(self.config)
        if sources is not None:
            self.sources = dict(sources)
        else:
            self.sources = build_sources(self.config, session)

    def __enter__(self) -> "JobSearchClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        sessions = [self.session] + [s.session for s in self.sources.values()]
        closed = set()
        for session in sessions:
            if id(session) not in closed:
                closed.add(id(session))
                session.close()

    def _active(self, tags: Iterable[str]) -> List[JobSource]:
        return [
            self.sources[t]
            for t in tags
            if t in self.sources and self.sources[t].config.enabled
        ]

    # ----------------------------
    # Search
    # ----------------------------

    async def search_all_jobs(self, filt: SearchFilter) -> SearchResult:
        selector = filt.sources
        active = self._active(selector.tags)
        if not active:
            logger.error("No enabled job source for selection %r", selector.value)
            return SearchResult.failure(f"No job source is enabled for '{selector.value}'")

        limits = self.config.limits
        limit = clamp_limit(filt.limit, limits)
        offset = clamp_offset(filt.offset, limits)
        per_source = math.ceil(limit / 2) if len(active) > 1 else limit

        source_filter = filt.model_copy(update={"limit": per_source, "offset": offset})
        results = await asyncio.gather(
            *(asyncio.to_thread(s.search, source_filter) for s in active)
        )

        combined = combine_search_results(list(results), limit)
        if combined.error:
            logger.warning("Search completed with errors: %s", combined.error)
        return combined

    async def search_single_source(self, filt: SearchFilter, source_tag: str) -> SourceResult:
        tag = safe_str(source_tag).lower()
        source = self.sources.get(tag)
        if source is None:
            raise ValueError(f"Unknown source: {source_tag}")
        return await asyncio.to_thread(source.search, filt)

    # ----------------------------
    # Typeahead
    # ----------------------------

    async def get_suggestions(
        self,
        q: str,
        sources: Union[str, SourceSelector] = SourceSelector.BOTH,
    ) -> List[TypeaheadSuggestion]:
        if not safe_str(q):
            return []

        active = self._active(SourceSelector.parse(sources).tags)
        batches = await asyncio.gather(*(asyncio.to_thread(s.complete, q) for s in active))

        for batch in batches:
            if batch.error:
                logger.warning("[TYPEAHEAD] %s skipped: %s", _source_label(batch.source), batch.error)

        return merge_suggestions(batches, self.config.limits.typeahead_size)

    # ----------------------------
    # Single job / logos
    # ----------------------------

    async def get_job_by_id(self, job_id: Any) -> Union[JobHit, LookupFailure]:
        """JobAd first, then JobSearch. Returns the last failure if none succeeds."""
        job_id = str(job_id).strip() if job_id else ""
        if not job_id:
            return LookupFailure(error="Job ID is required")

        failure: Optional[LookupFailure] = None
        for source in self._active(SOURCE_TYPES):
            result = await asyncio.to_thread(source.get_job, job_id)
            if isinstance(result, JobHit):
                return result
            logger.info("[LOOKUP] %s: %s", source.tag, result.error)
            failure = result

        return failure or LookupFailure(error="No job source is enabled")

    def get_logo_url(self, job_id: Any, source_tag: Optional[str] = None) -> Optional[str]:
        source = self.sources.get(safe_str(source_tag).lower()) or self.sources.get(JobAdSource.tag)
        if source is None:
            return None
        return source.logo_url(job_id)

    async def is_valid_logo(self, image_url: Optional[str]) -> bool:
        """The logo endpoint answers a 1x1 placeholder when there is no logo."""
        if not image_url:
            return False

        try:
            response = await asyncio.to_thread(
                self.session.head,
                image_url,
                timeout=self.config.http.timeout_seconds,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            logger.warning("[LOGO] check failed for %s → %s", image_url, e)
            return False

        content_type = response.headers.get("content-type") or ""
        if not response.ok or not content_type.startswith("image/"):
            return False

        length = response.headers.get("content-length")
        if not length:
            return True
        try:
            return int(length) > 100
        except ValueError:
            return False
