# jobtech_search/presets.py
"""
Canned student-oriented searches. Each builds a free-text query from a term
list and runs it through JobSearchClient.search_all_jobs.

Missing required input gives back a SearchResult carrying the error; no
request is made in that case.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from jobtech_search.catalog import (
    EXCLUDE_SWEDEN_COUNTRY_ID,
    SWEDISH_LANGUAGE_ID,
    find_location,
    find_occupation_field,
)
from jobtech_search.engine import JobSearchClient
from jobtech_search.models import SearchFilter, SearchResult, SortOrder, SourceSelector

Sources = Union[str, SourceSelector]

PART_TIME_TERMS = 'deltid "part time" "part-time"'
ENTRY_LEVEL_TERMS = 'junior trainee "entry level" "entry-level" nybörjare "ingen erfarenhet"'
INTERNSHIP_QUERY_TERMS = 'praktik internship "work placement" "summer job" "sommerjobb"'

DEGREE_ABBREVIATIONS = {
    "BSc": "Bachelor of Science",
    "BA": "Bachelor of Arts",
    "MSc": "Master of Science",
    "MA": "Master of Arts",
    "PhD": "PhD Doctorate",
    "MBA": "Master of Business Administration",
}

GRADUATE_TERMS = [
    "recent graduate", "nyexaminerad", "new graduate", "graduate program",
    "graduate scheme", "graduate position", "junior", "entry-level",
    "entry level", "trainee", "graduate trainee",
]

SEASONAL_TERMS = [
    "summer job", "sommarjobb", "seasonal", "säsong", "sommar",
    "summer work", "summer internship", "summer position",
]

FLEXIBLE_TERMS = [
    "flexible hours", "flexible working", "flexibla tider", "flex time",
    "flextime", "flextid", "part time", "part-time", "deltid",
    "evening work", "weekend work", "kvällsarbete", "helgarbete",
]

INTERNSHIP_TERMS = [
    "internship", "praktik", "practical training", "praktikplats", "trainee",
    "traineeprogram", "work placement", "thesis project", "examensarbete",
    "degree project",
]

PAID_INTERNSHIP_TERMS = [
    "paid internship", "paid trainee", "betald praktik", "stipend",
    "stipendium", "salary", "lön",
]

NO_EXPERIENCE_TERMS = [
    "no experience", "ingen erfarenhet", "no prior experience",
    "ingen tidigare erfarenhet", "entry level", "entry-level", "nybörjare",
    "junior", "graduate",
]

CAMPUS_TERMS = [
    "campus", "on campus", "university", "student job", "student assistant",
    "teaching assistant", "research assistant",
]


def _with_field(terms: Sequence[str], field: str) -> str:
    q = " ".join(terms)
    return f"{q} {field}" if field else q


async def search_student_jobs(
    client: JobSearchClient,
    keyword: str = "",
    location: str = "",
    field: str = "",
    part_time: bool = False,
    entry_level: bool = False,
    remote: bool = False,
    internship: bool = False,
    max_results: int = 50,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    query = keyword or "student"
    if part_time:
        query += f" {PART_TIME_TERMS}"
    if entry_level:
        query += f" {ENTRY_LEVEL_TERMS}"
    if internship:
        query += f" {INTERNSHIP_QUERY_TERMS}"

    return await client.search_all_jobs(SearchFilter(
        q=query.strip(),
        municipality=location,
        occupation_field=field,
        remote=remote,
        limit=max_results,
        sort=SortOrder.RELEVANCE,
        sources=sources,
    ))


async def search_by_degree(
    client: JobSearchClient,
    degree: str,
    location: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    if not degree:
        return SearchResult.failure("Degree is required")

    expanded = DEGREE_ABBREVIATIONS.get(degree, degree)
    terms = [expanded, degree, "utbildning", "degree", "examen"]

    return await client.search_all_jobs(SearchFilter(
        q=" ".join(terms),
        municipality=location,
        limit=50,
        sources=sources,
    ))


async def find_recent_graduate_jobs(
    client: JobSearchClient,
    field: str = "",
    location: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    return await client.search_all_jobs(SearchFilter(
        q=_with_field(GRADUATE_TERMS, field),
        municipality=location,
        occupation_field=field,
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def find_seasonal_jobs(
    client: JobSearchClient,
    location: str = "",
    field: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    return await client.search_all_jobs(SearchFilter(
        q=_with_field(SEASONAL_TERMS, field),
        municipality=location,
        occupation_field=field,
        limit=100,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def find_flexible_hour_jobs(
    client: JobSearchClient,
    location: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    return await client.search_all_jobs(SearchFilter(
        q=" ".join(FLEXIBLE_TERMS),
        municipality=location,
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def find_internships(
    client: JobSearchClient,
    field: str = "",
    location: str = "",
    paid: bool = False,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    terms = list(INTERNSHIP_TERMS)
    if paid:
        terms.extend(PAID_INTERNSHIP_TERMS)

    return await client.search_all_jobs(SearchFilter(
        q=_with_field(terms, field),
        municipality=location,
        occupation_field=field,
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def search_by_skills(
    client: JobSearchClient,
    skills: Sequence[str],
    location: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    skills = [s.strip() for s in skills or [] if s and s.strip()]
    if not skills:
        return SearchResult.failure("At least one skill is required")

    return await client.search_all_jobs(SearchFilter(
        q=" ".join(skills),
        municipality=location,
        limit=50,
        sort=SortOrder.RELEVANCE,
        sources=sources,
    ))


async def find_no_experience_jobs(
    client: JobSearchClient,
    field: str = "",
    location: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    return await client.search_all_jobs(SearchFilter(
        q=_with_field(NO_EXPERIENCE_TERMS, field),
        municipality=location,
        occupation_field=field,
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def comprehensive_student_search(
    client: JobSearchClient,
    field: str = "",
    location: str = "",
    keywords: Optional[List[str]] = None,
    flexible: bool = False,
    remote: bool = False,
    no_experience: bool = True,
    max_results: int = 100,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    terms = ["student", "part-time", "deltid", *(keywords or [])]
    if no_experience:
        terms += ["no experience", "ingen erfarenhet", "junior", "entry-level"]
    if flexible:
        terms += ["flexible hours", "flexibla tider", "kvällsarbete", "helgarbete"]

    return await client.search_all_jobs(SearchFilter(
        q=" ".join(terms),
        municipality=location,
        occupation_field=field,
        remote=remote,
        limit=max_results,
        sort=SortOrder.RELEVANCE,
        sources=sources,
    ))


async def find_campus_jobs(
    client: JobSearchClient,
    university: str,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    if not university:
        return SearchResult.failure("University name is required")

    return await client.search_all_jobs(SearchFilter(
        q=f"{university} {' '.join(CAMPUS_TERMS)}",
        limit=30,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def advanced_student_search(
    client: JobSearchClient,
    field: str = "Data/IT",
    location: str = "Stockholm",
    keywords: str = "",
    remote: bool = False,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    """Field and location are catalog names, mapped to concept id / municipality code."""
    occupation = find_occupation_field(field)
    loc = find_location(location)

    return await client.search_all_jobs(SearchFilter(
        q=keywords or "student",
        municipality=loc.code if loc else "",
        occupation_field=(occupation.concept_id or "") if occupation else "",
        remote=remote,
        sort=SortOrder.PUBDATE_DESC,
        limit=20,
        sources=sources,
    ))


async def find_swedish_jobs_abroad(
    client: JobSearchClient,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    return await client.search_all_jobs(SearchFilter(
        language=SWEDISH_LANGUAGE_ID,
        country=EXCLUDE_SWEDEN_COUNTRY_ID,
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def find_public_sector_jobs(
    client: JobSearchClient,
    keyword: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    # Swedish government employers have organisation numbers starting with 2
    return await client.search_all_jobs(SearchFilter(
        employer="2",
        q=keyword,
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def perform_negative_search(
    client: JobSearchClient,
    include: str,
    exclude: str = "",
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    if not include:
        return SearchResult.failure("Include term is required")
    if not exclude:
        return await client.search_all_jobs(SearchFilter(q=include, sources=sources))

    return await client.search_all_jobs(SearchFilter(
        q=f"{include} -{exclude}",
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def wildcard_search(
    client: JobSearchClient,
    prefix: str,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    if not prefix:
        return SearchResult.failure("Prefix is required")

    return await client.search_all_jobs(SearchFilter(
        q=f"{prefix}*",
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))


async def exact_phrase_search(
    client: JobSearchClient,
    phrase: str,
    sources: Sources = SourceSelector.BOTH,
) -> SearchResult:
    if not phrase:
        return SearchResult.failure("Phrase is required")

    return await client.search_all_jobs(SearchFilter(
        q=f'"{phrase}"',
        limit=50,
        sort=SortOrder.PUBDATE_DESC,
        sources=sources,
    ))
