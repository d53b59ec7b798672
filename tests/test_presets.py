import asyncio

import pytest

from jobtech_search import presets
from jobtech_search.catalog import catalog_payload, find_location, find_occupation_field, find_search_strategy
from jobtech_search.models import SearchResult


class RecordingClient:
    """Captures the filters presets hand to search_all_jobs."""

    def __init__(self):
        self.filters = []

    async def search_all_jobs(self, filt):
        self.filters.append(filt)
        return SearchResult(sources=["jobad", "jobsearch"])


def _run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize(
    "call, message",
    [
        (lambda c: presets.search_by_degree(c, ""), "Degree is required"),
        (lambda c: presets.search_by_skills(c, []), "At least one skill is required"),
        (lambda c: presets.find_campus_jobs(c, ""), "University name is required"),
        (lambda c: presets.perform_negative_search(c, ""), "Include term is required"),
        (lambda c: presets.wildcard_search(c, ""), "Prefix is required"),
        (lambda c: presets.exact_phrase_search(c, ""), "Phrase is required"),
    ],
)
def test_missing_input_returns_error_without_searching(call, message):
    client = RecordingClient()
    result = _run(call(client))
    assert result.error == message
    assert result.sources == []
    assert client.filters == []


def test_student_search_adds_terms():
    client = RecordingClient()
    _run(presets.search_student_jobs(client, part_time=True, internship=True, location="0180"))

    filt = client.filters[0]
    assert filt.q.startswith("student deltid")
    assert "praktik" in filt.q
    assert filt.municipality == "0180"
    assert filt.sort == "relevance"
    assert filt.limit == 50


def test_degree_abbreviation_expanded():
    client = RecordingClient()
    _run(presets.search_by_degree(client, "MSc", sources="jobsearch"))
    filt = client.filters[0]
    assert filt.q == "Master of Science MSc utbildning degree examen"
    assert filt.sources.value == "jobsearch"


def test_paid_internships_include_paid_terms():
    client = RecordingClient()
    _run(presets.find_internships(client, field="Data", paid=True))
    filt = client.filters[0]
    assert "betald praktik" in filt.q
    assert filt.q.endswith(" Data")
    assert filt.occupation_field == "Data"


def test_query_operators():
    client = RecordingClient()
    _run(presets.perform_negative_search(client, "python", "senior"))
    _run(presets.wildcard_search(client, "utveckl"))
    _run(presets.exact_phrase_search(client, "data engineer"))
    assert [f.q for f in client.filters] == ["python -senior", "utveckl*", '"data engineer"']


def test_advanced_search_maps_catalog_names():
    client = RecordingClient()
    _run(presets.advanced_student_search(client, field="Data/IT", location="Malmö"))
    filt = client.filters[0]
    assert filt.municipality == "1280"
    assert filt.occupation_field == "apaJ_2ja_LuF"
    assert filt.q == "student"


def test_swedish_jobs_abroad_excludes_sweden():
    client = RecordingClient()
    _run(presets.find_swedish_jobs_abroad(client))
    filt = client.filters[0]
    assert filt.country == "-i46j_HmG_v64"
    assert filt.language == "zSLA_vw2_FXN"


def test_catalog_lookup_is_case_insensitive():
    assert find_location("stockholm").code == "0180"
    assert find_occupation_field("data/it").concept_id == "apaJ_2ja_LuF"
    assert find_location("Atlantis") is None
    assert find_search_strategy("första jobbet").url.endswith("q=junior%20trainee%20praktik")


def test_catalog_payload_lists_strategies():
    payload = catalog_payload("strategies")

    assert list(payload) == ["strategies"]
    assert payload["strategies"][0] == {
        "name": "Deltidsjobb",
        "url": "https://links.api.jobtechdev.se/joblinks?q=deltid%20student",
        "description": "Hitta deltidsjobb som passar studenter",
    }
    assert set(catalog_payload()) == {"locations", "occupation-fields", "strategies"}
