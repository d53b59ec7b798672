from datetime import datetime, timedelta, timezone

from jobtech_search.config import Limits
from jobtech_search.models import SearchFilter
from jobtech_search.query import (
    build_query_string,
    build_search_params,
    build_url,
    parse_search_query,
)


def _params(filt, **kw):
    return dict(build_search_params(filt, **kw))


def test_limit_is_clamped():
    assert _params(SearchFilter(limit=500))["limit"] == "100"
    assert _params(SearchFilter(limit=0))["limit"] == "1"
    assert _params(SearchFilter(limit=-7))["limit"] == "1"
    assert _params(SearchFilter(limit=42))["limit"] == "42"


def test_offset_is_clamped():
    assert _params(SearchFilter(offset=5000))["offset"] == "2000"
    assert _params(SearchFilter(offset=-1))["offset"] == "0"


def test_clamping_follows_configured_limits():
    limits = Limits(max_limit=50, max_offset=100)
    params = _params(SearchFilter(limit=80, offset=300), limits=limits)
    assert params["limit"] == "50"
    assert params["offset"] == "100"


def test_empty_strings_are_omitted_and_values_trimmed():
    params = _params(SearchFilter(q="  utvecklare  ", municipality="   ", employer=""))
    assert params["q"] == "utvecklare"
    assert "municipality" not in params
    assert "employer" not in params


def test_booleans_only_sent_when_true():
    assert "remote" not in _params(SearchFilter())
    assert "abroad" not in _params(SearchFilter())
    params = _params(SearchFilter(remote=True, abroad=True))
    assert params["remote"] == "true"
    assert params["abroad"] == "true"


def test_unrecognized_sort_is_dropped():
    assert _params(SearchFilter(sort="relevance"))["sort"] == "relevance"
    assert "sort" not in _params(SearchFilter(sort="by-salary"))
    assert "sort" not in _params(SearchFilter(sort=None))


def test_radius_requires_position():
    assert "position.radius" not in _params(SearchFilter(position_radius=10))

    params = _params(SearchFilter(position="59.33,18.06", position_radius=10))
    assert params["position"] == "59.33,18.06"
    assert params["position.radius"] == "10"

    params = _params(SearchFilter(position=(59.33, 18.06), position_radius=float("nan")))
    assert params["position"] == "59.33,18.06"
    assert "position.radius" not in params


def test_geo_filters_skipped_when_source_does_not_take_them():
    filt = SearchFilter(q="lager", municipality="0180", region="01", country="199", position="1,2")
    params = _params(filt, include_geo=False)
    assert params["q"] == "lager"
    for name in ("municipality", "region", "country", "position"):
        assert name not in params


def test_published_after_formatted_in_utc():
    cet = timezone(timedelta(hours=1))
    params = _params(SearchFilter(published_after=datetime(2025, 1, 1, 1, 0, tzinfo=cet)))
    assert params["published-after"] == "2025-01-01T00:00:00Z"

    params = _params(SearchFilter(published_after="2025-03-04T05:06:07"))
    assert params["published-after"] == "2025-03-04T05:06:07Z"


def test_round_trip_recovers_clamped_values():
    filt = SearchFilter(q="student deltid", limit=250, offset=9999, sort="pubdate-asc")
    parsed = parse_search_query(build_query_string(filt))
    assert parsed == {"limit": 100, "offset": 2000, "sort": "pubdate-asc"}

    rebuilt = SearchFilter(limit=parsed["limit"], offset=parsed["offset"], sort=parsed["sort"])
    assert parse_search_query(build_query_string(rebuilt)) == parsed


def test_build_url_encodes_params():
    url = build_url("https://links.api.jobtechdev.se/", "/joblinks", [("q", "data ingenjör")])
    assert url.startswith("https://links.api.jobtechdev.se/joblinks?q=")
    assert parse_search_query(url)["sort"] is None
    assert "data" in url and " " not in url
