# jobtech_search/query.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode

import requests

from jobtech_search.config import Limits
from jobtech_search.models import SearchFilter, SortOrder
from jobtech_search.utils import clamp, format_published_after, safe_str

Params = List[Tuple[str, str]]


def clamp_limit(limit: Any, limits: Limits) -> int:
    return clamp(int(limit), 1, limits.max_limit)


def clamp_offset(offset: Any, limits: Limits) -> int:
    return clamp(int(offset), 0, limits.max_offset)


def _format_radius(radius: float) -> str:
    return str(int(radius)) if float(radius).is_integer() else str(radius)


def _append_text(params: Params, name: str, value: str) -> None:
    v = safe_str(value)
    if v:
        params.append((name, v))


def build_search_params(
    filt: SearchFilter,
    limits: Optional[Limits] = None,
    include_geo: bool = True,
) -> Params:
    """
    Translate a SearchFilter into ordered (name, value) query parameters.

    Empty strings are dropped, booleans are only sent when true, limit/offset
    are clamped and sort is only forwarded when recognized. Sources that do not
    accept location filters are built with include_geo=False.
    """
    limits = limits or Limits()
    params: Params = []

    _append_text(params, "q", filt.q)

    if include_geo:
        _append_text(params, "municipality", filt.municipality)
        _append_text(params, "region", filt.region)
        _append_text(params, "country", filt.country)

        if filt.position:
            params.append(("position", filt.position))
            if filt.has_radius():
                params.append(("position.radius", _format_radius(filt.position_radius)))

    _append_text(params, "occupation-field", filt.occupation_field)
    _append_text(params, "occupation-group", filt.occupation_group)
    _append_text(params, "employer", filt.employer)
    _append_text(params, "language", filt.language)

    if filt.remote:
        params.append(("remote", "true"))
    if filt.abroad:
        params.append(("abroad", "true"))

    _append_text(params, "exclude_source", filt.exclude_source)

    if filt.published_after is not None:
        params.append(("published-after", format_published_after(filt.published_after)))

    params.append(("limit", str(clamp_limit(filt.limit, limits))))
    params.append(("offset", str(clamp_offset(filt.offset, limits))))

    sort = SortOrder.recognized(filt.sort)
    if sort is not None:
        params.append(("sort", sort.value))

    return params


def build_query_string(
    filt: SearchFilter,
    limits: Optional[Limits] = None,
    include_geo: bool = True,
) -> str:
    return urlencode(build_search_params(filt, limits, include_geo))


def build_url(base_url: str, path: str, params: Optional[Params] = None) -> str:
    """Full request URL, encoded exactly the way requests will send it."""
    url = base_url.rstrip("/") + "/" + path.lstrip("/")
    return requests.Request("GET", url, params=params or []).prepare().url


def parse_search_query(query: str) -> Dict[str, Any]:
    """
    Read back the pagination/sort part of a built query string.
    Missing limit/offset come back as None; sort is None when it was omitted.
    """
    if "?" in query:
        query = query.split("?", 1)[1]
    pairs = dict(parse_qsl(query, keep_blank_values=True))

    limit = pairs.get("limit")
    offset = pairs.get("offset")
    return {
        "limit": int(limit) if limit is not None else None,
        "offset": int(offset) if offset is not None else None,
        "sort": pairs.get("sort"),
    }
