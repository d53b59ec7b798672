import json
from dataclasses import dataclass
from typing import Any, List, Optional

import pytest
import requests

from jobtech_search.config import Config
from jobtech_search.engine import JobSearchClient

JOBAD_SEARCH = "links.api.jobtechdev.se/joblinks"
JOBSEARCH_SEARCH = "jobsearch.api.jobtechdev.se/search"
JOBAD_BASE = "https://links.api.jobtechdev.se"
JOBSEARCH_BASE = "https://jobsearch.api.jobtechdev.se"


def make_response(status: int = 200, body: Any = None, raw: Optional[bytes] = None, headers=None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    if raw is not None:
        r._content = raw
    elif body is not None:
        r._content = json.dumps(body).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = b""
    r.headers.update(headers or {})
    r.encoding = "utf-8"
    return r


@dataclass
class Route:
    method: str
    match: str
    response: Optional[requests.Response] = None
    exc: Optional[Exception] = None
    barrier: Any = None


class FakeSession:
    """Stands in for requests.Session; routes by substring of the URL."""

    def __init__(self):
        self.routes: List[Route] = []
        self.calls: List[tuple] = []
        self.closed = False

    def add(self, method: str, match: str, response=None, exc=None, barrier=None) -> None:
        self.routes.append(Route(method, match, response, exc, barrier))

    def _dispatch(self, method: str, url: str, **kwargs):
        self.calls.append((method, url, kwargs))
        for route in self.routes:
            if route.method == method and route.match in url:
                if route.barrier is not None:
                    route.barrier.wait()
                if route.exc is not None:
                    raise route.exc
                route.response.url = url
                return route.response
        raise AssertionError(f"unexpected request: {method} {url}")

    def get(self, url, **kwargs):
        return self._dispatch("GET", url, **kwargs)

    def head(self, url, **kwargs):
        return self._dispatch("HEAD", url, **kwargs)

    def urls(self, method: str = "GET") -> List[str]:
        return [u for m, u, _ in self.calls if m == method]

    def close(self):
        self.closed = True


def hit(job_id, headline="Job", published=None, **extra):
    out = {"id": job_id, "headline": headline, "employer": {"name": "Acme"}}
    if published:
        out["publication_date"] = published
    out.update(extra)
    return out


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return JobSearchClient(Config(), session=session)
