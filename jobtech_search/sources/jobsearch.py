# jobtech_search/sources/jobsearch.py
from __future__ import annotations

from typing import Any

from jobtech_search.models import JobHit
from jobtech_search.sources.base import JobSource


class JobSearchSource(JobSource):
    """
    JobSearch API:
      https://jobsearch.api.jobtechdev.se/search
    Location filters are not forwarded to this endpoint. It does not send
    logos either, so every hit gets the logo endpoint URL attached here.
    """

    tag = "jobsearch"
    label = "JobSearch API"
    include_geo = False

    def normalize_hit(self, raw: Any) -> JobHit:
        hit = super().normalize_hit(raw)
        hit.logotype_url = self.logo_url(hit.id)
        return hit
