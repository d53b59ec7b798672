# jobtech_search/sources/jobad.py
from __future__ import annotations

from jobtech_search.sources.base import JobSource


class JobAdSource(JobSource):
    """
    JobAd links API:
      https://links.api.jobtechdev.se/joblinks
    Accepts the location filters (municipality/region/country/position).
    """

    tag = "jobad"
    label = "JobAd API"
    include_geo = True
