from jobtech_search.sources.base import JobSource
from jobtech_search.sources.jobad import JobAdSource
from jobtech_search.sources.jobsearch import JobSearchSource

__all__ = [
    "JobSource",
    "JobAdSource",
    "JobSearchSource",
]
