from jobtech_search.config import Config, load_config
from jobtech_search.engine import JobSearchClient
from jobtech_search.models import (
    JobHit,
    LookupFailure,
    SearchFilter,
    SearchResult,
    SortOrder,
    SourceResult,
    SourceSelector,
    TypeaheadSuggestion,
)

__all__ = [
    "Config",
    "load_config",
    "JobSearchClient",
    "JobHit",
    "LookupFailure",
    "SearchFilter",
    "SearchResult",
    "SortOrder",
    "SourceResult",
    "SourceSelector",
    "TypeaheadSuggestion",
]
