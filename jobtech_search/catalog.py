# jobtech_search/catalog.py
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Location:
    name: str
    concept_id: Optional[str]
    code: str                   # municipality code, usable as the municipality filter


@dataclass(frozen=True)
class OccupationField:
    name: str
    concept_id: Optional[str]
    code: str


@dataclass(frozen=True)
class SearchStrategy:
    name: str
    url: str
    description: str


POPULAR_LOCATIONS: List[Location] = [
    Location("Stockholm", "tfRE_hXa_eq7", "0180"),
    Location("Göteborg", None, "1480"),
    Location("Malmö", None, "1280"),
    Location("Uppsala", None, "0380"),
    Location("Linköping", None, "0580"),
    Location("Örebro", None, "1880"),
    Location("Västerås", None, "1980"),
    Location("Helsingborg", None, "1283"),
]

STUDENT_OCCUPATION_FIELDS: List[OccupationField] = [
    OccupationField("Data/IT", "apaJ_2ja_LuF", "3"),
    OccupationField("Utbildning", None, "5"),
    OccupationField("Naturvetenskap/Forskning", None, "9"),
    OccupationField("Ekonomi/Administration", None, "11"),
    OccupationField("Hälso- och sjukvård", None, "12"),
    OccupationField("Teknik/Ingenjör", None, "18"),
    OccupationField("Kultur/Media/Design", None, "22"),
]

STUDENT_SEARCH_STRATEGIES: List[SearchStrategy] = [
    SearchStrategy(
        "Deltidsjobb",
        "https://links.api.jobtechdev.se/joblinks?q=deltid%20student",
        "Hitta deltidsjobb som passar studenter",
    ),
    SearchStrategy(
        "Första jobbet",
        "https://links.api.jobtechdev.se/joblinks?q=junior%20trainee%20praktik",
        "Hitta trainee- och praktikplatser för nyexaminerade",
    ),
    SearchStrategy(
        "IT & Data + Student",
        "https://links.api.jobtechdev.se/joblinks?occupation-field=apaJ_2ja_LuF&q=student",
        "Sök studentjobb inom IT/Data",
    ),
    SearchStrategy(
        "Stockholm Studentjobb",
        "https://links.api.jobtechdev.se/joblinks?municipality=0180&q=student%20deltid",
        "Sök deltidsjobb för studenter i Stockholm",
    ),
]

# Concept ids used by the preset searches
SWEDISH_LANGUAGE_ID = "zSLA_vw2_FXN"
EXCLUDE_SWEDEN_COUNTRY_ID = "-i46j_HmG_v64"  # leading minus negates the filter


def find_location(name: str) -> Optional[Location]:
    key = (name or "").strip().lower()
    for loc in POPULAR_LOCATIONS:
        if loc.name.lower() == key:
            return loc
    return None


def find_occupation_field(name: str) -> Optional[OccupationField]:
    key = (name or "").strip().lower()
    for field in STUDENT_OCCUPATION_FIELDS:
        if field.name.lower() == key:
            return field
    return None


def find_search_strategy(name: str) -> Optional[SearchStrategy]:
    key = (name or "").strip().lower()
    for strategy in STUDENT_SEARCH_STRATEGIES:
        if strategy.name.lower() == key:
            return strategy
    return None


CATALOGS = {
    "locations": POPULAR_LOCATIONS,
    "occupation-fields": STUDENT_OCCUPATION_FIELDS,
    "strategies": STUDENT_SEARCH_STRATEGIES,
}


def catalog_payload(kind: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
    """JSON-ready catalog entries, all of them or one kind."""
    kinds = [kind] if kind else list(CATALOGS)
    return {k: [asdict(entry) for entry in CATALOGS[k]] for k in kinds}
