# jobtech_search/config.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    enabled: bool = True
    base_url: str
    search_path: str
    detail_path: str = "/ad/{id}"
    logo_path: str = "/ad/{id}/logo"
    typeahead_path: str = "/complete"


def _jobad_defaults() -> SourceConfig:
    return SourceConfig(base_url="https://links.api.jobtechdev.se", search_path="/joblinks")


def _jobsearch_defaults() -> SourceConfig:
    return SourceConfig(base_url="https://jobsearch.api.jobtechdev.se", search_path="/search")


class SourcesConfig(BaseModel):
    jobad: SourceConfig = Field(default_factory=_jobad_defaults)
    jobsearch: SourceConfig = Field(default_factory=_jobsearch_defaults)


class Limits(BaseModel):
    default_limit: int = 20
    max_limit: int = 100
    max_offset: int = 2000
    typeahead_size: int = 10


class HttpConfig(BaseModel):
    # None keeps the transport default (no deadline)
    timeout_seconds: Optional[float] = None
    user_agent: str = "jobtech-search/0.1"


class Config(BaseModel):
    version: int = 1
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    limits: Limits = Field(default_factory=Limits)
    http: HttpConfig = Field(default_factory=HttpConfig)


def load_config(path: str) -> Config:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config must be a YAML mapping (dict). Got: {type(raw)}")

    cfg = Config(**raw)

    limits = cfg.limits
    if limits.max_limit < 1 or limits.max_offset < 0:
        raise ValueError("limits.max_limit must be >= 1 and limits.max_offset >= 0")
    if not 1 <= limits.default_limit <= limits.max_limit:
        raise ValueError(
            f"limits.default_limit must be within [1, {limits.max_limit}] (got {limits.default_limit})"
        )

    return cfg
