# jobtech_search/main.py
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from jobtech_search.catalog import CATALOGS, catalog_payload
from jobtech_search.config import Config, load_config
from jobtech_search.engine import JobSearchClient
from jobtech_search.models import SearchFilter, SortOrder, SourceSelector

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = "config/config.yaml"

logger = logging.getLogger(__name__)


def atomic_write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)


def resolve_config(config_path: str) -> Config:
    """The default config file is optional; an explicitly passed one is not."""
    path = Path(config_path).expanduser()
    if not path.is_absolute():
        path = (REPO_ROOT / path).resolve()

    if config_path == DEFAULT_CONFIG and not path.exists():
        logger.info("No config at %s, using built-in defaults", path)
        return Config()
    return load_config(str(path))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search JobTech job ads across the JobAd and JobSearch APIs."
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG)
    parser.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Combined job search")
    search.add_argument("q", nargs="?", default="")
    search.add_argument("--occupation-field", default="")
    search.add_argument("--occupation-group", default="")
    search.add_argument("--municipality", default="")
    search.add_argument("--region", default="")
    search.add_argument("--country", default="")
    search.add_argument("--employer", default="")
    search.add_argument("--language", default="")
    search.add_argument("--exclude-source", default="")
    search.add_argument("--published-after", default=None)
    search.add_argument("--remote", action="store_true")
    search.add_argument("--abroad", action="store_true")
    search.add_argument("--position", default=None, help="latitude,longitude")
    search.add_argument("--radius", type=float, default=None, help="km around --position")
    search.add_argument("--sort", default=SortOrder.PUBDATE_DESC.value,
                        choices=[s.value for s in SortOrder])
    search.add_argument("--limit", type=int, default=None)
    search.add_argument("--offset", type=int, default=0)
    search.add_argument("--sources", default=SourceSelector.BOTH.value,
                        choices=[s.value for s in SourceSelector])

    suggest = sub.add_parser("suggest", help="Typeahead suggestions")
    suggest.add_argument("q")
    suggest.add_argument("--sources", default=SourceSelector.BOTH.value,
                         choices=[s.value for s in SourceSelector])

    job = sub.add_parser("job", help="Fetch one job ad by id")
    job.add_argument("id")

    logo = sub.add_parser("logo", help="Logo URL for a job ad")
    logo.add_argument("id")
    logo.add_argument("--source", default=None, choices=["jobad", "jobsearch"])
    logo.add_argument("--check", action="store_true", help="Verify the URL serves a real logo")

    catalog = sub.add_parser("catalog", help="List the built-in catalogs")
    catalog.add_argument("kind", nargs="?", default=None, choices=list(CATALOGS))

    return parser


def filter_from_args(args: argparse.Namespace, config: Config) -> SearchFilter:
    return SearchFilter(
        q=args.q,
        occupation_field=args.occupation_field,
        occupation_group=args.occupation_group,
        municipality=args.municipality,
        region=args.region,
        country=args.country,
        employer=args.employer,
        language=args.language,
        exclude_source=args.exclude_source,
        published_after=args.published_after,
        remote=args.remote,
        abroad=args.abroad,
        position=args.position,
        position_radius=args.radius,
        sort=args.sort,
        limit=args.limit if args.limit is not None else config.limits.default_limit,
        offset=args.offset,
        sources=args.sources,
    )


async def execute(args: argparse.Namespace, client: JobSearchClient) -> Any:
    if args.command == "search":
        result = await client.search_all_jobs(filter_from_args(args, client.config))
        return result.model_dump(mode="json")

    if args.command == "suggest":
        suggestions = await client.get_suggestions(args.q, args.sources)
        return [s.model_dump() for s in suggestions]

    if args.command == "job":
        found = await client.get_job_by_id(args.id)
        return found.model_dump(mode="json")

    if args.command == "catalog":
        return catalog_payload(args.kind)

    if args.command == "logo":
        url = client.get_logo_url(args.id, args.source)
        out = {"id": args.id, "url": url}
        if args.check:
            out["valid"] = await client.is_valid_logo(url)
        return out

    raise ValueError(f"Unknown command: {args.command}")


def exit_code(command: str, payload: Any) -> int:
    """1 only for a total search failure or a failed job lookup."""
    if command == "search":
        return 1 if payload.get("error") and not payload.get("sources") else 0
    if command == "job":
        return 0 if "id" in payload else 1
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = resolve_config(args.config)
    with JobSearchClient(config) as client:
        payload = asyncio.run(execute(args, client))

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        atomic_write_json(out_path, payload)
        print(f"Wrote results → {out_path}")
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    return exit_code(args.command, payload)


if __name__ == "__main__":
    raise SystemExit(run())
